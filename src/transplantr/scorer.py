"""
Score whole tables: map DataFrame columns onto score function parameters and
append one column per score.

Issues are collected in a `stairval` notepad instead of being raised, so
that one bad table does not stop the others from being scored.
"""

import inspect
import logging
import typing

from dataclasses import dataclass, field
from enum import Enum

import pandas as pd
from stairval.notepad import Notepad

from . import chi, egfr, epts, hla, kidney, liver, liver_scores, pancreas
from .categories import CauseOfDeath, Ethnicity, PancreasIntent, Sex, ShareType, unrecognised

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class ScoreSpec:
    """
    A score function and the table columns it reads.

    `columns` maps each function parameter to its default column name;
    `categorical` names the parameters holding labels from a vocabulary.
    """
    name: str
    func: typing.Callable
    columns: typing.Mapping[str, str]
    categorical: typing.Mapping[str, typing.Type[Enum]] = field(default_factory=dict)
    description: str = ""

    @property
    def optional(self) -> set[str]:
        """Parameters with a default value; their columns may be absent."""
        signature = inspect.signature(self.func)
        return {
            name for name in self.columns
            if signature.parameters[name].default is not inspect.Parameter.empty
        }

    @property
    def required(self) -> list[str]:
        return [param for param in self.columns if param not in self.optional]

    def accepts(self, option: str) -> bool:
        return option in inspect.signature(self.func).parameters and option not in self.columns


def _spec(name, func, params, description, categorical=None, **renamed) -> ScoreSpec:
    # default column name is the lower-cased parameter name
    columns = {param: renamed.get(param, param.lower()) for param in params}
    return ScoreSpec(name, func, columns, categorical or {}, description)


_KDRI_PARAMS = ("age", "height", "weight", "eth", "htn", "dm", "cva", "creat", "hcv", "dcd")
_P_SOFT_PARAMS = (
    "Age", "BMI", "PrevTx", "AbdoSurg", "Albumin", "Dx", "ICU", "Admitted", "MELD",
    "LifeSupport", "Encephalopathy", "PVThrombosis", "Ascites",
)
_SOFT2_PARAMS = ("PortalBleed", "DonorAge", "DonorCVA", "DonorSCr", "National", "CIT")
_SOFT_COLUMNS = dict(
    PrevTx="prev_tx", AbdoSurg="abdo_surg", LifeSupport="life_support",
    PVThrombosis="pv_thrombosis", PortalBleed="portal_bleed", DonorAge="donor_age",
    DonorCVA="donor_cva", DonorSCr="donor_scr", PSoft="p_soft",
)

SCORES: dict[str, ScoreSpec] = {
    spec.name: spec
    for spec in (
        # kidney
        _spec("uskdri", kidney.uskdri, _KDRI_PARAMS, "US Kidney Donor Risk Index",
              categorical={"eth": Ethnicity}),
        _spec("kdpi", kidney.kdpi, _KDRI_PARAMS, "Kidney Donor Profile Index (2018 mapping)",
              categorical={"eth": Ethnicity}),
        _spec("ukkdri", kidney.ukkdri, ("age", "height", "htn", "sex", "cmv", "gfr", "hdays"),
              "UK Kidney Donor Risk Index (2019)", categorical={"sex": Sex}),
        _spec("ukkrri", kidney.ukkrri, ("age", "dx", "wait", "dm"), "UK Kidney Recipient Risk Index (2019)"),
        _spec("ukkdri_q", kidney.ukkdri_q, ("ukkdri",), "UK donor risk quartile (D1-D4)"),
        _spec("ukkrri_q", kidney.ukkrri_q, ("ukkrri",), "UK recipient risk quartile (R1-R4)"),
        _spec("watson_ukkdri", kidney.watson_ukkdri, ("age", "htn", "weight", "hdays", "adrenaline"),
              "UK Kidney Donor Risk Index (Watson 2012)"),
        _spec("raw_epts", epts.raw_epts, ("age", "dm", "prev_tx", "dx"), "Raw EPTS score"),
        _spec("epts", epts.epts, ("age", "dm", "prev_tx", "dx"), "EPTS percentile"),
        # eGFR
        _spec("ckd_epi", egfr.ckd_epi, ("creat", "age", "sex", "ethnicity"), "CKD-EPI eGFR",
              categorical={"sex": Sex, "ethnicity": Ethnicity}, ethnicity="eth"),
        _spec("mdrd", egfr.mdrd, ("creat", "age", "sex", "ethnicity"), "MDRD eGFR",
              categorical={"sex": Sex, "ethnicity": Ethnicity}, ethnicity="eth"),
        _spec("schwartz", egfr.schwartz, ("creat", "height"), "Bedside Schwartz eGFR (children)"),
        _spec("cockcroft", egfr.cockcroft, ("creat", "age", "sex", "weight"),
              "Cockcroft-Gault creatinine clearance", categorical={"sex": Sex}),
        _spec("nankivell", egfr.nankivell, ("creat", "urea", "weight", "height", "sex"),
              "Nankivell eGFR (kidney transplant)", categorical={"sex": Sex}),
        _spec("nankivell_spk", egfr.nankivell_spk, ("creat", "age", "sex", "weight", "height"),
              "Nankivell eGFR (SPK transplant)", categorical={"sex": Sex}),
        _spec("walser", egfr.walser, ("creat", "age", "weight", "sex"), "Walser eGFR",
              categorical={"sex": Sex}),
        # liver
        _spec("meld", liver.meld, ("INR", "bili", "creat", "dialysis"), "MELD score"),
        _spec("meld_na", liver.meld_na, ("INR", "bili", "creat", "Na", "dialysis"), "MELD-Na score"),
        _spec("ukeld", liver.ukeld, ("INR", "bili", "creat", "Na"), "UKELD score"),
        _spec("peld", liver.peld, ("INR", "bili", "albumin", "listing_age", "growth_failure"), "PELD score"),
        _spec("apri", liver.apri, ("ast", "plt", "ast_uln"), "AST to platelet ratio index"),
        _spec("et_dri", liver_scores.et_dri, ("age", "cod", "dcd", "split", "share", "cit", "ggt", "rescue"),
              "Eurotransplant liver Donor Risk Index",
              categorical={"cod": CauseOfDeath, "share": ShareType}),
        _spec("liver_dri", liver_scores.liver_dri,
              ("age", "cod", "eth", "dcd", "split", "share", "cit", "height"), "US liver Donor Risk Index",
              categorical={"cod": CauseOfDeath, "eth": Ethnicity, "share": ShareType}),
        _spec("p_soft", liver_scores.p_soft, _P_SOFT_PARAMS, "P-SOFT score", **_SOFT_COLUMNS),
        _spec("soft2", liver_scores.soft2, ("PSoft",) + _SOFT2_PARAMS, "SOFT score from P-SOFT",
              **_SOFT_COLUMNS),
        _spec("soft", liver_scores.soft, _P_SOFT_PARAMS + _SOFT2_PARAMS, "SOFT score", **_SOFT_COLUMNS),
        _spec("pedi_soft", liver_scores.pedi_soft, ("CTVG", "Weight", "Dx", "LifeSupport", "PrevTx"),
              "Pedi-SOFT score", **_SOFT_COLUMNS),
        _spec("bar_score", liver_scores.bar_score, ("Age", "MELD", "ReTx", "LifeSupport", "CIT", "DonorAge"),
              "Balance of Risk score", ReTx="re_tx", **_SOFT_COLUMNS),
        # pancreas
        _spec("pdri", pancreas.pdri,
              ("age", "sex", "creat", "eth", "bmi", "height", "cva", "cit", "dcd", "intent"),
              "Pancreas Donor Risk Index",
              categorical={"sex": Sex, "eth": Ethnicity, "intent": PancreasIntent}),
        _spec("p_pass", pancreas.p_pass,
              ("age", "bmi", "icu", "c_arr", "na", "amylase", "lipase", "norad", "dopam"),
              "P-PASS pancreas suitability score"),
        # HLA and identifiers
        _spec("hla_mm_level", hla.hla_mm_level, ("a", "b", "dr"), "HLA mismatch level (1-4)",
              a="hla_a_mm", b="hla_b_mm", dr="hla_dr_mm"),
        _spec("hla_mm_level_str", hla.hla_mm_level_str, ("mm",), "HLA mismatch level from a mismatch string",
              mm="hla_mm"),
        _spec("chi2dob", chi.chi2dob, ("chi",), "Date of birth from a CHI number"),
    )
}


class TableScorer:
    """
    Append score columns to DataFrames using the `SCORES` registry (or a
    custom one).
    """

    def __init__(self, scores: typing.Optional[typing.Mapping[str, ScoreSpec]] = None):
        self._scores = dict(SCORES if scores is None else scores)

    @property
    def scores(self) -> typing.Mapping[str, ScoreSpec]:
        return self._scores

    def get(self, score: str) -> ScoreSpec:
        try:
            return self._scores[score]
        except KeyError:
            raise ValueError(f"Unknown score {score!r}; choose from {sorted(self._scores)}")

    def score_table(
            self,
            df: pd.DataFrame,
            score: str,
            notepad: Notepad,
            columns: typing.Optional[typing.Mapping[str, str]] = None,
            table_name: str = "table",
            **options,
    ) -> pd.DataFrame:
        """
        Return a copy of `df` with a new column named after `score`.

        `columns` overrides the default column name per parameter. Missing
        required columns are notepad errors and `df` is returned unchanged;
        unrecognised categorical labels are notepad warnings. Options such as
        `units`, `scaling`, `offset` or `prefix` are passed on where the
        score function takes them.
        """
        spec = self.get(score)
        mapping = {param: (columns or {}).get(param, column) for param, column in spec.columns.items()}

        missing = sorted(mapping[param] for param in spec.required if mapping[param] not in df.columns)
        if missing:
            notepad.add_error(f"Table {table_name!r}: {score} needs missing columns: {missing}")
            return df

        kwargs = {param: df[column] for param, column in mapping.items() if column in df.columns}
        for param, vocabulary in spec.categorical.items():
            if param not in kwargs:
                continue
            bad = unrecognised(kwargs[param].dropna(), vocabulary)
            if bad:
                notepad.add_warning(
                    f"Table {table_name!r}: column {mapping[param]!r} has unrecognised "
                    f"{vocabulary.__name__} values {bad}; {score} used the default category"
                )

        for option, value in options.items():
            if value is None:
                continue
            if spec.accepts(option):
                kwargs[option] = value
            else:
                logger.debug("%s does not take option %r; ignored", score, option)

        logger.info("Scoring %r with %s over %d rows", table_name, score, len(df))
        scored = df.copy()
        try:
            scored[score] = spec.func(**kwargs)
        except ValueError as e:
            notepad.add_error(f"Table {table_name!r}: {score}: {e}")
            return df
        return scored

    def score_tables(
            self,
            tables: typing.Mapping[str, pd.DataFrame],
            scores: typing.Sequence[str],
            notepad: Notepad,
            columns: typing.Optional[typing.Mapping[str, str]] = None,
            **options,
    ) -> dict[str, pd.DataFrame]:
        """Apply each score in turn to every table, so later scores may read earlier ones."""
        scored = {}
        for name, df in tables.items():
            for score in scores:
                df = self.score_table(df, score, notepad, columns=columns, table_name=name, **options)
            scored[name] = df
        return scored


def score_table(df, score, notepad, columns=None, **options):
    """Score one table with the default registry. See `TableScorer.score_table`."""
    return TableScorer().score_table(df, score, notepad, columns=columns, **options)
