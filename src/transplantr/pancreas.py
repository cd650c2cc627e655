"""
Pancreas donor scores: the US Pancreas Donor Risk Index (Axelrod et al.)
and the Eurotransplant P-PASS pre-procurement suitability score.
"""

import numpy as np

from .categories import Ethnicity, PancreasIntent, Sex, is_member, parse_labels
from .formula import banded, elementwise, hazard, indicator, linear, total, values
from .units import CREATININE_FACTOR, to_US


@elementwise
def pdri(age, sex, creat, eth, bmi, height, cva, cit, dcd, intent="SPK", units="SI"):
    """
    Pancreas Donor Risk Index.

    Args:
        age: donor age in years
        sex: donor sex, "F" or "M"
        creat: donor serum creatinine (µmol/l, or mg/dl with units="US")
        eth: donor ethnicity, "black", "asian" or any other group
        bmi: donor BMI in kg/m2
        height: donor height in cm
        cva: death due to cerebrovascular accident (1 = yes, 0 = no)
        cit: cold ischaemic time in hours
        dcd: donation after circulatory death (1 = yes, 0 = no)
        intent: implant intent, "SPK", "PAK" or "other"

    Example:
        pdri(age=28, sex="M", creat=1.0, eth="other", bmi=24, height=173,
             cva=0, cit=12, dcd=0, units="US")  # 1.00
    """
    age = values(age)
    bmi = values(bmi)
    female = is_member(parse_labels(sex, Sex), Sex.FEMALE)
    eth = parse_labels(eth, Ethnicity)
    pak = is_member(parse_labels(intent, PancreasIntent), PancreasIntent.PAK)
    creat = to_US(creat, CREATININE_FACTOR, units)

    agevar = np.where(age < 20, linear(age, 0.034455, 20), linear(age, 0.026149, 28))
    ethvar = np.select(
        [is_member(eth, Ethnicity.BLACK), is_member(eth, Ethnicity.ASIAN)],
        [0.23951, 0.15711],
        default=0.0,
    )
    bmivar = linear(bmi, -0.000986347, 24) + np.where(bmi > 25, linear(bmi, 0.033274, 25), 0.0)
    cva_pak = (values(cva) == 1) & pak

    return hazard(
        indicator(female, -0.13792),
        agevar,
        np.where(creat > 2.5, 0.19490, 0.0),
        ethvar,
        bmivar,
        linear(height, -0.006073879, 173),
        indicator(cva, 0.21018),
        indicator(cva_pak, -0.28137),
        linear(cit, 0.014678, 12),
        indicator(dcd, 0.33172),
    )


def pdri_US(age, sex, creat, eth, bmi, height, cva, cit, dcd, intent="SPK"):
    """pdri() with creatinine in mg/dl."""
    return pdri(age, sex, creat, eth, bmi, height, cva, cit, dcd, intent=intent, units="US")


def _enzyme_points(level, bands):
    # a missing enzyme level scores the minimum
    level = values(level)
    return np.where(np.isnan(level), 1.0, banded(level, bands, default=3.0))


def _zero_banded_points(value, limit):
    # 0 scores 1, below limit 2, otherwise 3; missing stays missing
    value = values(value)
    points = np.select([value == 0, value < limit], [1.0, 2.0], default=3.0)
    return np.where(np.isnan(value), np.nan, points)


@elementwise
def p_pass(age, bmi, icu, c_arr, na, amylase=None, lipase=None, norad=0, dopam=0):
    """
    P-PASS pre-procurement pancreas suitability score (Eurotransplant).

    Scores range 9-27; pancreata scoring under 17 were three times more
    likely to be transplanted (Vinkers et al., 2008). At least one of
    amylase or lipase should be given; where both are, the higher
    points count. The same applies to noradrenaline and dopamine/dobutamine.
    A missing enzyme level scores the minimum, but a missing cardiac
    arrest duration or vasopressor dose gives NaN: record 0 when none
    was given.

    Args:
        age: donor age in years
        bmi: donor BMI in kg/m2
        icu: length of ICU stay in days
        c_arr: duration of cardiac arrest in minutes (0 if none)
        na: serum sodium in mmol/l
        amylase: serum amylase in IU/l (None/NaN if not available)
        lipase: serum lipase in IU/l (None/NaN if not available)
        norad: noradrenaline in µg/kg/min (0 if not used)
        dopam: dopamine or dobutamine in µg/kg/min (0 if not used)

    Example:
        p_pass(age=25, bmi=19, icu=0, c_arr=0, na=135, amylase=101, lipase=120)  # 9
    """
    enzymes = np.maximum(
        _enzyme_points(amylase, ((130, 1.0), (390, 2.0))),
        _enzyme_points(lipase, ((160, 1.0), (480, 2.0))),
    )
    pressors = np.maximum(_zero_banded_points(norad, 0.05), _zero_banded_points(dopam, 10))
    return total(
        banded(age, ((30, 2.0), (40, 4.0)), default=6.0),
        banded(bmi, ((20, 2.0), (25, 4.0)), default=6.0),
        banded(icu, ((3, 1.0), (7, 2.0)), default=3.0),
        _zero_banded_points(c_arr, 5),
        banded(na, ((155, 1.0), (160, 2.0)), default=3.0),
        enzymes,
        pressors,
    )
