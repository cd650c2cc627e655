"""
Liver disease severity scores: MELD, MELD-Na, UKELD, PELD and APRI.

MELD, MELD-Na and PELD are defined in US units (mg/dl); by default the
functions accept SI values and convert them. UKELD is defined in SI units.
"""

import numpy as np

from .formula import clamp, elementwise, indicator, log_term, override, total, values
from .units import ALBUMIN_FACTOR, BILIRUBIN_FACTOR, CREATININE_FACTOR, to_SI, to_US


def _meld_points(INR, bili, creat, dialysis, units):
    bili = clamp(to_US(bili, BILIRUBIN_FACTOR, units), lower=1)
    creat = clamp(to_US(creat, CREATININE_FACTOR, units), lower=1, upper=4)
    # dialysis (or CVVH) twice in the last week counts as creatinine 4.0
    creat = override(creat, dialysis, 4.0)
    INR = clamp(INR, lower=1)

    meldi = total(
        log_term(creat, 0.957),
        log_term(bili, 0.378),
        log_term(INR, 1.12),
        0.643,
    )
    return 10 * np.round(meldi, 10)


@elementwise
def meld(INR, bili, creat, dialysis, units="SI"):
    """
    Model for End-stage Liver Disease (UNOS).

    Bilirubin, creatinine and INR below 1.0 are set to 1.0, creatinine above
    4.0 mg/dl is set to 4.0 and dialysis sets creatinine to 4.0.

    Args:
        INR: international normalised ratio
        bili: serum bilirubin (µmol/l, or mg/dl with units="US")
        creat: serum creatinine (µmol/l, or mg/dl with units="US")
        dialysis: dialysed twice or CVVH within the past week (1 = yes, 0 = no)

    Example:
        meld(INR=2.0, bili=54, creat=170, dialysis=0)  # 24.798
    """
    return _meld_points(INR, bili, creat, dialysis, units)


def meld_US(INR, bili, creat, dialysis):
    """meld() with bilirubin and creatinine in mg/dl."""
    return meld(INR, bili, creat, dialysis, units="US")


@elementwise
def meld_na(INR, bili, creat, Na, dialysis, units="SI"):
    """
    MELD-Na (UNOS). The sodium correction applies when MELD is above 11;
    sodium is bounded to 125-137 mmol/l.

    Example:
        meld_na(INR=1.8, bili=2, creat=2, Na=131, dialysis=0, units="US")  # 26.257
    """
    meldscore = _meld_points(INR, bili, creat, dialysis, units)
    Na = clamp(Na, lower=125, upper=137)
    corrected = meldscore - Na - 0.025 * meldscore * (140 - Na) + 140
    return np.where(meldscore > 11, corrected, meldscore)


def meld_na_US(INR, bili, creat, Na, dialysis):
    """meld_na() with bilirubin and creatinine in mg/dl."""
    return meld_na(INR, bili, creat, Na, dialysis, units="US")


@elementwise
def ukeld(INR, bili, creat, Na, units="SI"):
    """
    United Kingdom model for End-stage Liver Disease.

    Args:
        INR: international normalised ratio
        bili: serum bilirubin (µmol/l, or mg/dl with units="US")
        creat: serum creatinine (µmol/l, or mg/dl with units="US")
        Na: serum sodium in mmol/l

    Example:
        ukeld(INR=1.0, bili=212, creat=54, Na=126)  # 63.22
    """
    return total(
        log_term(INR, 5.395),
        log_term(to_SI(creat, CREATININE_FACTOR, units), 1.485),
        log_term(to_SI(bili, BILIRUBIN_FACTOR, units), 3.13),
        log_term(Na, -81.565),
        435,
    )


def ukeld_US(INR, bili, creat, Na):
    """ukeld() with bilirubin and creatinine in mg/dl."""
    return ukeld(INR, bili, creat, Na, units="US")


@elementwise
def peld(INR, bili, albumin, listing_age, growth_failure, units="SI"):
    """
    Paediatric End-stage Liver Disease score.

    Args:
        INR: international normalised ratio
        bili: serum bilirubin (µmol/l, or mg/dl with units="US")
        albumin: serum albumin (g/l, or g/dl with units="US")
        listing_age: age at listing in years
        growth_failure: growth failure (1 = yes, 0 = no)
    """
    return total(
        log_term(to_US(bili, BILIRUBIN_FACTOR, units), 4.80),
        log_term(INR, 18.57),
        log_term(to_US(albumin, ALBUMIN_FACTOR, units), -6.87),
        np.where(values(listing_age) < 1, 4.36, 0.0),
        indicator(growth_failure, 6.67),
    )


def peld_US(INR, bili, albumin, listing_age, growth_failure):
    """peld() with bilirubin in mg/dl and albumin in g/dl."""
    return peld(INR, bili, albumin, listing_age, growth_failure, units="US")


@elementwise
def apri(ast, plt, ast_uln=40):
    """
    AST to platelet ratio index.

    Args:
        ast: aspartate aminotransferase in IU/l
        plt: platelet count (10^9/l)
        ast_uln: upper limit of normal for AST (default 40 IU/l)

    Example:
        apri(ast=160, plt=75)  # 5.33
    """
    return values(ast) / values(ast_uln) / values(plt) * 100
