"""
Estimated glomerular filtration rate (eGFR) formulae.

Creatinine is taken in µmol/l by default; every function has a `_US`
counterpart (or a `units="US"` argument) for mg/dl. Functions that take age
also accept `offset`, a number of years added to age so that serial results
can be computed from the age at baseline. A negative offset moves the age
back in time.
"""

import numpy as np

from .categories import Ethnicity, Sex, is_member, parse_labels
from .formula import elementwise, values
from .units import CREATININE_FACTOR, Units, bun_to_urea, to_SI, to_US

# CKD-EPI and MDRD were published against a creatinine factor of 88.42
EGFR_CREATININE_FACTOR = 88.42


def _aged(age, offset):
    return values(age) + values(offset)


@elementwise
def ckd_epi(creat, age, sex, ethnicity=None, units="SI", offset=0):
    """
    eGFR by the CKD-EPI (2009) equation.

    Args:
        creat: serum creatinine (µmol/l, or mg/dl with units="US")
        age: age in years
        sex: "F" or "M"
        ethnicity: "black" or "non-black"
        units: "SI" or "US"
        offset: years added to age

    Example:
        ckd_epi(creat=120, age=45.2, sex="M", ethnicity="non-black")  # 62.5
    """
    creat = to_US(creat, EGFR_CREATININE_FACTOR, units)
    male = is_member(parse_labels(sex, Sex), Sex.MALE)
    black = False if ethnicity is None else is_member(parse_labels(ethnicity, Ethnicity), Ethnicity.BLACK)
    age = _aged(age, offset)

    sexvar = np.where(male, 1.0, 1.018)
    alpha = np.where(male, -0.411, -0.329)
    kappa = np.where(male, 0.9, 0.7)
    ratio = creat / kappa

    gfr = (
        141
        * np.minimum(ratio, 1) ** alpha
        * np.maximum(ratio, 1) ** -1.209
        * 0.993 ** age
        * sexvar
    )
    return np.where(black, gfr * 1.159, gfr)


def ckd_epi_US(creat, age, sex, ethnicity=None, offset=0):
    """ckd_epi() with creatinine in mg/dl."""
    return ckd_epi(creat, age, sex, ethnicity, units="US", offset=offset)


@elementwise
def mdrd(creat, age, sex, ethnicity, units="SI", offset=0):
    """
    eGFR by the 4-variable MDRD equation (186 coefficient).

    Example:
        mdrd(creat=120, age=45.2, sex="M", ethnicity="non-black")  # 60.3
    """
    creat = to_US(creat, EGFR_CREATININE_FACTOR, units)
    male = is_member(parse_labels(sex, Sex), Sex.MALE)
    black = is_member(parse_labels(ethnicity, Ethnicity), Ethnicity.BLACK)
    age = _aged(age, offset)

    gfr = 186 * creat ** -1.154 * age ** -0.203 * np.where(male, 1.0, 0.742)
    return np.where(black, gfr * 1.21, gfr)


def mdrd_US(creat, age, sex, ethnicity, offset=0):
    """mdrd() with creatinine in mg/dl."""
    return mdrd(creat, age, sex, ethnicity, units="US", offset=offset)


@elementwise
def schwartz(creat, height, units="SI"):
    """
    Paediatric eGFR by the bedside Schwartz equation.

    Example:
        schwartz(creat=64, height=101)
    """
    if Units.parse(units) is Units.SI:
        return 36.5 * values(height) / values(creat)
    return 0.413 * values(height) / values(creat)


def schwartz_US(creat, height):
    """schwartz() with creatinine in mg/dl."""
    return schwartz(creat, height, units="US")


@elementwise
def cockcroft(creat, age, sex, weight, units="SI"):
    """
    Creatinine clearance by the Cockcroft-Gault equation.

    Example:
        cockcroft(creat=88.4, age=25, sex="F", weight=60)  # 81.46
    """
    creat = to_US(creat, CREATININE_FACTOR, units)
    male = is_member(parse_labels(sex, Sex), Sex.MALE)
    sexvar = np.where(male, 1.0, 0.85)
    return sexvar * (140 - values(age)) * values(weight) / creat / 72


def cockcroft_US(creat, age, sex, weight):
    """cockcroft() with creatinine in mg/dl."""
    return cockcroft(creat, age, sex, weight, units="US")


@elementwise
def nankivell(creat, urea, weight, height, sex, units="SI"):
    """
    eGFR after kidney transplantation by the Nankivell formula.

    Nankivell BJ et al. Transplantation 1995; 59:1683-89.

    Args:
        creat: serum creatinine (µmol/l, or mg/dl with units="US")
        urea: serum urea in mmol/l (or BUN in mg/dl with units="US")
        weight: weight in kg
        height: height in cm
        sex: "F" or "M"
    """
    creat_mmol = to_SI(creat, CREATININE_FACTOR, units) / 1000
    if Units.parse(units) is Units.US:
        urea = bun_to_urea(urea)
    metres = values(height) / 100
    male = is_member(parse_labels(sex, Sex), Sex.MALE)
    corr = np.where(male, 35.0, 25.0)
    return 6.7 / creat_mmol + 0.25 * values(weight) - 0.5 * values(urea) - 100 / metres ** 2 + corr


def nankivell_US(creat, urea, weight, height, sex):
    """nankivell() with creatinine and BUN in mg/dl."""
    return nankivell(creat, urea, weight, height, sex, units="US")


@elementwise
def nankivell_spk(creat, age, sex, weight, height, units="SI", offset=0):
    """
    eGFR after simultaneous pancreas-kidney transplantation.

    Nankivell BJ et al. Clin Transplant 1995; 9(2): 129-134.
    """
    creat = to_SI(creat, CREATININE_FACTOR, units)
    male = is_member(parse_labels(sex, Sex), Sex.MALE)
    corr = np.where(male, 71.4, 50.4)
    age = _aged(age, offset)
    return corr + 5520 / creat + 0.27 * values(weight) - 0.50 * age - 0.29 * values(height)


def nankivell_spk_US(creat, age, sex, weight, height, offset=0):
    """nankivell_spk() with creatinine in mg/dl."""
    return nankivell_spk(creat, age, sex, weight, height, units="US", offset=offset)


@elementwise
def walser(creat, age, weight, sex, units="SI"):
    """
    eGFR by the Walser equation.

    Walser M et al. Am J Kidney Dis 1993; 21: 1009-1016.
    """
    creat = to_US(creat, CREATININE_FACTOR, units)
    male = is_member(parse_labels(sex, Sex), Sex.MALE)
    agecoef = np.where(male, -0.103, -0.08)
    numerator = np.where(male, 7.57, 6.05)
    weightcoef = np.where(male, 0.096, 0.08)
    corr = np.where(male, -6.66, -4.81)
    return numerator / (creat * 0.0884) + agecoef * values(age) + weightcoef * values(weight) + corr


def walser_US(creat, age, weight, sex):
    """walser() with creatinine in mg/dl."""
    return walser(creat, age, weight, sex, units="US")


@elementwise
def ibw(height, sex):
    """
    Ideal body weight in kg from height (cm), using a BMI of 23 for men and
    21.5 for women.
    """
    male = is_member(parse_labels(sex, Sex), Sex.MALE)
    metres = values(height) / 100
    return metres ** 2 * np.where(male, 23.0, 21.5)
