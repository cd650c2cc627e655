"""
Kidney donor and recipient risk indices.

US (OPTN):
    uskdri / uskdri_US   Kidney Donor Risk Index (KDRI_Rao, optionally scaled)
    kdpi / kdpi_US       Kidney Donor Profile Index (percentile of KDRI_RAO)
    kdpi_lookup          KDRI_RAO -> KDPI using an approximation of the 2018 mapping table

UK (NHSBT):
    ukkdri, ukkrri       2019 donor and recipient risk indices
    ukkdri_q, ukkrri_q   their quartiles (D1-D4, R1-R4)
    watson_ukkdri        2012 donor risk index (Watson et al.)
"""

import numpy as np

from .banding import UK_DONOR_2019, UK_RECIPIENT_2019, classify
from .categories import Ethnicity, Sex, is_member, parse_labels
from .formula import clamp, elementwise, hazard, indicator, linear, values
from .tables import KDPI_2018_APPROX, KDRI_SCALING_2018
from .units import CREATININE_FACTOR, to_US

# OPTN caps donor creatinine at 8.0 mg/dl before computing KDRI
KDRI_CREATININE_CAP = 8.0


@elementwise
def uskdri(age, height, weight, eth, htn, dm, cva, creat, hcv, dcd, scaling=1, units="SI"):
    """
    US Kidney Donor Risk Index as published by the OPTN.

    Args:
        age: donor age in years
        height: donor height in cm
        weight: donor weight in kg
        eth: donor ethnicity, "black" or "non-black"
        htn: donor history of hypertension (1 = yes, 0 = no)
        dm: donor history of diabetes (1 = yes, 0 = no)
        cva: death due to cerebrovascular accident (1 = yes, 0 = no)
        creat: donor serum creatinine (µmol/l, or mg/dl with units="US")
        hcv: donor hepatitis C positive (1 = yes, 0 = no)
        dcd: donation after circulatory death (1 = DCD, 0 = DBD)
        scaling: divisor applied to the index, e.g. 1.250609 for KDRI_RAO (2018)
        units: "SI" or "US" for creatinine

    Returns:
        KDRI values (1.0 for a 40 year old, 170 cm, 80 kg reference donor).
    """
    age = values(age)
    weight = values(weight)
    creat = clamp(to_US(creat, CREATININE_FACTOR, units), upper=KDRI_CREATININE_CAP)

    agevar = (
        linear(age, 0.0128, 40)
        + np.where(age < 18, linear(age, -0.0194, 18), 0.0)
        + np.where(age > 50, linear(age, 0.0107, 50), 0.0)
    )
    heightvar = linear(height, -0.0464, 170, per=10)
    weightvar = np.where(weight < 80, linear(weight, -0.0199, 80, per=5), 0.0)
    ethvar = indicator(is_member(parse_labels(eth, Ethnicity), Ethnicity.BLACK), 0.1790)
    creatvar = linear(creat, 0.2200, 1) + np.where(creat > 1.5, linear(creat, -0.2090, 1.5), 0.0)

    return hazard(
        agevar,
        heightvar,
        weightvar,
        ethvar,
        indicator(htn, 0.1260),
        indicator(dm, 0.1300),
        indicator(cva, 0.0881),
        creatvar,
        indicator(hcv, 0.2400),
        indicator(dcd, 0.1330),
        scaling=scaling,
    )


def uskdri_US(age, height, weight, eth, htn, dm, cva, creat, hcv, dcd, scaling=1):
    """uskdri() with creatinine in mg/dl."""
    return uskdri(age, height, weight, eth, htn, dm, cva, creat, hcv, dcd, scaling=scaling, units="US")


@elementwise
def kdpi_lookup(kdri):
    """
    Convert scaled KDRI values (KDRI_RAO) to KDPI percentiles (0-100)
    using an approximation of the 2018 OPTN mapping table (KDPI_2018_APPROX).

    Example:
        kdpi_lookup(1.25)  # 73
    """
    return KDPI_2018_APPROX.lookup(kdri)


@elementwise
def kdpi(age, height, weight, eth, htn, dm, cva, creat, hcv, dcd, scaling=KDRI_SCALING_2018, units="SI"):
    """
    Kidney Donor Profile Index: KDRI scaled to the 2018 reference population
    and mapped to a percentile. Arguments as for uskdri().
    """
    kdri = uskdri(age, height, weight, eth, htn, dm, cva, creat, hcv, dcd, scaling=scaling, units=units)
    return KDPI_2018_APPROX.lookup(kdri)


def kdpi_US(age, height, weight, eth, htn, dm, cva, creat, hcv, dcd, scaling=KDRI_SCALING_2018):
    """kdpi() with creatinine in mg/dl."""
    return kdpi(age, height, weight, eth, htn, dm, cva, creat, hcv, dcd, scaling=scaling, units="US")


@elementwise
def ukkrri(age, dx, wait, dm):
    """
    UK Kidney Recipient Risk Index (NHSBT, 2019 matching scheme).

    Args:
        age: recipient age in years
        dx: on dialysis at registration (1 = yes, 0 = no)
        wait: waiting time from start of dialysis in days
        dm: recipient diabetes (1 = yes, 0 = no)
    """
    age = values(age)
    agevar = np.where(age <= 25, 0.0, linear(age, 0.016, 75))
    return hazard(
        agevar,
        indicator(dx, 0.361),
        linear(wait, 0.033, 950, per=365.25),
        indicator(dm, 0.252),
    )


@elementwise
def ukkdri(age, height, htn, sex, cmv, gfr, hdays):
    """
    UK Kidney Donor Risk Index (NHSBT, 2019 matching scheme).

    Args:
        age: donor age in years
        height: donor height in cm
        htn: donor history of hypertension (accepted but unused; the 2019
            index has no hypertension term)
        sex: donor sex, "F" or "M"
        cmv: donor CMV IgG positive (1 = yes, 0 = no)
        gfr: donor eGFR at donation
        hdays: days in hospital before donation
    """
    female = is_member(parse_labels(sex, Sex), Sex.FEMALE)
    return hazard(
        linear(age, 0.023, 50),
        linear(height, -0.152, 170, per=10),
        indicator(female, -0.184),
        indicator(cmv, 0.190),
        linear(gfr, -0.023, 90, per=10),
        linear(hdays, 0.015),
    )


@elementwise
def watson_ukkdri(age, htn, weight, hdays, adrenaline):
    """
    UK Kidney Donor Risk Index, 2012 version (Watson et al.). Not the index
    used by the 2019 matching scheme.
    """
    age = values(age)
    agevar = np.where(age < 40, -0.245, 0.0) + np.where(age >= 60, 0.396, 0.0)
    return hazard(
        agevar,
        indicator(htn, 0.265),
        linear(weight, 0.0253, 75, per=10),
        linear(hdays, 0.00461),
        indicator(adrenaline, 0.0465),
    )


@elementwise
def ukkdri_q(ukkdri, prefix=False, as_label=False):
    """UK donor risk quartile 1-4 ("D1"-"D4" with prefix=True)."""
    return classify(ukkdri, UK_DONOR_2019, prefix=UK_DONOR_2019.prefix if prefix else None, as_label=as_label)


@elementwise
def ukkrri_q(ukkrri, prefix=False, as_label=False):
    """UK recipient risk quartile 1-4 ("R1"-"R4" with prefix=True)."""
    return classify(ukkrri, UK_RECIPIENT_2019, prefix=UK_RECIPIENT_2019.prefix if prefix else None, as_label=as_label)
