"""
Liver transplant donor risk and outcome scores.

Donor risk indices (hazard ratios, 1.0 for a reference donor):
    et_dri      Eurotransplant DRI (Braat et al., Am J Transplant 2012)
    liver_dri   US liver DRI (Feng et al., Am J Transplant 2006)

Points scores:
    p_soft, soft2, soft   SOFT score and its components (Rana et al., 2008)
    pedi_soft             Pedi-SOFT (Rana et al., 2015)
    bar_score             Balance of Risk score (Dutkowski et al., 2011)
"""

import numpy as np

from .categories import CauseOfDeath, Ethnicity, ShareType, is_member, parse_labels
from .formula import banded, elementwise, hazard, indicator, linear, total, values
from .units import ALBUMIN_FACTOR, CREATININE_FACTOR, to_US

_DONOR_AGE_BANDS = ((40, 0.0), (50, 0.154), (60, 0.274), (70, 0.424))


def _donor_terms(age, cod, share):
    cod = parse_labels(cod, CauseOfDeath)
    share = parse_labels(share, ShareType)
    agevar = banded(age, _DONOR_AGE_BANDS, default=0.501)
    codvar = np.select(
        [is_member(cod, CauseOfDeath.ANOXIA), is_member(cod, CauseOfDeath.CVA), is_member(cod, CauseOfDeath.TRAUMA)],
        [0.079, 0.145, 0.0],
        default=0.184,
    )
    sharevar = np.select(
        [is_member(share, ShareType.LOCAL), is_member(share, ShareType.REGIONAL)],
        [0.0, 0.105],
        default=0.244,
    )
    return agevar, codvar, sharevar


@elementwise
def et_dri(age, cod, dcd, split, share, cit, ggt, rescue):
    """
    Eurotransplant Donor Risk Index for liver transplantation.

    Args:
        age: donor age in years
        cod: donor cause of death, one of "trauma", "anoxia", "cva" or "other"
        dcd: donation after circulatory death (1 = yes, 0 = no)
        split: split liver (1 = yes, 0 = no)
        share: "local", "regional" or "national"
        cit: cold ischaemic time in hours
        ggt: last donor serum gamma-GT in IU/l
        rescue: rescue allocation (1 = yes, 0 = no)

    Example:
        et_dri(age=25, cod="cva", dcd=0, split=0, share="local", cit=8, ggt=50, rescue=0)  # 1.15
    """
    agevar, codvar, sharevar = _donor_terms(age, cod, share)
    return hazard(
        0.960 * (agevar + codvar + linear(cit, 0.010, 8) + sharevar),
        indicator(dcd, 0.411),
        indicator(split, 0.422),
        linear(ggt, 0.06, 50, per=100),
        indicator(rescue, 0.180),
    )


@elementwise
def liver_dri(age, cod, eth, dcd, split, share, cit, height):
    """
    US liver Donor Risk Index (Feng et al.).

    `eth` is "black", "white" or any other group ("other", "asian", ...).

    Example:
        liver_dri(age=64, cod="cva", eth="white", dcd=0, split=0, share="local", cit=14, height=170)  # 1.88
    """
    agevar, codvar, sharevar = _donor_terms(age, cod, share)
    eth = parse_labels(eth, Ethnicity)
    racevar = np.select(
        [is_member(eth, Ethnicity.BLACK), is_member(eth, Ethnicity.WHITE)],
        [0.176, 0.0],
        default=0.126,
    )
    return hazard(
        agevar,
        codvar,
        racevar,
        indicator(dcd, 0.411),
        indicator(split, 0.422),
        sharevar,
        linear(cit, 0.010, 8),
        linear(height, -0.066, 170, per=10),
    )


def _p_soft_points(Age, BMI, PrevTx, AbdoSurg, Albumin, Dx, ICU, Admitted, MELD, LifeSupport,
                   Encephalopathy, PVThrombosis, Ascites):
    # albumin in g/dl
    PrevTx = values(PrevTx)
    txpts = np.select([PrevTx == 0, PrevTx == 1], [0.0, 9.0], default=14.0)
    return total(
        np.where(values(Age) > 60, 4.0, 0.0),
        np.where(values(BMI) > 35, 2.0, 0.0),
        txpts,
        2 * values(AbdoSurg),
        np.where(values(Albumin) < 2.0, 2.0, 0.0),
        np.where(values(MELD) > 30, 4.0, 0.0),
        3 * values(Dx),
        6 * values(ICU),
        3 * values(Admitted),
        9 * values(LifeSupport),
        2 * values(Encephalopathy),
        5 * values(PVThrombosis),
        3 * values(Ascites),
    )


def _soft2_points(PSoft, PortalBleed, DonorAge, DonorCVA, DonorSCr, National, CIT):
    # donor creatinine in mg/dl
    DonorAge = values(DonorAge)
    dagepts = np.select([(DonorAge >= 10) & (DonorAge <= 20), DonorAge > 60], [-2.0, 3.0], default=0.0)
    return total(
        values(PSoft),
        6 * values(PortalBleed),
        dagepts,
        2 * values(DonorCVA),
        np.where(values(DonorSCr) > 1.5, 2.0, 0.0),
        2 * values(National),
        np.where(values(CIT) < 6, -3.0, 0.0),
    )


@elementwise
def p_soft(Age, BMI, PrevTx, AbdoSurg, Albumin, Dx, ICU, Admitted, MELD, LifeSupport,
           Encephalopathy, PVThrombosis, Ascites, units="SI"):
    """
    P-SOFT: the pre-procurement component of the SOFT score.

    Args:
        Age: recipient age in years
        BMI: recipient BMI in kg/m2
        PrevTx: number of previous transplants
        AbdoSurg: previous abdominal surgery (1 = yes, 0 = no)
        Albumin: serum albumin (g/l, or g/dl with units="US")
        Dx: dialysis before transplant (1 = yes, 0 = no)
        ICU: in intensive care before transplant (1 = yes, 0 = no)
        Admitted: admitted to hospital before transplant (1 = yes, 0 = no)
        MELD: MELD score, see liver.meld()
        LifeSupport: on life support (1 = yes, 0 = no)
        Encephalopathy: encephalopathy (1 = yes, 0 = no)
        PVThrombosis: portal vein thrombosis (1 = yes, 0 = no)
        Ascites: ascites (1 = yes, 0 = no)
    """
    return _p_soft_points(
        Age, BMI, PrevTx, AbdoSurg, to_US(Albumin, ALBUMIN_FACTOR, units), Dx, ICU, Admitted,
        MELD, LifeSupport, Encephalopathy, PVThrombosis, Ascites,
    )


def p_soft_US(Age, BMI, PrevTx, AbdoSurg, Albumin, Dx, ICU, Admitted, MELD, LifeSupport,
              Encephalopathy, PVThrombosis, Ascites):
    """p_soft() with albumin in g/dl."""
    return p_soft(Age, BMI, PrevTx, AbdoSurg, Albumin, Dx, ICU, Admitted, MELD, LifeSupport,
                  Encephalopathy, PVThrombosis, Ascites, units="US")


@elementwise
def soft2(PSoft, PortalBleed, DonorAge, DonorCVA, DonorSCr, National, CIT, units="SI"):
    """
    SOFT score from a known P-SOFT score and the procurement factors.

    Args:
        PSoft: P-SOFT score, see p_soft()
        PortalBleed: portal bleed within 48 hours of transplant (1 = yes, 0 = no)
        DonorAge: donor age in years
        DonorCVA: donor cause of death CVA (1 = yes, 0 = no)
        DonorSCr: donor serum creatinine (µmol/l, or mg/dl with units="US")
        National: national allocation (1 = yes, 0 = no)
        CIT: cold ischaemic time in hours

    Example:
        soft2(PSoft=4, PortalBleed=0, DonorAge=61, DonorCVA=1, DonorSCr=140, National=1, CIT=12)  # 13
    """
    return _soft2_points(
        PSoft, PortalBleed, DonorAge, DonorCVA, to_US(DonorSCr, CREATININE_FACTOR, units), National, CIT,
    )


def soft2_US(PSoft, PortalBleed, DonorAge, DonorCVA, DonorSCr, National, CIT):
    """soft2() with donor creatinine in mg/dl."""
    return soft2(PSoft, PortalBleed, DonorAge, DonorCVA, DonorSCr, National, CIT, units="US")


@elementwise
def soft(Age, BMI, PrevTx, AbdoSurg, Albumin, Dx, ICU, Admitted, MELD, LifeSupport,
         Encephalopathy, PVThrombosis, Ascites, PortalBleed, DonorAge, DonorCVA, DonorSCr,
         National, CIT, units="SI"):
    """
    Survival Outcomes Following Liver Transplantation (SOFT) score.
    Arguments as for p_soft() and soft2(); albumin and donor creatinine
    are converted once according to `units`.
    """
    psoft = _p_soft_points(
        Age, BMI, PrevTx, AbdoSurg, to_US(Albumin, ALBUMIN_FACTOR, units), Dx, ICU, Admitted,
        MELD, LifeSupport, Encephalopathy, PVThrombosis, Ascites,
    )
    return _soft2_points(
        psoft, PortalBleed, DonorAge, DonorCVA, to_US(DonorSCr, CREATININE_FACTOR, units), National, CIT,
    )


def soft_US(Age, BMI, PrevTx, AbdoSurg, Albumin, Dx, ICU, Admitted, MELD, LifeSupport,
            Encephalopathy, PVThrombosis, Ascites, PortalBleed, DonorAge, DonorCVA, DonorSCr,
            National, CIT):
    """soft() with albumin in g/dl and donor creatinine in mg/dl."""
    return soft(Age, BMI, PrevTx, AbdoSurg, Albumin, Dx, ICU, Admitted, MELD, LifeSupport,
                Encephalopathy, PVThrombosis, Ascites, PortalBleed, DonorAge, DonorCVA, DonorSCr,
                National, CIT, units="US")


@elementwise
def pedi_soft(CTVG, Weight, Dx, LifeSupport, PrevTx):
    """
    Pedi-SOFT score for paediatric liver transplantation.

    Args:
        CTVG: cadaveric technical variant graft (1 = yes, 0 = no)
        Weight: recipient weight in kg
        Dx: dialysis or creatinine clearance under 30 (1 = yes, 0 = no)
        LifeSupport: on life support (1 = yes, 0 = no)
        PrevTx: number of previous liver transplants

    Example:
        pedi_soft(CTVG=1, Weight=10, Dx=0, LifeSupport=0, PrevTx=0)  # 4
    """
    PrevTx = values(PrevTx)
    return total(
        np.where(values(Weight) < 6.0, 6.0, 0.0),
        np.select([PrevTx == 0, PrevTx == 1], [0.0, 15.0], default=49.0),
        4 * values(CTVG),
        17 * values(Dx),
        27 * values(LifeSupport),
    )


@elementwise
def bar_score(Age, MELD, ReTx, LifeSupport, CIT, DonorAge):
    """
    Balance of Risk (BAR) score.

    Example:
        bar_score(Age=63, MELD=27, ReTx=0, LifeSupport=0, CIT=9.5, DonorAge=67)  # 15
    """
    Age, MELD, CIT = values(Age), values(MELD), values(CIT)
    return total(
        np.select([Age > 60, Age > 40], [3.0, 1.0], default=0.0),
        np.select([MELD > 35, MELD > 25, MELD > 15], [14.0, 10.0, 5.0], default=0.0),
        np.select([CIT > 12, CIT > 6], [2.0, 1.0], default=0.0),
        np.where(values(DonorAge) > 40, 1.0, 0.0),
        4 * values(ReTx),
        3 * values(LifeSupport),
    )
