"""
Unit conversion for laboratory analytes.

Converts between international (SI) and US conventional units:

- creatinine: µmol/l <-> mg/dl (factor 88.4)
- bilirubin:  µmol/l <-> mg/dl (factor 17.1)
- urea/BUN:   urea mmol/l (or mg/dl) <-> blood urea nitrogen mg/dl
- albumin:    g/l <-> g/dl (factor 10)

All converters are element-wise and accept scalars, sequences, numpy arrays
or pandas Series. NaN values propagate.
"""

from enum import Enum

from .formula import elementwise, values

# Urea <-> BUN factors follow the published conversion tables. They are kept
# as two independent constants rather than derived from each other.
UREA_SI_TO_BUN = 0.3571
UREA_US_TO_BUN = 2.14

CREATININE_FACTOR = 88.4
BILIRUBIN_FACTOR = 17.1
ALBUMIN_FACTOR = 10.0


class Units(Enum):
    """
    Unit system a caller's laboratory values are expressed in.
    """
    SI = "SI"
    US = "US"

    @classmethod
    def parse(cls, tag: "Units | str") -> "Units":
        """
        Accept a Units member or a case-insensitive 'SI'/'US' string.
        """
        if isinstance(tag, cls):
            return tag
        key = str(tag).strip().upper()
        try:
            return cls(key)
        except ValueError:
            raise ValueError(f"Unknown unit system: {tag!r} (expected 'SI' or 'US')")


@elementwise
def creatinine_to_US(creat):
    """Convert serum creatinine from µmol/l to mg/dl."""
    return values(creat) / CREATININE_FACTOR


@elementwise
def creatinine_to_SI(creat):
    """Convert serum creatinine from mg/dl to µmol/l."""
    return values(creat) * CREATININE_FACTOR


@elementwise
def bilirubin_to_US(bili):
    """Convert serum bilirubin from µmol/l to mg/dl."""
    return values(bili) / BILIRUBIN_FACTOR


@elementwise
def bilirubin_to_SI(bili):
    """Convert serum bilirubin from mg/dl to µmol/l."""
    return values(bili) * BILIRUBIN_FACTOR


@elementwise
def albumin_to_US(albumin):
    """Convert serum albumin from g/l to g/dl."""
    return values(albumin) / ALBUMIN_FACTOR


@elementwise
def albumin_to_SI(albumin):
    """Convert serum albumin from g/dl to g/l."""
    return values(albumin) * ALBUMIN_FACTOR


@elementwise
def urea_to_bun(urea, units="SI"):
    """
    Convert urea to blood urea nitrogen (BUN) in mg/dl.

    Urea is in mmol/l by default; with units="US" it is taken as mg/dl.
    """
    if Units.parse(units) is Units.SI:
        return values(urea) / UREA_SI_TO_BUN
    return values(urea) / UREA_US_TO_BUN


@elementwise
def bun_to_urea(bun, units="SI"):
    """
    Convert blood urea nitrogen (mg/dl) to urea.

    Returns urea in mmol/l by default, or in mg/dl with units="US".
    """
    if Units.parse(units) is Units.SI:
        return values(bun) * UREA_SI_TO_BUN
    return values(bun) * UREA_US_TO_BUN


# names as published in the clinical literature
urea_to_BUN = urea_to_bun
BUN_to_urea = bun_to_urea


def to_US(value, factor: float, units="SI"):
    """
    Bring a value into US conventional units when the caller supplied SI.
    Used by formulas whose native units are US.
    """
    if Units.parse(units) is Units.SI:
        return values(value) / factor
    return values(value)


def to_SI(value, factor: float, units="SI"):
    """
    Bring a value into SI units when the caller supplied US.
    Used by formulas whose native units are SI.
    """
    if Units.parse(units) is Units.US:
        return values(value) * factor
    return values(value)
