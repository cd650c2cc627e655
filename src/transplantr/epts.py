"""
Estimated Post-Transplant Survival (EPTS) for adult kidney candidates.

References:
    https://optn.transplant.hrsa.gov/resources/allocation-calculators/epts-calculator/
    https://optn.transplant.hrsa.gov/media/1511/guide_to_calculating_interpreting_epts.pdf
"""

import numpy as np

from .formula import elementwise, total, values
from .tables import EPTS_2018


@elementwise
def raw_epts(age, dm, prev_tx, dx):
    """
    Raw EPTS score.

    Args:
        age: candidate age in years (with decimals)
        dm: diabetic (1 = yes, 0 = no)
        prev_tx: previous solid organ transplant (1 = yes, 0 = no)
        dx: time on dialysis in years (with decimals), 0 if not yet on dialysis

    Example:
        raw_epts(age=52.8788501, dm=0, prev_tx=0, dx=0)  # 1.440306
    """
    age, dm, prev_tx, dx = values(age), values(dm), values(prev_tx), values(dx)
    agebase = np.maximum(age - 25, 0)
    log_dx = np.log(dx + 1)
    dxnull = np.where(dx == 0, 1.0, 0.0)
    return total(
        0.047 * agebase - 0.015 * dm * agebase,
        0.398 * prev_tx - 0.237 * dm * prev_tx,
        0.315 * log_dx - 0.099 * dm * log_dx,
        0.130 * dxnull - 0.348 * dm * dxnull,
        1.262 * dm,
    )


@elementwise
def epts_lookup(raw):
    """
    Convert raw EPTS scores to percentiles with the OPTN mapping table
    published in March 2019 (SRTR 2018 data).

    Example:
        epts_lookup(1.54)  # 21
    """
    return EPTS_2018.lookup(raw)


@elementwise
def epts(age, dm, prev_tx, dx):
    """EPTS as a percentile (0-100). Arguments as for raw_epts()."""
    return EPTS_2018.lookup(raw_epts(age, dm, prev_tx, dx))
