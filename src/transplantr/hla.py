"""
HLA mismatch grading as used in the UK national deceased donor kidney
matching scheme.

Levels (evaluated in order):
    1: 000 mismatch (a + b + dr == 0)
    4: two DR mismatches
    4: b + dr > 2
    3: b + dr == 2
    2: everything else

HLA-A mismatches only count towards the 000 check.
"""

from __future__ import annotations

import numpy as np
import pandas as pd

from .formula import elementwise, integral, labels, values


class HLAParseError(ValueError):
    """Raised when a string-encoded HLA mismatch cannot be parsed."""


@elementwise
def hla_mm_level(a, b, dr):
    """
    HLA mismatch level (1-4) from A, B and DR locus mismatch counts (0-2).

    Example:
        hla_mm_level(a=0, b=1, dr=1)  # 3
    """
    a, b, dr = np.broadcast_arrays(values(a), values(b), values(dr))
    level = np.select(
        [a + b + dr == 0, dr == 2, b + dr > 2, b + dr == 2],
        [1, 4, 4, 3],
        default=2,
    ).astype(float)
    missing = np.isnan(a) | np.isnan(b) | np.isnan(dr)
    return integral(np.where(missing, np.nan, level))


def _extract(mm: str, sep: bool) -> tuple[int, int, int]:
    text = str(mm).strip()
    width, positions = (5, (0, 2, 4)) if sep else (3, (0, 1, 2))
    if len(text) != width:
        raise HLAParseError(
            f"HLA mismatch {mm!r} should be {width} characters "
            f"({'with' if sep else 'without'} separators)"
        )
    digits = [text[i] for i in positions]
    if not all(d in "012" for d in digits):
        raise HLAParseError(f"HLA mismatch {mm!r} must hold three mismatch counts of 0, 1 or 2")
    a, b, dr = (int(d) for d in digits)
    return a, b, dr


@elementwise
def hla_mm_level_str(mm, sep: bool = True):
    """
    HLA mismatch level from strings such as "1:0:1" (sep=True, any single
    separator character) or "101" (sep=False).

    Missing entries (None, NaN) give NaN. Raises HLAParseError on
    malformed strings.
    """
    raw = labels(mm)
    triples = np.empty(raw.shape + (3,), dtype=float)
    for position, value in np.ndenumerate(raw):
        if not isinstance(value, str) and pd.isna(value):
            triples[position] = np.nan
        else:
            triples[position] = _extract(value, sep)
    return hla_mm_level(triples[..., 0], triples[..., 1], triples[..., 2])
