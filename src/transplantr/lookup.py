"""
Percentile lookup tables.

A PercentileTable converts a continuous risk index (KDRI, raw EPTS) into a
population percentile using an ordered set of (upper_bound, percentile)
breakpoints, as published by the OPTN:

    percentile = percentiles[i] for the smallest i with score <= upper_bounds[i]

Scores above the last bound saturate at `ceiling` (100); scores at or below
the first bound get the first percentile (0). NaN scores stay NaN.
"""

from __future__ import annotations

import typing
from dataclasses import dataclass

import numpy as np

from .formula import integral, values


@dataclass(frozen=True)
class PercentileTable:
    """
    Immutable breakpoint table for one published edition of a mapping.

    Attributes:
        name: Human-readable edition name (e.g. 'OPTN EPTS mapping table 2018').
        upper_bounds: Strictly ascending inclusive upper bounds.
        percentiles: Strictly ascending integer percentiles, one per bound.
        ceiling: Percentile returned above the last bound.
    """

    name: str
    upper_bounds: typing.Tuple[float, ...]
    percentiles: typing.Tuple[int, ...]
    ceiling: int = 100

    def __post_init__(self) -> None:
        if len(self.upper_bounds) != len(self.percentiles):
            raise ValueError(
                f"{self.name}: {len(self.upper_bounds)} bounds but {len(self.percentiles)} percentiles"
            )
        if not self.upper_bounds:
            raise ValueError(f"{self.name}: a lookup table needs at least one breakpoint")

        bounds = np.asarray(self.upper_bounds, dtype=float)
        ranks = np.asarray(self.percentiles + (self.ceiling,), dtype=float)
        if np.isnan(bounds).any() or not np.all(np.diff(bounds) > 0):
            raise ValueError(f"{self.name}: upper bounds must be strictly increasing")
        if not np.all(np.diff(ranks) > 0):
            raise ValueError(f"{self.name}: percentiles must be strictly increasing up to the ceiling")
        if ranks.min() < 0 or ranks.max() > 100:
            raise ValueError(f"{self.name}: percentiles must lie within 0..100")

    @classmethod
    def from_pairs(cls, name: str, pairs: typing.Iterable[typing.Tuple[float, int]], ceiling: int = 100) -> "PercentileTable":
        pairs = list(pairs)
        return cls(
            name=name,
            upper_bounds=tuple(float(bound) for bound, _ in pairs),
            percentiles=tuple(int(rank) for _, rank in pairs),
            ceiling=ceiling,
        )

    def __len__(self) -> int:
        return len(self.upper_bounds)

    def lookup(self, score) -> np.ndarray:
        """
        Map scores to percentiles. Returns an integer array, or a float array
        when some scores are NaN.
        """
        score = values(score)
        index = np.searchsorted(np.asarray(self.upper_bounds), score, side="left")
        ranks = np.asarray(self.percentiles + (self.ceiling,), dtype=float)
        result = np.where(np.isnan(score), np.nan, ranks[np.minimum(index, len(self))])
        return integral(result)
