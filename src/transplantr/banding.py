"""
Quartile banding of continuous risk indices.

Band membership uses `score < cutpoint + epsilon`, so a score that sits
exactly on a published cutpoint lands in the lower band even when floating
point arithmetic leaves it a hair above the printed value.
"""

from __future__ import annotations

import typing
from dataclasses import dataclass

import numpy as np
import pandas as pd

from .formula import integral, values

EPSILON = 0.00000001


@dataclass(frozen=True)
class QuartileCutpoints:
    """
    Three ascending cutpoints splitting the real line into bands 1-4.

    Attributes:
        name: Description of the published cutpoint set.
        cutpoints: (c1, c2, c3) upper limits of bands 1, 2 and 3.
        prefix: Letter code used when bands are rendered as text (e.g. 'D').
        epsilon: Tolerance added to every cutpoint.
    """

    name: str
    cutpoints: typing.Tuple[float, float, float]
    prefix: str = ""
    epsilon: float = EPSILON

    def __post_init__(self) -> None:
        if len(self.cutpoints) != 3:
            raise ValueError(f"{self.name}: expected 3 cutpoints, got {len(self.cutpoints)}")
        if not all(a < b for a, b in zip(self.cutpoints, self.cutpoints[1:])):
            raise ValueError(f"{self.name}: cutpoints must be strictly ascending")

    def band_labels(self, prefix: str | None = None) -> list:
        prefix = self.prefix if prefix is None else prefix
        return [f"{prefix}{band}" for band in range(1, 5)]


def classify(score, cutpoints: QuartileCutpoints, prefix: str | None = None, as_label: bool = False):
    """
    Assign each score to band 1-4.

    - prefix: render bands as text, e.g. "D3"
    - as_label: return an ordered pandas.Categorical (presentation only)

    NaN scores give NaN (or None / a missing label for text output).
    """
    score = values(score)
    limits = np.asarray(cutpoints.cutpoints, dtype=float) + cutpoints.epsilon
    band = np.searchsorted(limits, score, side="right") + 1
    band = np.where(np.isnan(score), np.nan, band)

    if as_label:
        text = cutpoints.band_labels(prefix if prefix is not None else "")
        codes = np.where(np.isnan(band), -1, np.nan_to_num(band) - 1).astype(int)
        return pd.Categorical.from_codes(np.atleast_1d(codes), categories=text, ordered=True)
    if prefix is not None:
        rendered = np.empty(band.shape, dtype=object)
        for position, value in np.ndenumerate(band):
            rendered[position] = None if np.isnan(value) else f"{prefix}{int(value)}"
        return rendered
    return integral(band)


UK_DONOR_2019 = QuartileCutpoints("UK kidney donor risk index quartiles (2019)", (0.79, 1.12, 1.50), prefix="D")
UK_RECIPIENT_2019 = QuartileCutpoints("UK kidney recipient risk index quartiles (2019)", (0.74, 0.94, 1.20), prefix="R")
