"""
Categorical vocabularies used by the risk formulas.

Each vocabulary is an Enum with a `from_label` constructor that normalises
free-text labels found in clinical datasets ("F", "female", "Black", ...).

Formulas compare parsed labels against one member at a time; anything that
cannot be parsed (misspelt, mis-encoded or missing) falls through to the
formula's default branch. This keeps numeric parity with the published
calculators, and `parse_labels` logs a warning whenever it happens so that
the silent default does not go unnoticed.
"""

import logging
import typing
from enum import Enum

import numpy as np
import pandas as pd

from .formula import labels

logger = logging.getLogger(__name__)


def _normalize(label: str) -> str:
    return label.strip().lower().replace("_", "-").replace(" ", "-")


class Sex(Enum):
    """Patient or donor sex as coded in transplant registries."""
    MALE = "M"
    FEMALE = "F"

    @classmethod
    def from_label(cls, label: str) -> "Sex":
        mapping = {
            "m": cls.MALE,
            "male": cls.MALE,
            "f": cls.FEMALE,
            "female": cls.FEMALE,
        }
        try:
            return mapping[_normalize(label)]
        except KeyError:
            raise ValueError(f"Unknown sex label: {label!r}")


class Ethnicity(Enum):
    """
    Ethnicity groups referenced by the US-derived formulas.
    Which groups carry a coefficient differs between formulas.
    """
    BLACK = "black"
    NON_BLACK = "non-black"
    WHITE = "white"
    ASIAN = "asian"
    OTHER = "other"

    @classmethod
    def from_label(cls, label: str) -> "Ethnicity":
        key = _normalize(label)
        mapping = {
            "black": cls.BLACK,
            "non-black": cls.NON_BLACK,
            "nonblack": cls.NON_BLACK,
            "white": cls.WHITE,
            "asian": cls.ASIAN,
            "other": cls.OTHER,
        }
        try:
            return mapping[key]
        except KeyError:
            raise ValueError(f"Unknown ethnicity label: {label!r}")


class CauseOfDeath(Enum):
    """Donor cause of death categories of the liver donor risk indices."""
    ANOXIA = "anoxia"
    CVA = "cva"
    TRAUMA = "trauma"
    OTHER = "other"

    @classmethod
    def from_label(cls, label: str) -> "CauseOfDeath":
        mapping = {
            "anoxia": cls.ANOXIA,
            "cva": cls.CVA,
            "stroke": cls.CVA,
            "trauma": cls.TRAUMA,
            "other": cls.OTHER,
        }
        try:
            return mapping[_normalize(label)]
        except KeyError:
            raise ValueError(f"Unknown cause of death label: {label!r}")


class ShareType(Enum):
    """Organ allocation (sharing) level."""
    LOCAL = "local"
    REGIONAL = "regional"
    NATIONAL = "national"

    @classmethod
    def from_label(cls, label: str) -> "ShareType":
        mapping = {
            "local": cls.LOCAL,
            "regional": cls.REGIONAL,
            "national": cls.NATIONAL,
        }
        try:
            return mapping[_normalize(label)]
        except KeyError:
            raise ValueError(f"Unknown share type label: {label!r}")


class PancreasIntent(Enum):
    """Pancreas implant intent."""
    SPK = "SPK"
    PAK = "PAK"
    OTHER = "other"

    @classmethod
    def from_label(cls, label: str) -> "PancreasIntent":
        mapping = {
            "spk": cls.SPK,
            "pak": cls.PAK,
            "other": cls.OTHER,
        }
        try:
            return mapping[_normalize(label)]
        except KeyError:
            raise ValueError(f"Unknown pancreas implant intent: {label!r}")


E = typing.TypeVar("E", bound=Enum)


def _coerce(vocabulary: typing.Type[E], raw: typing.Any) -> typing.Optional[E]:
    if isinstance(raw, vocabulary):
        return raw
    if raw is None or (not isinstance(raw, str) and pd.isna(raw)):
        return None
    try:
        return vocabulary.from_label(str(raw))
    except ValueError:
        return None


def parse_labels(raw: typing.Any, vocabulary: typing.Type[E]) -> np.ndarray:
    """
    Parse a scalar or vector of labels into an object array of vocabulary
    members, with None where a label is not recognised.

    Comparing the result with a member (`parsed == Sex.FEMALE`) gives the
    boolean mask a formula needs.
    """
    arr = labels(raw)
    parsed = np.empty(arr.shape, dtype=object)
    for position, value in np.ndenumerate(arr):
        parsed[position] = _coerce(vocabulary, value)
    missing = int(sum(member is None for member in parsed.flat))
    if missing:
        logger.warning(
            "%d %s value(s) not recognised; the formula's default category was used",
            missing, vocabulary.__name__,
        )
    return parsed


def unrecognised(raw: typing.Any, vocabulary: typing.Type[E]) -> list:
    """Distinct raw labels that `parse_labels` would not recognise."""
    seen = []
    for value in labels(raw).flat:
        if _coerce(vocabulary, value) is None and value not in seen:
            seen.append(value)
    return seen


def is_member(parsed: np.ndarray, member: Enum) -> np.ndarray:
    """Element-wise `parsed == member` as a boolean array."""
    return np.vectorize(lambda m: m is member, otypes=[bool])(parsed)
