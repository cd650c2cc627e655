"""
Shared building blocks for the piecewise risk formulas.

Every score in transplantr follows the same pattern:

1) optional unit normalisation (see units.py)
2) optional clamping: floor, then ceiling, then a boolean override which
   wins over both (e.g. dialysis forces creatinine to 4.0 mg/dl)
3) per-term transforms: linear offsets, banded offsets, categorical
   indicators and log terms
4) combination: a plain sum (points scores) or exp(sum) (hazard-ratio
   indices, 1.0 for a reference case)
5) optional division by a population scaling factor

Shape rules
-----------
Inputs may be scalars, sequences, numpy arrays or pandas Series and are
broadcast with numpy rules. The `elementwise` decorator gives results back
in the caller's shape: all-scalar input -> scalar, any array-like input ->
numpy array, any Series input -> Series on that Series' index. Series
inputs are combined by position, so they must share one index; mismatched
indices raise ValueError rather than silently mixing rows.
"""

from __future__ import annotations

import functools
import typing

import numpy as np
import pandas as pd

Band = typing.Tuple[float, typing.Union[float, typing.Callable[[np.ndarray], np.ndarray]]]


# ----------------
# Input coercion
# ----------------

def values(x: typing.Any) -> np.ndarray:
    """Numeric view of an input; None and pandas NA become NaN."""
    if x is None:
        return np.asarray(np.nan)
    if isinstance(x, pd.Series):
        return x.to_numpy(dtype=float, na_value=np.nan)
    return np.asarray(x, dtype=float)


def labels(x: typing.Any) -> np.ndarray:
    """Object view of a categorical input."""
    if isinstance(x, pd.Series):
        return x.to_numpy(dtype=object)
    return np.asarray(x, dtype=object)


def is_vector(x: typing.Any) -> bool:
    if isinstance(x, (str, bytes)):
        return False
    return isinstance(x, (list, tuple, np.ndarray, pd.Series, pd.Index)) and np.ndim(x) > 0


def shape_like(result: typing.Any, *inputs: typing.Any) -> typing.Any:
    """
    Give a computed result back in the shape of the caller's inputs.
    """
    series = next((i for i in inputs if isinstance(i, pd.Series)), None)
    if isinstance(result, pd.Categorical):
        return pd.Series(result, index=series.index) if series is not None else result
    if series is not None:
        data = np.broadcast_to(np.asarray(result), (len(series),))
        return pd.Series(np.array(data), index=series.index)
    if any(is_vector(i) for i in inputs):
        return np.atleast_1d(np.asarray(result))
    result = np.asarray(result)
    if result.ndim == 0:
        return result.item()
    return result


def check_aligned(*inputs: typing.Any) -> None:
    """Raise ValueError unless every Series among `inputs` has the same index."""
    indices = [i.index for i in inputs if isinstance(i, pd.Series)]
    for index in indices[1:]:
        if not index.equals(indices[0]):
            raise ValueError(
                "Series inputs must share the same index; "
                "align them first (e.g. take them from one DataFrame)"
            )


def elementwise(func):
    """
    Decorate a score function so that its result follows the shape rules
    described in the module docstring.
    """

    @functools.wraps(func)
    def wrapper(*args, **kwargs):
        check_aligned(*args, *kwargs.values())
        result = func(*args, **kwargs)
        return shape_like(result, *args, *kwargs.values())

    return wrapper


def integral(result: np.ndarray) -> np.ndarray:
    """Integer dtype where no value is missing; float (with NaN) otherwise."""
    result = np.asarray(result, dtype=float)
    if np.isnan(result).any():
        return result
    return result.astype(int)


# ----------------
# Clamping
# ----------------

def clamp(x, lower: float | None = None, upper: float | None = None) -> np.ndarray:
    """Floor then ceiling a lab value. NaN passes through."""
    x = values(x)
    if lower is not None:
        x = np.where(x < lower, lower, x)
    if upper is not None:
        x = np.where(x > upper, upper, x)
    return x


def override(x, flag, value: float) -> np.ndarray:
    """Replace x by a constant wherever flag == 1. Applied after clamp()."""
    return np.where(values(flag) == 1, value, values(x))


# ----------------
# Terms
# ----------------

def linear(x, coef: float, reference: float = 0.0, per: float = 1.0) -> np.ndarray:
    """coef * (x - reference) / per"""
    return coef * (values(x) - reference) / per


def indicator(mask, coef: float) -> np.ndarray:
    """Constant contribution where mask holds (flag == 1 or boolean True)."""
    mask = np.asarray(mask)
    if mask.dtype != bool:
        mask = values(mask) == 1
    return np.where(mask, coef, 0.0)


def banded(x, bands: typing.Sequence[Band], default) -> np.ndarray:
    """
    Value-banded term.

    Bands are (upper, contribution) pairs tested in order with a strict
    `x < upper`; the first match wins and `default` applies above the last
    band. A contribution may be a constant or a callable of x.
    NaN input gives NaN.
    """
    x = values(x)

    def resolve(contribution):
        if callable(contribution):
            return contribution(x)
        return np.full(x.shape, contribution, dtype=float)

    conditions = [x < upper for upper, _ in bands]
    choices = [resolve(contribution) for _, contribution in bands]
    result = np.select(conditions, choices, default=resolve(default))
    return np.where(np.isnan(x), np.nan, result)


def log_term(x, coef: float) -> np.ndarray:
    """coef * ln(x), the Cox log-linear term."""
    with np.errstate(divide="ignore", invalid="ignore"):
        return coef * np.log(values(x))


# ----------------
# Combination
# ----------------

def hazard(*terms, scaling=1.0) -> np.ndarray:
    """exp(sum of terms), divided by a population scaling factor."""
    return np.exp(np.sum(np.broadcast_arrays(*terms), axis=0)) / values(scaling)


def total(*terms) -> np.ndarray:
    """Plain sum of terms for points-based scores."""
    return np.sum(np.broadcast_arrays(*terms), axis=0)
