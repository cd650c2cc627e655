import numpy as np
import pandas as pd
import pytest

from transplantr.formula import (
    banded,
    check_aligned,
    clamp,
    elementwise,
    hazard,
    indicator,
    integral,
    linear,
    override,
    shape_like,
)


def test_clamp_floor_then_ceiling_and_nan_passthrough():
    """clamp floors then caps, leaving NaN alone."""
    result = clamp([0.5, 2.0, 6.0, np.nan], lower=1, upper=4)
    assert result[:3].tolist() == [1.0, 2.0, 4.0]
    assert np.isnan(result[3])


def test_override_wins_over_clamp():
    """A set flag replaces the clamped value."""
    creat = clamp([0.8, 2.0], lower=1, upper=4)
    assert override(creat, [0, 1], 4.0).tolist() == [1.0, 4.0]


def test_linear_and_indicator():
    """Linear terms scale the offset; indicators fire only on 1 or True."""
    assert linear(180, -0.0464, 170, per=10) == pytest.approx(-0.0464)
    assert indicator([1, 0, 2], 0.5).tolist() == [0.5, 0.0, 0.0]
    assert indicator(np.array([True, False]), 0.5).tolist() == [0.5, 0.0]


def test_banded_first_match_wins_with_strict_less_than():
    """Bands are tested in order with a strict upper bound."""
    bands = ((40, 0.0), (50, 0.154), (60, lambda x: x / 100))
    result = banded([39.9, 40, 55, 60, np.nan], bands, default=1.0)
    assert result[:4].tolist() == pytest.approx([0.0, 0.154, 0.55, 1.0])
    assert np.isnan(result[4])


def test_hazard_of_zero_terms_is_one():
    """exp(0) is the reference case, and scaling divides it."""
    assert hazard(0.0, np.zeros(3)).tolist() == [1.0, 1.0, 1.0]
    assert hazard(np.log(2.0), scaling=2.0) == pytest.approx(1.0)


def test_integral_keeps_float_when_missing():
    """Whole-number results are ints unless a NaN forces float."""
    assert integral(np.array([1.0, 2.0])).dtype.kind == "i"
    assert integral(np.array([1.0, np.nan])).dtype.kind == "f"


def test_shape_like_rules():
    """Scalars give scalars, sequences give arrays, Series give Series."""
    s = pd.Series([1, 2], index=[10, 20])
    assert isinstance(shape_like(np.asarray(3.0), 1, 2), float)
    assert isinstance(shape_like(np.asarray([3.0]), [1]), np.ndarray)
    result = shape_like(np.array([1.0, 2.0]), s, 5)
    assert isinstance(result, pd.Series)
    assert list(result.index) == [10, 20]


def test_elementwise_broadcasts_scalar_result_over_series():
    """A scalar result is repeated along the Series input."""
    @elementwise
    def constant(x):
        return np.asarray(7.0)

    result = constant(pd.Series([1, 2, 3]))
    assert result.tolist() == [7.0, 7.0, 7.0]


def test_elementwise_rejects_series_with_different_indices():
    """Series on different indices are refused instead of being mixed by position."""
    @elementwise
    def add(x, y):
        return np.asarray(x, dtype=float) + np.asarray(y, dtype=float)

    with pytest.raises(ValueError, match="same index"):
        add(pd.Series([1, 2], index=[0, 1]), pd.Series([10, 20], index=[1, 0]))
    with pytest.raises(ValueError, match="same index"):
        add(pd.Series([1, 2], index=[0, 1]), y=pd.Series([10, 20], index=["a", "b"]))


def test_elementwise_accepts_series_sharing_an_index():
    """Series on one index combine row by row and keep that index."""
    @elementwise
    def add(x, y):
        return np.asarray(x, dtype=float) + np.asarray(y, dtype=float)

    result = add(pd.Series([1, 2], index=[5, 6]), pd.Series([10, 20], index=[5, 6]))
    assert result.to_dict() == {5: 11.0, 6: 22.0}


def test_check_aligned_ignores_non_series_inputs():
    """Scalars and arrays next to a Series are not index-checked."""
    check_aligned(pd.Series([1, 2]), [3, 4], 5, None)
