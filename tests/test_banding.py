import numpy as np
import pandas as pd
import pytest

from transplantr.banding import UK_DONOR_2019, UK_RECIPIENT_2019, QuartileCutpoints, classify
from transplantr.kidney import ukkdri_q, ukkrri_q


def test_reference_quartiles():
    """Known donor and recipient scores fall in their published quartiles."""
    assert ukkrri_q(0.74) == 1
    assert ukkrri_q(1.01, prefix=True) == "R3"
    assert ukkdri_q(1.01) == 2
    assert ukkdri_q(1.36, prefix=True) == "D3"


@pytest.mark.parametrize(
    "score, band",
    [(0.0, 1), (0.79, 1), (0.79 + 1e-9, 1), (0.7901, 2), (1.12, 2), (1.50, 3), (1.5001, 4), (9.0, 4)],
)
def test_cutpoints_are_epsilon_inclusive(score, band):
    """A score within rounding error of a cutpoint stays in the lower band."""
    assert classify(score, UK_DONOR_2019) == band


def test_bands_are_monotone_in_score():
    """Higher scores never land in a lower band."""
    scores = np.linspace(0, 2, 201)
    bands = classify(scores, UK_RECIPIENT_2019)
    assert np.all(np.diff(bands) >= 0)
    assert set(bands.tolist()) == {1, 2, 3, 4}


def test_nan_score():
    """A missing score has no band and no label."""
    result = ukkdri_q([1.0, np.nan])
    assert result[0] == 2
    assert np.isnan(result[1])
    assert ukkdri_q([np.nan], prefix=True).tolist() == [None]


def test_as_label_gives_ordered_categorical():
    """Labels come back as an ordered categorical over D1-D4."""
    result = ukkdri_q(pd.Series([0.5, 2.0, 1.2]), prefix=True, as_label=True)
    assert isinstance(result, pd.Series)
    assert result.cat.ordered
    assert result.tolist() == ["D1", "D4", "D3"]
    assert list(result.cat.categories) == ["D1", "D2", "D3", "D4"]


def test_invalid_cutpoints():
    """Cutpoints must be three increasing values."""
    with pytest.raises(ValueError):
        QuartileCutpoints("bad", (1.0, 0.5, 2.0))
    with pytest.raises(ValueError):
        QuartileCutpoints("bad", (1.0, 2.0))
