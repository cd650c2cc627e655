import itertools

import numpy as np
import pandas as pd
import pytest

from transplantr.hla import HLAParseError, hla_mm_level, hla_mm_level_str


@pytest.mark.parametrize(
    "a, b, dr, level",
    [(0, 0, 0, 1), (0, 1, 0, 2), (0, 1, 1, 3), (0, 0, 2, 4), (2, 0, 0, 2), (0, 0, 1, 2), (1, 2, 1, 4)],
)
def test_hla_mm_level(a, b, dr, level):
    """Each mismatch triple gets its published level."""
    assert hla_mm_level(a, b, dr) == level


def test_every_triple_gets_a_level():
    """All 27 triples grade to 1-4 and two DR mismatches are always level 4."""
    triples = list(itertools.product(range(3), repeat=3))
    a, b, dr = (list(t) for t in zip(*triples))
    levels = hla_mm_level(a, b, dr)
    assert len(levels) == 27
    assert set(levels.tolist()) <= {1, 2, 3, 4}
    for (ta, tb, tdr), level in zip(triples, levels):
        if tdr == 2:
            assert level == 4


def test_missing_locus_gives_nan():
    """A missing locus count gives no level."""
    result = hla_mm_level([0, 1], [0, np.nan], [0, 1])
    assert result[0] == 1
    assert np.isnan(result[1])


def test_string_forms_match_triples():
    """Separated and compact strings grade like their triples."""
    assert hla_mm_level_str("211", sep=False) == 3
    assert hla_mm_level_str("1:0:1") == 2
    assert hla_mm_level_str("0-0-0") == 1
    assert hla_mm_level_str(["000", "002"], sep=False).tolist() == [1, 4]


def test_string_series_keeps_index():
    """String Series input keeps its index."""
    result = hla_mm_level_str(pd.Series(["1:1:1", "2:2:2"], index=[3, 7]))
    assert result.to_dict() == {3: 3, 7: 4}


@pytest.mark.parametrize("mm, sep", [("1:0", True), ("1:3:1", True), ("10", False), ("1a1", False), ("1:0:1", False)])
def test_malformed_strings_raise(mm, sep):
    """Malformed strings raise HLAParseError naming the value."""
    with pytest.raises(HLAParseError) as e:
        hla_mm_level_str(mm, sep=sep)
    assert mm in str(e.value)
    assert isinstance(e.value, ValueError)


def test_missing_strings_give_nan():
    """None and NaN entries have no level; present strings are still graded."""
    result = hla_mm_level_str(["1:0:1", None, "2:1:1", np.nan])
    assert result[0] == 2
    assert np.isnan(result[1])
    assert result[2] == 3
    assert np.isnan(result[3])
    assert np.isnan(hla_mm_level_str(None))


def test_missing_strings_in_a_series_keep_their_rows():
    """A Series with gaps gives NaN in the gaps, on the original index."""
    result = hla_mm_level_str(pd.Series(["000", None, "012"], index=["a", "b", "c"]), sep=False)
    assert result["a"] == 1
    assert pd.isna(result["b"])
    assert result["c"] == 4


def test_malformed_string_next_to_missing_one_still_raises():
    """Missing entries are skipped but malformed ones are not."""
    with pytest.raises(HLAParseError):
        hla_mm_level_str(["1:0:1", None, "x:y:z"])
