import pandas as pd
import pytest

from transplantr.chi import chi2dob


def test_numeric_chi():
    """A numeric CHI number gives its date of birth."""
    assert chi2dob(1503541234) == pd.Timestamp("1954-03-15")


def test_leading_zero_restored():
    """A nine-digit number regains its leading zero."""
    assert chi2dob(510141234) == pd.Timestamp("2014-10-05")


def test_century_flags():
    """Births are placed in the last century only when flagged."""
    assert chi2dob("1108191234") == pd.Timestamp("2019-08-11")
    assert chi2dob("1108191234", cent=True) == pd.Timestamp("1919-08-11")
    assert chi2dob("0101251234", paed=True) == pd.Timestamp("2025-01-01")


def test_vector_with_per_case_flags():
    """Century flags may vary per CHI number."""
    result = chi2dob(["1503541234", "1108191234", "0510141234"], cent=[False, True, False])
    assert isinstance(result, pd.DatetimeIndex)
    assert list(result) == [pd.Timestamp("1954-03-15"), pd.Timestamp("1919-08-11"), pd.Timestamp("2014-10-05")]


def test_series_keeps_index_and_missing_values():
    """Series input keeps its index and a missing CHI gives NaT."""
    result = chi2dob(pd.Series(["1503541234", None], index=["p1", "p2"]))
    assert result["p1"] == pd.Timestamp("1954-03-15")
    assert pd.isna(result["p2"])


@pytest.mark.parametrize("chi", ["15035412345", "15O3541234", "3102541234"])
def test_malformed_chi_raises(chi):
    """Wrong length, non-digits and impossible dates are rejected."""
    with pytest.raises(ValueError):
        chi2dob(chi)
