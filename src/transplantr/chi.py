"""
Scottish Community Health Index (CHI) numbers.

A CHI number is ten digits, the first six being the date of birth as
DDMMYY. Numeric storage drops the leading zero of days 01-09, so numbers
are left-padded back to ten digits before parsing.

The century is guessed: two-digit years below 20 are taken as 20YY and the
rest as 19YY. `paed=True` forces 20YY (children born in or after 2020)
and `cent=True` forces 19YY (people born before 1920); `cent` wins where
both are set.
"""

import numbers

import numpy as np
import pandas as pd

from .formula import is_vector

CHI_LENGTH = 10


def _normalise_chi(chi) -> str:
    if isinstance(chi, numbers.Integral):
        chi = str(int(chi))
    elif isinstance(chi, numbers.Real) and float(chi).is_integer():
        chi = str(int(chi))
    else:
        chi = str(chi).strip()
    if not chi.isdigit() or len(chi) > CHI_LENGTH:
        raise ValueError(f"Malformed CHI number: {chi!r}")
    return chi.zfill(CHI_LENGTH)


def _dob(chi, paed: bool, cent: bool) -> pd.Timestamp:
    if chi is None or (not isinstance(chi, str) and pd.isna(chi)):
        return pd.NaT
    chi = _normalise_chi(chi)
    dd, mm, yy = chi[0:2], chi[2:4], chi[4:6]
    century = "20" if int(yy) < 20 else "19"
    if paed:
        century = "20"
    if cent:
        century = "19"
    try:
        return pd.Timestamp(year=int(century + yy), month=int(mm), day=int(dd))
    except ValueError:
        raise ValueError(f"CHI number {chi!r} does not start with a valid date of birth")


def chi2dob(chi, paed=False, cent=False):
    """
    Date of birth encoded in CHI numbers.

    Args:
        chi: CHI number(s) as int or str; scalar, sequence or pandas Series
        paed: paediatric case(s) born in or after 2020; a single bool or one per case
        cent: case(s) born before 1920; a single bool or one per case

    Returns:
        a pandas.Timestamp for a scalar CHI, a pandas.DatetimeIndex for a
        sequence, or a datetime Series on the input's index for a Series.

    Raises:
        ValueError: if a CHI number is not numeric, longer than ten digits
            or does not start with a valid DDMMYY date.

    Example:
        chi2dob(1503541234)  # Timestamp('1954-03-15')
        chi2dob("1108191234", cent=True)  # Timestamp('1919-08-11')
    """
    if not is_vector(chi):
        return _dob(chi, bool(paed), bool(cent))

    raw = chi.to_numpy(dtype=object) if isinstance(chi, pd.Series) else np.asarray(chi, dtype=object)
    paed = np.broadcast_to(np.asarray(paed, dtype=bool), raw.shape)
    cent = np.broadcast_to(np.asarray(cent, dtype=bool), raw.shape)
    dates = pd.DatetimeIndex([_dob(c, p, z) for c, p, z in zip(raw, paed, cent)])
    if isinstance(chi, pd.Series):
        return pd.Series(dates, index=chi.index, name=chi.name)
    return dates
