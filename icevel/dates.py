# -*- coding: utf-8 -*-
"""
Dates - Conversion between calendar times and decimal years.

Mosaic years, time series and displacement spans are all expressed in
decimal years. A decimal year is the calendar year plus the elapsed
fraction of that year, so ``2020.5`` falls in early July 2020 and the
fraction accounts for leap years.

Author
------
Duane Smalley, PhD
duane.d.smalley@gmail.com

License
-------
MIT License
Copyright (c) 2024 geoint.org
See LICENSE file for full text.

Created
-------
2026-10-16

Modified
--------
2026-10-18
"""

# Standard library
from datetime import date, datetime, timedelta
from typing import Any, Union

# Third-party
import numpy as np

# ICEVEL internal
from icevel.exceptions import ValidationError

DateLike = Union[datetime, date, np.datetime64, float, int]


def _to_datetime(t: Any) -> datetime:
    if isinstance(t, datetime):
        return t.replace(tzinfo=None)
    if isinstance(t, date):
        return datetime(t.year, t.month, t.day)
    if isinstance(t, np.datetime64):
        if np.isnat(t):
            raise ValidationError("Cannot convert NaT to a decimal year")
        us = t.astype('datetime64[us]').astype(np.int64)
        return datetime(1970, 1, 1) + timedelta(microseconds=int(us))
    raise ValidationError(f"Unsupported time value {t!r}")


def _scalar_decimal_year(t: Any) -> float:
    if isinstance(t, (int, float, np.integer, np.floating)) and not isinstance(t, bool):
        return float(t)
    dt = _to_datetime(t)
    start = datetime(dt.year, 1, 1)
    length = (datetime(dt.year + 1, 1, 1) - start).total_seconds()
    return dt.year + (dt - start).total_seconds() / length


def decimal_year(t: Any) -> Union[float, np.ndarray]:
    """Convert times to decimal years.

    Parameters
    ----------
    t : datetime, date, np.datetime64, number or array_like of these
        Times to convert. Numbers are taken to be decimal years already
        and pass through unchanged.

    Returns
    -------
    float or np.ndarray
        A float for scalar input, otherwise a float64 array of the
        input's shape.

    Raises
    ------
    ValidationError
        For values that are not times, or NaT.

    Examples
    --------
    >>> decimal_year(datetime(2021, 1, 1))
    2021.0
    >>> decimal_year(np.datetime64('2020-07-02'))
    2020.5
    """
    if isinstance(t, (datetime, date, np.datetime64)) or np.ndim(t) == 0:
        return _scalar_decimal_year(t[()] if isinstance(t, np.ndarray) else t)

    arr = np.asarray(t)
    if np.issubdtype(arr.dtype, np.number):
        return arr.astype(np.float64)
    if np.issubdtype(arr.dtype, np.datetime64):
        flat = [_scalar_decimal_year(v) for v in arr.ravel()]
    else:
        flat = [_scalar_decimal_year(v) for v in arr.ravel().tolist()]
    return np.asarray(flat, dtype=np.float64).reshape(arr.shape)


def _scalar_from_decimal_year(y: float) -> datetime:
    if not np.isfinite(y):
        raise ValidationError(f"Decimal year must be finite, got {y}")
    year = int(np.floor(y))
    start = datetime(year, 1, 1)
    length = (datetime(year + 1, 1, 1) - start).total_seconds()
    return start + timedelta(seconds=(y - year) * length)


def datetime_from_decimal_year(y: Any) -> Union[datetime, np.ndarray]:
    """Convert decimal years to datetimes.

    Parameters
    ----------
    y : float or array_like
        Decimal years.

    Returns
    -------
    datetime or np.ndarray
        A ``datetime`` for scalar input, otherwise an object array of
        ``datetime`` with the input's shape.

    Raises
    ------
    ValidationError
        For non-finite values.
    """
    if np.ndim(y) == 0:
        return _scalar_from_decimal_year(float(y))
    arr = np.asarray(y, dtype=np.float64)
    out = np.empty(arr.shape, dtype=object)
    for idx, value in np.ndenumerate(arr):
        out[idx] = _scalar_from_decimal_year(float(value))
    return out
