# -*- coding: utf-8 -*-
"""
Geolocation Utilities - Coordinate validation and input-mode detection.

Helpers shared by the projection and every public entry point that accepts
either geographic or native map coordinates.

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
2026-10-06

Modified
--------
2026-10-09
"""

from typing import Any

import numpy as np

from icevel.exceptions import OutOfRangeError

LAT_LIMIT = 90.0
LON_MIN = -180.0
LON_MAX = 360.0


def _is_scalar(val: Any) -> bool:
    """Check if a value is a scalar (not array-like)."""
    if isinstance(val, np.ndarray):
        return val.ndim == 0
    return isinstance(val, (int, float, np.integer, np.floating))


def validate_latlon(lat: Any, lon: Any) -> None:
    """Reject implausible geographic coordinates.

    NaN values are ignored so that partially masked inputs pass through.

    Parameters
    ----------
    lat : array_like
        Latitudes in degrees.
    lon : array_like
        Longitudes in degrees.

    Raises
    ------
    OutOfRangeError
        If any latitude magnitude exceeds 90 or any longitude falls
        outside [-180, 360].
    """
    lat = np.asarray(lat, dtype=np.float64)
    lon = np.asarray(lon, dtype=np.float64)
    with np.errstate(invalid='ignore'):
        if np.any(np.abs(lat) > LAT_LIMIT):
            raise OutOfRangeError(
                "Latitude values are outside of plausible range [-90, 90]."
            )
        if np.any((lon < LON_MIN) | (lon > LON_MAX)):
            raise OutOfRangeError(
                "Longitude values are outside of plausible range [-180, 360]."
            )


def is_latlon(a: Any, b: Any) -> bool:
    """Guess whether a coordinate pair is geographic.

    Returns True when every finite value of ``a`` lies within [-90, 90]
    and every finite value of ``b`` within [-180, 360].

    This is a heuristic. Projected coordinates within a few hundred
    meters of a projection origin also satisfy these bounds and will be
    misread as geographic. Public entry points accept a ``geographic``
    flag that bypasses this check; pass it whenever the input mode is
    known.

    Parameters
    ----------
    a : array_like
        Candidate latitudes (or x).
    b : array_like
        Candidate longitudes (or y).

    Returns
    -------
    bool
    """
    try:
        a = np.asarray(a, dtype=np.float64)
        b = np.asarray(b, dtype=np.float64)
    except (TypeError, ValueError):
        return False
    a = a[np.isfinite(a)]
    b = b[np.isfinite(b)]
    if a.size == 0 or b.size == 0:
        return False
    if np.any(np.abs(a) > LAT_LIMIT):
        return False
    return not np.any((b < LON_MIN) | (b > LON_MAX))
