# -*- coding: utf-8 -*-
"""
Seasonal Interpolation - Interpolate seasonal amplitude and phase grids.

Amplitude and phase (day of year of maximum) cannot be interpolated
independently because phase wraps around the year. The pair is converted
to Cartesian components, each component is interpolated, and the result is
converted back with the phase wrapped to ``[0, 365.25)``.

Dependencies
------------
scipy

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
2026-10-13

Modified
--------
2026-10-13
"""

# Standard library
from typing import Tuple, Union

# Third-party
import numpy as np

# ICEVEL internal
from icevel.interpolation.grid import GridInterpolator
from icevel.vocabulary import InterpMethod

DAYS_PER_YEAR = 365.25


def season_interp(
    x: np.ndarray,
    y: np.ndarray,
    amp: np.ndarray,
    phase: np.ndarray,
    xi: np.ndarray,
    yi: np.ndarray,
    method: Union[str, InterpMethod] = InterpMethod.LINEAR,
) -> Tuple[np.ndarray, np.ndarray]:
    """Interpolate seasonal amplitude and phase at query points.

    Parameters
    ----------
    x, y : np.ndarray
        Grid axes in meters.
    amp : np.ndarray
        ``(rows, cols)`` seasonal amplitude.
    phase : np.ndarray
        ``(rows, cols)`` day of year of maximum.
    xi, yi : np.ndarray
        Query coordinates, same shape.
    method : str or InterpMethod
        Interpolation method for the Cartesian components.

    Returns
    -------
    Tuple[np.ndarray, np.ndarray]
        ``(amp_i, phase_i)`` shaped like ``xi``, phase in ``[0, 365.25)``.
    """
    omega = 2.0 * np.pi / DAYS_PER_YEAR
    ph = np.asarray(phase, dtype=np.float64) * omega
    amp = np.asarray(amp, dtype=np.float64)
    cx = amp * np.cos(ph)
    cy = amp * np.sin(ph)

    cxi = GridInterpolator(x, y, cx, method=method)(xi, yi)
    cyi = GridInterpolator(x, y, cy, method=method)(xi, yi)

    amp_i = np.hypot(cxi, cyi)
    phase_i = np.mod(np.arctan2(cyi, cxi) / omega, DAYS_PER_YEAR)
    return amp_i, phase_i
