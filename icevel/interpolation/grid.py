# -*- coding: utf-8 -*-
"""
Grid Interpolation - Sample a regular 2D grid at scattered points.

Wraps ``scipy.interpolate.RegularGridInterpolator`` for the north-up grids
produced by the loader. Handles descending y axes, trailing layer
dimensions (one layer per year), boolean masks and axes too short for the
requested method.

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
2026-10-11

Modified
--------
2026-10-16
"""

# Standard library
import logging
from typing import Union

# Third-party
import numpy as np
from scipy.interpolate import RegularGridInterpolator

# ICEVEL internal
from icevel.exceptions import ValidationError
from icevel.vocabulary import InterpMethod

logger = logging.getLogger(__name__)

# Minimum samples per axis required by each method
_MIN_SAMPLES = {
    InterpMethod.NEAREST: 1,
    InterpMethod.LINEAR: 2,
    InterpMethod.CUBIC: 4,
}

_FALLBACK = {
    InterpMethod.CUBIC: InterpMethod.LINEAR,
    InterpMethod.LINEAR: InterpMethod.NEAREST,
}


def _usable_method(method: InterpMethod, n_min: int) -> InterpMethod:
    """Downgrade ``method`` until the shortest axis can support it."""
    while n_min < _MIN_SAMPLES[method]:
        fallback = _FALLBACK[method]
        logger.debug(
            "Axis has %d samples; %s falls back to %s",
            n_min, method.value, fallback.value,
        )
        method = fallback
    return method


class GridInterpolator:
    """Callable interpolator over a north-up or south-up regular grid.

    Parameters
    ----------
    x : np.ndarray
        ``(cols,)`` monotonic x coordinates.
    y : np.ndarray
        ``(rows,)`` monotonic y coordinates, either direction.
    z : np.ndarray
        ``(rows, cols)`` or ``(rows, cols, layers)`` values. Boolean
        grids are interpolated as 0/1 and returned as bool.
    method : str or InterpMethod
        ``'nearest'``, ``'linear'`` or ``'cubic'``.
    fill_value : float
        Value for query points outside the grid.

    Raises
    ------
    ValidationError
        If the grid and axis shapes disagree or the method is unknown.

    Examples
    --------
    >>> f = GridInterpolator(x, y, v, method='linear')
    >>> f(np.array([-3.3e6]), np.array([3.1e5]))
    array([812.3])
    """

    def __init__(
        self,
        x: np.ndarray,
        y: np.ndarray,
        z: np.ndarray,
        method: Union[str, InterpMethod] = InterpMethod.LINEAR,
        fill_value: float = np.nan,
    ) -> None:
        x = np.asarray(x, dtype=np.float64)
        y = np.asarray(y, dtype=np.float64)
        z = np.asarray(z)
        if x.ndim != 1 or y.ndim != 1:
            raise ValidationError("x and y must be 1D coordinate vectors")
        if z.ndim not in (2, 3) or z.shape[:2] != (y.size, x.size):
            raise ValidationError(
                f"Grid shape {z.shape} does not match axes "
                f"(len(y)={y.size}, len(x)={x.size})"
            )

        self._is_bool = z.dtype == np.bool_
        values = z.astype(np.float64)
        if x.size > 1 and x[-1] < x[0]:
            x = x[::-1]
            values = values[:, ::-1]
        if y.size > 1 and y[-1] < y[0]:
            y = y[::-1]
            values = values[::-1]

        requested = InterpMethod.parse(method)
        self.method = _usable_method(requested, min(x.size, y.size))
        self._interp = RegularGridInterpolator(
            (y, x),
            values,
            method=self.method.value,
            bounds_error=False,
            fill_value=fill_value,
        )

    def __call__(self, xi: np.ndarray, yi: np.ndarray) -> np.ndarray:
        """Interpolate at query points.

        Parameters
        ----------
        xi, yi : np.ndarray
            Query coordinates of identical shape.

        Returns
        -------
        np.ndarray
            Shape ``xi.shape`` for a 2D grid, ``xi.shape + (layers,)``
            for a layered grid.
        """
        xi = np.asarray(xi, dtype=np.float64)
        yi = np.asarray(yi, dtype=np.float64)
        if xi.shape != yi.shape:
            raise ValidationError(
                f"xi {xi.shape} and yi {yi.shape} must have the same shape"
            )
        pts = np.column_stack([yi.ravel(), xi.ravel()])
        out = self._interp(pts)
        out = out.reshape(xi.shape + out.shape[1:])
        if self._is_bool:
            return np.nan_to_num(out, nan=0.0) > 0.5
        return out


def interp2(
    x: np.ndarray,
    y: np.ndarray,
    z: np.ndarray,
    xi: np.ndarray,
    yi: np.ndarray,
    method: Union[str, InterpMethod] = InterpMethod.LINEAR,
    fill_value: float = np.nan,
) -> np.ndarray:
    """Interpolate a regular grid at scattered points.

    Functional form of ``GridInterpolator``; see its documentation.

    Returns
    -------
    np.ndarray
        Interpolated values, shape ``xi.shape`` (plus the layer
        dimension for 3D ``z``).
    """
    return GridInterpolator(x, y, z, method=method, fill_value=fill_value)(
        xi, yi
    )
