# -*- coding: utf-8 -*-
"""
Spatial Subset - Convert coordinate limits into a pixel window.

Given the 1D coordinate axes of a mosaic and the extent of a selector
(limits or scattered points) in the same map coordinates, computes the
smallest ``PixelWindow`` that contains every axis sample within the
selector extent grown by a buffer. The window is what the loader reads,
so selectors never cause a full-grid read.

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
2026-10-09

Modified
--------
2026-10-15
"""

# Standard library
import logging
import warnings
from typing import Optional, Tuple, Union

# Third-party
import numpy as np

# ICEVEL internal
from icevel.data_prep.base import PixelWindow
from icevel.exceptions import (
    DegenerateGeometryWarning,
    NoDataError,
    ValidationError,
)

logger = logging.getLogger(__name__)

BufferLike = Union[float, Tuple[float, float]]


def normalize_buffer(buffer_km: BufferLike) -> Tuple[float, float]:
    """Validate a buffer and return it as an ``(x, y)`` pair in km.

    Parameters
    ----------
    buffer_km : float or Tuple[float, float]
        Scalar buffer applied to both axes, or a per-axis pair.

    Returns
    -------
    Tuple[float, float]

    Raises
    ------
    ValidationError
        If the buffer is negative, non-finite, or not a scalar or pair.
    """
    try:
        arr = np.asarray(buffer_km, dtype=np.float64)
    except (TypeError, ValueError):
        raise ValidationError(
            f"buffer must be a number or a pair of numbers, got {buffer_km!r}"
        ) from None
    if arr.ndim == 0:
        arr = np.array([arr, arr])
    if arr.shape != (2,):
        raise ValidationError(
            f"buffer must be a scalar or a 2-element pair, got shape {arr.shape}"
        )
    if not np.all(np.isfinite(arr)) or np.any(arr < 0):
        raise ValidationError(
            f"buffer must be finite and non-negative, got {arr.tolist()}"
        )
    return float(arr[0]), float(arr[1])


def _cell_size(axis: np.ndarray) -> float:
    """Grid spacing of a coordinate axis, 0 for a single sample."""
    if axis.size < 2:
        return 0.0
    return float(np.median(np.abs(np.diff(axis))))


def _axis_range(
    axis: np.ndarray,
    limits: Optional[np.ndarray],
    buffer_m: float,
    name: str,
) -> Tuple[int, int]:
    """Half-open index range of ``axis`` samples inside the buffered limits."""
    if limits is None:
        return 0, axis.size

    lim = np.asarray(limits, dtype=np.float64).ravel()
    lim = lim[np.isfinite(lim)]
    if lim.size == 0:
        raise ValidationError(f"{name} contains no finite values")
    lo, hi = float(lim.min()), float(lim.max())

    cell = _cell_size(axis)
    if hi - lo < cell and buffer_m < cell:
        warnings.warn(
            f"{name} extent is narrower than one grid cell; buffer raised "
            f"from {buffer_m:g} m to {cell:g} m.",
            DegenerateGeometryWarning,
            stacklevel=3,
        )
        buffer_m = cell

    inside = np.flatnonzero((axis >= lo - buffer_m) & (axis <= hi + buffer_m))
    if inside.size == 0:
        raise NoDataError(
            f"No data in requested extent: {name} [{lo:g}, {hi:g}] with "
            f"{buffer_m:g} m buffer lies outside the mosaic."
        )
    return int(inside[0]), int(inside[-1]) + 1


def resolve_window(
    x_axis: np.ndarray,
    y_axis: np.ndarray,
    xlim: Optional[np.ndarray] = None,
    ylim: Optional[np.ndarray] = None,
    buffer_km: BufferLike = 0.0,
) -> PixelWindow:
    """Compute the pixel window covering a selector extent.

    Parameters
    ----------
    x_axis : np.ndarray
        1D pixel-center x coordinates (meters), monotonic.
    y_axis : np.ndarray
        1D pixel-center y coordinates (meters), ascending or descending.
    xlim : array_like, optional
        x limits or point x coordinates. Only the finite min and max are
        used. None selects every column.
    ylim : array_like, optional
        y limits or point y coordinates. None selects every row.
    buffer_km : float or Tuple[float, float]
        Buffer in kilometers added on every side, per axis if a pair.

    Returns
    -------
    PixelWindow
        Half-open bounds in the axes' stored order. Rows index ``y_axis``
        and columns index ``x_axis``.

    Raises
    ------
    ValidationError
        If the buffer is malformed or a selector has no finite values.
    NoDataError
        If no axis sample lies inside the buffered extent.

    Warns
    -----
    DegenerateGeometryWarning
        When a selector narrower than one grid cell forced the buffer up
        to one cell on that axis.

    Examples
    --------
    >>> x = np.arange(0, 1000, 100.0)
    >>> y = np.arange(900, -100, -100.0)
    >>> resolve_window(x, y, [250, 450], [250, 450])
    PixelWindow(row_start=5, col_start=3, row_end=7, col_end=5)
    """
    x_axis = np.asarray(x_axis, dtype=np.float64)
    y_axis = np.asarray(y_axis, dtype=np.float64)
    if x_axis.ndim != 1 or y_axis.ndim != 1:
        raise ValidationError("x_axis and y_axis must be 1D arrays")

    bx, by = normalize_buffer(buffer_km)
    c0, c1 = _axis_range(x_axis, xlim, bx * 1000.0, 'xlim')
    r0, r1 = _axis_range(y_axis, ylim, by * 1000.0, 'ylim')

    window = PixelWindow(r0, c0, r1, c1)
    logger.debug("Resolved window %s", window)
    return window
