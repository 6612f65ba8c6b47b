# -*- coding: utf-8 -*-
"""
Flux Gate Geometry - Path distance, heading and velocity decomposition.

Decomposes a 2D velocity into components along and across a query path,
as used for flux-gate analysis. The heading at each vertex is the
direction of the path tangent, estimated with centered differences
against cumulative distance.

Sign convention: ``along`` is positive in the direction of travel along
the path. ``across`` is positive to the right of the direction of travel.

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
2026-10-12

Modified
--------
2026-10-16
"""

# Standard library
import warnings
from typing import Tuple

# Third-party
import numpy as np

# ICEVEL internal
from icevel.exceptions import DegenerateGeometryWarning, ValidationError


def path_distance(x: np.ndarray, y: np.ndarray) -> np.ndarray:
    """Cumulative distance along a path, starting at zero.

    Parameters
    ----------
    x, y : np.ndarray
        Vertex coordinates in meters, same shape. Flattened in C order.

    Returns
    -------
    np.ndarray
        1D array of the same length as the flattened path.
    """
    x = np.asarray(x, dtype=np.float64).ravel()
    y = np.asarray(y, dtype=np.float64).ravel()
    if x.shape != y.shape:
        raise ValidationError(
            f"x {x.shape} and y {y.shape} must have the same shape"
        )
    if x.size == 0:
        return np.zeros(0)
    return np.concatenate([[0.0], np.cumsum(np.hypot(np.diff(x), np.diff(y)))])


def path_heading(x: np.ndarray, y: np.ndarray) -> np.ndarray:
    """Tangent direction of a path at each vertex.

    Parameters
    ----------
    x, y : np.ndarray
        Vertex coordinates in meters, same shape.

    Returns
    -------
    np.ndarray
        Heading in radians counterclockwise from +x, shaped like ``x``.
        NaN where the tangent is undefined (single vertex or repeated
        vertices).

    Warns
    -----
    DegenerateGeometryWarning
        If any heading is undefined.
    """
    shape = np.shape(x)
    d = path_distance(x, y)
    xf = np.asarray(x, dtype=np.float64).ravel()
    yf = np.asarray(y, dtype=np.float64).ravel()

    if d.size < 2 or not np.all(np.diff(d) > 0):
        theta = np.full(d.size, np.nan)
        if d.size >= 2:
            ok = _strictly_increasing_run(d)
            if ok.sum() >= 2:
                theta[ok] = _heading(xf[ok], yf[ok], d[ok])
        warnings.warn(
            "Path heading is undefined for a single point or repeated "
            "vertices; along/across components are NaN there.",
            DegenerateGeometryWarning,
            stacklevel=2,
        )
        return theta.reshape(shape)
    return _heading(xf, yf, d).reshape(shape)


def _strictly_increasing_run(d: np.ndarray) -> np.ndarray:
    """Mask keeping the first vertex of every run of repeated positions."""
    keep = np.ones(d.size, dtype=bool)
    keep[1:] = np.diff(d) > 0
    return keep


def _heading(x: np.ndarray, y: np.ndarray, d: np.ndarray) -> np.ndarray:
    return np.arctan2(np.gradient(y, d), np.gradient(x, d))


def project_along_across(
    vx: np.ndarray, vy: np.ndarray, theta: np.ndarray
) -> Tuple[np.ndarray, np.ndarray]:
    """Rotate velocity components into path coordinates.

    Parameters
    ----------
    vx, vy : np.ndarray
        Velocity components. May carry trailing dimensions beyond the
        shape of ``theta`` (one layer per year).
    theta : np.ndarray
        Path heading in radians.

    Returns
    -------
    Tuple[np.ndarray, np.ndarray]
        ``(along, across)`` with
        ``along = vx cos(theta) + vy sin(theta)`` and
        ``across = vx sin(theta) - vy cos(theta)``.

    Examples
    --------
    A path heading due +x sees ``along = vx`` and ``across = -vy``:

    >>> project_along_across(np.array([3.0]), np.array([4.0]), np.array([0.0]))
    (array([3.]), array([-4.]))
    """
    vx = np.asarray(vx, dtype=np.float64)
    vy = np.asarray(vy, dtype=np.float64)
    theta = np.asarray(theta, dtype=np.float64)
    extra = vx.ndim - theta.ndim
    if extra > 0:
        theta = theta.reshape(theta.shape + (1,) * extra)
    cos, sin = np.cos(theta), np.sin(theta)
    return vx * cos + vy * sin, vx * sin - vy * cos
