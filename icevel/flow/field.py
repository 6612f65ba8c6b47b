# -*- coding: utf-8 -*-
"""
Velocity Field - Bilinear sampling of a gridded 2D velocity field.

Holds ``vx``/``vy`` grids on a uniform mesh and evaluates them at
arbitrary points with bilinear weights. Points outside the grid, or whose
surrounding cells hold any NaN, evaluate to NaN so that tracers stop at
data gaps and mosaic edges.

A scalar fast path serves the streamline tracer, which evaluates one point
at a time; a vectorized path serves resampling and speed queries.

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
2026-10-17
"""

# Standard library
import math
from typing import Tuple

# Third-party
import numpy as np

# ICEVEL internal
from icevel.exceptions import ValidationError


class VelocityField:
    """Bilinear sampler over a uniform velocity grid.

    Parameters
    ----------
    x : np.ndarray
        ``(cols,)`` uniformly spaced x coordinates, either direction.
    y : np.ndarray
        ``(rows,)`` uniformly spaced y coordinates, either direction.
    vx, vy : np.ndarray
        ``(rows, cols)`` velocity components in m/yr. NaN marks gaps.

    Raises
    ------
    ValidationError
        If shapes disagree or an axis has fewer than 2 samples.

    Examples
    --------
    >>> field = VelocityField(x, y, vx, vy)
    >>> u, v = field.sample(np.array([x0]), np.array([y0]))
    >>> field.speed(x0, y0)
    """

    def __init__(
        self,
        x: np.ndarray,
        y: np.ndarray,
        vx: np.ndarray,
        vy: np.ndarray,
    ) -> None:
        x = np.asarray(x, dtype=np.float64)
        y = np.asarray(y, dtype=np.float64)
        vx = np.asarray(vx, dtype=np.float64)
        vy = np.asarray(vy, dtype=np.float64)
        if x.ndim != 1 or y.ndim != 1:
            raise ValidationError("x and y must be 1D coordinate vectors")
        if x.size < 2 or y.size < 2:
            raise ValidationError(
                f"Velocity grid needs at least 2x2 cells, got "
                f"{y.size}x{x.size}"
            )
        if vx.shape != (y.size, x.size) or vy.shape != vx.shape:
            raise ValidationError(
                f"vx {vx.shape} and vy {vy.shape} must both match "
                f"(len(y), len(x)) = ({y.size}, {x.size})"
            )

        for name, axis in (('x', x), ('y', y)):
            step = np.diff(axis)
            if not np.allclose(step, step[0], rtol=1e-6, atol=0.0):
                raise ValidationError(f"{name} axis must be uniformly spaced")

        if x[-1] < x[0]:
            x, vx, vy = x[::-1], vx[:, ::-1], vy[:, ::-1]
        if y[-1] < y[0]:
            y, vx, vy = y[::-1], vx[::-1], vy[::-1]

        self.x = np.ascontiguousarray(x)
        self.y = np.ascontiguousarray(y)
        self.vx = np.ascontiguousarray(vx)
        self.vy = np.ascontiguousarray(vy)
        self._x0 = float(x[0])
        self._y0 = float(y[0])
        self._dx = float(x[1] - x[0])
        self._dy = float(y[1] - y[0])
        self._nx = x.size
        self._ny = y.size

    @property
    def cell_size(self) -> float:
        """Smaller of the two grid spacings, in meters."""
        return min(abs(self._dx), abs(self._dy))

    @property
    def shape(self) -> Tuple[int, int]:
        return (self._ny, self._nx)

    def sample_point(self, px: float, py: float) -> Tuple[float, float]:
        """Velocity at a single point.

        Returns
        -------
        Tuple[float, float]
            ``(u, v)``; NaN outside the grid or next to a gap.
        """
        fx = (px - self._x0) / self._dx
        fy = (py - self._y0) / self._dy
        if not (0.0 <= fx <= self._nx - 1 and 0.0 <= fy <= self._ny - 1):
            return math.nan, math.nan
        i = min(int(fx), self._nx - 2)
        j = min(int(fy), self._ny - 2)
        tx = fx - i
        ty = fy - j
        w00 = (1.0 - tx) * (1.0 - ty)
        w01 = tx * (1.0 - ty)
        w10 = (1.0 - tx) * ty
        w11 = tx * ty
        vx, vy = self.vx, self.vy
        u = (w00 * vx[j, i] + w01 * vx[j, i + 1]
             + w10 * vx[j + 1, i] + w11 * vx[j + 1, i + 1])
        v = (w00 * vy[j, i] + w01 * vy[j, i + 1]
             + w10 * vy[j + 1, i] + w11 * vy[j + 1, i + 1])
        return float(u), float(v)

    def sample(
        self, px: np.ndarray, py: np.ndarray
    ) -> Tuple[np.ndarray, np.ndarray]:
        """Velocity at many points.

        Parameters
        ----------
        px, py : np.ndarray
            Query coordinates, same shape.

        Returns
        -------
        Tuple[np.ndarray, np.ndarray]
            ``(u, v)`` shaped like ``px``.
        """
        px = np.asarray(px, dtype=np.float64)
        py = np.asarray(py, dtype=np.float64)
        u = np.full(px.shape, np.nan)
        v = np.full(px.shape, np.nan)

        with np.errstate(invalid='ignore'):
            fx = (px - self._x0) / self._dx
            fy = (py - self._y0) / self._dy
            inside = (
                (fx >= 0) & (fx <= self._nx - 1)
                & (fy >= 0) & (fy <= self._ny - 1)
            )
        if not inside.any():
            return u, v

        fx = fx[inside]
        fy = fy[inside]
        i = np.minimum(fx.astype(np.intp), self._nx - 2)
        j = np.minimum(fy.astype(np.intp), self._ny - 2)
        tx = fx - i
        ty = fy - j
        w00 = (1.0 - tx) * (1.0 - ty)
        w01 = tx * (1.0 - ty)
        w10 = (1.0 - tx) * ty
        w11 = tx * ty
        for grid, out in ((self.vx, u), (self.vy, v)):
            out[inside] = (
                w00 * grid[j, i] + w01 * grid[j, i + 1]
                + w10 * grid[j + 1, i] + w11 * grid[j + 1, i + 1]
            )
        return u, v

    def speed(self, px, py):
        """Velocity magnitude at points, NaN where undefined."""
        u, v = self.sample(px, py)
        return np.hypot(u, v)

    def __repr__(self) -> str:
        return (
            f"VelocityField(shape={self.shape}, "
            f"cell_size={self.cell_size:g})"
        )
