# -*- coding: utf-8 -*-
"""
Streamline Tracer - Adaptive Runge-Kutta-Fehlberg 4(5) path integration.

Traces the path of a particle through a steady velocity field. The tracer
integrates the unit direction field rather than the velocity itself, so
the independent variable is arc length in meters and step sizes can be
bounded in grid cells regardless of flow speed.

Each step evaluates the six Fehlberg stages, compares the 4th and 5th
order solutions and adapts the step length to keep the local error below
a tolerance. Tracing stops when the path leaves the valid field, the
direction becomes undefined (zero speed), or the vertex cap is reached.

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
2026-10-14

Modified
--------
2026-10-17
"""

# Standard library
import logging
import math
from typing import Tuple

# Third-party
import numpy as np

# ICEVEL internal
from icevel.config import (
    TRACER_INITIAL_STEP,
    TRACER_MAX_STEP,
    TRACER_MAX_VERTICES,
    TRACER_MIN_STEP,
)
from icevel.exceptions import ValidationError
from icevel.flow.field import VelocityField

logger = logging.getLogger(__name__)

# Butcher tableau for Runge-Kutta-Fehlberg 4(5)
_A = (
    (),
    (1.0 / 4.0,),
    (3.0 / 32.0, 9.0 / 32.0),
    (1932.0 / 2197.0, -7200.0 / 2197.0, 7296.0 / 2197.0),
    (439.0 / 216.0, -8.0, 3680.0 / 513.0, -845.0 / 4104.0),
    (-8.0 / 27.0, 2.0, -3544.0 / 2565.0, 1859.0 / 4104.0, -11.0 / 40.0),
)
_B4 = (25.0 / 216.0, 0.0, 1408.0 / 2565.0, 2197.0 / 4104.0, -1.0 / 5.0, 0.0)
_B5 = (16.0 / 135.0, 0.0, 6656.0 / 12825.0, 28561.0 / 56430.0,
       -9.0 / 50.0, 2.0 / 55.0)

# Speeds (m/yr) below this have no usable direction
_MIN_DIRECTION_SPEED = 1e-6


def _direction(
    field: VelocityField, px: float, py: float, sign: float
) -> Tuple[float, float]:
    """Unit flow direction at a point, NaN where undefined."""
    u, v = field.sample_point(px, py)
    s = math.hypot(u, v)
    if not s > _MIN_DIRECTION_SPEED:
        return math.nan, math.nan
    return sign * u / s, sign * v / s


def _rkf45_step(
    field: VelocityField, px: float, py: float, h: float, sign: float
) -> Tuple[float, float, float]:
    """One Fehlberg step of length ``h``.

    Returns
    -------
    Tuple[float, float, float]
        5th-order position and the 4(5) error estimate in meters. All NaN
        if any stage left the valid field.
    """
    ku = []
    kv = []
    for a_row in _A:
        sx = px + h * sum(a * k for a, k in zip(a_row, ku))
        sy = py + h * sum(a * k for a, k in zip(a_row, kv))
        du, dv = _direction(field, sx, sy, sign)
        if math.isnan(du):
            return math.nan, math.nan, math.nan
        ku.append(du)
        kv.append(dv)

    x4 = px + h * sum(b * k for b, k in zip(_B4, ku))
    y4 = py + h * sum(b * k for b, k in zip(_B4, kv))
    x5 = px + h * sum(b * k for b, k in zip(_B5, ku))
    y5 = py + h * sum(b * k for b, k in zip(_B5, kv))
    return x5, y5, math.hypot(x5 - x4, y5 - y4)


def trace_streamline(
    field: VelocityField,
    x0: float,
    y0: float,
    direction: int = 1,
    initial_step: float = TRACER_INITIAL_STEP,
    min_step: float = TRACER_MIN_STEP,
    max_step: float = TRACER_MAX_STEP,
    max_vertices: int = TRACER_MAX_VERTICES,
    tolerance: float = 1e-3,
) -> Tuple[np.ndarray, np.ndarray]:
    """Trace a streamline from a seed point.

    Parameters
    ----------
    field : VelocityField
        Steady velocity field.
    x0, y0 : float
        Seed position in meters.
    direction : int
        ``1`` follows the flow (downstream), ``-1`` traces against it
        (upstream).
    initial_step, min_step, max_step : float
        Step length bounds in grid cells.
    max_vertices : int
        Maximum number of vertices, seed included.
    tolerance : float
        Allowed local error per step, in grid cells.

    Returns
    -------
    Tuple[np.ndarray, np.ndarray]
        ``(x, y)`` vertices starting at the seed. Only the seed is
        returned when the field is undefined there.

    Raises
    ------
    ValidationError
        If the direction or step bounds are invalid.
    """
    if direction not in (1, -1):
        raise ValidationError(f"direction must be 1 or -1, got {direction}")
    if not 0 < min_step <= initial_step <= max_step:
        raise ValidationError(
            "Step bounds must satisfy 0 < min_step <= initial_step <= "
            f"max_step, got {min_step}, {initial_step}, {max_step}"
        )
    if max_vertices < 1:
        raise ValidationError(f"max_vertices must be >= 1, got {max_vertices}")

    cell = field.cell_size
    h = initial_step * cell
    h_min = min_step * cell
    h_max = max_step * cell
    tol = tolerance * cell
    sign = float(direction)

    xs = [float(x0)]
    ys = [float(y0)]
    px, py = xs[0], ys[0]
    reason = "vertex cap reached"

    while len(xs) < max_vertices:
        nx, ny, err = _rkf45_step(field, px, py, h, sign)

        if math.isnan(err):
            if h > h_min:
                h = max(h / 2.0, h_min)
                continue
            reason = "left valid field"
            break

        if err > tol and h > h_min:
            h = max(h * max(0.1, 0.9 * (tol / err) ** 0.25), h_min)
            continue

        if math.hypot(nx - px, ny - py) < 1e-3 * h_min:
            reason = "stagnated"
            break

        xs.append(nx)
        ys.append(ny)
        px, py = nx, ny
        growth = 5.0 if err == 0.0 else min(5.0, 0.9 * (tol / err) ** 0.2)
        h = min(max(h * growth, h_min), h_max)

    logger.debug(
        "Streamline from (%.1f, %.1f) direction %+d: %d vertices, %s",
        x0, y0, direction, len(xs), reason,
    )
    return np.asarray(xs), np.asarray(ys)
