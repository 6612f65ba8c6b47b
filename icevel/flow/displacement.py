# -*- coding: utf-8 -*-
"""
Displacement - Advect points through the summary velocity field.

``displace`` moves points forward (or backward, for negative time) by
explicit Euler integration in steps of at most one year, sampling the
velocity at the current position each step. The scheme is first order:
errors in the velocity field and in the step accumulate with integration
time, so long integrations should be treated with caution. For paths
rather than end points use ``flowline``.

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
2026-10-15

Modified
--------
2026-10-18
"""

# Standard library
import logging
import warnings
from pathlib import Path
from typing import Optional, Tuple, Union

# Third-party
import numpy as np

# ICEVEL internal
from icevel.config import (
    DISPLACEMENT_MAX_ITERATIONS,
    DISPLACEMENT_MAX_YEARS,
    DISPLACEMENT_WARN_YEARS,
    SUMMARY_YEAR,
)
from icevel.exceptions import (
    LongIntegrationWarning,
    OutOfRangeError,
    ProcessingError,
)
from icevel.geolocation.projection import ArrayLike, native_to_geo, resolve_native
from icevel.geolocation.utils import _is_scalar
from icevel.interpolator import interp
from icevel.IO.catalog import MosaicStore, resolve_store
from icevel.regions import Region, get_region

logger = logging.getLogger(__name__)


def displace(
    region: Union[int, str, Region],
    a: ArrayLike,
    b: ArrayLike,
    dt_years: ArrayLike,
    geographic: Optional[bool] = None,
    year: int = SUMMARY_YEAR,
    max_iterations: int = DISPLACEMENT_MAX_ITERATIONS,
    data_dir: Optional[Union[str, Path]] = None,
    store: Optional[MosaicStore] = None,
) -> Tuple[Union[float, np.ndarray], Union[float, np.ndarray]]:
    """Displace points by the ice flow over a time span.

    Parameters
    ----------
    region : int, str or Region
        Region identifier.
    a, b : array_like
        Start ``lat, lon`` in degrees or ``x, y`` in meters.
    dt_years : array_like
        Time span in years; negative values integrate backward. Broadcast
        against the points.
    geographic : bool, optional
        Force the coordinate mode; guessed with ``is_latlon`` when None.
    year : int
        Year slot of the velocity field, 0 for the summary mosaic.
    max_iterations : int
        Maximum number of Euler steps.
    data_dir : str or Path, optional
        Mosaic directory.
    store : MosaicStore, optional
        Store to read through.

    Returns
    -------
    Tuple
        End positions in the same coordinate mode as the input, shaped
        like the broadcast of the points and ``dt_years``. Floats for
        all-scalar input. Points that reach missing data become NaN.

    Raises
    ------
    OutOfRangeError
        If any ``|dt_years|`` exceeds 1000 years. Checked before any I/O.
    ProcessingError
        If the integration needs more than ``max_iterations`` steps.

    Warns
    -----
    LongIntegrationWarning
        If any ``|dt_years|`` exceeds 365 years.

    Examples
    --------
    >>> x1, y1 = displace(1, -3298427.76, 315689.27, 10.0, geographic=False)
    >>> x0, y0 = displace(1, x1, y1, -10.0, geographic=False)
    """
    dt = np.asarray(dt_years, dtype=np.float64)
    if np.any(np.abs(dt) > DISPLACEMENT_MAX_YEARS):
        raise OutOfRangeError(
            f"Displacement of more than {DISPLACEMENT_MAX_YEARS:g} years "
            "requested. Check that dt_years is in years, not days; for "
            "long paths use flowline instead."
        )
    if np.any(np.abs(dt) > DISPLACEMENT_WARN_YEARS):
        warnings.warn(
            f"Solving for more than {DISPLACEMENT_WARN_YEARS:g} years of "
            "displacement. If dt_years was entered in days, divide by 365.",
            LongIntegrationWarning,
            stacklevel=2,
        )

    region = get_region(region)
    scalar = _is_scalar(a) and _is_scalar(b) and dt.ndim == 0
    x0, y0, was_geographic = resolve_native(region, a, b, geographic)
    x1, y1, remaining = (
        np.array(arr, dtype=np.float64)
        for arr in np.broadcast_arrays(x0, y0, dt)
    )
    store = resolve_store(store, data_dir)

    steps = 0
    while np.any(np.abs(remaining) > 0):
        if steps >= max_iterations:
            raise ProcessingError(
                f"Displacement did not finish within {max_iterations} "
                f"steps; {np.max(np.abs(remaining)):g} years remain."
            )
        step = np.clip(remaining, -1.0, 1.0)
        vx = np.asarray(interp(region, 'vx', x1, y1, years=year,
                               geographic=False, store=store))
        vy = np.asarray(interp(region, 'vy', x1, y1, years=year,
                               geographic=False, store=store))
        x1 = x1 + vx.reshape(x1.shape) * step
        y1 = y1 + vy.reshape(y1.shape) * step
        remaining = remaining - step
        steps += 1

    logger.debug("Displacement finished after %d steps", steps)

    if was_geographic:
        out_a, out_b = native_to_geo(region, x1, y1)
    else:
        out_a, out_b = x1, y1
    if scalar:
        return float(out_a), float(out_b)
    return out_a, out_b
