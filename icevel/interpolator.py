# -*- coding: utf-8 -*-
"""
Point Interpolator - Sample mosaic variables at arbitrary locations.

``interp`` loads only the window surrounding the query points, stacks the
requested years and interpolates each layer. Besides every variable in the
mosaic it accepts the pseudo-variables ``'along'`` and ``'across'``, which
treat the query points as an ordered path and decompose the velocity into
components parallel and perpendicular to it.

Usage
-----
    >>> from icevel import interp
    >>> interp(1, 'v', 60.08343, -140.46707)
    1187.5
    >>> interp(5, 'across', gate_x, gate_y, years=range(2014, 2022))

Dependencies
------------
scipy
pyproj

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
2026-10-18
"""

# Standard library
import logging
from pathlib import Path
from typing import Optional, Tuple, Union

# Third-party
import numpy as np

# ICEVEL internal
from icevel.config import INTERP_BUFFER_KM, SUMMARY_YEAR
from icevel.exceptions import NoDataError
from icevel.geolocation.projection import ArrayLike, resolve_native
from icevel.interpolation.flux import path_heading, project_along_across
from icevel.interpolation.grid import interp2
from icevel.IO.catalog import MosaicStore, resolve_store
from icevel.loader import YearsLike, load_mosaic, normalize_years
from icevel.regions import Region, get_region
from icevel.vocabulary import FluxComponent, InterpMethod, VariableKind

logger = logging.getLogger(__name__)


def _sample(
    region: Region,
    variable: str,
    x: np.ndarray,
    y: np.ndarray,
    years: Tuple[int, ...],
    method: Optional[Union[str, InterpMethod]],
    store: MosaicStore,
) -> np.ndarray:
    """Interpolate one variable at native points, shape ``x.shape + (n_years,)``."""
    info = store.variable_info(region, years[0], variable)
    is_bool = info.kind is VariableKind.BOOLEAN
    if method is None:
        method = InterpMethod.NEAREST if is_bool else InterpMethod.LINEAR
    method = InterpMethod.parse(method)

    shape = x.shape + (len(years),)
    x = x.ravel()
    y = y.ravel()
    if is_bool:
        out = np.zeros((x.size, len(years)), dtype=bool)
    else:
        out = np.full((x.size, len(years)), np.nan)

    finite = np.isfinite(x) & np.isfinite(y)
    if not finite.any():
        return out.reshape(shape)

    try:
        data = load_mosaic(
            region, variable,
            xlim=x[finite], ylim=y[finite],
            buffer=INTERP_BUFFER_KM,
            years=years,
            store=store,
        )
    except NoDataError:
        logger.debug("All query points for %s fall outside the mosaic", variable)
        return out.reshape(shape)

    out[finite] = interp2(
        data.x, data.y, data.values, x[finite], y[finite],
        method=method,
        fill_value=0.0 if is_bool else np.nan,
    )
    return out.reshape(shape)


def interp(
    region: Union[int, str, Region],
    variable: str,
    a: ArrayLike,
    b: ArrayLike,
    years: YearsLike = SUMMARY_YEAR,
    method: Optional[Union[str, InterpMethod]] = None,
    geographic: Optional[bool] = None,
    data_dir: Optional[Union[str, Path]] = None,
    store: Optional[MosaicStore] = None,
) -> Union[float, bool, np.ndarray]:
    """Interpolate a mosaic variable at points or along a path.

    Parameters
    ----------
    region : int, str or Region
        Region identifier.
    variable : str
        Mosaic variable, or ``'along'`` / ``'across'`` for velocity
        components relative to the path through the query points.
    a, b : array_like
        ``lat, lon`` in degrees or ``x, y`` in meters, same shape.
    years : int or Sequence[int]
        Year slots; 0 is the summary mosaic.
    method : str or InterpMethod, optional
        ``'nearest'``, ``'linear'`` or ``'cubic'``. Defaults to linear
        for continuous variables and nearest for masks.
    geographic : bool, optional
        Force the coordinate mode. When None the mode is guessed with
        ``is_latlon``, which can misread projected points close to the
        projection origin.
    data_dir : str or Path, optional
        Mosaic directory.
    store : MosaicStore, optional
        Store to read through.

    Returns
    -------
    float, bool or np.ndarray
        Shape ``a.shape + (n_years,)``. A single point and a single
        year return a Python scalar. Points with non-finite coordinates
        or outside the mosaic are NaN (False for masks).

    Raises
    ------
    ValidationError
        If ``a`` and ``b`` shapes differ or an option is invalid.
    OutOfRangeError
        If geographic input is implausible.
    VariableNotFoundError
        If the variable is not in the mosaic.
    """
    region = get_region(region)
    x, y, _ = resolve_native(region, a, b, geographic)
    year_list = normalize_years(years)
    store = resolve_store(store, data_dir)

    component = variable.lower()
    if component in (FluxComponent.ALONG.value, FluxComponent.ACROSS.value):
        vx = _sample(region, 'vx', x, y, year_list, method, store)
        vy = _sample(region, 'vy', x, y, year_list, method, store)
        along, across = project_along_across(vx, vy, path_heading(x, y))
        out = along if component == FluxComponent.ALONG.value else across
    else:
        out = _sample(region, variable, x, y, year_list, method, store)

    if out.size == 1:
        return out.reshape(-1)[0].item()
    return out
