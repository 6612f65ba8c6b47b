# -*- coding: utf-8 -*-
"""
Mosaic Loader - Read a spatial subset of a mosaic variable.

``load_mosaic`` is the main data access entry point. It resolves the
spatial selector into a pixel window, reads that window from each
requested year slot, decodes fill values and CF packing, orients the grid
north-up and optionally attaches latitude/longitude grids.

Usage
-----
    >>> from icevel import load_mosaic
    >>> v, x, y = load_mosaic(1, 'v', xlim=[-3.35e6, -3.25e6],
    ...                       ylim=[2.7e5, 3.6e5], buffer=5)
    >>> v.shape
    (834, 834, 1)

Dependencies
------------
h5py
rasterio
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
2026-10-10

Modified
--------
2026-10-18
"""

# Standard library
import logging
import warnings
from pathlib import Path
from typing import Optional, Sequence, Tuple, Union

# Third-party
import numpy as np

# ICEVEL internal
from icevel.config import (
    AXIS_VARIABLES,
    GEO_GRID_BLOCK_ROWS,
    GEO_GRID_WARN_PIXELS,
    SUMMARY_YEAR,
)
from icevel.data_prep.subset import BufferLike, resolve_window
from icevel.exceptions import LargeGridWarning, ValidationError
from icevel.geolocation.projection import get_projection
from icevel.IO.catalog import MosaicStore, VariableInfo, resolve_store
from icevel.models import MosaicData, SpatialSelector
from icevel.progress import ProgressCallback, report_progress
from icevel.regions import Region, get_region
from icevel.vocabulary import VariableKind

logger = logging.getLogger(__name__)

YearsLike = Union[int, Sequence[int]]


def normalize_years(years: YearsLike) -> Tuple[int, ...]:
    """Validate year slots and return them as a tuple of ints.

    Parameters
    ----------
    years : int or Sequence[int]
        One year or several. 0 selects the summary mosaic.

    Returns
    -------
    Tuple[int, ...]

    Raises
    ------
    ValidationError
        If the sequence is empty or holds non-integer or negative years.
    """
    values = np.atleast_1d(np.asarray(years))
    if values.size == 0:
        raise ValidationError("years must not be empty")
    if values.ndim != 1 or not np.issubdtype(values.dtype, np.number):
        raise ValidationError(f"years must be integers, got {years!r}")
    if np.any(values != np.round(values)) or np.any(values < 0):
        raise ValidationError(
            f"years must be non-negative integers, got {values.tolist()}"
        )
    return tuple(int(v) for v in values)


def decode(raw: np.ndarray, info: VariableInfo) -> np.ndarray:
    """Convert raw stored values into physical values.

    Parameters
    ----------
    raw : np.ndarray
        Values as read from the file.
    info : VariableInfo
        Kind and encoding of the variable.

    Returns
    -------
    np.ndarray
        bool for masks (fill cells become False), otherwise float64 with
        fill cells set to NaN and ``scale_factor``/``add_offset`` applied.
    """
    if info.kind is VariableKind.BOOLEAN:
        if raw.dtype == np.bool_:
            return raw.copy()
        values = np.nan_to_num(raw.astype(np.float64), nan=0.0)
        if info.fill_value is not None:
            values[raw == info.fill_value] = 0.0
        return values != 0

    values = raw.astype(np.float64)
    if info.fill_value is not None:
        values[raw == info.fill_value] = np.nan
    if info.scale_factor != 1.0 or info.add_offset != 0.0:
        values = values * info.scale_factor + info.add_offset
    return values


def load_axes(
    region: Union[int, str, Region],
    year: int = SUMMARY_YEAR,
    data_dir: Optional[Union[str, Path]] = None,
    store: Optional[MosaicStore] = None,
) -> Tuple[np.ndarray, np.ndarray]:
    """Full coordinate axes of a mosaic.

    Parameters
    ----------
    region : int, str or Region
        Region identifier.
    year : int
        Year slot, 0 for the summary mosaic.
    data_dir : str or Path, optional
        Mosaic directory.
    store : MosaicStore, optional
        Store to read through.

    Returns
    -------
    Tuple[np.ndarray, np.ndarray]
        ``(x, y)`` in stored order.
    """
    store = resolve_store(store, data_dir)
    return (
        store.read_full_axis(region, year, 'x'),
        store.read_full_axis(region, year, 'y'),
    )


def _geographic_grid(
    region: Region,
    x: np.ndarray,
    y: np.ndarray,
    progress_callback: ProgressCallback = None,
) -> Tuple[np.ndarray, np.ndarray]:
    """Latitude and longitude of every grid cell, converted in row blocks."""
    rows, cols = y.size, x.size
    if rows * cols > GEO_GRID_WARN_PIXELS:
        warnings.warn(
            f"Converting a {rows} x {cols} grid to geographic coordinates "
            "may be slow and memory intensive. Consider a smaller subset.",
            LargeGridWarning,
            stacklevel=3,
        )
    proj = get_projection(region)
    lat = np.empty((rows, cols), dtype=np.float64)
    lon = np.empty((rows, cols), dtype=np.float64)
    for start in range(0, rows, GEO_GRID_BLOCK_ROWS):
        stop = min(start + GEO_GRID_BLOCK_ROWS, rows)
        xx, yy = np.meshgrid(x, y[start:stop])
        lat[start:stop], lon[start:stop] = proj.xy_to_latlon(xx, yy)
        report_progress(progress_callback, stop / rows)
    return lat, lon


def load_mosaic(
    region: Union[int, str, Region],
    variable: str,
    xlim: Optional[np.ndarray] = None,
    ylim: Optional[np.ndarray] = None,
    latlim: Optional[np.ndarray] = None,
    lonlim: Optional[np.ndarray] = None,
    buffer: BufferLike = 0.0,
    years: YearsLike = SUMMARY_YEAR,
    geo_output: bool = False,
    data_dir: Optional[Union[str, Path]] = None,
    store: Optional[MosaicStore] = None,
    progress_callback: ProgressCallback = None,
) -> MosaicData:
    """Load a spatial subset of a mosaic variable.

    Parameters
    ----------
    region : int, str or Region
        Region identifier.
    variable : str
        Variable name as listed in the mosaic (``'v'``, ``'vx'``,
        ``'landice'``, ...).
    xlim, ylim : array_like, optional
        Native limits or points in meters.
    latlim, lonlim : array_like, optional
        Geographic limits or points in degrees. Cannot be combined with
        ``xlim``/``ylim``.
    buffer : float or Tuple[float, float]
        Extra margin in kilometers around the limits.
    years : int or Sequence[int]
        Year slots to stack; 0 is the summary mosaic.
    geo_output : bool
        Attach ``(rows, cols)`` latitude/longitude grids and unpack as
        ``values, lat, lon``.
    data_dir : str or Path, optional
        Mosaic directory. Defaults to ``$ICEVEL_DATA_DIR``.
    store : MosaicStore, optional
        Store to read through. Defaults to the shared store for
        ``data_dir``.
    progress_callback : callable, optional
        Called with the fraction of geographic conversion completed.

    Returns
    -------
    MosaicData
        ``values`` has shape ``(rows, cols, n_years)``; the year dimension
        is kept even for a single year.

    Raises
    ------
    ValidationError
        For inconsistent selectors, axis variables, or grids that differ
        between years.
    MosaicNotFoundError
        If a requested mosaic file is missing.
    VariableNotFoundError
        If the variable is not in the mosaic.
    NoDataError
        If the selector extent does not overlap the grid.
    """
    selector = SpatialSelector(xlim, ylim, latlim, lonlim, buffer).validate()
    region = get_region(region)
    year_list = normalize_years(years)
    if variable in AXIS_VARIABLES:
        raise ValidationError(
            f"'{variable}' is a coordinate axis; use load_axes()"
        )

    store = resolve_store(store, data_dir)
    first = year_list[0]
    x = store.read_full_axis(region, first, 'x')
    y = store.read_full_axis(region, first, 'y')
    info = store.variable_info(region, first, variable)

    xlim_n, ylim_n = selector.native_limits(region)
    window = resolve_window(x, y, xlim_n, ylim_n, selector.buffer)
    logger.debug(
        "Loading %s from region %d years %s window %s",
        variable, region.code, year_list, window,
    )

    dtype = np.bool_ if info.kind is VariableKind.BOOLEAN else np.float64
    values = np.empty(window.shape + (len(year_list),), dtype=dtype)
    for k, year in enumerate(year_list):
        layer_info = info
        if year != first:
            if not (
                np.array_equal(store.read_full_axis(region, year, 'x'), x)
                and np.array_equal(store.read_full_axis(region, year, 'y'), y)
            ):
                raise ValidationError(
                    f"Mosaic grid for year {year} differs from year {first}; "
                    "years can only be stacked on a common grid."
                )
            layer_info = store.variable_info(region, year, variable)
        raw = store.read_window(
            region, year, variable,
            (window.row_start, window.row_end),
            (window.col_start, window.col_end),
        )
        values[:, :, k] = decode(raw, layer_info)

    x_out = np.array(x[window.cols])
    y_out = np.array(y[window.rows])
    if y.size > 1 and y[-1] > y[0]:
        values = values[::-1]
        y_out = y_out[::-1]

    lat = lon = None
    if geo_output:
        lat, lon = _geographic_grid(region, x_out, y_out, progress_callback)

    return MosaicData(
        values=np.ascontiguousarray(values),
        x=x_out,
        y=y_out,
        variable=variable,
        kind=info.kind,
        region=region,
        years=year_list,
        window=window,
        lat=lat,
        lon=lon,
        units=info.units,
    )
