# -*- coding: utf-8 -*-
"""
Tiled Reductions - Apply a per-pixel reduction over an entire mosaic.

Continental mosaics stacked over many years do not fit in memory.
``tile_apply`` walks the full grid in tiles, loads the year cube of each
tile, reduces it to one value per pixel with a user function and
assembles the results into a single north-up grid.

Usage
-----
    >>> import numpy as np
    >>> from icevel import tile_apply
    >>> trend, x, y = tile_apply(
    ...     'ALA', 'v', range(2014, 2019),
    ...     lambda cube: np.nanstd(cube, axis=2),
    ... )

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
2026-10-17

Modified
--------
2026-10-18
"""

# Standard library
import logging
from concurrent.futures import ThreadPoolExecutor
from pathlib import Path
from typing import Any, Callable, Dict, Optional, Tuple, Union

# Third-party
import numpy as np

# ICEVEL internal
from icevel.config import AXIS_VARIABLES
from icevel.data_prep.base import PixelWindow
from icevel.data_prep.tiler import Tiler
from icevel.exceptions import ProcessingError, ValidationError
from icevel.IO.catalog import MosaicStore, resolve_store
from icevel.loader import YearsLike, decode, normalize_years
from icevel.progress import ProgressCallback, report_progress
from icevel.regions import Region, get_region

logger = logging.getLogger(__name__)

TileFunction = Callable[..., np.ndarray]


def tile_apply(
    region: Union[int, str, Region],
    variable: str,
    years: YearsLike,
    func: TileFunction,
    tile_size: Union[int, Tuple[int, int]] = 1000,
    func_kwargs: Optional[Dict[str, Any]] = None,
    n_workers: int = 1,
    progress_callback: ProgressCallback = None,
    data_dir: Optional[Union[str, Path]] = None,
    store: Optional[MosaicStore] = None,
) -> Tuple[np.ndarray, np.ndarray, np.ndarray]:
    """Reduce a stack of mosaic years pixel by pixel, one tile at a time.

    Parameters
    ----------
    region : int, str or Region
        Region identifier.
    variable : str
        Mosaic variable.
    years : int or Sequence[int]
        Year slots stacked along the third axis of each cube.
    func : callable
        ``func(cube, **func_kwargs)`` where ``cube`` is a float or bool
        ``(rows, cols, n_years)`` array. Must return a ``(rows, cols)``
        array.
    tile_size : int or Tuple[int, int]
        Tile dimensions in pixels.
    func_kwargs : dict, optional
        Extra keyword arguments for ``func``.
    n_workers : int
        Threads processing tiles concurrently.
    progress_callback : callable, optional
        Called with the fraction of tiles completed.
    data_dir : str or Path, optional
        Mosaic directory.
    store : MosaicStore, optional
        Store to read through.

    Returns
    -------
    Tuple[np.ndarray, np.ndarray, np.ndarray]
        ``(result, x, y)``; ``result`` is float64 ``(rows, cols)`` over the
        whole mosaic, north-up, with ``y`` descending.

    Raises
    ------
    ValidationError
        If ``func`` is not callable or the grids of the requested years
        differ.
    ProcessingError
        If ``func`` returns an array that does not match its tile.
    """
    if not callable(func):
        raise ValidationError("func must be callable")
    if n_workers < 1:
        raise ValidationError(f"n_workers must be >= 1, got {n_workers}")
    if variable in AXIS_VARIABLES:
        raise ValidationError(f"'{variable}' is a coordinate axis")
    region = get_region(region)
    year_list = normalize_years(years)
    store = resolve_store(store, data_dir)
    func_kwargs = func_kwargs or {}

    first = year_list[0]
    x = store.read_full_axis(region, first, 'x')
    y = store.read_full_axis(region, first, 'y')
    for year in year_list[1:]:
        if not (
            np.array_equal(store.read_full_axis(region, year, 'x'), x)
            and np.array_equal(store.read_full_axis(region, year, 'y'), y)
        ):
            raise ValidationError(
                f"Mosaic grid for year {year} differs from year {first}"
            )
    infos = [store.variable_info(region, year, variable) for year in year_list]

    tiler = Tiler(y.size, x.size, tile_size=tile_size)
    result = np.full((y.size, x.size), np.nan)
    tiles = tiler.tile_positions()
    logger.info(
        "Applying %s to %s over %d tiles of region %d",
        getattr(func, '__name__', 'function'), variable, len(tiles), region.code,
    )

    def _cube(win: PixelWindow) -> np.ndarray:
        layers = [
            decode(
                store.read_window(
                    region, year, variable,
                    (win.row_start, win.row_end),
                    (win.col_start, win.col_end),
                ),
                info,
            )
            for year, info in zip(year_list, infos)
        ]
        return np.stack(layers, axis=2)

    def _run(win: PixelWindow) -> Tuple[PixelWindow, np.ndarray]:
        out = np.asarray(func(_cube(win), **func_kwargs))
        if out.shape != win.shape:
            raise ProcessingError(
                f"func returned shape {out.shape} for a {win.shape} tile"
            )
        return win, out

    if n_workers > 1 and len(tiles) > 1:
        with ThreadPoolExecutor(max_workers=n_workers) as pool:
            for k, (win, out) in enumerate(pool.map(_run, tiles), start=1):
                result[win.rows, win.cols] = out
                report_progress(progress_callback, k / len(tiles))
    else:
        for k, win in enumerate(tiles, start=1):
            _, out = _run(win)
            result[win.rows, win.cols] = out
            report_progress(progress_callback, k / len(tiles))

    x_out = np.array(x)
    y_out = np.array(y)
    if y.size > 1 and y[-1] > y[0]:
        result = result[::-1]
        y_out = y_out[::-1]
    return np.ascontiguousarray(result), x_out, y_out
