# -*- coding: utf-8 -*-
"""
Flowlines - Trace ice flow paths through seed points.

For each seed, ``flowline`` traces the path upstream and downstream
through the summary velocity field, trims it to the contiguous stretch of
moving ice around the seed, and resamples it at uniform spacing. Each
resulting ``Streamline`` carries its coordinates, along-path distance
(zero at the seed, negative upstream), speed and travel time.

Seeds are independent: a seed on missing data yields an empty
``Streamline`` without affecting the others, and each path is traced
within ``buffer_km`` of its own seed whatever other seeds share the call.

Usage
-----
    >>> from icevel import flowline
    >>> line = flowline('GRE', 69.1, -49.5)
    >>> line.distance[0], line.distance[-1]
    (-84310.0, 61250.0)

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
2026-10-14

Modified
--------
2026-10-19
"""

# Standard library
import logging
import warnings
from concurrent.futures import ThreadPoolExecutor
from dataclasses import dataclass
from pathlib import Path
from typing import List, Optional, Union

# Third-party
import numpy as np
from scipy.interpolate import PchipInterpolator

# ICEVEL internal
from icevel.config import (
    FLOWLINE_BUFFER_KM,
    FLOWLINE_KEEP_SPEED,
    FLOWLINE_SPACING_M,
    SCREEN_MAX_ERROR_RATIO,
    SCREEN_MIN_COUNT,
    SCREEN_MIN_SPEED,
    SUMMARY_YEAR,
    TRACER_INITIAL_STEP,
    TRACER_MAX_STEP,
    TRACER_MAX_VERTICES,
    TRACER_MIN_STEP,
)
from icevel.data_prep.base import PixelWindow
from icevel.data_prep.subset import resolve_window
from icevel.exceptions import NoDataError, ValidationError, VariableNotFoundError
from icevel.flow.field import VelocityField
from icevel.flow.streamline import trace_streamline
from icevel.geolocation.projection import ArrayLike, native_to_geo, resolve_native
from icevel.interpolation.flux import path_distance
from icevel.interpolation.grid import GridInterpolator
from icevel.IO.catalog import MosaicStore, resolve_store
from icevel.loader import load_mosaic
from icevel.models import MosaicData
from icevel.progress import ProgressCallback, report_progress
from icevel.regions import Region, get_region
from icevel.vocabulary import InterpMethod

logger = logging.getLogger(__name__)


@dataclass
class FlowlineOptions:
    """Tuning parameters for ``flowline``.

    Attributes
    ----------
    buffer_km : float
        Margin around each seed in kilometers. A path stops at the edge
        of its own seed's box.
    spacing : float
        Output vertex spacing in meters.
    keep_speed : float
        Vertices slower than this (m/yr) end the kept stretch.
    screen : bool
        Mask unreliable velocity cells before tracing.
    min_speed : float
        Screening: cells slower than this (m/yr) are masked.
    min_count : int
        Screening: cells with fewer observations are masked.
    max_error_ratio : float
        Screening: cells with ``v_error > max_error_ratio * v`` are
        masked.
    grounding_line : bool
        Reference distance and travel time to the last grounded vertex
        instead of the seed.
    year : int
        Year slot of the velocity field, 0 for the summary mosaic.
    initial_step, min_step, max_step : float
        Tracer step bounds in grid cells.
    max_vertices : int
        Tracer vertex cap per direction.
    tolerance : float
        Tracer local error tolerance in grid cells.
    n_workers : int
        Threads used for multiple seeds.
    """

    buffer_km: float = FLOWLINE_BUFFER_KM
    spacing: float = FLOWLINE_SPACING_M
    keep_speed: float = FLOWLINE_KEEP_SPEED
    screen: bool = True
    min_speed: float = SCREEN_MIN_SPEED
    min_count: int = SCREEN_MIN_COUNT
    max_error_ratio: float = SCREEN_MAX_ERROR_RATIO
    grounding_line: bool = False
    year: int = SUMMARY_YEAR
    initial_step: float = TRACER_INITIAL_STEP
    min_step: float = TRACER_MIN_STEP
    max_step: float = TRACER_MAX_STEP
    max_vertices: int = TRACER_MAX_VERTICES
    tolerance: float = 1e-3
    n_workers: int = 1

    def validate(self) -> 'FlowlineOptions':
        """Check option ranges.

        Raises
        ------
        ValidationError
            Naming the first offending option.
        """
        if not self.spacing > 0:
            raise ValidationError(f"spacing must be positive, got {self.spacing}")
        if not self.buffer_km >= 0:
            raise ValidationError(
                f"buffer_km must be non-negative, got {self.buffer_km}"
            )
        if self.keep_speed < 0:
            raise ValidationError(
                f"keep_speed must be non-negative, got {self.keep_speed}"
            )
        if not 0 < self.min_step <= self.initial_step <= self.max_step:
            raise ValidationError(
                "Step bounds must satisfy 0 < min_step <= initial_step <= "
                "max_step"
            )
        if self.max_vertices < 1:
            raise ValidationError(
                f"max_vertices must be >= 1, got {self.max_vertices}"
            )
        if not self.tolerance > 0:
            raise ValidationError(
                f"tolerance must be positive, got {self.tolerance}"
            )
        if self.n_workers < 1:
            raise ValidationError(f"n_workers must be >= 1, got {self.n_workers}")
        return self


@dataclass
class Streamline:
    """One traced flow path, resampled at uniform spacing.

    Attributes
    ----------
    x, y : np.ndarray
        Vertex coordinates in meters, upstream to downstream.
    distance : np.ndarray
        Along-path distance in meters, strictly increasing. Zero at the
        seed (or at the grounding line when so referenced).
    speed : np.ndarray
        Speed at each vertex in m/yr.
    time : np.ndarray
        Travel time in years from the origin, negative upstream.
    seed : Tuple[float, float]
        Seed position in meters.
    lat, lon : np.ndarray, optional
        Geographic vertex coordinates when the seed was geographic.
    """

    x: np.ndarray
    y: np.ndarray
    distance: np.ndarray
    speed: np.ndarray
    time: np.ndarray
    seed: tuple
    lat: Optional[np.ndarray] = None
    lon: Optional[np.ndarray] = None

    @classmethod
    def empty(cls, x0: float, y0: float, geographic: bool = False) -> 'Streamline':
        """A path with no vertices, for seeds on missing data."""
        nothing = np.zeros(0)
        return cls(
            x=nothing, y=nothing.copy(), distance=nothing.copy(),
            speed=nothing.copy(), time=nothing.copy(),
            seed=(x0, y0),
            lat=nothing.copy() if geographic else None,
            lon=nothing.copy() if geographic else None,
        )

    @property
    def is_empty(self) -> bool:
        return self.x.size == 0

    def __len__(self) -> int:
        return int(self.x.size)


def _screen_mask(
    region: Region,
    window_kwargs: dict,
    store: MosaicStore,
    options: FlowlineOptions,
    shape: tuple,
) -> np.ndarray:
    """Boolean mask of unreliable velocity cells.

    Screening layers are read one at a time and folded into the mask so
    only one of them is held alongside the velocity grids. Layers the
    mosaic lacks are skipped with a warning.
    """
    bad = np.zeros(shape, dtype=bool)

    def _layer(name: str) -> Optional[np.ndarray]:
        try:
            data = load_mosaic(region, name, store=store, **window_kwargs)
        except VariableNotFoundError:
            warnings.warn(
                f"Mosaic has no '{name}' layer; skipping the {name} screen.",
                UserWarning,
                stacklevel=4,
            )
            return None
        return data.values[:, :, 0]

    v = _layer('v')
    if v is not None:
        with np.errstate(invalid='ignore'):
            bad |= v < options.min_speed
        v_error = _layer('v_error')
        if v_error is not None:
            with np.errstate(invalid='ignore'):
                bad |= v_error > options.max_error_ratio * v
        del v_error
    del v

    count = _layer('count')
    if count is not None:
        with np.errstate(invalid='ignore'):
            bad |= count < options.min_count
    del count

    landice = _layer('landice')
    if landice is not None:
        bad |= ~landice
    return bad


def _keep_run(speed: np.ndarray, seed_idx: int, keep_speed: float) -> slice:
    """Contiguous run of vertices faster than ``keep_speed`` around the seed."""
    with np.errstate(invalid='ignore'):
        fast = speed > keep_speed
    if not fast[seed_idx]:
        return slice(seed_idx, seed_idx)
    start = seed_idx
    while start > 0 and fast[start - 1]:
        start -= 1
    stop = seed_idx + 1
    while stop < fast.size and fast[stop]:
        stop += 1
    return slice(start, stop)


def _travel_time(distance: np.ndarray, speed: np.ndarray, origin: int) -> np.ndarray:
    """Cumulative travel time in years, zero at index ``origin``."""
    if distance.size < 2:
        return np.zeros(distance.size)
    mean_speed = 0.5 * (speed[1:] + speed[:-1])
    with np.errstate(divide='ignore', invalid='ignore'):
        dt = np.diff(distance) / mean_speed
    t = np.concatenate([[0.0], np.cumsum(dt)])
    return t - t[origin]


def _seed_window(
    x_axis: np.ndarray,
    y_axis: np.ndarray,
    x0: float,
    y0: float,
    buffer_km: float,
) -> Optional[PixelWindow]:
    """Tracing domain of one seed, None when it cannot hold a path."""
    if not (np.isfinite(x0) and np.isfinite(y0)):
        return None
    try:
        win = resolve_window(x_axis, y_axis, [x0], [y0], buffer_km)
    except NoDataError:
        logger.debug("Seed (%.1f, %.1f) lies outside the mosaic", x0, y0)
        return None
    if min(win.shape) < 2:
        return None
    return win


def _trace_seed(
    field: VelocityField,
    x0: float,
    y0: float,
    options: FlowlineOptions,
    floating: Optional[GridInterpolator],
) -> Streamline:
    """Trace, trim and resample the flowline through one seed."""
    if not (np.isfinite(x0) and np.isfinite(y0)):
        return Streamline.empty(x0, y0)
    if not np.isfinite(np.hypot(*field.sample_point(x0, y0))):
        logger.debug("Seed (%.1f, %.1f) has no velocity", x0, y0)
        return Streamline.empty(x0, y0)

    trace_kwargs = dict(
        initial_step=options.initial_step,
        min_step=options.min_step,
        max_step=options.max_step,
        max_vertices=options.max_vertices,
        tolerance=options.tolerance,
    )
    xu, yu = trace_streamline(field, x0, y0, direction=-1, **trace_kwargs)
    xd, yd = trace_streamline(field, x0, y0, direction=1, **trace_kwargs)
    px = np.concatenate([xu[::-1], xd[1:]])
    py = np.concatenate([yu[::-1], yd[1:]])
    seed_idx = xu.size - 1

    run = _keep_run(field.speed(px, py), seed_idx, options.keep_speed)
    px, py = px[run], py[run]
    if px.size == 0:
        return Streamline.empty(x0, y0)
    seed_idx -= run.start

    d = path_distance(px, py)
    unique = np.concatenate([[True], np.diff(d) > 0])
    if not unique.all():
        seed_idx = int(np.count_nonzero(unique[:seed_idx + 1])) - 1
        px, py, d = px[unique], py[unique], d[unique]
    if px.size == 1:
        dist = np.zeros(1)
        xs, ys = px, py
    else:
        d_seed = d[seed_idx]
        k0 = int(np.ceil((d[0] - d_seed) / options.spacing))
        k1 = int(np.floor((d[-1] - d_seed) / options.spacing))
        dist = np.arange(k0, k1 + 1) * options.spacing
        xs = PchipInterpolator(d, px)(d_seed + dist)
        ys = PchipInterpolator(d, py)(d_seed + dist)
        # Resampling can round the seed sample off the traced path
        xs[dist == 0] = x0
        ys[dist == 0] = y0

    speed = field.speed(xs, ys)
    origin = int(np.argmin(np.abs(dist)))
    if options.grounding_line and floating is not None:
        grounded = np.flatnonzero(~floating(xs, ys))
        if grounded.size:
            origin = int(grounded[-1])
            dist = dist - dist[origin]
        else:
            logger.debug("Flowline from (%.1f, %.1f) is entirely floating", x0, y0)

    return Streamline(
        x=xs,
        y=ys,
        distance=dist,
        speed=speed,
        time=_travel_time(dist, speed, origin),
        seed=(x0, y0),
    )


def flowline(
    region: Union[int, str, Region],
    a: ArrayLike,
    b: ArrayLike,
    geographic: Optional[bool] = None,
    options: Optional[FlowlineOptions] = None,
    data_dir: Optional[Union[str, Path]] = None,
    store: Optional[MosaicStore] = None,
    progress_callback: ProgressCallback = None,
) -> Union[Streamline, List[Streamline]]:
    """Trace flowlines through one or more seed points.

    Parameters
    ----------
    region : int, str or Region
        Region identifier.
    a, b : array_like
        Seed ``lat, lon`` in degrees or ``x, y`` in meters.
    geographic : bool, optional
        Force the coordinate mode; guessed with ``is_latlon`` when None.
    options : FlowlineOptions, optional
        Tracing and screening parameters.
    data_dir : str or Path, optional
        Mosaic directory.
    store : MosaicStore, optional
        Store to read through.
    progress_callback : callable, optional
        Called with the fraction of seeds completed.

    Returns
    -------
    Streamline or List[Streamline]
        A single ``Streamline`` for scalar seed input, otherwise one per
        seed in flattened input order. Geographic input adds ``lat`` and
        ``lon`` to every path.

    Raises
    ------
    ValidationError
        If inputs or options are invalid.
    MosaicNotFoundError
        If the velocity mosaic is missing.
    """
    options = (options or FlowlineOptions()).validate()
    region = get_region(region)
    scalar = np.ndim(a) == 0 and np.ndim(b) == 0
    x, y, was_geographic = resolve_native(region, a, b, geographic)
    seeds_x = np.atleast_1d(x).ravel()
    seeds_y = np.atleast_1d(y).ravel()
    store = resolve_store(store, data_dir)

    finite = np.isfinite(seeds_x) & np.isfinite(seeds_y)
    if not finite.any():
        lines = [Streamline.empty(sx, sy, was_geographic)
                 for sx, sy in zip(seeds_x, seeds_y)]
        return lines[0] if scalar else lines

    window_kwargs = dict(
        xlim=seeds_x[finite],
        ylim=seeds_y[finite],
        buffer=options.buffer_km,
        years=options.year,
    )
    vx_data: MosaicData = load_mosaic(region, 'vx', store=store, **window_kwargs)
    vy_data = load_mosaic(region, 'vy', store=store, **window_kwargs)
    vx = vx_data.values[:, :, 0].copy()
    vy = vy_data.values[:, :, 0].copy()

    if options.screen:
        bad = _screen_mask(region, window_kwargs, store, options, vx.shape)
        vx[bad] = np.nan
        vy[bad] = np.nan
        logger.debug(
            "Screening masked %d of %d cells", int(bad.sum()), vx.size
        )
        del bad

    floating = None
    if options.grounding_line:
        fl = load_mosaic(region, 'floatingice', store=store, **window_kwargs)
        floating = GridInterpolator(
            fl.x, fl.y, fl.values[:, :, 0],
            method=InterpMethod.NEAREST, fill_value=0.0,
        )

    n = seeds_x.size
    windows = [
        _seed_window(vx_data.x, vx_data.y, sx, sy, options.buffer_km)
        for sx, sy in zip(seeds_x, seeds_y)
    ]
    done = []

    def _run(k: int) -> Streamline:
        x0, y0 = float(seeds_x[k]), float(seeds_y[k])
        win = windows[k]
        if win is None:
            line = Streamline.empty(x0, y0)
        else:
            field = VelocityField(
                vx_data.x[win.cols], vx_data.y[win.rows],
                vx[win.rows, win.cols], vy[win.rows, win.cols],
            )
            line = _trace_seed(field, x0, y0, options, floating)
        done.append(k)
        report_progress(progress_callback, len(done) / n)
        return line

    if options.n_workers > 1 and n > 1:
        with ThreadPoolExecutor(max_workers=options.n_workers) as pool:
            lines = list(pool.map(_run, range(n)))
    else:
        lines = [_run(k) for k in range(n)]

    if was_geographic:
        for line in lines:
            if line.is_empty:
                line.lat, line.lon = np.zeros(0), np.zeros(0)
            else:
                line.lat, line.lon = native_to_geo(region, line.x, line.y)

    logger.info(
        "Traced %d flowlines in region %d (%d empty)",
        n, region.code, sum(line.is_empty for line in lines),
    )
    return lines[0] if scalar else lines
