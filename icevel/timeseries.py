# -*- coding: utf-8 -*-
"""
Time Series - Synthesize velocity histories at a point.

Two models are provided. ``timeseries`` combines the annual mosaics with
the seasonal sinusoid of the summary mosaic to estimate velocity at any
time at a single location. ``interannual`` works the other way round,
reducing scattered image-pair velocities to error-weighted annual means
and interpolating those to requested times.

The seasonal model is a sinusoid with amplitude ``A`` and phase given as
the day of year of maximum velocity, optionally with an offset, a linear
trend and a quadratic term in decimal years.

Usage
-----
    >>> from datetime import datetime
    >>> from icevel import timeseries
    >>> t = [datetime(2015, 3, 1), datetime(2017, 9, 1)]
    >>> v, v_err = timeseries(1, 60.08343, -140.46707, t)

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
2026-10-16

Modified
--------
2026-10-18
"""

# Standard library
import logging
from datetime import datetime
from pathlib import Path
from typing import Any, Optional, Tuple, Union

# Third-party
import numpy as np
from scipy.interpolate import Akima1DInterpolator, PchipInterpolator

# ICEVEL internal
from icevel.config import SUMMARY_YEAR
from icevel.dates import decimal_year
from icevel.exceptions import ValidationError
from icevel.geolocation.projection import ArrayLike
from icevel.geolocation.utils import _is_scalar
from icevel.interpolation.seasonal import DAYS_PER_YEAR
from icevel.interpolator import interp
from icevel.IO.catalog import MosaicStore, resolve_store
from icevel.regions import Region, get_region
from icevel.vocabulary import InterpMethod

logger = logging.getLogger(__name__)

# Half of a year in days, for annual windows centered on the solstice
_HALF_YEAR_DAYS = 182.62


def sineval(
    amp: ArrayLike,
    phase: ArrayLike,
    t: Any,
    offset: Optional[ArrayLike] = None,
    trend: Optional[ArrayLike] = None,
    quad: Optional[ArrayLike] = None,
) -> np.ndarray:
    """Evaluate the seasonal sinusoid model.

    ``y = A sin(2 pi (yr + 0.25 - phase / 365.25)) + C + trend yr + quad yr^2``

    Parameters
    ----------
    amp : array_like
        Amplitude ``A``.
    phase : array_like
        Day of year of the maximum.
    t : datetime, np.datetime64, float or array_like
        Evaluation times; numbers are decimal years.
    offset, trend, quad : array_like, optional
        Constant, linear and quadratic terms. Omitted terms are zero.

    Returns
    -------
    np.ndarray
        Broadcast of the parameters against ``t``.

    Examples
    --------
    >>> sineval(10.0, 0.0, 2020.0)
    array(10.)
    """
    yr = np.asarray(decimal_year(t), dtype=np.float64)
    ph = 0.25 - np.asarray(phase, dtype=np.float64) / DAYS_PER_YEAR
    y = np.asarray(amp, dtype=np.float64) * np.sin((yr + ph) * 2.0 * np.pi)
    if offset is not None:
        y = y + np.asarray(offset, dtype=np.float64)
    if trend is not None:
        y = y + np.asarray(trend, dtype=np.float64) * yr
    if quad is not None:
        y = y + np.asarray(quad, dtype=np.float64) * yr ** 2
    return y


def _annual_curve(years: np.ndarray, values: np.ndarray, ti: np.ndarray) -> np.ndarray:
    """Modified Akima through mid-year postings, extrapolated past the ends."""
    posts = years + 0.5
    good = np.isfinite(values)
    if good.sum() == 0:
        return np.full(ti.shape, np.nan)
    if good.sum() == 1:
        return np.full(ti.shape, values[good][0])
    curve = Akima1DInterpolator(posts[good], values[good], method="makima")
    return curve(ti, extrapolate=True)


def timeseries(
    region: Union[int, str, Region],
    a: float,
    b: float,
    t: Any,
    geographic: Optional[bool] = None,
    data_dir: Optional[Union[str, Path]] = None,
    store: Optional[MosaicStore] = None,
) -> Tuple[np.ndarray, np.ndarray]:
    """Estimate velocity and its error at one location over time.

    The annual ``v`` mosaics are sampled (nearest neighbor) for every year
    spanned by ``t``, posted at mid-year and interpolated with modified
    Akima. The seasonal sinusoid from the summary ``v_amp``/``v_phase`` is
    added on top. The error combines the annual ``v_error`` curve and
    ``v_amp_error`` in quadrature.

    Parameters
    ----------
    region : int, str or Region
        Region identifier.
    a, b : float
        ``lat, lon`` in degrees or ``x, y`` in meters of a single point.
    t : datetime, np.datetime64, float or array_like
        Times of interest; numbers are decimal years.
    geographic : bool, optional
        Force the coordinate mode; guessed with ``is_latlon`` when None.
    data_dir : str or Path, optional
        Mosaic directory.
    store : MosaicStore, optional
        Store to read through.

    Returns
    -------
    Tuple[np.ndarray, np.ndarray]
        ``(v, v_error)`` in m/yr, shaped like ``t``. Times beyond the
        first or last mid-year posting are extrapolated.

    Raises
    ------
    ValidationError
        If the location is not a single point.
    MosaicNotFoundError
        If an annual mosaic for a spanned year is missing.
    """
    if not (_is_scalar(a) and _is_scalar(b)):
        raise ValidationError("timeseries requires a single location")
    region = get_region(region)
    store = resolve_store(store, data_dir)

    ti = np.asarray(decimal_year(t), dtype=np.float64)
    if not np.all(np.isfinite(ti)):
        raise ValidationError("Times must be finite")
    years = np.arange(int(np.floor(ti.min())), int(np.floor(ti.max())) + 1)
    sample = dict(geographic=geographic, method=InterpMethod.NEAREST, store=store)

    v_annual = np.atleast_1d(interp(region, 'v', a, b, years=years, **sample))
    v_amp = interp(region, 'v_amp', a, b, years=SUMMARY_YEAR, **sample)
    v_phase = interp(region, 'v_phase', a, b, years=SUMMARY_YEAR, **sample)
    logger.debug(
        "Time series at (%s, %s) over years %d-%d",
        a, b, years[0], years[-1],
    )

    v = _annual_curve(years, np.reshape(v_annual, -1), ti) + sineval(v_amp, v_phase, ti)

    v_err_annual = np.atleast_1d(interp(region, 'v_error', a, b, years=years, **sample))
    v_amp_error = interp(region, 'v_amp_error', a, b, years=SUMMARY_YEAR, **sample)
    v_error = np.hypot(_annual_curve(years, np.reshape(v_err_annual, -1), ti), v_amp_error)
    return v, v_error


def _solstice(year: int) -> float:
    return decimal_year(datetime(year, 6, 21))


def interannual(
    t: Any,
    v: ArrayLike,
    v_err: ArrayLike,
    ti: Optional[Any] = None,
) -> Tuple[np.ndarray, float]:
    """Reduce image-pair velocities to annual means and interpolate them.

    Observations are weighted by ``1 / v_err**2`` and averaged within one
    year windows centered on June 21. Each annual mean is posted at its
    weighted mean time, and the annual means are interpolated to ``ti``
    with PCHIP, which extrapolates beyond the first and last posting.

    Parameters
    ----------
    t : array_like
        Observation times, shape ``(N,)`` or ``(N, 2)`` for image pair
        start and end times (the midpoint is used). Datetimes or decimal
        years.
    v, v_err : array_like
        ``(N,)`` velocities and their errors. Non-finite pairs are ignored.
    ti : array_like, optional
        Times to solve for. Defaults to the observation times.

    Returns
    -------
    Tuple[np.ndarray, float]
        ``(vi, v_std)``: interpolated velocities shaped like ``ti`` and the
        sample standard deviation of the annual means. ``vi`` is all NaN
        when fewer than two annual means exist.

    Raises
    ------
    ValidationError
        If the input lengths disagree or ``t`` has more than two columns.
    """
    tm = np.asarray(decimal_year(t), dtype=np.float64)
    if tm.ndim == 2:
        if tm.shape[1] != 2:
            raise ValidationError(
                f"t must be (N,) or (N, 2) image pair times, got {tm.shape}"
            )
        tm = tm.mean(axis=1)
    elif tm.ndim != 1:
        raise ValidationError(f"t must be (N,) or (N, 2), got {tm.shape}")
    v = np.asarray(v, dtype=np.float64).reshape(-1)
    v_err = np.asarray(v_err, dtype=np.float64).reshape(-1)
    if not (tm.size == v.size == v_err.size):
        raise ValidationError(
            f"t, v and v_err lengths differ: {tm.size}, {v.size}, {v_err.size}"
        )

    ti = tm.copy() if ti is None else np.asarray(decimal_year(ti), dtype=np.float64)

    good = np.isfinite(tm) & np.isfinite(v) & np.isfinite(v_err) & (v_err > 0)
    tm, v, w = tm[good], v[good], 1.0 / v_err[good] ** 2
    if tm.size == 0:
        return np.full(ti.shape, np.nan), float('nan')

    half = _HALF_YEAR_DAYS / DAYS_PER_YEAR
    first = int(np.floor(tm.min() - half))
    last = int(np.floor(tm.max() + half))
    t_yearly = []
    v_yearly = []
    for year in range(first, last + 1):
        center = _solstice(year)
        inside = (tm >= center - half) & (tm <= center + half)
        if not inside.any():
            continue
        wk = w[inside]
        v_yearly.append(np.sum(wk * v[inside]) / np.sum(wk))
        t_yearly.append(np.sum(wk * tm[inside]) / np.sum(wk))

    v_yearly = np.asarray(v_yearly)
    t_yearly = np.asarray(t_yearly)
    v_std = float(np.std(v_yearly, ddof=1)) if v_yearly.size > 1 else float('nan')

    order = np.argsort(t_yearly)
    t_yearly, v_yearly = t_yearly[order], v_yearly[order]
    distinct = np.concatenate([[True], np.diff(t_yearly) > 0])
    if distinct.sum() < 2:
        logger.debug("Fewer than two annual means; interannual curve undefined")
        return np.full(ti.shape, np.nan), v_std
    vi = PchipInterpolator(t_yearly[distinct], v_yearly[distinct])(ti)
    return vi, v_std
