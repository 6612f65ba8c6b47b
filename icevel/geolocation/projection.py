# -*- coding: utf-8 -*-
"""
Region Projection - Geographic <-> native map coordinates per ITS_LIVE region.

Provides ``RegionProjection``, which wraps a pair of pyproj ``Transformer``
objects built once for a region's CRS, and the module-level convenience
functions ``geo_to_native`` and ``native_to_geo``.

Coordinate flow:

    WGS84 (lat, lon)  --pyproj-->  region CRS (x, y) in meters

Transformers are constructed with ``always_xy=True`` so that geographic
coordinates always travel as ``(lon, lat)`` internally, regardless of the
axis order declared by the CRS authority.

Dependencies
------------
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
2026-10-06

Modified
--------
2026-10-14
"""

# Standard library
from functools import lru_cache
from typing import Optional, Tuple, Union

# Third-party
import numpy as np

# ICEVEL internal
from icevel.exceptions import ValidationError
from icevel.geolocation._backend import require_pyproj
from icevel.geolocation.utils import _is_scalar, is_latlon, validate_latlon
from icevel.regions import Region, get_region

ArrayLike = Union[float, list, np.ndarray]


def _paired_arrays(
    a: ArrayLike, b: ArrayLike, names: Tuple[str, str]
) -> Tuple[np.ndarray, np.ndarray]:
    """Convert two inputs to float64 arrays of identical shape."""
    a_arr = np.asarray(a, dtype=np.float64)
    b_arr = np.asarray(b, dtype=np.float64)
    if a_arr.shape != b_arr.shape:
        raise ValidationError(
            f"Dimensions of {names[0]} {a_arr.shape} and {names[1]} "
            f"{b_arr.shape} must exactly match each other."
        )
    return a_arr, b_arr


class RegionProjection:
    """Forward and inverse map projection for one ITS_LIVE region.

    Parameters
    ----------
    region : int, str or Region
        Region code, abbreviation, name or catalog entry.

    Attributes
    ----------
    region : Region
        The resolved catalog entry.
    crs : str
        Authority-qualified CRS of the native coordinates.

    Raises
    ------
    DependencyError
        If pyproj is not installed.
    ValidationError
        If the region is unknown.

    Examples
    --------
    >>> proj = RegionProjection(1)
    >>> x, y = proj.latlon_to_xy(60.08343, -140.46707)
    >>> round(x, 2), round(y, 2)
    (-3298427.76, 315689.27)
    """

    def __init__(self, region: Union[int, str, Region]) -> None:
        require_pyproj()
        import pyproj

        self.region = get_region(region)
        self.crs = self.region.crs

        native = pyproj.CRS.from_user_input(self.crs)
        wgs84 = pyproj.CRS.from_epsg(4326)
        self._from_wgs84 = pyproj.Transformer.from_crs(
            wgs84, native, always_xy=True
        )
        self._to_wgs84 = pyproj.Transformer.from_crs(
            native, wgs84, always_xy=True
        )

    def latlon_to_xy(
        self, lat: ArrayLike, lon: ArrayLike
    ) -> Tuple[Union[float, np.ndarray], Union[float, np.ndarray]]:
        """Project geographic coordinates to native map coordinates.

        Parameters
        ----------
        lat : float, list or np.ndarray
            Latitudes in degrees North. Must lie within [-90, 90].
        lon : float, list or np.ndarray
            Longitudes in degrees East. Must lie within [-180, 360].

        Returns
        -------
        Tuple
            ``(x, y)`` in meters. Floats for scalar input, otherwise
            arrays with the input shape.

        Raises
        ------
        OutOfRangeError
            If any latitude or longitude is implausible.
        ValidationError
            If ``lat`` and ``lon`` shapes differ.
        """
        scalar = _is_scalar(lat) and _is_scalar(lon)
        lat_arr, lon_arr = _paired_arrays(lat, lon, ('lat', 'lon'))
        validate_latlon(lat_arr, lon_arr)

        x, y = self._from_wgs84.transform(lon_arr, lat_arr)
        x = np.asarray(x, dtype=np.float64).reshape(lat_arr.shape)
        y = np.asarray(y, dtype=np.float64).reshape(lat_arr.shape)
        if scalar:
            return float(x), float(y)
        return x, y

    def xy_to_latlon(
        self, x: ArrayLike, y: ArrayLike
    ) -> Tuple[Union[float, np.ndarray], Union[float, np.ndarray]]:
        """Unproject native map coordinates to geographic coordinates.

        Parameters
        ----------
        x : float, list or np.ndarray
            Easting in meters.
        y : float, list or np.ndarray
            Northing in meters.

        Returns
        -------
        Tuple
            ``(lat, lon)`` in degrees. Floats for scalar input, otherwise
            arrays with the input shape.

        Raises
        ------
        ValidationError
            If ``x`` and ``y`` shapes differ.
        """
        scalar = _is_scalar(x) and _is_scalar(y)
        x_arr, y_arr = _paired_arrays(x, y, ('x', 'y'))

        lon, lat = self._to_wgs84.transform(x_arr, y_arr)
        lat = np.asarray(lat, dtype=np.float64).reshape(x_arr.shape)
        lon = np.asarray(lon, dtype=np.float64).reshape(x_arr.shape)
        if scalar:
            return float(lat), float(lon)
        return lat, lon

    def __repr__(self) -> str:
        return (
            f"RegionProjection(region={self.region.code}, "
            f"crs={self.crs!r})"
        )


@lru_cache(maxsize=32)
def _cached_projection(code: int) -> RegionProjection:
    return RegionProjection(code)


def get_projection(region: Union[int, str, Region]) -> RegionProjection:
    """Return the shared ``RegionProjection`` for a region.

    Transformers are expensive to construct, so one instance per region
    is built lazily and reused.
    """
    return _cached_projection(get_region(region).code)


def geo_to_native(
    region: Union[int, str, Region], lat: ArrayLike, lon: ArrayLike
) -> Tuple[Union[float, np.ndarray], Union[float, np.ndarray]]:
    """Convert ``lat, lon`` to the region's native ``x, y`` (meters).

    See ``RegionProjection.latlon_to_xy``.
    """
    return get_projection(region).latlon_to_xy(lat, lon)


def native_to_geo(
    region: Union[int, str, Region], x: ArrayLike, y: ArrayLike
) -> Tuple[Union[float, np.ndarray], Union[float, np.ndarray]]:
    """Convert the region's native ``x, y`` (meters) to ``lat, lon``.

    See ``RegionProjection.xy_to_latlon``.
    """
    return get_projection(region).xy_to_latlon(x, y)


def resolve_native(
    region: Union[int, str, Region],
    a: ArrayLike,
    b: ArrayLike,
    geographic: Optional[bool] = None,
) -> Tuple[np.ndarray, np.ndarray, bool]:
    """Bring a coordinate pair into native map coordinates.

    Parameters
    ----------
    region : int, str or Region
        Target region.
    a, b : array_like
        Either ``lat, lon`` or ``x, y``. Shapes must match.
    geographic : bool, optional
        Force the input mode. When None, ``is_latlon`` decides.

    Returns
    -------
    Tuple[np.ndarray, np.ndarray, bool]
        ``(x, y, was_geographic)`` with float64 arrays of the input shape.
    """
    a_arr, b_arr = _paired_arrays(a, b, ('first coordinate', 'second coordinate'))
    if geographic is None:
        geographic = is_latlon(a_arr, b_arr)
    if geographic:
        x, y = get_projection(region).latlon_to_xy(a_arr, b_arr)
        return np.asarray(x), np.asarray(y), True
    return a_arr, b_arr, False
