# -*- coding: utf-8 -*-
"""
Geolocation Module - Coordinate transforms between WGS84 and region grids.

Every ITS_LIVE region stores its mosaics in a projected CRS. This module
converts between geographic coordinates and those native map coordinates,
and decides which of the two a caller supplied.

Usage
-----
    >>> from icevel.geolocation import geo_to_native, native_to_geo
    >>> x, y = geo_to_native(1, 60.08343, -140.46707)
    >>> lat, lon = native_to_geo(1, x, y)

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

from icevel.geolocation.projection import (
    RegionProjection,
    get_projection,
    geo_to_native,
    native_to_geo,
    resolve_native,
)
from icevel.geolocation.utils import is_latlon, validate_latlon

__all__ = [
    'RegionProjection',
    'get_projection',
    'geo_to_native',
    'native_to_geo',
    'resolve_native',
    'is_latlon',
    'validate_latlon',
]
