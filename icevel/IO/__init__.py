# -*- coding: utf-8 -*-
"""
IO Module - Access to ITS_LIVE velocity mosaic files.

Provides readers for the NetCDF4 and GeoTIFF mosaic distributions and a
``MosaicStore`` that resolves ``(region, year)`` to a file and caches open
readers.

Usage
-----
    >>> from icevel.IO import MosaicStore
    >>> store = MosaicStore('/data/itslive')
    >>> x = store.read_full_axis('ALA', 0, 'x')
    >>> block = store.read_window('ALA', 0, 'v', (100, 200), (300, 400))

Dependencies
------------
h5py
rasterio

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
2026-10-07

Modified
--------
2026-10-17
"""

from icevel.IO.base import MosaicReader
from icevel.IO.catalog import (
    MosaicStore,
    VariableInfo,
    default_store,
    open_mosaic,
    resolve_store,
)
from icevel.IO.geotiff import GeoTIFFMosaicReader
from icevel.IO.netcdf import NetCDFMosaicReader

__all__ = [
    'MosaicReader',
    'NetCDFMosaicReader',
    'GeoTIFFMosaicReader',
    'MosaicStore',
    'VariableInfo',
    'default_store',
    'open_mosaic',
    'resolve_store',
]
