# -*- coding: utf-8 -*-
"""
ICEVEL - ITS_LIVE Ice Velocity Library.

Access, subsetting, interpolation and flow-path computation over the
ITS_LIVE glacier velocity mosaics, distributed as one raster file per
region and year. Mosaics are read window by window, so point, path and
time-series queries never load a whole continental grid.

Dependencies
------------
numpy
scipy
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
2026-10-06

Modified
--------
2026-10-18
"""

__version__ = "0.1.0"
__author__ = "Duane Smalley"

from icevel.exceptions import (
    IcevelError,
    ValidationError,
    OutOfRangeError,
    MosaicNotFoundError,
    VariableNotFoundError,
    NoDataError,
    DependencyError,
    ProcessingError,
    DegenerateGeometryWarning,
    LargeGridWarning,
    LongIntegrationWarning,
)
from icevel.vocabulary import (
    VariableKind,
    InterpMethod,
    FluxComponent,
    MosaicFormat,
)
from icevel.regions import REGIONS, Region, get_region
from icevel.geolocation import geo_to_native, is_latlon, native_to_geo
from icevel.IO import MosaicStore, open_mosaic
from icevel.models import MosaicData, SpatialSelector
from icevel.loader import load_axes, load_mosaic
from icevel.interpolator import interp
from icevel.flow import FlowlineOptions, Streamline, displace, flowline
from icevel.dates import datetime_from_decimal_year, decimal_year
from icevel.timeseries import interannual, sineval, timeseries
from icevel.tiling import tile_apply

__all__ = [
    'IcevelError',
    'ValidationError',
    'OutOfRangeError',
    'MosaicNotFoundError',
    'VariableNotFoundError',
    'NoDataError',
    'DependencyError',
    'ProcessingError',
    'DegenerateGeometryWarning',
    'LargeGridWarning',
    'LongIntegrationWarning',
    'VariableKind',
    'InterpMethod',
    'FluxComponent',
    'MosaicFormat',
    'REGIONS',
    'Region',
    'get_region',
    'geo_to_native',
    'native_to_geo',
    'is_latlon',
    'MosaicStore',
    'open_mosaic',
    'MosaicData',
    'SpatialSelector',
    'load_axes',
    'load_mosaic',
    'interp',
    'FlowlineOptions',
    'Streamline',
    'flowline',
    'displace',
    'decimal_year',
    'datetime_from_decimal_year',
    'sineval',
    'timeseries',
    'interannual',
    'tile_apply',
]
