# -*- coding: utf-8 -*-
"""
IO Backend Detection - Detect the mosaic file format libraries.

Probes for h5py (NetCDF4/HDF5 mosaics) and rasterio (GeoTIFF mosaics) at
import time. Provides boolean flags and helper functions that readers use
to verify a backend is installed before opening a file.

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
2026-10-07
"""

# ICEVEL internal
from icevel.exceptions import DependencyError

_HAS_H5PY = False
_HAS_RASTERIO = False

try:
    import h5py  # noqa: F401
    _HAS_H5PY = True
except ImportError:
    pass

try:
    import rasterio  # noqa: F401
    _HAS_RASTERIO = True
except ImportError:
    pass


def require_h5py() -> None:
    """Verify that h5py is installed.

    Raises
    ------
    DependencyError
        If h5py is not installed.
    """
    if not _HAS_H5PY:
        raise DependencyError(
            "h5py is required for NetCDF mosaic reading. "
            "Install with: pip install h5py"
        )


def require_rasterio() -> None:
    """Verify that rasterio is installed.

    Raises
    ------
    DependencyError
        If rasterio is not installed.
    """
    if not _HAS_RASTERIO:
        raise DependencyError(
            "rasterio is required for GeoTIFF mosaic reading. "
            "Install with: pip install rasterio"
        )
