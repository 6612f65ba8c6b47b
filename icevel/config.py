# -*- coding: utf-8 -*-
"""
ICEVEL Configuration - Constants and defaults used across the library.

Centralizes default values for data locations, variable kinds, buffers,
integration bounds and cache limits. The default mosaic directory can be
overridden with the ``ICEVEL_DATA_DIR`` environment variable or per call
with the ``data_dir`` argument accepted by every public entry point.

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
2026-10-19
"""

# Standard library
import os
from pathlib import Path
from typing import Optional, Union

# ============================================================================
# Data location
# ============================================================================

DATA_DIR_ENV = "ICEVEL_DATA_DIR"

# Year slot of the error-weighted multi-year summary mosaic
SUMMARY_YEAR = 0

# Extensions tried, in order, when resolving a mosaic path
MOSAIC_EXTENSIONS = ("nc", "tif")


def get_data_dir(data_dir: Optional[Union[str, Path]] = None) -> Path:
    """Resolve the directory that holds the mosaic files.

    Parameters
    ----------
    data_dir : str or Path, optional
        Explicit directory. Takes priority over the environment.

    Returns
    -------
    Path
        ``data_dir`` if given, else ``$ICEVEL_DATA_DIR``, else the
        current working directory.
    """
    if data_dir is not None:
        return Path(data_dir)
    env = os.environ.get(DATA_DIR_ENV, "")
    if env:
        return Path(env)
    return Path.cwd()


# ============================================================================
# Variables
# ============================================================================

# Fallback list used only when a file carries no flag metadata
BOOLEAN_VARIABLES = frozenset({
    "landice",
    "floatingice",
    "rock",
    "ocean",
    "sensor_flag",
})

AXIS_VARIABLES = ("x", "y")

# ============================================================================
# Subsetting and interpolation
# ============================================================================

# Buffer (km) around interpolation query points
INTERP_BUFFER_KM = 1.0

# Grid size above which geographic output conversion warns
GEO_GRID_WARN_PIXELS = 25_000_000

# Rows converted per block during geographic output conversion
GEO_GRID_BLOCK_ROWS = 512

# ============================================================================
# Flowlines
# ============================================================================

FLOWLINE_BUFFER_KM = 1000.0
FLOWLINE_SPACING_M = 10.0

# Vertices slower than this (m/yr) are dropped from a traced path
FLOWLINE_KEEP_SPEED = 0.5

# Tracer step bounds in grid cells, and vertex cap per branch
TRACER_INITIAL_STEP = 0.1
TRACER_MIN_STEP = 0.01
TRACER_MAX_STEP = 1.0
TRACER_MAX_VERTICES = 100_000

# Quality screening thresholds
SCREEN_MIN_SPEED = 1.0
SCREEN_MIN_COUNT = 3
SCREEN_MAX_ERROR_RATIO = 0.5

# ============================================================================
# Displacement
# ============================================================================

DISPLACEMENT_MAX_YEARS = 1000.0
DISPLACEMENT_WARN_YEARS = 365.0
DISPLACEMENT_MAX_ITERATIONS = 1000

# ============================================================================
# Mosaic handle cache
# ============================================================================

CACHE_MAX_OPEN = 8
CACHE_MAX_BYTES = 256 * 1024 ** 2

# HDF5 chunk cache (bytes) per dataset of an open NetCDF mosaic
NETCDF_CHUNK_CACHE_BYTES = 4 * 1024 ** 2
