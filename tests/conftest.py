# -*- coding: utf-8 -*-
"""
Shared Test Fixtures - Synthetic ITS_LIVE mosaics written to tmp_path.

The synthetic Alaska (region 1) mosaics sit on a 40 x 40 grid of 1 km
cells with y stored descending, as in the distributed files. Velocity is
uniform (vx = 100, vy = 20 m/yr) except for a block of fill values in
the north-west corner. Annual mosaics for 2015-2018 carry
``v = 100 + 10 * (year - 2015)``.

Dependencies
------------
pytest
h5py

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
2026-10-12

Modified
--------
2026-10-18
"""

import pytest
import numpy as np

try:
    import h5py
    _HAS_H5PY = True
except ImportError:
    _HAS_H5PY = False

try:
    import rasterio
    from rasterio.transform import from_origin
    _HAS_RASTERIO = True
except ImportError:
    _HAS_RASTERIO = False

try:
    import pyproj  # noqa: F401
    _HAS_PYPROJ = True
except ImportError:
    _HAS_PYPROJ = False


CELL = 1000.0
NCOLS = 40
NROWS = 40
X = -3_320_000.0 + CELL * (np.arange(NCOLS) + 0.5)
Y = 340_000.0 - CELL * (np.arange(NROWS) + 0.5)
FILL = -32767.0
VX = 100.0
VY = 20.0
ANNUAL_YEARS = (2015, 2016, 2017, 2018)

# Cell centers well inside the valid part of the grid
CENTER_X = float(X[20])
CENTER_Y = float(Y[20])


def annual_speed(year):
    return 100.0 + 10.0 * (year - 2015)


def mosaic_name(year, ext="nc", code=1):
    return f"ITS_LIVE_velocity_120m_RGI{code:02d}A_{year:04d}_v02.{ext}"


def write_netcdf_mosaic(path, x, y, variables, transpose=False):
    """Write a NetCDF4-style mosaic with h5py dimension scales.

    Parameters
    ----------
    path : Path
        Output file.
    x, y : np.ndarray
        Axes, written in the given order.
    variables : dict
        ``name -> (data, attrs)`` with data shaped ``(len(y), len(x))``.
    transpose : bool
        Store the grids ``(x, y)`` instead of ``(y, x)``.
    """
    with h5py.File(str(path), "w") as f:
        f.attrs["title"] = "ITS_LIVE annual mosaic"
        xs = f.create_dataset("x", data=np.asarray(x, dtype=np.float64))
        ys = f.create_dataset("y", data=np.asarray(y, dtype=np.float64))
        xs.make_scale("x")
        ys.make_scale("y")
        for name, (data, attrs) in variables.items():
            arr = np.asarray(data)
            ds = f.create_dataset(name, data=arr.T if transpose else arr)
            if transpose:
                ds.dims[0].attach_scale(xs)
                ds.dims[1].attach_scale(ys)
            else:
                ds.dims[0].attach_scale(ys)
                ds.dims[1].attach_scale(xs)
            for key, val in attrs.items():
                ds.attrs[key] = val


def _with_fill(value, dtype=np.float32):
    grid = np.full((NROWS, NCOLS), value, dtype=dtype)
    grid[:5, :5] = FILL
    return grid


def summary_variables():
    fill = {"_FillValue": np.float32(FILL), "units": "meter/year"}
    floating = np.zeros((NROWS, NCOLS), dtype=np.uint8)
    floating[:, 30:] = 1
    floating[35:, 30:] = 255
    flags = {
        "flag_values": np.array([0, 1], dtype=np.uint8),
        "flag_meanings": "grounded floating",
        "_FillValue": np.uint8(255),
    }
    return {
        "vx": (_with_fill(VX), fill),
        "vy": (_with_fill(VY), fill),
        "v": (_with_fill(np.hypot(VX, VY)), fill),
        "v_error": (_with_fill(5.0), fill),
        "count": (np.full((NROWS, NCOLS), 10, dtype=np.int32), {}),
        "landice": (np.ones((NROWS, NCOLS), dtype=np.uint8), {}),
        "floatingice": (floating, flags),
        "v_amp": (_with_fill(10.0), fill),
        "v_amp_error": (_with_fill(12.0), fill),
        "v_phase": (np.zeros((NROWS, NCOLS), dtype=np.float32),
                    {"units": "day of year"}),
    }


def annual_variables(year):
    fill = {"_FillValue": np.float32(FILL), "units": "meter/year"}
    return {
        "vx": (_with_fill(VX), fill),
        "vy": (_with_fill(VY), fill),
        "v": (_with_fill(annual_speed(year)), fill),
        "v_error": (_with_fill(5.0), fill),
    }


@pytest.fixture
def mosaic_dir(tmp_path):
    """Directory with the summary and 2015-2018 region 1 mosaics."""
    if not _HAS_H5PY:
        pytest.skip("h5py not installed")
    write_netcdf_mosaic(tmp_path / mosaic_name(0), X, Y, summary_variables())
    for year in ANNUAL_YEARS:
        write_netcdf_mosaic(
            tmp_path / mosaic_name(year), X, Y, annual_variables(year)
        )
    return tmp_path


@pytest.fixture
def store(mosaic_dir):
    """A private MosaicStore over ``mosaic_dir``, closed after the test."""
    from icevel.IO.catalog import MosaicStore

    with MosaicStore(mosaic_dir) as s:
        yield s


@pytest.fixture
def geotiff_mosaic(tmp_path):
    """Region 1 summary mosaic as a GeoTIFF with named bands."""
    if not _HAS_RASTERIO:
        pytest.skip("rasterio not installed")
    path = tmp_path / mosaic_name(0, ext="tif")
    transform = from_origin(X[0] - CELL / 2, Y[0] + CELL / 2, CELL, CELL)
    bands = {
        "vx": _with_fill(VX),
        "vy": _with_fill(VY),
        "v": _with_fill(np.hypot(VX, VY)),
    }
    with rasterio.open(
        str(path), 'w', driver='GTiff',
        height=NROWS, width=NCOLS, count=len(bands),
        dtype='float32', crs='EPSG:3413',
        transform=transform, nodata=FILL,
    ) as ds:
        for i, (name, data) in enumerate(bands.items(), start=1):
            ds.write(data, i)
            ds.set_band_description(i, name)
        ds.update_tags(1, units="meter/year")
    return path
