# -*- coding: utf-8 -*-
"""
GeoTIFF Mosaic Reader Tests - Unit tests for GeoTIFFMosaicReader.

Uses synthetic GeoTIFF files created with rasterio for testing.

Dependencies
------------
pytest
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
2026-10-08

Modified
--------
2026-10-19
"""

import pytest
import numpy as np

from conftest import CELL, FILL, NCOLS, NROWS, X, Y, mosaic_name
from icevel.exceptions import ValidationError, VariableNotFoundError
from icevel.vocabulary import MosaicFormat, VariableKind

try:
    import rasterio
    from rasterio.transform import from_origin
    _HAS_RASTERIO = True
except ImportError:
    _HAS_RASTERIO = False

pytestmark = pytest.mark.skipif(
    not _HAS_RASTERIO, reason="rasterio not installed"
)


def test_metadata(geotiff_mosaic):
    from icevel.IO.geotiff import GeoTIFFMosaicReader

    with GeoTIFFMosaicReader(geotiff_mosaic) as reader:
        assert reader.metadata['format'] is MosaicFormat.GEOTIFF
        assert reader.metadata['rows'] == NROWS
        assert reader.metadata['cols'] == NCOLS
        assert '3413' in reader.metadata['crs']


def test_band_names_are_variables(geotiff_mosaic):
    from icevel.IO.geotiff import GeoTIFFMosaicReader

    with GeoTIFFMosaicReader(geotiff_mosaic) as reader:
        assert reader.list_variables() == {'vx', 'vy', 'v', 'x', 'y'}


def test_axes_are_pixel_centers(geotiff_mosaic):
    from icevel.IO.geotiff import GeoTIFFMosaicReader

    with GeoTIFFMosaicReader(geotiff_mosaic) as reader:
        np.testing.assert_allclose(reader.read_axis('x'), X)
        np.testing.assert_allclose(reader.read_axis('y'), Y)


def test_read_window(geotiff_mosaic):
    from icevel.IO.geotiff import GeoTIFFMosaicReader

    with GeoTIFFMosaicReader(geotiff_mosaic) as reader:
        block = reader.read_window('vy', 3, 8, 2, 6)
        assert block.shape == (5, 4)
        assert block[0, 0] == FILL
        assert block[-1, -1] == pytest.approx(20.0)


def test_nodata_as_fill_value(geotiff_mosaic):
    from icevel.IO.geotiff import GeoTIFFMosaicReader

    with GeoTIFFMosaicReader(geotiff_mosaic) as reader:
        assert reader.get_fill_value('v') == FILL
        assert reader.get_attributes('vx')['units'] == "meter/year"
        assert reader.get_variable_kind('v') is VariableKind.CONTINUOUS


def test_unnamed_bands(tmp_path):
    from icevel.IO.geotiff import GeoTIFFMosaicReader

    path = tmp_path / "plain.tif"
    with rasterio.open(
        str(path), 'w', driver='GTiff', height=4, width=5, count=2,
        dtype='float32', crs='EPSG:3413',
        transform=from_origin(0, 40, 10, 10),
    ) as ds:
        ds.write(np.ones((2, 4, 5), dtype=np.float32))
    with GeoTIFFMosaicReader(path) as reader:
        assert {'band_1', 'band_2'} <= reader.list_variables()
        with pytest.raises(VariableNotFoundError):
            reader.read_window('v', 0, 1, 0, 1)


def test_text_tags_decode_as_numbers(tmp_path):
    from icevel.IO.geotiff import GeoTIFFMosaicReader
    from icevel.loader import load_mosaic

    path = tmp_path / mosaic_name(0, ext="tif")
    grid = np.full((NROWS, NCOLS), 50.0, dtype=np.float32)
    grid[:5, :5] = FILL
    with rasterio.open(
        str(path), 'w', driver='GTiff', height=NROWS, width=NCOLS, count=1,
        dtype='float32', crs='EPSG:3413',
        transform=from_origin(X[0] - CELL / 2, Y[0] + CELL / 2, CELL, CELL),
    ) as ds:
        ds.write(grid, 1)
        ds.set_band_description(1, 'v')
        ds.update_tags(1, _FillValue=str(FILL), scale_factor="2")

    with GeoTIFFMosaicReader(path) as reader:
        assert reader.get_fill_value('v') == FILL
        assert reader.get_scale_offset('v') == (2.0, 0.0)

    data = load_mosaic(1, 'v', data_dir=tmp_path)
    assert np.isnan(data.values[:5, :5, 0]).all()
    np.testing.assert_allclose(data.values[5:, :, 0], 100.0)


def test_malformed_numeric_tag(tmp_path):
    from icevel.IO.geotiff import GeoTIFFMosaicReader

    path = tmp_path / "bad.tif"
    with rasterio.open(
        str(path), 'w', driver='GTiff', height=4, width=5, count=1,
        dtype='float32', crs='EPSG:3413',
        transform=from_origin(0, 40, 10, 10),
    ) as ds:
        ds.write(np.ones((4, 5), dtype=np.float32), 1)
        ds.set_band_description(1, 'v')
        ds.update_tags(1, scale_factor="two")
    with GeoTIFFMosaicReader(path) as reader:
        with pytest.raises(ValidationError, match="scale_factor"):
            reader.get_attributes('v')
