# -*- coding: utf-8 -*-
"""
Mosaic Catalog Tests - File resolution and the bounded reader cache.

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
2026-10-09

Modified
--------
2026-10-19
"""

import pytest
import numpy as np

from conftest import ANNUAL_YEARS, FILL, mosaic_name
from icevel.exceptions import (
    MosaicNotFoundError,
    ValidationError,
    VariableNotFoundError,
)
from icevel.IO.catalog import MosaicStore, default_store, open_mosaic, resolve_store
from icevel.vocabulary import VariableKind


class TestOpenMosaic:

    def test_unknown_extension(self, tmp_path):
        path = tmp_path / "mosaic.zarr"
        path.write_bytes(b"")
        with pytest.raises(ValidationError, match="extension"):
            open_mosaic(path)

    def test_netcdf_dispatch(self, mosaic_dir):
        from icevel.IO.netcdf import NetCDFMosaicReader

        with open_mosaic(mosaic_dir / mosaic_name(0)) as reader:
            assert isinstance(reader, NetCDFMosaicReader)

    def test_geotiff_dispatch(self, geotiff_mosaic):
        from icevel.IO.geotiff import GeoTIFFMosaicReader

        with open_mosaic(geotiff_mosaic) as reader:
            assert isinstance(reader, GeoTIFFMosaicReader)


class TestResolvePath:

    def test_found(self, store, mosaic_dir):
        assert store.resolve_path(1, 2016) == mosaic_dir / mosaic_name(2016)

    def test_missing_lists_available(self, store):
        with pytest.raises(MosaicNotFoundError) as excinfo:
            store.resolve_path('ALA', 2030)
        err = excinfo.value
        assert isinstance(err, FileNotFoundError)
        assert mosaic_name(2015) in err.available
        assert len(err.available) == 1 + len(ANNUAL_YEARS)
        assert "2030" in str(err)

    def test_missing_region(self, store):
        with pytest.raises(MosaicNotFoundError, match="No mosaics"):
            store.resolve_path(5, 0)

    def test_geotiff_fallback(self, geotiff_mosaic):
        with MosaicStore(geotiff_mosaic.parent) as s:
            assert s.resolve_path(1, 0) == geotiff_mosaic
            assert 'v' in s.list_variables(1, 0)

    def test_data_dir_from_environment(self, mosaic_dir, monkeypatch):
        monkeypatch.setenv("ICEVEL_DATA_DIR", str(mosaic_dir))
        with MosaicStore() as s:
            assert s.data_dir == mosaic_dir


class TestReaderCache:

    def test_reuses_reader(self, store):
        assert store.open(1, 0) is store.open('Alaska', 0)
        assert len(store) == 1
        assert (1, 0) in store

    def test_max_open_evicts_lru(self, mosaic_dir):
        with MosaicStore(mosaic_dir, max_open=2) as s:
            first = s.open(1, 2015)
            s.open(1, 2016)
            s.open(1, 2015)
            s.open(1, 2017)
            assert len(s) == 2
            assert (1, 2015) in s
            assert (1, 2016) not in s
            assert s.open(1, 2015) is first

    def test_max_bytes_keeps_newest(self, mosaic_dir):
        with MosaicStore(mosaic_dir, max_bytes=0) as s:
            s.read_full_axis(1, 2015, 'x')
            s.read_full_axis(1, 2016, 'x')
            assert len(s) == 1
            assert (1, 2016) in s

    def test_reads_count_toward_budget(self, mosaic_dir):
        from icevel.config import NETCDF_CHUNK_CACHE_BYTES

        with MosaicStore(mosaic_dir) as s:
            reader = s.open(1, 0)
            assert reader.nbytes == 0
            s.read_window(1, 0, 'v', (0, 2), (0, 2))
            s.read_window(1, 0, 'vx', (0, 2), (0, 2))
            assert reader.nbytes == 2 * NETCDF_CHUNK_CACHE_BYTES
            assert s.cached_bytes == reader.nbytes

    def test_read_cache_evicts_by_bytes(self, mosaic_dir):
        from icevel.config import NETCDF_CHUNK_CACHE_BYTES

        with MosaicStore(mosaic_dir,
                         max_bytes=NETCDF_CHUNK_CACHE_BYTES - 1) as s:
            s.read_window(1, 2015, 'v', (0, 2), (0, 2))
            s.read_window(1, 2016, 'v', (0, 2), (0, 2))
            assert len(s) == 1
            assert (1, 2016) in s

    def test_clear_closes(self, mosaic_dir):
        s = MosaicStore(mosaic_dir)
        s.open(1, 0)
        s.clear()
        assert len(s) == 0

    def test_invalid_max_open(self, mosaic_dir):
        with pytest.raises(ValidationError):
            MosaicStore(mosaic_dir, max_open=0)


class TestStoreReads:

    def test_variable_info(self, store):
        info = store.variable_info(1, 0, 'v')
        assert info.kind is VariableKind.CONTINUOUS
        assert info.fill_value == FILL
        assert info.units == "meter/year"
        assert store.variable_info(1, 0, 'landice').kind is VariableKind.BOOLEAN

    def test_unknown_variable(self, store):
        with pytest.raises(VariableNotFoundError) as excinfo:
            store.variable_info(1, 0, 'speed')
        assert 'v' in excinfo.value.available

    def test_read_window(self, store):
        block = store.read_window(1, 2016, 'v', (10, 12), (20, 23))
        assert block.shape == (2, 3)
        np.testing.assert_allclose(block, 110.0)


class TestDefaultStore:

    def test_shared_per_directory(self, mosaic_dir):
        assert default_store(mosaic_dir) is default_store(str(mosaic_dir))

    def test_resolve_store_prefers_explicit(self, store, mosaic_dir):
        assert resolve_store(store, mosaic_dir) is store
        assert resolve_store(None, mosaic_dir) is default_store(mosaic_dir)
