# -*- coding: utf-8 -*-
"""
Tests for the region catalog.

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
2026-10-12
"""

import pytest

from icevel.exceptions import ValidationError
from icevel.regions import REGIONS, Region, get_region


class TestGetRegion:

    def test_by_code(self):
        assert get_region(1).abbreviation == 'ALA'

    def test_by_abbreviation_case_insensitive(self):
        assert get_region('hma').code == 14

    def test_by_name(self):
        assert get_region('Antarctica').crs == 'EPSG:3031'

    def test_numeric_string(self):
        assert get_region('5').name == 'Greenland'

    def test_region_passthrough(self):
        r = REGIONS[19]
        assert get_region(r) is r

    @pytest.mark.parametrize("bad", [13, 0, 'XYZ', 2.5, None])
    def test_unknown(self, bad):
        with pytest.raises(ValidationError):
            get_region(bad)


class TestRegionTable:

    def test_codes(self):
        assert sorted(REGIONS) == [1, 2, 3, 4, 5, 6, 7, 8, 9, 10, 11, 12,
                                   14, 17, 18, 19]

    def test_immutable(self):
        with pytest.raises(TypeError):
            REGIONS[20] = REGIONS[1]

    def test_frozen_entries(self):
        with pytest.raises(AttributeError):
            REGIONS[1].code = 2

    def test_filename(self):
        assert get_region(1).filename(0) == \
            'ITS_LIVE_velocity_120m_RGI01A_0000_v02.nc'
        assert get_region(19).filename(2018, 'tif') == \
            'ITS_LIVE_velocity_120m_RGI19A_2018_v02.tif'

    def test_filename_glob(self):
        assert get_region(5).filename_glob() == \
            'ITS_LIVE_velocity_120m_RGI05A_????_v02.*'

    def test_custom_template(self):
        r = Region(99, "Test", "TST", "EPSG:3413",
                   filename_template="{abbreviation}_{year}.{ext}")
        assert r.filename(2020) == 'TST_2020.nc'
