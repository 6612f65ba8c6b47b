# -*- coding: utf-8 -*-
"""
Tests for point displacement through the synthetic summary mosaic.

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
2026-10-15

Modified
--------
2026-10-18
"""

import numpy as np
import pytest

from conftest import CENTER_X, CENTER_Y, VX, VY, _HAS_PYPROJ
from icevel.exceptions import (
    LongIntegrationWarning,
    OutOfRangeError,
    ProcessingError,
)
from icevel.flow import displace


class TestDisplace:

    def test_forward(self, store):
        x1, y1 = displace(1, CENTER_X, CENTER_Y, 10.0,
                          geographic=False, store=store)
        assert isinstance(x1, float)
        assert x1 == pytest.approx(CENTER_X + 10 * VX, abs=1e-6)
        assert y1 == pytest.approx(CENTER_Y + 10 * VY, abs=1e-6)

    def test_fractional_year(self, store):
        x1, _ = displace(1, CENTER_X, CENTER_Y, 2.5,
                         geographic=False, store=store)
        assert x1 == pytest.approx(CENTER_X + 2.5 * VX, abs=1e-6)

    def test_forward_then_back(self, store):
        x1, y1 = displace(1, CENTER_X, CENTER_Y, 7.0,
                          geographic=False, store=store)
        x0, y0 = displace(1, x1, y1, -7.0, geographic=False, store=store)
        assert x0 == pytest.approx(CENTER_X, abs=1e-6)
        assert y0 == pytest.approx(CENTER_Y, abs=1e-6)

    def test_zero_time_is_identity(self, store):
        x1, y1 = displace(1, CENTER_X, CENTER_Y, 0.0,
                          geographic=False, store=store)
        assert (x1, y1) == (CENTER_X, CENTER_Y)

    def test_broadcast_times(self, store):
        x1, y1 = displace(1, CENTER_X, CENTER_Y, [1.0, 2.0, 3.0],
                          geographic=False, store=store)
        assert x1.shape == (3,)
        np.testing.assert_allclose(x1 - CENTER_X, [VX, 2 * VX, 3 * VX])
        np.testing.assert_allclose(y1 - CENTER_Y, [VY, 2 * VY, 3 * VY])

    def test_broadcast_points(self, store):
        xs = np.array([CENTER_X, CENTER_X + 3000.0])
        ys = np.array([CENTER_Y, CENTER_Y - 3000.0])
        x1, y1 = displace(1, xs, ys, 1.0, geographic=False, store=store)
        np.testing.assert_allclose(x1, xs + VX)
        np.testing.assert_allclose(y1, ys + VY)

    def test_batch_matches_individual(self, store):
        xs = np.array([CENTER_X, CENTER_X - 4000.0, CENTER_X + 6000.0])
        ys = np.array([CENTER_Y, CENTER_Y + 2000.0, CENTER_Y - 7000.0])
        dts = np.array([3.0, -2.0, 5.5])
        bx, by = displace(1, xs, ys, dts, geographic=False, store=store)
        for k in range(3):
            x1, y1 = displace(1, xs[k], ys[k], dts[k],
                              geographic=False, store=store)
            assert bx[k] == pytest.approx(x1, abs=1e-6)
            assert by[k] == pytest.approx(y1, abs=1e-6)

    def test_leaving_mosaic_gives_nan(self, store):
        with pytest.warns(LongIntegrationWarning):
            x1, y1 = displace(1, CENTER_X, CENTER_Y, 400.0,
                              geographic=False, store=store)
        assert np.isnan(x1) and np.isnan(y1)

    def test_too_long_raises_before_io(self, tmp_path):
        # No mosaics exist in tmp_path
        with pytest.raises(OutOfRangeError, match="1000 years"):
            displace(1, CENTER_X, CENTER_Y, 1500.0,
                     geographic=False, data_dir=tmp_path)

    def test_too_long_is_also_a_value_error(self, tmp_path):
        with pytest.raises(ValueError):
            displace(1, CENTER_X, CENTER_Y, [-2000.0, 1.0],
                     geographic=False, data_dir=tmp_path)

    def test_iteration_cap(self, store):
        with pytest.raises(ProcessingError, match="3 steps"):
            displace(1, CENTER_X, CENTER_Y, 5.0, geographic=False,
                     max_iterations=3, store=store)

    @pytest.mark.skipif(not _HAS_PYPROJ, reason="pyproj not installed")
    def test_geographic_round_trip(self, store):
        from icevel.geolocation import native_to_geo

        lat, lon = native_to_geo(1, CENTER_X, CENTER_Y)
        lat1, lon1 = displace(1, lat, lon, 5.0, store=store)
        lat0, lon0 = displace(1, lat1, lon1, -5.0, store=store)
        assert (lat1, lon1) != pytest.approx((lat, lon), abs=1e-6)
        assert lat0 == pytest.approx(lat, abs=1e-7)
        assert lon0 == pytest.approx(lon, abs=1e-7)
