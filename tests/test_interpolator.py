# -*- coding: utf-8 -*-
"""
Point Interpolator Tests - Sampling mosaics at points and along paths.

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

from conftest import (
    ANNUAL_YEARS,
    CENTER_X,
    CENTER_Y,
    VX,
    VY,
    X,
    Y,
    _HAS_PYPROJ,
    annual_speed,
)
from icevel.exceptions import (
    DegenerateGeometryWarning,
    ValidationError,
    VariableNotFoundError,
)
from icevel.interpolator import interp


class TestContinuous:

    def test_scalar_point(self, store):
        v = interp(1, 'v', CENTER_X, CENTER_Y, store=store)
        assert isinstance(v, float)
        assert v == pytest.approx(np.hypot(VX, VY))

    def test_between_cells(self, store):
        vx = interp(1, 'vx', CENTER_X + 333.0, CENTER_Y - 150.0, store=store)
        assert vx == pytest.approx(VX)

    def test_array_shape_with_years(self, store):
        xs = np.full((2, 3), CENTER_X)
        ys = np.full((2, 3), CENTER_Y)
        out = interp(1, 'v', xs, ys, years=ANNUAL_YEARS, store=store)
        assert out.shape == (2, 3, len(ANNUAL_YEARS))
        for k, year in enumerate(ANNUAL_YEARS):
            np.testing.assert_allclose(out[..., k], annual_speed(year))

    def test_nan_and_outside_points(self, store):
        out = interp(1, 'vx', [CENTER_X, np.nan, 0.0],
                     [CENTER_Y, CENTER_Y, 0.0], store=store)
        assert out[0] == pytest.approx(VX)
        assert np.isnan(out[1])
        assert np.isnan(out[2])

    def test_fill_cells_are_nan(self, store):
        assert np.isnan(interp(1, 'vx', X[1], Y[1], store=store))

    def test_all_outside_returns_nan(self, store):
        out = interp(1, 'v', [0.0, 10.0], [0.0, 10.0], geographic=False,
                     store=store)
        assert np.isnan(out).all()

    def test_unknown_variable(self, store):
        with pytest.raises(VariableNotFoundError):
            interp(1, 'speed', CENTER_X, CENTER_Y, store=store)

    def test_shape_mismatch(self, store):
        with pytest.raises(ValidationError):
            interp(1, 'v', [CENTER_X, CENTER_X], [CENTER_Y], store=store)

    def test_unknown_method(self, store):
        with pytest.raises(ValidationError):
            interp(1, 'v', CENTER_X, CENTER_Y, method='spline', store=store)

    def test_cubic(self, store):
        v = interp(1, 'vy', CENTER_X + 100, CENTER_Y, method='cubic', store=store)
        assert v == pytest.approx(VY)


class TestBoolean:

    def test_default_nearest(self, store):
        # Cell edge between grounded column 29 and floating column 30
        edge = 0.5 * (X[29] + X[30])
        out = interp(1, 'floatingice', [edge - 10.0, edge + 10.0],
                     [Y[10], Y[10]], store=store)
        assert out.dtype == np.bool_
        assert out.shape == (2, 1)
        assert out[:, 0].tolist() == [False, True]

    def test_fill_is_false(self, store):
        assert interp(1, 'floatingice', X[38], Y[38], store=store) is False

    def test_outside_is_false(self, store):
        out = interp(1, 'landice', [CENTER_X, 0.0], [CENTER_Y, 0.0],
                     geographic=False, store=store)
        assert out[:, 0].tolist() == [True, False]


class TestAlongAcross:

    def test_x_aligned_path(self, store):
        xs = CENTER_X + np.arange(4) * 500.0
        ys = np.full(4, CENTER_Y)
        along = interp(1, 'along', xs, ys, store=store)
        across = interp(1, 'across', xs, ys, store=store)
        np.testing.assert_allclose(along, VX)
        np.testing.assert_allclose(across, -VY)

    def test_north_path(self, store):
        xs = np.full(3, CENTER_X)
        ys = CENTER_Y + np.arange(3) * 400.0
        along = interp(1, 'along', xs, ys, store=store)
        across = interp(1, 'across', xs, ys, store=store)
        np.testing.assert_allclose(along, VY)
        np.testing.assert_allclose(across, VX)

    def test_year_layers(self, store):
        xs = CENTER_X + np.arange(3) * 500.0
        ys = np.full(3, CENTER_Y)
        out = interp(1, 'along', xs, ys, years=ANNUAL_YEARS, store=store)
        assert out.shape == (3, len(ANNUAL_YEARS))

    def test_single_point_is_degenerate(self, store):
        with pytest.warns(DegenerateGeometryWarning):
            out = interp(1, 'across', CENTER_X, CENTER_Y, store=store)
        assert np.isnan(out)


@pytest.mark.skipif(not _HAS_PYPROJ, reason="pyproj not installed")
class TestGeographicInput:

    def test_matches_native(self, store):
        from icevel.geolocation import native_to_geo

        lat, lon = native_to_geo(1, CENTER_X, CENTER_Y)
        v = interp(1, 'vx', lat, lon, store=store)
        assert v == pytest.approx(VX)
