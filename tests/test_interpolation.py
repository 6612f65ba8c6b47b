# -*- coding: utf-8 -*-
"""
Tests for grid interpolation, path geometry and seasonal interpolation.

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
2026-10-11

Modified
--------
2026-10-16
"""

import numpy as np
import pytest

from icevel.exceptions import DegenerateGeometryWarning, ValidationError
from icevel.interpolation import (
    GridInterpolator,
    interp2,
    path_distance,
    path_heading,
    project_along_across,
    season_interp,
)
from icevel.vocabulary import InterpMethod


# ── Fixtures ────────────────────────────────────────────────────────────


@pytest.fixture
def plane():
    """North-up grid holding the plane z = 2x + 3y."""
    x = np.arange(0.0, 100.0, 10.0)
    y = np.arange(90.0, -10.0, -10.0)
    xx, yy = np.meshgrid(x, y)
    return x, y, 2.0 * xx + 3.0 * yy


# ── GridInterpolator ────────────────────────────────────────────────────


class TestGridInterpolator:

    def test_linear_exact_on_plane(self, plane):
        x, y, z = plane
        xi = np.array([12.5, 47.0, 88.0])
        yi = np.array([3.0, 55.5, 71.0])
        np.testing.assert_allclose(interp2(x, y, z, xi, yi), 2 * xi + 3 * yi)

    def test_descending_x(self, plane):
        x, y, z = plane
        out = interp2(x[::-1], y, z[:, ::-1], np.array([25.0]), np.array([35.0]))
        np.testing.assert_allclose(out, [155.0])

    def test_outside_is_fill(self, plane):
        x, y, z = plane
        out = interp2(x, y, z, np.array([-50.0, 10.0]), np.array([10.0, 10.0]))
        assert np.isnan(out[0])
        assert out[1] == pytest.approx(50.0)

    def test_layers(self, plane):
        x, y, z = plane
        stack = np.stack([z, 2 * z], axis=2)
        out = interp2(x, y, stack, np.array([[20.0, 30.0]]), np.array([[40.0, 50.0]]))
        assert out.shape == (1, 2, 2)
        np.testing.assert_allclose(out[..., 1], 2 * out[..., 0])

    def test_boolean_nearest(self):
        x = np.array([0.0, 1.0, 2.0])
        y = np.array([1.0, 0.0])
        mask = np.array([[True, False, False], [True, True, False]])
        f = GridInterpolator(x, y, mask, method='nearest', fill_value=0.0)
        out = f(np.array([0.1, 1.2, 1.9, 9.0]), np.array([0.9, 0.1, 0.6, 0.0]))
        assert out.dtype == np.bool_
        assert out.tolist() == [True, True, False, False]

    def test_cubic_falls_back_on_small_grid(self):
        x = np.array([0.0, 1.0])
        y = np.array([1.0, 0.0])
        f = GridInterpolator(x, y, np.ones((2, 2)), method='cubic')
        assert f.method is InterpMethod.LINEAR

    def test_shape_mismatch(self, plane):
        x, y, z = plane
        with pytest.raises(ValidationError):
            GridInterpolator(x, y, z[:, :5])
        with pytest.raises(ValidationError):
            GridInterpolator(x, y, z)(np.zeros(2), np.zeros(3))

    def test_unknown_method(self, plane):
        x, y, z = plane
        with pytest.raises(ValidationError, match="Unknown interpolation"):
            GridInterpolator(x, y, z, method='spline')


# ── Path geometry ───────────────────────────────────────────────────────


class TestPathGeometry:

    def test_distance(self):
        d = path_distance([0, 3, 3], [0, 4, 10])
        np.testing.assert_allclose(d, [0, 5, 11])

    def test_heading_x_aligned(self):
        theta = path_heading(np.array([0.0, 1.0, 2.0]), np.zeros(3))
        np.testing.assert_allclose(theta, 0.0)

    def test_heading_north(self):
        theta = path_heading(np.zeros(3), np.array([0.0, 5.0, 10.0]))
        np.testing.assert_allclose(theta, np.pi / 2)

    def test_single_point_warns(self):
        with pytest.warns(DegenerateGeometryWarning):
            theta = path_heading(np.array([1.0]), np.array([2.0]))
        assert np.isnan(theta).all()

    def test_repeated_vertex_warns(self):
        with pytest.warns(DegenerateGeometryWarning):
            theta = path_heading(np.array([0.0, 1.0, 1.0, 2.0]), np.zeros(4))
        assert np.isnan(theta[2])
        np.testing.assert_allclose(theta[[0, 1, 3]], 0.0)

    def test_along_across_x_aligned(self):
        along, across = project_along_across(
            np.array([3.0, 3.0]), np.array([4.0, 4.0]), np.zeros(2)
        )
        np.testing.assert_allclose(along, [3.0, 3.0])
        np.testing.assert_allclose(across, [-4.0, -4.0])

    def test_along_across_with_year_layers(self):
        vx = np.ones((3, 2))
        vy = np.zeros((3, 2))
        along, across = project_along_across(vx, vy, np.full(3, np.pi / 2))
        assert along.shape == (3, 2)
        np.testing.assert_allclose(along, 0.0, atol=1e-12)
        np.testing.assert_allclose(across, 1.0)


# ── Seasonal ────────────────────────────────────────────────────────────


class TestSeasonInterp:

    def test_phase_wraps_across_new_year(self):
        x = np.array([0.0, 10.0])
        y = np.array([10.0, 0.0])
        amp = np.full((2, 2), 5.0)
        phase = np.array([[360.0, 5.0], [360.0, 5.0]])
        amp_i, phase_i = season_interp(x, y, amp, phase,
                                       np.array([5.0]), np.array([5.0]))
        expected = (360.0 + (5.0 + 365.25 - 360.0) / 2.0) % 365.25
        assert phase_i[0] == pytest.approx(expected, abs=1e-6)
        assert amp_i[0] < 5.0
        assert amp_i[0] == pytest.approx(
            5.0 * np.cos(np.pi * 10.25 / 365.25), rel=1e-9
        )

    def test_uniform_field(self):
        x = np.array([0.0, 10.0, 20.0])
        y = np.array([20.0, 10.0, 0.0])
        amp_i, phase_i = season_interp(
            x, y, np.full((3, 3), 7.0), np.full((3, 3), 100.0),
            np.array([3.0, 17.0]), np.array([4.0, 12.0]),
        )
        np.testing.assert_allclose(amp_i, 7.0)
        np.testing.assert_allclose(phase_i, 100.0)
