# -*- coding: utf-8 -*-
"""
Tests for the velocity field sampler and the RKF45 streamline tracer.

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
2026-10-14

Modified
--------
2026-10-17
"""

import numpy as np
import pytest

from icevel.exceptions import ValidationError
from icevel.flow import VelocityField, trace_streamline


# ── Fixtures ────────────────────────────────────────────────────────────


def _uniform(u, v, n=11, descending_y=True):
    x = np.arange(n, dtype=float)
    y = x[::-1].copy() if descending_y else x.copy()
    return VelocityField(x, y, np.full((n, n), u), np.full((n, n), v))


@pytest.fixture
def eastward():
    return _uniform(1.0, 0.0)


@pytest.fixture
def rotation():
    """Solid-body rotation about (0, 0) on a 1 m grid."""
    x = np.arange(-20.0, 21.0)
    y = x[::-1].copy()
    xx, yy = np.meshgrid(x, y)
    return VelocityField(x, y, -yy, xx)


# ── VelocityField ───────────────────────────────────────────────────────


class TestVelocityField:

    def test_bilinear(self):
        x = np.array([0.0, 1.0])
        y = np.array([1.0, 0.0])
        vx = np.array([[0.0, 1.0], [2.0, 3.0]])
        field = VelocityField(x, y, vx, np.zeros((2, 2)))
        u, v = field.sample_point(0.5, 0.5)
        assert u == pytest.approx(1.5)
        assert v == 0.0
        u_arr, _ = field.sample(np.array([0.0, 1.0]), np.array([1.0, 0.0]))
        np.testing.assert_allclose(u_arr, [0.0, 3.0])

    def test_outside_is_nan(self, eastward):
        assert np.isnan(eastward.sample_point(-0.1, 5.0)[0])
        u, _ = eastward.sample(np.array([5.0, 10.5]), np.array([5.0, 5.0]))
        assert u[0] == 1.0 and np.isnan(u[1])

    def test_speed_and_cell_size(self):
        field = _uniform(3.0, 4.0)
        np.testing.assert_allclose(field.speed(np.array([2.0]), np.array([2.0])), 5.0)
        assert field.cell_size == 1.0
        assert field.shape == (11, 11)

    def test_too_small(self):
        with pytest.raises(ValidationError, match="2x2"):
            VelocityField([0.0], [0.0, 1.0], np.zeros((2, 1)), np.zeros((2, 1)))

    def test_non_uniform_axis(self):
        x = np.array([0.0, 1.0, 3.0])
        with pytest.raises(ValidationError, match="uniformly spaced"):
            VelocityField(x, x, np.zeros((3, 3)), np.zeros((3, 3)))

    def test_shape_mismatch(self):
        x = np.arange(3.0)
        with pytest.raises(ValidationError):
            VelocityField(x, x, np.zeros((3, 3)), np.zeros((3, 2)))


# ── trace_streamline ────────────────────────────────────────────────────


class TestTraceStreamline:

    def test_downstream_reaches_edge(self, eastward):
        xs, ys = trace_streamline(eastward, 2.0, 5.0, direction=1)
        assert xs[0] == 2.0 and ys[0] == 5.0
        assert np.all(np.diff(xs) > 0)
        np.testing.assert_allclose(ys, 5.0)
        assert xs[-1] == pytest.approx(10.0, abs=0.05)
        assert xs[-1] <= 10.0

    def test_upstream(self, eastward):
        xs, _ = trace_streamline(eastward, 2.0, 5.0, direction=-1)
        assert np.all(np.diff(xs) < 0)
        assert xs[-1] == pytest.approx(0.0, abs=0.05)

    def test_ascending_y_grid(self):
        field = _uniform(0.0, 2.0, descending_y=False)
        xs, ys = trace_streamline(field, 5.0, 1.0)
        np.testing.assert_allclose(xs, 5.0)
        assert ys[-1] == pytest.approx(10.0, abs=0.05)

    def test_direction_independent_of_speed(self):
        slow, _ = trace_streamline(_uniform(0.01, 0.0), 2.0, 5.0)
        fast, _ = trace_streamline(_uniform(500.0, 0.0), 2.0, 5.0)
        np.testing.assert_allclose(slow, fast)

    def test_stagnant_field_returns_seed(self):
        xs, ys = trace_streamline(_uniform(0.0, 0.0), 5.0, 5.0)
        assert xs.tolist() == [5.0] and ys.tolist() == [5.0]

    def test_seed_outside_returns_seed(self, eastward):
        xs, _ = trace_streamline(eastward, 50.0, 5.0)
        assert xs.size == 1

    def test_vertex_cap(self, eastward):
        xs, _ = trace_streamline(eastward, 0.0, 5.0, max_vertices=4)
        assert xs.size == 4

    def test_rotation_conserves_radius(self, rotation):
        xs, ys = trace_streamline(rotation, 10.0, 0.0, max_vertices=200,
                                  tolerance=1e-4)
        radius = np.hypot(xs, ys)
        np.testing.assert_allclose(radius, 10.0, rtol=5e-3)
        # Counterclockwise rotation moves the first step toward +y
        assert ys[1] > 0

    @pytest.mark.parametrize("kwargs", [
        {'direction': 0},
        {'min_step': 0.0},
        {'initial_step': 2.0, 'max_step': 1.0},
        {'max_vertices': 0},
    ])
    def test_invalid_arguments(self, eastward, kwargs):
        with pytest.raises(ValidationError):
            trace_streamline(eastward, 2.0, 5.0, **kwargs)
