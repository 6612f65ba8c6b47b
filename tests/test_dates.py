# -*- coding: utf-8 -*-
"""
Tests for decimal year conversion.

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
2026-10-16

Modified
--------
2026-10-16
"""

from datetime import date, datetime, timedelta

import numpy as np
import pytest

from icevel.dates import datetime_from_decimal_year, decimal_year
from icevel.exceptions import ValidationError


class TestDecimalYear:

    def test_new_year(self):
        assert decimal_year(datetime(2021, 1, 1)) == 2021.0

    def test_leap_year_midpoint(self):
        assert decimal_year(np.datetime64('2020-07-02')) == pytest.approx(2020.5)

    def test_date(self):
        assert decimal_year(date(2019, 1, 1)) == 2019.0

    def test_numbers_pass_through(self):
        assert decimal_year(2015.25) == 2015.25
        np.testing.assert_array_equal(decimal_year([2015, 2016.5]), [2015.0, 2016.5])

    def test_datetime64_array(self):
        arr = np.array(['2019-01-01', '2020-01-01'], dtype='datetime64[D]')
        out = decimal_year(arr.reshape(2, 1))
        assert out.shape == (2, 1)
        np.testing.assert_allclose(out.ravel(), [2019.0, 2020.0])

    def test_datetime_list(self):
        out = decimal_year([datetime(2018, 1, 1), datetime(2018, 7, 2, 12)])
        np.testing.assert_allclose(out, [2018.0, 2018.5])

    def test_nat_raises(self):
        with pytest.raises(ValidationError, match="NaT"):
            decimal_year(np.datetime64('NaT'))

    def test_non_time_raises(self):
        with pytest.raises(ValidationError):
            decimal_year("yesterday")


class TestFromDecimalYear:

    def test_scalar(self):
        assert datetime_from_decimal_year(2020.5) == datetime(2020, 7, 2)

    def test_array(self):
        out = datetime_from_decimal_year(np.array([2001.0, 2002.0]))
        assert out.dtype == object
        assert out.tolist() == [datetime(2001, 1, 1), datetime(2002, 1, 1)]

    def test_round_trip(self):
        t = datetime(2019, 3, 14, 12, 30)
        back = datetime_from_decimal_year(decimal_year(t))
        assert abs(back - t) < timedelta(milliseconds=1)

    def test_nan_raises(self):
        with pytest.raises(ValidationError):
            datetime_from_decimal_year(np.nan)
