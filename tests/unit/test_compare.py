# THIS FILE IS PART OF THE ALMANAC CIVIL TIME LIBRARY.
# Copyright (C) NIWA & British Crown (Met Office) & Contributors.
#
# This program is free software: you can redistribute it and/or modify
# it under the terms of the GNU General Public License as published by
# the Free Software Foundation, either version 3 of the License, or
# (at your option) any later version.
#
# This program is distributed in the hope that it will be useful,
# but WITHOUT ANY WARRANTY; without even the implied warranty of
# MERCHANTABILITY or FITNESS FOR A PARTICULAR PURPOSE.  See the
# GNU General Public License for more details.
#
# You should have received a copy of the GNU General Public License
# along with this program.  If not, see <http://www.gnu.org/licenses/>.

import pytest
from pytest import param

from almanac.civil.instant import Instant


def at(year, month, date, *time):
    return Instant(dict(
        zip(
            ('year', 'month', 'date', 'hours', 'minutes', 'seconds', 'ms'),
            (year, month, date) + time,
        )
    ))


@pytest.mark.parametrize(
    'this, other, expected',
    [
        param((2020, 10, 5), (2020, 10, 11), -1, id='next-sunday'),
        param((2020, 10, 5, 0, 0, 0, 3), (2020, 10, 10), 0, id='same-week'),
        param(
            (2020, 10, 5, 0, 0, 0, 3), (2020, 10, 11), -1,
            id='same-week-ms'
        ),
        param((2020, 10, 3), (2020, 11, 5), -5, id='five-sundays'),
        param((2020, 12, 30), (2021, 1, 2), 0, id='across-year'),
        param((2020, 12, 30), (2021, 1, 3), -1, id='across-year-sunday'),
        # week diff counts Sunday boundaries crossed, so it is antisymmetric
        # here even though weeks are exempt from the general rule
        param((2020, 10, 11), (2020, 10, 5), 1, id='later'),
        param((2020, 10, 10, 23), (2020, 10, 11), -1, id='saturday-night'),
    ]
)
def test_diff_week(utc, this, other, expected):
    assert at(*this).diff(at(*other), 'week') == expected


def test_diff_week_scenario(utc):
    assert at(2020, 10, 5).diff(at(2020, 10, 11), 'week') == -1


@pytest.mark.parametrize(
    'this, other, unit, expected',
    [
        param((2020, 12, 31), (2021, 1, 1), 'year', -1, id='year-fields'),
        param((2021, 1, 1), (2020, 1, 1), 'year', 1, id='year'),
        param((2020, 3, 31), (2020, 4, 1), 'quarter', -1, id='quarter'),
        param((2021, 1, 1), (2020, 12, 31), 'quarter', 1, id='quarter-year'),
        param((2020, 1, 31), (2020, 2, 1), 'month', -1, id='month-fields'),
        param((2021, 3, 1), (2020, 1, 31), 'month', 14, id='months'),
        param((2020, 1, 2), (2020, 1, 1), 'date', 1, id='date'),
        param((2020, 1, 2), (2020, 1, 1, 12), 'date', 0, id='date-floor'),
        param((2020, 1, 1, 12), (2020, 1, 2), 'date', -1, id='date-floor-neg'),
        param((2020, 1, 1, 5), (2020, 1, 1), 'hours', 5, id='hours'),
        param((2020, 1, 1, 0, 5), (2020, 1, 1), 'minutes', 5, id='minutes'),
        param((2020, 1, 1), (2020, 1, 1, 0, 0, 1), 'seconds', -1, id='sec'),
        param((2020, 1, 1), (2020, 1, 1, 0, 0, 0, 1), 'ms', -1, id='ms'),
    ]
)
def test_diff(utc, this, other, unit, expected):
    assert at(*this).diff(at(*other), unit) == expected


@pytest.mark.parametrize(
    'unit', ['year', 'quarter', 'month', 'date', 'hours', 'minutes',
             'seconds', 'ms']
)
def test_diff_antisymmetric(utc, unit):
    first = at(2019, 7, 14, 3, 4, 5, 6)
    second = at(2021, 2, 3, 3, 4, 5, 6)
    assert first.diff(second, unit) == -second.diff(first, unit)
    assert first.diff(first, unit) == 0


def test_diff_default_unit(utc):
    assert at(2020, 1, 1).diff(at(2019, 12, 31)) == 86400000


def test_diff_other_sources(utc):
    instant = at(2020, 1, 2)
    assert instant.diff('2020-01-01', 'date') == 1
    assert instant.diff({'year': 2020}, 'date') == 1
    assert instant.diff(1577836800000, 'date') == 1


def test_diff_uses_local_fields(kst):
    # 2020-12-31T20:00Z is 2021-01-01T05:00 in UTC+09:00
    new_year = Instant('2020-12-31T20:00Z')
    assert new_year.diff(at(2020, 12, 31), 'year') == 1


@pytest.mark.parametrize(
    'method, other, unit, expected',
    [
        ('is_before', (2020, 1, 2), 'ms', True),
        ('is_before', (2020, 1, 1), 'ms', False),
        ('is_before_or_equal', (2020, 1, 1), 'ms', True),
        ('is_after', (2019, 12, 31), 'ms', True),
        ('is_after', (2020, 1, 1), 'ms', False),
        ('is_after_or_equal', (2020, 1, 1), 'ms', True),
        ('is_equal', (2020, 1, 1), 'ms', True),
        ('is_equal', (2020, 1, 31), 'month', True),
        ('is_before', (2020, 1, 31), 'month', False),
        ('is_before', (2020, 2, 1), 'month', True),
        ('is_after', (2019, 1, 1), 'year', True),
    ]
)
def test_comparisons(utc, method, other, unit, expected):
    assert getattr(at(2020, 1, 1), method)(at(*other), unit) is expected


@pytest.mark.parametrize(
    'bounds, strict, inclusive',
    [
        param(((2019, 12, 31), (2020, 1, 2)), True, True, id='inside'),
        param(((2020, 1, 2), (2019, 12, 31)), True, True, id='reversed'),
        param(((2020, 1, 1), (2020, 1, 2)), False, True, id='on-lower'),
        param(((2019, 12, 31), (2020, 1, 1)), False, True, id='on-upper'),
        param(((2020, 1, 2), (2020, 1, 3)), False, False, id='outside'),
    ]
)
def test_is_between(utc, bounds, strict, inclusive):
    instant = at(2020, 1, 1)
    first, second = (at(*bound) for bound in bounds)
    assert instant.is_between(first, second) is strict
    assert instant.is_between_or_equal(first, second) is inclusive


def test_is_between_unit(utc):
    instant = at(2020, 1, 15)
    assert not instant.is_between(at(2020, 1, 1), at(2020, 3, 1), 'month')
    assert instant.is_between_or_equal(
        at(2020, 1, 1), at(2020, 3, 1), 'month'
    )
    assert instant.is_between(at(2019, 12, 1), at(2020, 3, 1), 'month')


def test_rich_comparison(utc):
    first, second, third = at(2020, 1, 1), at(2020, 1, 2), at(2020, 1, 3)
    assert first < second <= third
    assert third > second >= first
    assert first == at(2020, 1, 1)
    assert first != second
    assert sorted([third, first, second]) == [first, second, third]
    assert first != '2020-01-01'
    with pytest.raises(TypeError):
        first < 0
