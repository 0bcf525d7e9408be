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

from almanac.civil.exceptions import (
    DuplicateTokenError,
    TemplateError,
    TemplateSyntaxError,
    TokenValueError,
)
from almanac.civil.format import parse_template
from almanac.civil.instant import Instant
from almanac.civil.locales.en import LOCALE as EN
from almanac.civil.locales.ko_kr import LOCALE as KO_KR


@pytest.mark.parametrize(
    'value, template, expected',
    [
        param(
            '2020-03-04', 'YYYY-MM-DD',
            {'year': 2020, 'month': 3, 'date': 4},
            id='date'
        ),
        param(
            '20200304153007', 'YYYYMMDDHHmmss',
            {
                'year': 2020,
                'month': 3,
                'date': 4,
                'hours': 15,
                'minutes': 30,
                'seconds': 7,
            },
            id='adjacent-padded'
        ),
        param(
            '4/3/2020 9:5:1.25', 'D/M/YYYY H:m:s.S',
            {
                'year': 2020,
                'month': 3,
                'date': 4,
                'hours': 9,
                'minutes': 5,
                'seconds': 1,
                'ms': 25,
            },
            id='unpadded'
        ),
        param('123', 'dD', {'date': 23}, id='adjacent-unpadded'),
        param(
            'March 4, 2020', 'MMMM D, YYYY',
            {'year': 2020, 'month': 3, 'date': 4},
            id='month-name'
        ),
        param(
            'MARCH 4', 'MMMM D', {'month': 3, 'date': 4},
            id='month-name-any-case'
        ),
        param('Dec2020', 'MMMYYYY', {'year': 2020, 'month': 12}, id='short'),
        param('99', 'YY', {'year': 1999}, id='two-digit-year'),
        param('5', 'YY', {'year': 1905}, id='one-digit-year'),
        param('05', 'YY', {'year': 1905}, id='padded-short-year'),
        param(
            '0320', 'MMYY', {'year': 1920, 'month': 3},
            id='adjacent-short-year'
        ),
        param('2020-3', 'YYYY-Q', {'year': 2020, 'month': 7}, id='quarter'),
        param(
            '2020-061', 'YYYY-DDDD', {'year': 2020, 'month': 1, 'date': 61},
            id='day-of-year'
        ),
        param(
            '2020W05', 'YYYYWww', {'year': 2020, 'month': 1, 'date': 26},
            id='week'
        ),
        param(
            '2020 5 3', 'YYYY W D', {'year': 2020, 'month': 1, 'date': 3},
            id='day-of-month-over-week'
        ),
        param(
            'Wed 2020-03-04', 'ddd YYYY-MM-DD',
            {'year': 2020, 'month': 3, 'date': 4},
            id='day-name-checked-only'
        ),
        param('03:15 PM', 'hh:mm A', {'hours': 15, 'minutes': 15}, id='pm'),
        param('12:00 am', 'hh:mm a', {'hours': 0, 'minutes': 0}, id='am-12'),
        param('12:00 pm', 'hh:mm a', {'hours': 12, 'minutes': 0}, id='pm-12'),
        param('12', 'h', {'hours': 12}, id='no-meridiem'),
        param('3pm', 'ha', {'hours': 15}, id='adjacent-meridiem'),
        param('.12', '.SS', {'ms': 12}, id='two-digit-ms'),
        param('13', 'MM', {'month': 13}, id='out-of-range'),
    ]
)
def test_parse_template(value, template, expected):
    assert parse_template(value, template, EN) == expected


def test_parse_template_locale():
    assert parse_template('12월 25일', 'MMMM D일', KO_KR) == {
        'month': 12, 'date': 25
    }
    assert parse_template('오후 3시', 'A h시', KO_KR) == {'hours': 15}


@pytest.mark.parametrize(
    'value, template, error',
    [
        param('2020 20', 'YYYY YY', DuplicateTokenError, id='dup-year'),
        param('3 03', 'M MM', DuplicateTokenError, id='dup-month'),
        param('2020--04', 'YYYY-MM-DD', TokenValueError, id='empty'),
        param('2020-3-04', 'YYYY-MM-DD', TokenValueError, id='width'),
        param('2020-061', 'YYYY-DDD', None, id='unpadded-any-width'),
        param('2020-61', 'YYYY-DDDD', TokenValueError, id='width-3'),
        param('2020-ab-04', 'YYYY-MM-DD', TokenValueError, id='not-digits'),
        param('2020-03-04x', 'YYYY-MM-DD', TokenValueError, id='trailing'),
        param('Foo 4', 'MMMM D', TokenValueError, id='unknown-name'),
        param('Xyz 4', 'ddd D', TokenValueError, id='unknown-day'),
        param('7', 'd', TokenValueError, id='day-of-week-range'),
        param('2020X05', 'YYYYWww', TokenValueError, id='week-prefix'),
        param('2020/03/04', 'YYYY-MM-DD', TemplateSyntaxError, id='literal'),
        param('x2020', '-YYYY', TemplateSyntaxError, id='leading-literal'),
        param('2020.x', 'YYYY.', TemplateSyntaxError, id='trailing-text'),
        param('2020', '[]', TemplateSyntaxError, id='no-tokens'),
        param(
            '03:15 pm', 'hh:mm A', TokenValueError,
            id='lower-meridiem-for-A'
        ),
        param(
            '03:15 PM', 'hh:mm a', TokenValueError,
            id='upper-meridiem-for-a'
        ),
    ]
)
def test_parse_template_error(value, template, error):
    if error is None:
        parse_template(value, template, EN)
        return
    with pytest.raises(error):
        parse_template(value, template, EN)


def test_parse_errors_are_template_errors():
    for error in (DuplicateTokenError, TemplateSyntaxError, TokenValueError):
        assert issubclass(error, TemplateError)
        assert issubclass(error, ValueError)


@pytest.mark.parametrize(
    'value, template, expected',
    [
        param(
            '2020-13-01', 'YYYY-MM-DD', (2021, 1, 1), id='month-overflow'
        ),
        param('2020-05-00', 'YYYY-MM-DD', (2020, 4, 30), id='date-zero'),
        param('15:30', 'HH:mm', (1970, 1, 1), id='defaults'),
        param('2021-060', 'YYYY-DDDD', (2021, 3, 1), id='day-of-year'),
        param('5', 'YY', (1905, 1, 1), id='one-digit-year'),
    ]
)
def test_instant_from_template(utc, value, template, expected):
    instant = Instant(value, template)
    assert (instant.year, instant.month, instant.date) == expected


def test_instant_from_template_fields(utc):
    instant = Instant('03:15:20.5 PM', 'hh:mm:ss.S A')
    assert instant.to_dict() == {
        'year': 1970,
        'month': 1,
        'date': 1,
        'hours': 15,
        'minutes': 15,
        'seconds': 20,
        'ms': 5,
    }


def test_instant_from_template_is_local(kst):
    instant = Instant('1970-01-01 09', 'YYYY-MM-DD HH')
    assert instant.value_of() == 0


def test_instant_from_template_locale(utc):
    instant = Instant('3월 4 2020', 'MMMM D YYYY', locale='ko-kr')
    assert (instant.year, instant.month, instant.date) == (2020, 3, 4)


def test_instant_from_template_not_a_string(utc):
    with pytest.raises(TypeError):
        Instant(20200304, 'YYYYMMDD')


@pytest.mark.parametrize(
    'template, fields',
    [
        ('YYYY-MM-DD HH:mm:ss.SSS', None),
        ('YYYYMMDDHHmmssSSS', None),
        ('D/M/YYYY H:m:s.S', None),
        ('MMMM D YYYY hh:mm:ss A', ('year', 'month', 'date', 'hours')),
        ('MMM DD YYYY h a', ('year', 'month', 'date', 'hours')),
        ('dddd YYYY-DDDD', ('year', 'month', 'date')),
        ('YYYY-DDD', ('year', 'month', 'date')),
        ('YYYY-Q', ('year',)),
    ]
)
def test_format_parse_round_trip(utc, template, fields):
    instant = Instant({
        'year': 2020,
        'month': 3,
        'date': 4,
        'hours': 15,
        'minutes': 6,
        'seconds': 7,
        'ms': 89,
    })
    parsed = Instant(instant.format(template), template)
    for field in fields or instant.to_dict():
        assert getattr(parsed, field) == getattr(instant, field)


def test_format_parse_round_trip_week(utc):
    instant = Instant({'year': 2020, 'month': 3, 'date': 4})
    parsed = Instant(instant.format('YYYY Www'), 'YYYY Www')
    assert parsed.week_of_year == instant.week_of_year
    assert parsed.start_of('week') == instant.start_of('week')
