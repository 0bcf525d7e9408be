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
"""Resolve raw, possibly out-of-range, calendar and duration fields.

Two cascades live here:

* Instant fields fold into a single linear millisecond count, so month 13
  is January of the next year and date 0 is the last day of the previous
  month. Each field overflows into its neighbour with the calendar's real
  sizes (variable month lengths, leap years).
* Duration components carry and borrow with the fixed conversion factors
  1000 ms, 60 s, 60 min, 24 h, 30 days and 12 months.
"""

from typing import Dict, Tuple

from almanac.civil.calendar import (
    civil_from_days,
    days_from_civil,
    normalize_month,
)
from almanac.civil.units import (
    DURATION_KEYS,
    MS_IN_DAY,
    MS_IN_HOUR,
    MS_IN_MINUTE,
    MS_IN_SECOND,
)


# (component, size, next component up)
DURATION_CASCADE = (
    ('ms', 1000, 'seconds'),
    ('seconds', 60, 'minutes'),
    ('minutes', 60, 'hours'),
    ('hours', 24, 'dates'),
    ('dates', 30, 'months'),
    ('months', 12, 'years'),
)


def fields_to_ms(
    year: int,
    month: int,
    date: int,
    hours: int = 0,
    minutes: int = 0,
    seconds: int = 0,
    ms: int = 0,
) -> int:
    """Return the linear millisecond count of (possibly overflowed) fields.

    The result counts from 1970-01-01T00:00:00.000 in whatever frame the
    fields are expressed in; no UTC offset is applied.

    Examples:
        >>> fields_to_ms(1970, 1, 1, 0, 0, 1)
        1000
        >>> fields_to_ms(2019, 13, 1) == fields_to_ms(2020, 1, 1)
        True
        >>> fields_to_ms(2020, 3, 0) == fields_to_ms(2020, 2, 29)
        True

    """
    year, month = normalize_month(year, month)
    days = days_from_civil(year, month, date)
    return (
        days * MS_IN_DAY
        + hours * MS_IN_HOUR
        + minutes * MS_IN_MINUTE
        + seconds * MS_IN_SECOND
        + ms
    )


def ms_to_fields(value: int) -> Tuple[int, int, int, int, int, int, int]:
    """Split a linear millisecond count into in-range calendar fields.

    Examples:
        >>> ms_to_fields(-1)
        (1969, 12, 31, 23, 59, 59, 999)

    """
    days, remainder = divmod(value, MS_IN_DAY)
    year, month, date = civil_from_days(days)
    hours, remainder = divmod(remainder, MS_IN_HOUR)
    minutes, remainder = divmod(remainder, MS_IN_MINUTE)
    seconds, ms = divmod(remainder, MS_IN_SECOND)
    return year, month, date, hours, minutes, seconds, ms


def normalize_duration(values: Dict[str, int]) -> Dict[str, int]:
    """Carry and borrow duration components into their canonical ranges.

    A component at or above its size carries the excess into the next
    component up; a negative component borrows from it. Absent components
    take part only when a carry or borrow reaches them. Zero components are
    dropped from the result, which is ordered largest first.

    Examples:
        >>> normalize_duration({'months': 14})
        {'years': 1, 'months': 2}
        >>> normalize_duration({'dates': 38})
        {'months': 1, 'dates': 8}
        >>> normalize_duration({'hours': 1, 'minutes': -30})
        {'minutes': 30}

    """
    values = dict(values)
    for key, size, upper in DURATION_CASCADE:
        value = values.get(key)
        if value is None:
            continue
        carry, values[key] = divmod(value, size)
        if carry:
            values[upper] = values.get(upper, 0) + carry
    return {
        key: values[key]
        for key in DURATION_KEYS
        if values.get(key)
    }
