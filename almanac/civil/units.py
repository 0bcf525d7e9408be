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
"""Unit names, parameter key orders and calendar constants."""

from enum import Enum
from typing import Union

from almanac.civil.exceptions import UnitError


MS_IN_SECOND = 1000
MS_IN_MINUTE = 60 * MS_IN_SECOND
MS_IN_HOUR = 60 * MS_IN_MINUTE
MS_IN_DAY = 24 * MS_IN_HOUR

# 100,000,000 days either side of the epoch
MAX_EPOCH_MS = 8_640_000_000_000_000

# year used when a field record does not name one
DEFAULT_YEAR = 1970


class InstantUnit(Enum):
    """Units understood by start_of, end_of and diff."""

    Year = 'year'
    Quarter = 'quarter'
    Month = 'month'
    Week = 'week'
    Date = 'date'
    Hours = 'hours'
    Minutes = 'minutes'
    Seconds = 'seconds'
    Ms = 'ms'


class DurationUnit(Enum):
    """Components of a duration, largest first."""

    Years = 'years'
    Months = 'months'
    Dates = 'dates'
    Hours = 'hours'
    Minutes = 'minutes'
    Seconds = 'seconds'
    Ms = 'ms'


# field record keys, most significant first
INSTANT_KEYS = (
    'year', 'month', 'date', 'hours', 'minutes', 'seconds', 'ms'
)
DURATION_KEYS = tuple(unit.value for unit in DurationUnit)

# duration component -> instant field it is added to
DURATION_TO_INSTANT = dict(zip(DURATION_KEYS, INSTANT_KEYS))


def get_instant_unit(unit: Union[str, InstantUnit]) -> InstantUnit:
    """Return the InstantUnit for a unit name.

    Examples:
        >>> get_instant_unit('month')
        <InstantUnit.Month: 'month'>
        >>> get_instant_unit(InstantUnit.Week)
        <InstantUnit.Week: 'week'>

    """
    if isinstance(unit, InstantUnit):
        return unit
    try:
        return InstantUnit(unit)
    except ValueError:
        raise UnitError(
            unit, [item.value for item in InstantUnit]
        ) from None
