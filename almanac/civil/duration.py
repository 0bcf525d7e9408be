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
"""Calendar-relative spans of time.

A Duration is a sparse record of non-negative components (years, months,
dates, hours, minutes, seconds, ms). Components are kept normalised: each
is carried into the next one up once it reaches its size, with a month
counting as exactly 30 days. Zero components are dropped.

Examples:
    >>> Duration('P14M').to_dict()
    {'years': 1, 'months': 2}
    >>> Duration({'dates': 38}).to_dict()
    {'months': 1, 'dates': 8}
    >>> str(Duration({'hours': 25, 'ms': 1500}))
    'P1DT1H1.5S'

"""

from typing import Dict, List, Mapping, Optional

from almanac.civil.exceptions import DurationError, UnitError
from almanac.civil.iso8601 import parse_duration_string
from almanac.civil.normalize import normalize_duration
from almanac.civil.units import (
    DURATION_KEYS,
    MS_IN_DAY,
    MS_IN_HOUR,
    MS_IN_MINUTE,
    MS_IN_SECOND,
)


# a month is treated as 30 days, a year as 12 such months
MS_IN_MONTH = 30 * MS_IN_DAY
MS_IN_YEAR = 12 * MS_IN_MONTH

COMPONENT_MS = {
    'years': MS_IN_YEAR,
    'months': MS_IN_MONTH,
    'dates': MS_IN_DAY,
    'hours': MS_IN_HOUR,
    'minutes': MS_IN_MINUTE,
    'seconds': MS_IN_SECOND,
    'ms': 1,
}

DATE_DESIGNATORS = (('years', 'Y'), ('months', 'M'), ('dates', 'D'))
TIME_DESIGNATORS = (('hours', 'H'), ('minutes', 'M'))

# field record keys which only an instant has
INSTANT_ONLY_KEYS = ('year', 'month', 'date')


def _check_components(record: Mapping) -> Dict[str, int]:
    values = {}
    for key, value in record.items():
        if key not in DURATION_KEYS:
            raise UnitError(key, DURATION_KEYS)
        if isinstance(value, bool) or not isinstance(value, int):
            raise DurationError(f'component {key}', value)
        if value < 0:
            raise DurationError(f'component {key}', value)
        values[key] = value
    return values


def _component(name: str) -> property:

    def fget(self) -> int:
        return self._values.get(name, 0)

    def fset(self, value: Optional[int]) -> None:
        if value is not None and (
            isinstance(value, bool) or not isinstance(value, int)
        ):
            raise DurationError(f'component {name}', value)
        values = dict(self._values)
        values[name] = value or 0
        self._set_values(values)

    return property(fget, fset, doc=f'The {name} component (0 if absent).')


class Duration:
    """A span of years, months, dates, hours, minutes, seconds and ms.

    Args:
        source:
            * None: the zero duration.
            * Duration: a copy.
            * mapping: component values, which must be non-negative
              integers.
            * str: ``PnYnMnDTnHnMnS`` (any subset of components), ``PnW``
              or the alternative form ``PYYYY-MM-DDThh:mm:ss``.

    Raises:
        DurationError: for negative components or unrecognised strings.

    Component setters accept negative values; these borrow from the next
    component up.
    """

    years = _component('years')
    months = _component('months')
    dates = _component('dates')
    hours = _component('hours')
    minutes = _component('minutes')
    seconds = _component('seconds')
    ms = _component('ms')

    def __init__(self, source=None) -> None:
        if source is None:
            values = {}
        elif isinstance(source, Duration):
            values = dict(source._values)
        elif isinstance(source, str):
            values = parse_duration_string(source)
        elif isinstance(source, Mapping):
            values = _check_components(source)
        else:
            raise DurationError('source', source)
        self._values: Dict[str, int] = {}
        self._set_values(values)

    def _set_values(self, values: Dict[str, int]) -> None:
        values = normalize_duration(values)
        if values and next(iter(values.values())) < 0:
            raise DurationError('net value', values)
        self._values = values

    def to_dict(self) -> Dict[str, int]:
        """Return the present components, largest first."""
        return dict(self._values)

    def value_of(self) -> int:
        """Return the length in milliseconds.

        Months count as 30 days and years as 360, so this is only an
        approximation for durations with years or months.
        """
        return sum(
            value * COMPONENT_MS[key]
            for key, value in self._values.items()
        )

    def __int__(self) -> int:
        return self.value_of()

    def add(self, other):
        """Add a duration, or apply this duration to an instant.

        Args:
            other:
                A Duration or component record: returns a new Duration.
                An Instant: adds this duration to it in place and returns
                it. An instant field record: returns a new Instant.

        """
        from almanac.civil.instant import Instant
        if isinstance(other, Instant):
            return other.add(self)
        if isinstance(other, Mapping) and any(
            key in INSTANT_ONLY_KEYS for key in other
        ):
            return Instant(other).add(self)
        other = Duration(other)
        values = dict(self._values)
        for key, value in other._values.items():
            values[key] = values.get(key, 0) + value
        return Duration(values)

    def divide(self, count: int) -> List['Duration']:
        """Split into count durations.

        The parts are as equal as possible: the first ``value % count``
        parts are one millisecond longer than the rest so the parts always
        add up to this duration's value.

        Examples:
            >>> [int(part) for part in Duration({'ms': 5}).divide(3)]
            [2, 2, 1]

        """
        if isinstance(count, bool) or not isinstance(count, int) or (
            count < 1
        ):
            raise DurationError('divisor', count)
        base, remainder = divmod(self.value_of(), count)
        return [
            Duration({'ms': base + 1 if index < remainder else base})
            for index in range(count)
        ]

    def __add__(self, other):
        from almanac.civil.instant import Instant
        if isinstance(other, Instant):
            return other.copy().add(self)
        if isinstance(other, (Duration, Mapping)):
            return self.add(other)
        return NotImplemented

    def __floordiv__(self, count: int) -> 'Duration':
        """Return the largest of the parts from ``divide(count)``.

        This is the first part, which is one millisecond longer than the
        smallest parts when the division leaves a remainder.
        """
        return self.divide(count)[0]

    def __eq__(self, other):
        if not isinstance(other, Duration):
            return NotImplemented
        return self._values == other._values

    __hash__ = None

    def __str__(self) -> str:
        values = self._values
        if not values:
            return 'P0D'
        ret = 'P' + ''.join(
            f'{values[key]}{designator}'
            for key, designator in DATE_DESIGNATORS
            if key in values
        )
        time_part = ''.join(
            f'{values[key]}{designator}'
            for key, designator in TIME_DESIGNATORS
            if key in values
        )
        if 'seconds' in values or 'ms' in values:
            seconds = str(values.get('seconds', 0))
            if 'ms' in values:
                seconds += f".{values['ms']:03d}".rstrip('0')
            time_part += f'{seconds}S'
        if time_part:
            ret += f'T{time_part}'
        return ret

    def __repr__(self) -> str:
        return f'<Duration {self}>'
