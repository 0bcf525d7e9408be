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
"""An instant in civil time with local calendar fields.

An Instant wraps a count of milliseconds since 1970-01-01T00:00:00Z. Its
calendar fields (year, month, date, hours, minutes, seconds, ms) are read
in local time, local time being UTC shifted by the fixed offset of the
configuration the instant was created with.

Fields may be set out of range, the excess rolls into the neighbouring
field::

    >>> from almanac.civil.config import CalendarConfig
    >>> cfg = CalendarConfig(utc_offset=0)
    >>> instant = Instant({'year': 2020, 'month': 13}, config=cfg)
    >>> instant.year, instant.month, instant.date
    (2021, 1, 1)

``set`` and ``add`` change the instant in place and return it; everything
else (``start_of``, ``end_of``, ``utc``, ``copy``, the ``+`` and ``-``
operators) returns a new instant.
"""

from datetime import date as Date, datetime, timedelta, timezone
import math
from time import time
from typing import Dict, List, Mapping, Optional, Tuple, Union

from almanac.civil import LOG
from almanac.civil.calendar import (
    day_of_week,
    day_of_year,
    days_in_year,
    last_date_of_month,
    quarter_of_month,
    week_index,
    week_of_month,
    week_of_year,
)
from almanac.civil.config import CalendarConfig, glbl_cfg
from almanac.civil.duration import Duration
from almanac.civil.exceptions import InvalidInstantError, UnitError
from almanac.civil.format import format_instant, parse_template
from almanac.civil.iso8601 import parse_instant_string
from almanac.civil.locale import DEFAULT_LOCALE, LocaleRecord, LocaleSwitch
from almanac.civil.normalize import fields_to_ms, ms_to_fields
from almanac.civil.units import (
    DEFAULT_YEAR,
    DURATION_KEYS,
    DURATION_TO_INSTANT,
    INSTANT_KEYS,
    MAX_EPOCH_MS,
    MS_IN_DAY,
    MS_IN_HOUR,
    MS_IN_MINUTE,
    MS_IN_SECOND,
    InstantUnit,
    get_instant_unit,
)


FIELD_DEFAULTS = {
    'year': DEFAULT_YEAR,
    'month': 1,
    'date': 1,
    'hours': 0,
    'minutes': 0,
    'seconds': 0,
    'ms': 0,
}

# linear units for diff
UNIT_MS = {
    InstantUnit.Date: MS_IN_DAY,
    InstantUnit.Hours: MS_IN_HOUR,
    InstantUnit.Minutes: MS_IN_MINUTE,
    InstantUnit.Seconds: MS_IN_SECOND,
    InstantUnit.Ms: 1,
}

EPOCH = datetime(1970, 1, 1, tzinfo=timezone.utc)


def _check_record(
    record: Optional[Mapping],
    fields: Dict[str, int],
    allowed: Tuple[str, ...] = INSTANT_KEYS,
) -> Dict[str, int]:
    """Merge a record and keyword fields, checking keys and values."""
    merged = dict(record or {}, **fields)
    for key, value in merged.items():
        if key not in allowed:
            raise UnitError(key, allowed)
        if isinstance(value, bool) or not isinstance(value, int):
            raise TypeError(f'{key} must be an integer, got {value!r}')
    return merged


def _field(name: str, doc: str) -> property:
    index = INSTANT_KEYS.index(name)

    def fget(self) -> int:
        return self._fields(f'read {name}')[index]

    def fset(self, value: int) -> None:
        self.set({name: value})

    return property(fget, fset, doc=doc)


class Instant:
    """A point in civil time.

    Args:
        source:
            What to create the instant from:

            * None: the current time.
            * int or float: milliseconds since the epoch.
            * datetime.datetime or datetime.date: naive values are read as
              local time, aware values are converted.
            * Instant: a copy of the instant (including its locale).
            * mapping: a field record, missing fields take default values
              (year 1970, month and date 1, time fields 0).
            * str: one of the ISO 8601 forms in
              :mod:`almanac.civil.iso8601`, or anything if template is
              given.

            Anything else (or a string in an unrecognised form) gives an
            invalid instant, see ``valid``.
        template:
            A format template describing the source string, unmatched
            strings raise TemplateError.
        config:
            The calendar configuration, defaults to the shared one.
        locale:
            A locale tag for this instant, otherwise the configuration's
            default locale is used (and followed if it changes).

    """

    year = _field('year', 'Local calendar year.')
    month = _field('month', 'Local month, 1-12.')
    date = _field('date', 'Local day of the month.')
    hours = _field('hours', 'Local hours, 0-23.')
    minutes = _field('minutes', 'Local minutes, 0-59.')
    seconds = _field('seconds', 'Local seconds, 0-59.')
    ms = _field('ms', 'Local milliseconds, 0-999.')

    def __init__(
        self,
        source=None,
        template: Optional[str] = None,
        *,
        config: Optional[CalendarConfig] = None,
        locale: Optional[str] = None,
    ) -> None:
        if config is None and isinstance(source, Instant):
            config = source._config
        self._config = config or glbl_cfg()
        if isinstance(source, Instant) and locale is None:
            self._locale = source._locale.copy()
        else:
            self._locale = LocaleSwitch(self._config.registry)
            if locale is not None:
                self._locale.request(locale)
        self._ms: Optional[int] = None

        if template is not None:
            if not isinstance(source, str):
                raise TypeError(
                    f'a template can only be applied to a string,'
                    f' got {source!r}'
                )
            self._from_record(
                parse_template(source, template, self.locale_record)
            )
        elif source is None:
            self._ms = int(time() * 1000)
        elif isinstance(source, Instant):
            self._ms = source._ms
        elif isinstance(source, datetime):
            self._ms = self._datetime_to_ms(source)
        elif isinstance(source, Date):
            self._from_record({
                'year': source.year,
                'month': source.month,
                'date': source.day,
            })
        elif isinstance(source, bool):
            LOG.debug(f'cannot create an instant from {source!r}')
        elif isinstance(source, (int, float)):
            if math.isfinite(source):
                self._ms = int(source)
            else:
                LOG.debug(f'cannot create an instant from {source!r}')
        elif isinstance(source, str):
            self._ms = parse_instant_string(
                source,
                self._config.utc_offset_ms,
                ms_to_fields(
                    int(time() * 1000) + self._config.utc_offset_ms
                )[0],
            )
            if self._ms is None:
                LOG.debug(f'unrecognised date-time string: {source!r}')
        elif isinstance(source, Mapping):
            self._from_record(source)
        else:
            LOG.debug(f'cannot create an instant from {source!r}')
        self._check_range()

    @classmethod
    def from_datetime(cls, value: datetime, **kwargs) -> 'Instant':
        """Create an instant from a datetime.datetime."""
        return cls(value, **kwargs)

    def _datetime_to_ms(self, value: datetime) -> int:
        if value.utcoffset() is not None:
            return (value - EPOCH) // timedelta(milliseconds=1)
        return fields_to_ms(
            value.year,
            value.month,
            value.day,
            value.hour,
            value.minute,
            value.second,
            value.microsecond // 1000,
        ) - self._config.utc_offset_ms

    def _from_record(self, record: Mapping) -> None:
        fields = dict(FIELD_DEFAULTS)
        fields.update(_check_record(record, {}))
        self._ms = fields_to_ms(**fields) - self._config.utc_offset_ms

    def _check_range(self) -> None:
        if self._ms is not None and abs(self._ms) > MAX_EPOCH_MS:
            LOG.debug(f'instant out of range: {self._ms}ms')
            self._ms = None

    def _spawn(self, source) -> 'Instant':
        """Return a new instant sharing this one's config and locale."""
        instant = Instant(source, config=self._config)
        instant._locale = self._locale.copy()
        return instant

    def _fields(
        self, operation: str = 'read fields'
    ) -> Tuple[int, int, int, int, int, int, int]:
        if self._ms is None:
            raise InvalidInstantError(operation)
        return ms_to_fields(self._ms + self._config.utc_offset_ms)

    def _local_days(self) -> int:
        if self._ms is None:
            raise InvalidInstantError('read day')
        return (self._ms + self._config.utc_offset_ms) // MS_IN_DAY

    @property
    def valid(self) -> bool:
        """False if the instant does not represent a calendar instant."""
        return self._ms is not None

    def value_of(self) -> int:
        """Return milliseconds since the epoch."""
        if self._ms is None:
            raise InvalidInstantError('read value')
        return self._ms

    def __int__(self) -> int:
        return self.value_of()

    def to_dict(self) -> Dict[str, int]:
        """Return the local field record."""
        return dict(zip(INSTANT_KEYS, self._fields()))

    # derived fields

    @property
    def day(self) -> int:
        """Day of the week, 0 (Sunday) to 6 (Saturday)."""
        return day_of_week(self._local_days())

    @property
    def quarter(self) -> int:
        return quarter_of_month(self.month)

    @property
    def day_of_year(self) -> int:
        return day_of_year(*self._fields()[:3])

    @property
    def week_of_year(self) -> int:
        """Week of the year, weeks start on Sunday, Jan 1st is in week 1."""
        return week_of_year(*self._fields()[:3])

    @property
    def week_of_month(self) -> int:
        return week_of_month(*self._fields()[:3])

    @property
    def last_date(self) -> int:
        """The last date of the month."""
        return last_date_of_month(*self._fields()[:2])

    @property
    def days_in_year(self) -> int:
        return days_in_year(self.year)

    @property
    def is_am(self) -> bool:
        return self.hours < 12

    @property
    def hours12(self) -> int:
        hours = self.hours
        return hours % 12 if hours > 12 else hours

    @property
    def hours24(self) -> int:
        return self.hours

    @property
    def timezone_offset(self) -> int:
        """Local UTC offset in minutes east of UTC."""
        return self._config.utc_offset

    @property
    def timezone_offset_in_hours(self) -> float:
        return self._config.utc_offset / 60

    # mutation

    def set(self, record: Optional[Mapping] = None, **fields) -> 'Instant':
        """Set local fields, unspecified fields keep their values.

        Out of range values roll over, e.g. ``date=0`` is the last day of
        the previous month.

        Returns:
            This instant.

        """
        fields = _check_record(record, fields)
        values = dict(zip(INSTANT_KEYS, self._fields('set fields')))
        values.update(fields)
        self._ms = fields_to_ms(**values) - self._config.utc_offset_ms
        self._check_range()
        return self

    def add(
        self, record: Union[Duration, Mapping, None] = None, **fields
    ) -> 'Instant':
        """Add to local fields.

        Accepts a Duration or a record of instant fields (``month=1``) or
        duration components (``months=1``).

        Returns:
            This instant.

        """
        if isinstance(record, Duration):
            record = record.to_dict()
        delta = _check_record(
            record, fields, INSTANT_KEYS + DURATION_KEYS[:3]
        )
        values = dict(zip(INSTANT_KEYS, self._fields('add fields')))
        for key, value in delta.items():
            values[DURATION_TO_INSTANT.get(key, key)] += value
        return self.set(values)

    def copy(self) -> 'Instant':
        return Instant(self)

    def utc(self) -> 'Instant':
        """Return an instant whose local fields show this instant in UTC."""
        if self._ms is None:
            return self.copy()
        return self._spawn(self._ms - self._config.utc_offset_ms)

    def __add__(self, other):
        if isinstance(other, (Duration, Mapping)):
            return self.copy().add(other)
        return NotImplemented

    def __sub__(self, other):
        if isinstance(other, Instant):
            return self.diff(other)
        if isinstance(other, Duration):
            other = other.to_dict()
        if isinstance(other, Mapping):
            return self.copy().add({
                key: -value for key, value in other.items()
            })
        return NotImplemented

    # units

    def start_of(self, unit: Union[str, InstantUnit] = 'date') -> 'Instant':
        """Return the first millisecond of the unit containing this instant.
        """
        unit = get_instant_unit(unit)
        fields = self._fields(f'find start of {unit.value}')
        if unit is InstantUnit.Quarter:
            return self._spawn({
                'year': fields[0],
                'month': (quarter_of_month(fields[1]) - 1) * 3 + 1,
            })
        if unit is InstantUnit.Week:
            return self._spawn(
                dict(zip(INSTANT_KEYS[:3], fields))
            ).add(date=-self.day)
        index = INSTANT_KEYS.index(unit.value)
        return self._spawn(
            dict(zip(INSTANT_KEYS[:index + 1], fields))
        )

    def end_of(self, unit: Union[str, InstantUnit] = 'date') -> 'Instant':
        """Return the last millisecond of the unit containing this instant.
        """
        unit = get_instant_unit(unit)
        fields = self._fields(f'find end of {unit.value}')
        if unit is InstantUnit.Quarter:
            return self._spawn({
                'year': fields[0],
                'month': quarter_of_month(fields[1]) * 3 + 1,
                'ms': -1,
            })
        if unit is InstantUnit.Week:
            return self.start_of(unit).add(date=7, ms=-1)
        if unit is InstantUnit.Ms:
            return self._spawn(dict(zip(INSTANT_KEYS[:-1], fields), ms=999))
        index = INSTANT_KEYS.index(unit.value)
        record = dict(zip(INSTANT_KEYS[:index + 1], fields))
        record[unit.value] += 1
        record['ms'] = -1
        return self._spawn(record)

    # comparison

    def diff(self, other, unit: Union[str, InstantUnit] = 'ms') -> int:
        """Return the number of whole units from other to this instant.

        Negative if this instant is earlier. Year, quarter and month
        differences compare calendar fields (Jan 31st to Feb 1st is one
        month); week differences count Sunday boundaries crossed; other
        units divide the millisecond difference, rounding down.
        """
        unit = get_instant_unit(unit)
        if not isinstance(other, Instant):
            other = self._spawn(other)
        this = self._fields(f'diff by {unit.value}')
        that = other._fields(f'diff by {unit.value}')
        if unit is InstantUnit.Year:
            return this[0] - that[0]
        if unit is InstantUnit.Quarter:
            return (
                (this[0] - that[0]) * 4
                + quarter_of_month(this[1]) - quarter_of_month(that[1])
            )
        if unit is InstantUnit.Month:
            return (this[0] - that[0]) * 12 + this[1] - that[1]
        if unit is InstantUnit.Week:
            return (
                week_index(self._local_days())
                - week_index(other._local_days())
            )
        return (self._ms - other._ms) // UNIT_MS[unit]

    def is_equal(self, other, unit='ms') -> bool:
        return self.diff(other, unit) == 0

    def is_before(self, other, unit='ms') -> bool:
        return self.diff(other, unit) < 0

    def is_before_or_equal(self, other, unit='ms') -> bool:
        return self.diff(other, unit) <= 0

    def is_after(self, other, unit='ms') -> bool:
        return self.diff(other, unit) > 0

    def is_after_or_equal(self, other, unit='ms') -> bool:
        return self.diff(other, unit) >= 0

    def _sorted(self, first, second) -> List['Instant']:
        bounds = [
            bound if isinstance(bound, Instant) else self._spawn(bound)
            for bound in (first, second)
        ]
        return sorted(bounds, key=Instant.value_of)

    def is_between(self, first, second, unit='ms') -> bool:
        """True if strictly between the two bounds (in any order)."""
        lower, upper = self._sorted(first, second)
        return self.diff(lower, unit) > 0 and self.diff(upper, unit) < 0

    def is_between_or_equal(self, first, second, unit='ms') -> bool:
        lower, upper = self._sorted(first, second)
        return self.diff(lower, unit) >= 0 and self.diff(upper, unit) <= 0

    def __eq__(self, other):
        if not isinstance(other, Instant):
            return NotImplemented
        return self._ms is not None and self._ms == other._ms

    __hash__ = None

    def __lt__(self, other):
        if not isinstance(other, Instant):
            return NotImplemented
        return self.value_of() < other.value_of()

    def __le__(self, other):
        if not isinstance(other, Instant):
            return NotImplemented
        return self.value_of() <= other.value_of()

    def __gt__(self, other):
        if not isinstance(other, Instant):
            return NotImplemented
        return self.value_of() > other.value_of()

    def __ge__(self, other):
        if not isinstance(other, Instant):
            return NotImplemented
        return self.value_of() >= other.value_of()

    # calendars

    def get_year_calendar(self) -> List['Instant']:
        """Return midnight of every day in this instant's year."""
        year = self.year
        return [
            self._spawn({'year': year, 'month': 1, 'date': date})
            for date in range(1, days_in_year(year) + 1)
        ]

    def get_month_calendar(self) -> List['Instant']:
        """Return midnight of every day in this instant's month."""
        year, month = self._fields('build calendar')[:2]
        return [
            self._spawn({'year': year, 'month': month, 'date': date})
            for date in range(1, last_date_of_month(year, month) + 1)
        ]

    # locale

    def locale(self, tag: Optional[str] = None) -> str:
        """Get or set this instant's locale tag.

        Setting a tag that is not loaded starts loading it, the tag is
        reported straight away and reverted if the load fails.

        Returns:
            The locale tag in use.

        """
        if tag is not None:
            self._locale.request(tag)
        return self._locale.tag or self._config.locale

    @property
    def is_locale_loading(self) -> bool:
        """True while this instant's locale is loading."""
        if self._locale.tag is None:
            return self._config.locale_switch.loading
        return self._locale.loading

    async def wait_for_locale(self) -> None:
        """Wait for any pending locale load to settle."""
        await self._locale.wait()
        await self._config.locale_switch.wait()

    @property
    def locale_record(self) -> LocaleRecord:
        """The locale record used for names and display templates.

        The default locale is used while the locale is loading.
        """
        tag = self.locale()
        record = self._config.registry.get(tag)
        if record is None:
            LOG.debug(
                f'locale {tag!r} is not loaded,'
                f' using {DEFAULT_LOCALE!r} for names'
            )
            record = self._config.registry.get(DEFAULT_LOCALE)
        return record

    # formatting

    def format(self, template: str) -> str:
        """Render local fields through a format template.

        See :mod:`almanac.civil.format` for the tokens.
        """
        if self._ms is None:
            raise InvalidInstantError('format')
        return format_instant(self, template, self.locale_record)

    def to_locale_datetime_string(self) -> str:
        return self.format(self.locale_record.date_time_format)

    def to_locale_date_string(self) -> str:
        return self.format(self.locale_record.date_format)

    def to_locale_time_string(self) -> str:
        return self.format(self.locale_record.time_format)

    def isoformat(self) -> str:
        """Return the UTC ISO 8601 representation.

        Examples:
            >>> Instant(1000).isoformat()
            '1970-01-01T00:00:01.000Z'

        """
        year, month, date, hours, minutes, seconds, ms = ms_to_fields(
            self.value_of()
        )
        if 0 <= year <= 9999:
            year_str = f'{year:04d}'
        else:
            year_str = f'{year:+07d}'
        return (
            f'{year_str}-{month:02d}-{date:02d}'
            f'T{hours:02d}:{minutes:02d}:{seconds:02d}.{ms:03d}Z'
        )

    def __str__(self) -> str:
        if self._ms is None:
            return 'Invalid Date'
        return self.isoformat()

    def __repr__(self) -> str:
        return f'<Instant {self}>'
