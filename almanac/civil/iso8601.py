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
"""Bare string forms of instants and durations.

Instants
   ``YYYY-MM-DD`` and ``YYYY-MM``
      UTC midnight of the date (or of the first of the month).
   ``--MM-DD``
      Local midnight of that date in the current year.
   ``YYYY-MM-DDTHH:mm[:ss[.SSS]][Z]``
      Local time, or UTC time if the string ends in ``Z``.

Durations
   ``PnYnMnDTnHnMnS``
      Any subset of components, seconds may carry up to three decimal
      places.
   ``PnW``
      Weeks, stored as a number of days.
   ``PYYYYMMDDThhmmss`` / ``PYYYY-MM-DDThh:mm:ss``
      The alternative form, read with the isodatetime duration parser.
"""

import re
from typing import Dict, Optional

from metomi.isodatetime.exceptions import IsodatetimeError
from metomi.isodatetime.parsers import DurationParser

from almanac.civil.calendar import last_date_of_month
from almanac.civil.exceptions import DurationError
from almanac.civil.normalize import fields_to_ms


REC_DATE = re.compile(
    r'^(?P<year>\d{4})-(?P<month>\d{2})(?:-(?P<date>\d{2}))?$'
)
REC_MONTH_DATE = re.compile(r'^--(?P<month>\d{2})-(?P<date>\d{2})$')
REC_DATE_TIME = re.compile(
    r'^(?P<year>\d{4})-(?P<month>\d{2})-(?P<date>\d{2})'
    r'T(?P<hours>\d{2}):(?P<minutes>\d{2})'
    r'(?::(?P<seconds>\d{2})(?:\.(?P<ms>\d{1,3}))?)?'
    r'(?P<utc>Z)?$'
)

REC_DURATION = re.compile(
    r'^P(?:(?P<years>\d+)Y)?(?:(?P<months>\d+)M)?(?:(?P<dates>\d+)D)?'
    r'(?:T(?:(?P<hours>\d+)H)?(?:(?P<minutes>\d+)M)?'
    r'(?:(?P<seconds>\d+)(?:[.,](?P<ms>\d{1,3}))?S)?)?$'
)
REC_DURATION_WEEKS = re.compile(r'^P(?P<weeks>\d+)W$')
REC_DURATION_ALTERNATIVE = re.compile(
    r'^P\d{4}-?\d{2}-?\d{2}T\d{2}:?\d{2}:?\d{2}$'
)

# upper bound (inclusive) of each field
FIELD_LIMITS = {
    'month': 12,
    'date': 31,
    'hours': 23,
    'minutes': 59,
    'seconds': 59,
}


def _fraction_to_ms(fraction: Optional[str]) -> int:
    if not fraction:
        return 0
    return int(fraction.ljust(3, '0'))


def _in_range(fields: Dict[str, int]) -> bool:
    for key, limit in FIELD_LIMITS.items():
        value = fields.get(key)
        if value is None:
            continue
        if value > limit or (key in ('month', 'date') and value < 1):
            return False
    return fields['date'] <= last_date_of_month(
        fields['year'], fields['month']
    )


def parse_instant_string(
    text: str, utc_offset_ms: int, current_year: int
) -> Optional[int]:
    """Return the epoch milliseconds described by a bare string.

    Args:
        text:
            The string to interpret.
        utc_offset_ms:
            The local UTC offset, used for local time forms.
        current_year:
            The local year, used for the ``--MM-DD`` form.

    Returns:
        Epoch milliseconds, or None if the string is not recognised.

    Examples:
        >>> parse_instant_string('1970-01-02', 0, 2020)
        86400000
        >>> parse_instant_string('1970-01-01T00:00:01Z', 3600000, 2020)
        1000
        >>> parse_instant_string('1970-01-01T01:00', 3600000, 2020)
        0
        >>> parse_instant_string('Tuesday', 0, 2020)

    """
    text = text.strip()
    match = REC_DATE.match(text)
    if match:
        fields = {
            'year': int(match.group('year')),
            'month': int(match.group('month')),
            'date': int(match.group('date') or 1),
        }
        if not _in_range(fields):
            return None
        return fields_to_ms(**fields)
    match = REC_MONTH_DATE.match(text)
    if match:
        fields = {
            'year': current_year,
            'month': int(match.group('month')),
            'date': int(match.group('date')),
        }
        if not _in_range(fields):
            return None
        return fields_to_ms(**fields) - utc_offset_ms
    match = REC_DATE_TIME.match(text)
    if match:
        fields = {
            key: int(match.group(key))
            for key in ('year', 'month', 'date', 'hours', 'minutes')
        }
        fields['seconds'] = int(match.group('seconds') or 0)
        if not _in_range(fields):
            return None
        fields['ms'] = _fraction_to_ms(match.group('ms'))
        value = fields_to_ms(**fields)
        if match.group('utc'):
            return value
        return value - utc_offset_ms
    return None


def parse_duration_string(text: str) -> Dict[str, int]:
    """Return the duration components described by a string.

    Raises:
        DurationError: if the string is not a recognised duration.

    Examples:
        >>> parse_duration_string('P1Y2MT3H')
        {'years': 1, 'months': 2, 'hours': 3}
        >>> parse_duration_string('P2W')
        {'dates': 14}
        >>> parse_duration_string('PT1.5S')
        {'seconds': 1, 'ms': 500}

    """
    text = text.strip()
    match = REC_DURATION.match(text)
    if match and text not in ('P', 'PT') and not text.endswith('T'):
        values = {
            key: int(value)
            for key, value in match.groupdict().items()
            if value is not None and key != 'ms'
        }
        if match.group('ms'):
            values['ms'] = _fraction_to_ms(match.group('ms'))
        return values
    match = REC_DURATION_WEEKS.match(text)
    if match:
        return {'dates': int(match.group('weeks')) * 7}
    if REC_DURATION_ALTERNATIVE.match(text):
        return _parse_alternative(text)
    raise DurationError('string', text)


def _parse_alternative(text: str) -> Dict[str, int]:
    try:
        duration = DurationParser().parse(text)
    except IsodatetimeError:
        raise DurationError('string', text) from None
    seconds = round(duration.seconds * 1000)
    values = {
        'years': int(duration.years),
        'months': int(duration.months),
        'dates': int(duration.days),
        'hours': int(duration.hours),
        'minutes': int(duration.minutes),
        'seconds': seconds // 1000,
        'ms': seconds % 1000,
    }
    return {key: value for key, value in values.items() if value}
