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
"""Proleptic Gregorian calendar arithmetic.

Days are counted from the Unix epoch (1970-01-01 is day 0). All functions
accept any integer year; there is no year zero restriction and negative
years are astronomical (year 0 is 1 BC).
"""

from typing import Tuple


# 1970-01-01 was a Thursday, Sunday is 0
EPOCH_DAY_OF_WEEK = 4

DAYS_IN_MONTH = (31, 28, 31, 30, 31, 30, 31, 31, 30, 31, 30, 31)


def is_leap_year(year: int) -> bool:
    """Return True if year has 366 days.

    Examples:
        >>> is_leap_year(2020), is_leap_year(1900), is_leap_year(2000)
        (True, False, True)

    """
    return year % 4 == 0 and (year % 100 != 0 or year % 400 == 0)


def days_in_year(year: int) -> int:
    return 366 if is_leap_year(year) else 365


def normalize_month(year: int, month: int) -> Tuple[int, int]:
    """Fold an out-of-range month into the year.

    Examples:
        >>> normalize_month(2020, 13)
        (2021, 1)
        >>> normalize_month(2020, 0)
        (2019, 12)

    """
    carry, month0 = divmod(month - 1, 12)
    return year + carry, month0 + 1


def last_date_of_month(year: int, month: int) -> int:
    """Return the number of days in the month.

    Overflowing months are resolved first, so month 14 of 2019 is
    February 2020.

    Examples:
        >>> last_date_of_month(2020, 2)
        29
        >>> last_date_of_month(2019, 14)
        29

    """
    year, month = normalize_month(year, month)
    if month == 2 and is_leap_year(year):
        return 29
    return DAYS_IN_MONTH[month - 1]


def days_from_civil(year: int, month: int, date: int) -> int:
    """Return the epoch day number of a calendar date.

    The month must be in 1..12; the date is not range checked so that
    date 0 or date 32 land on the neighbouring months.
    """
    if month <= 2:
        year -= 1
    era = year // 400
    year_of_era = year - era * 400
    day_of_year = (153 * (month + (-3 if month > 2 else 9)) + 2) // 5
    day_of_era = (
        year_of_era * 365 + year_of_era // 4 - year_of_era // 100
        + day_of_year
    )
    return era * 146097 + day_of_era - 719468 + date - 1


def civil_from_days(days: int) -> Tuple[int, int, int]:
    """Return the (year, month, date) of an epoch day number.

    Examples:
        >>> civil_from_days(0)
        (1970, 1, 1)
        >>> civil_from_days(-1)
        (1969, 12, 31)

    """
    days += 719468
    era = days // 146097
    day_of_era = days - era * 146097
    year_of_era = (
        day_of_era
        - day_of_era // 1460
        + day_of_era // 36524
        - day_of_era // 146096
    ) // 365
    day_of_year = day_of_era - (
        365 * year_of_era + year_of_era // 4 - year_of_era // 100
    )
    shifted_month = (5 * day_of_year + 2) // 153
    date = day_of_year - (153 * shifted_month + 2) // 5 + 1
    month = shifted_month + 3 if shifted_month < 10 else shifted_month - 9
    year = year_of_era + era * 400
    if month <= 2:
        year += 1
    return year, month, date


def day_of_week(days: int) -> int:
    """Return the day of week (0 = Sunday) of an epoch day number."""
    return (days + EPOCH_DAY_OF_WEEK) % 7


def week_index(days: int) -> int:
    """Return the number of Sunday-started weeks since the epoch week."""
    return (days + EPOCH_DAY_OF_WEEK) // 7


def day_of_year(year: int, month: int, date: int) -> int:
    """Return the ordinal day within the year, 1 based.

    Examples:
        >>> day_of_year(2020, 3, 1)
        61

    """
    return (
        days_from_civil(year, month, date) - days_from_civil(year, 1, 1) + 1
    )


def quarter_of_month(month: int) -> int:
    return (month - 1) // 3 + 1


def _week_number(first_day: int, offset: int) -> int:
    # weeks start on Sunday; the partial week holding first_day is week 1
    return (day_of_week(first_day) + offset) // 7 + 1


def week_of_year(year: int, month: int, date: int) -> int:
    """Return the Sunday-started week of the year, 1 based.

    Examples:
        >>> week_of_year(2020, 1, 1), week_of_year(2020, 12, 31)
        (1, 53)

    """
    first_day = days_from_civil(year, 1, 1)
    return _week_number(
        first_day, days_from_civil(year, month, date) - first_day
    )


def week_of_month(year: int, month: int, date: int) -> int:
    """Return the Sunday-started week of the month, 1 based."""
    return _week_number(days_from_civil(year, month, 1), date - 1)


def first_day_of_week(year: int, week: int) -> int:
    """Return the day of year on which a week of the year begins.

    Week 1 begins on January 1st whatever its day of week.

    Examples:
        >>> first_day_of_week(2020, 1), first_day_of_week(2020, 2)
        (1, 5)

    """
    jan_first = day_of_week(days_from_civil(year, 1, 1))
    return max(1, (week - 1) * 7 - jan_first + 1)
