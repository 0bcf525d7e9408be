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
"""Process-wide calendar configuration.

The shared configuration holds the default locale tag, the fixed local
UTC offset used for local calendar fields and the locale registry. It is
created on first use; these environment variables override the defaults:

ALMANAC_LOCALE
   Default locale tag.
ALMANAC_UTC_OFFSET
   Local UTC offset in minutes east of UTC (e.g. ``540`` for UTC+09:00).
"""

import os
from typing import Optional

from metomi.isodatetime.timezone import get_local_time_zone

from almanac.civil.exceptions import AlmanacError
from almanac.civil.locale import (
    DEFAULT_LOCALE,
    LocaleRegistry,
    LocaleSwitch,
)
from almanac.civil.units import MS_IN_MINUTE


ENV_LOCALE = 'ALMANAC_LOCALE'
ENV_UTC_OFFSET = 'ALMANAC_UTC_OFFSET'


def get_local_utc_offset() -> int:
    """Return the platform UTC offset in minutes east of UTC."""
    hours, minutes = get_local_time_zone()
    if hours < 0:
        return hours * 60 - minutes
    return hours * 60 + minutes


class CalendarConfig:
    """Defaults shared by instants.

    Args:
        locale:
            Default locale tag.
        utc_offset:
            Local UTC offset in minutes east of UTC, defaults to the
            platform offset.
        registry:
            Locale cache, a new one is created if not provided.

    """

    _DEFAULT: 'Optional[CalendarConfig]' = None

    def __init__(
        self,
        locale: str = DEFAULT_LOCALE,
        utc_offset: Optional[int] = None,
        registry: Optional[LocaleRegistry] = None,
    ) -> None:
        self.registry = registry or LocaleRegistry()
        self._locale = LocaleSwitch(self.registry, DEFAULT_LOCALE)
        if locale != DEFAULT_LOCALE:
            self._locale.request(locale)
        if utc_offset is None:
            utc_offset = get_local_utc_offset()
        self.utc_offset = utc_offset

    @classmethod
    def get_inst(cls, cached: bool = True) -> 'CalendarConfig':
        """Return a CalendarConfig instance.

        Args:
            cached (bool):
                If cached create if necessary and return the singleton
                instance, else return a new instance.
        """
        if not cached:
            return cls.from_env()
        if cls._DEFAULT is None:
            cls._DEFAULT = cls.from_env()
        return cls._DEFAULT

    @classmethod
    def reset(cls) -> None:
        """Discard the singleton instance."""
        cls._DEFAULT = None

    @classmethod
    def from_env(cls) -> 'CalendarConfig':
        utc_offset = os.getenv(ENV_UTC_OFFSET)
        if utc_offset is not None:
            try:
                utc_offset = int(utc_offset)
            except ValueError:
                raise AlmanacError(
                    f'{ENV_UTC_OFFSET} must be an integer number of minutes,'
                    f' got {utc_offset!r}'
                ) from None
        return cls(
            locale=os.getenv(ENV_LOCALE) or DEFAULT_LOCALE,
            utc_offset=utc_offset,
        )

    @property
    def locale(self) -> str:
        """The default locale tag."""
        return self._locale.tag

    @locale.setter
    def locale(self, tag: str) -> None:
        self._locale.request(tag)

    @property
    def locale_switch(self) -> LocaleSwitch:
        return self._locale

    @property
    def utc_offset(self) -> int:
        return self._utc_offset

    @utc_offset.setter
    def utc_offset(self, minutes: int) -> None:
        if isinstance(minutes, bool) or not isinstance(minutes, int):
            raise AlmanacError(
                f'UTC offset must be an integer number of minutes,'
                f' got {minutes!r}'
            )
        if abs(minutes) >= 24 * 60:
            raise AlmanacError(f'UTC offset out of range: {minutes}')
        self._utc_offset = minutes

    @property
    def utc_offset_ms(self) -> int:
        return self._utc_offset * MS_IN_MINUTE


glbl_cfg = CalendarConfig.get_inst
