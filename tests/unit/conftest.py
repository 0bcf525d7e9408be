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
"""Standard pytest fixtures for unit tests."""

import asyncio
from typing import Dict, List

import pytest

from almanac.civil.config import ENV_LOCALE, ENV_UTC_OFFSET, CalendarConfig
from almanac.civil.exceptions import LocaleLoadError
from almanac.civil.locale import LocaleRecord, LocaleRegistry, normalize_tag


FRENCH = LocaleRecord(
    month_short=(
        'janv.', 'févr.', 'mars', 'avr.', 'mai', 'juin',
        'juil.', 'août', 'sept.', 'oct.', 'nov.', 'déc.',
    ),
    month_long=(
        'janvier', 'février', 'mars', 'avril', 'mai', 'juin',
        'juillet', 'août', 'septembre', 'octobre', 'novembre', 'décembre',
    ),
    day_of_week_short=('di', 'lu', 'ma', 'me', 'je', 've', 'sa'),
    day_of_week_middle=(
        'dim.', 'lun.', 'mar.', 'mer.', 'jeu.', 'ven.', 'sam.'
    ),
    day_of_week_long=(
        'dimanche', 'lundi', 'mardi', 'mercredi',
        'jeudi', 'vendredi', 'samedi',
    ),
    meridiem=('am', 'pm'),
    date_time_format='DD/MM/YYYY HH:mm:ss',
    date_format='DD/MM/YYYY',
    time_format='HH:mm:ss',
)


class FakeLoader:
    """Async locale loader serving records from a dict.

    Each load yields to the event loop once before returning.
    """

    def __init__(self, records: Dict[str, LocaleRecord]):
        self.records = records
        self.calls: List[str] = []

    async def __call__(self, tag: str) -> LocaleRecord:
        self.calls.append(tag)
        await asyncio.sleep(0)
        try:
            return self.records[normalize_tag(tag)]
        except KeyError:
            raise LocaleLoadError(tag) from None


@pytest.fixture(autouse=True)
def reset_glbl_cfg(monkeypatch):
    """Start every test with a fresh shared configuration."""
    monkeypatch.delenv(ENV_LOCALE, raising=False)
    monkeypatch.delenv(ENV_UTC_OFFSET, raising=False)
    CalendarConfig.reset()
    yield
    CalendarConfig.reset()


@pytest.fixture
def fake_loader():
    return FakeLoader({'fr': FRENCH})


def _install(monkeypatch, utc_offset, loader):
    cfg = CalendarConfig(
        utc_offset=utc_offset,
        registry=LocaleRegistry(loader),
    )
    monkeypatch.setattr(CalendarConfig, '_DEFAULT', cfg)
    return cfg


@pytest.fixture
def utc(monkeypatch, fake_loader):
    """Shared configuration with local time pinned to UTC."""
    return _install(monkeypatch, 0, fake_loader)


@pytest.fixture
def kst(monkeypatch, fake_loader):
    """Shared configuration with local time pinned to UTC+09:00."""
    return _install(monkeypatch, 9 * 60, fake_loader)


@pytest.fixture
def french():
    """A locale record which is not built in."""
    return FRENCH
