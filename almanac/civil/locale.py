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
"""Locale records and asynchronous locale switching.

Locale records are looked up by tag (e.g. ``en``, ``ko-kr``; tags are case
insensitive). The built-in records are always cached; any other tag is
loaded by an async loader the first time it is requested.

Switching to an uncached tag is optimistic: the tag is assigned straight
away and the load runs in the background. If the load fails, or is
cancelled before it completes, the tag is reverted to the last tag that
was successfully in force (a failure also logs a warning). A newer request
supersedes an older one; the older load is cancelled and its outcome is
never applied.
"""

import asyncio
from collections import Counter
from dataclasses import dataclass
from functools import partial
from importlib import import_module
import re
from typing import Awaitable, Callable, Dict, Optional, Tuple

from almanac.civil import LOG, iter_entry_points
from almanac.civil.exceptions import LocaleLoadError


DEFAULT_LOCALE = 'en'

# entry point group for locale plugins
LOCALE_ENTRY_POINT = 'almanac.locales'

REC_TAG = re.compile(r'^[a-z]{2,8}(-[a-z0-9]{1,8})*$')


@dataclass(frozen=True)
class LocaleRecord:
    """Display names and templates for one locale.

    Day of week sequences start on Sunday.
    """

    month_short: Tuple[str, ...]
    month_long: Tuple[str, ...]
    day_of_week_short: Tuple[str, ...]
    day_of_week_middle: Tuple[str, ...]
    day_of_week_long: Tuple[str, ...]
    meridiem: Tuple[str, str]
    date_time_format: str
    date_format: str
    time_format: str

    def __post_init__(self):
        for name, length in (
            ('month_short', 12),
            ('month_long', 12),
            ('day_of_week_short', 7),
            ('day_of_week_middle', 7),
            ('day_of_week_long', 7),
            ('meridiem', 2),
        ):
            value = tuple(getattr(self, name))
            if len(value) != length:
                raise ValueError(
                    f'{name} must have {length} entries, got {len(value)}'
                )
            object.__setattr__(self, name, value)


def normalize_tag(tag: str) -> str:
    """Return the cache key for a locale tag.

    Examples:
        >>> normalize_tag('ko-KR')
        'ko-kr'
        >>> normalize_tag('ko_KR')
        'ko-kr'

    """
    return tag.strip().lower().replace('_', '-')


async def load_locale(tag: str) -> LocaleRecord:
    """Find the locale record for a tag.

    Built-in locales (``almanac.civil.locales``) are tried first, then
    plugins registered on the ``almanac.locales`` entry point group.

    Raises:
        LocaleLoadError: if no record is found.

    """
    key = normalize_tag(tag)
    if not REC_TAG.match(key):
        raise LocaleLoadError(tag)
    module_name = f'almanac.civil.locales.{key.replace("-", "_")}'
    try:
        module = import_module(module_name)
    except ModuleNotFoundError as exc:
        if exc.name != module_name:
            raise
    else:
        return module.LOCALE
    for entry_point in iter_entry_points(LOCALE_ENTRY_POINT):
        if normalize_tag(entry_point.name) != key:
            continue
        try:
            record = entry_point.load()
        except Exception as exc:
            raise LocaleLoadError(tag, exc) from None
        if callable(record):
            record = record()
        return record
    raise LocaleLoadError(tag)


def _builtin_records() -> Dict[str, LocaleRecord]:
    from almanac.civil.locales import BUILTIN_LOCALES
    return {
        normalize_tag(tag): import_module(module).LOCALE
        for tag, module in BUILTIN_LOCALES.items()
    }


class LocaleRegistry:
    """Cache of loaded locale records.

    Args:
        loader:
            Coroutine function returning the LocaleRecord for a tag.

    """

    def __init__(
        self,
        loader: Callable[[str], Awaitable[LocaleRecord]] = load_locale,
    ) -> None:
        self.loader = loader
        self._records = _builtin_records()
        self._loading: Counter = Counter()

    def __contains__(self, tag: str) -> bool:
        return normalize_tag(tag) in self._records

    def get(self, tag: Optional[str]) -> Optional[LocaleRecord]:
        if tag is None:
            return None
        return self._records.get(normalize_tag(tag))

    def add(self, tag: str, record: LocaleRecord) -> None:
        self._records[normalize_tag(tag)] = record

    @property
    def pending(self) -> bool:
        """True while any locale load is in flight."""
        return any(self._loading.values())

    async def fetch(self, tag: str) -> LocaleRecord:
        """Return the record for tag, loading and caching it if needed.

        Raises:
            LocaleLoadError: if the loader fails or returns something other
            than a LocaleRecord.

        """
        key = normalize_tag(tag)
        if key in self._records:
            return self._records[key]
        self._loading[key] += 1
        try:
            record = await self.loader(tag)
        except LocaleLoadError:
            raise
        except Exception as exc:
            raise LocaleLoadError(tag, exc) from None
        finally:
            self._loading[key] -= 1
        if not isinstance(record, LocaleRecord):
            raise LocaleLoadError(tag)
        self._records[key] = record
        return record


class LocaleSwitch:
    """A locale tag that may be switched to not-yet-loaded locales.

    Args:
        registry:
            Where records are cached and loaded.
        tag:
            Initial tag, this must already be cached (or None to inherit a
            tag from elsewhere).

    """

    def __init__(
        self, registry: LocaleRegistry, tag: Optional[str] = None
    ) -> None:
        self.registry = registry
        self.tag = tag
        self._settled = tag
        self._generation = 0
        self._task: 'Optional[asyncio.Task]' = None

    @property
    def loading(self) -> bool:
        return self._task is not None and not self._task.done()

    def request(self, tag: Optional[str]) -> 'Optional[asyncio.Task]':
        """Switch to a new tag.

        The tag is assigned immediately. If its record is not cached it is
        loaded: in the background if an event loop is running (the task is
        returned), otherwise to completion before returning.
        """
        self._generation += 1
        if self.loading:
            self._task.cancel()
        self._task = None
        self.tag = tag
        if tag is None or tag in self.registry:
            self._settled = tag
            return None
        coro = self._load(tag, self._generation)
        try:
            loop = asyncio.get_running_loop()
        except RuntimeError:
            asyncio.run(coro)
            return None
        self._task = loop.create_task(coro)
        self._task.add_done_callback(
            partial(self._on_done, tag, self._generation)
        )
        return self._task

    def _on_done(
        self, tag: str, generation: int, task: 'asyncio.Task'
    ) -> None:
        # a load cancelled by anything but a newer request (e.g. the event
        # loop shutting down) never completes, so the tag reverts
        if task.cancelled() and generation == self._generation:
            LOG.debug(
                f'locale load cancelled: {tag!r},'
                f' reverted to previous locale: {self._settled!r}'
            )
            self.tag = self._settled

    async def _load(self, tag: str, generation: int) -> None:
        try:
            await self.registry.fetch(tag)
        except LocaleLoadError:
            if generation != self._generation:
                return
            LOG.warning(
                f'invalid locale: {tag!r},'
                f' reverted to previous locale: {self._settled!r}'
            )
            self.tag = self._settled
        else:
            if generation == self._generation:
                self._settled = tag

    def copy(self) -> 'LocaleSwitch':
        """Return a switch holding the same tag, without loading it."""
        switch = LocaleSwitch(self.registry, self.tag)
        switch._settled = self._settled
        return switch

    async def wait(self) -> None:
        """Wait for any in-flight load to settle."""
        while self.loading:
            task = self._task
            try:
                await asyncio.shield(task)
            except asyncio.CancelledError:
                if not task.cancelled():
                    raise
