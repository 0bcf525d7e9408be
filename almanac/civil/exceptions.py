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
"""Exceptions for "expected" errors."""

from typing import Optional


class AlmanacError(Exception):
    """Generic exception for almanac errors.

    This exception is raised in-place of "expected" errors where a short
    message to the user is more appropriate than traceback.
    """


class InvalidInstantError(AlmanacError, ValueError):
    """A calendar field was requested from an invalid instant.

    Args:
        operation:
            What was attempted (e.g. "read year").

    """

    def __init__(self, operation: str = 'use') -> None:
        self.operation = operation

    def __str__(self) -> str:
        return f'Cannot {self.operation}: invalid instant'


class UnitError(AlmanacError, ValueError):
    """An unknown unit name was given to a unit-based operation."""

    def __init__(self, unit, allowed=None) -> None:
        self.unit = unit
        self.allowed = allowed

    def __str__(self) -> str:
        ret = f'Unknown unit: {self.unit!r}'
        if self.allowed:
            ret += f" (expected one of: {', '.join(self.allowed)})"
        return ret


class TemplateError(AlmanacError, ValueError):
    """Base class for malformed format templates and mismatching values."""


class DuplicateTokenError(TemplateError):
    """A template contains more than one token of the same category.

    Args:
        template:
            The format template.
        category:
            The repeated token category (e.g. "month").

    """

    def __init__(self, template: str, category: str) -> None:
        self.template = template
        self.category = category

    def __str__(self) -> str:
        return (
            f'Template {self.template!r} contains more than one'
            f' {self.category} token'
        )


class TokenValueError(TemplateError):
    """The text captured for a token cannot be interpreted.

    Args:
        token:
            The token symbol (e.g. "MM").
        value:
            The captured text.
        reason:
            Short description of what is wrong.

    """

    def __init__(self, token: str, value: str, reason: str) -> None:
        self.token = token
        self.value = value
        self.reason = reason

    def __str__(self) -> str:
        return (
            f'Invalid value for token {self.token}: {self.value!r}'
            f' ({self.reason})'
        )


class TemplateSyntaxError(TemplateError):
    """The template does not describe the value.

    Raised for templates with no tokens and for literal template text
    that is absent from the value.
    """

    def __init__(
        self, template: str, value: str, reason: Optional[str] = None
    ) -> None:
        self.template = template
        self.value = value
        self.reason = reason

    def __str__(self) -> str:
        ret = f'Value {self.value!r} does not match template {self.template!r}'
        if self.reason:
            ret += f': {self.reason}'
        return ret


class DurationError(AlmanacError, ValueError):
    """An invalid duration component or duration string."""

    def __init__(self, *args):
        AlmanacError.__init__(
            self, 'Invalid duration {0}: {1!r}'.format(*args))


class LocaleLoadError(AlmanacError, LookupError):
    """No locale record could be found for a tag."""

    def __init__(self, tag: str, exc: Optional[Exception] = None) -> None:
        self.tag = tag
        self.exc = exc

    def __str__(self) -> str:
        ret = f'Cannot load locale: {self.tag!r}'
        if self.exc is not None:
            ret += f'\n{type(self.exc).__name__}: {self.exc}'
        return ret
