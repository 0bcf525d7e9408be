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
"""Format templates: rendering instants to text and reading them back.

A template is scanned left to right; at each position the first token in
TOKENS whose symbol matches is taken (longer symbols are listed before
their prefixes), anything else is literal text.

=======  ===========================================  ============
Token    Meaning                                      Example
=======  ===========================================  ============
YYYY     year                                         2020
YY       year modulo 100 (parsed back as 19YY)        20
Q        quarter                                      1-4
MMMM     month name                                   January
MMM      short month name                             Jan
MM / M   month, padded / unpadded                     01 / 1
Www      week of year with a W prefix                 W05
WW / W   week of year, padded / unpadded              05 / 5
DDDD     day of year, three digits                    032
DDD      day of year                                  32
DD / D   day of month, padded / unpadded              01 / 1
dddd     day of week name                             Sunday
ddd      day of week, middle name                     Sun
dd       day of week, short name                      Su
d        day of week number, Sunday = 0               0-6
a / A    meridiem, lower / upper case (exact case)    am / AM
HH / H   hours (24 hour clock)                        09 / 9
hh / h   hours (12 hour clock)                        09 / 9
mm / m   minutes                                      05 / 5
ss / s   seconds                                      05 / 5
SSS      milliseconds, three digits                   005
SS       milliseconds, two digits                     05
S        milliseconds                                 5
=======  ===========================================  ============

When reading text back each token claims the text up to the next literal
in the template; when two tokens are adjacent the first claims its fixed
width (padded tokens), its maximum width (unpadded numbers) or the longest
matching name.
"""

import re
from typing import Dict, List, NamedTuple, Optional, Tuple

from almanac.civil.calendar import first_day_of_week
from almanac.civil.exceptions import (
    DuplicateTokenError,
    TemplateSyntaxError,
    TokenValueError,
)
from almanac.civil.locale import LocaleRecord
from almanac.civil.units import DEFAULT_YEAR


class Token(NamedTuple):
    """A template token.

    Args:
        symbol:
            The token text.
        category:
            The field the token describes, a template may only contain one
            token per category.
        width:
            Exact width for padded tokens, maximum width for other numbers.
        padded:
            True for fixed width tokens.
        names:
            The LocaleRecord attribute listing the names for name tokens.

    """

    symbol: str
    category: str
    width: int = 0
    padded: bool = False
    names: Optional[str] = None


TOKENS = (
    Token('YYYY', 'year', 4),
    Token('YY', 'year', 2),
    Token('Q', 'quarter', 1),
    Token('MMMM', 'month', names='month_long'),
    Token('MMM', 'month', names='month_short'),
    Token('MM', 'month', 2, padded=True),
    Token('M', 'month', 2),
    Token('Www', 'week', 3, padded=True),
    Token('WW', 'week', 2, padded=True),
    Token('W', 'week', 2),
    Token('DDDD', 'day_of_year', 3, padded=True),
    Token('DDD', 'day_of_year', 3),
    Token('DD', 'day_of_month', 2, padded=True),
    Token('D', 'day_of_month', 2),
    Token('dddd', 'day_of_week', names='day_of_week_long'),
    Token('ddd', 'day_of_week', names='day_of_week_middle'),
    Token('dd', 'day_of_week', names='day_of_week_short'),
    Token('d', 'day_of_week', 1),
    Token('a', 'meridiem', names='meridiem'),
    Token('A', 'meridiem', names='meridiem'),
    Token('HH', 'hours', 2, padded=True),
    Token('H', 'hours', 2),
    Token('hh', 'hours', 2, padded=True),
    Token('h', 'hours', 2),
    Token('mm', 'minutes', 2, padded=True),
    Token('m', 'minutes', 2),
    Token('ss', 'seconds', 2, padded=True),
    Token('s', 'seconds', 2),
    Token('SSS', 'ms', 3, padded=True),
    Token('SS', 'ms', 2, padded=True),
    Token('S', 'ms', 3),
)

TOKEN_MAP = {token.symbol: token for token in TOKENS}

REC_DIGITS = re.compile(r'^[0-9]+$')


class Segment(NamedTuple):
    """A piece of a template: a token or a run of literal text."""

    text: str
    token: Optional[Token] = None


def tokenize(template: str) -> List[Segment]:
    """Split a template into token and literal segments.

    Examples:
        >>> [seg.text for seg in tokenize('YYYY-MM-DDTHH')]
        ['YYYY', '-', 'MM', '-', 'DD', 'T', 'HH']
        >>> [seg.token.symbol for seg in tokenize('MMMMM') if seg.token]
        ['MMMM', 'M']

    """
    segments: List[Segment] = []
    literal: List[str] = []
    pos = 0
    while pos < len(template):
        for token in TOKENS:
            if template.startswith(token.symbol, pos):
                break
        else:
            literal.append(template[pos])
            pos += 1
            continue
        if literal:
            segments.append(Segment(''.join(literal)))
            literal = []
        segments.append(Segment(token.symbol, token))
        pos += len(token.symbol)
    if literal:
        segments.append(Segment(''.join(literal)))
    return segments


def _hours12(hours: int) -> int:
    if hours > 12:
        return hours % 12
    return hours


def _meridiem(instant, record: LocaleRecord) -> str:
    return record.meridiem[0 if instant.hours < 12 else 1]


def _ms2(ms: int) -> int:
    if ms < 100:
        return ms
    return ms // 10


# symbol: (instant, record) -> text
RENDERERS = {
    'YYYY': lambda i, r: str(i.year),
    'YY': lambda i, r: f'{i.year % 100:02d}',
    'Q': lambda i, r: str(i.quarter),
    'MMMM': lambda i, r: r.month_long[i.month - 1],
    'MMM': lambda i, r: r.month_short[i.month - 1],
    'MM': lambda i, r: f'{i.month:02d}',
    'M': lambda i, r: str(i.month),
    'Www': lambda i, r: f'W{i.week_of_year:02d}',
    'WW': lambda i, r: f'{i.week_of_year:02d}',
    'W': lambda i, r: str(i.week_of_year),
    'DDDD': lambda i, r: f'{i.day_of_year:03d}',
    'DDD': lambda i, r: str(i.day_of_year),
    'DD': lambda i, r: f'{i.date:02d}',
    'D': lambda i, r: str(i.date),
    'dddd': lambda i, r: r.day_of_week_long[i.day],
    'ddd': lambda i, r: r.day_of_week_middle[i.day],
    'dd': lambda i, r: r.day_of_week_short[i.day],
    'd': lambda i, r: str(i.day),
    'a': lambda i, r: _meridiem(i, r).lower(),
    'A': lambda i, r: _meridiem(i, r).upper(),
    'HH': lambda i, r: f'{i.hours:02d}',
    'H': lambda i, r: str(i.hours),
    'hh': lambda i, r: f'{_hours12(i.hours):02d}',
    'h': lambda i, r: str(_hours12(i.hours)),
    'mm': lambda i, r: f'{i.minutes:02d}',
    'm': lambda i, r: str(i.minutes),
    'ss': lambda i, r: f'{i.seconds:02d}',
    's': lambda i, r: str(i.seconds),
    'SSS': lambda i, r: f'{i.ms:03d}',
    'SS': lambda i, r: f'{_ms2(i.ms):02d}',
    'S': lambda i, r: str(i.ms),
}


def format_instant(instant, template: str, record: LocaleRecord) -> str:
    """Render an instant's local fields through a template."""
    return ''.join(
        RENDERERS[segment.text](instant, record)
        if segment.token else segment.text
        for segment in tokenize(template)
    )


def _names(token: Token, record: LocaleRecord) -> List[str]:
    """Return the names a token renders, in index order."""
    names = getattr(record, token.names)
    if token.symbol == 'a':
        return [name.lower() for name in names]
    if token.symbol == 'A':
        return [name.upper() for name in names]
    return list(names)


def _same_name(token: Token, text: str, name: str) -> bool:
    # meridiem case distinguishes a from A
    if token.category == 'meridiem':
        return text == name
    return text.casefold() == name.casefold()


def _match_name(
    value: str, pos: int, token: Token, record: LocaleRecord
) -> int:
    """Return the length of the longest name for token found at pos."""
    for name in sorted(_names(token, record), key=len, reverse=True):
        if _same_name(token, value[pos:pos + len(name)], name):
            return len(name)
    return 0


def _capture_end(
    value: str,
    pos: int,
    token: Token,
    following: Optional[Segment],
    record: LocaleRecord,
    template: str,
) -> int:
    """Return the position where the text for token ends."""
    if following is None:
        return len(value)
    if following.token is None:
        end = value.find(following.text, pos)
        if end < 0:
            raise TemplateSyntaxError(
                template, value, f'expected {following.text!r}'
            )
        return end
    if token.names:
        return pos + _match_name(value, pos, token, record)
    if token.padded:
        return min(pos + token.width, len(value))
    end = pos
    while (
        end < len(value)
        and end - pos < token.width
        and '0' <= value[end] <= '9'
    ):
        end += 1
    return end


def _read(token: Token, text: str, record: LocaleRecord) -> int:
    """Return the number (or name index) captured for a token."""
    if not text:
        raise TokenValueError(token.symbol, text, 'no value')
    if token.names:
        for index, name in enumerate(_names(token, record)):
            if _same_name(token, text, name):
                return index
        raise TokenValueError(token.symbol, text, 'unknown name')
    if token.padded and len(text) != token.width:
        raise TokenValueError(
            token.symbol, text, f'expected {token.width} characters'
        )
    if token.symbol == 'Www':
        if not text.startswith('W'):
            raise TokenValueError(token.symbol, text, 'expected W prefix')
        text = text[1:]
    if not REC_DIGITS.match(text):
        raise TokenValueError(token.symbol, text, 'not a number')
    return int(text)


def parse_template(
    value: str, template: str, record: LocaleRecord
) -> Dict[str, int]:
    """Read a field record out of text formatted with a template.

    Fields the template does not mention are left out of the result.

    Raises:
        TemplateSyntaxError:
            If the template has no tokens or its literal text does not
            match the value.
        DuplicateTokenError:
            If the template has two tokens for the same field.
        TokenValueError:
            If the text for a token is missing or malformed.

    Examples:
        >>> from almanac.civil.locales.en import LOCALE
        >>> parse_template('2020-02-03 14', 'YYYY-MM-DD HH', LOCALE)
        {'year': 2020, 'month': 2, 'date': 3, 'hours': 14}
        >>> parse_template('20200203', 'YYYYMMDD', LOCALE)
        {'year': 2020, 'month': 2, 'date': 3}

    """
    segments = tokenize(template)
    tokens = [segment.token for segment in segments if segment.token]
    if not tokens:
        raise TemplateSyntaxError(
            template, value, 'template contains no tokens'
        )
    seen = set()
    for token in tokens:
        if token.category in seen:
            raise DuplicateTokenError(template, token.category)
        seen.add(token.category)

    captures: Dict[str, Tuple[Token, int]] = {}
    pos = 0
    for index, segment in enumerate(segments):
        if segment.token is None:
            if not value.startswith(segment.text, pos):
                raise TemplateSyntaxError(
                    template, value, f'expected {segment.text!r}'
                )
            pos += len(segment.text)
            continue
        following = segments[index + 1] if index + 1 < len(segments) else None
        end = _capture_end(
            value, pos, segment.token, following, record, template
        )
        captures[segment.token.category] = (
            segment.token,
            _read(segment.token, value[pos:end], record),
        )
        pos = end
    if pos != len(value):
        raise TemplateSyntaxError(template, value, 'unexpected trailing text')
    return _to_fields(captures)


def _to_fields(captures: Dict[str, Tuple[Token, int]]) -> Dict[str, int]:
    """Turn captured token values into a field record."""
    fields: Dict[str, int] = {}

    if 'year' in captures:
        token, number = captures['year']
        fields['year'] = 1900 + number if token.symbol == 'YY' else number

    # day of year and week position the date within the year, an
    # explicit month or day of month then takes precedence
    if 'week' in captures:
        _, week = captures['week']
        fields['month'] = 1
        fields['date'] = first_day_of_week(
            fields.get('year', DEFAULT_YEAR), week
        )
    if 'day_of_year' in captures:
        fields['month'] = 1
        fields['date'] = captures['day_of_year'][1]
    if 'quarter' in captures:
        fields['month'] = (captures['quarter'][1] - 1) * 3 + 1
    if 'month' in captures:
        token, number = captures['month']
        fields['month'] = number + 1 if token.names else number
    if 'day_of_month' in captures:
        fields['date'] = captures['day_of_month'][1]

    if 'day_of_week' in captures:
        token, number = captures['day_of_week']
        if number > 6:
            raise TokenValueError(
                token.symbol, str(number), 'day of week must be 0-6'
            )

    if 'hours' in captures:
        token, hours = captures['hours']
        if token.symbol in ('h', 'hh') and 'meridiem' in captures:
            hours = hours % 12
            if captures['meridiem'][1] == 1:
                hours += 12
        fields['hours'] = hours
    for category in ('minutes', 'seconds', 'ms'):
        if category in captures:
            fields[category] = captures[category][1]
    return fields
