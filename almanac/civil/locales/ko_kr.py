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
"""Korean (South Korea)."""

from almanac.civil.locale import LocaleRecord


LOCALE = LocaleRecord(
    month_short=tuple(f'{month}월' for month in range(1, 13)),
    month_long=tuple(f'{month}월' for month in range(1, 13)),
    day_of_week_short=('일', '월', '화', '수', '목', '금', '토'),
    day_of_week_middle=('일', '월', '화', '수', '목', '금', '토'),
    day_of_week_long=(
        '일요일', '월요일', '화요일', '수요일', '목요일', '금요일', '토요일',
    ),
    meridiem=('오전', '오후'),
    date_time_format='YYYY. MM. DD. A h:mm:ss',
    date_format='YYYY. MM. DD.',
    time_format='A h:mm:ss',
)
