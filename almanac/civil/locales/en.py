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
"""English."""

from almanac.civil.locale import LocaleRecord


LOCALE = LocaleRecord(
    month_short=(
        'Jan', 'Feb', 'Mar', 'Apr', 'May', 'Jun',
        'Jul', 'Aug', 'Sep', 'Oct', 'Nov', 'Dec',
    ),
    month_long=(
        'January', 'February', 'March', 'April', 'May', 'June',
        'July', 'August', 'September', 'October', 'November', 'December',
    ),
    day_of_week_short=('Su', 'Mo', 'Tu', 'We', 'Th', 'Fr', 'Sa'),
    day_of_week_middle=('Sun', 'Mon', 'Tue', 'Wed', 'Thu', 'Fri', 'Sat'),
    day_of_week_long=(
        'Sunday', 'Monday', 'Tuesday', 'Wednesday',
        'Thursday', 'Friday', 'Saturday',
    ),
    meridiem=('am', 'pm'),
    date_time_format='ddd MMM DD YYYY HH:mm:ss',
    date_format='ddd MMM DD YYYY',
    time_format='HH:mm:ss',
)
