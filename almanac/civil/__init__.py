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
"""Calendar-aware civil time: instants, durations and format templates."""

import logging

ALMANAC_LOG = 'almanac'

LOG = logging.getLogger(ALMANAC_LOG)
# Start with a null handler
LOG.addHandler(logging.NullHandler())

__version__ = '1.0.0.dev0'


def iter_entry_points(entry_point_name):
    """Iterate over entry points registered under a group name."""
    import sys
    if sys.version_info[:2] > (3, 11):
        from importlib.metadata import entry_points
    else:
        # BACK COMPAT: importlib_metadata
        #   the entry_points().select interface was completed in 3.12
        # FROM: Python 3.7
        # TO: Python: 3.12
        from importlib_metadata import entry_points
    yield from (
        entry_point
        for entry_point in entry_points().select(group=entry_point_name)
    )
