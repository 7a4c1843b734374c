# RouteCleaner - GPS route outlier filter
# Copyright (C) 2024 RouteCleaner Contributors
#
# This program is free software: you can redistribute it and/or modify
# it under the terms of the GNU Affero General Public License as published by
# the Free Software Foundation, either version 3 of the License, or
# (at your option) any later version.
#
# This program is distributed in the hope that it will be useful,
# but WITHOUT ANY WARRANTY; without even the implied warranty of
# MERCHANTABILITY or FITNESS FOR A PARTICULAR PURPOSE. See the
# GNU Affero General Public License for more details.
#
# You should have received a copy of the GNU Affero General Public License
# along with this program. If not, see <https://www.gnu.org/licenses/>.

"""Input format parsers: CSV, NMEA."""

from .csv_handler import (
    ensure_csv_extension,
    parse_route_row,
    read_route_csv,
    write_route_csv,
)
from .nmea_handler import (
    convert_nmea_to_seconds,
    parse_rmc_line,
    extract_route_points,
)

__all__ = [
    # CSV functions
    'ensure_csv_extension',
    'parse_route_row',
    'read_route_csv',
    'write_route_csv',
    # NMEA functions
    'convert_nmea_to_seconds',
    'parse_rmc_line',
    'extract_route_points',
]
