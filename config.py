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

"""
Configuration file for RouteCleaner.
Contains default thresholds and constants used when cleaning a route.

Command-line flags override the cleaning thresholds defined here.
"""

# ============================================================
# Unit Conversion
# ============================================================
SECONDS_PER_HOUR = 3600.0  # Seconds in one hour (mph from miles/seconds)

# Decimal places kept for distance, speed and acceleration
METRIC_DECIMALS = 2

# ============================================================
# Cleaning Thresholds
# ============================================================
# Defaults assume ordinary road travel. A sports car manages roughly
# 16 mph/s of acceleration and -24 mph/s of braking, so the limits below
# sit comfortably under that.
MAX_SPEED_MPH = 70.0          # Points reached faster than this are discarded
MAX_ACCELERATION = 10.0       # mph per second
MAX_DECELERATION = -15.0      # mph per second, negative (compared as acc < value)

# ============================================================
# Input / Output
# ============================================================
CSV_EXTENSION = '.csv'
NMEA_EXTENSION = '.nmea'
SUPPORTED_EXTENSIONS = (CSV_EXTENSION, NMEA_EXTENSION)

# Column layout of a route row: latitude, longitude, epoch timestamp (seconds)
ROUTE_CSV_COLUMNS = 3

# Only RMC sentences with this status carry a usable fix
NMEA_VALID_STATUS = 'A'

# JSON output
JSON_INDENT = 2

# ============================================================
# Warning Thresholds
# ============================================================
DISCARD_WARNING_THRESHOLD = 0.5   # Warn if more than 50% of points discarded
DISCARD_CAUTION_THRESHOLD = 0.1   # Caution if more than 10% discarded
MIN_ROUTE_POINTS = 2              # Fewer points means no segments to judge

# ============================================================
# Visualization Parameters
# ============================================================
PLOT_FIGSIZE = (8, 8)
PLOT_DPI = 150
PLOT_RAW_COLOR = '#bbbbbb'
PLOT_CLEAN_COLOR = 'blue'
PLOT_DISCARDED_COLOR = 'red'
PLOT_LINE_WIDTH = 1.5
PLOT_MARKER_SIZE = 30
PLOT_LEGEND_LOCATION = 'best'
PLOT_SUFFIX = '_route.png'
