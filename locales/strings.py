#!/usr/bin/env python3
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
Localization strings for RouteCleaner.
English language dictionary for user-facing messages.
"""

# Error messages
ERRORS = {
    'missing_file': "No route file given. Usage: route-cleaner [options] file.csv",
    'file_not_found': "File not found: {file_path}",
    'unsupported_extension': "Unsupported file type: {file_path} (expected one of: {extensions})",
    'malformed_row': "Malformed row {row_number} in {file_path}: {row!r}",
    'no_nmea_fixes': "No valid RMC fixes found in {file_path}",
    'cleaning_failed': "Route cleaning failed: {error}",
}

# Warnings - critical problems with the result
WARNINGS = {
    'all_discarded': "All {total} points were discarded as implausible",
    'high_discarded_ratio': "Discarded {ratio:.1%} of points ({discarded} of {total}); check the thresholds or the input data",
}

# Cautions - less critical remarks
CAUTIONS = {
    'many_discarded': "Discarded {ratio:.1%} of points ({discarded} of {total})",
    'zero_duration': "{count} segment(s) have identical timestamps at both ends; their end points were discarded",
    'short_route': "Route has {total} point(s); nothing to compare against",
}

# Progress messages
MESSAGES = {
    'reading_file': "Reading file {file_path}...",
    'logging_output': "Logging output to {file_path}",
    'created_file': "Successfully created {file_path}",
    'plot_saved': "Route plot saved to {file_path}",
}
