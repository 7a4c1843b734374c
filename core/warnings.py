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
Warning and notification generation module.
Single point for all warnings about a cleaning result.
"""

import logging

try:
    from .. import config
    from ..locales.strings import WARNINGS, CAUTIONS
except ImportError:
    import config
    from locales.strings import WARNINGS, CAUTIONS

logger = logging.getLogger(__name__)


def compute_warnings(cleaning_result):
    """
    Unified function for computing all warnings.

    Args:
        cleaning_result: dict returned by core.cleaner.clean_route

    Returns:
        tuple: (warnings: dict, cautions: dict)
    """
    warnings = {}
    cautions = {}

    if not cleaning_result:
        return warnings, cautions

    # 1. Route length
    _check_route_length(cleaning_result, cautions)

    # 2. Discarded points
    _check_discarded(cleaning_result, warnings, cautions)

    # 3. Zero-duration segments
    _check_zero_duration(cleaning_result, cautions)

    for key, message in warnings.items():
        logger.warning(f"{key}: {message}")

    return warnings, cautions


def _check_route_length(cleaning_result, cautions):
    """Check that there is at least one segment to judge."""
    total = cleaning_result.get('total_points', 0)
    min_points = getattr(config, 'MIN_ROUTE_POINTS', 2)
    if total < min_points:
        cautions['short_route'] = CAUTIONS['short_route'].format(total=total)


def _check_discarded(cleaning_result, warnings, cautions):
    """Check share of discarded points."""
    total = cleaning_result.get('total_points', 0)
    discarded = cleaning_result.get('discarded_points', 0)
    ratio = cleaning_result.get('discarded_ratio', 0.0)

    if total == 0:
        return

    warning_threshold = getattr(config, 'DISCARD_WARNING_THRESHOLD', 0.5)
    caution_threshold = getattr(config, 'DISCARD_CAUTION_THRESHOLD', 0.1)

    if discarded >= total:
        warnings['all_discarded'] = WARNINGS['all_discarded'].format(total=total)
    elif ratio > warning_threshold:
        warnings['high_discarded_ratio'] = WARNINGS['high_discarded_ratio'].format(
            ratio=ratio, discarded=discarded, total=total
        )
    elif ratio > caution_threshold:
        cautions['many_discarded'] = CAUTIONS['many_discarded'].format(
            ratio=ratio, discarded=discarded, total=total
        )


def _check_zero_duration(cleaning_result, cautions):
    """Check for segments with identical timestamps."""
    count = cleaning_result.get('zero_duration_segments', 0)
    if count > 0:
        cautions['zero_duration'] = CAUTIONS['zero_duration'].format(count=count)
