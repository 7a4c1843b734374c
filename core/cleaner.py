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
Main RouteCleaner engine.
Contains clean_route, which runs segment metrics, annotation and filtering in order.
"""
import logging

from .structures import CleaningConfig, REASONS
from .segments import compute_segments, count_zero_duration_segments
from .annotator import annotate_route, check_timestamps
from .filters import filter_route

logger = logging.getLogger(__name__)


def clean_route(points, cleaning_config=None):
    """
    Discard points that imply implausible travel.

    Pipeline: segment metrics -> annotation -> single-pass filter.
    The point list is annotated in place; survivors come back with their
    metric fields cleared.

    Args:
        points: list of Point in route order
        cleaning_config: CleaningConfig (defaults when None)

    Returns:
        dict: {
            'route': list of surviving Point, original relative order
            'discarded': list of {'index', 'point', 'reasons'}
            'total_points': int
            'kept_points': int
            'discarded_points': int
            'discarded_ratio': float
            'reasons': dict - discard reason counts
            'segments': int - number of segments (points - 1)
            'zero_duration_segments': int
            'config': dict - thresholds used
        }

    Raises:
        ValueError: if timestamps decrease or coordinates are invalid
    """
    if cleaning_config is None:
        cleaning_config = CleaningConfig()

    check_timestamps(points)
    segments = compute_segments(points)
    zero_duration = count_zero_duration_segments(segments)
    if zero_duration:
        logger.info(f"{zero_duration} segment(s) have zero duration; their end points will be discarded")

    annotate_route(points, segments, check_order=False)
    kept, discarded = filter_route(points, cleaning_config)

    reasons = {reason: 0 for reason in REASONS}
    for entry in discarded:
        for reason in entry['reasons']:
            reasons[reason] += 1

    total = len(points)
    discarded_ratio = len(discarded) / total if total > 0 else 0.0
    logger.info(f"Kept {len(kept)} of {total} points ({len(discarded)} discarded)")

    return {
        'route': kept,
        'discarded': discarded,
        'total_points': total,
        'kept_points': len(kept),
        'discarded_points': len(discarded),
        'discarded_ratio': discarded_ratio,
        'reasons': reasons,
        'segments': len(segments),
        'zero_duration_segments': zero_duration,
        'config': cleaning_config.as_dict(),
    }
