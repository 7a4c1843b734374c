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
Route annotation module.
Attaches the kinematics of the segment ending at each point onto that point.

Passes run in a fixed order: mph, then duration, then acceleration, since
acceleration reads the speed of both the previous point and the current one.
"""
import logging

from .segments import acceleration, compute_segments

logger = logging.getLogger(__name__)


def check_timestamps(points):
    """
    Make sure timestamps never go backwards.

    Equal timestamps are allowed (they produce inf/nan speeds downstream).

    Raises:
        ValueError: with the index of the first point earlier than its predecessor
    """
    for i in range(1, len(points)):
        if points[i].timestamp < points[i - 1].timestamp:
            raise ValueError(
                f"Timestamps must not decrease: point {i} ({points[i].timestamp}) "
                f"is earlier than point {i - 1} ({points[i - 1].timestamp})"
            )


def _annotate_mph(points, segments):
    if points:
        points[0].speed_mph = 0.0
    for seg in segments:
        points[seg.end_index].speed_mph = seg.speed_mph


def _annotate_duration(points, segments):
    if points:
        points[0].segment_duration_seconds = None
    for seg in segments:
        points[seg.end_index].segment_duration_seconds = seg.duration_seconds


def _annotate_acceleration(points):
    for i, point in enumerate(points):
        if i == 0:
            # Route origin: nothing to accelerate from
            point.acceleration = 0.0
            continue
        velocity_1 = 0.0 if i == 1 else points[i - 1].speed_mph
        point.acceleration = acceleration(velocity_1, point.speed_mph, point.segment_duration_seconds)


def annotate_route(points, segments=None, check_order=True):
    """
    Fill speed_mph, segment_duration_seconds and acceleration on each point.

    Point i (i >= 1) gets the speed and duration of segment (i-1, i) and the
    acceleration needed to go from the previous point's speed to its own over
    that duration. The first point is the origin: speed 0, no duration,
    acceleration 0, and it serves as the zero velocity baseline for point 1.

    Args:
        points: list of Point in route order; mutated in place
        segments: precomputed segments (computed when omitted)
        check_order: set False when the caller already ran check_timestamps

    Returns:
        the same list of points
    """
    if check_order:
        check_timestamps(points)
    if segments is None:
        segments = compute_segments(points)

    _annotate_mph(points, segments)
    _annotate_duration(points, segments)
    _annotate_acceleration(points)

    logger.debug(f"Annotated {len(points)} points")
    return points
