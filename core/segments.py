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
Segment metrics module.
Computes distance, duration, speed and acceleration between adjacent route points.

Division by a zero duration follows IEEE-754 float semantics instead of raising:
a positive numerator gives +inf, a negative one -inf and 0/0 gives nan.
Callers decide what to do with those sentinels (the outlier filter discards them).

Rounding to METRIC_DECIMALS goes half away from zero, not half to even.
"""
import logging

import numpy as np
from geopy.distance import geodesic

try:
    from .. import config
except ImportError:
    import config

from .structures import Segment

logger = logging.getLogger(__name__)


def _decimals():
    return getattr(config, 'METRIC_DECIMALS', 2)


def _round(value):
    # Exact halves go away from zero (0.125 -> 0.13); inf/nan pass through
    scale = 10.0 ** _decimals()
    value = np.float64(value)
    return float(np.sign(value) * np.floor(np.abs(value) * scale + 0.5) / scale)


def _divide(numerator, denominator):
    with np.errstate(divide='ignore', invalid='ignore'):
        return np.float64(numerator) / np.float64(denominator)


def distance(point_1, point_2):
    """
    Great-circle distance between two points in miles.

    Args:
        point_1: (lat, lon) pair
        point_2: (lat, lon) pair

    Returns:
        float: distance in miles, rounded to METRIC_DECIMALS

    Raises:
        ValueError: if a coordinate is out of range (raised by geopy)
    """
    return _round(geodesic(point_1, point_2).miles)


def duration(start_time, finish_time):
    """Signed time in seconds between two timestamps. Not clamped."""
    return float(finish_time - start_time)


def speed(distance_miles, duration_seconds):
    """
    Speed in mph needed to cover distance_miles in duration_seconds.

    A zero duration yields +inf (or nan when the distance is also zero).
    """
    seconds_per_hour = getattr(config, 'SECONDS_PER_HOUR', 3600.0)
    return _round(_divide(distance_miles, np.float64(duration_seconds) / seconds_per_hour))


def acceleration(velocity_1, velocity_2, duration_seconds):
    """
    Change of speed in mph per second.

    A zero duration yields +inf/-inf depending on the sign of the speed change,
    or nan when the speed did not change.
    """
    return _round(_divide(np.float64(velocity_2) - np.float64(velocity_1), duration_seconds))


def segment_distances(points):
    """Distance in miles for each adjacent pair; len(points) - 1 values."""
    return [distance(points[i].coords, points[i + 1].coords) for i in range(len(points) - 1)]


def segment_durations(points):
    """Duration in seconds for each adjacent pair; len(points) - 1 values."""
    return [duration(points[i].timestamp, points[i + 1].timestamp) for i in range(len(points) - 1)]


def segment_speeds(distances, durations):
    """
    Speed in mph for each segment.

    Args:
        distances: per-segment distances in miles
        durations: per-segment durations in seconds (same length as distances)

    Returns:
        list of floats
    """
    if len(distances) != len(durations):
        raise ValueError(
            f"Segment distances and durations differ in length: {len(distances)} != {len(durations)}"
        )
    return [speed(dist, dur) for dist, dur in zip(distances, durations)]


def compute_segments(points):
    """
    Build Segment records for a route.

    Args:
        points: list of Point in route order

    Returns:
        list of Segment, exactly len(points) - 1 entries (empty for fewer than 2 points)
    """
    distances = segment_distances(points)
    durations = segment_durations(points)
    speeds = segment_speeds(distances, durations)

    segments = [
        Segment(
            start_index=i,
            end_index=i + 1,
            distance_miles=distances[i],
            duration_seconds=durations[i],
            speed_mph=speeds[i],
        )
        for i in range(len(speeds))
    ]
    logger.debug(f"Computed {len(segments)} segments for {len(points)} points")
    return segments


def count_zero_duration_segments(segments):
    return sum(1 for seg in segments if seg.duration_seconds == 0)
