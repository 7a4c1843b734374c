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
Outlier filtering module.
Decides which annotated points survive and strips transient metrics from them.
"""
import logging
import math

try:
    from .. import config
except ImportError:
    import config

from .structures import (
    CleaningConfig,
    METRIC_FIELDS,
    REASON_SPEED,
    REASON_ACCELERATION,
    REASON_DECELERATION,
    REASON_UNDEFINED,
)

logger = logging.getLogger(__name__)


def validate_param(name, value, default):
    """
    Validates a threshold and replaces it with default if missing.

    Args:
        name: parameter name (used in the error message)
        value: value to validate, may be None
        default: default value

    Returns:
        float threshold

    Raises:
        ValueError: if value is not a finite number
    """
    if value is None:
        return float(default)
    try:
        number = float(value)
    except (TypeError, ValueError) as e:
        raise ValueError(f"Invalid value for {name}: {value!r}") from e
    if math.isnan(number) or math.isinf(number):
        raise ValueError(f"Invalid value for {name}: {value!r}")
    return number


def build_cleaning_config(max_speed=None, max_acceleration=None, max_deceleration=None):
    """Build a CleaningConfig, falling back to config defaults for missing values."""
    cfg = CleaningConfig(
        max_speed=validate_param('max_speed', max_speed, getattr(config, 'MAX_SPEED_MPH', 70.0)),
        max_acceleration=validate_param(
            'max_acceleration', max_acceleration, getattr(config, 'MAX_ACCELERATION', 10.0)
        ),
        max_deceleration=validate_param(
            'max_deceleration', max_deceleration, getattr(config, 'MAX_DECELERATION', -15.0)
        ),
    )
    if cfg.max_deceleration > 0:
        logger.warning(
            f"max_deceleration is positive ({cfg.max_deceleration}); "
            f"any slowing down will be treated as an outlier"
        )
    return cfg


def outlier_reasons(point, cleaning_config):
    """
    List why an annotated point would be discarded.

    Thresholds are exclusive: a value equal to its limit is fine.
    nan metrics (0/0 over a zero duration) are reported as 'undefined'.

    Args:
        point: annotated Point
        cleaning_config: CleaningConfig

    Returns:
        list of reason strings, empty if the point is plausible
    """
    reasons = []
    spd = point.speed_mph
    acc = point.acceleration

    if math.isnan(spd) or math.isnan(acc):
        reasons.append(REASON_UNDEFINED)
    if spd > cleaning_config.max_speed:
        reasons.append(REASON_SPEED)
    if acc > cleaning_config.max_acceleration:
        reasons.append(REASON_ACCELERATION)
    if acc < cleaning_config.max_deceleration:
        reasons.append(REASON_DECELERATION)
    return reasons


def is_plausible(point, cleaning_config):
    """
    Retention predicate.

    Written as the positive form so that nan compares False and is discarded;
    for real numbers it equals
    not (speed > max_speed or acc > max_acceleration or acc < max_deceleration).
    """
    return (
        point.speed_mph <= cleaning_config.max_speed
        and cleaning_config.max_deceleration <= point.acceleration <= cleaning_config.max_acceleration
    )


def strip_metrics(point):
    """Remove transient metric fields, leaving latitude, longitude and timestamp."""
    for name in METRIC_FIELDS:
        setattr(point, name, None)
    return point


def filter_route(points, cleaning_config=None):
    """
    Single-pass outlier filter.

    Metrics are not recomputed after a point is dropped, so the next point
    keeps the acceleration it was given relative to the dropped one.

    Args:
        points: annotated points in route order
        cleaning_config: CleaningConfig (defaults when None)

    Returns:
        tuple: (kept points with metrics stripped, discarded list of
                {'index', 'point', 'reasons'} dicts)
    """
    if cleaning_config is None:
        cleaning_config = CleaningConfig()

    kept = []
    discarded = []
    for i, point in enumerate(points):
        if not point.is_annotated():
            raise ValueError(f"Point {i} has not been annotated")
        if is_plausible(point, cleaning_config):
            kept.append(point)
        else:
            reasons = outlier_reasons(point, cleaning_config)
            logger.debug(f"Discarding point {i} ({point.latitude}, {point.longitude}): {', '.join(reasons)}")
            discarded.append({'index': i, 'point': point, 'reasons': reasons})

    for point in kept:
        strip_metrics(point)

    return kept, discarded
