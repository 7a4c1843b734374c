#!/usr/bin/env python3
# RouteCleaner - GPS route outlier filter
# Copyright (C) 2024 RouteCleaner Contributors
#
# Shared data-structure definitions and index constants used across the
# cleaning pipeline. A route travels between stages as one list of Point
# records instead of parallel coordinate/time arrays.

"""
Core records used in the RouteCleaner pipeline.

Route row (``csv`` input/output)
--------------------------------
Read by ``parsers.csv_handler.read_route_csv`` and written back by
``parsers.csv_handler.write_route_csv``::

    (
        latitude,      # 0 – decimal degrees
        longitude,     # 1 – decimal degrees
        timestamp,     # 2 – epoch seconds
    )

Point
-----
One GPS fix. The ``speed_mph``, ``segment_duration_seconds`` and
``acceleration`` fields are transient: ``core.annotator.annotate_route``
fills them in, ``core.filters.filter_route`` clears them on survivors.
Points read from CSV also keep their source cells in ``raw_row`` so the
cleaned route is written out exactly as it came in.

Segment
-------
The interval between point ``i`` and point ``i + 1``. A route of N points
has N - 1 segments.
"""
from dataclasses import dataclass, field
from typing import List, Optional, Tuple

try:
    from .. import config
except ImportError:
    import config

# Indices for elements of route rows
ROW_LATITUDE = 0
ROW_LONGITUDE = 1
ROW_TIMESTAMP = 2

# Names of the per-point fields added by the annotator
METRIC_FIELDS = ('speed_mph', 'segment_duration_seconds', 'acceleration')

# Discard reasons reported by the filter
REASON_SPEED = 'speed'
REASON_ACCELERATION = 'acceleration'
REASON_DECELERATION = 'deceleration'
REASON_UNDEFINED = 'undefined'
REASONS = (REASON_SPEED, REASON_ACCELERATION, REASON_DECELERATION, REASON_UNDEFINED)


@dataclass
class Point:
    """A single GPS fix, optionally carrying the metrics of its incoming segment."""

    latitude: float
    longitude: float
    timestamp: int
    speed_mph: Optional[float] = None
    segment_duration_seconds: Optional[float] = None
    acceleration: Optional[float] = None
    # Source cells as read, written back unchanged on output
    raw_row: Optional[List[str]] = field(default=None, compare=False, repr=False)

    @property
    def coords(self) -> Tuple[float, float]:
        """(lat, lon) pair as expected by the distance primitive."""
        return (self.latitude, self.longitude)

    def as_row(self):
        """Positional fields only, in route row order."""
        return [self.latitude, self.longitude, self.timestamp]

    def output_row(self):
        """Row for output: the cells as read when available, else as_row()."""
        if self.raw_row is not None:
            return list(self.raw_row)
        return self.as_row()

    def is_annotated(self):
        return self.speed_mph is not None


@dataclass(frozen=True)
class Segment:
    """Derived kinematics between two adjacent points."""

    start_index: int
    end_index: int
    distance_miles: float
    duration_seconds: float
    speed_mph: float


@dataclass(frozen=True)
class CleaningConfig:
    """Plausibility thresholds used by the outlier filter."""

    max_speed: float = field(default_factory=lambda: getattr(config, 'MAX_SPEED_MPH', 70.0))
    max_acceleration: float = field(default_factory=lambda: getattr(config, 'MAX_ACCELERATION', 10.0))
    max_deceleration: float = field(default_factory=lambda: getattr(config, 'MAX_DECELERATION', -15.0))

    def as_dict(self):
        return {
            'max_speed': self.max_speed,
            'max_acceleration': self.max_acceleration,
            'max_deceleration': self.max_deceleration,
        }
