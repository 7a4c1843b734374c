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
NMEA file handler - extracting route points from RMC sentences.
"""
import pynmea2
import logging
import os
import sys
from datetime import datetime, timezone

# Add parent directory to path for config import
PARENT_DIR = os.path.dirname(os.path.dirname(os.path.abspath(__file__)))
if PARENT_DIR not in sys.path:
    sys.path.insert(0, PARENT_DIR)

import config
from core.structures import Point
from locales.strings import ERRORS

logger = logging.getLogger('nmea_handler')


def convert_nmea_to_seconds(msg):
    """Returns RMC message time in seconds from epoch (UTC), or None."""
    try:
        if getattr(msg, 'datestamp', None) and getattr(msg, 'timestamp', None):
            dt = datetime.combine(msg.datestamp, msg.timestamp)
            if dt.tzinfo is None:
                dt = dt.replace(tzinfo=timezone.utc)
            return int(dt.timestamp())
    except (ValueError, AttributeError, TypeError) as e:
        logger.error(f"Error converting NMEA time: {e}")
    return None


def parse_rmc_line(line):
    """
    Parse one NMEA line into a Point.

    Args:
        line: raw NMEA sentence

    Returns:
        Point, or None if the line is not a valid RMC fix
    """
    stripped = line.strip()
    if not stripped.startswith('$') or stripped[3:6] != 'RMC':
        return None

    try:
        msg = pynmea2.parse(stripped)
    except pynmea2.ParseError as e:
        logger.debug(f"NMEA line parse error: {stripped} - {str(e)}")
        return None

    valid_status = getattr(config, 'NMEA_VALID_STATUS', 'A')
    if getattr(msg, 'status', None) != valid_status:
        logger.debug(f"Skipped RMC without valid fix: {stripped}")
        return None

    timestamp = convert_nmea_to_seconds(msg)
    if timestamp is None:
        logger.debug(f"Failed to get timestamp for line: {stripped}")
        return None

    try:
        lat = msg.latitude
        lon = msg.longitude
    except (ValueError, TypeError) as e:
        logger.debug(f"Skipped RMC without coordinates: {stripped} - {str(e)}")
        return None

    return Point(latitude=lat, longitude=lon, timestamp=timestamp)


def extract_route_points(file_path):
    """
    Extracts route points from NMEA file.

    Only RMC sentences with an active fix are used; every other line is skipped.

    Args:
        file_path: path to NMEA file

    Returns:
        list of Point in file order

    Raises:
        ValueError: if the file is missing or holds no usable fix
    """
    if not os.path.exists(file_path):
        raise ValueError(ERRORS['file_not_found'].format(file_path=file_path))

    points = []
    with open(file_path, 'r', errors='replace') as f:
        for line in f:
            point = parse_rmc_line(line)
            if point is not None:
                points.append(point)

    if not points:
        raise ValueError(ERRORS['no_nmea_fixes'].format(file_path=file_path))

    logger.info(f"Extracted {len(points)} points from {file_path}")
    return points
