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
CSV file handler - reading and writing routes as [lat, lon, timestamp] rows.
"""
import csv
import logging
import os

try:
    from .. import config
    from ..core.structures import Point, ROW_LATITUDE, ROW_LONGITUDE, ROW_TIMESTAMP
    from ..locales.strings import ERRORS
except ImportError:
    import config
    from core.structures import Point, ROW_LATITUDE, ROW_LONGITUDE, ROW_TIMESTAMP
    from locales.strings import ERRORS

logger = logging.getLogger('csv_handler')


def ensure_csv_extension(file_path):
    """Append the .csv extension unless the path already carries it."""
    extension = getattr(config, 'CSV_EXTENSION', '.csv')
    if file_path.lower().endswith(extension):
        return file_path
    return file_path + extension


def _parse_timestamp(value):
    # Metrics use whole seconds ("1400000000.7" -> 1400000000); the text itself is kept in raw_row
    return int(float(value.strip()))


def parse_route_row(row, row_number=None, file_path=None):
    """
    Convert one CSV row to a Point.

    Args:
        row: list of strings [lat, lon, timestamp, ...]; extra columns are ignored
        row_number: 1-based row number for error messages
        file_path: source file for error messages

    Returns:
        Point, with the first three cells kept verbatim in raw_row

    Raises:
        ValueError: if the row has too few columns or a value is not a finite number
    """
    columns = getattr(config, 'ROUTE_CSV_COLUMNS', 3)
    if len(row) < columns:
        raise ValueError(ERRORS['malformed_row'].format(row_number=row_number, file_path=file_path, row=row))
    try:
        return Point(
            latitude=float(row[ROW_LATITUDE].strip()),
            longitude=float(row[ROW_LONGITUDE].strip()),
            timestamp=_parse_timestamp(row[ROW_TIMESTAMP]),
            raw_row=list(row[:columns]),
        )
    except (ValueError, OverflowError) as e:
        raise ValueError(
            ERRORS['malformed_row'].format(row_number=row_number, file_path=file_path, row=row)
        ) from e


def read_route_csv(file_path):
    """
    Read a route from a header-less CSV file.

    Blank lines are skipped. Any malformed row aborts the whole read.

    Args:
        file_path: path to CSV file

    Returns:
        list of Point in file order
    """
    if not os.path.exists(file_path):
        raise ValueError(ERRORS['file_not_found'].format(file_path=file_path))

    points = []
    with open(file_path, 'r', newline='', encoding='utf-8') as f:
        reader = csv.reader(f)
        for row_number, row in enumerate(reader, start=1):
            if not row or all(not cell.strip() for cell in row):
                continue
            points.append(parse_route_row(row, row_number, file_path))

    logger.info(f"Read {len(points)} points from {file_path}")
    return points


def write_route_csv(file_path, points):
    """
    Write points as [lat, lon, timestamp] rows.

    Points read from CSV are written back exactly as they were read.

    Args:
        file_path: output path (written as given; see ensure_csv_extension)
        points: list of Point

    Returns:
        str: path written
    """
    with open(file_path, 'w', newline='', encoding='utf-8') as f:
        writer = csv.writer(f, lineterminator='\n')
        for point in points:
            writer.writerow(point.output_row())

    logger.info(f"Wrote {len(points)} points to {file_path}")
    return file_path
