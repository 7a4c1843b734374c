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
Tests for route file parsers (CSV and NMEA).

NMEA fixtures are built with pynmea2 so checksums are always valid.
"""
import os
import sys

import pynmea2
import pytest

# Add parent directory to path for imports
PARENT_DIR = os.path.dirname(os.path.dirname(os.path.abspath(__file__)))
if PARENT_DIR not in sys.path:
    sys.path.insert(0, PARENT_DIR)

from core.structures import Point
from parsers.csv_handler import (
    ensure_csv_extension,
    parse_route_row,
    read_route_csv,
    write_route_csv,
)
from parsers.nmea_handler import convert_nmea_to_seconds, extract_route_points, parse_rmc_line


def rmc_sentence(time_str, lat, lat_dir, lon, lon_dir, date_str='010170', status='A'):
    """Render an RMC sentence with a valid checksum."""
    msg = pynmea2.RMC('GP', 'RMC', (time_str, status, lat, lat_dir, lon, lon_dir,
                                    '0.0', '0.0', date_str, '', ''))
    return str(msg)


def write_lines(path, lines):
    path.write_text("\n".join(lines) + "\n")
    return str(path)


# ============================================================
# CSV
# ============================================================

def test_read_route_csv(tmp_path):
    path = write_lines(tmp_path / "route.csv", ["0,0,0", "0,1,3600", "", "0,2,3601"])
    points = read_route_csv(path)

    assert points == [Point(0.0, 0.0, 0), Point(0.0, 1.0, 3600), Point(0.0, 2.0, 3601)]
    assert all(isinstance(p.timestamp, int) for p in points)


def test_read_route_csv_strips_whitespace_and_fraction(tmp_path):
    path = write_lines(tmp_path / "route.csv", [" 51.5 , -0.13 , 1400000000.7 "])
    assert read_route_csv(path) == [Point(51.5, -0.13, 1400000000)]


@pytest.mark.parametrize("bad_row", ["0,abc,5", "0,1", "0,1,", "0,0,inf", "0,0,nan"])
def test_read_route_csv_malformed_row_is_fatal(tmp_path, bad_row):
    path = write_lines(tmp_path / "route.csv", ["0,0,0", bad_row])
    with pytest.raises(ValueError, match="Malformed row 2"):
        read_route_csv(path)


def test_read_route_csv_missing_file(tmp_path):
    with pytest.raises(ValueError, match="File not found"):
        read_route_csv(str(tmp_path / "missing.csv"))


def test_parse_route_row_ignores_extra_columns():
    assert parse_route_row(["1.0", "2.0", "3", "extra"]) == Point(1.0, 2.0, 3)


def test_write_route_csv(tmp_path):
    path = str(tmp_path / "out.csv")
    write_route_csv(path, [Point(0.0, 1.0, 3600), Point(51.5, -0.13, 1400000000)])

    with open(path) as f:
        assert f.read().splitlines() == ["0.0,1.0,3600", "51.5,-0.13,1400000000"]
    assert read_route_csv(path) == [Point(0.0, 1.0, 3600), Point(51.5, -0.13, 1400000000)]


@pytest.mark.parametrize("given,expected", [
    ("out", "out.csv"),
    ("out.csv", "out.csv"),
    ("OUT.CSV", "OUT.CSV"),
    ("dir/clean.txt", "dir/clean.txt.csv"),
])
def test_ensure_csv_extension(given, expected):
    assert ensure_csv_extension(given) == expected


# ============================================================
# NMEA
# ============================================================

def test_parse_rmc_line():
    point = parse_rmc_line(rmc_sentence('010000', '0000.000', 'N', '00100.000', 'E'))
    assert point == Point(0.0, 1.0, 3600)


def test_parse_rmc_line_southern_western_hemisphere():
    point = parse_rmc_line(rmc_sentence('000000', '3751.650', 'S', '14507.360', 'W', date_str='130998'))

    assert point.latitude == pytest.approx(-(37 + 51.65 / 60))
    assert point.longitude == pytest.approx(-(145 + 7.36 / 60))
    assert point.timestamp == 905644800


@pytest.mark.parametrize("line", [
    "",
    "not an nmea line",
    "$GPGGA,000000,0000.000,N,00000.000,E,1,08,0.9,10.0,M,0.0,M,,",
    "$GPRMC,000000,A,0000.000,N,00000.000,E,0.0,0.0,010170,,*00",
])
def test_parse_rmc_line_skips_other_lines(line):
    assert parse_rmc_line(line) is None


def test_parse_rmc_line_skips_void_fix():
    assert parse_rmc_line(rmc_sentence('000000', '0000.000', 'N', '00000.000', 'E', status='V')) is None


def test_convert_nmea_to_seconds():
    msg = pynmea2.parse(rmc_sentence('010001', '0000.000', 'N', '00200.000', 'E'))
    assert convert_nmea_to_seconds(msg) == 3601


def test_extract_route_points(tmp_path):
    path = write_lines(tmp_path / "route.nmea", [
        rmc_sentence('000000', '0000.000', 'N', '00000.000', 'E'),
        "$GPGGA,000000,0000.000,N,00000.000,E,1,08,0.9,10.0,M,0.0,M,,",
        rmc_sentence('003000', '0000.000', 'N', '00050.000', 'E', status='V'),
        rmc_sentence('010000', '0000.000', 'N', '00100.000', 'E'),
        "garbage",
        rmc_sentence('010001', '0000.000', 'N', '00200.000', 'E'),
    ])

    assert extract_route_points(path) == [
        Point(0.0, 0.0, 0),
        Point(0.0, 1.0, 3600),
        Point(0.0, 2.0, 3601),
    ]


def test_extract_route_points_without_fixes(tmp_path):
    path = write_lines(tmp_path / "empty.nmea", ["garbage"])
    with pytest.raises(ValueError, match="No valid RMC fixes"):
        extract_route_points(path)


def test_parse_route_row_keeps_source_cells():
    point = parse_route_row(["51.50000", " -0.13", "1400000000.7", "extra"])

    assert point.timestamp == 1400000000
    assert point.raw_row == ["51.50000", " -0.13", "1400000000.7"]
    assert point.output_row() == ["51.50000", " -0.13", "1400000000.7"]
    assert point.as_row() == [51.5, -0.13, 1400000000]


def test_output_row_without_source_cells():
    assert Point(1.0, 2.0, 3).output_row() == [1.0, 2.0, 3]


def test_write_route_csv_round_trip(tmp_path):
    source = tmp_path / "in.csv"
    source.write_bytes(b"0,0,0\n51.50000,-0.13,1400000000.7\n")
    target = str(tmp_path / "out.csv")

    write_route_csv(target, read_route_csv(str(source)))

    with open(target, 'rb') as f:
        assert f.read() == source.read_bytes()
