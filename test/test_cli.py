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
Tests for the route_cleaner CLI: JSON output, CSV logfile output and error responses.
"""
import json
import os
import sys

import matplotlib
matplotlib.use('Agg')

import pytest

# Add parent directory to path for imports
PARENT_DIR = os.path.dirname(os.path.dirname(os.path.abspath(__file__)))
if PARENT_DIR not in sys.path:
    sys.path.insert(0, PARENT_DIR)

import route_cleaner

RESOURCES_DIR = os.path.join(os.path.dirname(os.path.abspath(__file__)), "resources")
SAMPLE_ROUTE = os.path.join(RESOURCES_DIR, "sample_route.csv")


def run_cli(capsys, argv):
    route_cleaner.main(argv)
    return json.loads(capsys.readouterr().out)


def run_cli_failure(capsys, argv):
    with pytest.raises(SystemExit) as exc_info:
        route_cleaner.main(argv)
    assert exc_info.value.code == 1
    response = json.loads(capsys.readouterr().out)
    assert response["success"] is False
    return response


def write_example(tmp_path):
    path = tmp_path / "journey.csv"
    path.write_text("0,0,0\n0,1,3600\n0,2,3601\n")
    return str(path)


def test_prints_cleaned_route(capsys, tmp_path):
    response = run_cli(capsys, [write_example(tmp_path)])

    assert response["success"] is True
    assert response["route"] == [["0", "0", "0"], ["0", "1", "3600"]]
    assert response["summary"]["kept_points"] == 2
    assert response["summary"]["discarded_points"] == 1
    assert response["summary"]["thresholds"] == {
        "max_speed": 70.0, "max_acceleration": 10.0, "max_deceleration": -15.0,
    }
    assert response["discarded"][0]["index"] == 2
    assert response["discarded"][0]["reasons"] == ["speed", "acceleration"]


def test_threshold_flags(capsys, tmp_path):
    response = run_cli(capsys, [write_example(tmp_path), "-s", "60", "--max-acc", "5", "-d", "-5"])

    assert response["route"] == [["0", "0", "0"]]
    assert response["summary"]["thresholds"]["max_speed"] == 60.0
    assert "warning" in response


def test_logfile_gets_csv_extension(capsys, tmp_path):
    target = tmp_path / "clean"
    response = run_cli(capsys, [write_example(tmp_path), "-l", str(target)])

    written = str(target) + ".csv"
    assert response["output_file"] == written
    assert "route" not in response
    with open(written) as f:
        assert f.read().splitlines() == ["0,0,0", "0,1,3600"]


def test_zero_duration_reported_without_crash(capsys, tmp_path):
    path = tmp_path / "same_time.csv"
    path.write_text("0,0,100\n0,1,100\n")
    response = run_cli(capsys, [str(path)])

    assert response["route"] == [["0", "0", "100"]]
    # inf is not valid JSON, reported as null
    assert response["discarded"][0]["speed_mph"] is None
    assert "zero_duration" in response["caution"]


def test_sample_route(capsys):
    response = run_cli(capsys, [SAMPLE_ROUTE])
    assert response["summary"]["total_points"] == 10
    assert response["summary"]["kept_points"] == 7
    assert response["summary"]["discarded_ratio"] == 30.0
    assert "many_discarded" in response["caution"]


def test_plot_with_logfile(capsys, tmp_path):
    target = tmp_path / "clean.csv"
    run_cli(capsys, [SAMPLE_ROUTE, "-l", str(target), "--plot"])
    assert os.path.exists(tmp_path / "clean_route.png")


def test_missing_file_argument(capsys):
    response = run_cli_failure(capsys, [])
    assert "No route file given" in response["error"]


def test_wrong_extension(capsys, tmp_path):
    path = tmp_path / "route.txt"
    path.write_text("0,0,0\n")
    response = run_cli_failure(capsys, [str(path)])
    assert "Unsupported file type" in response["error"]


def test_file_not_found(capsys, tmp_path):
    response = run_cli_failure(capsys, [str(tmp_path / "nope.csv")])
    assert "File not found" in response["error"]


def test_malformed_row(capsys, tmp_path):
    path = tmp_path / "bad.csv"
    path.write_text("0,0,0\nfoo,bar,baz\n")
    response = run_cli_failure(capsys, [str(path)])
    assert "Malformed row 2" in response["error"]


def test_decreasing_timestamps(capsys, tmp_path):
    path = tmp_path / "backwards.csv"
    path.write_text("0,0,100\n0,0.01,50\n")
    response = run_cli_failure(capsys, [str(path)])
    assert "must not decrease" in response["error"]


def test_logfile_keeps_rows_as_read(capsys, tmp_path):
    """Surviving rows are written back byte for byte, fractional timestamps included."""
    source = tmp_path / "precise.csv"
    source.write_bytes(b"51.50000,-0.13,1400000000.7\n51.50001,-0.13,1400000010\n")
    target = tmp_path / "precise_clean.csv"

    response = run_cli(capsys, [str(source), "-l", str(target)])

    assert response["summary"]["kept_points"] == 2
    assert target.read_bytes() == source.read_bytes()


def test_route_dump_keeps_source_text(capsys, tmp_path):
    path = tmp_path / "precise.csv"
    path.write_text("51.50000,-0.13,1400000000.7\n")
    response = run_cli(capsys, [str(path)])
    assert response["route"] == [["51.50000", "-0.13", "1400000000.7"]]


def test_infinite_timestamp_is_malformed(capsys, tmp_path):
    path = tmp_path / "inf.csv"
    path.write_text("0,0,0\n0,0,inf\n")
    response = run_cli_failure(capsys, [str(path)])
    assert "Malformed row 2" in response["error"]
