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
RouteCleaner CLI entry point.

Reads a GPS route, drops points that imply implausible speed, acceleration
or deceleration, and prints the cleaned route or writes it to a CSV file.
"""
import json
import math
import os
import sys
import argparse
import logging

# Add script directory to path for imports
SCRIPT_DIR = os.path.dirname(os.path.abspath(__file__))
if SCRIPT_DIR not in sys.path:
    sys.path.insert(0, SCRIPT_DIR)

from core.cleaner import clean_route
from core.filters import build_cleaning_config
from core.warnings import compute_warnings
from core.visualization import plot_route
from parsers.csv_handler import ensure_csv_extension, read_route_csv, write_route_csv
from parsers.nmea_handler import extract_route_points
import config
from locales.strings import ERRORS, MESSAGES

# Configure logging (basicConfig is sufficient, no need for duplicate handler)
logging.basicConfig(
    level=logging.ERROR,
    format='%(levelname)s: %(message)s',
    stream=sys.stderr
)
logger = logging.getLogger('route_cleaner')


def _json_number(value):
    # JSON has no inf/nan
    if value is None or math.isnan(value) or math.isinf(value):
        return None
    return value


def load_route(file_path):
    """
    Load route points from a CSV or NMEA file, chosen by extension.

    Args:
        file_path: path to route file

    Returns:
        list of Point

    Raises:
        ValueError: for unsupported extensions, missing files or malformed data
    """
    extensions = getattr(config, 'SUPPORTED_EXTENSIONS', ('.csv', '.nmea'))
    lowered = file_path.lower()
    if not lowered.endswith(tuple(extensions)):
        raise ValueError(ERRORS['unsupported_extension'].format(
            file_path=file_path, extensions=', '.join(extensions)
        ))
    if not os.path.exists(file_path):
        raise ValueError(ERRORS['file_not_found'].format(file_path=file_path))

    logger.info(MESSAGES['reading_file'].format(file_path=file_path))
    if lowered.endswith(getattr(config, 'NMEA_EXTENSION', '.nmea')):
        return extract_route_points(file_path)
    return read_route_csv(file_path)


def format_json_response(cleaning_result, warnings_dict=None, cautions_dict=None, output_file=None):
    """
    Format JSON response for CLI output.

    Args:
        cleaning_result: dict from clean_route
        warnings_dict: warnings
        cautions_dict: cautions
        output_file: CSV path the route was written to, if any

    Returns:
        dict with JSON response
    """
    response = {
        "success": True,
        "summary": {
            "total_points": cleaning_result['total_points'],
            "kept_points": cleaning_result['kept_points'],
            "discarded_points": cleaning_result['discarded_points'],
            "discarded_ratio": round(cleaning_result['discarded_ratio'] * 100, 1),
            "reasons": cleaning_result['reasons'],
            "thresholds": cleaning_result['config'],
        },
    }

    if output_file:
        response["output_file"] = output_file
    else:
        response["route"] = [point.output_row() for point in cleaning_result['route']]

    if cleaning_result['discarded']:
        response["discarded"] = [
            {
                "index": entry['index'],
                "point": entry['point'].as_row(),
                "speed_mph": _json_number(entry['point'].speed_mph),
                "acceleration": _json_number(entry['point'].acceleration),
                "reasons": entry['reasons'],
            }
            for entry in cleaning_result['discarded']
        ]

    if warnings_dict:
        response["warning"] = warnings_dict

    if cautions_dict:
        response["caution"] = cautions_dict

    return response


def _print_json(payload):
    print(json.dumps(payload, ensure_ascii=False, indent=getattr(config, 'JSON_INDENT', 2)))


def _fail(message):
    _print_json({"success": False, "error": message})
    sys.exit(1)


def build_parser():
    parser = argparse.ArgumentParser(
        description='Discard GPS route points that imply implausible travel',
        usage='%(prog)s [options] file.csv'
    )
    parser.add_argument('route_file', nargs='?', help='Route file (.csv rows of lat,lon,timestamp or .nmea)')
    parser.add_argument('-s', '--max-speed', dest='max_speed', type=float, metavar='MPH',
                        default=getattr(config, 'MAX_SPEED_MPH', 70.0),
                        help='Set a maximum journey speed')
    parser.add_argument('-a', '--max-acc', dest='max_acceleration', type=float, metavar='VALUE',
                        default=getattr(config, 'MAX_ACCELERATION', 10.0),
                        help='Set a maximum acceleration (mph/s)')
    parser.add_argument('-d', '--max-dec', dest='max_deceleration', type=float, metavar='VALUE',
                        default=getattr(config, 'MAX_DECELERATION', -15.0),
                        help='Set a maximum deceleration (mph/s, negative)')
    parser.add_argument('-l', '--logfile', metavar='FILE', default=None,
                        help='Log output to FILE (.csv appended if missing)')
    parser.add_argument('--plot', action='store_true', help='Plot raw and cleaned route')
    parser.add_argument('-v', '--verbose', action='store_true', help='Show progress messages')
    return parser


def main(argv=None):
    """CLI entry point."""
    parser = build_parser()
    args = parser.parse_args(argv)

    if args.verbose:
        logging.getLogger().setLevel(logging.INFO)

    if not args.route_file:
        _fail(ERRORS['missing_file'])

    try:
        cleaning_config = build_cleaning_config(
            max_speed=args.max_speed,
            max_acceleration=args.max_acceleration,
            max_deceleration=args.max_deceleration,
        )

        points = load_route(args.route_file)
        raw_points = list(points)

        result = clean_route(points, cleaning_config)
        warnings_dict, cautions_dict = compute_warnings(result)

        output_file = None
        if args.logfile:
            output_file = ensure_csv_extension(args.logfile)
            logger.info(MESSAGES['logging_output'].format(file_path=output_file))
            write_route_csv(output_file, result['route'])
            logger.info(MESSAGES['created_file'].format(file_path=output_file))

        if args.plot:
            plot_path = plot_route(raw_points, result['route'], output_file, result['discarded'],
                                   title=os.path.basename(args.route_file))
            if plot_path:
                logger.info(MESSAGES['plot_saved'].format(file_path=plot_path))

        _print_json(format_json_response(result, warnings_dict, cautions_dict, output_file))

    except ValueError as ve:
        _fail(str(ve))
    except Exception as e:
        logger.error(f"Unexpected error: {e}")
        _fail(ERRORS['cleaning_failed'].format(error=str(e)))


if __name__ == "__main__":
    main()
