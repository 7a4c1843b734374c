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
Visualization module for RouteCleaner.
Draws the raw and cleaned route using matplotlib.
"""

import logging
import os

import matplotlib.pyplot as plt

try:
    from .. import config
except ImportError:
    import config

logger = logging.getLogger(__name__)


def _lons_lats(points):
    if not points:
        return [], []
    return [p.longitude for p in points], [p.latitude for p in points]


def plot_route(raw_points, kept_points, output_file=None, discarded=None, title=None):
    """Plot the route before and after cleaning.

    Args:
        raw_points: all points as read from the input
        kept_points: points that survived cleaning
        output_file: base path for saving (the plot goes to <base>_route.png)
        discarded: list of {'index', 'point', 'reasons'} from clean_route
        title: plot title

    Returns:
        str: path to saved file or None
    """
    if not raw_points:
        logger.debug("No points to plot")
        return None

    raw_lons, raw_lats = _lons_lats(raw_points)
    kept_lons, kept_lats = _lons_lats(kept_points)

    fig, ax = plt.subplots(figsize=getattr(config, 'PLOT_FIGSIZE', (8, 8)))
    line_width = getattr(config, 'PLOT_LINE_WIDTH', 1.5)

    ax.plot(raw_lons, raw_lats, '-', linewidth=line_width,
            color=getattr(config, 'PLOT_RAW_COLOR', '#bbbbbb'), label='Raw route')
    if kept_points:
        ax.plot(kept_lons, kept_lats, '-o', linewidth=line_width, markersize=3,
                color=getattr(config, 'PLOT_CLEAN_COLOR', 'blue'), label='Cleaned route')

    if discarded:
        bad_lons, bad_lats = _lons_lats([entry['point'] for entry in discarded])
        ax.scatter(bad_lons, bad_lats, s=getattr(config, 'PLOT_MARKER_SIZE', 30), marker='x',
                   color=getattr(config, 'PLOT_DISCARDED_COLOR', 'red'),
                   label=f'Discarded ({len(discarded)})', zorder=3)

    ax.set_title(title or 'Route')
    ax.set_xlabel('Longitude')
    ax.set_ylabel('Latitude')
    ax.set_aspect('equal', adjustable='datalim')
    ax.legend(loc=getattr(config, 'PLOT_LEGEND_LOCATION', 'best'))

    route_filename = None
    if output_file:
        base_filename = os.path.splitext(output_file)[0]
        route_filename = f"{base_filename}{getattr(config, 'PLOT_SUFFIX', '_route.png')}"
        fig.savefig(route_filename, dpi=getattr(config, 'PLOT_DPI', 150), bbox_inches='tight')
    else:
        plt.show()

    plt.close(fig)
    return route_filename
