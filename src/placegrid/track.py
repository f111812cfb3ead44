"""track.py

Grid codes visited by GPX routes, tracks and waypoints.

Usage::

    from placegrid.track import gpx_to_grid_codes

    codes = gpx_to_grid_codes("walk.gpx")
"""

from __future__ import annotations

import logging
from typing import Iterable, List, Tuple

import gpxpy

from .geo import extract_gpx_points
from .grid_code import encode

logger = logging.getLogger(__name__)


def points_to_grid_codes(points: Iterable[Tuple[float, float]]) -> List[str]:
    """Codes of ``(lon, lat)`` points, de-duplicated in first-visit order."""
    return list(dict.fromkeys(encode(lat, lon) for lon, lat in points))


def gpx_to_grid_codes(gpx_path: str) -> List[str]:
    """Return the codes visited by one GPX file.

    Raises:
        CoordinateOutOfRangeError: If the file holds an invalid position.
    """
    with open(gpx_path, "r", encoding="utf-8") as f:
        gpx = gpxpy.parse(f)

    points = extract_gpx_points(gpx)
    if not points:
        logger.debug("no points in %s", gpx_path)
        return []
    return points_to_grid_codes(points)


def gpx_files_to_grid_codes(gpx_paths: List[str]) -> List[str]:
    """Return the codes visited by several GPX files, in file order."""
    all_points: List[Tuple[float, float]] = []
    for gpx_path in gpx_paths:
        with open(gpx_path, "r", encoding="utf-8") as f:
            gpx = gpxpy.parse(f)
        all_points.extend(extract_gpx_points(gpx))

    logger.debug("%d points from %d GPX files", len(all_points), len(gpx_paths))
    return points_to_grid_codes(all_points)
