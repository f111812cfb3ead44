"""geo.py

Shared geographic utilities used by the grid codec and its consumers:
great-circle distance, distance formatting, meter/degree conversion and GPX
point extraction.
"""

from __future__ import annotations

from math import atan2, cos, floor, radians, sin, sqrt
from typing import List, Tuple

import gpxpy

from .models import GeoCoordinate

# Mean Earth radius used by the haversine distance (meters)
EARTH_RADIUS_M = 6371000.0

# ~1° of latitude in meters, used for bounding-box spans
METERS_PER_DEGREE = 111000.0


def haversine_m(lon1: float, lat1: float, lon2: float, lat2: float) -> float:
    """Great-circle distance in meters using the haversine formula.

    ``a`` is clamped into ``[0, 1]`` so floating-point drift on antipodal or
    identical points never leaves the domain of ``sqrt``/``atan2``.
    """
    lon1, lat1, lon2, lat2 = map(radians, (lon1, lat1, lon2, lat2))
    dlon = lon2 - lon1
    dlat = lat2 - lat1
    a = sin(dlat / 2) ** 2 + cos(lat1) * cos(lat2) * sin(dlon / 2) ** 2
    a = min(1.0, max(0.0, a))
    c = 2 * atan2(sqrt(a), sqrt(1 - a))
    return EARTH_RADIUS_M * c


def distance_m(a: GeoCoordinate, b: GeoCoordinate) -> float:
    """Haversine distance in meters between two coordinates."""
    return haversine_m(a.longitude, a.latitude, b.longitude, b.latitude)


def format_distance(meters: float) -> str:
    """Render a distance for display.

    Below 1000 m the value is rounded half-up to whole meters (``"50m"``);
    from 1000 m on it is shown in kilometers with one decimal (``"2.5km"``).
    Values in ``[999.5, 1000)`` therefore render as ``"1000m"``, not ``"1.0km"``.
    """
    if meters < 1000:
        return f"{int(floor(meters + 0.5))}m"
    return f"{meters / 1000:.1f}km"


def degree_spans(lat: float, radius_m: float) -> Tuple[float, float]:
    """Approximate ``(lat_deg, lon_deg)`` half-spans of a radius around *lat*.

    1° latitude is taken as 111 km; 1° longitude as 111 km * cos(lat).  The
    longitude span is capped at 180° since it blows up towards the poles.
    """
    lat_deg = radius_m / METERS_PER_DEGREE
    scale = max(1e-12, cos(radians(lat)))
    lon_deg = min(180.0, radius_m / (METERS_PER_DEGREE * scale))
    return lat_deg, lon_deg


def wrap_longitude(lon: float) -> float:
    """Wrap a longitude into ``[-180, 180)``."""
    return (lon + 180.0) % 360.0 - 180.0


def extract_gpx_points(gpx: gpxpy.gpx.GPX) -> List[Tuple[float, float]]:
    """Collect all route, track and waypoint positions as (lon, lat)."""
    pts: List[Tuple[float, float]] = []

    for route in gpx.routes:
        for p in route.points:
            pts.append((p.longitude, p.latitude))

    for track in gpx.tracks:
        for seg in track.segments:
            for p in seg.points:
                pts.append((p.longitude, p.latitude))

    for wpt in gpx.waypoints:
        pts.append((wpt.longitude, wpt.latitude))

    return pts
