"""placegrid - shareable ~10 m grid codes for GPS coordinates."""

from .errors import (
    CoordinateOutOfRangeError,
    GridCodeError,
    InvalidGridCodeError,
    RadiusOutOfRangeError,
)
from .geo import distance_m, format_distance, haversine_m
from .grid_code import (
    ALPHABET,
    LATITUDE_PRECISION,
    LONGITUDE_PRECISION,
    SearchConfig,
    codes_in_radius,
    decode,
    encode,
    encode_coordinate,
    grid_cell,
    grid_cell_for_code,
    is_valid_grid_code,
    neighbor_codes,
)
from .grid_index import GridCodeIndex
from .models import CellBounds, GeoCoordinate, GridCell, NearbyLocation
from .qr import QRPayload, build_payload, parse_payload, payload_to_json
from .track import gpx_files_to_grid_codes, gpx_to_grid_codes

__all__ = [
    "ALPHABET",
    "LATITUDE_PRECISION",
    "LONGITUDE_PRECISION",
    "CellBounds",
    "CoordinateOutOfRangeError",
    "GeoCoordinate",
    "GridCell",
    "GridCodeError",
    "GridCodeIndex",
    "InvalidGridCodeError",
    "NearbyLocation",
    "QRPayload",
    "RadiusOutOfRangeError",
    "SearchConfig",
    "build_payload",
    "codes_in_radius",
    "decode",
    "distance_m",
    "encode",
    "encode_coordinate",
    "format_distance",
    "gpx_files_to_grid_codes",
    "gpx_to_grid_codes",
    "grid_cell",
    "grid_cell_for_code",
    "haversine_m",
    "is_valid_grid_code",
    "neighbor_codes",
    "parse_payload",
    "payload_to_json",
]
