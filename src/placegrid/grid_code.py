"""
grid_code.py

Global ~10 m grid codes for GPS coordinates.

Every coordinate maps to a short code of the form ``XXXX-YYYY-ZZ`` drawn from
a 27-symbol alphabet without look-alike glyphs (no 0/O, 1/I/L, no vowels).
Codes are meant to be read aloud, printed on QR stickers and used as storage
keys, so the format and constants below must never change.

Design goals:
- no state, pure functions only
- deterministic: one cell, one code
- lossless for the quantized cell (index triple <-> code is a bijection)
- decoding returns the centre of the sub-cell, never the original point

Layout of a code:
    The coordinate is normalized to ``lat + 90`` / ``lon + 180`` and
    quantized to ``LATITUDE_PRECISION`` / ``LONGITUDE_PRECISION`` degree
    buckets.  A 5x5 sub-grid inside each bucket refines the position.  The
    index triple ``(lat_index, lng_index, sub_index)`` is packed into one
    mixed-radix number whose ten base-27 digits are split 4-4-2.  The
    earth-wide grid has 2,000,000 x 4,000,000 x 25 cells, which fits in
    27**10 symbols; four digits per axis alone would not.

Radius enumeration is a lattice sweep, not exact circle/cell intersection:
cells on the rim are in or out depending on where their sample lands.
"""

from __future__ import annotations

import re
from dataclasses import dataclass
from math import floor, isfinite
from typing import List, Optional, Set, Tuple

from .errors import (
    CoordinateOutOfRangeError,
    InvalidGridCodeError,
    RadiusOutOfRangeError,
)
from .geo import degree_spans, haversine_m, wrap_longitude
from .models import CellBounds, GeoCoordinate, GridCell

# ------------------------------------------------------------
# Code format
# ------------------------------------------------------------

# 27 symbols: digits 2-9 and consonants, without 0/O, 1/I/L
ALPHABET = "23456789BCDFGHJKMNPQRSTVWXZ"
BASE = len(ALPHABET)

LAT_GROUP_LENGTH = 4
LNG_GROUP_LENGTH = 4
SUB_GROUP_LENGTH = 2
DIGITS = LAT_GROUP_LENGTH + LNG_GROUP_LENGTH + SUB_GROUP_LENGTH
SEPARATOR = "-"

_DECODE_MAP = {c: i for i, c in enumerate(ALPHABET)}

_CODE_RE = re.compile(
    "[{a}]{{{n1}}}{sep}[{a}]{{{n2}}}{sep}[{a}]{{{n3}}}".format(
        a=ALPHABET,
        n1=LAT_GROUP_LENGTH,
        n2=LNG_GROUP_LENGTH,
        n3=SUB_GROUP_LENGTH,
        sep=re.escape(SEPARATOR),
    )
)

# ------------------------------------------------------------
# Grid geometry
# ------------------------------------------------------------

# ~10 meters at the equator.  Longitude cells narrow towards the poles;
# there is no cos(lat) correction.
LATITUDE_PRECISION = 0.00009
LONGITUDE_PRECISION = 0.00009

# each cell is refined by a SUB_DIVISIONS x SUB_DIVISIONS sub-grid
SUB_DIVISIONS = 5
SUB_CELLS = SUB_DIVISIONS * SUB_DIVISIONS

LAT_CELLS = int(round(180.0 / LATITUDE_PRECISION))
LNG_CELLS = int(round(360.0 / LONGITUDE_PRECISION))
CELL_COUNT = LAT_CELLS * LNG_CELLS * SUB_CELLS


# ------------------------------------------------------------
# Radius search limits
# ------------------------------------------------------------

@dataclass(frozen=True)
class SearchConfig:
    max_radius_m: float = 1000.0  # reject larger radius queries outright
    max_samples: int = 250_000  # cap on lattice points tested per query


DEFAULT_SEARCH = SearchConfig()


# ------------------------------------------------------------
# Base-27 encoding
# ------------------------------------------------------------

def base27_encode(n: int, length: int) -> str:
    """Encode a non-negative integer as exactly *length* base-27 digits.

    Most-significant digit first, left-padded with the zero symbol ``2``.

    Raises:
        ValueError: If *n* is negative or needs more than *length* digits.
    """
    if n < 0:
        raise ValueError("base27 only supports non-negative integers")
    if n >= BASE ** length:
        raise ValueError(f"{n} does not fit in {length} base27 digits")

    chars = []
    for _ in range(length):
        n, r = divmod(n, BASE)
        chars.append(ALPHABET[r])
    return "".join(reversed(chars))


def base27_decode(s: str) -> int:
    """Decode base-27 digits back to an integer.

    Raises:
        ValueError: On a character outside :data:`ALPHABET`.
    """
    n = 0
    for c in s:
        try:
            n = n * BASE + _DECODE_MAP[c]
        except KeyError as exc:
            raise ValueError(f"invalid base27 character: {c!r}") from exc
    return n


# ------------------------------------------------------------
# Quantization
# ------------------------------------------------------------

def check_coordinate(lat: float, lon: float) -> None:
    """Reject latitudes outside [-90, 90], longitudes outside [-180, 180].

    Raises:
        CoordinateOutOfRangeError: For out-of-range or non-finite input.
    """
    if not (isfinite(lat) and -90.0 <= lat <= 90.0):
        raise CoordinateOutOfRangeError(f"latitude {lat!r} outside [-90, 90]")
    if not (isfinite(lon) and -180.0 <= lon <= 180.0):
        raise CoordinateOutOfRangeError(f"longitude {lon!r} outside [-180, 180]")


def cell_indices(lat: float, lon: float) -> Tuple[int, int, int]:
    """Quantize a coordinate into its ``(lat_index, lng_index, sub_index)``.

    Normalization happens before quantization, so every floor below works
    on non-negative values.  Longitude ``+180`` is the ``-180`` meridian and
    latitude ``+90`` is folded into the northernmost row.

    Args:
        lat: Latitude in decimal degrees, within [-90, 90].
        lon: Longitude in decimal degrees, within [-180, 180].

    Returns:
        The grid row, grid column and ``sub_lat * 5 + sub_lng``.

    Raises:
        CoordinateOutOfRangeError: If the coordinate is out of range.
    """
    check_coordinate(lat, lon)
    if lon == 180.0:
        lon = -180.0

    lat_pos = (lat + 90.0) / LATITUDE_PRECISION
    lng_pos = (lon + 180.0) / LONGITUDE_PRECISION

    lat_index = int(floor(lat_pos))
    lng_index = int(floor(lng_pos))
    sub_lat = min(SUB_DIVISIONS - 1, int(floor((lat_pos - lat_index) * SUB_DIVISIONS)))
    sub_lng = min(SUB_DIVISIONS - 1, int(floor((lng_pos - lng_index) * SUB_DIVISIONS)))

    if lat_index >= LAT_CELLS:
        lat_index, sub_lat = LAT_CELLS - 1, SUB_DIVISIONS - 1
    if lng_index >= LNG_CELLS:
        lng_index -= LNG_CELLS

    return lat_index, lng_index, sub_lat * SUB_DIVISIONS + sub_lng


def code_from_indices(lat_index: int, lng_index: int, sub_index: int) -> str:
    """Format an index triple as a canonical ``XXXX-YYYY-ZZ`` code.

    Raises:
        ValueError: If any index lies outside the global grid.
    """
    if not 0 <= lat_index < LAT_CELLS:
        raise ValueError(f"lat_index {lat_index} outside [0, {LAT_CELLS})")
    if not 0 <= lng_index < LNG_CELLS:
        raise ValueError(f"lng_index {lng_index} outside [0, {LNG_CELLS})")
    if not 0 <= sub_index < SUB_CELLS:
        raise ValueError(f"sub_index {sub_index} outside [0, {SUB_CELLS})")

    number = (lat_index * LNG_CELLS + lng_index) * SUB_CELLS + sub_index
    digits = base27_encode(number, DIGITS)
    a = LAT_GROUP_LENGTH
    b = a + LNG_GROUP_LENGTH
    return SEPARATOR.join((digits[:a], digits[a:b], digits[b:]))


def indices_from_code(code: str) -> Tuple[int, int, int]:
    """Inverse of :func:`code_from_indices`.

    Raises:
        InvalidGridCodeError: If *code* is malformed or names no grid cell.
    """
    if not is_valid_grid_code(code):
        raise InvalidGridCodeError(f"invalid grid code format: {code!r}")

    number = base27_decode(code.replace(SEPARATOR, ""))
    if number >= CELL_COUNT:
        raise InvalidGridCodeError(f"grid code {code!r} lies outside the grid")

    cell, sub_index = divmod(number, SUB_CELLS)
    lat_index, lng_index = divmod(cell, LNG_CELLS)
    return lat_index, lng_index, sub_index


# ------------------------------------------------------------
# Public codec
# ------------------------------------------------------------

def encode(lat: float, lon: float) -> str:
    """Return the grid code of the cell containing ``(lat, lon)``.

    Raises:
        CoordinateOutOfRangeError: If the coordinate is out of range.
    """
    return code_from_indices(*cell_indices(lat, lon))


def encode_coordinate(coord: GeoCoordinate) -> str:
    return encode(coord.latitude, coord.longitude)


def decode(code: str) -> GeoCoordinate:
    """Return the centre of the sub-cell named by *code*.

    Decoding is lossy: every coordinate inside the sub-cell comes back as
    the same centre, and ``encode`` of that centre yields *code* again.

    Raises:
        InvalidGridCodeError: If *code* is not a valid grid code.
    """
    lat_index, lng_index, sub_index = indices_from_code(code)
    sub_lat, sub_lng = divmod(sub_index, SUB_DIVISIONS)

    latitude = lat_index * LATITUDE_PRECISION - 90.0
    longitude = lng_index * LONGITUDE_PRECISION - 180.0
    latitude += (sub_lat + 0.5) * (LATITUDE_PRECISION / SUB_DIVISIONS)
    longitude += (sub_lng + 0.5) * (LONGITUDE_PRECISION / SUB_DIVISIONS)

    return GeoCoordinate(latitude=latitude, longitude=longitude)


def is_valid_grid_code(code: object) -> bool:
    """Syntactic check: three groups of 4, 4 and 2 alphabet symbols.

    Does not decode, so a well-formed code past the edge of the grid still
    passes; :func:`decode` rejects those.
    """
    return isinstance(code, str) and _CODE_RE.fullmatch(code) is not None


# ------------------------------------------------------------
# Cells
# ------------------------------------------------------------

def _cell_bounds(lat_index: int, lng_index: int) -> CellBounds:
    south = lat_index * LATITUDE_PRECISION - 90.0
    west = lng_index * LONGITUDE_PRECISION - 180.0
    return CellBounds(
        north=min(90.0, south + LATITUDE_PRECISION),
        south=south,
        east=west + LONGITUDE_PRECISION,
        west=west,
    )


def grid_cell_for_code(code: str) -> GridCell:
    """Build the :class:`GridCell` view for a code.

    ``bounds`` are the edges of the whole ~10 m cell; ``center`` is the
    centre of the sub-cell the code refines to.
    """
    lat_index, lng_index, _sub = indices_from_code(code)
    return GridCell(
        code=code,
        center=decode(code),
        bounds=_cell_bounds(lat_index, lng_index),
    )


def grid_cell(lat: float, lon: float) -> GridCell:
    """Build the :class:`GridCell` view for the cell containing a point."""
    return grid_cell_for_code(encode(lat, lon))


# ------------------------------------------------------------
# Neighbourhoods
# ------------------------------------------------------------

def codes_in_radius(
    lat: float,
    lon: float,
    radius_m: float,
    config: Optional[SearchConfig] = None,
) -> Set[str]:
    """Return the codes of cells sampled within *radius_m* of a point.

    A rectangular lattice with the quantization step as spacing is laid over
    the radius' bounding box, centred on the query point.  Each lattice
    point whose haversine distance is within the radius contributes its
    code.  Cells on the rim may be missed or included depending on where
    their sample falls.

    Cost grows with the square of the radius, hence the limits in *config*.

    Args:
        lat: Query latitude in decimal degrees.
        lon: Query longitude in decimal degrees.
        radius_m: Search radius in meters; ``0`` yields the point's own code.
        config: Search limits, :data:`DEFAULT_SEARCH` when *None*.

    Returns:
        Set of distinct grid codes.

    Raises:
        CoordinateOutOfRangeError: If the query point is out of range.
        RadiusOutOfRangeError: If the radius is negative, not finite, or
            exceeds the configured limits.  Near the poles the longitude
            span widens towards 180°, so even a radius of a meter or two
            can exceed ``max_samples``; a radius of 0 always succeeds.
    """
    cfg = config or DEFAULT_SEARCH
    check_coordinate(lat, lon)
    if not isfinite(radius_m) or radius_m < 0:
        raise RadiusOutOfRangeError(f"radius {radius_m!r} must be a non-negative number")
    if radius_m > cfg.max_radius_m:
        raise RadiusOutOfRangeError(
            f"radius {radius_m} m exceeds the {cfg.max_radius_m} m limit"
        )

    lat_deg, lon_deg = degree_spans(lat, radius_m)
    lat_steps = int(floor(lat_deg / LATITUDE_PRECISION))
    lng_steps = int(floor(lon_deg / LONGITUDE_PRECISION))

    samples = (2 * lat_steps + 1) * (2 * lng_steps + 1)
    if samples > cfg.max_samples:
        raise RadiusOutOfRangeError(
            f"radius {radius_m} m at latitude {lat} needs {samples} samples "
            f"(limit {cfg.max_samples})"
        )

    codes: Set[str] = set()
    for i in range(-lat_steps, lat_steps + 1):
        sample_lat = lat + i * LATITUDE_PRECISION
        if not -90.0 <= sample_lat <= 90.0:
            continue
        for j in range(-lng_steps, lng_steps + 1):
            sample_lon = wrap_longitude(lon + j * LONGITUDE_PRECISION)
            if haversine_m(lon, lat, sample_lon, sample_lat) <= radius_m:
                codes.add(encode(sample_lat, sample_lon))

    return codes


def neighbor_codes(code: str, r: int) -> List[str]:
    """Return codes in a square neighbourhood of cells around *code*.

    Includes *code* itself.  Neighbours keep the same sub-cell position.
    Rows beyond the poles are dropped and columns wrap at the antimeridian,
    so away from the poles the result has ``(2*r + 1) ** 2`` codes.

    Args:
        code: A valid grid code.
        r: Radius in cells (non-negative integer).

    Raises:
        InvalidGridCodeError: If *code* is not a valid grid code.
        ValueError: If *r* is negative.
    """
    if r < 0:
        raise ValueError("neighbourhood radius must be non-negative")

    lat_index, lng_index, sub_index = indices_from_code(code)
    out = []
    for dy in range(-r, r + 1):
        row = lat_index + dy
        if not 0 <= row < LAT_CELLS:
            continue
        for dx in range(-r, r + 1):
            col = (lng_index + dx) % LNG_CELLS
            out.append(code_from_indices(row, col, sub_index))
    return out
