"""
grid_index.py

In-memory index of items keyed by grid code.

Stories, photos or any other content pinned to a place are bucketed under
the code of the cell they were created in.  Within a cell items keep their
insertion order.  The index answers two questions:

- what is stored at this code?
- which stored places are within N meters of me, nearest first?

Persistence is the caller's concern; the index is a plain dict underneath.
"""

from __future__ import annotations

import logging
from math import isfinite
from typing import Dict, Generic, Iterable, List, Tuple, TypeVar

from .errors import RadiusOutOfRangeError
from .geo import haversine_m
from .grid_code import check_coordinate, decode, encode, indices_from_code
from .models import NearbyLocation

logger = logging.getLogger(__name__)

T = TypeVar("T")


class GridCodeIndex(Generic[T]):
    """Buckets items by the grid code of their position.

    Example::

        idx = GridCodeIndex[str]()
        code = idx.insert(28.6139, 77.2090, "India Gate at dusk")
        idx.items(code)                       # ["India Gate at dusk"]
        idx.nearby(28.6140, 77.2091, 500.0)   # [NearbyLocation(code=..., ...)]
    """

    def __init__(self) -> None:
        # maps code -> [item, ...] in insertion order
        self._cells: Dict[str, List[T]] = {}

    # --------------------------------------------------------

    def insert(self, lat: float, lon: float, item: T) -> str:
        """Store *item* under the code of ``(lat, lon)`` and return the code."""
        code = encode(lat, lon)
        self._cells.setdefault(code, []).append(item)
        return code

    def insert_at(self, code: str, item: T) -> None:
        """Store *item* under an existing code (e.g. one read from a QR)."""
        indices_from_code(code)
        self._cells.setdefault(code, []).append(item)

    def bulk_insert(self, rows: Iterable[Tuple[float, float, T]]) -> None:
        """Insert ``(lat, lon, item)`` rows."""
        n = 0
        for lat, lon, item in rows:
            self.insert(lat, lon, item)
            n += 1
        logger.debug("indexed %d items, %d cells in use", n, len(self._cells))

    # --------------------------------------------------------

    def items(self, code: str) -> List[T]:
        """Items stored under *code*, oldest first (empty if none)."""
        return list(self._cells.get(code, ()))

    def codes(self) -> List[str]:
        """Codes holding at least one item, in first-use order."""
        return list(self._cells)

    # --------------------------------------------------------

    def nearby(self, lat: float, lon: float, radius_m: float) -> List[NearbyLocation]:
        """Stored places within *radius_m* of a point, nearest first.

        Distance is measured to the decoded centre of each code.  Ties are
        broken by code so the order is stable.

        Raises:
            CoordinateOutOfRangeError: If the query point is out of range.
            RadiusOutOfRangeError: If the radius is negative or not finite.
        """
        check_coordinate(lat, lon)
        if not isfinite(radius_m) or radius_m < 0:
            raise RadiusOutOfRangeError(f"radius {radius_m!r} must be a non-negative number")

        out: List[NearbyLocation] = []
        for code, bucket in self._cells.items():
            center = decode(code)
            d = haversine_m(lon, lat, center.longitude, center.latitude)
            if d <= radius_m:
                out.append(
                    NearbyLocation(
                        code=code,
                        coordinate=center,
                        distance_m=d,
                        item_count=len(bucket),
                    )
                )
        out.sort(key=lambda row: (row.distance_m, row.code))
        return out

    # --------------------------------------------------------

    def buckets(self) -> int:
        """Number of codes holding at least one item."""
        return len(self._cells)

    def __contains__(self, code: object) -> bool:
        return code in self._cells

    def __len__(self) -> int:
        """Total number of stored items."""
        return sum(len(v) for v in self._cells.values())
