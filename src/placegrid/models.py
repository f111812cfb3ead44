"""models.py

Pydantic value types shared by the codec and its consumers.

All models are frozen and reject unknown fields; they are computed fresh per
call and never persisted by this package.
"""

from __future__ import annotations

from pydantic import BaseModel, ConfigDict, Field


class GeoCoordinate(BaseModel):
    """A WGS-84 position in decimal degrees."""

    model_config = ConfigDict(frozen=True, extra="forbid")

    latitude: float = Field(ge=-90.0, le=90.0, allow_inf_nan=False)
    longitude: float = Field(ge=-180.0, le=180.0, allow_inf_nan=False)


class CellBounds(BaseModel):
    """Edges of a grid cell in decimal degrees."""

    model_config = ConfigDict(frozen=True, extra="forbid")

    north: float
    south: float
    east: float
    west: float

    def contains(self, latitude: float, longitude: float) -> bool:
        """Closed containment test; points on a shared edge match both cells."""
        return (
            self.south <= latitude <= self.north
            and self.west <= longitude <= self.east
        )


class GridCell(BaseModel):
    """Derived view of one grid cell: its code, sub-cell centre and edges."""

    model_config = ConfigDict(frozen=True, extra="forbid")

    code: str
    center: GeoCoordinate
    bounds: CellBounds


class NearbyLocation(BaseModel):
    """One row of a "what is near me" answer, ordered by ``distance_m``."""

    model_config = ConfigDict(frozen=True, extra="forbid")

    code: str
    coordinate: GeoCoordinate
    distance_m: float = Field(ge=0.0)
    item_count: int = Field(default=0, ge=0)
