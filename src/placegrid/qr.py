"""qr.py

The record printed into place QR codes::

    {"type": "PlaceMemory", "version": 1,
     "gridCode": "N9NB-GPMJ-NC",
     "coordinate": {"latitude": 28.61389.., "longitude": 77.20897..}}

The embedded coordinate must lie in the cell named by ``gridCode`` so that
scanning a sticker and typing its code land on the same place.
"""

from __future__ import annotations

from typing import Literal

from pydantic import (
    BaseModel,
    ConfigDict,
    Field,
    ValidationError,
    field_validator,
    model_validator,
)

from .errors import InvalidGridCodeError
from .grid_code import cell_indices, decode, indices_from_code
from .models import GeoCoordinate

PAYLOAD_TYPE = "PlaceMemory"
PAYLOAD_VERSION = 1


class QRPayload(BaseModel):
    model_config = ConfigDict(frozen=True, extra="forbid", populate_by_name=True)

    type: Literal["PlaceMemory"] = PAYLOAD_TYPE
    version: Literal[1] = PAYLOAD_VERSION
    grid_code: str = Field(alias="gridCode")
    coordinate: GeoCoordinate

    @field_validator("grid_code")
    @classmethod
    def grid_code_must_name_a_cell(cls, v: str) -> str:
        indices_from_code(v)
        return v

    @model_validator(mode="after")
    def coordinate_must_lie_in_cell(self) -> "QRPayload":
        lat_index, lng_index, _sub = indices_from_code(self.grid_code)
        got = cell_indices(self.coordinate.latitude, self.coordinate.longitude)
        if got[:2] != (lat_index, lng_index):
            raise ValueError(
                f"coordinate {self.coordinate.latitude}, {self.coordinate.longitude} "
                f"is outside cell {self.grid_code}"
            )
        return self


def build_payload(code: str) -> QRPayload:
    """Payload for *code*, embedding its decoded centre."""
    return QRPayload(grid_code=code, coordinate=decode(code))


def payload_to_json(payload: QRPayload) -> str:
    return payload.model_dump_json(by_alias=True)


def parse_payload(text: str | bytes) -> QRPayload:
    """Parse scanned QR text.

    Raises:
        InvalidGridCodeError: If the text is not a consistent PlaceMemory
            payload.
    """
    try:
        return QRPayload.model_validate_json(text)
    except ValidationError as exc:
        raise InvalidGridCodeError(f"not a PlaceMemory payload: {exc}") from exc
