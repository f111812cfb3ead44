import json

import pytest

from placegrid.errors import InvalidGridCodeError
from placegrid.grid_code import decode, encode
from placegrid.qr import QRPayload, build_payload, parse_payload, payload_to_json


@pytest.fixture
def code():
    return encode(28.6139, 77.2090)


class TestBuildPayload:
    def test_embeds_centre(self, code):
        p = build_payload(code)
        assert p.type == "PlaceMemory"
        assert p.version == 1
        assert p.grid_code == code
        assert p.coordinate == decode(code)

    def test_json_shape(self, code):
        data = json.loads(payload_to_json(build_payload(code)))
        assert data == {
            "type": "PlaceMemory",
            "version": 1,
            "gridCode": code,
            "coordinate": {
                "latitude": decode(code).latitude,
                "longitude": decode(code).longitude,
            },
        }

    def test_invalid_code(self):
        with pytest.raises(InvalidGridCodeError):
            build_payload("nope")


class TestParsePayload:
    def test_round_trip(self, code):
        p = parse_payload(payload_to_json(build_payload(code)))
        assert p.grid_code == code
        assert encode(p.coordinate.latitude, p.coordinate.longitude) == code

    def test_accepts_raw_point_inside_cell(self, code):
        text = json.dumps(
            {
                "type": "PlaceMemory",
                "version": 1,
                "gridCode": code,
                "coordinate": {"latitude": 28.6139, "longitude": 77.2090},
            }
        )
        assert parse_payload(text).grid_code == code

    def test_accepts_bytes(self, code):
        raw = payload_to_json(build_payload(code)).encode("utf-8")
        assert parse_payload(raw).grid_code == code

    @pytest.mark.parametrize(
        "text",
        [
            "not json",
            "{}",
            '{"type": "Other", "version": 1, "gridCode": "2222-2222-22",'
            ' "coordinate": {"latitude": -89.99999, "longitude": -179.99999}}',
            '{"type": "PlaceMemory", "version": 2, "gridCode": "2222-2222-22",'
            ' "coordinate": {"latitude": -89.99999, "longitude": -179.99999}}',
            '{"type": "PlaceMemory", "version": 1, "gridCode": "2222-2222-2O",'
            ' "coordinate": {"latitude": -89.99999, "longitude": -179.99999}}',
        ],
    )
    def test_rejects_malformed(self, text):
        with pytest.raises(InvalidGridCodeError):
            parse_payload(text)

    def test_rejects_coordinate_outside_cell(self, code):
        text = json.dumps(
            {
                "type": "PlaceMemory",
                "version": 1,
                "gridCode": code,
                "coordinate": {"latitude": 51.5074, "longitude": -0.1278},
            }
        )
        with pytest.raises(InvalidGridCodeError):
            parse_payload(text)

    def test_model_validation_error_is_value_error(self, code):
        with pytest.raises(ValueError):
            QRPayload(grid_code=code, coordinate=decode(encode(0.0, 0.0)))
