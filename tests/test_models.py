# test_models.py
import pytest
from pydantic import ValidationError

from placegrid.models import CellBounds, GeoCoordinate, GridCell, NearbyLocation


def test_coordinate_valid(new_delhi: GeoCoordinate):
    assert new_delhi.latitude == 28.6139
    assert new_delhi.longitude == 77.2090


def test_coordinate_is_frozen(new_delhi: GeoCoordinate):
    with pytest.raises(ValidationError):
        new_delhi.latitude = 0.0  # type: ignore


def test_coordinate_bounds_validation():
    with pytest.raises(ValidationError):
        GeoCoordinate(latitude=-95.0, longitude=10.0)
    with pytest.raises(ValidationError):
        GeoCoordinate(latitude=10.0, longitude=181.0)
    with pytest.raises(ValidationError):
        GeoCoordinate(latitude=float("nan"), longitude=0.0)
    # valid edges
    GeoCoordinate(latitude=-90.0, longitude=-180.0)
    GeoCoordinate(latitude=90.0, longitude=180.0)


def test_coordinate_is_hashable():
    a = GeoCoordinate(latitude=1.0, longitude=2.0)
    b = GeoCoordinate(latitude=1.0, longitude=2.0)
    assert a == b
    assert len({a, b}) == 1


def test_extra_fields_forbidden():
    with pytest.raises(ValidationError):
        GeoCoordinate(latitude=1.0, longitude=2.0, altitude=3.0)  # type: ignore
    with pytest.raises(ValidationError):
        CellBounds(north=1, south=0, east=1, west=0, height=2)  # type: ignore


def test_cell_bounds_contains_edges():
    b = CellBounds(north=1.0, south=0.0, east=1.0, west=0.0)
    assert b.contains(0.5, 0.5)
    assert b.contains(0.0, 0.0)
    assert b.contains(1.0, 1.0)
    assert not b.contains(1.1, 0.5)
    assert not b.contains(0.5, -0.1)


def test_grid_cell_json_round_trip():
    cell = GridCell(
        code="2222-2222-22",
        center=GeoCoordinate(latitude=-89.999991, longitude=-179.999991),
        bounds=CellBounds(north=-89.99991, south=-90.0, east=-179.99991, west=-180.0),
    )
    again = GridCell.model_validate_json(cell.model_dump_json())
    assert again == cell


def test_nearby_location_rejects_negative_distance():
    with pytest.raises(ValidationError):
        NearbyLocation(
            code="2222-2222-22",
            coordinate=GeoCoordinate(latitude=0.0, longitude=0.0),
            distance_m=-1.0,
        )
