# conftest.py
import pytest
from placegrid.models import GeoCoordinate

NEW_DELHI = (28.6139, 77.2090)

SAMPLE_GPX = """<?xml version="1.0" encoding="UTF-8"?>
<gpx version="1.1" creator="placegrid-tests" xmlns="http://www.topografix.com/GPX/1/1">
  <wpt lat="28.6200" lon="77.2100"><name>Gate</name></wpt>
  <trk>
    <name>Evening walk</name>
    <trkseg>
      <trkpt lat="28.6139" lon="77.2090"></trkpt>
      <trkpt lat="28.6139" lon="77.2090"></trkpt>
      <trkpt lat="28.6150" lon="77.2100"></trkpt>
    </trkseg>
  </trk>
</gpx>
"""


@pytest.fixture
def new_delhi() -> GeoCoordinate:
    return GeoCoordinate(latitude=NEW_DELHI[0], longitude=NEW_DELHI[1])


@pytest.fixture
def sample_gpx_path(tmp_path):
    p = tmp_path / "walk.gpx"
    p.write_text(SAMPLE_GPX, encoding="utf-8")
    return str(p)


@pytest.fixture
def empty_gpx_path(tmp_path):
    p = tmp_path / "empty.gpx"
    p.write_text(
        '<?xml version="1.0" encoding="UTF-8"?>\n'
        '<gpx version="1.1" creator="placegrid-tests" '
        'xmlns="http://www.topografix.com/GPX/1/1"></gpx>\n',
        encoding="utf-8",
    )
    return str(p)
