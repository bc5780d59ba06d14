import csv
import io
import json
from datetime import datetime, timezone
from types import SimpleNamespace

import gpxpy

from speedmap.services import exporter


def make_samples():
    t0 = datetime(2025, 1, 1, 7, 0, tzinfo=timezone.utc)
    return [
        SimpleNamespace(id=1, latitude=37.7749, longitude=-122.4194, speed_mbps=75.0, recorded_at=t0),
        SimpleNamespace(id=2, latitude=37.7750, longitude=-122.4195, speed_mbps=0.4, recorded_at=t0),
    ]


def test_json_export():
    data = json.loads(exporter.export_json(make_samples()))
    assert data["version"] == "1.0"
    assert data["exportedAt"].endswith("Z")
    first = data["dataPoints"][0]
    assert first["speed"] == 75.0
    assert first["label"] == "Excellent"
    assert first["timestamp"] == "2025-01-01T07:00:00Z"
    assert data["dataPoints"][1]["label"] == "No Signal"


def test_csv_export():
    rows = list(csv.reader(io.StringIO(exporter.export_csv(make_samples()))))
    assert rows[0] == exporter.CSV_HEADERS
    assert rows[1][3] == "75.00"
    assert rows[2][5] == "No Signal"
    assert exporter.export_csv([]).strip() == ",".join(exporter.CSV_HEADERS)


def test_geojson_export():
    fc = exporter.export_geojson(make_samples())
    assert len(fc["features"]) == 2
    assert fc["features"][0]["geometry"]["coordinates"] == [-122.4194, 37.7749]
    assert fc["features"][0]["properties"]["color"].startswith("rgba(")


def test_gpx_export_parses_back():
    xml = exporter.export_gpx(make_samples(), name="Morning Walk")
    gpx = gpxpy.parse(xml)
    assert gpx.tracks[0].name == "Morning Walk"
    points = gpx.tracks[0].segments[0].points
    assert len(points) == 2
    assert points[0].comment == "75.00 Mbps (Excellent)"
    assert points[1].latitude == 37.7750
