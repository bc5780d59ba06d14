"""Session export in JSON, CSV, GeoJSON and GPX."""
import csv
import io
import json

import gpxpy
import gpxpy.gpx

from speedmap.core.classify import label_for
from speedmap.core.colors import color_for
from speedmap.core.time_utils import to_iso, utc_now

EXPORT_VERSION = "1.0"
CSV_HEADERS = ["id", "latitude", "longitude", "speed", "timestamp", "label"]
FORMATS = ("json", "csv", "geojson", "gpx")


def data_point(sample) -> dict:
    """Flat dict for one stored sample, with derived color and label."""
    return {
        "id": sample.id,
        "latitude": sample.latitude,
        "longitude": sample.longitude,
        "speed": sample.speed_mbps,
        "timestamp": to_iso(sample.recorded_at),
        "color": color_for(sample.speed_mbps),
        "label": label_for(sample.speed_mbps).value,
    }


def export_json(samples) -> str:
    data = {
        "exportedAt": to_iso(utc_now()),
        "version": EXPORT_VERSION,
        "dataPoints": [data_point(s) for s in samples],
    }
    return json.dumps(data, indent=2)


def export_csv(samples) -> str:
    buf = io.StringIO()
    writer = csv.writer(buf, lineterminator="\n")
    writer.writerow(CSV_HEADERS)
    for s in samples:
        p = data_point(s)
        writer.writerow([p["id"], p["latitude"], p["longitude"], f"{p['speed']:.2f}", p["timestamp"], p["label"]])
    return buf.getvalue()


def export_geojson(samples) -> dict:
    features = []
    for s in samples:
        p = data_point(s)
        features.append({
            "type": "Feature",
            "properties": {
                "speed": p["speed"],
                "label": p["label"],
                "timestamp": p["timestamp"],
                "color": p["color"],
            },
            "geometry": {"type": "Point", "coordinates": [p["longitude"], p["latitude"]]},
        })
    return {"type": "FeatureCollection", "features": features}


def export_gpx(samples, name: str = "speedmap session") -> str:
    """One track/one segment; speed and tier go in each point's comment."""
    gpx = gpxpy.gpx.GPX()
    track = gpxpy.gpx.GPXTrack(name=name)
    gpx.tracks.append(track)
    segment = gpxpy.gpx.GPXTrackSegment()
    track.segments.append(segment)

    for s in samples:
        point = gpxpy.gpx.GPXTrackPoint(
            latitude=s.latitude,
            longitude=s.longitude,
            time=s.recorded_at,
        )
        point.comment = f"{s.speed_mbps:.2f} Mbps ({label_for(s.speed_mbps).value})"
        segment.points.append(point)
    return gpx.to_xml()
