"""Lat/lng -> screen projections.

Two strategies are available behind the `MapSurface` interface:

- `LinearSurface`: equirectangular mapping of a small region onto the
  viewport. Only valid for zoomed-in regions, away from the poles.
- `MercatorSurface`: Web-Mercator tile math (256 px tiles, `2^zoom` scale)
  centered on the region center, zoom derived from the latitude span.

Every projection returns `None` while the region or viewport size is not
known yet; callers skip the frame instead of treating it as an error.
"""
import math
from dataclasses import dataclass
from typing import NamedTuple, Optional

from speedmap.core.constants import (
    EQUATOR_M_PER_PX,
    MAX_ZOOM,
    METERS_PER_DEGREE,
    MIN_CIRCLE_RADIUS_PX,
    MIN_ZOOM,
    TILE_SIZE,
)

# Web-Mercator is undefined at the poles
MAX_MERCATOR_LAT = 85.05112878


class Point(NamedTuple):
    x: float
    y: float


@dataclass(frozen=True)
class Region:
    center_lat: float
    center_lng: float
    lat_span_deg: float
    lng_span_deg: float


def _renderable(region: Optional[Region], width, height) -> bool:
    if region is None or width is None or height is None:
        return False
    return width > 0 and height > 0


def to_screen(lat: float, lng: float, region: Optional[Region], width, height) -> Optional[Point]:
    if not _renderable(region, width, height):
        return None
    if region.lat_span_deg <= 0 or region.lng_span_deg <= 0:
        return None
    x = (lng - (region.center_lng - region.lng_span_deg / 2)) / region.lng_span_deg * width
    y = (region.center_lat + region.lat_span_deg / 2 - lat) / region.lat_span_deg * height
    return Point(x, y)


def from_screen(x: float, y: float, region: Optional[Region], width, height) -> Optional[tuple[float, float]]:
    """Inverse of `to_screen`: pixel -> (lat, lng)."""
    if not _renderable(region, width, height):
        return None
    if region.lat_span_deg <= 0 or region.lng_span_deg <= 0:
        return None
    lng = region.center_lng - region.lng_span_deg / 2 + x / width * region.lng_span_deg
    lat = region.center_lat + region.lat_span_deg / 2 - y / height * region.lat_span_deg
    return lat, lng


def zoom_for_span(lat_span_deg: float) -> float:
    if lat_span_deg <= 0:
        return MAX_ZOOM
    zoom = math.log2(360 / lat_span_deg)
    return min(max(zoom, MIN_ZOOM), MAX_ZOOM)


def _mercator_y(lat: float, scale: float) -> float:
    lat = min(max(lat, -MAX_MERCATOR_LAT), MAX_MERCATOR_LAT)
    lat_rad = math.radians(lat)
    return (1 - math.log(math.tan(lat_rad) + 1 / math.cos(lat_rad)) / math.pi) / 2 * TILE_SIZE * scale


def to_pixel(lat, lng, center_lat, center_lng, zoom, width, height) -> Optional[Point]:
    if width is None or height is None or width <= 0 or height <= 0:
        return None
    scale = 2 ** zoom
    x = (lng - center_lng) / 360 * TILE_SIZE * scale + width / 2
    y = _mercator_y(lat, scale) - _mercator_y(center_lat, scale) + height / 2
    return Point(x, y)


def meters_per_pixel(lat: float, zoom: float) -> float:
    return EQUATOR_M_PER_PX * math.cos(math.radians(lat)) / 2 ** zoom


class MapSurface:
    """Something samples can be drawn on.

    Picked once by the host (see `surface_for`) and passed to whatever
    renders, so tests can swap it freely.
    """

    name = "base"

    def project(self, lat: float, lng: float, region: Optional[Region], width, height) -> Optional[Point]:
        raise NotImplementedError

    def radius_px(self, radius_m: float, region: Optional[Region], width, height) -> Optional[float]:
        raise NotImplementedError


class LinearSurface(MapSurface):
    name = "linear"

    def project(self, lat, lng, region, width, height):
        return to_screen(lat, lng, region, width, height)

    def radius_px(self, radius_m, region, width, height):
        if not _renderable(region, width, height) or region.lat_span_deg <= 0:
            return None
        px_per_m = height / (region.lat_span_deg * METERS_PER_DEGREE)
        return max(radius_m * px_per_m, MIN_CIRCLE_RADIUS_PX)


class MercatorSurface(MapSurface):
    name = "mercator"

    def project(self, lat, lng, region, width, height):
        if not _renderable(region, width, height):
            return None
        zoom = zoom_for_span(region.lat_span_deg)
        return to_pixel(lat, lng, region.center_lat, region.center_lng, zoom, width, height)

    def radius_px(self, radius_m, region, width, height):
        if not _renderable(region, width, height):
            return None
        zoom = zoom_for_span(region.lat_span_deg)
        return max(radius_m / meters_per_pixel(region.center_lat, zoom), MIN_CIRCLE_RADIUS_PX)


SURFACES = {
    LinearSurface.name: LinearSurface,
    MercatorSurface.name: MercatorSurface,
}


def surface_for(name: str) -> MapSurface:
    try:
        return SURFACES[name.lower()]()
    except KeyError:
        raise ValueError(f"Unknown map surface: {name}")
