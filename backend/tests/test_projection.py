import math

import pytest

from speedmap.core.projection import (
    LinearSurface,
    MercatorSurface,
    Region,
    from_screen,
    meters_per_pixel,
    surface_for,
    to_pixel,
    to_screen,
    zoom_for_span,
)

REGION = Region(center_lat=37.7749, center_lng=-122.4194, lat_span_deg=0.005, lng_span_deg=0.005)


def test_region_center_maps_to_viewport_center():
    p = to_screen(37.7749, -122.4194, REGION, 400, 300)
    assert p.x == pytest.approx(200)
    assert p.y == pytest.approx(150)


def test_region_corners():
    top_left = to_screen(37.7749 + 0.0025, -122.4194 - 0.0025, REGION, 400, 300)
    assert top_left.x == pytest.approx(0, abs=1e-6)
    assert top_left.y == pytest.approx(0, abs=1e-6)
    bottom_right = to_screen(37.7749 - 0.0025, -122.4194 + 0.0025, REGION, 400, 300)
    assert bottom_right.x == pytest.approx(400)
    assert bottom_right.y == pytest.approx(300)


def test_screen_round_trip():
    for lat, lng in [(37.7760, -122.4180), (37.7730, -122.4220), (37.7749, -122.4194)]:
        p = to_screen(lat, lng, REGION, 390, 844)
        back = from_screen(p.x, p.y, REGION, 390, 844)
        assert back[0] == pytest.approx(lat, abs=1e-9)
        assert back[1] == pytest.approx(lng, abs=1e-9)


def test_not_renderable_before_layout():
    assert to_screen(37.7, -122.4, None, 400, 300) is None
    assert to_screen(37.7, -122.4, REGION, 0, 300) is None
    assert to_screen(37.7, -122.4, REGION, None, None) is None
    assert from_screen(10, 10, None, 400, 300) is None
    assert to_pixel(37.7, -122.4, 37.7, -122.4, 15, 0, 0) is None
    assert LinearSurface().project(37.7, -122.4, None, 400, 300) is None
    assert MercatorSurface().radius_px(20, REGION, None, 300) is None


def test_zoom_for_span_is_clamped():
    assert zoom_for_span(0.005) == pytest.approx(math.log2(360 / 0.005))
    assert zoom_for_span(360) == 1
    assert zoom_for_span(1e-9) == 20
    assert zoom_for_span(0) == 20


def test_mercator_center_and_direction():
    c = to_pixel(37.7749, -122.4194, 37.7749, -122.4194, 15, 400, 300)
    assert c.x == pytest.approx(200)
    assert c.y == pytest.approx(150)

    east = to_pixel(37.7749, -122.4184, 37.7749, -122.4194, 15, 400, 300)
    north = to_pixel(37.7759, -122.4194, 37.7749, -122.4194, 15, 400, 300)
    assert east.x > 200
    assert north.y < 150


def test_mercator_x_scale():
    # one full turn of longitude spans 256 * 2^zoom pixels
    p = to_pixel(0, 1, 0, 0, 0, 256, 256)
    assert p.x == pytest.approx(128 + 256 / 360)


def test_meters_per_pixel_at_equator():
    assert meters_per_pixel(0, 0) == pytest.approx(156543.03392)
    assert meters_per_pixel(0, 1) == pytest.approx(156543.03392 / 2)


def test_radius_never_below_minimum():
    assert LinearSurface().radius_px(0.01, REGION, 400, 300) == 12
    assert MercatorSurface().radius_px(0.01, REGION, 400, 300) == 12
    assert MercatorSurface().radius_px(500, REGION, 400, 300) > 12


def test_surface_selection():
    assert isinstance(surface_for("linear"), LinearSurface)
    assert isinstance(surface_for("Mercator"), MercatorSurface)
    with pytest.raises(ValueError):
        surface_for("svg")
