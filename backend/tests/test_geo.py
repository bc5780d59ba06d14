import math

import pytest

from speedmap.core.geo import (
    displace,
    haversine_m,
    meters_to_degrees_lat,
    meters_to_degrees_lng,
    path_length_m,
)


def test_haversine_identical_points_is_zero():
    assert haversine_m(37.7749, -122.4194, 37.7749, -122.4194) == 0


def test_haversine_is_symmetric():
    a = (37.7749, -122.4194)
    b = (40.7128, -74.0060)
    assert haversine_m(*a, *b) == pytest.approx(haversine_m(*b, *a))


def test_haversine_one_degree_of_latitude():
    # R * pi / 180
    assert haversine_m(0, 0, 1, 0) == pytest.approx(111194.93, rel=1e-6)


def test_meters_to_degrees():
    assert meters_to_degrees_lat(111320) == pytest.approx(1.0)
    assert meters_to_degrees_lng(111320, 0) == pytest.approx(1.0)
    # a degree of longitude is half as long at 60 degrees
    assert meters_to_degrees_lng(111320, 60) == pytest.approx(2.0)


def test_displace_north_and_east():
    lat, lng = displace(37.0, -122.0, 0.0, 100.0)
    assert lat > 37.0
    assert lng == pytest.approx(-122.0)

    lat, lng = displace(37.0, -122.0, math.pi / 2, 100.0)
    assert lat == pytest.approx(37.0)
    assert lng > -122.0
    assert haversine_m(37.0, -122.0, lat, lng) == pytest.approx(100.0, rel=1e-3)


def test_path_length_sums_segments():
    pts = [(0, 0), (1, 0), (1, 0), (2, 0)]
    assert path_length_m(pts) == pytest.approx(2 * haversine_m(0, 0, 1, 0))
    assert path_length_m([]) == 0
    assert path_length_m([(5, 5)]) == 0
