import random

import pytest

from speedmap.core.geo import haversine_m
from speedmap.services.simulator import (
    DEFAULT_ZONES,
    DemoConfig,
    WalkSimulator,
    ZoneType,
    closest_zone,
)


def make_sim(seed=42, **cfg):
    return WalkSimulator(DemoConfig(**cfg), rng=random.Random(seed), clock=lambda: 0.0)


def test_same_seed_same_walk():
    a, b = make_sim(), make_sim()
    sa, sb = a.start(), b.start()
    steps_a = [a.step(sa) for _ in range(20)]
    steps_b = [b.step(sb) for _ in range(20)]
    assert steps_a == steps_b


def test_steps_move_about_walking_speed():
    sim = make_sim()
    state = sim.start()
    total = 0.0
    for _ in range(50):
        prev = (state.lat, state.lng)
        step = sim.step(state)
        assert 1.4 * 0.8 <= step.moved_m <= 1.4 * 1.2
        assert haversine_m(*prev, step.lat, step.lng) == pytest.approx(step.moved_m, rel=1e-2)
        total += step.moved_m
    assert state.distance_m == pytest.approx(total)


def test_start_uses_config_or_override():
    sim = make_sim()
    s = sim.start()
    assert (s.lat, s.lng) == (37.7749, -122.4194)
    assert s.distance_m == 0
    s = sim.start(1.0, 2.0)
    assert (s.lat, s.lng) == (1.0, 2.0)


def test_simulated_speed_range_and_precision():
    sim = make_sim(seed=3)
    for i in range(200):
        speed = sim.simulated_speed(37.770 + i * 0.0001, -122.425 + i * 0.0001)
        assert 0 <= speed <= 100
        assert round(speed, 1) == speed


def test_dead_zone_stays_near_zero():
    sim = make_sim(spike_chance=0.0)
    for _ in range(50):
        assert sim.simulated_speed(37.7760, -122.4180) <= 0.5


def test_closest_zone_prefers_nearest_containing_zone():
    zone = closest_zone(37.7750, -122.4188, DEFAULT_ZONES)
    assert zone.type == ZoneType.excellent
    assert zone.base_speed == 85
    assert closest_zone(0.0, 0.0, DEFAULT_ZONES) is None
