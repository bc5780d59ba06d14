"""Simulated walk with location-dependent network quality.

Used for demos and seeding: a walker moves at ~1.4 m/s from a start point,
occasionally turning, and each position gets a synthetic speed biased by
the network zone it falls in.
"""
import math
import random
import time
from dataclasses import dataclass, field
from enum import Enum

from speedmap.core.constants import MAX_SPEED, METERS_PER_DEGREE
from speedmap.core.geo import displace, haversine_m


class ZoneType(str, Enum):
    dead = "dead"
    poor = "poor"
    fair = "fair"
    good = "good"
    excellent = "excellent"


# Random fluctuation range (+/- Mbps) inside each zone type
ZONE_VARIATION = {
    ZoneType.dead: 0.5,
    ZoneType.poor: 4.0,
    ZoneType.fair: 8.0,
    ZoneType.good: 15.0,
    ZoneType.excellent: 10.0,
}
OPEN_AREA_VARIATION = 15.0


@dataclass(frozen=True)
class NetworkZone:
    lat: float
    lng: float
    radius_deg: float
    type: ZoneType
    base_speed: float

    @property
    def radius_m(self) -> float:
        return self.radius_deg * METERS_PER_DEGREE


DEFAULT_ZONES = (
    # Dead zones: tunnels, basements
    NetworkZone(37.7760, -122.4180, 0.0008, ZoneType.dead, 0),
    NetworkZone(37.7730, -122.4220, 0.0006, ZoneType.dead, 0),
    # Poor: buildings blocking signal
    NetworkZone(37.7755, -122.4175, 0.0015, ZoneType.poor, 3),
    NetworkZone(37.7740, -122.4210, 0.0018, ZoneType.poor, 5),
    NetworkZone(37.7765, -122.4200, 0.0012, ZoneType.poor, 4),
    NetworkZone(37.7735, -122.4185, 0.001, ZoneType.poor, 6),
    # Fair
    NetworkZone(37.7752, -122.4190, 0.002, ZoneType.fair, 15),
    NetworkZone(37.7745, -122.4205, 0.0015, ZoneType.fair, 18),
    NetworkZone(37.7758, -122.4215, 0.0012, ZoneType.fair, 12),
    # Good: near cell towers
    NetworkZone(37.7748, -122.4195, 0.002, ZoneType.good, 40),
    NetworkZone(37.7742, -122.4180, 0.0018, ZoneType.good, 45),
    # Excellent: 5G hotspots
    NetworkZone(37.7750, -122.4188, 0.001, ZoneType.excellent, 85),
    NetworkZone(37.7738, -122.4198, 0.0008, ZoneType.excellent, 95),
)


@dataclass
class DemoConfig:
    start_lat: float = 37.7749
    start_lng: float = -122.4194
    walking_speed_mps: float = 1.4
    update_interval_s: float = 1.0
    direction_change_chance: float = 0.15
    speed_variation: float = 0.2  # +/- fraction of walking speed
    spike_chance: float = 0.05
    zones: tuple = field(default_factory=lambda: DEFAULT_ZONES)


@dataclass
class WalkState:
    lat: float
    lng: float
    heading_rad: float
    distance_m: float = 0.0


@dataclass(frozen=True)
class WalkStep:
    lat: float
    lng: float
    heading_rad: float
    moved_m: float
    speed_mbps: float


def closest_zone(lat: float, lng: float, zones) -> NetworkZone | None:
    """Nearest zone whose disc contains the point, or None."""
    best = None
    best_d = math.inf
    for zone in zones:
        d = haversine_m(lat, lng, zone.lat, zone.lng)
        if d < zone.radius_m and d < best_d:
            best, best_d = zone, d
    return best


class WalkSimulator:
    def __init__(self, config: DemoConfig | None = None, rng: random.Random | None = None, clock=time.time):
        self.config = config or DemoConfig()
        self.rng = rng or random.Random()
        self.clock = clock

    def start(self, lat: float | None = None, lng: float | None = None) -> WalkState:
        return WalkState(
            lat=self.config.start_lat if lat is None else lat,
            lng=self.config.start_lng if lng is None else lng,
            heading_rad=self.rng.random() * 2 * math.pi,
        )

    def simulated_speed(self, lat: float, lng: float) -> float:
        zone = closest_zone(lat, lng, self.config.zones)
        if zone is not None:
            base = zone.base_speed
            variation = ZONE_VARIATION[zone.type]
        else:
            # Open area: smooth spatial noise so neighbouring points agree
            noise_x = math.sin(lat * 10000) * math.cos(lng * 10000)
            noise_y = math.cos(lat * 8000) * math.sin(lng * 12000)
            noise = (noise_x + noise_y + 2) / 4
            base = 10 + noise * 50
            variation = OPEN_AREA_VARIATION

        fluctuation = (self.rng.random() - 0.5) * 2 * variation
        drift = math.sin(self.clock() / 5) * 5
        speed = min(max(base + fluctuation + drift, 0.0), MAX_SPEED)

        if self.rng.random() < self.config.spike_chance:
            speed = speed * 0.3 if self.rng.random() < 0.5 else min(MAX_SPEED, speed * 1.5)

        return round(speed * 10) / 10

    def step(self, state: WalkState) -> WalkStep:
        """Advance one tick; `state` is updated in place."""
        cfg = self.config
        if self.rng.random() < cfg.direction_change_chance:
            # at most 45 degrees either way
            state.heading_rad += (self.rng.random() - 0.5) * math.pi / 2

        factor = 1 + (self.rng.random() - 0.5) * 2 * cfg.speed_variation
        moved = cfg.walking_speed_mps * factor * cfg.update_interval_s
        state.lat, state.lng = displace(state.lat, state.lng, state.heading_rad, moved)
        state.distance_m += moved

        return WalkStep(
            lat=state.lat,
            lng=state.lng,
            heading_rad=state.heading_rad,
            moved_m=moved,
            speed_mbps=self.simulated_speed(state.lat, state.lng),
        )
