"""Crude network speed estimation.

Two signals are combined:

- a guess from the connection type (wifi strength, cellular generation, ...)
- a latency probe against a rotating list of lightweight "generate_204"
  style endpoints, bucketed into an approximate Mbps figure

Neither is a real throughput test.
"""
import logging
import random
import time
from dataclasses import dataclass

import httpx

logger = logging.getLogger(__name__)

# Weight of the probe result when blending with the connection estimate
PROBE_WEIGHT = 0.7

# (latency upper bound ms, Mbps), checked in order
LATENCY_BUCKETS = (
    (30, 100.0),
    (50, 80.0),
    (80, 60.0),
    (120, 45.0),
    (200, 30.0),
    (350, 20.0),
    (500, 12.0),
    (800, 7.0),
    (1200, 4.0),
)
SLOWEST_SPEED = 1.0

CELLULAR_SPEEDS = {
    "5g": 100.0,
    "4g": 35.0,
    "3g": 5.0,
    "2g": 0.5,
}


@dataclass
class ConnectionInfo:
    type: str = "unknown"  # wifi, cellular, ethernet, bluetooth, none, unknown
    is_connected: bool = True
    wifi_strength: int | None = None  # 0-100
    cellular_generation: str | None = None  # 2g/3g/4g/5g


def estimate_from_connection(info: ConnectionInfo, rng: random.Random | None = None) -> float:
    """Ballpark Mbps for a connection type, with +/-20% jitter."""
    if not info.is_connected:
        return 0.0
    rng = rng or random

    kind = (info.type or "unknown").lower()
    if kind == "wifi":
        base = 50.0
        if info.wifi_strength is not None:
            base = info.wifi_strength / 100 * 100
    elif kind == "cellular":
        gen = (info.cellular_generation or "").lower()
        base = CELLULAR_SPEEDS.get(gen, 10.0)
    elif kind == "ethernet":
        base = 100.0
    elif kind == "bluetooth":
        base = 2.0
    else:
        base = 5.0

    variation = (rng.random() * 0.4 - 0.2) * base
    return max(0.0, base + variation)


def latency_to_speed(latency_ms: float) -> float:
    for bound, speed in LATENCY_BUCKETS:
        if latency_ms < bound:
            return speed
    return SLOWEST_SPEED


class EndpointRotator:
    """Round-robin cursor over probe endpoints.

    Spreads requests so no single endpoint rate-limits us. One instance is
    owned by the app and handed to the prober.
    """

    def __init__(self, endpoints):
        self.endpoints = list(endpoints)
        if not self.endpoints:
            raise ValueError("at least one probe endpoint is required")
        self.position = 0

    def next(self) -> str:
        url = self.endpoints[self.position]
        self.position = (self.position + 1) % len(self.endpoints)
        return url


class LatencyProber:
    def __init__(self, rotator: EndpointRotator, timeout_s: float = 5.0, transport: httpx.BaseTransport | None = None):
        self.rotator = rotator
        self.timeout_s = timeout_s
        self.transport = transport

    def _client(self) -> httpx.Client:
        return httpx.Client(timeout=self.timeout_s, transport=self.transport, follow_redirects=True)

    def probe(self) -> float | None:
        """One GET against the next endpoint; None if it failed."""
        url = self.rotator.next()
        try:
            with self._client() as client:
                start = time.perf_counter()
                client.get(url, headers={"Cache-Control": "no-cache"})
                latency_ms = (time.perf_counter() - start) * 1000
        except httpx.HTTPError as e:
            # the next call moves on to another endpoint
            logger.warning("Speed probe failed for %s: %s", url, e)
            return None
        speed = latency_to_speed(latency_ms)
        logger.debug("Probe %s took %.0f ms -> %.0f Mbps", url, latency_ms, speed)
        return speed

    def probe_many(self, n: int = 3) -> float | None:
        """Median of `n` probes against different endpoints."""
        results = [r for r in (self.probe() for _ in range(n)) if r is not None]
        if not results:
            return None
        results.sort()
        return results[len(results) // 2]


class SpeedEstimator:
    def __init__(self, prober: LatencyProber | None, rng: random.Random | None = None):
        self.prober = prober
        self.rng = rng

    def measure(self, info: ConnectionInfo, probe: bool = False, multi: bool = False) -> dict:
        estimate = estimate_from_connection(info, self.rng)
        probed = None
        if probe and info.is_connected and self.prober is not None:
            probed = self.prober.probe_many() if multi else self.prober.probe()

        speed = estimate
        if probed is not None:
            speed = probed * PROBE_WEIGHT + estimate * (1 - PROBE_WEIGHT)
        return {"speed_mbps": speed, "estimated_mbps": estimate, "probed_mbps": probed}
