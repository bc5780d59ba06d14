import math
from dataclasses import dataclass, asdict

from speedmap.core.colors import color_for
from speedmap.core.constants import DEFAULT_HISTOGRAM_BUCKETS, MAX_SPEED, SPEED_THRESHOLDS


@dataclass(frozen=True)
class Stats:
    count: int = 0
    average: float = 0.0
    min: float = 0.0
    max: float = 0.0
    excellent: int = 0
    good: int = 0
    fair: int = 0
    poor: int = 0
    very_poor: int = 0

    def as_dict(self) -> dict:
        return asdict(self)


@dataclass(frozen=True)
class HistogramBar:
    count: int
    height: float  # percent of the tallest bar
    speed: float   # bucket midpoint
    color: str


def compute_stats(speeds) -> Stats:
    """Count/mean/min/max and tier counts over a sequence of speeds.

    Tier buckets follow the stats panel: everything below the "Poor"
    threshold (including "No Signal") lands in `very_poor`.
    """
    count = 0
    total = 0.0
    lo = math.inf
    hi = -math.inf
    tiers = {"excellent": 0, "good": 0, "fair": 0, "poor": 0, "very_poor": 0}

    for s in speeds:
        s = float(s)
        count += 1
        total += s
        lo = min(lo, s)
        hi = max(hi, s)
        if s >= SPEED_THRESHOLDS["EXCELLENT"]:
            tiers["excellent"] += 1
        elif s >= SPEED_THRESHOLDS["GOOD"]:
            tiers["good"] += 1
        elif s >= SPEED_THRESHOLDS["FAIR"]:
            tiers["fair"] += 1
        elif s >= SPEED_THRESHOLDS["POOR"]:
            tiers["poor"] += 1
        else:
            tiers["very_poor"] += 1

    if count == 0:
        return Stats()
    return Stats(count=count, average=total / count, min=lo, max=hi, **tiers)


def compute_histogram(speeds, bucket_count: int = DEFAULT_HISTOGRAM_BUCKETS) -> list[HistogramBar]:
    if bucket_count < 1:
        raise ValueError("bucket_count must be >= 1")
    speeds = list(speeds)
    if not speeds:
        return []

    distribution = [0] * bucket_count
    for s in speeds:
        s = float(s)
        if math.isnan(s) or s <= 0:
            idx = 0
        elif s >= MAX_SPEED:
            # includes +inf, which floor() cannot convert
            idx = bucket_count - 1
        else:
            idx = min(math.floor(s / MAX_SPEED * bucket_count), bucket_count - 1)
        distribution[idx] += 1

    max_count = max(max(distribution), 1)
    bars = []
    for i, count in enumerate(distribution):
        mid = (i + 0.5) / bucket_count * MAX_SPEED
        bars.append(HistogramBar(
            count=count,
            height=count / max_count * 100,
            speed=mid,
            color=color_for(mid, 1),
        ))
    return bars
