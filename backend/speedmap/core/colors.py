"""Speed -> color mapping for heat points.

Colors come from piecewise-linear interpolation over GRADIENT_STOPS. The
speed is normalized with a blend of a linear and a log10 scale before the
stop lookup, so low speeds get more of the palette.
"""
import math
from dataclasses import dataclass

from speedmap.core.constants import (
    DEFAULT_OPACITY,
    GRADIENT_STOPS,
    LINEAR_WEIGHT,
    LOG_WEIGHT,
    MAX_SPEED,
    RING_ALPHAS,
)


@dataclass(frozen=True)
class RGB:
    r: int
    g: int
    b: int

    @property
    def hex(self) -> str:
        return f"#{self.r:02x}{self.g:02x}{self.b:02x}"

    def rgba(self, opacity: float) -> str:
        return f"rgba({self.r}, {self.g}, {self.b}, {opacity})"


@dataclass(frozen=True)
class HeatmapGradient:
    inner: str
    middle: str
    outer: str
    hex: str


def _lerp(c1: RGB, c2: RGB, t: float) -> RGB:
    # round-half-up to match the palette's reference values
    return RGB(
        r=int(math.floor(c1.r + (c2.r - c1.r) * t + 0.5)),
        g=int(math.floor(c1.g + (c2.g - c1.g) * t + 0.5)),
        b=int(math.floor(c1.b + (c2.b - c1.b) * t + 0.5)),
    )


def normalize_speed(speed_mbps: float) -> float:
    """Map a speed onto the [0, 1] gradient axis."""
    speed = float(speed_mbps)
    if math.isnan(speed) or speed < 0:
        speed = 0.0
    linear = min(speed / MAX_SPEED, 1.0)
    log_scale = math.log10(speed + 1) / math.log10(MAX_SPEED + 1) if speed > 0 else 0.0
    normalized = linear * LINEAR_WEIGHT + log_scale * LOG_WEIGHT
    return min(max(normalized, 0.0), 1.0)


def color_components(speed_mbps: float) -> RGB:
    """Opaque base color for a speed."""
    normalized = normalize_speed(speed_mbps)

    lower_pos, lower_color = GRADIENT_STOPS[0]
    upper_pos, upper_color = GRADIENT_STOPS[-1]
    for (pos_a, col_a), (pos_b, col_b) in zip(GRADIENT_STOPS, GRADIENT_STOPS[1:]):
        if pos_a <= normalized <= pos_b:
            lower_pos, lower_color = pos_a, col_a
            upper_pos, upper_color = pos_b, col_b
            break

    span = upper_pos - lower_pos
    t = (normalized - lower_pos) / span if span > 0 else 0.0
    return _lerp(RGB(*lower_color), RGB(*upper_color), t)


def color_for(speed_mbps: float, opacity: float = DEFAULT_OPACITY) -> str:
    """Return the heat color for `speed_mbps` as an `rgba(...)` string."""
    return color_components(speed_mbps).rgba(opacity)


def gradient_for(speed_mbps: float) -> HeatmapGradient:
    """Inner/middle/outer ring colors for radial rendering of one point."""
    base = color_components(speed_mbps)
    inner, middle, outer = RING_ALPHAS
    return HeatmapGradient(
        inner=base.rgba(inner),
        middle=base.rgba(middle),
        outer=base.rgba(outer),
        hex=base.hex,
    )


def gradient_legend(steps: int = 10) -> list[dict]:
    """Legend entries from 0 to MAX_SPEED in `steps` equal increments."""
    steps = max(int(steps), 1)
    legend = []
    for i in range(steps + 1):
        speed = (i / steps) * MAX_SPEED
        legend.append({
            "speed": speed,
            "color": color_for(speed, 1),
            "label": f"{speed:.0f} Mbps",
        })
    return legend
