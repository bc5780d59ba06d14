from enum import Enum

from speedmap.core.constants import SPEED_THRESHOLDS


class SpeedQuality(str, Enum):
    excellent = "Excellent"
    good = "Good"
    fair = "Fair"
    poor = "Poor"
    very_poor = "Very Poor"
    no_signal = "No Signal"


def label_for(speed_mbps: float) -> SpeedQuality:
    # Inclusive lower bounds, highest tier first
    if speed_mbps >= SPEED_THRESHOLDS["EXCELLENT"]:
        return SpeedQuality.excellent
    if speed_mbps >= SPEED_THRESHOLDS["GOOD"]:
        return SpeedQuality.good
    if speed_mbps >= SPEED_THRESHOLDS["FAIR"]:
        return SpeedQuality.fair
    if speed_mbps >= SPEED_THRESHOLDS["POOR"]:
        return SpeedQuality.poor
    if speed_mbps >= SPEED_THRESHOLDS["VERY_POOR"]:
        return SpeedQuality.very_poor
    return SpeedQuality.no_signal
