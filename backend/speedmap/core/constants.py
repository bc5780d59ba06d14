"""Shared heatmap constants.

Centralizes the color/threshold/geometry values used by the core and the
API so they are documented and adjusted in one place.
"""

# Speed used as the top of the color scale and histogram range (Mbps)
MAX_SPEED = 100.0

# Inclusive lower bounds of the speed tiers (Mbps), highest first
SPEED_THRESHOLDS = {
    "EXCELLENT": 50.0,
    "GOOD": 25.0,
    "FAIR": 10.0,
    "POOR": 5.0,
    "VERY_POOR": 1.0,
}

# Weights for blending the linear and log10 normalizations. The log scale
# spreads the low end of the range over more of the gradient.
LINEAR_WEIGHT = 0.4
LOG_WEIGHT = 0.6

# Default alpha of a single heat point
DEFAULT_OPACITY = 0.6

# Alpha of the inner/middle/outer rings of a radial heat point
RING_ALPHAS = (0.9, 0.5, 0.15)

# (position 0..1, (r, g, b)); positions strictly increasing, 0.0 first, 1.0 last
GRADIENT_STOPS = (
    (0.00, (139, 0, 0)),      # dark red, no signal
    (0.05, (255, 0, 0)),      # red
    (0.15, (255, 69, 0)),     # orange-red
    (0.25, (255, 140, 0)),    # dark orange
    (0.35, (255, 165, 0)),    # orange
    (0.45, (255, 215, 0)),    # gold
    (0.55, (255, 255, 0)),    # yellow
    (0.65, (173, 255, 47)),   # green-yellow
    (0.75, (124, 252, 0)),    # lawn green
    (0.85, (50, 205, 50)),    # lime green
    (0.95, (0, 200, 0)),      # green
    (1.00, (0, 180, 0)),      # dark green, excellent
)

# Earth radius used by haversine (m)
EARTH_RADIUS_M = 6371000.0

# Meters per degree of latitude (flat-earth approximation)
METERS_PER_DEGREE = 111320.0

# Web-Mercator tile edge (px) and zoom bounds
TILE_SIZE = 256
MIN_ZOOM = 1.0
MAX_ZOOM = 20.0

# Ground resolution at zoom 0 on the equator (m/px)
EQUATOR_M_PER_PX = 156543.03392

# Heat circles never shrink below this on screen (px)
MIN_CIRCLE_RADIUS_PX = 12.0

DEFAULT_HISTOGRAM_BUCKETS = 10
