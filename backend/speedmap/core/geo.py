import math

from speedmap.core.constants import EARTH_RADIUS_M, METERS_PER_DEGREE


def haversine_m(lat1, lon1, lat2, lon2):
    """Return great‑circle distance in meters between two WGS84 points.

    Uses the standard haversine formula; sufficient for per‑sample distances
    along a walking or driving path.
    """
    phi1, phi2 = math.radians(lat1), math.radians(lat2)
    dphi = math.radians(lat2 - lat1)
    dlambda = math.radians(lon2 - lon1)
    a = math.sin(dphi / 2) ** 2 + math.cos(phi1) * math.cos(phi2) * math.sin(dlambda / 2) ** 2
    c = 2 * math.atan2(math.sqrt(a), math.sqrt(1 - a))
    return EARTH_RADIUS_M * c


def meters_to_degrees_lat(meters: float) -> float:
    """Flat-earth conversion; only valid for offsets well under a degree."""
    return meters / METERS_PER_DEGREE


def meters_to_degrees_lng(meters: float, latitude: float) -> float:
    """Flat-earth conversion at `latitude`; undefined at the poles."""
    return meters / (METERS_PER_DEGREE * math.cos(math.radians(latitude)))


def displace(lat: float, lng: float, heading_rad: float, meters: float) -> tuple[float, float]:
    """Move `meters` from (lat, lng) along `heading_rad` (0 = north, clockwise)."""
    d_lat = meters_to_degrees_lat(meters * math.cos(heading_rad))
    d_lng = meters_to_degrees_lng(meters * math.sin(heading_rad), lat)
    return lat + d_lat, lng + d_lng


def path_length_m(points) -> float:
    """Total haversine length of an ordered sequence of (lat, lng) pairs."""
    total = 0.0
    prev = None
    for lat, lng in points:
        if prev is not None:
            total += haversine_m(prev[0], prev[1], lat, lng)
        prev = (lat, lng)
    return total
