"""
Spherical geodesy helpers.

All functions treat the Earth as a sphere of mean radius 6371 km, which is
accurate enough for corridors up to roughly 100 km across. Angles are in
decimal degrees on the way in and out.
"""

import math

from geofence.corridor import constants
from geofence.corridor.models import GeoPoint


def normalize_bearing(degrees: float) -> float:
    """
    Wrap an angle into [0, 360).

    Tiny negative inputs can round to exactly 360.0 under the modulo, so that
    case is folded back to 0.0.
    """
    result = degrees % 360.0
    if result >= 360.0:
        return 0.0
    return result


def normalize_angle_diff(degrees: float) -> float:
    """Wrap an angle difference into (-180, 180]."""
    result = (degrees + 180.0) % 360.0 - 180.0
    if result <= -180.0:
        return 180.0
    return result


def normalize_longitude(degrees: float) -> float:
    """Wrap a longitude into [-180, 180)."""
    return normalize_bearing(degrees + 180.0) - 180.0


def bearing(origin: GeoPoint, target: GeoPoint) -> float:
    """
    Initial great-circle bearing from origin to target.

    Returns:
        Compass bearing in [0, 360), clockwise from north. Coincident points
        have no direction; 0.0 is returned for them.
    """
    if origin == target:
        return 0.0

    phi1 = math.radians(origin.lat)
    phi2 = math.radians(target.lat)
    d_lambda = math.radians(target.lon - origin.lon)

    y = math.sin(d_lambda) * math.cos(phi2)
    x = math.cos(phi1) * math.sin(phi2) - math.sin(phi1) * math.cos(phi2) * math.cos(d_lambda)

    return normalize_bearing(math.degrees(math.atan2(y, x)))


def destination(origin: GeoPoint, bearing_deg: float, distance_km: float) -> GeoPoint:
    """
    Point reached by travelling distance_km from origin along a great circle
    with the given initial bearing.
    """
    delta = distance_km / constants.EARTH_RADIUS_KM
    theta = math.radians(bearing_deg)
    phi1 = math.radians(origin.lat)
    lambda1 = math.radians(origin.lon)

    sin_phi2 = math.sin(phi1) * math.cos(delta) + math.cos(phi1) * math.sin(delta) * math.cos(theta)
    # Rounding can push the sine a hair outside [-1, 1]
    phi2 = math.asin(max(-1.0, min(1.0, sin_phi2)))
    lambda2 = lambda1 + math.atan2(
        math.sin(theta) * math.sin(delta) * math.cos(phi1),
        math.cos(delta) - math.sin(phi1) * sin_phi2,
    )

    return GeoPoint(math.degrees(phi2), normalize_longitude(math.degrees(lambda2)))


def haversine_distance(a: GeoPoint, b: GeoPoint) -> float:
    """Great-circle distance between two points, in meters."""
    phi1 = math.radians(a.lat)
    phi2 = math.radians(b.lat)
    d_phi = math.radians(b.lat - a.lat)
    d_lambda = math.radians(b.lon - a.lon)

    h = math.sin(d_phi / 2.0) ** 2 + math.cos(phi1) * math.cos(phi2) * math.sin(d_lambda / 2.0) ** 2
    c = 2.0 * math.atan2(math.sqrt(h), math.sqrt(max(0.0, 1.0 - h)))
    return constants.EARTH_RADIUS_M * c
