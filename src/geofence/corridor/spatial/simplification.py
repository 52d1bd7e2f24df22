"""
Polyline simplification for route paths.

A thin adapter over Shapely's Douglas-Peucker implementation. The tolerance is
in degrees, the same unit as the input coordinates. Endpoints are always kept
and the point count never grows.
"""

import logging
from typing import Sequence

from shapely.geometry import LineString

from geofence.corridor import constants
from geofence.corridor.models import GeoPoint, Path

logger = logging.getLogger(__name__)


def simplify(
    points: Sequence[GeoPoint],
    tolerance_degrees: float = constants.DEFAULT_SIMPLIFY_TOLERANCE,
) -> Path:
    """
    Remove vertices that deviate from the simplified line by less than the
    tolerance.

    Args:
        points: Ordered GeoPoints of a single path
        tolerance_degrees: Douglas-Peucker tolerance in degrees. Zero or
            negative disables simplification.

    Returns:
        A new Path that starts and ends on the input's first and last points.
    """
    path = tuple(points)
    if len(path) < 3 or tolerance_degrees <= 0:
        return path

    # Douglas-Peucker only measures planar distances, so the (lat, lon) axis
    # order is irrelevant here and the points keep their internal order.
    line = LineString(path)
    simplified = line.simplify(tolerance_degrees, preserve_topology=False)
    result = tuple(GeoPoint(x, y) for x, y in simplified.coords)

    # A closed or fully degenerate line can collapse below two points
    if len(result) < 2:
        result = (path[0], path[-1])

    logger.debug(f"Simplified path from {len(path)} to {len(result)} points")
    return result
