"""
Flat-capped, mitered corridor polygons around a single path.

Each path vertex is offset to both sides along the perpendicular of its local
direction:

    - Endpoints use the direction of their single adjacent segment and the
      plain corridor width, which yields flat end caps exactly perpendicular
      to the path with no rounding past the endpoint.
    - Interior vertices use the bisector of the incoming and outgoing
      bearings, and stretch the width by the miter factor 1 / cos(turn / 2)
      so the two offset edges meet at the corner. The factor is capped by the
      miter limit, which truncates the spike at near reversals.

The ring is the left offsets in path order, then the right offsets in reverse
order, closed on the first left offset.

LIMITATIONS:
    Paths that double back sharply can still produce self-intersecting rings;
    these are returned as-is and are not repaired. Antimeridian crossings and
    polar paths are not supported.
"""

import logging
import math
from typing import List, Sequence, Tuple

from funcy import pairwise

from geofence.corridor import constants
from geofence.corridor.errors import InsufficientPointsError, InvalidWidthError
from geofence.corridor.models import CorridorPolygon, GeoPoint, Path
from geofence.corridor.spatial.geodesy import (
    bearing,
    destination,
    normalize_angle_diff,
    normalize_bearing,
)

logger = logging.getLogger(__name__)


def miter_factor(angle_diff: float, miter_limit: float = constants.DEFAULT_MITER_LIMIT) -> float:
    """
    Width multiplier for a turn of angle_diff degrees, capped at miter_limit.

    The cosine is compared against 1 / miter_limit before dividing, so a full
    reversal (cosine of 90 degrees) clamps instead of blowing up.
    """
    half_angle = math.radians(min(abs(angle_diff), 180.0) / 2.0)
    cos_half = math.cos(half_angle)
    if cos_half * miter_limit <= 1.0:
        return miter_limit
    return min(1.0 / cos_half, miter_limit)


def vertex_offsets(path: Path, miter_limit: float) -> List[Tuple[float, float]]:
    """
    Offset bearing and width multiplier for every vertex of the path.

    Returns:
        List of (offset_bearing, factor) tuples, one per path vertex.
    """
    segment_bearings = [bearing(a, b) for a, b in pairwise(path)]

    offsets = [(segment_bearings[0], 1.0)]
    for incoming, outgoing in pairwise(segment_bearings):
        angle_diff = normalize_angle_diff(outgoing - incoming)
        offset_bearing = normalize_bearing(incoming + angle_diff / 2.0)
        offsets.append((offset_bearing, miter_factor(angle_diff, miter_limit)))
    offsets.append((segment_bearings[-1], 1.0))

    return offsets


def _drop_repeated_points(points: Sequence[GeoPoint]) -> Path:
    deduplicated = []
    for point in points:
        if not deduplicated or point != deduplicated[-1]:
            deduplicated.append(point)
    return tuple(deduplicated)


def build_corridor(
    path: Sequence[GeoPoint],
    width_km: float,
    miter_limit: float = constants.DEFAULT_MITER_LIMIT,
) -> CorridorPolygon:
    """
    Build a closed corridor polygon of fixed perpendicular width around a path.

    Args:
        path: Ordered GeoPoints (already simplified, if desired)
        width_km: Perpendicular distance from the path to each corridor wall
        miter_limit: Maximum width multiplier at corners (default: 3.0)

    Returns:
        A CorridorPolygon whose ring has 2 * N + 1 points for N distinct
        path vertices.

    Raises:
        InvalidWidthError: If width_km is not positive
        InsufficientPointsError: If the path has fewer than 2 distinct points
        ValueError: If miter_limit is less than 1

    Example:
        >>> path = [GeoPoint(0.0, 0.0), GeoPoint(0.0, 0.01)]
        >>> polygon = build_corridor(path, width_km=0.1)
        >>> len(polygon.ring)
        5
    """
    if not width_km > 0:
        raise InvalidWidthError(f"Corridor width must be positive, got {width_km}")
    if miter_limit < 1:
        raise ValueError(f"miter_limit must be at least 1, got {miter_limit}")

    points = _drop_repeated_points(path)
    if len(points) < 2:
        raise InsufficientPointsError(
            f"Need at least 2 distinct points to build a corridor, got {len(points)}"
        )

    left_side = []
    right_side = []
    offsets_km = []

    for point, (offset_bearing, factor) in zip(points, vertex_offsets(points, miter_limit)):
        offset_km = width_km * factor
        left_side.append(destination(point, normalize_bearing(offset_bearing - 90.0), offset_km))
        right_side.append(destination(point, normalize_bearing(offset_bearing + 90.0), offset_km))
        offsets_km.append(offset_km)

    ring = tuple(left_side) + tuple(reversed(right_side)) + (left_side[0],)
    clamped = sum(1 for o in offsets_km[1:-1] if o >= width_km * miter_limit) if miter_limit > 1 else 0
    if clamped:
        logger.debug(f"Miter limit reached at {clamped} vertex(es)")

    return CorridorPolygon(ring=ring, offsets_km=tuple(offsets_km))
