"""
Merge route segments that connect end to end into continuous paths.

Routes are processed left to right in a single pass. A route whose first point
lies within the connection threshold of the current path's last point is
appended to that path (without its first point, which would duplicate the
joint); otherwise the current path is closed and a new one starts.
"""

import dataclasses
import logging
from typing import Iterable, List, Tuple

from geofence.corridor import constants
from geofence.corridor.models import GeoPoint, Path
from geofence.corridor.spatial.geodesy import haversine_distance

logger = logging.getLogger(__name__)


@dataclasses.dataclass
class ConsolidationGroup:
    """In-progress path and the index of the last route absorbed into it."""

    points: List[GeoPoint]
    last_index: int

    def connects_to(self, route: Path, threshold_m: float) -> bool:
        return haversine_distance(self.points[-1], route[0]) < threshold_m

    def absorb(self, route: Path, index: int) -> None:
        self.points.extend(route[1:])
        self.last_index = index

    def to_path(self) -> Path:
        return tuple(self.points)


def consolidate(
    routes: Iterable[Path],
    connection_threshold_m: float = constants.DEFAULT_CONNECTION_THRESHOLD_M,
) -> Tuple[Path, ...]:
    """
    Merge consecutive routes whose endpoints nearly coincide.

    Args:
        routes: Ordered routes, each a sequence of GeoPoints
        connection_threshold_m: Maximum gap in meters (exclusive) between one
            route's last point and the next route's first point for the two to
            be treated as continuous (default: 1.0)

    Returns:
        Tuple of consolidated paths, in the order their first route was seen.
        Each path is a new tuple; the input routes are never modified.

    Raises:
        ValueError: If connection_threshold_m is not positive
    """
    if connection_threshold_m <= 0:
        raise ValueError("connection_threshold_m must be positive")

    paths = []
    group = None

    for index, route in enumerate(routes):
        route = tuple(route)
        if not route:
            logger.warning(f"Skipping route {index}: it has no points")
            continue

        if group is not None and group.connects_to(route, connection_threshold_m):
            logger.debug(f"Route {index} continues route {group.last_index}")
            group.absorb(route, index)
            continue

        if group is not None:
            paths.append(group.to_path())
        group = ConsolidationGroup(list(route), index)

    if group is not None:
        paths.append(group.to_path())

    logger.debug(f"Consolidated routes into {len(paths)} path(s)")
    return tuple(paths)
