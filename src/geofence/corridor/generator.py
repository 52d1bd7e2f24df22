"""
Generate a set of geofence corridors from raw routes.

Pipeline:
    routes -> consolidate -> simplify -> build_corridor -> CorridorCollection

A route or path that cannot produce a corridor is logged and skipped; only
calling-contract violations (non-positive width, routes that are not a
list) abort the whole call.
"""

import logging
import numbers
from typing import Callable, List, Optional, Sequence

from geofence.corridor.errors import InsufficientPointsError, InvalidWidthError, MalformedPathError
from geofence.corridor.geojson import as_shapely_polygon
from geofence.corridor.models import (
    CorridorCollection,
    CorridorFeature,
    CorridorOptions,
    GeoPoint,
    Path,
    as_path,
)
from geofence.corridor.spatial.consolidation import consolidate
from geofence.corridor.spatial.corridor_builder import build_corridor
from geofence.corridor.spatial.simplification import simplify

logger = logging.getLogger(__name__)

Simplifier = Callable[[Sequence[GeoPoint], float], Path]


def _coerce_routes(routes: Sequence) -> List[Path]:
    paths = []
    for index, route in enumerate(routes):
        try:
            paths.append(as_path(route))
        except MalformedPathError as e:
            logger.warning(f"Skipping route {index}: {e}")
    return paths


def _check_ring(feature: CorridorFeature) -> None:
    if not as_shapely_polygon(feature.polygon).is_valid:
        logger.warning(f"Corridor {feature.route_index} is not a simple polygon; the path likely doubles back")


def generate(
    routes: Sequence,
    width_km: float,
    options: Optional[CorridorOptions] = None,
    simplifier: Simplifier = simplify,
) -> CorridorCollection:
    """
    Build one corridor polygon per consolidated, simplified route path.

    Args:
        routes: Ordered routes, each a sequence of [lat, lon] pairs or
            GeoPoints
        width_km: Perpendicular corridor half-width in kilometers
        options: Simplification, consolidation and miter settings
            (default: CorridorOptions())
        simplifier: Callable with the contract of simplification.simplify;
            it must keep the first and last point of each path

    Returns:
        A CorridorCollection with one feature per path that produced a
        polygon. route_index counts successful corridors from 1.

    Raises:
        InvalidWidthError: If width_km is not positive
        TypeError: If routes is not a list or tuple
    """
    if isinstance(width_km, bool) or not isinstance(width_km, numbers.Real) or not width_km > 0:
        raise InvalidWidthError(f"Corridor width must be a positive number, got {width_km!r}")
    width_km = float(width_km)
    if not isinstance(routes, (list, tuple)):
        raise TypeError(f"routes must be a list of routes, got {type(routes).__name__}")

    options = options or CorridorOptions()

    paths = consolidate(_coerce_routes(routes), options.connection_threshold_m)
    logger.info(f"Consolidated {len(routes)} route(s) into {len(paths)} path(s)")

    features = []
    for path_number, path in enumerate(paths):
        simplified = simplifier(path, options.simplify_tolerance)
        try:
            polygon = build_corridor(simplified, width_km, options.miter_limit)
        except InsufficientPointsError as e:
            logger.warning(f"Skipping path {path_number}: {e}")
            continue

        feature = CorridorFeature(
            polygon=polygon,
            route_index=len(features) + 1,
            buffer_distance_km=width_km,
        )
        _check_ring(feature)
        features.append(feature)

    logger.info(f"Generated {len(features)} corridor(s) of width {width_km} km")
    return CorridorCollection(tuple(features))
