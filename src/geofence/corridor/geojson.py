"""
GeoJSON input and output for corridors.

Internally every point is (lat, lon). GeoJSON positions are [lon, lat], so the
axis swap happens here and nowhere else: ring_coordinates on the way out and
_path_from_positions on the way in.
"""

import json
import logging
from pathlib import Path as FilePath
from typing import List

from shapely.geometry import LineString, MultiLineString, Polygon, shape
from shapely.errors import ShapelyError
from shapely.geometry.polygon import orient

from geofence.corridor.models import CorridorCollection, CorridorFeature, CorridorPolygon

logger = logging.getLogger(__name__)


def ring_coordinates(polygon: CorridorPolygon) -> List[List[float]]:
    """The polygon ring as [lon, lat] positions."""
    return [[point.lon, point.lat] for point in polygon.ring]


def as_shapely_polygon(polygon: CorridorPolygon) -> Polygon:
    return Polygon(ring_coordinates(polygon))


def _oriented_ring(polygon: CorridorPolygon, counter_clockwise: bool) -> List[List[float]]:
    coordinates = ring_coordinates(polygon)
    if not counter_clockwise:
        return coordinates
    # sign=1.0 gives a counter-clockwise exterior, as RFC 7946 recommends
    oriented = orient(Polygon(coordinates), sign=1.0)
    return [list(position) for position in oriented.exterior.coords]


def to_feature(feature: CorridorFeature, counter_clockwise: bool = False) -> dict:
    return {
        "type": "Feature",
        "properties": {
            "routeIndex": feature.route_index,
            "bufferDistanceKm": feature.buffer_distance_km,
            "type": feature.kind,
        },
        "geometry": {
            "type": "Polygon",
            "coordinates": [_oriented_ring(feature.polygon, counter_clockwise)],
        },
    }


def to_feature_collection(collection: CorridorCollection, counter_clockwise: bool = False) -> dict:
    """
    Map a CorridorCollection onto a GeoJSON FeatureCollection, preserving
    feature order.

    Args:
        collection: Generated corridors
        counter_clockwise: Reorient rings counter-clockwise. By default the
            rings keep their construction order (left wall forward, right
            wall back).
    """
    return {
        "type": "FeatureCollection",
        "features": [to_feature(f, counter_clockwise) for f in collection],
    }


def write_feature_collection(collection: CorridorCollection, output_file, counter_clockwise: bool = False) -> str:
    output_path = FilePath(output_file)
    output_path.parent.mkdir(parents=True, exist_ok=True)

    with open(output_path, "tw") as f:
        json.dump(to_feature_collection(collection, counter_clockwise), f, indent=2)

    logger.info(f"Wrote {len(collection)} corridor(s) to {output_path}")
    return str(output_path)


def _path_from_positions(coords) -> List[List[float]]:
    return [[lat, lon] for lon, lat, *_ in coords]


def _routes_from_geometry(geometry: dict) -> List[List[List[float]]]:
    try:
        geom = shape(geometry)
    except (ShapelyError, AttributeError, KeyError, TypeError, ValueError) as e:
        raise ValueError(f"Not a GeoJSON geometry: {geometry!r}") from e
    if isinstance(geom, LineString):
        return [_path_from_positions(geom.coords)]
    if isinstance(geom, MultiLineString):
        return [_path_from_positions(line.coords) for line in geom.geoms]

    logger.warning(f"Ignoring unsupported geometry type {geom.geom_type}")
    return []


def routes_from_geojson(document: dict) -> List[List[List[float]]]:
    """
    Extract routes, as lists of [lat, lon] pairs, from a GeoJSON
    FeatureCollection, Feature, or bare geometry.
    """
    kind = document.get("type")
    if kind == "FeatureCollection":
        features = document.get("features", [])
    elif kind == "Feature":
        features = [document]
    else:
        features = [{"type": "Feature", "geometry": document}]

    routes = []
    for feature in features:
        geometry = feature.get("geometry")
        if geometry is None:
            logger.warning("Ignoring feature without geometry")
            continue
        routes.extend(_routes_from_geometry(geometry))

    return routes


def read_routes(input_file) -> list:
    """
    Read routes from a JSON file.

    The file holds either a plain array of routes, each an array of
    [lat, lon] pairs, or a GeoJSON document with LineString or
    MultiLineString geometries (positions in [lon, lat] order).

    Raises:
        ValueError: If the file is neither of those shapes
    """
    with open(input_file) as f:
        document = json.load(f)

    if isinstance(document, list):
        routes = document
    elif isinstance(document, dict):
        routes = routes_from_geojson(document)
    else:
        raise ValueError(f"Unable to read routes from {input_file}")

    logger.info(f"Read {len(routes)} route(s) from {input_file}")
    return routes
