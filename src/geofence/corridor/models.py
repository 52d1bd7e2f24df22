"""
Data models for the corridor package.

Everything here is immutable: each pipeline stage builds new values instead of
mutating the ones it was given, so concurrent callers never share state.
"""

import dataclasses
import math
from typing import Iterable, NamedTuple, Tuple

from geofence.corridor import constants
from geofence.corridor.errors import MalformedPathError


class GeoPoint(NamedTuple):
    """A (latitude, longitude) pair in decimal degrees."""

    lat: float
    lon: float

    @classmethod
    def coerce(cls, value) -> "GeoPoint":
        """
        Build a GeoPoint from an existing GeoPoint or any [lat, lon] pair.

        Raises:
            MalformedPathError: if the value is not a pair of finite numbers in
                the valid latitude/longitude ranges.
        """
        if isinstance(value, GeoPoint):
            return value
        if isinstance(value, (str, bytes)):
            raise MalformedPathError(f"Not a [lat, lon] pair: {value!r}")

        try:
            lat, lon = value
            lat, lon = float(lat), float(lon)
        except (TypeError, ValueError) as e:
            raise MalformedPathError(f"Not a [lat, lon] pair: {value!r}") from e

        if not (math.isfinite(lat) and math.isfinite(lon)):
            raise MalformedPathError(f"Non-finite coordinate: {value!r}")
        if not -90.0 <= lat <= 90.0:
            raise MalformedPathError(f"Latitude out of range: {lat}")
        if not -180.0 <= lon <= 180.0:
            raise MalformedPathError(f"Longitude out of range: {lon}")

        return cls(lat, lon)


# An ordered sequence of points; each stage produces a new tuple.
Path = Tuple[GeoPoint, ...]


def as_path(route: Iterable) -> Path:
    """
    Convert a route (a sequence of [lat, lon] pairs or GeoPoints) into a Path.

    Raises:
        MalformedPathError: if the route is not iterable, is empty, or holds a
            point that cannot be coerced.
    """
    if isinstance(route, (str, bytes)):
        raise MalformedPathError(f"Route must be a sequence of points, not {route!r}")
    try:
        path = tuple(GeoPoint.coerce(p) for p in route)
    except TypeError as e:
        raise MalformedPathError(f"Route is not a sequence of points: {route!r}") from e

    if not path:
        raise MalformedPathError("Route has no points")

    return path


@dataclasses.dataclass(frozen=True)
class CorridorOptions:
    """
    Tunable parameters of the corridor pipeline.

    simplify_tolerance is in degrees (the unit of the input coordinates),
    connection_threshold_m in meters, and miter_limit caps the corner
    extension factor.
    """

    simplify_tolerance: float = constants.DEFAULT_SIMPLIFY_TOLERANCE
    connection_threshold_m: float = constants.DEFAULT_CONNECTION_THRESHOLD_M
    miter_limit: float = constants.DEFAULT_MITER_LIMIT

    def __post_init__(self):
        if self.simplify_tolerance < 0:
            raise ValueError("simplify_tolerance must not be negative")
        if self.connection_threshold_m <= 0:
            raise ValueError("connection_threshold_m must be positive")
        if self.miter_limit < 1:
            raise ValueError("miter_limit must be at least 1")


@dataclasses.dataclass(frozen=True)
class CorridorPolygon:
    """
    A closed ring around one path.

    The ring is the left offsets in path order, the right offsets in reverse
    path order, and the first left offset again. offsets_km holds the distance
    actually applied at each path vertex.
    """

    ring: Tuple[GeoPoint, ...]
    offsets_km: Tuple[float, ...]

    def __post_init__(self):
        if len(self.ring) < 4:
            raise ValueError("A corridor ring needs at least 4 points")
        if self.ring[0] != self.ring[-1]:
            raise ValueError("A corridor ring must be closed")
        if len(self.ring) != 2 * len(self.offsets_km) + 1:
            raise ValueError("Ring size does not match the number of path vertices")

    @property
    def left_side(self) -> Tuple[GeoPoint, ...]:
        return self.ring[: len(self.offsets_km)]

    @property
    def right_side(self) -> Tuple[GeoPoint, ...]:
        """Right offsets in path order."""
        n = len(self.offsets_km)
        return tuple(reversed(self.ring[n : 2 * n]))

    @property
    def vertices(self) -> int:
        # Excluding closing point
        return len(self.ring) - 1


@dataclasses.dataclass(frozen=True)
class CorridorFeature:
    polygon: CorridorPolygon
    route_index: int
    buffer_distance_km: float
    kind: str = constants.CORRIDOR_FEATURE_TYPE


@dataclasses.dataclass(frozen=True)
class CorridorCollection:
    """Corridor features in the order their paths were produced."""

    features: Tuple[CorridorFeature, ...] = ()

    def __len__(self):
        return len(self.features)

    def __iter__(self):
        return iter(self.features)

    def __getitem__(self, index):
        return self.features[index]
