"""
Spatial building blocks for geofence corridor generation.

1. **geodesy**: bearing, destination point and haversine distance on a sphere
2. **consolidation.consolidate**: merges routes that connect end to end
3. **simplification.simplify**: Douglas-Peucker simplification of a path
4. **corridor_builder.build_corridor**: flat-capped, mitered corridor polygon

Most callers should go through geofence.corridor.generator.generate, which
chains these steps over a whole set of routes.
"""

from .consolidation import consolidate
from .corridor_builder import build_corridor
from .geodesy import bearing, destination, haversine_distance
from .simplification import simplify

__all__ = [
    "bearing",
    "build_corridor",
    "consolidate",
    "destination",
    "haversine_distance",
    "simplify",
]
