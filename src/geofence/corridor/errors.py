"""
Exceptions raised while building geofence corridors.

Per-path problems (InsufficientPointsError, MalformedPathError) are skipped by
the collection generator; InvalidWidthError is a calling-contract violation
and always propagates.
"""


class CorridorError(Exception):
    """Base class for corridor generation errors."""


class InsufficientPointsError(CorridorError, ValueError):
    """A path has fewer than two distinct points, so no direction is defined."""


class InvalidWidthError(CorridorError, ValueError):
    """The requested corridor width is not a positive number."""


class MalformedPathError(CorridorError, ValueError):
    """A route or one of its points cannot be read as latitude/longitude."""
