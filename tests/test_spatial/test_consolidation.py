"""
Tests for the consolidation module.
"""

import pytest

from geofence.corridor.models import GeoPoint
from geofence.corridor.spatial.consolidation import ConsolidationGroup, consolidate


def path(*pairs):
    return tuple(GeoPoint(lat, lon) for lat, lon in pairs)


@pytest.fixture
def first_leg():
    return path((0.0, 0.0), (0.0, 1.0), (1.0, 1.0))


@pytest.fixture
def second_leg():
    return path((1.0, 1.0), (2.0, 1.0), (2.0, 2.0))


class TestConsolidate:
    """Test suite for route consolidation."""

    def test_no_routes(self):
        assert consolidate([]) == ()

    def test_single_route_unchanged(self, first_leg):
        """Test that a single continuous route comes back as-is."""
        result = consolidate([first_leg])

        assert result == (first_leg,)
        assert len(result[0]) == 3

    def test_connected_routes_merge_without_duplicate_joint(self, first_leg, second_leg):
        result = consolidate([first_leg, second_leg])

        assert len(result) == 1
        assert result[0] == path((0.0, 0.0), (0.0, 1.0), (1.0, 1.0), (2.0, 1.0), (2.0, 2.0))

    def test_gap_keeps_routes_separate(self, first_leg):
        """Test routes farther apart than the threshold stay separate."""
        distant = path((5.0, 5.0), (6.0, 6.0))

        result = consolidate([first_leg, distant])

        assert result == (first_leg, distant)

    def test_near_coincident_endpoints_merge(self, first_leg):
        # About 0.1 m north of the joint
        nearby = path((1.000001, 1.0), (2.0, 1.0))

        result = consolidate([first_leg, nearby], connection_threshold_m=1.0)

        assert len(result) == 1
        assert result[0] == first_leg + (GeoPoint(2.0, 1.0),)

    def test_threshold_is_exclusive(self, first_leg):
        # About 1.1 m north of the joint, outside a 1 m threshold
        nearby = path((1.00001, 1.0), (2.0, 1.0))

        assert len(consolidate([first_leg, nearby], connection_threshold_m=1.0)) == 2
        assert len(consolidate([first_leg, nearby], connection_threshold_m=2.0)) == 1

    def test_chain_of_three(self):
        routes = [
            path((0.0, 0.0), (0.0, 0.1)),
            path((0.0, 0.1), (0.0, 0.2)),
            path((0.0, 0.2), (0.0, 0.3)),
        ]

        result = consolidate(routes)

        assert result == (path((0.0, 0.0), (0.0, 0.1), (0.0, 0.2), (0.0, 0.3)),)

    def test_output_order_follows_first_seen_route(self, first_leg, second_leg):
        lone = path((10.0, 10.0), (10.0, 11.0))

        result = consolidate([lone, first_leg, second_leg])

        assert result[0] == lone
        assert result[1][0] == first_leg[0]
        assert result[1][-1] == second_leg[-1]

    def test_single_point_route_joining(self, first_leg):
        """Test a one-point route at the joint adds nothing."""
        result = consolidate([first_leg, path((1.0, 1.0))])

        assert result == (first_leg,)

    def test_isolated_single_point_route(self, first_leg):
        lone_point = path((30.0, 30.0))

        result = consolidate([first_leg, lone_point])

        assert result == (first_leg, lone_point)

    def test_empty_route_skipped(self, first_leg, second_leg):
        result = consolidate([first_leg, (), second_leg])

        assert len(result) == 1
        assert len(result[0]) == 5

    def test_inputs_not_modified(self, first_leg, second_leg):
        routes = [list(first_leg), list(second_leg)]

        consolidate(routes)

        assert routes == [list(first_leg), list(second_leg)]

    def test_returns_tuples(self, first_leg, second_leg):
        result = consolidate([list(first_leg), list(second_leg)])

        assert isinstance(result, tuple)
        assert all(isinstance(p, tuple) for p in result)

    @pytest.mark.parametrize("threshold", [0.0, -1.0])
    def test_invalid_threshold(self, first_leg, threshold):
        with pytest.raises(ValueError, match="connection_threshold_m"):
            consolidate([first_leg], connection_threshold_m=threshold)


class TestConsolidationGroup:
    """Test suite for the in-progress group."""

    def test_absorb_tracks_last_index(self, first_leg, second_leg):
        group = ConsolidationGroup(list(first_leg), 0)

        group.absorb(second_leg, 3)

        assert group.last_index == 3
        assert len(group.to_path()) == 5

    def test_connects_to(self, first_leg, second_leg):
        group = ConsolidationGroup(list(first_leg), 0)

        assert group.connects_to(second_leg, 1.0)
        assert not group.connects_to(path((5.0, 5.0)), 1.0)
