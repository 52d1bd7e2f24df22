import json

import pytest
from shapely.geometry import Polygon

from geofence.corridor import geojson
from geofence.corridor.generator import generate
from geofence.corridor.models import CorridorCollection


@pytest.fixture
def collection():
    return generate([[[0.0, 0.0], [0.0, 0.01], [0.01, 0.01]], [[5.0, 5.0], [5.01, 5.0]]], 0.1)


@pytest.fixture
def routes_file(tmp_path):
    def write(document):
        path = tmp_path / "routes.json"
        path.write_text(json.dumps(document))
        return str(path)

    return write


class TestFeatureCollection:
    """Test suite for GeoJSON output."""

    def test_schema(self, collection):
        result = geojson.to_feature_collection(collection)

        assert result["type"] == "FeatureCollection"
        assert len(result["features"]) == 2
        feature = result["features"][0]
        assert feature["type"] == "Feature"
        assert feature["properties"] == {
            "routeIndex": 1,
            "bufferDistanceKm": 0.1,
            "type": "geofence_corridor",
        }
        assert feature["geometry"]["type"] == "Polygon"
        assert len(feature["geometry"]["coordinates"]) == 1

    def test_coordinates_are_lon_lat(self, collection):
        ring = geojson.to_feature_collection(collection)["features"][1]["geometry"]["coordinates"][0]
        polygon = collection[1].polygon

        assert ring[0] == [polygon.ring[0].lon, polygon.ring[0].lat]
        assert len(ring) == len(polygon.ring)
        assert ring[0] == ring[-1]

    def test_order_preserved(self, collection):
        features = geojson.to_feature_collection(collection)["features"]

        assert [f["properties"]["routeIndex"] for f in features] == [1, 2]

    def test_counter_clockwise_option(self, collection):
        default = geojson.to_feature_collection(collection)["features"][0]
        ccw = geojson.to_feature_collection(collection, counter_clockwise=True)["features"][0]

        default_ring = default["geometry"]["coordinates"][0]
        ccw_ring = ccw["geometry"]["coordinates"][0]
        assert not Polygon(default_ring).exterior.is_ccw
        assert Polygon(ccw_ring).exterior.is_ccw
        assert len(ccw_ring) == len(default_ring)

    def test_empty_collection(self):
        assert geojson.to_feature_collection(CorridorCollection()) == {
            "type": "FeatureCollection",
            "features": [],
        }

    def test_serializable(self, collection):
        text = json.dumps(geojson.to_feature_collection(collection))

        assert json.loads(text)["type"] == "FeatureCollection"

    def test_write_feature_collection(self, collection, tmp_path):
        output = tmp_path / "out" / "corridors.geojson"

        written = geojson.write_feature_collection(collection, output)

        assert written == str(output)
        assert json.loads(output.read_text()) == geojson.to_feature_collection(collection)

    def test_as_shapely_polygon(self, collection):
        polygon = geojson.as_shapely_polygon(collection[0].polygon)

        assert polygon.is_valid
        assert polygon.bounds[0] == pytest.approx(0.0, abs=1e-9)


class TestReadRoutes:
    """Test suite for reading input routes."""

    def test_raw_lat_lon_array(self, routes_file):
        routes = [[[0, 0], [0, 1]], [[1, 1], [2, 2]]]

        assert geojson.read_routes(routes_file(routes)) == routes

    def test_feature_collection_swaps_axes(self, routes_file):
        document = {
            "type": "FeatureCollection",
            "features": [
                {
                    "type": "Feature",
                    "properties": {},
                    "geometry": {"type": "LineString", "coordinates": [[10.0, 1.0], [11.0, 2.0]]},
                }
            ],
        }

        assert geojson.read_routes(routes_file(document)) == [[[1.0, 10.0], [2.0, 11.0]]]

    def test_multilinestring(self, routes_file):
        document = {
            "type": "Feature",
            "properties": {},
            "geometry": {
                "type": "MultiLineString",
                "coordinates": [[[0.0, 0.0], [1.0, 0.0]], [[1.0, 0.0], [1.0, 1.0]]],
            },
        }

        assert geojson.read_routes(routes_file(document)) == [
            [[0.0, 0.0], [0.0, 1.0]],
            [[0.0, 1.0], [1.0, 1.0]],
        ]

    def test_bare_geometry(self, routes_file):
        document = {"type": "LineString", "coordinates": [[0.0, 0.0], [1.0, 1.0], [2.0, 1.0]]}

        assert geojson.read_routes(routes_file(document)) == [[[0.0, 0.0], [1.0, 1.0], [1.0, 2.0]]]

    def test_third_dimension_dropped(self, routes_file):
        document = {"type": "LineString", "coordinates": [[0.0, 0.0, 100.0], [1.0, 1.0, 120.0]]}

        assert geojson.read_routes(routes_file(document)) == [[[0.0, 0.0], [1.0, 1.0]]]

    def test_unsupported_geometries_skipped(self, routes_file):
        document = {
            "type": "FeatureCollection",
            "features": [
                {"type": "Feature", "properties": {}, "geometry": {"type": "Point", "coordinates": [0.0, 0.0]}},
                {"type": "Feature", "properties": {}, "geometry": None},
                {
                    "type": "Feature",
                    "properties": {},
                    "geometry": {"type": "LineString", "coordinates": [[0.0, 0.0], [1.0, 0.0]]},
                },
            ],
        }

        assert geojson.read_routes(routes_file(document)) == [[[0.0, 0.0], [0.0, 1.0]]]

    def test_unreadable_document(self, routes_file):
        with pytest.raises(ValueError):
            geojson.read_routes(routes_file(42))

    @pytest.mark.parametrize("document", [{"foo": 1}, {"type": "Bogus"}])
    def test_non_geojson_document(self, routes_file, document):
        with pytest.raises(ValueError):
            geojson.read_routes(routes_file(document))
