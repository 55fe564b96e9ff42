"""Tests for the Geoapify routing adapter."""

from unittest.mock import MagicMock

import pytest
import requests

from navable.adapters.routing import GeoapifyRoutingAdapter, route_from_geojson
from navable.config import RoutingConfig
from navable.domain.errors import ConfigurationError, RoutingError
from navable.domain.models import GeoLocation

START = GeoLocation(47.65497, -122.30786)
END = GeoLocation(47.65654, -122.31047)

ROUTE_BODY = {
    "type": "FeatureCollection",
    "features": [
        {
            "type": "Feature",
            "geometry": {
                "type": "MultiLineString",
                "coordinates": [
                    [[-122.30786, 47.65497], [-122.30900, 47.65550]],
                    [[-122.30900, 47.65550], [-122.31047, 47.65654]],
                ],
            },
            "properties": {
                "mode": "walk",
                "distance": 310,
                "time": 240,
                "legs": [
                    {
                        "steps": [
                            {"distance": 120, "time": 90, "instruction": {"text": "Walk north."}},
                            {"distance": 190, "time": 150, "instruction": {"text": "Turn left."}},
                            {"distance": 0, "time": 0},
                        ]
                    }
                ],
            },
        }
    ],
}


def _response(status_code=200, payload=None, text=""):
    response = MagicMock()
    response.status_code = status_code
    response.ok = status_code < 400
    response.json.return_value = payload
    response.text = text
    return response


class TestRouteFromGeojson:
    def test_parses_multilinestring(self):
        route = route_from_geojson(ROUTE_BODY)

        assert route.coordinates[0] == (47.65497, -122.30786)
        assert route.coordinates[-1] == (47.65654, -122.31047)
        assert len(route.coordinates) == 4
        assert route.distance_m == 310
        assert route.duration_s == 240
        assert [s.instruction for s in route.steps] == ["Walk north.", "Turn left."]

    def test_parses_linestring(self):
        body = {
            "features": [
                {
                    "geometry": {
                        "type": "LineString",
                        "coordinates": [[-122.3, 47.6], [-122.31, 47.61]],
                    },
                    "properties": {"distance": 50, "time": 40},
                }
            ]
        }
        route = route_from_geojson(body)
        assert route.coordinates == ((47.6, -122.3), (47.61, -122.31))
        assert route.steps == ()

    @pytest.mark.parametrize(
        "body",
        [{}, {"features": []}, {"features": [{"geometry": {"type": "Point"}}]}, None],
    )
    def test_no_route(self, body):
        with pytest.raises(RoutingError):
            route_from_geojson(body)


class TestGeoapifyRoutingAdapter:
    def _adapter(self, api_key="geo-key"):
        session = MagicMock()
        config = RoutingConfig(api_key=api_key, base_url="https://api.example/v1")
        return GeoapifyRoutingAdapter(config=config, session=session), session

    def test_requests_walking_route(self):
        adapter, session = self._adapter()
        session.get.return_value = _response(payload=ROUTE_BODY)

        route = adapter.route(START, END)

        assert route.distance_m == 310
        url = session.get.call_args.args[0]
        params = session.get.call_args.kwargs["params"]
        assert url == "https://api.example/v1/routing"
        assert params["waypoints"] == "47.65497,-122.30786|47.65654,-122.31047"
        assert params["mode"] == "walk"
        assert params["apiKey"] == "geo-key"

    def test_http_error(self):
        adapter, session = self._adapter()
        session.get.return_value = _response(status_code=400, text="bad waypoints")
        with pytest.raises(RoutingError) as exc_info:
            adapter.route(START, END)
        assert exc_info.value.status_code == 400

    def test_transport_error(self):
        adapter, session = self._adapter()
        session.get.side_effect = requests.ConnectionError("down")
        with pytest.raises(RoutingError):
            adapter.route(START, END)

    def test_missing_key(self):
        adapter, session = self._adapter(api_key="")
        with pytest.raises(ConfigurationError):
            adapter.route(START, END)
        session.get.assert_not_called()
