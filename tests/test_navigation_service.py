"""Tests for the navigation service (route-request handler)."""

import asyncio
from pathlib import Path
from unittest.mock import MagicMock

import pytest

from navable.adapters.nlp import HeuristicPlaceExtractor, TokenOverlapMatcher
from navable.domain.errors import (
    ConfigurationError,
    GeocodingError,
    RenderingError,
    RoutingError,
    SpeechToTextError,
    UnresolvedLocationsError,
)
from navable.domain.models import (
    GeoLocation,
    MatchResult,
    NavigationResult,
    ParsedRequest,
    Place,
    ResolutionResult,
    RouteStep,
    TranscriptionResult,
    WalkingRoute,
)
from navable.services import UNRESOLVED_MESSAGE, NavigationService, PlaceResolutionService

ROUTE = WalkingRoute(
    coordinates=((47.65667, -122.30924), (47.65581, -122.30803)),
    distance_m=150,
    duration_s=120,
    steps=(RouteStep("Head east on Red Square."), RouteStep("Arrive at Suzzallo.")),
)


@pytest.fixture
def routing():
    mock = MagicMock()
    mock.route.return_value = ROUTE
    return mock


@pytest.fixture
def service(gazetteer, routing):
    repository = MagicMock()
    repository.load.return_value = gazetteer
    resolver = PlaceResolutionService(
        extractor=HeuristicPlaceExtractor(),
        matcher=TokenOverlapMatcher(),
        repository=repository,
    )
    return NavigationService(resolver=resolver, routing=routing)


class TestNavigate:
    def test_routes_between_resolved_places(self, service, routing, gazetteer):
        result = asyncio.run(service.navigate("from Kane Hall to Suzzallo Library"))

        assert result.route is ROUTE
        assert result.map_path is None
        routing.route.assert_called_once_with(
            gazetteer.get("Kane Hall").location,
            gazetteer.get("Suzzallo Library").location,
        )

    def test_nothing_understood(self, service, routing):
        with pytest.raises(UnresolvedLocationsError) as exc_info:
            asyncio.run(service.navigate("hello there"))

        assert exc_info.value.message == UNRESOLVED_MESSAGE
        assert exc_info.value.missing == ("start", "end")
        routing.route.assert_not_called()

    def test_one_side_missing(self, service):
        with pytest.raises(UnresolvedLocationsError) as exc_info:
            asyncio.run(service.navigate("meet me near Suzzallo Library"))
        assert exc_info.value.missing == ("end",)

    def test_map_is_rendered(self, service, tmp_path):
        renderer = MagicMock()
        renderer.render.return_value = tmp_path / "map.html"
        service.map_renderer = renderer

        result = asyncio.run(
            service.navigate(
                "Kane Hall to Suzzallo Library",
                render_map=True,
                map_output_path=tmp_path / "map.html",
            )
        )

        assert result.map_path == str(tmp_path / "map.html")
        renderer.render.assert_called_once()

    def test_render_failure_is_not_fatal(self, service, tmp_path):
        renderer = MagicMock()
        renderer.render.side_effect = RenderingError("disk full")
        service.map_renderer = renderer

        result = asyncio.run(
            service.navigate(
                "Kane Hall to Suzzallo Library",
                render_map=True,
                map_output_path=tmp_path / "map.html",
            )
        )

        assert result.route is ROUTE
        assert result.map_path is None


class TestNavigateSafe:
    def test_success(self, service):
        result, error = asyncio.run(service.navigate_safe("Kane Hall to Red Square"))
        assert error is None
        assert result.resolution.is_complete

    def test_unresolved_message(self, service):
        result, error = asyncio.run(service.navigate_safe("hello there"))
        assert result is None
        assert error == UNRESOLVED_MESSAGE

    def test_routing_failure_message(self, service, routing):
        routing.route.side_effect = RoutingError("HTTP 500", status_code=500)
        result, error = asyncio.run(service.navigate_safe("Kane Hall to Red Square"))
        assert result is None
        assert "walking directions" in error


class TestTranscribeAndNavigate:
    def test_uses_transcript(self, service):
        stt = MagicMock()
        stt.transcribe.return_value = TranscriptionResult(
            text="from Kane Hall to Suzzallo Library", language="en"
        )
        service.speech_to_text = stt

        result = asyncio.run(service.transcribe_and_navigate(Path("request.webm")))

        assert result.transcript == "from Kane Hall to Suzzallo Library"
        assert result.resolution.end.place.name == "Suzzallo Library"
        stt.transcribe.assert_called_once_with(Path("request.webm"), None)

    def test_silence(self, service):
        stt = MagicMock()
        stt.transcribe.return_value = TranscriptionResult(text="")
        service.speech_to_text = stt

        with pytest.raises(SpeechToTextError):
            asyncio.run(service.transcribe_and_navigate(Path("request.webm")))

    def test_no_speech_service(self, service):
        with pytest.raises(ConfigurationError):
            asyncio.run(service.transcribe_and_navigate(Path("request.webm")))


def test_format_result(service):
    result = asyncio.run(service.navigate("Kane Hall to Suzzallo Library"))
    text = service.format_result(result)

    assert text.splitlines()[0] == "From Kane Hall to Suzzallo Library"
    assert "150 m" in text
    assert "1. Head east on Red Square." in text


def test_format_result_requires_both_places(service, gazetteer):
    kane = MatchResult(gazetteer.get("Kane Hall"), 1.0)
    partial = NavigationResult(
        resolution=ResolutionResult(ParsedRequest(start_name="Kane Hall"), start=kane)
    )

    with pytest.raises(UnresolvedLocationsError) as exc_info:
        service.format_result(partial)
    assert exc_info.value.missing == ("end",)


def test_require_endpoints(gazetteer):
    kane = MatchResult(gazetteer.get("Kane Hall"), 1.0)
    hub = MatchResult(gazetteer.get("Husky Union Building"), 0.9)

    assert NavigationService.require_endpoints(
        ResolutionResult(ParsedRequest(), start=kane, end=hub)
    ) == (kane, hub)
    with pytest.raises(UnresolvedLocationsError) as exc_info:
        NavigationService.require_endpoints(ResolutionResult(ParsedRequest()))
    assert exc_info.value.message == UNRESOLVED_MESSAGE


SPACE_NEEDLE = Place(
    name="Space Needle", location=GeoLocation(47.62051, -122.34931), source="geoapify"
)


class TestGeocoderFallback:
    @pytest.fixture
    def geocoder(self, service):
        mock = MagicMock()
        mock.geocode.return_value = SPACE_NEEDLE
        service.geocoder = mock
        service.geocode_context = "Seattle"
        return mock

    def test_weak_match_is_geocoded(self, service, geocoder, routing, gazetteer):
        result = asyncio.run(service.navigate("from Kane Hall to Space Needle"))

        geocoder.geocode.assert_called_once_with("Space Needle, Seattle")
        assert result.resolution.start.place.name == "Kane Hall"
        assert result.resolution.end.place == SPACE_NEEDLE
        routing.route.assert_called_once_with(
            gazetteer.get("Kane Hall").location, SPACE_NEEDLE.location
        )

    def test_strong_matches_skip_geocoding(self, service, geocoder):
        asyncio.run(service.navigate("from Kane Hall to Suzzallo Library"))
        geocoder.geocode.assert_not_called()

    def test_geocoder_miss_keeps_gazetteer_match(self, service, geocoder):
        geocoder.geocode.return_value = None

        result = asyncio.run(service.navigate("from Kane Hall to Space Needle"))

        assert result.resolution.end.place.source != "geoapify"
        assert result.route is ROUTE

    def test_geocoder_failure_keeps_gazetteer_match(self, service, geocoder):
        geocoder.geocode.side_effect = GeocodingError("HTTP 429", is_rate_limited=True)

        result, error = asyncio.run(service.navigate_safe("from Kane Hall to Space Needle"))

        assert error is None
        assert result.resolution.end.place.source != "geoapify"

    def test_unnamed_side_is_not_geocoded(self, service, geocoder):
        with pytest.raises(UnresolvedLocationsError):
            asyncio.run(service.navigate("meet me near Suzzallo Library"))
        geocoder.geocode.assert_not_called()
