"""Navigation service - Main orchestrator.

Turns a spoken or typed request into a walking route:
1. Optional speech-to-text
2. Place resolution (extraction + matching)
3. Optional geocoding of names the gazetteer matched poorly or not at all
4. Walking route between the resolved places
5. Optional map rendering
"""

from __future__ import annotations

import asyncio
import logging
from dataclasses import dataclass, field, replace
from pathlib import Path
from typing import Optional, Tuple

from ..domain.errors import (
    ConfigurationError,
    GeocodingError,
    LoadError,
    RoutingError,
    SpeechToTextError,
    UnresolvedLocationsError,
)
from ..domain.models import MatchResult, NavigationResult, ResolutionResult, WalkingRoute
from ..ports.geocoding import GeocoderPort
from ..ports.rendering import MapRendererPort
from ..ports.routing import RoutingPort
from ..ports.speech import SpeechToTextPort
from .resolution_service import PlaceResolutionService

UNRESOLVED_MESSAGE = "Sorry, I couldn't understand the locations."


@dataclass
class NavigationService:
    """Route-request handler for campus navigation.

    Attributes:
        resolver: Resolves utterances to gazetteer places
        routing: Computes walking routes
        map_renderer: Optional map rendering
        speech_to_text: Optional transcription for audio requests
        geocoder: Optional lookup for places missing from the gazetteer
        geocode_below_score: Gazetteer matches scoring under this are geocoded
        geocode_context: Appended to geocoding queries ("Kane Hall, <context>")
    """

    resolver: PlaceResolutionService
    routing: RoutingPort
    map_renderer: Optional[MapRendererPort] = None
    speech_to_text: Optional[SpeechToTextPort] = None
    geocoder: Optional[GeocoderPort] = None
    geocode_below_score: float = 0.5
    geocode_context: str = ""

    _logger: logging.Logger = field(init=False, repr=False)

    def __post_init__(self) -> None:
        self._logger = logging.getLogger(__name__)

    @staticmethod
    def require_endpoints(resolution: ResolutionResult) -> Tuple[MatchResult, MatchResult]:
        """Return the (start, end) matches of a complete resolution.

        Raises:
            UnresolvedLocationsError: If either side is missing. The generic
                message is used when both are missing.
        """
        start, end = resolution.start, resolution.end
        if start is None and end is None:
            raise UnresolvedLocationsError(
                UNRESOLVED_MESSAGE, missing=resolution.missing
            )
        if start is None or end is None:
            side = resolution.missing[0]
            raise UnresolvedLocationsError(
                f"Sorry, I couldn't find the {side} location.",
                missing=resolution.missing,
            )
        return start, end

    def _geocode_name(self, name: str, match: Optional[MatchResult]) -> Optional[MatchResult]:
        query = f"{name}, {self.geocode_context}" if self.geocode_context else name
        try:
            place = self.geocoder.geocode(query) if self.geocoder else None
        except GeocodingError as e:
            self._logger.warning(
                "Geocoding fallback failed", extra={"query": query, "error": str(e)}
            )
            return match
        if place is None:
            return match
        self._logger.info(
            "Place geocoded outside the gazetteer",
            extra={"query": query, "place": place.name, "source": place.source},
        )
        # Score stays the gazetteer one; Place.source marks the origin
        return MatchResult(place=place, score=match.score if match else 0.0)

    async def _fill_from_geocoder(self, resolution: ResolutionResult) -> ResolutionResult:
        if self.geocoder is None:
            return resolution
        parsed = resolution.parsed
        updates = {}
        for side, name, match in (
            ("start", parsed.start_name, resolution.start),
            ("end", parsed.end_name, resolution.end),
        ):
            if not name or (match is not None and match.score >= self.geocode_below_score):
                continue
            updates[side] = await asyncio.to_thread(self._geocode_name, name, match)
        return replace(resolution, **updates) if updates else resolution

    def _render(
        self,
        resolution: ResolutionResult,
        route: WalkingRoute,
        map_output_path: Optional[Path],
    ) -> Optional[str]:
        if self.map_renderer is None or map_output_path is None:
            return None
        try:
            path = self.map_renderer.render(resolution, route, Path(map_output_path))
        except Exception as e:
            # A missing map never fails the request
            self._logger.warning("Map generation failed", extra={"error": str(e)})
            return None
        self._logger.info("Map generated", extra={"path": str(path)})
        return str(path)

    async def navigate(
        self,
        utterance: str,
        render_map: bool = False,
        map_output_path: Optional[Path] = None,
    ) -> NavigationResult:
        """Resolve a navigation request and compute the walking route.

        Args:
            utterance: The request text ("from Kane Hall to the HUB").
            render_map: Whether to render the route on a map.
            map_output_path: Where to write the map (required if render_map).

        Returns:
            NavigationResult with the resolved places and the route.

        Raises:
            LoadError: If the gazetteer cannot be loaded.
            UnresolvedLocationsError: If start or end could not be resolved.
            RoutingError: If the routing service fails.
        """
        self._logger.info(
            "Starting navigation request",
            extra={"utterance_length": len(utterance or "")},
        )

        resolution = await self.resolver.resolve(utterance)
        resolution = await self._fill_from_geocoder(resolution)
        start, end = self.require_endpoints(resolution)

        route = await asyncio.to_thread(
            self.routing.route, start.place.location, end.place.location
        )

        map_path = None
        if render_map:
            map_path = self._render(resolution, route, map_output_path)

        return NavigationResult(resolution=resolution, route=route, map_path=map_path)

    async def transcribe_and_navigate(
        self,
        audio_path: Path,
        render_map: bool = False,
        map_output_path: Optional[Path] = None,
        language: Optional[str] = None,
    ) -> NavigationResult:
        """Transcribe a recorded request, then navigate.

        Raises:
            ConfigurationError: If no speech-to-text service is configured.
            SpeechToTextError: If transcription fails or hears nothing.
            UnresolvedLocationsError, RoutingError, LoadError: As in navigate.
        """
        if self.speech_to_text is None:
            raise ConfigurationError(
                "Speech-to-text is not configured", setting_name="NAV_SPEECH_API_KEY"
            )

        transcription = await asyncio.to_thread(
            self.speech_to_text.transcribe, Path(audio_path), language
        )
        if not transcription.text:
            raise SpeechToTextError(
                "No speech detected in the recording", audio_path=str(audio_path)
            )

        result = await self.navigate(transcription.text, render_map, map_output_path)
        return NavigationResult(
            resolution=result.resolution,
            route=result.route,
            map_path=result.map_path,
            transcript=transcription.text,
        )

    async def navigate_safe(
        self,
        utterance: str,
        render_map: bool = False,
        map_output_path: Optional[Path] = None,
    ) -> Tuple[Optional[NavigationResult], Optional[str]]:
        """Navigate, returning a user-facing error message instead of raising.

        Returns:
            Tuple of (NavigationResult or None, error message or None).
        """
        try:
            result = await self.navigate(utterance, render_map, map_output_path)
            return result, None
        except UnresolvedLocationsError as e:
            return None, e.message
        except RoutingError as e:
            self._logger.warning("Routing failed", extra={"error": str(e)})
            return None, "Sorry, I couldn't get walking directions right now."
        except LoadError as e:
            self._logger.error("Gazetteer unavailable", extra={"error": str(e)})
            return None, "Campus building data is unavailable."
        except ConfigurationError as e:
            return None, f"Configuration error: {e.message}"
        except Exception as e:
            self._logger.exception("Unexpected error in navigation")
            return None, f"Error: {e}"

    def format_result(self, result: NavigationResult) -> str:
        """Format a navigation result as human-readable text.

        Raises:
            UnresolvedLocationsError: If the result lacks a start or an end.
        """
        start, end = self.require_endpoints(result.resolution)
        lines = [f"From {start.place.name} to {end.place.name}"]

        route = result.route
        if route is not None:
            lines.append(
                f"Walking distance: {route.distance_m:.0f} m "
                f"(about {route.duration_minutes:.0f} min)"
            )
            lines.extend(
                f"{i}. {step.instruction}" for i, step in enumerate(route.steps, 1)
            )

        if result.map_path:
            lines.append(f"Map saved to: {result.map_path}")
        return "\n".join(lines)
