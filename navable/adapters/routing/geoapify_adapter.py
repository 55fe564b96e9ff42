"""Geoapify walking-route adapter.

Calls the Geoapify routing API with two waypoints and converts the first
GeoJSON feature of the answer into a WalkingRoute. Geoapify returns
coordinates as ``[lon, lat]``; the route keeps them as ``(lat, lon)``.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass, field
from typing import Any, Dict, List, Tuple

import requests

from ...config import RoutingConfig, get_config
from ...domain.errors import ConfigurationError, RoutingError
from ...domain.models import GeoLocation, RouteStep, WalkingRoute


def _flatten_coordinates(geometry: Dict[str, Any]) -> List[Tuple[float, float]]:
    kind = geometry.get("type")
    raw = geometry.get("coordinates") or []
    if kind == "LineString":
        lines = [raw]
    elif kind == "MultiLineString":
        lines = raw
    else:
        return []
    return [(float(pt[1]), float(pt[0])) for line in lines for pt in line]


def _parse_steps(properties: Dict[str, Any]) -> Tuple[RouteStep, ...]:
    steps = []
    for leg in properties.get("legs") or []:
        for step in leg.get("steps") or []:
            instruction = step.get("instruction") or {}
            text = instruction.get("text") if isinstance(instruction, dict) else None
            if not text:
                continue
            steps.append(
                RouteStep(
                    instruction=text,
                    distance_m=float(step.get("distance") or 0.0),
                    duration_s=float(step.get("time") or 0.0),
                )
            )
    return tuple(steps)


def route_from_geojson(data: Any, mode: str = "walk") -> WalkingRoute:
    """Build a WalkingRoute from a Geoapify routing response.

    Raises:
        RoutingError: If the body holds no usable feature.
    """
    features = data.get("features") if isinstance(data, dict) else None
    if not features:
        raise RoutingError("Routing service returned no route")

    feature = features[0]
    coordinates = _flatten_coordinates(feature.get("geometry") or {})
    if not coordinates:
        raise RoutingError("Routing service returned a route without geometry")

    properties = feature.get("properties") or {}
    return WalkingRoute(
        coordinates=tuple(coordinates),
        distance_m=float(properties.get("distance") or 0.0),
        duration_s=float(properties.get("time") or 0.0),
        steps=_parse_steps(properties),
        mode=properties.get("mode") or mode,
    )


@dataclass
class GeoapifyRoutingAdapter:
    """Geoapify routing client implementing RoutingPort.

    Attributes:
        config: Routing configuration (key, base URL, travel mode)
        session: HTTP session, injectable for tests
    """

    config: RoutingConfig = field(default_factory=lambda: get_config().routing)
    session: requests.Session = field(default_factory=requests.Session, repr=False)
    _logger: logging.Logger = field(init=False, repr=False)

    def __post_init__(self) -> None:
        self._logger = logging.getLogger(__name__)

    def route(self, start: GeoLocation, end: GeoLocation) -> WalkingRoute:
        """Request a route from ``start`` to ``end``.

        Raises:
            ConfigurationError: If no API key is configured.
            RoutingError: On transport errors, HTTP errors or an empty answer.
        """
        if not self.config.api_key:
            raise ConfigurationError(
                "Routing API key is not set", setting_name="NAV_ROUTING_API_KEY"
            )

        params = {
            "waypoints": (
                f"{start.latitude},{start.longitude}|{end.latitude},{end.longitude}"
            ),
            "mode": self.config.mode,
            "apiKey": self.config.api_key,
        }

        self._logger.info(
            "Requesting route",
            extra={
                "start": (start.latitude, start.longitude),
                "end": (end.latitude, end.longitude),
                "mode": self.config.mode,
            },
        )

        try:
            response = self.session.get(
                f"{self.config.base_url.rstrip('/')}/routing",
                params=params,
                timeout=self.config.timeout_seconds,
            )
        except requests.RequestException as e:
            raise RoutingError("Routing request failed", cause=e)

        if not response.ok:
            raise RoutingError(
                f"Routing service returned HTTP {response.status_code}: "
                f"{response.text[:200]}",
                status_code=response.status_code,
            )

        try:
            data = response.json()
        except ValueError as e:
            raise RoutingError(
                "Routing service returned a non-JSON body",
                status_code=response.status_code,
                cause=e,
            )

        route = route_from_geojson(data, mode=self.config.mode)
        self._logger.info(
            "Route received",
            extra={
                "distance_m": route.distance_m,
                "duration_s": route.duration_s,
                "points": len(route.coordinates),
                "steps": len(route.steps),
            },
        )
        return route
