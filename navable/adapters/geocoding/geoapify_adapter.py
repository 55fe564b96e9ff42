"""Geoapify geocoder adapter with a Nominatim fallback.

Free-text places that are not in the campus gazetteer are looked up with
the Geoapify search API. When Geoapify rejects the key (HTTP 401), or no
key is configured, the query goes to OpenStreetMap's Nominatim through
geopy instead. Answers, including misses, are cached per query.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass, field
from typing import Any, List, Optional

import requests
from geopy.exc import GeopyError
from geopy.extra.rate_limiter import RateLimiter
from geopy.geocoders import Nominatim

from ...config import GeocodingConfig, RoutingConfig, get_config
from ...domain.errors import GeocodingError
from ...domain.models import GeoLocation, Place
from ...ports.cache import CachePort
from ..cache.memory_cache import InMemoryCache


def places_from_features(data: Any, source: str = "geoapify") -> List[Place]:
    """Convert a GeoJSON FeatureCollection into places, skipping bad features."""
    features = data.get("features") if isinstance(data, dict) else None
    places = []
    for feature in features or []:
        coords = (feature.get("geometry") or {}).get("coordinates") or []
        if len(coords) < 2:
            continue
        props = feature.get("properties") or {}
        name = props.get("formatted") or props.get("name") or props.get("display_name")
        try:
            location = GeoLocation(latitude=float(coords[1]), longitude=float(coords[0]))
        except (TypeError, ValueError):
            continue
        places.append(Place(name=str(name or ""), location=location, source=source))
    return places


@dataclass
class GeoapifyGeocoderAdapter:
    """Geocoder implementing GeocoderPort.

    Attributes:
        config: Geocoding configuration (limits, Nominatim settings)
        routing: Routing configuration, which holds the Geoapify key and URL
        cache: Cache for geocoding results
        session: HTTP session, injectable for tests
    """

    config: GeocodingConfig = field(default_factory=lambda: get_config().geocoding)
    routing: RoutingConfig = field(default_factory=lambda: get_config().routing)
    cache: CachePort[Optional[Place]] = field(
        default_factory=lambda: InMemoryCache(
            name="geocode", default_ttl_seconds=get_config().geocoding.cache_ttl_seconds
        )
    )
    session: requests.Session = field(default_factory=requests.Session, repr=False)

    _geocode_fn: Optional[Any] = field(default=None, repr=False)
    _logger: logging.Logger = field(init=False, repr=False)

    def __post_init__(self) -> None:
        self._logger = logging.getLogger(__name__)

    def _get_nominatim(self) -> Any:
        """Get or initialize the rate-limited Nominatim geocode function."""
        if self._geocode_fn is not None:
            return self._geocode_fn

        self._logger.debug(
            "Initializing Nominatim geocoder",
            extra={"user_agent": self.config.user_agent},
        )
        geolocator = Nominatim(
            user_agent=self.config.user_agent,
            timeout=self.config.timeout_seconds,
        )
        self._geocode_fn = RateLimiter(
            geolocator.geocode,
            min_delay_seconds=self.config.rate_limit_delay,
            max_retries=self.config.max_retries,
            error_wait_seconds=self.config.error_wait_seconds,
        )
        return self._geocode_fn

    def _search_geoapify(self, query: str) -> Optional[List[Place]]:
        """Search Geoapify; return None when the key was rejected."""
        try:
            response = self.session.get(
                f"{self.routing.base_url.rstrip('/')}/geocode/search",
                params={
                    "text": query,
                    "limit": self.config.limit,
                    "apiKey": self.routing.api_key,
                },
                timeout=self.config.timeout_seconds,
            )
        except requests.RequestException as e:
            raise GeocodingError("Geocoding request failed", query=query, cause=e)

        if response.status_code == 401:
            self._logger.warning(
                "Geoapify rejected the key, falling back to Nominatim",
                extra={"query": query},
            )
            return None
        if not response.ok:
            raise GeocodingError(
                f"Geocoding failed with HTTP {response.status_code}",
                query=query,
                is_rate_limited=response.status_code == 429,
            )

        try:
            return places_from_features(response.json())
        except ValueError as e:
            raise GeocodingError(
                "Geocoding service returned a non-JSON body", query=query, cause=e
            )

    def _search_nominatim(self, query: str) -> List[Place]:
        try:
            locations = self._get_nominatim()(
                query, exactly_one=False, limit=self.config.limit
            )
        except GeopyError as e:
            raise GeocodingError(
                "Nominatim fallback failed",
                query=query,
                is_rate_limited="429" in str(e),
                cause=e,
            )
        return [
            Place(
                name=loc.address,
                location=GeoLocation(
                    latitude=float(loc.latitude), longitude=float(loc.longitude)
                ),
                source="nominatim",
            )
            for loc in locations or []
        ]

    def search(self, query: str) -> List[Place]:
        """Return up to ``config.limit`` candidate places for ``query``.

        Raises:
            GeocodingError: If the providers fail.
        """
        places = None
        if self.routing.api_key:
            places = self._search_geoapify(query)
        if places is None:
            places = self._search_nominatim(query)
        return places

    def geocode(self, query: str) -> Optional[Place]:
        """Geocode a location query.

        Args:
            query: The location text to look up.

        Returns:
            The best candidate, or None if nothing was found.

        Raises:
            GeocodingError: If the providers fail.
        """
        if not query or not query.strip():
            return None

        cache_key = query.strip().lower()
        if self.cache.contains(cache_key):
            self._logger.debug("Geocode cache hit", extra={"query": query})
            return self.cache.get(cache_key)

        places = self.search(query.strip())
        place = places[0] if places else None
        self.cache.set(cache_key, place)

        self._logger.debug(
            "Geocode result",
            extra={"query": query, "place": place.name if place else None},
        )
        return place
