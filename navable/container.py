"""Dependency injection container for NavAble.

Ports are bound to factories; ``resolve`` builds the adapter on first
use and, for singleton bindings, hands the same instance to every
caller. The lock makes first resolution safe when the Gradio app serves
several requests at once.

Optional collaborators (speech-to-text without an API key) are simply
not bound, and ``resolve_optional`` returns None for them.
"""

from __future__ import annotations

import threading
from dataclasses import dataclass, field
from typing import Any, Callable, Dict, Optional, Set

from .config import AppConfig, get_config


@dataclass
class Container:
    """Port-to-factory registry.

    Usage:
        # Production
        container = Container.create_default()
        navigation = container.resolve(NavigationService)

        # Testing
        container = Container()
        container.register(PlaceExtractorPort, lambda: FakeExtractor())
        extractor = container.resolve(PlaceExtractorPort)

    Attributes:
        config: Settings handed to every adapter factory
    """

    config: AppConfig = field(default_factory=get_config)

    _factories: Dict[type, Callable[[], Any]] = field(default_factory=dict, repr=False)
    _instances: Dict[type, Any] = field(default_factory=dict, repr=False)
    _singletons: Set[type] = field(default_factory=set, repr=False)
    _lock: threading.RLock = field(default_factory=threading.RLock, repr=False)

    def register(
        self,
        port_type: type,
        factory: Callable[[], Any],
        singleton: bool = True,
    ) -> None:
        """Bind ``port_type`` to ``factory``, replacing any earlier binding."""
        with self._lock:
            self._factories[port_type] = factory
            self._instances.pop(port_type, None)
            if singleton:
                self._singletons.add(port_type)
            else:
                self._singletons.discard(port_type)

    def resolve(self, port_type: type) -> Any:
        """Return an instance bound to ``port_type``.

        Raises:
            KeyError: If the type is not registered.
        """
        with self._lock:
            factory = self._factories.get(port_type)
            if factory is None:
                raise KeyError(f"Type not registered: {port_type}")

            if port_type not in self._singletons:
                return factory()
            if port_type not in self._instances:
                self._instances[port_type] = factory()
            return self._instances[port_type]

    def resolve_optional(self, port_type: type) -> Optional[Any]:
        """Like resolve, but None for an unbound type."""
        with self._lock:
            if port_type not in self._factories:
                return None
            return self.resolve(port_type)

    def is_registered(self, port_type: type) -> bool:
        return port_type in self._factories

    def clear_singletons(self) -> None:
        """Drop built instances so the next resolve creates fresh ones."""
        with self._lock:
            self._instances.clear()

    def clear_all(self) -> None:
        with self._lock:
            self._factories.clear()
            self._instances.clear()
            self._singletons.clear()

    @classmethod
    def create_default(cls, config: Optional[AppConfig] = None) -> Container:
        """Bind every port to its production adapter.

        The Gemini-backed extractor is bound only when inference is
        enabled and an API key is configured; otherwise requests are
        parsed by the heuristic extractor alone. Speech-to-text is bound
        only when a speech API key is present, and the geocoding fallback
        only when NAV_GEO_FALLBACK_ENABLED is true.

        Args:
            config: Settings to use instead of get_config().
        """
        from .adapters.cache import InMemoryCache
        from .adapters.gazetteer import DirectoryGazetteerRepository
        from .adapters.geocoding import GeoapifyGeocoderAdapter
        from .adapters.inference import GeminiInferenceAdapter
        from .adapters.nlp import TokenOverlapMatcher, build_place_extractor
        from .adapters.rendering import FoliumMapRenderer
        from .adapters.routing import GeoapifyRoutingAdapter
        from .adapters.speech import ElevenLabsSpeechAdapter
        from .ports.cache import CachePort
        from .ports.gazetteer import GazetteerRepositoryPort
        from .ports.geocoding import GeocoderPort
        from .ports.inference import InferenceBackendPort
        from .ports.nlp import PlaceExtractorPort, PlaceMatcherPort
        from .ports.rendering import MapRendererPort
        from .ports.routing import RoutingPort
        from .ports.speech import SpeechToTextPort, TextToSpeechPort
        from .services import NavigationService, PlaceResolutionService

        config = config or get_config()
        container = cls(config=config)

        # Cache (geocoding answers)
        container.register(
            CachePort,
            lambda: InMemoryCache(
                name="geocode", default_ttl_seconds=config.geocoding.cache_ttl_seconds
            ),
        )

        # Gazetteer
        container.register(
            GazetteerRepositoryPort,
            lambda: DirectoryGazetteerRepository(config.gazetteer),
        )

        # Extraction and matching
        container.register(
            InferenceBackendPort,
            lambda: GeminiInferenceAdapter(config.inference),
        )
        container.register(
            PlaceExtractorPort,
            lambda: build_place_extractor(
                container.resolve(InferenceBackendPort), config.inference
            ),
        )
        container.register(PlaceMatcherPort, lambda: TokenOverlapMatcher())

        # Speech (one client serves both directions)
        speech = ElevenLabsSpeechAdapter(config.speech) if config.speech.api_key else None
        if speech is not None:
            container.register(SpeechToTextPort, lambda: speech)
            container.register(TextToSpeechPort, lambda: speech)

        # Routing and geocoding
        container.register(
            RoutingPort,
            lambda: GeoapifyRoutingAdapter(config.routing),
        )
        if config.geocoding.fallback_enabled:
            container.register(
                GeocoderPort,
                lambda: GeoapifyGeocoderAdapter(
                    config.geocoding, config.routing, container.resolve(CachePort)
                ),
            )

        # Rendering
        container.register(MapRendererPort, lambda: FoliumMapRenderer())

        # Services
        container.register(
            PlaceResolutionService,
            lambda: PlaceResolutionService(
                extractor=container.resolve(PlaceExtractorPort),
                matcher=container.resolve(PlaceMatcherPort),
                repository=container.resolve(GazetteerRepositoryPort),
            ),
        )

        def create_navigation_service() -> NavigationService:
            return NavigationService(
                resolver=container.resolve(PlaceResolutionService),
                routing=container.resolve(RoutingPort),
                map_renderer=container.resolve(MapRendererPort),
                speech_to_text=container.resolve_optional(SpeechToTextPort),
                geocoder=container.resolve_optional(GeocoderPort),
                geocode_below_score=config.geocoding.fallback_below_score,
                geocode_context=config.geocoding.query_context,
            )

        container.register(NavigationService, create_navigation_service)

        return container


_default_container: Optional[Container] = None
_container_lock = threading.Lock()


def get_container() -> Container:
    """Return the process-wide container, building it on first call."""
    global _default_container
    container = _default_container
    if container is not None:
        return container
    with _container_lock:
        if _default_container is None:
            _default_container = Container.create_default()
        return _default_container


def reset_container() -> None:
    """Forget the process-wide container (tests, config reloads)."""
    global _default_container
    with _container_lock:
        _default_container = None
