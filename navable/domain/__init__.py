"""Domain layer - Core models and errors.

This module contains immutable domain models and typed errors
used throughout the application. No external dependencies.
"""

from .errors import (
    ConfigurationError,
    GeocodingError,
    InferenceError,
    LoadError,
    NavAbleError,
    RenderingError,
    RoutingError,
    SpeechToTextError,
    UnresolvedLocationsError,
)
from .models import (
    ExtractionMethod,
    Gazetteer,
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

__all__ = [
    # Models
    "GeoLocation",
    "Place",
    "Gazetteer",
    "ExtractionMethod",
    "ParsedRequest",
    "MatchResult",
    "ResolutionResult",
    "TranscriptionResult",
    "RouteStep",
    "WalkingRoute",
    "NavigationResult",
    # Errors
    "NavAbleError",
    "LoadError",
    "InferenceError",
    "SpeechToTextError",
    "RoutingError",
    "GeocodingError",
    "UnresolvedLocationsError",
    "ConfigurationError",
    "RenderingError",
]
