"""Ports layer - Abstract interfaces (Protocols) for the application.

Ports define the contracts between the application core and external
adapters. They enable dependency injection and make the system testable.
"""

from .cache import CachePort
from .gazetteer import GazetteerRepositoryPort
from .geocoding import GeocoderPort
from .inference import InferenceBackendPort
from .nlp import PlaceExtractorPort, PlaceMatcherPort
from .rendering import MapRendererPort
from .routing import RoutingPort
from .speech import SpeechToTextPort, TextToSpeechPort

__all__ = [
    # NLP
    "PlaceExtractorPort",
    "PlaceMatcherPort",
    "InferenceBackendPort",
    # Data
    "GazetteerRepositoryPort",
    "GeocoderPort",
    # External services
    "SpeechToTextPort",
    "TextToSpeechPort",
    "RoutingPort",
    # Rendering
    "MapRendererPort",
    # Cache
    "CachePort",
]
