"""Services layer - Application orchestration.

This module contains the main application services that orchestrate
the flow of data through adapters to fulfill use cases.

Available services:
- PlaceResolutionService: Utterance to start/end gazetteer places
- NavigationService: Full request handling (speech, resolution, route, map)
"""

from .navigation_service import UNRESOLVED_MESSAGE, NavigationService
from .resolution_service import PlaceResolutionService

__all__ = ["NavigationService", "PlaceResolutionService", "UNRESOLVED_MESSAGE"]
