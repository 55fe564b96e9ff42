"""Geocoding port - Abstraction for free-text location lookup.

Used for places that are not in the campus gazetteer.
"""

from __future__ import annotations

from typing import TYPE_CHECKING, Optional, Protocol

if TYPE_CHECKING:
    from ..domain.models import Place


class GeocoderPort(Protocol):
    """Port for geocoding services.

    Implementation: adapters/geocoding/geoapify_adapter.py
    """

    def geocode(self, query: str) -> Optional[Place]:
        """Geocode a location query to a place.

        Args:
            query: The location text (e.g., "Kane Hall, Seattle").

        Returns:
            The best candidate place, or None if nothing was found.

        Raises:
            GeocodingError: If every provider failed.
        """
        ...
