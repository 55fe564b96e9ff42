"""Geocoding adapters - Implementations of GeocoderPort.

Available implementations:
- GeoapifyGeocoderAdapter: Geoapify search with a Nominatim fallback
"""

from .geoapify_adapter import GeoapifyGeocoderAdapter, places_from_features

__all__ = ["GeoapifyGeocoderAdapter", "places_from_features"]
