"""Routing adapters - Implementations of RoutingPort.

Available implementations:
- GeoapifyRoutingAdapter: Geoapify walking directions
"""

from .geoapify_adapter import GeoapifyRoutingAdapter, route_from_geojson

__all__ = ["GeoapifyRoutingAdapter", "route_from_geojson"]
