"""Routing port - Abstraction for the walking-directions service."""

from __future__ import annotations

from typing import TYPE_CHECKING, Protocol

if TYPE_CHECKING:
    from ..domain.models import GeoLocation, WalkingRoute


class RoutingPort(Protocol):
    """Port for route computation between two coordinates.

    Implementation: adapters/routing/geoapify_adapter.py
    """

    def route(self, start: GeoLocation, end: GeoLocation) -> WalkingRoute:
        """Request a walking route.

        Args:
            start: Start coordinates.
            end: End coordinates.

        Returns:
            WalkingRoute with the path geometry, distance and steps.

        Raises:
            RoutingError: If no route could be obtained.
        """
        ...
