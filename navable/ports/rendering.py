"""Rendering port - Abstraction for route map generation."""

from __future__ import annotations

from pathlib import Path
from typing import TYPE_CHECKING, Protocol

if TYPE_CHECKING:
    from ..domain.models import ResolutionResult, WalkingRoute


class MapRendererPort(Protocol):
    """Port for map rendering.

    Implementation: adapters/rendering/folium_adapter.py
    """

    def render(
        self,
        resolution: ResolutionResult,
        route: WalkingRoute,
        output_path: Path,
    ) -> Path:
        """Render the resolved places and the route, and save to file.

        Returns:
            Path to the generated map file.

        Raises:
            RenderingError: If rendering fails.
        """
        ...
