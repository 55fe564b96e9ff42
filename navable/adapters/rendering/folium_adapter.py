"""MapRendererPort implementation backed by folium.

Draws the resolved start and end places as markers and the walking route
as a polyline, and saves the map as a standalone HTML file.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass, field
from pathlib import Path

import folium

from ...domain.errors import RenderingError
from ...domain.models import ResolutionResult, WalkingRoute


@dataclass
class FoliumMapRenderer:
    """Writes a walking route between two campus places to an HTML map.

    Attributes:
        zoom_start: Initial zoom level of the map
        route_color: Color of the route polyline
    """

    zoom_start: int = 16
    route_color: str = "blue"
    _logger: logging.Logger = field(init=False, repr=False)

    def __post_init__(self) -> None:
        self._logger = logging.getLogger(__name__)

    def render(
        self,
        resolution: ResolutionResult,
        route: WalkingRoute,
        output_path: Path,
    ) -> Path:
        """Render the places and route on a map and save to file.

        Args:
            resolution: Resolved start/end places.
            route: Walking route between them.
            output_path: Where to save the rendered map.

        Returns:
            Path to the generated map file.

        Raises:
            RenderingError: If there is nothing to draw or rendering fails.
        """
        output_path = Path(output_path)
        if route.is_empty and resolution.is_empty:
            raise RenderingError(
                "Cannot render an empty route",
                output_path=str(output_path),
                renderer_type="folium",
            )

        self._logger.info(
            "Rendering route map",
            extra={
                "points": len(route.coordinates),
                "output_path": str(output_path),
            },
        )

        try:
            points = list(route.coordinates)
            markers = [
                (match.place, color)
                for match, color in ((resolution.start, "green"), (resolution.end, "red"))
                if match is not None
            ]
            if not points:
                points = [(p.latitude, p.longitude) for p, _ in markers]

            center_lat = sum(lat for lat, _ in points) / len(points)
            center_lon = sum(lon for _, lon in points) / len(points)
            m = folium.Map(location=[center_lat, center_lon], zoom_start=self.zoom_start)

            for place, color in markers:
                folium.Marker(
                    location=[place.latitude, place.longitude],
                    popup=place.name,
                    tooltip=place.name,
                    icon=folium.Icon(color=color),
                ).add_to(m)

            if len(route.coordinates) >= 2:
                folium.PolyLine(
                    [list(pt) for pt in route.coordinates],
                    weight=5,
                    color=self.route_color,
                    opacity=0.8,
                    tooltip=f"{route.distance_m:.0f} m, {route.duration_minutes:.0f} min",
                ).add_to(m)

            output_path.parent.mkdir(parents=True, exist_ok=True)
            m.save(str(output_path))
        except Exception as e:
            self._logger.error(
                "Map rendering failed",
                extra={"error": str(e), "output_path": str(output_path)},
            )
            raise RenderingError(
                f"Map rendering failed: {e}",
                output_path=str(output_path),
                renderer_type="folium",
                cause=e,
            )

        self._logger.info(
            "Map rendered successfully",
            extra={"output_path": str(output_path)},
        )
        return output_path
