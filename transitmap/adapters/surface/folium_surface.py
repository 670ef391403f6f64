"""Folium map surface adapter.

Draws overlays onto a Folium (Leaflet) map that can be saved as a
standalone HTML page or embedded in the Gradio front-end:
- dashed paths through Leaflet's ``dashArray``
- circular icons through ``DivIcon``
- stacking through ``zIndexOffset``
- viewport fit through ``fitBounds`` paddings
"""

from __future__ import annotations

import logging
from dataclasses import dataclass, field
from pathlib import Path
from typing import Any

import folium

from ...config import MapConfig, get_config
from ...domain.errors import RenderingError
from ...domain.models import (
    Bounds,
    EdgeInsets,
    MarkerIcon,
    MarkerOverlay,
    PathStyle,
    PolylineOverlay,
)

# Leaflet offsets markers by latitude; a large step keeps z-index ordering strict.
Z_INDEX_STEP = 1000


def icon_html(icon: MarkerIcon) -> str:
    """Return the HTML of a circular marker icon."""
    return (
        f'<div style="width: {icon.size}px; height: {icon.size}px; '
        f"box-sizing: border-box; border-radius: 50%; "
        f"border: {icon.border_width}px solid {icon.color.to_hex()}; "
        f'background: {icon.fill_color.to_hex()};"></div>'
    )


def dash_array(style: PathStyle) -> str | None:
    if not style.is_dashed:
        return None
    return " ".join(f"{length:g}" for length in style.dash_pattern)


@dataclass(eq=False)
class FoliumMapSurface:
    """Folium-based map surface.

    This adapter implements MapSurfacePort. ``clear()`` rebuilds the
    underlying map at the initial camera, so every render pass starts
    from an empty map.

    Attributes:
        config: Map configuration (initial camera, tiles, viewport height)
    """

    config: MapConfig = field(default_factory=lambda: get_config().map)

    polyline_count: int = field(default=0, init=False)
    marker_count: int = field(default=0, init=False)
    _map: Any = field(init=False, repr=False)
    _logger: logging.Logger = field(init=False, repr=False)

    def __post_init__(self) -> None:
        self._logger = logging.getLogger(__name__)
        self._map = self._new_map()

    def _new_map(self) -> folium.Map:
        return folium.Map(
            location=[self.config.center_latitude, self.config.center_longitude],
            zoom_start=self.config.zoom_start,
            tiles=self.config.tiles,
            height=self.config.viewport_height,
            control_scale=True,
        )

    @property
    def viewport_height(self) -> float:
        return float(self.config.viewport_height)

    @property
    def map(self) -> folium.Map:
        return self._map

    def clear(self) -> None:
        self._map = self._new_map()
        self.polyline_count = 0
        self.marker_count = 0

    def _drawing_failed(self, action: str, error: Exception) -> RenderingError:
        self._logger.error(
            "Map drawing failed",
            extra={"action": action, "error": str(error)},
        )
        return RenderingError(
            f"Could not {action}: {error}",
            renderer_type="folium",
            cause=error,
        )

    def fit_bounds(self, bounds: Bounds, insets: EdgeInsets) -> None:
        try:
            self._map.fit_bounds(
                [list(bounds.southwest.as_pair()), list(bounds.northeast.as_pair())],
                padding_top_left=(insets.left, insets.top),
                padding_bottom_right=(insets.right, insets.bottom),
            )
        except Exception as e:
            raise self._drawing_failed("fit map bounds", e)

    def add_polyline(self, overlay: PolylineOverlay) -> None:
        options: dict[str, Any] = {
            "color": overlay.style.color.to_hex(),
            "weight": overlay.style.width,
            "opacity": 1.0,
        }
        dashes = dash_array(overlay.style)
        if dashes:
            options["dash_array"] = dashes

        try:
            folium.PolyLine(
                locations=[list(point.as_pair()) for point in overlay.path],
                **options,
            ).add_to(self._map)
        except Exception as e:
            raise self._drawing_failed("add polyline", e)
        self.polyline_count += 1

    def add_marker(self, overlay: MarkerOverlay) -> None:
        half = overlay.icon.size / 2
        try:
            folium.Marker(
                location=list(overlay.position.as_pair()),
                tooltip=overlay.title or None,
                icon=folium.DivIcon(
                    html=icon_html(overlay.icon),
                    icon_size=(overlay.icon.size, overlay.icon.size),
                    icon_anchor=(half, half),
                ),
                z_index_offset=overlay.z_index * Z_INDEX_STEP,
            ).add_to(self._map)
        except Exception as e:
            raise self._drawing_failed("add marker", e)
        self.marker_count += 1

    def to_html(self) -> str:
        """Render the map as a standalone HTML document."""
        try:
            return self._map.get_root().render()
        except Exception as e:
            raise RenderingError(
                f"Map rendering failed: {e}",
                renderer_type="folium",
                cause=e,
            )

    def save(self, output_path: Path) -> Path:
        """Save the map as an HTML file.

        Args:
            output_path: Where to save the rendered map.

        Returns:
            Path to the generated map file.

        Raises:
            RenderingError: If the map cannot be written.
        """
        try:
            output_path.parent.mkdir(parents=True, exist_ok=True)
            self._map.save(str(output_path))
        except Exception as e:
            self._logger.error(
                "Map export failed",
                extra={"error": str(e), "output_path": str(output_path)},
            )
            raise RenderingError(
                f"Map export failed: {e}",
                output_path=str(output_path),
                renderer_type="folium",
                cause=e,
            )

        self._logger.info(
            "Map saved",
            extra={
                "output_path": str(output_path),
                "polylines": self.polyline_count,
                "markers": self.marker_count,
            },
        )
        return output_path
