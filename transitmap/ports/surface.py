"""Map surface port - Abstraction for the map a route is drawn on.

Implementations:
- adapters/surface/folium_surface.py (FoliumMapSurface) - HTML maps
- adapters/surface/memory_surface.py (InMemoryMapSurface) - Testing
"""

from __future__ import annotations

from typing import TYPE_CHECKING, Protocol

if TYPE_CHECKING:
    from ..domain.models import Bounds, EdgeInsets, MarkerOverlay, PolylineOverlay


class MapSurfacePort(Protocol):
    """Port for map surfaces.

    A surface owns the overlays placed on it. It is mutated only by the
    route renderer, from the event loop that owns the screen.
    """

    @property
    def viewport_height(self) -> float:
        """Height of the visible map area in screen units."""
        ...

    def clear(self) -> None:
        """Remove every overlay from the surface."""
        ...

    def fit_bounds(self, bounds: Bounds, insets: EdgeInsets) -> None:
        """Move the viewport so the bounds fit inside the given insets."""
        ...

    def add_polyline(self, overlay: PolylineOverlay) -> None:
        """Draw a path overlay."""
        ...

    def add_marker(self, overlay: MarkerOverlay) -> None:
        """Place a point marker."""
        ...
