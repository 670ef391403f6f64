"""In-memory map surface that records what is drawn on it.

Useful for tests and headless runs: overlays and viewport fits are kept
as domain objects so they can be asserted on directly.

Example:
    surface = InMemoryMapSurface()
    RouteRenderer().render(response, surface)
    assert len(surface.polylines) == len(response.primary_route.steps)
"""

from __future__ import annotations

from dataclasses import dataclass, field

from ...domain.models import Bounds, EdgeInsets, MarkerOverlay, PolylineOverlay


@dataclass(eq=False)
class InMemoryMapSurface:
    """Recording surface implementing MapSurfacePort.

    Attributes:
        height: Visible height reported as ``viewport_height``
        polylines: Path overlays currently on the surface
        markers: Marker overlays currently on the surface
        viewport_fits: Every (bounds, insets) fit issued, in order
        clear_count: Number of times the surface was cleared
    """

    height: float = 800.0
    polylines: list[PolylineOverlay] = field(default_factory=list)
    markers: list[MarkerOverlay] = field(default_factory=list)
    viewport_fits: list[tuple[Bounds, EdgeInsets]] = field(default_factory=list)
    clear_count: int = 0

    @property
    def viewport_height(self) -> float:
        return self.height

    def clear(self) -> None:
        self.polylines.clear()
        self.markers.clear()
        self.viewport_fits.clear()
        self.clear_count += 1

    def fit_bounds(self, bounds: Bounds, insets: EdgeInsets) -> None:
        self.viewport_fits.append((bounds, insets))

    def add_polyline(self, overlay: PolylineOverlay) -> None:
        self.polylines.append(overlay)

    def add_marker(self, overlay: MarkerOverlay) -> None:
        self.markers.append(overlay)
