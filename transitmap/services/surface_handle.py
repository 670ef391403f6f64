"""Weak, invalidatable render target.

A screen draws through a SurfaceHandle rather than the surface itself.
Once the screen is torn down, or the surface is garbage collected, every
call on the handle is a silent no-op, so a late network answer can never
draw into a defunct map.
"""

from __future__ import annotations

import logging
import weakref
from typing import Optional

from ..domain.models import Bounds, EdgeInsets, MarkerOverlay, PolylineOverlay
from ..ports.surface import MapSurfacePort


class SurfaceHandle:
    """MapSurfacePort proxy holding its surface weakly."""

    def __init__(self, surface: MapSurfacePort) -> None:
        self._ref: Optional[weakref.ReferenceType[MapSurfacePort]] = weakref.ref(surface)
        self._viewport_height = float(surface.viewport_height)
        self._logger = logging.getLogger(__name__)

    @property
    def target(self) -> Optional[MapSurfacePort]:
        """The live surface, or None once invalidated or collected."""
        if self._ref is None:
            return None
        return self._ref()

    @property
    def is_valid(self) -> bool:
        return self.target is not None

    def invalidate(self) -> None:
        """Detach from the surface; later calls do nothing."""
        self._ref = None

    @property
    def viewport_height(self) -> float:
        surface = self.target
        if surface is None:
            return self._viewport_height
        return float(surface.viewport_height)

    def _live(self, operation: str) -> Optional[MapSurfacePort]:
        surface = self.target
        if surface is None:
            self._logger.debug("Dropping %s on detached surface", operation)
        return surface

    def clear(self) -> None:
        surface = self._live("clear")
        if surface is not None:
            surface.clear()

    def fit_bounds(self, bounds: Bounds, insets: EdgeInsets) -> None:
        surface = self._live("fit_bounds")
        if surface is not None:
            surface.fit_bounds(bounds, insets)

    def add_polyline(self, overlay: PolylineOverlay) -> None:
        surface = self._live("add_polyline")
        if surface is not None:
            surface.add_polyline(overlay)

    def add_marker(self, overlay: MarkerOverlay) -> None:
        surface = self._live("add_marker")
        if surface is not None:
            surface.add_marker(overlay)
