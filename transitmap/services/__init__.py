"""Services layer - Application orchestration.

Available services:
- DirectionsFetcher: provider call -> typed FetchResult
- RouteRenderer: directions response -> overlays on a map surface
- TransitScreen: one fetch and one render bound to a view's lifetime
"""

from .fetcher import DirectionsFetcher
from .renderer import RouteRenderer
from .screen import ScreenState, TransitScreen
from .surface_handle import SurfaceHandle

__all__ = [
    "DirectionsFetcher",
    "RouteRenderer",
    "ScreenState",
    "SurfaceHandle",
    "TransitScreen",
]
