"""Map surface adapters - Implementations of MapSurfacePort.

Available implementations:
- FoliumMapSurface: Folium/Leaflet HTML map
- InMemoryMapSurface: Recording surface for tests and headless runs
"""

from .folium_surface import FoliumMapSurface
from .memory_surface import InMemoryMapSurface

__all__ = ["FoliumMapSurface", "InMemoryMapSurface"]
