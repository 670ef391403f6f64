"""High-level entry point for the transit map.

The pipeline is organized in several stages:

1. Query construction (known places or raw place identifiers).
2. Directions fetch (one HTTP call, typed result).
3. Rendering onto a Folium map surface.
4. Export of the map as an HTML page.

Each step delegates work to the services wired by the container.
"""

from __future__ import annotations

import asyncio
from pathlib import Path
from typing import Optional, Union

from .adapters.surface import FoliumMapSurface
from .config import get_config
from .container import Container, get_container
from .domain.errors import RenderingError
from .domain.models import DirectionsQuery, TravelMode
from .domain.places import KnownPlace
from .logging_config import configure_logging
from .services import ScreenState, TransitScreen


async def open_transit_screen(
    query: DirectionsQuery,
    surface: FoliumMapSurface,
    container: Optional[Container] = None,
) -> TransitScreen:
    """Show a query on a surface and wait until it rendered or failed."""
    container = container or get_container()
    screen = container.create_screen(query, surface)
    await screen.appear()
    return screen


def show_transit_directions(
    origin: str,
    destination: str,
    *,
    alternatives: bool = True,
    map_output_html: Optional[Union[str, Path]] = None,
    container: Optional[Container] = None,
) -> str:
    """Fetch transit directions, save the map and return a message.

    This helper is designed to be reused from other front-ends
    (CLI, scripts, tests).
    """
    container = container or get_container()
    query = DirectionsQuery(
        origin=origin,
        destination=destination,
        mode=TravelMode.TRANSIT,
        alternatives=alternatives,
    )
    surface = FoliumMapSurface(container.config.map)

    screen = asyncio.run(open_transit_screen(query, surface, container))
    try:
        if screen.state is not ScreenState.RENDERED:
            return f"Error: {screen.banner_message}"

        output_path = (
            Path(map_output_html)
            if map_output_html is not None
            else container.config.map_output_path
        )
        try:
            surface.save(output_path)
        except RenderingError as e:
            return f"Map generation failed: {e.message}"

        route = screen.result.response.primary_route  # type: ignore[union-attr]
        summary = f" via {route.summary}" if route.summary else ""
        return (
            f"Route{summary}: {len(route.steps)} steps"
            f"\nMap saved to: {output_path}"
        )
    finally:
        screen.teardown()


def run_pipeline() -> None:
    """Show the default directions, Medgar Evers College to Times Square."""
    configure_logging(get_config().observability)

    message = show_transit_directions(
        KnownPlace.MEDGAR_EVERS_COLLEGE.value,
        KnownPlace.TIMES_SQUARE.value,
    )
    print(message)


if __name__ == "__main__":
    run_pipeline()
