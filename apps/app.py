# -*- coding: utf-8 -*-
"""Gradio front-end: pick two places, see the transit route on a map.

Failures are shown as a banner above the map; pressing the button again
starts a new screen (a new single fetch).
"""

import html
from typing import List, Optional, Tuple

import gradio as gr

from transitmap.adapters.surface import FoliumMapSurface
from transitmap.config import get_config
from transitmap.container import get_container
from transitmap.domain.models import DirectionsQuery, TravelMode
from transitmap.domain.places import KnownPlace
from transitmap.logging_config import configure_logging
from transitmap.services import ScreenState, TransitScreen

PLACE_CHOICES: List[str] = [place.label for place in KnownPlace]

# The map surface lives as long as the last rendered page.
_current: Optional[Tuple[TransitScreen, FoliumMapSurface]] = None


def _map_iframe_from_html(document_html: str, *, height_px: int) -> str:
    escaped = html.escape(document_html, quote=True)
    return (
        f'<iframe srcdoc="{escaped}" '
        f'style="width: 100%; height: {height_px}px; border: 0;" '
        f'loading="lazy"></iframe>'
    )


async def show_directions(origin_label: str, destination_label: str) -> Tuple[str, str]:
    global _current

    if _current is not None:
        _current[0].teardown()
        _current = None

    container = get_container()
    query = DirectionsQuery(
        origin=KnownPlace.from_label(origin_label).value,
        destination=KnownPlace.from_label(destination_label).value,
        mode=TravelMode.TRANSIT,
        alternatives=container.config.directions.alternatives,
    )
    surface = FoliumMapSurface(container.config.map)
    screen = container.create_screen(query, surface)
    _current = (screen, surface)

    await screen.appear()

    height = container.config.map.viewport_height
    map_html = _map_iframe_from_html(surface.to_html(), height_px=height)

    if screen.state is ScreenState.RENDERED:
        route = screen.result.response.primary_route  # type: ignore[union-attr]
        status = f"✅ {route.summary or 'Route'}: {len(route.steps)} steps"
    else:
        status = f"❌ {screen.banner_message}"
    return status, map_html


configure_logging(get_config().observability)

with gr.Blocks(title="Transit directions") as app:
    gr.Markdown("# 🚇 Transit directions")

    with gr.Row():
        origin_dd = gr.Dropdown(
            PLACE_CHOICES, value=KnownPlace.MEDGAR_EVERS_COLLEGE.label, label="From"
        )
        destination_dd = gr.Dropdown(
            PLACE_CHOICES, value=KnownPlace.TIMES_SQUARE.label, label="To"
        )
        btn = gr.Button("🗺️ Show directions")

    status_md = gr.Markdown()
    map_view = gr.HTML(value="<p></p>")

    btn.click(
        show_directions,
        inputs=[origin_dd, destination_dd],
        outputs=[status_md, map_view],
    )
    app.load(
        show_directions,
        inputs=[origin_dd, destination_dd],
        outputs=[status_md, map_view],
    )


if __name__ == "__main__":
    app.launch()
