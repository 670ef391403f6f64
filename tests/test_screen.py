"""Tests for the transit screen lifecycle: one fetch, one render, teardown."""

import asyncio
import gc
import threading

import folium
import httpx
import pytest

from transitmap.adapters.directions import GoogleDirectionsAdapter, parse_directions_payload
from transitmap.adapters.surface import FoliumMapSurface, InMemoryMapSurface
from transitmap.config import DirectionsConfig, MapConfig
from transitmap.domain.errors import (
    ConfigurationError,
    MalformedResponseError,
    MissingRouteError,
    RenderingError,
    TransportError,
)
from transitmap.domain.models import DirectionsQuery, FetchResult, TravelMode
from transitmap.services import (
    DirectionsFetcher,
    RouteRenderer,
    ScreenState,
    SurfaceHandle,
    TransitScreen,
)
from transitmap.services.screen import banner_for

QUERY = DirectionsQuery("place_id:A", "place_id:B", TravelMode.TRANSIT, alternatives=True)


class CountingRenderer(RouteRenderer):
    def __init__(self):
        super().__init__(MapConfig())
        self.calls = 0
        self.threads = []

    def render(self, response, surface):
        self.calls += 1
        self.threads.append(threading.get_ident())
        super().render(response, surface)


class HangingProvider:
    def __init__(self):
        self.release = asyncio.Event()
        self.response = None

    async def get_directions(self, query):
        await self.release.wait()
        return self.response


def make_screen(provider, surface, renderer=None):
    return TransitScreen(
        query=QUERY,
        fetcher=DirectionsFetcher(provider),
        renderer=renderer or CountingRenderer(),
        surface=surface,
    )


@pytest.mark.asyncio
async def test_appear_fetches_and_renders(ok_provider):
    surface = InMemoryMapSurface()
    screen = make_screen(ok_provider, surface)
    assert screen.state is ScreenState.IDLE

    await screen.appear()

    assert screen.state is ScreenState.RENDERED
    assert screen.error is None
    assert screen.banner_message is None
    assert len(surface.polylines) == 2
    assert len(surface.markers) == 4


@pytest.mark.asyncio
async def test_appear_is_single_shot(ok_provider):
    screen = make_screen(ok_provider, InMemoryMapSurface())

    first = screen.appear()
    second = screen.appear()
    await first

    assert first is second
    assert len(ok_provider.calls) == 1


@pytest.mark.asyncio
async def test_non_2xx_takes_failure_path_once_and_never_renders():
    requests = []

    def handler(request):
        requests.append(request)
        return httpx.Response(503, text="unavailable")

    provider = GoogleDirectionsAdapter(
        config=DirectionsConfig(api_key="k"),
        transport=httpx.MockTransport(handler),
    )
    renderer = CountingRenderer()
    surface = InMemoryMapSurface()
    screen = make_screen(provider, surface, renderer)

    await screen.appear()

    assert len(requests) == 1
    assert renderer.calls == 0
    assert surface.clear_count == 0
    assert screen.state is ScreenState.FAILED
    assert isinstance(screen.error, TransportError)
    assert screen.error.status_code == 503
    assert "HTTP 503" in screen.banner_message


@pytest.mark.asyncio
async def test_render_failure_is_reported(stub_provider, build_payload, build_step):
    response = parse_directions_payload(build_payload([build_step(polyline="_p~iF~ps|U_")]))
    screen = make_screen(stub_provider(response=response), InMemoryMapSurface())

    await screen.appear()

    assert screen.state is ScreenState.FAILED
    assert isinstance(screen.error, MalformedResponseError)


@pytest.mark.asyncio
async def test_teardown_cancels_fetch_and_skips_render():
    provider = HangingProvider()
    renderer = CountingRenderer()
    surface = InMemoryMapSurface()
    screen = make_screen(provider, surface, renderer)

    task = screen.appear()
    await asyncio.sleep(0)
    screen.teardown()

    with pytest.raises(asyncio.CancelledError):
        await task

    assert screen.state is ScreenState.CLOSED
    assert screen.surface is None
    assert renderer.calls == 0
    assert surface.clear_count == 0


@pytest.mark.asyncio
async def test_result_after_teardown_is_ignored(transit_response):
    provider = HangingProvider()
    renderer = CountingRenderer()
    surface = InMemoryMapSurface()
    screen = make_screen(provider, surface, renderer)

    task = screen.appear()
    await asyncio.sleep(0)
    screen.teardown()
    screen.deliver(FetchResult.success(transit_response))

    assert renderer.calls == 0
    assert surface.polylines == []
    with pytest.raises(asyncio.CancelledError):
        await task


@pytest.mark.asyncio
async def test_appear_after_teardown_is_an_error(ok_provider):
    screen = make_screen(ok_provider, InMemoryMapSurface())
    screen.teardown()

    with pytest.raises(RuntimeError):
        screen.appear()


@pytest.mark.asyncio
async def test_deliver_from_worker_thread_renders_on_loop_thread(transit_response):
    provider = HangingProvider()
    renderer = CountingRenderer()
    surface = InMemoryMapSurface()
    screen = make_screen(provider, surface, renderer)
    screen.appear()
    await asyncio.sleep(0)

    await asyncio.to_thread(screen.deliver, FetchResult.success(transit_response))
    await asyncio.sleep(0)

    assert screen.state is ScreenState.RENDERED
    assert renderer.threads == [threading.get_ident()]
    assert len(surface.polylines) == 2

    # The hanging fetch finishing later does not render a second time.
    provider.response = transit_response
    provider.release.set()
    await screen.appear()
    assert renderer.calls == 1


@pytest.mark.asyncio
async def test_collected_surface_turns_render_into_no_op(ok_provider):
    surface = InMemoryMapSurface()
    renderer = CountingRenderer()
    screen = make_screen(ok_provider, surface, renderer)
    del surface
    gc.collect()

    await screen.appear()

    assert screen.surface is None
    assert renderer.calls == 1


def test_surface_handle_invalidate():
    surface = InMemoryMapSurface(height=640)
    handle = SurfaceHandle(surface)

    assert handle.is_valid
    assert handle.viewport_height == 640
    handle.invalidate()
    handle.clear()

    assert not handle.is_valid
    assert handle.viewport_height == 640
    assert surface.clear_count == 0


@pytest.mark.parametrize(
    "error,fragment",
    [
        (ConfigurationError("no key"), "API key"),
        (MissingRouteError("none"), "No transit route"),
        (MalformedResponseError("bad"), "could not be read"),
        (TransportError("denied", api_status="REQUEST_DENIED"), "REQUEST_DENIED"),
        (TransportError("offline"), "connection"),
    ],
)
def test_banner_messages(error, fragment):
    assert fragment in banner_for(error)


@pytest.mark.asyncio
async def test_empty_step_path_fails_screen_with_typed_error(stub_provider, build_payload, build_step):
    response = parse_directions_payload(build_payload([build_step("WALKING", polyline="")]))
    surface = FoliumMapSurface(MapConfig())
    screen = make_screen(stub_provider(response=response), surface, RouteRenderer(MapConfig()))

    await screen.appear()

    assert screen.state is ScreenState.FAILED
    assert isinstance(screen.error, MalformedResponseError)
    assert screen.error.field_path == "routes.0.legs.0.steps.0.polyline"
    assert surface.polyline_count == 0


@pytest.mark.asyncio
async def test_surface_failure_during_render_fails_screen(ok_provider, monkeypatch):
    def broken_marker(*args, **kwargs):
        raise ValueError("bad marker options")

    monkeypatch.setattr(folium, "Marker", broken_marker)
    surface = FoliumMapSurface(MapConfig())
    screen = make_screen(ok_provider, surface, RouteRenderer(MapConfig()))

    await screen.appear()

    assert screen.state is ScreenState.FAILED
    assert isinstance(screen.error, RenderingError)
    assert screen.error.renderer_type == "folium"
    assert screen.banner_message == "The route could not be drawn on the map."
