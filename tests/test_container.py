"""Tests for the dependency injection container."""

import pytest

from transitmap.adapters.directions import GoogleDirectionsAdapter
from transitmap.adapters.surface import FoliumMapSurface, InMemoryMapSurface
from transitmap.config import AppConfig, DirectionsConfig
from transitmap.container import Container, get_container, reset_container
from transitmap.domain.places import default_query
from transitmap.ports.directions import DirectionsProviderPort
from transitmap.ports.surface import MapSurfacePort
from transitmap.services import DirectionsFetcher, RouteRenderer, ScreenState, TransitScreen


@pytest.fixture
def container():
    return Container.create_default(AppConfig(directions=DirectionsConfig(api_key="k")))


def test_default_bindings(container):
    provider = container.resolve(DirectionsProviderPort)

    assert isinstance(provider, GoogleDirectionsAdapter)
    assert provider.config.api_key == "k"
    assert isinstance(container.resolve(DirectionsFetcher), DirectionsFetcher)
    assert isinstance(container.resolve(RouteRenderer), RouteRenderer)


def test_singletons_and_per_screen_surfaces(container):
    assert container.resolve(DirectionsFetcher) is container.resolve(DirectionsFetcher)

    first = container.resolve(MapSurfacePort)
    second = container.resolve(MapSurfacePort)
    assert isinstance(first, FoliumMapSurface)
    assert first is not second


def test_unregistered_type_raises():
    with pytest.raises(KeyError):
        Container(config=AppConfig()).resolve(DirectionsFetcher)


def test_register_overrides_binding(container, ok_provider):
    container.register(DirectionsProviderPort, lambda: ok_provider)

    assert container.resolve(DirectionsFetcher).provider is ok_provider


@pytest.mark.asyncio
async def test_create_screen_wires_services(container, ok_provider):
    container.register(DirectionsProviderPort, lambda: ok_provider)
    surface = InMemoryMapSurface()

    screen = container.create_screen(default_query(), surface)
    await screen.appear()

    assert isinstance(screen, TransitScreen)
    assert screen.state is ScreenState.RENDERED
    assert len(surface.markers) == 4


def test_global_container_reset():
    first = get_container()

    assert get_container() is first
    reset_container()
    assert get_container() is not first


def test_clear_all(container):
    container.clear_all()

    assert not container.is_registered(DirectionsFetcher)


def test_reregister_drops_shared_instance(container, ok_provider, failing_provider):
    container.register(DirectionsProviderPort, lambda: ok_provider)
    assert container.resolve(DirectionsProviderPort) is ok_provider

    container.register(DirectionsProviderPort, lambda: failing_provider)
    assert container.resolve(DirectionsProviderPort) is failing_provider


def test_clear_singletons_rebuilds_on_next_lookup(container):
    first = container.resolve(RouteRenderer)
    container.clear_singletons()

    assert container.resolve(RouteRenderer) is not first
