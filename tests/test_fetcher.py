"""Tests for the directions fetcher result union."""

import asyncio

import pytest

from transitmap.domain.errors import (
    ConfigurationError,
    MalformedResponseError,
    MissingRouteError,
    TransportError,
)
from transitmap.domain.places import default_query
from transitmap.services import DirectionsFetcher


@pytest.mark.asyncio
async def test_success_wraps_response(ok_provider, transit_response):
    result = await DirectionsFetcher(ok_provider).fetch(default_query())

    assert result.is_success
    assert result.response is transit_response
    assert ok_provider.calls == [default_query()]


@pytest.mark.asyncio
@pytest.mark.parametrize(
    "error",
    [
        TransportError("down", status_code=502),
        MalformedResponseError("bad body"),
        MissingRouteError("no route", api_status="ZERO_RESULTS"),
        ConfigurationError("no key"),
    ],
)
async def test_typed_errors_become_failures(stub_provider, error):
    provider = stub_provider(error=error)

    result = await DirectionsFetcher(provider).fetch(default_query())

    assert not result.is_success
    assert result.error is error
    assert len(provider.calls) == 1


@pytest.mark.asyncio
async def test_programming_errors_propagate(stub_provider):
    provider = stub_provider(error=KeyError("routes"))

    with pytest.raises(KeyError):
        await DirectionsFetcher(provider).fetch(default_query())


@pytest.mark.asyncio
async def test_cancellation_propagates():
    class HangingProvider:
        async def get_directions(self, query):
            await asyncio.Event().wait()

    task = asyncio.ensure_future(DirectionsFetcher(HangingProvider()).fetch(default_query()))
    await asyncio.sleep(0)
    task.cancel()

    with pytest.raises(asyncio.CancelledError):
        await task
