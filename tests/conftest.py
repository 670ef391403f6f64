"""Shared fixtures: directions payloads and stub providers."""

import copy
import json
from pathlib import Path

import pytest

from transitmap.adapters.directions import parse_directions_payload
from transitmap.config import MapConfig, reset_config
from transitmap.container import reset_container
from transitmap.domain.errors import TransportError

DATA_DIR = Path(__file__).resolve().parent / "data"

WALK_POLYLINE = "_p~iF~ps|U_ulLnnqC"
TRANSIT_POLYLINE = "_p~iF~ps|U_ulLnnqC_mqNvxq`@"


def load_payload(name="directions_transit.json"):
    with (DATA_DIR / name).open(encoding="utf-8") as f:
        return json.load(f)


def make_step(mode="WALKING", color=None, polyline=WALK_POLYLINE):
    step = {
        "travel_mode": mode,
        "start_location": {"lat": 40.6664, "lng": -73.9571},
        "end_location": {"lat": 40.6707, "lng": -73.9580},
        "polyline": {"points": polyline},
    }
    if color is not None:
        step["transit_details"] = {"line": {"short_name": "2", "color": color}}
    return step


def make_payload(steps):
    payload = load_payload()
    payload["routes"][0]["legs"][0]["steps"] = steps
    return payload


class StubProvider:
    """Directions provider returning a canned response or raising."""

    def __init__(self, response=None, error=None):
        self.response = response
        self.error = error
        self.calls = []

    async def get_directions(self, query):
        self.calls.append(query)
        if self.error is not None:
            raise self.error
        return self.response


@pytest.fixture(autouse=True)
def fresh_config():
    reset_config()
    reset_container()
    yield
    reset_config()
    reset_container()


@pytest.fixture
def transit_payload():
    return copy.deepcopy(load_payload())


@pytest.fixture
def transit_response(transit_payload):
    return parse_directions_payload(transit_payload)


@pytest.fixture
def map_config():
    return MapConfig()


@pytest.fixture
def ok_provider(transit_response):
    return StubProvider(response=transit_response)


@pytest.fixture
def failing_provider():
    return StubProvider(
        error=TransportError("Directions request failed with HTTP 503", status_code=503)
    )


@pytest.fixture
def build_step():
    return make_step


@pytest.fixture
def build_payload():
    return make_payload


@pytest.fixture
def stub_provider():
    return StubProvider
