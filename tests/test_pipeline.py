"""Integration tests for the high-level pipeline helper."""

from transitmap.config import AppConfig, DirectionsConfig
from transitmap.container import Container
from transitmap.domain.places import KnownPlace
from transitmap.pipeline import show_transit_directions
from transitmap.ports.directions import DirectionsProviderPort


def make_container(provider, tmp_path):
    config = AppConfig(directions=DirectionsConfig(api_key="k"), output_dir=tmp_path)
    container = Container.create_default(config)
    container.register(DirectionsProviderPort, lambda: provider)
    return container


def test_show_transit_directions_saves_map(ok_provider, tmp_path):
    container = make_container(ok_provider, tmp_path)

    message = show_transit_directions(
        KnownPlace.MEDGAR_EVERS_COLLEGE.value,
        KnownPlace.TIMES_SQUARE.value,
        container=container,
    )

    output = tmp_path / "transit_map.html"
    assert "2 steps" in message
    assert f"Map saved to: {output}" in message
    assert output.exists()
    assert ok_provider.calls[0].alternatives is True


def test_show_transit_directions_custom_output(ok_provider, tmp_path):
    output = tmp_path / "custom" / "map.html"

    message = show_transit_directions(
        "place_id:A",
        "place_id:B",
        map_output_html=output,
        container=make_container(ok_provider, tmp_path),
    )

    assert str(output) in message
    assert output.exists()


def test_show_transit_directions_reports_failure(failing_provider, tmp_path):
    message = show_transit_directions(
        "place_id:A",
        "place_id:B",
        container=make_container(failing_provider, tmp_path),
    )

    assert message.startswith("Error: ")
    assert "HTTP 503" in message
    assert not (tmp_path / "transit_map.html").exists()
