"""Tests for the command-line tester."""

import io
import json

import pytest

from geocoding_client import cli
from geocoding_client.adapters.transport import StaticTransport
from geocoding_client.config import reset_config
from geocoding_client.domain.models import BoundingBox, Location
from geocoding_client.services import GeocodingClient

PAYLOAD = {
    "lat": "38.897",
    "lon": "-77.036",
    "display_name": "The White House",
    "place_id": 1,
    "osm_type": "way",
    "osm_id": 238241022,
    "licence": "ODbL 1.0",
    "boundingbox": ["38.89", "38.90", "-77.04", "-77.03"],
    "address": {"road": "Pennsylvania Avenue Northwest", "postal_code": "20500"},
}


def run_cli(argv, transport):
    args = cli.build_parser().parse_args(argv)
    client = GeocodingClient(api_key="test-key", transport=transport)
    out = io.StringIO()
    status = cli.run(args, client, out=out)
    return status, out.getvalue()


def test_humanize_component():
    assert cli.humanize_component("postal_code") == "Postal Code"
    assert cli.humanize_component("road") == "Road"


def test_forward_report():
    status, output = run_cli(["forward", "1600 Pennsylvania Avenue NW"], StaticTransport.json_reply([PAYLOAD]))

    assert status == 0
    assert "Display Name:    The White House" in output
    assert "Postal Code: 20500" in output
    assert "OSM ID:   238241022" in output
    assert "Min Latitude:  38.89" in output
    assert "38.897,-77.036" in output
    assert "Raw Response Data" not in output


def test_reverse_report_with_debug():
    transport = StaticTransport.json_reply(PAYLOAD)

    status, output = run_cli(["--debug", "reverse", "38.897", "-77.036"], transport)

    assert status == 0
    assert transport.calls[0].endpoint == "reverse"
    assert "Raw Response Data:" in output
    assert '"display_name": "The White House"' in output


def test_report_without_components_or_bbox():
    location = Location(latitude=1.0, longitude=2.0, display_name="Somewhere")

    output = cli.format_location(location)

    assert "No detailed address components available." in output
    assert "Bounding Box" not in output


def test_report_bounding_box_values():
    location = Location(
        latitude=1.0,
        longitude=2.0,
        display_name="Somewhere",
        bounding_box_value=BoundingBox(0.5, 1.5, 1.5, 2.5),
    )

    output = cli.format_location(location, map_templates={})

    assert "Max Longitude: 2.5" in output
    assert "Map Links" not in output


def test_all_candidates():
    other = dict(PAYLOAD, display_name="Second")
    status, output = run_cli(["forward", "White House", "--all"], StaticTransport.json_reply([PAYLOAD, other]))

    assert status == 0
    assert "--- Result 1 of 2 ---" in output
    assert "Display Name:    Second" in output


@pytest.mark.parametrize(
    "argv, transport, expected",
    [
        (["forward", "   "], StaticTransport.json_reply([]), "Error [validation]"),
        (["forward", "Nowhere"], StaticTransport.json_reply([]), "Error [provider]: no results found"),
        (["reverse", "95", "0"], StaticTransport.json_reply({}), "Error [validation]"),
        (["forward", "Paris"], StaticTransport.failing(), "Error [network]"),
        (["forward", "Paris", "--all"], StaticTransport.raw_reply("oops"), "Error [invalid_response]: malformed payload"),
    ],
)
def test_errors_exit_with_one(argv, transport, expected):
    status, output = run_cli(argv, transport)

    assert status == 1
    assert output.startswith(expected)


def test_main_without_api_key(monkeypatch, capsys):
    monkeypatch.delenv("GEO_API_KEY", raising=False)
    reset_config()

    status = cli.main(["forward", "Paris"])

    assert status == 2
    assert "GEO_API_KEY" in capsys.readouterr().err
    reset_config()


def test_main_with_unknown_log_level(monkeypatch, capsys):
    monkeypatch.setenv("GEO_API_KEY", "k")
    monkeypatch.setenv("GEO_LOG_LEVEL", "verbose")
    reset_config()

    status = cli.main(["forward", "Paris"])

    assert status == 2
    assert "Configuration error" in capsys.readouterr().err
    reset_config()


def test_raw_payload_is_json_serializable():
    transport = StaticTransport.json_reply([PAYLOAD])
    client = GeocodingClient(api_key="k", transport=transport)

    location = client.geocode("x")

    assert json.loads(json.dumps(location.raw_payload)) == [PAYLOAD]
