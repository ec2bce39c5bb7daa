"""Tests for the geocoding client orchestration."""

import math
import threading

import pytest

from geocoding_client.adapters.transport import StaticTransport
from geocoding_client.domain.errors import (
    ClientError,
    ConfigurationError,
    ErrorKind,
    InvalidResponseError,
    NetworkError,
    ProviderError,
    ValidationError,
)
from geocoding_client.domain.models import Location
from geocoding_client.ports.transport import TransportResponse
from geocoding_client.services import GeocodingClient

WHITE_HOUSE = {
    "place_id": 307227917,
    "licence": "Data © OpenStreetMap contributors, ODbL 1.0.",
    "osm_type": "way",
    "osm_id": 238241022,
    "lat": "38.897",
    "lon": "-77.036",
    "display_name": "The White House",
    "address": {"road": "Pennsylvania Avenue Northwest", "city": "Washington"},
}


def make_client(transport, **kwargs):
    return GeocodingClient(api_key="test-key", transport=transport, **kwargs)


class TestConstruction:
    @pytest.mark.parametrize("api_key", ["", "   ", None])
    def test_api_key_is_required(self, api_key):
        with pytest.raises(ConfigurationError) as excinfo:
            GeocodingClient(api_key=api_key, transport=StaticTransport())
        assert excinfo.value.setting_name == "api_key"

    def test_api_key_not_in_repr(self):
        client = GeocodingClient(api_key="super-secret", transport=StaticTransport())
        assert "super-secret" not in repr(client)

    def test_client_is_immutable(self):
        client = make_client(StaticTransport())
        with pytest.raises(AttributeError):
            client.api_key = "other"  # type: ignore[misc]


class TestGeocode:
    def test_sends_one_request_with_address_and_key(self):
        transport = StaticTransport.json_reply([WHITE_HOUSE])
        client = make_client(transport)

        result = client.geocode("  1600 Pennsylvania Avenue NW  ")

        assert isinstance(result, Location)
        assert result.display_name == "The White House"
        assert transport.call_count == 1
        request = transport.calls[0]
        assert request.endpoint == "search"
        assert request.params == {"q": "1600 Pennsylvania Avenue NW", "api_key": "test-key"}

    @pytest.mark.parametrize("address", ["", "   ", "\n\t"])
    def test_blank_address_makes_no_request(self, address):
        transport = StaticTransport.json_reply([WHITE_HOUSE])

        result = make_client(transport).geocode(address)

        assert isinstance(result, ValidationError)
        assert result.kind is ErrorKind.VALIDATION
        assert transport.call_count == 0

    def test_language_is_forwarded(self):
        transport = StaticTransport.json_reply([WHITE_HOUSE])

        make_client(transport, language="en").geocode("Paris")
        make_client(transport, language="en").geocode("Paris", language="fr")

        assert transport.calls[0].params["accept-language"] == "en"
        assert transport.calls[1].params["accept-language"] == "fr"

    def test_no_results(self):
        result = make_client(StaticTransport.json_reply([])).geocode("Nowhere at all")

        assert isinstance(result, ProviderError)
        assert result.message == "no results found"

    def test_network_failure_is_returned(self):
        failure = NetworkError("Timed out while calling search", endpoint="search")
        transport = StaticTransport.failing(failure)

        result = make_client(transport).geocode("Paris")

        assert result is failure
        assert result.kind is ErrorKind.NETWORK
        assert transport.call_count == 1

    def test_malformed_body_is_returned(self):
        result = make_client(StaticTransport.raw_reply(b'"{lat":')).geocode("Paris")

        assert isinstance(result, InvalidResponseError)

    def test_deeply_nested_body_is_returned_as_invalid_response(self):
        transport = StaticTransport.raw_reply(b"[" * 100000 + b"]" * 100000)

        result = make_client(transport).geocode("Paris")

        assert isinstance(result, InvalidResponseError)
        assert result.message == "malformed payload"

    def test_first_candidate_wins_over_later_junk(self):
        transport = StaticTransport.json_reply(
            [{"lat": "1", "lon": "2", "display_name": "ok"}, "junk"]
        )

        result = make_client(transport).geocode("Paris")

        assert isinstance(result, Location)
        assert (result.latitude, result.longitude) == (1.0, 2.0)

    def test_same_address_twice_gives_equal_locations(self):
        transport = StaticTransport.json_reply([WHITE_HOUSE])
        client = make_client(transport)

        first = client.geocode("1600 Pennsylvania Avenue NW")
        second = client.geocode("1600 Pennsylvania Avenue NW")

        assert isinstance(first, Location)
        assert first == second
        assert first is not second
        assert transport.call_count == 2

    def test_replies_are_consumed_in_order(self):
        transport = StaticTransport(
            replies=[
                TransportResponse(200, b"[]"),
                TransportResponse(200, b'[{"lat": "1", "lon": "2", "display_name": "Found"}]'),
            ]
        )
        client = make_client(transport)

        assert isinstance(client.geocode("a"), ProviderError)
        assert client.geocode("a").display_name == "Found"


class TestGeocodeCandidates:
    def test_returns_every_candidate(self):
        other = dict(WHITE_HOUSE, display_name="Another match")
        transport = StaticTransport.json_reply([WHITE_HOUSE, other])

        result = make_client(transport).geocode_candidates("White House")

        assert [location.display_name for location in result] == ["The White House", "Another match"]
        assert transport.calls[0].endpoint == "search"

    def test_blank_address_makes_no_request(self):
        transport = StaticTransport.json_reply([WHITE_HOUSE])

        result = make_client(transport).geocode_candidates(" ")

        assert isinstance(result, ValidationError)
        assert transport.call_count == 0

    def test_network_failure_is_returned(self):
        result = make_client(StaticTransport.failing()).geocode_candidates("Paris")

        assert isinstance(result, NetworkError)


class TestReverseGeocode:
    def test_sends_coordinates(self):
        transport = StaticTransport.json_reply(WHITE_HOUSE)

        result = make_client(transport).reverse_geocode(38.897, -77.036)

        assert isinstance(result, Location)
        assert result.latitude == 38.897
        request = transport.calls[0]
        assert request.endpoint == "reverse"
        assert request.params == {"lat": "38.897", "lon": "-77.036", "api_key": "test-key"}

    @pytest.mark.parametrize(
        "latitude, longitude",
        [
            (90.5, 0.0),
            (-90.01, 0.0),
            (0.0, 180.01),
            (0.0, -200.0),
            (1000.0, 1000.0),
            (math.nan, 0.0),
            (0.0, math.inf),
            (-math.inf, 0.0),
        ],
    )
    def test_invalid_coordinates_make_no_request(self, latitude, longitude):
        transport = StaticTransport.json_reply(WHITE_HOUSE)

        result = make_client(transport).reverse_geocode(latitude, longitude)

        assert isinstance(result, ValidationError)
        assert transport.call_count == 0

    def test_boundaries_are_valid(self):
        transport = StaticTransport.json_reply(WHITE_HOUSE)
        client = make_client(transport)

        for latitude, longitude in [(90.0, 180.0), (-90.0, -180.0)]:
            assert isinstance(client.reverse_geocode(latitude, longitude), Location)
        assert transport.call_count == 2

    def test_provider_error_for_open_sea(self):
        transport = StaticTransport.json_reply({"error": "Unable to geocode"})

        result = make_client(transport).reverse_geocode(0.0, -30.0)

        assert isinstance(result, ProviderError)
        assert result.message == "Unable to geocode"


def test_concurrent_calls_share_one_client():
    transport = StaticTransport.json_reply([WHITE_HOUSE])
    client = make_client(transport)
    results = []
    lock = threading.Lock()

    def worker():
        outcome = client.geocode("White House")
        with lock:
            results.append(outcome)

    threads = [threading.Thread(target=worker) for _ in range(8)]
    for thread in threads:
        thread.start()
    for thread in threads:
        thread.join()

    assert transport.call_count == 8
    assert all(isinstance(r, Location) and not isinstance(r, ClientError) for r in results)
    assert all(r == results[0] for r in results)
