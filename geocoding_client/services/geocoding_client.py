"""Geocoding client - Orchestrates validation, transport and decoding.

Each operation validates its input, makes at most one provider request
and returns either a Location or a ClientError. The client holds only
its credential and collaborators, none of which change after
construction, so one instance can serve concurrent callers.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass, field
from typing import Dict, Optional, Union

from ..adapters.geocoding.response_decoder import MapsCoResponseDecoder
from ..domain.errors import (
    ClientError,
    ConfigurationError,
    NetworkError,
    ValidationError,
)
from ..domain.models import (
    CandidatesOutcome,
    GeocodeOutcome,
    GeocodeQuery,
    ReverseGeocodeQuery,
)
from ..ports.transport import HttpTransportPort, TransportResponse

SEARCH_ENDPOINT = "search"
REVERSE_ENDPOINT = "reverse"

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class GeocodingClient:
    """Client for forward and reverse geocoding.

    This service implements GeocoderPort.

    Attributes:
        api_key: Provider credential, sent with every request
        transport: Performs the HTTP call
        decoder: Turns responses into Locations or errors
        language: Default language for results, if any
    """

    api_key: str = field(repr=False)
    transport: HttpTransportPort
    decoder: MapsCoResponseDecoder = field(default_factory=MapsCoResponseDecoder)
    language: Optional[str] = None

    def __post_init__(self) -> None:
        if not isinstance(self.api_key, str) or not self.api_key.strip():
            raise ConfigurationError(
                "An API key is required to use the geocoding service",
                setting_name="api_key",
                expected_type="non-empty string",
            )

    def geocode(self, address: str, language: Optional[str] = None) -> GeocodeOutcome:
        """Geocode an address to its best matching Location.

        Only the provider's first candidate is kept; use
        ``geocode_candidates`` to see all of them.

        Args:
            address: Free-text address, must not be blank.
            language: Language for the results, overrides the default.

        Returns:
            The first candidate Location, or a ClientError.
        """
        try:
            query = GeocodeQuery(address, language or self.language)
        except ValidationError as e:
            logger.debug("Rejected geocode query", extra={"reason": e.message})
            return e

        response = self._send(SEARCH_ENDPOINT, query.to_params())
        if isinstance(response, NetworkError):
            return response

        result = self.decoder.decode(response)
        self._log_outcome(SEARCH_ENDPOINT, result)
        return result

    def geocode_candidates(
        self, address: str, language: Optional[str] = None
    ) -> CandidatesOutcome:
        """Geocode an address, keeping every candidate the provider sent.

        Args:
            address: Free-text address, must not be blank.
            language: Language for the results, overrides the default.

        Returns:
            A non-empty tuple of Locations in provider order, or a ClientError.
        """
        try:
            query = GeocodeQuery(address, language or self.language)
        except ValidationError as e:
            logger.debug("Rejected geocode query", extra={"reason": e.message})
            return e

        response = self._send(SEARCH_ENDPOINT, query.to_params())
        if isinstance(response, NetworkError):
            return response

        result = self.decoder.decode_candidates(response)
        self._log_outcome(SEARCH_ENDPOINT, result)
        return result

    def reverse_geocode(
        self, latitude: float, longitude: float, language: Optional[str] = None
    ) -> GeocodeOutcome:
        """Reverse geocode coordinates to place information.

        Args:
            latitude: Finite latitude in [-90, 90].
            longitude: Finite longitude in [-180, 180].
            language: Language for the results, overrides the default.

        Returns:
            The Location at those coordinates, or a ClientError.
        """
        try:
            query = ReverseGeocodeQuery.from_coordinates(
                latitude, longitude, language or self.language
            )
        except ValidationError as e:
            logger.debug("Rejected reverse geocode query", extra={"reason": e.message})
            return e

        response = self._send(REVERSE_ENDPOINT, query.to_params())
        if isinstance(response, NetworkError):
            return response

        result = self.decoder.decode(response)
        self._log_outcome(REVERSE_ENDPOINT, result)
        return result

    def _send(
        self, endpoint: str, params: Dict[str, str]
    ) -> Union[TransportResponse, NetworkError]:
        params["api_key"] = self.api_key
        try:
            return self.transport.get(endpoint, params)
        except NetworkError as e:
            logger.warning(
                "Geocoding request failed",
                extra={"endpoint": endpoint, "error": str(e)},
            )
            return e

    @staticmethod
    def _log_outcome(endpoint: str, result: object) -> None:
        if isinstance(result, ClientError):
            logger.debug(
                "Geocoding returned an error",
                extra={"endpoint": endpoint, "error_type": type(result).__name__},
            )
        else:
            logger.info("Geocoding succeeded", extra={"endpoint": endpoint})
