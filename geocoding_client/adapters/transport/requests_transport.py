"""HTTP transport built on a requests Session.

One GET per call, bounded by a timeout, never retried. Non-2xx statuses
come back as ordinary responses; only failures to obtain a response at
all are turned into ``NetworkError``.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass, field
from typing import Mapping
from urllib.parse import quote_plus

import requests

from ...config import GeocodingConfig
from ...domain.errors import ConfigurationError, NetworkError
from ...ports.transport import TransportResponse

# Query parameters that must never reach logs or error messages.
SECRET_PARAMS = frozenset({"api_key"})


def redact_url(url: str, params: Mapping[str, str]) -> str:
    """Replace credential values in a URL with a placeholder."""
    for name in SECRET_PARAMS:
        secret = params.get(name)
        if secret:
            url = url.replace(quote_plus(secret), "***")
            url = url.replace(secret, "***")
    return url


def _describe_failure(error: requests.exceptions.RequestException) -> str:
    if isinstance(error, requests.exceptions.Timeout):
        return "Timed out"
    if isinstance(error, requests.exceptions.SSLError):
        return "TLS error"
    if isinstance(error, requests.exceptions.ConnectionError):
        return "Connection failed"
    return "Request failed"


@dataclass
class RequestsTransport:
    """Synchronous transport for the provider's REST endpoints.

    This adapter implements HttpTransportPort.

    Attributes:
        base_url: Provider root URL, endpoints are appended to it
        timeout_seconds: Upper bound for connect and read
        user_agent: Value of the User-Agent header
        session: Shared requests session (connection pooling)
    """

    base_url: str = "https://geocode.maps.co"
    timeout_seconds: float = 10.0
    user_agent: str = "geocoding-client"
    session: requests.Session = field(default_factory=requests.Session, repr=False)

    _logger: logging.Logger = field(init=False, repr=False)

    def __post_init__(self) -> None:
        self._logger = logging.getLogger(__name__)
        if not self.timeout_seconds or self.timeout_seconds <= 0:
            raise ConfigurationError(
                f"Timeout must be positive, got {self.timeout_seconds}",
                setting_name="timeout_seconds",
                expected_type="float > 0",
            )

    @classmethod
    def from_config(cls, config: GeocodingConfig) -> RequestsTransport:
        return cls(
            base_url=config.base_url,
            timeout_seconds=config.timeout_seconds,
            user_agent=config.user_agent,
        )

    def _url(self, endpoint: str) -> str:
        return f"{self.base_url.rstrip('/')}/{endpoint.lstrip('/')}"

    def get(self, endpoint: str, params: Mapping[str, str]) -> TransportResponse:
        """Issue a GET request to a provider endpoint.

        Args:
            endpoint: Path below the base URL.
            params: Query parameters, credential included.

        Returns:
            Status code and raw body.

        Raises:
            NetworkError: On timeout, connection, DNS or TLS failure.
        """
        url = self._url(endpoint)
        self._logger.debug(
            "Sending provider request",
            extra={"endpoint": endpoint, "timeout": self.timeout_seconds},
        )

        try:
            response = self.session.get(
                url,
                params=dict(params),
                headers={"User-Agent": self.user_agent, "Accept": "application/json"},
                timeout=self.timeout_seconds,
            )
        except requests.exceptions.RequestException as e:
            # The exception text can carry the full URL, credential included.
            detail = redact_url(str(e), params)
            raise NetworkError(
                f"{_describe_failure(e)} while calling {endpoint}: {detail}",
                endpoint=endpoint,
            ) from e

        self._logger.debug(
            "Provider responded",
            extra={
                "endpoint": endpoint,
                "status_code": response.status_code,
                "bytes": len(response.content),
            },
        )

        return TransportResponse(
            status_code=response.status_code,
            body=response.content,
            url=redact_url(response.url or url, params),
        )
