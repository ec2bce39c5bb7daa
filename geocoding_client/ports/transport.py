"""Transport port - Abstraction for the outbound HTTP call.

The transport performs exactly one GET against the provider and hands
back the status and body untouched. Interpreting the body, including
non-2xx statuses, is the decoder's job.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Mapping, Protocol


@dataclass(frozen=True, slots=True)
class TransportResponse:
    """Raw answer from the provider.

    Attributes:
        status_code: HTTP status code
        body: Undecoded response body
        url: Final request URL with the credential removed
    """

    status_code: int
    body: bytes
    url: str = ""

    @property
    def is_success(self) -> bool:
        return 200 <= self.status_code < 300


class HttpTransportPort(Protocol):
    """Port for the provider HTTP call.

    Implementations:
    - adapters/transport/requests_transport.py (RequestsTransport) - Production
    - adapters/transport/static_transport.py (StaticTransport) - Testing
    """

    def get(self, endpoint: str, params: Mapping[str, str]) -> TransportResponse:
        """Issue a GET request to a provider endpoint.

        Args:
            endpoint: Path below the provider base URL ("search", "reverse").
            params: Query parameters, credential included.

        Returns:
            The status and body, whatever the status is.

        Raises:
            NetworkError: If no response could be obtained (timeout,
                refused connection, DNS or TLS failure).
        """
        ...
