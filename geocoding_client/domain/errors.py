"""Typed domain errors for the geocoding client.

Every failure of a lookup is described by a ``ClientError`` subclass.
The client operations return these values instead of raising them, so
callers branch on ``isinstance`` (or on ``error.kind``). They are still
exceptions, so a caller that prefers exceptions can simply ``raise`` one.

``PreconditionError`` and ``ConfigurationError`` are programming or
setup mistakes and are always raised.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from enum import Enum
from typing import Any, ClassVar, Optional


class ErrorKind(Enum):
    """Discriminator for the failure categories of a lookup."""

    VALIDATION = "validation"
    NETWORK = "network"
    INVALID_RESPONSE = "invalid_response"
    PROVIDER = "provider"


@dataclass
class GeocodingError(Exception):
    """Base error for the geocoding client.

    Attributes:
        message: Human-readable error description
        cause: Optional underlying exception that caused this error
    """

    message: str
    cause: Optional[Exception] = field(default=None, repr=False, compare=False)

    def __str__(self) -> str:
        if self.cause:
            return f"{self.message}: {self.cause}"
        return self.message

    def __post_init__(self) -> None:
        super().__init__(self.message)


@dataclass
class ClientError(GeocodingError):
    """A lookup failure returned to the caller in place of a Location.

    Attributes:
        raw_payload: Decoded response body, when one was available
        status_code: HTTP status of the response, when one was received
    """

    kind: ClassVar[ErrorKind]

    raw_payload: Any = field(default=None, repr=False)
    status_code: Optional[int] = None

    @property
    def detail(self) -> str:
        """Alias of ``message`` used by presentation code."""
        return self.message


@dataclass
class ValidationError(ClientError):
    """A local precondition on the query failed; no request was made.

    Attributes:
        field_name: The offending input ("address", "latitude", ...)
    """

    kind: ClassVar[ErrorKind] = ErrorKind.VALIDATION

    field_name: str = ""


@dataclass
class NetworkError(ClientError):
    """The transport could not complete the request.

    Covers timeouts, refused connections, DNS and TLS failures.

    Attributes:
        endpoint: Provider endpoint that was being called
    """

    kind: ClassVar[ErrorKind] = ErrorKind.NETWORK

    endpoint: str = ""


@dataclass
class InvalidResponseError(ClientError):
    """The body was not JSON, or not shaped like any provider answer."""

    kind: ClassVar[ErrorKind] = ErrorKind.INVALID_RESPONSE


@dataclass
class ProviderError(ClientError):
    """The provider reported an error or returned no usable result."""

    kind: ClassVar[ErrorKind] = ErrorKind.PROVIDER


@dataclass
class PreconditionError(GeocodingError):
    """A documented contract on a decoded Location was violated.

    Raised, for example, when reading the bounding box of a Location
    that has none. This is a programming error, not a runtime condition.
    """


@dataclass
class ConfigurationError(GeocodingError):
    """Invalid or missing configuration.

    Attributes:
        setting_name: Name of the problematic setting
        expected_type: Expected type or format
    """

    setting_name: str = ""
    expected_type: Optional[str] = None
