"""Domain layer - Core value types and errors.

This module contains immutable domain models and typed errors
used throughout the client. No external dependencies.
"""

from .errors import (
    ClientError,
    ConfigurationError,
    ErrorKind,
    GeocodingError,
    InvalidResponseError,
    NetworkError,
    PreconditionError,
    ProviderError,
    ValidationError,
)
from .models import (
    DEFAULT_MAP_LINK_TEMPLATES,
    BoundingBox,
    CandidatesOutcome,
    GeocodeOutcome,
    GeocodeQuery,
    GeoLocation,
    Location,
    MapService,
    ReverseGeocodeQuery,
)

__all__ = [
    # Models
    "GeoLocation",
    "GeocodeQuery",
    "ReverseGeocodeQuery",
    "BoundingBox",
    "Location",
    "MapService",
    "DEFAULT_MAP_LINK_TEMPLATES",
    "GeocodeOutcome",
    "CandidatesOutcome",
    # Errors
    "ErrorKind",
    "GeocodingError",
    "ClientError",
    "ValidationError",
    "NetworkError",
    "InvalidResponseError",
    "ProviderError",
    "PreconditionError",
    "ConfigurationError",
]
