"""Ports layer - Abstract interfaces (Protocols) for the client.

Ports define the contracts between the client core and external
adapters. They enable dependency injection and make the client testable.

This module follows the Hexagonal Architecture pattern:
- Input ports: How the client is driven (GeocoderPort)
- Output ports: How the client drives the provider (HttpTransportPort)
"""

from .geocoding import GeocoderPort
from .transport import HttpTransportPort, TransportResponse

__all__ = [
    # Geocoding
    "GeocoderPort",
    # Transport
    "HttpTransportPort",
    "TransportResponse",
]
