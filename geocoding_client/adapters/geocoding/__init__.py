"""Geocoding adapters - Provider-specific response handling.

Available implementations:
- MapsCoResponseDecoder: Decodes Maps.co (Nominatim-shaped) payloads
"""

from .response_decoder import MapsCoResponseDecoder, normalize_address

__all__ = ["MapsCoResponseDecoder", "normalize_address"]
