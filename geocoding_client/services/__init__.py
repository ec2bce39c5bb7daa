"""Services layer - Client orchestration.

Available services:
- GeocodingClient: Forward and reverse geocoding against Maps.co
"""

from .geocoding_client import GeocodingClient

__all__ = ["GeocodingClient"]
