"""Geocoding port - Abstraction for address and coordinate lookups.

This protocol is what presentation code depends on. Every operation
returns either a result or a ``ClientError``; none of them raise for
runtime failures.
"""

from __future__ import annotations

from typing import TYPE_CHECKING, Optional, Protocol

if TYPE_CHECKING:
    from ..domain.models import CandidatesOutcome, GeocodeOutcome


class GeocoderPort(Protocol):
    """Port for geocoding services.

    Implementation: services/geocoding_client.py
    """

    def geocode(self, address: str, language: Optional[str] = None) -> GeocodeOutcome:
        """Geocode an address to its best matching Location.

        Args:
            address: Free-text address (e.g., "1600 Pennsylvania Avenue NW").
            language: Optional language code for the results.

        Returns:
            The first candidate Location, or a ClientError.
        """
        ...

    def geocode_candidates(
        self, address: str, language: Optional[str] = None
    ) -> CandidatesOutcome:
        """Geocode an address, keeping every candidate the provider sent.

        Returns:
            A non-empty tuple of Locations in provider order, or a ClientError.
        """
        ...

    def reverse_geocode(
        self, latitude: float, longitude: float, language: Optional[str] = None
    ) -> GeocodeOutcome:
        """Reverse geocode coordinates to place information.

        Args:
            latitude: Latitude in [-90, 90].
            longitude: Longitude in [-180, 180].
            language: Optional language code for the results.

        Returns:
            The Location at those coordinates, or a ClientError.
        """
        ...
