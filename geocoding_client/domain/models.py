"""Immutable domain models for the geocoding client.

All models are frozen dataclasses with slots. Query values validate
themselves on construction and raise ``ValidationError``; the client
turns that into a returned error value before any request is made.
These models have no external dependencies.
"""

from __future__ import annotations

import math
from dataclasses import dataclass, field
from enum import Enum
from types import MappingProxyType
from typing import Any, Dict, Mapping, Optional, Tuple, Union

from .errors import ClientError, PreconditionError, ValidationError


class MapService(Enum):
    """Mapping services a Location can link to, in display order."""

    GOOGLE_MAPS = "google_maps"
    OPENSTREETMAP = "openstreetmap"
    APPLE_MAPS = "apple_maps"


DEFAULT_MAP_LINK_TEMPLATES: Mapping[str, str] = MappingProxyType(
    {
        MapService.GOOGLE_MAPS.value: "https://www.google.com/maps/search/?api=1&query={lat},{lon}",
        MapService.OPENSTREETMAP.value: "https://www.openstreetmap.org/search?query={lat},{lon}",
        MapService.APPLE_MAPS.value: "https://maps.apple.com/?q={lat},{lon}",
    }
)

# Address keys tried in order when asking a Location for its city.
CITY_KEYS: Tuple[str, ...] = ("city", "town", "village", "municipality", "hamlet")


def _is_finite_number(value: Any) -> bool:
    if isinstance(value, bool) or not isinstance(value, (int, float)):
        return False
    return math.isfinite(value)


def format_coordinate(value: float) -> str:
    """Render a coordinate in plain decimal notation (never ``1e-05``).

    Seven decimals is about one centimetre; trailing zeros are dropped.
    """
    text = f"{value:.7f}".rstrip("0").rstrip(".")
    if text in ("", "-0"):
        return "0"
    return text


@dataclass(frozen=True, slots=True)
class GeoLocation:
    """GPS coordinates representing a geographic location."""

    latitude: float
    longitude: float

    def __post_init__(self) -> None:
        """Validate coordinate ranges."""
        if not _is_finite_number(self.latitude):
            raise ValidationError(
                f"Latitude must be a finite number, got {self.latitude!r}",
                field_name="latitude",
            )
        if not _is_finite_number(self.longitude):
            raise ValidationError(
                f"Longitude must be a finite number, got {self.longitude!r}",
                field_name="longitude",
            )
        if not -90 <= self.latitude <= 90:
            raise ValidationError(
                f"Latitude must be between -90 and 90, got {self.latitude}",
                field_name="latitude",
            )
        if not -180 <= self.longitude <= 180:
            raise ValidationError(
                f"Longitude must be between -180 and 180, got {self.longitude}",
                field_name="longitude",
            )


@dataclass(frozen=True, slots=True)
class GeocodeQuery:
    """A forward geocoding request.

    The address is stored trimmed; blank input is rejected.
    """

    address: str
    language: Optional[str] = None

    def __post_init__(self) -> None:
        if not isinstance(self.address, str) or not self.address.strip():
            raise ValidationError("Address must not be empty", field_name="address")
        object.__setattr__(self, "address", self.address.strip())

    def to_params(self) -> Dict[str, str]:
        params = {"q": self.address}
        if self.language:
            params["accept-language"] = self.language
        return params


@dataclass(frozen=True, slots=True)
class ReverseGeocodeQuery:
    """A reverse geocoding request for one coordinate pair."""

    location: GeoLocation
    language: Optional[str] = None

    @classmethod
    def from_coordinates(
        cls, latitude: float, longitude: float, language: Optional[str] = None
    ) -> ReverseGeocodeQuery:
        return cls(GeoLocation(latitude=latitude, longitude=longitude), language)

    def to_params(self) -> Dict[str, str]:
        params = {
            "lat": format_coordinate(self.location.latitude),
            "lon": format_coordinate(self.location.longitude),
        }
        if self.language:
            params["accept-language"] = self.language
        return params


@dataclass(frozen=True, slots=True)
class BoundingBox:
    """Rectangle describing the extent of a place.

    Attributes:
        min_lat: Southern edge
        max_lat: Northern edge
        min_lon: Western edge
        max_lon: Eastern edge
    """

    min_lat: float
    max_lat: float
    min_lon: float
    max_lon: float

    @property
    def center(self) -> GeoLocation:
        """Return the midpoint of the rectangle."""
        return GeoLocation(
            latitude=(self.min_lat + self.max_lat) / 2,
            longitude=(self.min_lon + self.max_lon) / 2,
        )

    def contains(self, location: GeoLocation) -> bool:
        """Check whether a point lies inside the rectangle (edges included)."""
        return (
            self.min_lat <= location.latitude <= self.max_lat
            and self.min_lon <= location.longitude <= self.max_lon
        )


@dataclass(frozen=True, slots=True)
class Location:
    """A successfully decoded geocoding result.

    Address component keys are the provider's machine tokens
    (``road``, ``house_number``, ``postcode``, ``country_code`` ...) in
    payload order. Turning them into labels is left to presentation code.

    Attributes:
        latitude: Latitude of the matched place
        longitude: Longitude of the matched place
        display_name: Provider-formatted full address
        address_components: Ordered, read-only component mapping (may be empty)
        place_id: Provider place identifier, if any
        osm_type: OpenStreetMap feature type (node/way/relation), if any
        osm_id: OpenStreetMap feature identifier, if any
        license_text: Attribution required by the provider, if any
        place_type: Feature type reported by the provider, if any
        category: Feature class reported by the provider, if any
        importance: Provider ranking score, if any
        bounding_box_value: Bounding rectangle, if the provider sent one;
            read it through ``bounding_box``
        raw_payload: The decoded payload this Location was built from
    """

    latitude: float
    longitude: float
    display_name: str
    address_components: Mapping[str, str] = field(
        default_factory=lambda: MappingProxyType({}), hash=False
    )
    place_id: Optional[str] = None
    osm_type: Optional[str] = None
    osm_id: Optional[str] = None
    license_text: Optional[str] = None
    place_type: Optional[str] = None
    category: Optional[str] = None
    importance: Optional[float] = None
    bounding_box_value: Optional[BoundingBox] = field(default=None, repr=False)
    raw_payload: Any = field(default=None, repr=False, hash=False)

    def __post_init__(self) -> None:
        if not isinstance(self.address_components, MappingProxyType):
            object.__setattr__(
                self,
                "address_components",
                MappingProxyType(dict(self.address_components)),
            )

    @property
    def coordinates(self) -> GeoLocation:
        return GeoLocation(latitude=self.latitude, longitude=self.longitude)

    def has_bounding_box(self) -> bool:
        """Check whether the provider sent a bounding rectangle."""
        return self.bounding_box_value is not None

    @property
    def bounding_box(self) -> BoundingBox:
        """Return the bounding rectangle.

        Raises:
            PreconditionError: If the Location has no bounding box; check
                ``has_bounding_box()`` first.
        """
        if self.bounding_box_value is None:
            raise PreconditionError(
                "Location has no bounding box; check has_bounding_box() first"
            )
        return self.bounding_box_value

    def map_links(
        self, templates: Optional[Mapping[str, str]] = None
    ) -> Dict[str, str]:
        """Build links to this place on each configured mapping service.

        Args:
            templates: Service name to URL template with ``{lat}`` and
                ``{lon}`` placeholders. Defaults to
                ``DEFAULT_MAP_LINK_TEMPLATES``.

        Returns:
            Service name to URL, ordered as ``MapService`` declares them.
            Services without a template are omitted.
        """
        if templates is None:
            templates = DEFAULT_MAP_LINK_TEMPLATES

        links: Dict[str, str] = {}
        for service in MapService:
            template = templates.get(service.value)
            if not template:
                continue
            links[service.value] = template.format(
                lat=format_coordinate(self.latitude),
                lon=format_coordinate(self.longitude),
            )
        return links

    def component(self, key: str) -> Optional[str]:
        """Return one address component, or None when absent."""
        return self.address_components.get(key)

    @property
    def city(self) -> Optional[str]:
        for key in CITY_KEYS:
            value = self.address_components.get(key)
            if value:
                return value
        return None

    @property
    def state(self) -> Optional[str]:
        return self.address_components.get("state") or self.address_components.get(
            "region"
        )

    @property
    def postcode(self) -> Optional[str]:
        return self.address_components.get("postcode")

    @property
    def country(self) -> Optional[str]:
        return self.address_components.get("country")

    @property
    def country_code(self) -> Optional[str]:
        return self.address_components.get("country_code")

    @property
    def road(self) -> Optional[str]:
        return self.address_components.get("road")

    @property
    def house_number(self) -> Optional[str]:
        return self.address_components.get("house_number")


# A lookup returns exactly one of these.
GeocodeOutcome = Union[Location, ClientError]
CandidatesOutcome = Union[Tuple[Location, ...], ClientError]
