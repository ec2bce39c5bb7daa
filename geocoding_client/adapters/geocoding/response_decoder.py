"""Decoder for Maps.co geocoding responses.

Maps.co answers in the OpenStreetMap Nominatim JSON shape:

- ``/search`` returns a JSON array of candidate objects,
- ``/reverse`` returns one object,
- errors come back as ``{"error": "..."}`` (sometimes with a non-2xx
  status, sometimes with 200).

A candidate object looks like::

    {
        "place_id": 307227917,
        "licence": "Data (c) OpenStreetMap contributors, ODbL 1.0. ...",
        "osm_type": "way",
        "osm_id": 238241022,
        "boundingbox": ["38.8974908", "38.8982931", "-77.0368537", "-77.0362519"],
        "lat": "38.897699700000004",
        "lon": "-77.03655315",
        "display_name": "White House, 1600, Pennsylvania Avenue Northwest, ...",
        "class": "office",
        "type": "government",
        "importance": 0.6347,
        "address": {"road": "Pennsylvania Avenue Northwest", "postcode": "20500", ...}
    }
"""

from __future__ import annotations

import json
import logging
import math
from dataclasses import dataclass, field
from typing import Any, Dict, List, Mapping, Optional, Tuple, Union

from ...domain.errors import ClientError, InvalidResponseError, ProviderError
from ...domain.models import (
    BoundingBox,
    CandidatesOutcome,
    GeocodeOutcome,
    Location,
)
from ...ports.transport import TransportResponse

NO_RESULTS = "no results found"
INCOMPLETE = "incomplete location data"
MALFORMED = "malformed payload"
NOT_AN_OBJECT = "result entries are not objects"


class _IncompleteCandidate(Exception):
    """A candidate object lacks a required field."""


def _to_float(value: Any) -> Optional[float]:
    """Parse a provider number (often sent as a string); None if unusable."""
    if isinstance(value, bool) or value is None:
        return None
    try:
        number = float(value)
    except (TypeError, ValueError):
        return None
    if not math.isfinite(number):
        return None
    return number


def _to_identifier(value: Any) -> Optional[str]:
    if value is None or isinstance(value, (bool, dict, list)):
        return None
    text = str(value).strip()
    return text or None


def _error_message(value: Any) -> str:
    """Pull a message out of the provider's ``error`` field."""
    if isinstance(value, dict):
        message = value.get("message") or value.get("description")
        if message:
            return str(message)
        return json.dumps(value, sort_keys=True)
    text = str(value).strip() if value is not None else ""
    return text or "provider reported an error"


def normalize_address(raw: Any) -> Dict[str, str]:
    """Normalize the provider's address breakdown.

    Keys are kept as sent. Values become stripped strings; numbers are
    rendered as text; empty, null and nested values are dropped.
    """
    if not isinstance(raw, dict):
        return {}

    components: Dict[str, str] = {}
    for key, value in raw.items():
        if value is None or isinstance(value, (bool, dict, list)):
            continue
        text = str(value).strip()
        if text:
            components[str(key)] = text
    return components


@dataclass
class MapsCoResponseDecoder:
    """Turns transport responses into Locations or ClientErrors.

    The decoder is stateless apart from its logger and may be shared by
    any number of concurrent callers.
    """

    _logger: logging.Logger = field(init=False, repr=False)

    def __post_init__(self) -> None:
        self._logger = logging.getLogger(__name__)

    def decode(self, response: TransportResponse) -> GeocodeOutcome:
        """Decode a response into a single Location.

        A collection (forward geocoding) yields its first candidate. The
        Location keeps the whole decoded payload as ``raw_payload``.

        Args:
            response: Status and body from the transport.

        Returns:
            The Location, or the ClientError describing why there is none.
        """
        checked = self._checked_payload(response)
        if isinstance(checked, ClientError):
            return checked

        payload, items = checked
        if not isinstance(items[0], dict):
            return InvalidResponseError(
                NOT_AN_OBJECT, raw_payload=payload, status_code=response.status_code
            )
        try:
            return self._location_from_item(items[0], raw_payload=payload)
        except _IncompleteCandidate as e:
            self._logger.warning(
                "Provider result is missing required fields",
                extra={"missing": str(e), "status_code": response.status_code},
            )
            return ProviderError(
                INCOMPLETE, raw_payload=payload, status_code=response.status_code
            )

    def decode_candidates(self, response: TransportResponse) -> CandidatesOutcome:
        """Decode every candidate in a response.

        Entries that are not objects, and candidates missing required
        fields, are skipped. Each Location keeps its own candidate object
        as ``raw_payload``.

        Returns:
            A non-empty tuple of Locations in provider order, or a ClientError.
        """
        checked = self._checked_payload(response)
        if isinstance(checked, ClientError):
            return checked

        payload, items = checked
        if not any(isinstance(item, dict) for item in items):
            return InvalidResponseError(
                NOT_AN_OBJECT, raw_payload=payload, status_code=response.status_code
            )

        locations: List[Location] = []
        for index, item in enumerate(items):
            if not isinstance(item, dict):
                self._logger.warning(
                    "Skipping candidate that is not an object",
                    extra={"index": index, "entry_type": type(item).__name__},
                )
                continue
            try:
                locations.append(self._location_from_item(item, raw_payload=item))
            except _IncompleteCandidate as e:
                self._logger.warning(
                    "Skipping incomplete candidate",
                    extra={"index": index, "missing": str(e)},
                )

        if not locations:
            return ProviderError(
                INCOMPLETE, raw_payload=payload, status_code=response.status_code
            )
        return tuple(locations)

    def _checked_payload(
        self, response: TransportResponse
    ) -> Union[Tuple[Any, List[Any]], ClientError]:
        """Parse the body and rule out every error shape.

        Returns:
            The parsed payload and its non-empty list of entries, or the
            ClientError to hand back. Entries are not checked here.
        """
        status = response.status_code

        try:
            payload = json.loads(response.body)
        except (UnicodeDecodeError, ValueError, RecursionError) as e:
            self._logger.warning(
                "Provider returned a body that is not JSON",
                extra={"status_code": status, "bytes": len(response.body)},
            )
            return InvalidResponseError(MALFORMED, cause=e, status_code=status)

        if isinstance(payload, dict):
            if "error" in payload:
                message = _error_message(payload["error"])
                self._logger.warning(
                    "Provider reported an error",
                    extra={"status_code": status, "provider_message": message},
                )
                return ProviderError(message, raw_payload=payload, status_code=status)
            items: List[Any] = [payload]
        elif isinstance(payload, list):
            items = payload
        else:
            return InvalidResponseError(
                f"unexpected payload type {type(payload).__name__}",
                raw_payload=payload,
                status_code=status,
            )

        if not response.is_success:
            self._logger.warning(
                "Provider answered with an error status",
                extra={"status_code": status},
            )
            return ProviderError(
                f"HTTP {status}", raw_payload=payload, status_code=status
            )

        if not items:
            self._logger.info("Provider found no results", extra={"status_code": status})
            return ProviderError(NO_RESULTS, raw_payload=payload, status_code=status)

        return payload, items

    def _location_from_item(self, item: Mapping[str, Any], raw_payload: Any) -> Location:
        latitude = _to_float(item.get("lat"))
        if latitude is None or not -90 <= latitude <= 90:
            raise _IncompleteCandidate("lat")
        longitude = _to_float(item.get("lon"))
        if longitude is None or not -180 <= longitude <= 180:
            raise _IncompleteCandidate("lon")
        display_name = item.get("display_name")
        if not isinstance(display_name, str) or not display_name.strip():
            raise _IncompleteCandidate("display_name")

        return Location(
            latitude=latitude,
            longitude=longitude,
            display_name=display_name.strip(),
            address_components=normalize_address(item.get("address")),
            place_id=_to_identifier(item.get("place_id")),
            osm_type=_to_identifier(item.get("osm_type")),
            osm_id=_to_identifier(item.get("osm_id")),
            license_text=_to_identifier(item.get("licence")),
            place_type=_to_identifier(item.get("type")),
            category=_to_identifier(item.get("class") or item.get("category")),
            importance=_to_float(item.get("importance")),
            bounding_box_value=self._bounding_box(item.get("boundingbox")),
            raw_payload=raw_payload,
        )

    def _bounding_box(self, raw: Any) -> Optional[BoundingBox]:
        """Parse ``[min_lat, max_lat, min_lon, max_lon]``; None if absent or unusable."""
        if raw is None:
            return None
        if not isinstance(raw, (list, tuple)) or len(raw) != 4:
            self._logger.warning("Ignoring malformed bounding box", extra={"bbox": raw})
            return None

        bounds = [_to_float(value) for value in raw]
        if any(value is None for value in bounds):
            self._logger.warning("Ignoring malformed bounding box", extra={"bbox": raw})
            return None

        min_lat, max_lat, min_lon, max_lon = bounds
        return BoundingBox(
            min_lat=min_lat,  # type: ignore[arg-type]
            max_lat=max_lat,  # type: ignore[arg-type]
            min_lon=min_lon,  # type: ignore[arg-type]
            max_lon=max_lon,  # type: ignore[arg-type]
        )
