"""Client for the Maps.co geocoding service.

Forward geocoding turns a free-text address into coordinates and
structured place data; reverse geocoding turns coordinates into place
data. Both return either a ``Location`` or a ``ClientError``:

    from geocoding_client import GeocodingClient, RequestsTransport, ClientError

    client = GeocodingClient(api_key="...", transport=RequestsTransport())
    result = client.geocode("1600 Pennsylvania Avenue NW, Washington, DC")
    if isinstance(result, ClientError):
        print(result.kind, result.message)
    else:
        print(result.latitude, result.longitude, result.display_name)
"""

from .adapters.transport import RequestsTransport, StaticTransport
from .domain import (
    BoundingBox,
    ClientError,
    ErrorKind,
    GeoLocation,
    Location,
    MapService,
    PreconditionError,
)
from .services import GeocodingClient

__all__ = [
    "GeocodingClient",
    "RequestsTransport",
    "StaticTransport",
    "Location",
    "BoundingBox",
    "GeoLocation",
    "MapService",
    "ClientError",
    "ErrorKind",
    "PreconditionError",
]
