"""Transport adapters - Implementations of HttpTransportPort.

Available implementations:
- RequestsTransport: Production transport using requests
- StaticTransport: Canned replies for testing, no network
"""

from .requests_transport import RequestsTransport
from .static_transport import RecordedRequest, StaticTransport

__all__ = ["RequestsTransport", "StaticTransport", "RecordedRequest"]
