"""Static transport for testing and offline runs.

Replays canned responses instead of touching the network and records
every request it receives, so tests can assert how many calls were made
and with which parameters.

Example:
    transport = StaticTransport.json_reply([{"lat": "1", "lon": "2", ...}])
    client = GeocodingClient(api_key="test", transport=transport)
    client.geocode("somewhere")
    assert transport.calls[0].params["q"] == "somewhere"
"""

from __future__ import annotations

import json
import threading
from dataclasses import dataclass, field
from typing import Any, Dict, List, Mapping, Optional, Union

from ...domain.errors import NetworkError
from ...ports.transport import TransportResponse

Reply = Union[TransportResponse, NetworkError]


@dataclass(frozen=True, slots=True)
class RecordedRequest:
    """One request seen by the StaticTransport."""

    endpoint: str
    params: Dict[str, str]


@dataclass
class StaticTransport:
    """Transport that answers from a fixed list of replies.

    Replies are consumed in order; the last one is repeated once the
    list is exhausted. A ``NetworkError`` reply is raised instead of
    returned, which simulates a transport failure.

    Attributes:
        replies: Responses (or errors) to hand out
        calls: Requests received so far
    """

    replies: List[Reply] = field(default_factory=list)
    calls: List[RecordedRequest] = field(default_factory=list)

    _lock: threading.Lock = field(default_factory=threading.Lock, repr=False)

    @classmethod
    def json_reply(cls, payload: Any, status_code: int = 200) -> StaticTransport:
        """Create a transport that always answers with a JSON payload."""
        body = json.dumps(payload).encode("utf-8")
        return cls(replies=[TransportResponse(status_code=status_code, body=body)])

    @classmethod
    def raw_reply(cls, body: Union[bytes, str], status_code: int = 200) -> StaticTransport:
        """Create a transport that always answers with an undecoded body."""
        if isinstance(body, str):
            body = body.encode("utf-8")
        return cls(replies=[TransportResponse(status_code=status_code, body=body)])

    @classmethod
    def failing(cls, error: Optional[NetworkError] = None) -> StaticTransport:
        """Create a transport whose every call fails at the network level."""
        return cls(replies=[error or NetworkError("Connection refused")])

    @property
    def call_count(self) -> int:
        return len(self.calls)

    def get(self, endpoint: str, params: Mapping[str, str]) -> TransportResponse:
        with self._lock:
            self.calls.append(RecordedRequest(endpoint=endpoint, params=dict(params)))
            if not self.replies:
                raise NetworkError("No reply configured", endpoint=endpoint)
            index = min(len(self.calls), len(self.replies)) - 1
            reply = self.replies[index]

        if isinstance(reply, NetworkError):
            raise reply
        return reply
