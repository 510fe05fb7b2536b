from dataclasses import dataclass, field
from typing import Any, Dict, Mapping, Optional

GET = "GET"
POST = "POST"
PUT = "PUT"
PATCH = "PATCH"
DELETE = "DELETE"


@dataclass(frozen=True)
class Request:
    """Dataclass for a prepared HTTP request.

    The executor treats it as opaque and only reads `url` when reporting errors.

    Attributes:
        method: The HTTP method of the request.
        url: The URL of the request.
        headers: The headers of the request.
        body: The raw body of the request.
        timeout: Transfer timeout in seconds, `None` leaves it to the session default.
    """

    method: str
    url: str
    headers: Optional[Dict[str, str]] = None
    body: Optional[bytes] = None
    timeout: Optional[float] = None

    @classmethod
    def get(
        cls,
        url: str,
        headers: Optional[Dict[str, str]] = None,
    ) -> "Request":
        return cls(method=GET, url=url, headers=headers)


@dataclass(frozen=True)
class ResponseMetadata:
    """Metadata of a transport response that is not an HTTP response.

    Attributes:
        url: The URL of the responding resource, `None` when unknown.
    """

    url: Optional[str]


@dataclass(frozen=True)
class HTTPResponseMetadata(ResponseMetadata):
    """Metadata of an HTTP response.

    Attributes:
        status_code: The status code of the response.
        headers: The headers of the response, as reported by the transport.
        reason: The reason phrase sent by the server, if any.
    """

    status_code: int
    headers: Mapping[Any, Any] = field(default_factory=dict)
    reason: Optional[str] = None


@dataclass(frozen=True)
class RawResponse:
    """Dataclass for the raw outcome of a network transfer.

    Attributes:
        body: The body of the response.
        metadata: The metadata of the response.
    """

    body: bytes
    metadata: ResponseMetadata
