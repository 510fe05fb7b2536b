from dataclasses import dataclass
from typing import Dict, Optional

from typed_http_client.http.utils.requests import deduct_api_key_from_string

INVALID_RESPONSE_STATUS_CODE = -1
INVALID_RESPONSE_TYPE_DESCRIPTION = "Invalid response type"


@dataclass(frozen=True)
class ResponseDetails:
    """Dataclass for details of a rejected response.

    Attributes:
        status_code: The status code of the response, -1 when it was not an HTTP response.
        url: The URL of the request that produced the response.
        description: Human-readable description of the status code.
        headers: The response headers, when they form a string-keyed map of strings.
    """

    status_code: int
    url: Optional[str]
    description: Optional[str]
    headers: Optional[Dict[str, str]]


class ClientError(Exception):
    """Base class for errors of the HTTP client.

    Only `InvalidResponse`, `DecodingError` and `NetworkError` are ever raised.
    """

    pass


class InvalidResponse(ClientError):
    """Error for responses rejected during validation.

    Attributes:
        details: The details of the rejected response.
    """

    def __init__(self, details: ResponseDetails):
        super().__init__(details.description)
        self.__details = details

    @classmethod
    def invalid_response_type(cls, url: Optional[str]) -> "InvalidResponse":
        return cls(
            ResponseDetails(
                status_code=INVALID_RESPONSE_STATUS_CODE,
                url=url,
                description=INVALID_RESPONSE_TYPE_DESCRIPTION,
                headers=None,
            )
        )

    @property
    def details(self) -> ResponseDetails:
        """The details of the rejected response."""
        return self.__details

    @property
    def status_code(self) -> int:
        """The status code of the response."""
        return self.__details.status_code

    @property
    def url(self) -> Optional[str]:
        """The URL of the request."""
        return self.__details.url

    @property
    def description(self) -> Optional[str]:
        """The description of the status code."""
        return self.__details.description

    @property
    def headers(self) -> Optional[Dict[str, str]]:
        """The headers of the response."""
        return self.__details.headers

    def __repr__(self) -> str:
        url = deduct_api_key_from_string(self.url) if self.url is not None else None
        return (
            f"{self.__class__.__name__}("
            f"status_code={self.status_code}, "
            f"url='{url}', "
            f"description='{self.description}')"
        )

    def __str__(self) -> str:
        return self.__repr__()


class _WrappingClientError(ClientError):
    def __init__(self, cause: BaseException):
        super().__init__(deduct_api_key_from_string(str(cause)))
        self.__cause = cause

    @property
    def cause(self) -> BaseException:
        """The underlying error."""
        return self.__cause

    def __repr__(self) -> str:
        return (
            f"{self.__class__.__name__}("
            f"cause={self.__cause.__class__.__name__}: "
            f"'{deduct_api_key_from_string(str(self.__cause))}')"
        )

    def __str__(self) -> str:
        return self.__repr__()


class DecodingError(_WrappingClientError):
    """Error for response bodies that could not be decoded into the requested type."""

    pass


class NetworkError(_WrappingClientError):
    """Error for every other failure, e.g. transport errors or timeouts."""

    pass
