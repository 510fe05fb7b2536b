from http import HTTPStatus

from typed_http_client.http.entities import (
    HTTPResponseMetadata,
    Request,
    ResponseMetadata,
)
from typed_http_client.http.errors import InvalidResponse, ResponseDetails
from typed_http_client.http.utils.headers import string_headers_or_none

SUCCESSFUL_STATUS_CODES = range(200, 300)
STATUS_CODE_CLASS_DESCRIPTIONS = {
    1: "Informational",
    2: "Success",
    3: "Redirection",
    4: "Client Error",
    5: "Server Error",
}
UNKNOWN_STATUS_CODE_DESCRIPTION = "Unknown Status Code"


def validate_http_response(metadata: ResponseMetadata, request: Request) -> None:
    """Validate the metadata of a response before its body is decoded.

    Args:
        metadata: The metadata returned by the session.
        request: The request that produced the response.

    Raises:
        InvalidResponse: If the metadata does not describe an HTTP response, or
            the status code is not in the 2xx range.
    """
    if not isinstance(metadata, HTTPResponseMetadata) or not _is_status_code(
        metadata.status_code
    ):
        raise InvalidResponse.invalid_response_type(url=request.url)
    if is_successful_status_code(metadata.status_code):
        return None
    raise InvalidResponse(
        ResponseDetails(
            status_code=metadata.status_code,
            url=request.url,
            description=describe_status_code(metadata.status_code),
            headers=string_headers_or_none(metadata.headers),
        )
    )


def is_successful_status_code(status_code: int) -> bool:
    return status_code in SUCCESSFUL_STATUS_CODES


def describe_status_code(status_code: int) -> str:
    """Get a human-readable reason phrase for the status code.

    Args:
        status_code: The status code to describe.

    Returns:
        The registered reason phrase, or the name of the status code class for
        unregistered codes.
    """
    try:
        return HTTPStatus(status_code).phrase
    except ValueError:
        return STATUS_CODE_CLASS_DESCRIPTIONS.get(
            status_code // 100, UNKNOWN_STATUS_CODE_DESCRIPTION
        )


def _is_status_code(value: object) -> bool:
    # bool is an int subclass, but never a status code
    return isinstance(value, int) and not isinstance(value, bool)
