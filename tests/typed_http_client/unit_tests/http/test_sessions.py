import aiohttp
import pytest
import requests
from aiohttp import ClientConnectionError
from aioresponses import aioresponses
from requests_mock import Mocker

from typed_http_client.http.entities import (
    HTTPResponseMetadata,
    POST,
    RawResponse,
    Request,
)
from typed_http_client.http.sessions import AiohttpSession, RequestsSession


@pytest.mark.asyncio
async def test_aiohttp_session_when_successful_response_received() -> None:
    # given
    request = Request.get("https://some.com/users/1", headers={"Accept": "application/json"})

    with aioresponses() as m:
        m.get(
            "https://some.com/users/1",
            status=200,
            body=b'{"id": 1, "name": "A"}',
            headers={"X-Request-Id": "abc"},
        )
        async with AiohttpSession() as session:
            # when
            result = await session.perform_transfer(request)

    # then
    assert isinstance(result, RawResponse)
    assert result.body == b'{"id": 1, "name": "A"}'
    assert isinstance(result.metadata, HTTPResponseMetadata)
    assert result.metadata.status_code == 200
    assert result.metadata.url == "https://some.com/users/1"
    assert result.metadata.headers["X-Request-Id"] == "abc"


@pytest.mark.asyncio
async def test_aiohttp_session_when_error_response_received() -> None:
    # given
    request = Request.get("https://some.com/users/1")

    with aioresponses() as m:
        m.get("https://some.com/users/1", status=404, body=b"Not here")
        async with AiohttpSession() as session:
            # when
            result = await session.perform_transfer(request)

    # then
    assert result.metadata.status_code == 404, "Error statuses must not be raised"
    assert result.body == b"Not here"


@pytest.mark.asyncio
async def test_aiohttp_session_sends_request_body() -> None:
    # given
    request = Request(
        method=POST,
        url="https://some.com/users",
        headers={"Content-Type": "application/json"},
        body=b'{"name": "A"}',
    )

    with aioresponses() as m:
        m.post("https://some.com/users", status=201, payload={"id": 1, "name": "A"})
        async with AiohttpSession() as session:
            # when
            result = await session.perform_transfer(request)

        # then
        sent_request = list(m.requests.values())[0][0]
        assert sent_request.kwargs["data"] == b'{"name": "A"}'
        assert sent_request.kwargs["headers"] == {"Content-Type": "application/json"}
    assert result.metadata.status_code == 201


@pytest.mark.asyncio
async def test_aiohttp_session_when_connection_error_occurs() -> None:
    # given
    request = Request.get("https://some.com/users/1")

    with aioresponses() as m:
        m.get("https://some.com/users/1", exception=ClientConnectionError("refused"))
        async with AiohttpSession() as session:
            # when
            with pytest.raises(ClientConnectionError):
                _ = await session.perform_transfer(request)


@pytest.mark.asyncio
async def test_aiohttp_session_prefers_timeout_of_request() -> None:
    # given
    request = Request(method="GET", url="https://some.com/users/1", timeout=1.5)

    with aioresponses() as m:
        m.get("https://some.com/users/1", status=200, payload={})
        async with AiohttpSession(timeout=12.5) as session:
            # when
            _ = await session.perform_transfer(request)

        # then
        sent_request = list(m.requests.values())[0][0]
        assert sent_request.kwargs["timeout"].total == 1.5


@pytest.mark.asyncio
async def test_aiohttp_session_uses_default_timeout() -> None:
    # given
    request = Request.get("https://some.com/users/1")

    with aioresponses() as m:
        m.get("https://some.com/users/1", status=200, payload={})
        async with AiohttpSession(timeout=12.5) as session:
            # when
            _ = await session.perform_transfer(request)

        # then
        sent_request = list(m.requests.values())[0][0]
        assert sent_request.kwargs["timeout"].total == 12.5, "Session default timeout expected"


@pytest.mark.asyncio
async def test_aiohttp_session_does_not_close_injected_client_session() -> None:
    # given
    client_session = aiohttp.ClientSession()

    # when
    async with AiohttpSession(client_session=client_session):
        pass

    # then
    assert client_session.closed is False, "Injected session is owned by the caller"
    await client_session.close()


@pytest.mark.asyncio
async def test_requests_session_when_successful_response_received(
    requests_mock: Mocker,
) -> None:
    # given
    requests_mock.get(
        "https://some.com/users/1",
        content=b'{"id": 1, "name": "A"}',
        headers={"X-Request-Id": "abc"},
    )
    request = Request.get("https://some.com/users/1", headers={"Accept": "application/json"})

    with RequestsSession(timeout=12.5) as session:
        # when
        result = await session.perform_transfer(request)

    # then
    assert result.body == b'{"id": 1, "name": "A"}'
    assert result.metadata.status_code == 200
    assert result.metadata.url == "https://some.com/users/1"
    assert result.metadata.headers["X-Request-Id"] == "abc"
    assert requests_mock.last_request.headers["Accept"] == "application/json"
    assert requests_mock.last_request.timeout == 12.5, "Session default timeout expected"


@pytest.mark.asyncio
async def test_requests_session_prefers_timeout_of_request(
    requests_mock: Mocker,
) -> None:
    # given
    requests_mock.get("https://some.com/users/1", json={})
    request = Request(method="GET", url="https://some.com/users/1", timeout=1.5)

    with RequestsSession(timeout=12.5) as session:
        # when
        _ = await session.perform_transfer(request)

    # then
    assert requests_mock.last_request.timeout == 1.5


@pytest.mark.asyncio
async def test_requests_session_when_error_response_received(
    requests_mock: Mocker,
) -> None:
    # given
    requests_mock.get(
        "https://some.com/users/1", status_code=503, reason="Service Unavailable"
    )

    with RequestsSession() as session:
        # when
        result = await session.perform_transfer(Request.get("https://some.com/users/1"))

    # then
    assert result.metadata.status_code == 503, "Error statuses must not be raised"
    assert result.metadata.reason == "Service Unavailable"


@pytest.mark.asyncio
async def test_requests_session_when_connection_error_occurs(
    requests_mock: Mocker,
) -> None:
    # given
    requests_mock.get(
        "https://some.com/users/1", exc=requests.exceptions.ConnectionError("refused")
    )

    with RequestsSession() as session:
        # when
        with pytest.raises(requests.exceptions.ConnectionError):
            _ = await session.perform_transfer(Request.get("https://some.com/users/1"))

