import asyncio
from concurrent.futures import ThreadPoolExecutor
from functools import partial
from typing import Optional

import aiohttp
import requests
from typing_extensions import Protocol

from typed_http_client.config import DEFAULT_TIMEOUT, THREAD_POOL_SIZE
from typed_http_client.http.entities import HTTPResponseMetadata, RawResponse, Request
from typed_http_client.http.utils.headers import merge_multi_value_headers
from typed_http_client.http.utils.requests import deduct_api_key_from_string
from typed_http_client.utils.logging import get_logger

logger = get_logger("http.sessions")


class Session(Protocol):
    """Performs the network transfer of a single request.

    Implementations must not raise for HTTP error statuses: every HTTP answer is
    returned as a `RawResponse`. Transport failures are raised unchanged.
    """

    async def perform_transfer(self, request: Request) -> RawResponse: ...


class AiohttpSession:
    """Session backed by `aiohttp.ClientSession`.

    When no client session is injected, one is created on first use and owned by
    this object; it is bound to the event loop that created it.
    """

    def __init__(
        self,
        client_session: Optional[aiohttp.ClientSession] = None,
        timeout: float = DEFAULT_TIMEOUT,
    ):
        self.__client_session = client_session
        self.__owns_client_session = client_session is None
        self.__timeout = timeout

    async def perform_transfer(self, request: Request) -> RawResponse:
        client_session = self._get_client_session()
        timeout = aiohttp.ClientTimeout(total=_resolve_timeout(request, self.__timeout))
        logger.debug(
            "Sending %s %s", request.method, deduct_api_key_from_string(request.url)
        )
        async with client_session.request(
            request.method,
            request.url,
            headers=request.headers,
            data=request.body,
            timeout=timeout,
        ) as response:
            body = await response.read()
            logger.debug(
                "Received %s from %s (%d bytes)",
                response.status,
                deduct_api_key_from_string(request.url),
                len(body),
            )
            return RawResponse(
                body=body,
                metadata=HTTPResponseMetadata(
                    url=str(response.url),
                    status_code=response.status,
                    headers=merge_multi_value_headers(response.headers.items()),
                    reason=response.reason,
                ),
            )

    async def close(self) -> None:
        if self.__owns_client_session and self.__client_session is not None:
            await self.__client_session.close()
            self.__client_session = None

    async def __aenter__(self) -> "AiohttpSession":
        return self

    async def __aexit__(self, exc_type, exc_val, exc_tb) -> None:
        await self.close()

    def _get_client_session(self) -> aiohttp.ClientSession:
        if self.__client_session is None:
            self.__client_session = aiohttp.ClientSession()
        return self.__client_session


class RequestsSession:
    """Session backed by `requests.Session`.

    Blocking calls run on a thread pool, so the awaiting event loop is never blocked.
    """

    def __init__(
        self,
        session: Optional[requests.Session] = None,
        timeout: float = DEFAULT_TIMEOUT,
        max_workers: int = THREAD_POOL_SIZE,
    ):
        self.__session = session if session is not None else requests.Session()
        self.__owns_session = session is None
        self.__timeout = timeout
        self.__executor = ThreadPoolExecutor(
            max_workers=max_workers,
            thread_name_prefix="requests-session",
        )

    async def perform_transfer(self, request: Request) -> RawResponse:
        loop = asyncio.get_running_loop()
        return await loop.run_in_executor(
            self.__executor, partial(self._transfer, request)
        )

    def close(self) -> None:
        self.__executor.shutdown(wait=True)
        if self.__owns_session:
            self.__session.close()

    def __enter__(self) -> "RequestsSession":
        return self

    def __exit__(self, exc_type, exc_val, exc_tb) -> None:
        self.close()

    def _transfer(self, request: Request) -> RawResponse:
        logger.debug(
            "Sending %s %s", request.method, deduct_api_key_from_string(request.url)
        )
        response = self.__session.request(
            method=request.method,
            url=request.url,
            headers=request.headers,
            data=request.body,
            timeout=_resolve_timeout(request, self.__timeout),
        )
        logger.debug(
            "Received %s from %s (%d bytes)",
            response.status_code,
            deduct_api_key_from_string(request.url),
            len(response.content),
        )
        return RawResponse(
            body=response.content,
            metadata=HTTPResponseMetadata(
                url=response.url,
                status_code=response.status_code,
                headers=dict(response.headers),
                reason=response.reason,
            ),
        )


def _resolve_timeout(request: Request, default: float) -> float:
    if request.timeout is not None:
        return request.timeout
    return default
