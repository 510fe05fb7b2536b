import abc
import asyncio
import threading
import warnings
from concurrent.futures import Future
from functools import partial
from typing import Dict, Optional, Tuple, Type, TypeVar

from typed_http_client.config import TypedHTTPClientWarning
from typed_http_client.http.decoders import DECODING_ERRORS, Decoder, JSONDecoder
from typed_http_client.http.delivery import DeliveryContext
from typed_http_client.http.entities import Request
from typed_http_client.http.errors import ClientError, DecodingError, NetworkError
from typed_http_client.http.sessions import Session
from typed_http_client.http.utils.validation import validate_http_response

T = TypeVar("T")


def map_http_error(
    error: BaseException,
    decoding_errors: Tuple[Type[BaseException], ...] = DECODING_ERRORS,
) -> ClientError:
    """Classify an error surfaced while executing a request.

    Args:
        error: The error to classify.
        decoding_errors: Error types that signal a body not matching the requested type.

    Returns:
        The error itself if it is already a `ClientError`, otherwise `DecodingError`
        for decoding errors and `NetworkError` for everything else.
    """
    if isinstance(error, ClientError):
        return error
    if isinstance(error, decoding_errors):
        return DecodingError(error)
    return NetworkError(error)


class HTTPClient(metaclass=abc.ABCMeta):
    @abc.abstractmethod
    async def execute(self, request: Request, result_type: Type[T]) -> T:
        pass

    @abc.abstractmethod
    def submit(
        self,
        request: Request,
        result_type: Type[T],
        loop: Optional[asyncio.AbstractEventLoop] = None,
    ) -> "Future[T]":
        pass


class RequestExecutor(HTTPClient):
    """Executes a single request and decodes its body into the requested type.

    Every failure is reported as one of `InvalidResponse`, `DecodingError` or
    `NetworkError`. The session and the decoder are owned by the caller.
    """

    def __init__(
        self,
        session: Session,
        decoder: Optional[Decoder] = None,
        delivery_context: Optional[DeliveryContext] = None,
    ):
        self.__session = session
        self.__decoder = decoder if decoder is not None else JSONDecoder()
        self.__delivery_context = delivery_context
        self.__io_loop: Optional[asyncio.AbstractEventLoop] = None
        self.__io_thread: Optional[threading.Thread] = None
        self.__lock = threading.Lock()
        # undelivered outcome -> future of its running transfer
        self.__pending: Dict[Future, Future] = {}

    @property
    def session(self) -> Session:
        return self.__session

    @property
    def decoder(self) -> Decoder:
        return self.__decoder

    @property
    def delivery_context(self) -> Optional[DeliveryContext]:
        return self.__delivery_context

    async def execute(self, request: Request, result_type: Type[T]) -> T:
        """Execute the request and decode the response body.

        The outcome is delivered to the awaiting coroutine, on its event loop.

        Args:
            request: The prepared request.
            result_type: The type the response body is decoded into.

        Returns:
            The decoded response body.

        Raises:
            InvalidResponse: If the response is not an HTTP response or its status is not 2xx.
            DecodingError: If the body does not match the requested type.
            NetworkError: For any other failure.
        """
        try:
            raw_response = await self.__session.perform_transfer(request)
            validate_http_response(raw_response.metadata, request)
            return self.__decoder.decode(raw_response.body, result_type)
        except ClientError:
            raise
        except asyncio.CancelledError as error:
            if _current_task_is_cancelling():
                raise
            raise NetworkError(error) from error
        except Exception as error:
            raise map_http_error(
                error, decoding_errors=_decoding_errors_of(self.__decoder)
            ) from error

    def submit(
        self,
        request: Request,
        result_type: Type[T],
        loop: Optional[asyncio.AbstractEventLoop] = None,
    ) -> "Future[T]":
        """Schedule the request and return a future resolved on the delivery context.

        Args:
            request: The prepared request.
            result_type: The type the response body is decoded into.
            loop: Event loop to run the transfer on. Defaults to a background loop
                owned by the executor.

        Returns:
            Future resolved exactly once, from within the delivery context, with the
            decoded body or a `ClientError`. Cancelling it cancels the transfer.
        """
        if self.__delivery_context is None:
            raise ValueError("Submitting requests requires a delivery context")
        outcome: "Future[T]" = Future()
        running = asyncio.run_coroutine_threadsafe(
            self.execute(request, result_type),
            loop if loop is not None else self._get_io_loop(),
        )
        with self.__lock:
            self.__pending[outcome] = running
        running.add_done_callback(partial(self._on_execution_done, outcome=outcome))
        outcome.add_done_callback(partial(_cancel_when_cancelled, running=running))
        return outcome

    def close(self) -> None:
        """Cancel undelivered requests and stop the background event loop.

        Every outcome still pending is resolved on the delivery context with a
        `NetworkError` caused by `asyncio.CancelledError`. May be called from a
        subscriber running on the background loop thread.
        """
        with self.__lock:
            pending = list(self.__pending.items())
            io_loop, io_thread = self.__io_loop, self.__io_thread
            self.__io_loop, self.__io_thread = None, None
        undelivered = sum(1 for outcome, _ in pending if not outcome.done())
        if undelivered:
            warnings.warn(
                f"Closing request executor cancels {undelivered} undelivered outcome(s)",
                category=TypedHTTPClientWarning,
                stacklevel=2,
            )
        for _, running in pending:
            running.cancel()
        if io_loop is None:
            return None
        io_loop.call_soon_threadsafe(io_loop.stop)
        if threading.current_thread() is not io_thread:
            io_thread.join()

    def __enter__(self) -> "RequestExecutor":
        return self

    def __exit__(self, exc_type, exc_val, exc_tb) -> None:
        self.close()

    def _get_io_loop(self) -> asyncio.AbstractEventLoop:
        with self.__lock:
            if self.__io_loop is None:
                self.__io_loop = asyncio.new_event_loop()
                self.__io_thread = threading.Thread(
                    target=_run_io_loop,
                    args=(self.__io_loop,),
                    name="request-executor-io",
                    daemon=True,
                )
                self.__io_thread.start()
            return self.__io_loop

    def _on_execution_done(self, running: Future, outcome: Future) -> None:
        self.__delivery_context.deliver(
            partial(self._resolve_outcome, running=running, outcome=outcome)
        )

    def _resolve_outcome(self, running: Future, outcome: Future) -> None:
        with self.__lock:
            self.__pending.pop(outcome, None)
        if not outcome.set_running_or_notify_cancel():
            return None
        if running.cancelled():
            outcome.set_exception(NetworkError(asyncio.CancelledError()))
            return None
        error = running.exception()
        if error is not None:
            outcome.set_exception(error)
        else:
            outcome.set_result(running.result())


def _cancel_when_cancelled(outcome: Future, running: Future) -> None:
    if outcome.cancelled():
        running.cancel()


def _decoding_errors_of(decoder: Decoder) -> Tuple[Type[BaseException], ...]:
    return tuple(getattr(decoder, "decoding_errors", ())) + DECODING_ERRORS


def _current_task_is_cancelling() -> bool:
    task = asyncio.current_task()
    if task is None:
        return False
    cancelling = getattr(task, "cancelling", None)
    if cancelling is None:
        # cancellation requests are not tracked before Python 3.11
        return True
    return cancelling() > 0


def _run_io_loop(loop: asyncio.AbstractEventLoop) -> None:
    asyncio.set_event_loop(loop)
    try:
        loop.run_forever()
    finally:
        _cancel_all_tasks(loop)
        loop.run_until_complete(loop.shutdown_asyncgens())
        loop.close()


def _cancel_all_tasks(loop: asyncio.AbstractEventLoop) -> None:
    tasks = asyncio.all_tasks(loop)
    if not tasks:
        return None
    for task in tasks:
        task.cancel()
    loop.run_until_complete(asyncio.gather(*tasks, return_exceptions=True))
