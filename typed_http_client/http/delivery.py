import queue
import threading
import time
from asyncio import AbstractEventLoop
from concurrent.futures import Executor, Future
from typing import Callable, Optional

from typing_extensions import Protocol

Callback = Callable[[], None]


class DeliveryContext(Protocol):
    """Execution context on which outcomes are handed to subscribers.

    `deliver` must run the callback exactly once, on the designated context.
    """

    def deliver(self, callback: Callback) -> None: ...


class EventLoopDeliveryContext:
    """Delivers on the thread running the given asyncio event loop."""

    def __init__(self, loop: AbstractEventLoop):
        self.__loop = loop

    @property
    def loop(self) -> AbstractEventLoop:
        return self.__loop

    def deliver(self, callback: Callback) -> None:
        self.__loop.call_soon_threadsafe(callback)


class ExecutorDeliveryContext:
    """Delivers through a `concurrent.futures.Executor`.

    With a single worker executor this gives a dedicated delivery thread.
    """

    def __init__(self, executor: Executor):
        self.__executor = executor

    def deliver(self, callback: Callback) -> None:
        self.__executor.submit(callback)


class ImmediateDeliveryContext:
    """Delivers inline, on whichever thread completed the call."""

    def deliver(self, callback: Callback) -> None:
        callback()


class MainThreadDeliveryContext:
    """Delivers on the thread that drains the context, e.g. the main or UI thread.

    Callbacks are queued by `deliver` and executed by `run_pending` or `run_until`,
    which must be called from the owning thread.
    """

    def __init__(self, owner_thread: Optional[threading.Thread] = None):
        self.__owner_thread = owner_thread or threading.main_thread()
        self.__callbacks: "queue.Queue[Callback]" = queue.Queue()

    @property
    def owner_thread(self) -> threading.Thread:
        return self.__owner_thread

    def deliver(self, callback: Callback) -> None:
        self.__callbacks.put(callback)

    def run_pending(self, timeout: Optional[float] = None) -> int:
        """Run queued callbacks.

        Args:
            timeout: How long to wait for the first callback. `None` does not wait.

        Returns:
            The number of callbacks executed.
        """
        self._ensure_owner_thread()
        executed = 0
        try:
            if timeout is not None:
                callback = self.__callbacks.get(timeout=timeout)
                callback()
                executed += 1
            while True:
                callback = self.__callbacks.get_nowait()
                callback()
                executed += 1
        except queue.Empty:
            return executed

    def run_until(self, future: Future, timeout: Optional[float] = None) -> None:
        """Run queued callbacks until the future is resolved.

        Raises:
            TimeoutError: If the future is not resolved within the timeout.
        """
        deadline = None if timeout is None else time.monotonic() + timeout
        while not future.done():
            if deadline is None:
                wait = 0.1
            else:
                wait = deadline - time.monotonic()
                if wait <= 0:
                    raise TimeoutError("Outcome was not delivered in time")
                wait = min(wait, 0.1)
            self.run_pending(timeout=wait)

    def _ensure_owner_thread(self) -> None:
        if threading.current_thread() is not self.__owner_thread:
            raise RuntimeError(
                f"Delivery context is owned by thread {self.__owner_thread.name}, "
                f"cannot run it from {threading.current_thread().name}"
            )
