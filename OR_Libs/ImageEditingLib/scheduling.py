"""
Callback scheduling for the asynchronous resume points.

Image decoding (both the uploaded image and the blur snapshot) resumes
through a scheduler: a callable that takes a zero-argument callback and runs
it now or later on the same logical thread. Operations report completion
with ``concurrent.futures.Future`` objects.

Functions:
    run_immediately: Scheduler that runs callbacks synchronously
    completed_future: Build an already-resolved future
    chain_future: Copy the outcome of one future into another

Classes:
    DeferredScheduler: Scheduler that queues callbacks until asked to run them
"""

import concurrent.futures
import logging
from typing import Any, Callable, List

logger = logging.getLogger(__name__)

# Type alias for a scheduler function
Callback = Callable[[], None]
Scheduler = Callable[[Callback], None]


def run_immediately(callback: Callback) -> None:
    callback()


def completed_future(result: Any = None) -> concurrent.futures.Future:
    future: concurrent.futures.Future = concurrent.futures.Future()
    future.set_result(result)
    return future


def chain_future(source: concurrent.futures.Future, target: concurrent.futures.Future) -> None:
    """Resolve ``target`` with the outcome of ``source`` once it is done."""

    def transfer(done: concurrent.futures.Future) -> None:
        exc = done.exception()
        if exc is not None:
            target.set_exception(exc)
        else:
            target.set_result(done.result())

    source.add_done_callback(transfer)


class DeferredScheduler:
    """
    Scheduler that holds callbacks until they are run explicitly.

    Callbacks may be run in submission order or by index, which makes it
    possible to reproduce asynchronous completions resolving out of order.

    Example:
        >>> scheduler = DeferredScheduler()
        >>> scheduler(lambda: print("done"))
        >>> scheduler.pending
        1
        >>> scheduler.run_all()
        done
    """

    def __init__(self) -> None:
        self._queue: List[Callback] = []

    def __call__(self, callback: Callback) -> None:
        self._queue.append(callback)

    @property
    def pending(self) -> int:
        return len(self._queue)

    def run_next(self, index: int = 0) -> None:
        """
        Run and remove one queued callback.

        Args:
            index: Queue position to run (0 = oldest, -1 = newest)

        Raises:
            IndexError: If nothing is queued
        """
        if not self._queue:
            raise IndexError("No scheduled callbacks to run")
        callback = self._queue.pop(index)
        callback()

    def run_all(self) -> int:
        """
        Run queued callbacks oldest first until the queue is empty.

        Callbacks scheduled while running are run as well.

        Returns:
            Number of callbacks run
        """
        count = 0
        while self._queue:
            self.run_next(0)
            count += 1
        logger.debug(f"Ran {count} deferred callbacks")
        return count
