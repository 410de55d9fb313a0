"""
Action log with replay-based undo and redo.

Redaction operations destroy the pixels needed to reverse them, so undo
never inverts a step in place. Instead the buffer is restored to its
pristine image through a reset hook and every action still below the cursor
is replayed. Redo applies the next action incrementally, since the buffer
already reflects the correct prefix.

Appending after an undo discards the undone tail, so redo can never reach
an action that was superseded by a newer one.

Classes:
    EventLog: Ordered, cursor-tracked record of applied actions
"""

import concurrent.futures
import logging
from typing import Callable, List, Optional, Tuple

from OR_Libs.exceptions import ResetNotConfiguredError
from OR_Libs.ImageEditingLib.redaction_models import Action
from OR_Libs.ImageEditingLib.redaction_ops import RedactionLibrary
from OR_Libs.ImageEditingLib.scheduling import chain_future, completed_future

logger = logging.getLogger(__name__)

ResetHook = Callable[[], None]
Step = Callable[[], concurrent.futures.Future]


class EventLog:
    """
    Undo/redo engine over a redaction library.

    Invariant: once every dispatched step has completed, the buffer equals
    the pristine image with ``events[:cursor]`` applied in order.

    With ``serialize_replay`` enabled (the default) each buffer mutation the
    log dispatches (reset, replayed action, appended or redone action) waits
    for the previous one's future before it starts. With it disabled the
    steps are fired back to back and asynchronous tails such as blur may
    land out of order.

    Example:
        >>> log = EventLog(library, reset_hook=restore_pristine)
        >>> log.append(Action("black-out", Rectangle(10, 10, 60, 60)))
        >>> log.undo()
        >>> log.redo()
    """

    def __init__(
        self,
        library: RedactionLibrary,
        reset_hook: Optional[ResetHook] = None,
        serialize_replay: bool = True,
    ) -> None:
        self._library = library
        self._reset_hook = reset_hook
        self._serialize_replay = serialize_replay
        self._events: List[Action] = []
        self._cursor = 0
        self._tail: concurrent.futures.Future = completed_future()

    # ------------------------------------------------------------------
    # State
    # ------------------------------------------------------------------

    @property
    def cursor(self) -> int:
        return self._cursor

    @property
    def events(self) -> Tuple[Action, ...]:
        return tuple(self._events)

    @property
    def applied_actions(self) -> Tuple[Action, ...]:
        return tuple(self._events[: self._cursor])

    @property
    def can_undo(self) -> bool:
        return self._cursor > 0

    @property
    def can_redo(self) -> bool:
        return self._cursor < len(self._events)

    @property
    def completion(self) -> concurrent.futures.Future:
        """Future of the most recently dispatched buffer mutation."""
        return self._tail

    @property
    def is_busy(self) -> bool:
        return not self._tail.done()

    @property
    def has_reset_hook(self) -> bool:
        return self._reset_hook is not None

    def __len__(self) -> int:
        return len(self._events)

    def bind_reset(self, reset_hook: ResetHook) -> None:
        """Bind the procedure that restores the buffer to its pristine image."""
        if not callable(reset_hook):
            raise ValueError(f"reset_hook must be callable, got {type(reset_hook)}")
        self._reset_hook = reset_hook

    def clear(self) -> None:
        """Forget every action. The buffer is left untouched."""
        if self._events:
            logger.warning(f"Clearing event log with {len(self._events)} actions")
        self._events = []
        self._cursor = 0

    # ------------------------------------------------------------------
    # Operations
    # ------------------------------------------------------------------

    def append(self, action: Action) -> None:
        """
        Record ``action`` at the cursor and apply it incrementally.

        Entries beyond the cursor are discarded first. The operation is
        resolved before the log changes, so an unknown kind or missing
        buffer leaves the log untouched.
        """
        run = self._library.bind(action.kind)

        del self._events[self._cursor:]
        self._events.append(action)
        self._cursor += 1
        logger.debug(f"Appended {action.kind} at {action.rect.as_tuple()}, cursor={self._cursor}")

        self._dispatch(lambda: run(action.rect))

    def undo(self) -> None:
        """
        Remove the most recent action from the visible state.

        No-op at cursor 0. Otherwise the reset hook restores the pristine
        image, every action except the most recent one is replayed in
        order, and the cursor moves back by one.

        Raises:
            ResetNotConfiguredError: If no reset hook is bound
        """
        if self._cursor == 0:
            return

        if self._reset_hook is None:
            raise ResetNotConfiguredError("Cannot undo: reset hook not configured")

        replay = [
            (action, self._library.bind(action.kind))
            for action in self._events[: self._cursor - 1]
        ]

        reset_hook = self._reset_hook

        def reset() -> concurrent.futures.Future:
            reset_hook()
            return completed_future()

        self._dispatch(reset)
        for action, run in replay:
            self._dispatch(lambda run=run, rect=action.rect: run(rect))

        self._cursor -= 1
        logger.debug(f"Undo replayed {len(replay)} actions, cursor={self._cursor}")

    def redo(self) -> None:
        """Re-apply the action at the cursor, if any, and advance."""
        if self._cursor >= len(self._events):
            return

        action = self._events[self._cursor]
        run = self._library.bind(action.kind)

        self._cursor += 1
        logger.debug(f"Redo {action.kind} at {action.rect.as_tuple()}, cursor={self._cursor}")

        self._dispatch(lambda: run(action.rect))

    def enqueue(self, step: Step) -> concurrent.futures.Future:
        """
        Queue a buffer mutation that is not an action, such as drawing a
        newly loaded image, behind every step already dispatched.

        Actions appended afterwards wait for ``step``'s future when replay is
        serialized. The cursor and events are not touched.

        Returns:
            Future resolved once ``step`` has completed
        """
        self._dispatch(step)
        return self._tail

    # ------------------------------------------------------------------
    # Dispatch
    # ------------------------------------------------------------------

    def _dispatch(self, step: Step) -> None:
        previous = self._tail

        if not self._serialize_replay or previous.done():
            self._tail = step()
            return

        chained: concurrent.futures.Future = concurrent.futures.Future()

        def run_after(done: concurrent.futures.Future) -> None:
            if done.exception() is not None:
                logger.warning(f"Previous buffer step failed: {done.exception()}")
            try:
                result = step()
            except Exception as exc:
                logger.error(f"Buffer step failed: {exc}")
                chained.set_exception(exc)
                return
            chain_future(result, chained)

        previous.add_done_callback(run_after)
        self._tail = chained
