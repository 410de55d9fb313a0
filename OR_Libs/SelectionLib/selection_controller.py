"""
Selection controller: turns pointer gestures into logged redactions.

Classes:
    ModeSelector: Holder for the redaction kind new selections produce
    SelectionController: Drives the gesture state machine and appends actions
"""

import logging
from typing import Optional

from OR_Libs.constants import DEFAULT_REDACTION_MODE, REDACTION_KINDS
from OR_Libs.exceptions import UnknownRedactionModeError
from OR_Libs.HistoryLib.event_log import EventLog
from OR_Libs.ImageEditingLib.redaction_models import Action, Point
from OR_Libs.SelectionLib import gesture_state
from OR_Libs.SelectionLib.gesture_state import GestureState
from OR_Libs.SelectionLib.selection_overlay import SelectionOverlay

logger = logging.getLogger(__name__)


class ModeSelector:
    """
    Current redaction mode, set by the UI and read at gesture completion.

    Only 'black-out' and 'blur' are accepted.
    """

    def __init__(self, mode: str = DEFAULT_REDACTION_MODE) -> None:
        self._mode = DEFAULT_REDACTION_MODE
        self.mode = mode

    @property
    def mode(self) -> str:
        return self._mode

    @mode.setter
    def mode(self, value: str) -> None:
        if value not in REDACTION_KINDS:
            raise ValueError(
                f"Invalid redaction mode: {value!r}. "
                f"Valid modes: {', '.join(REDACTION_KINDS)}"
            )
        self._mode = value

    def current(self) -> str:
        return self._mode


class SelectionController:
    """
    Pointer-driven rectangle selection feeding an EventLog.

    Pointer positions are given in the embedding surface's coordinates and
    converted to buffer-local ones by subtracting ``origin``.

    Args:
        event_log: Log that receives one Action per completed gesture
        mode_source: Object whose ``current()`` returns the redaction kind
        overlay: Optional preview surface for the drag outline
        origin: Buffer top-left corner in pointer coordinates
    """

    def __init__(
        self,
        event_log: EventLog,
        mode_source: ModeSelector,
        overlay: Optional[SelectionOverlay] = None,
        origin: Point = (0.0, 0.0),
    ) -> None:
        self.event_log = event_log
        self.mode_source = mode_source
        self.overlay = overlay
        self.origin = origin
        self._state = GestureState()

    @property
    def state(self) -> GestureState:
        return self._state

    @property
    def is_dragging(self) -> bool:
        return self._state.is_dragging

    def _to_local(self, x: float, y: float) -> Point:
        return (x - self.origin[0], y - self.origin[1])

    def pointer_down(self, x: float, y: float) -> None:
        self._state = gesture_state.pointer_down(self._state, self._to_local(x, y))

    def pointer_move(self, x: float, y: float) -> None:
        if not self._state.is_dragging:
            return

        self._state = gesture_state.pointer_move(self._state, self._to_local(x, y))
        preview = self._state.preview_rect()
        if self.overlay is not None and preview is not None:
            self.overlay.draw_outline(preview)

    def pointer_up(self, x: float, y: float) -> Optional[Action]:
        """
        Complete the gesture and append the resulting action.

        Returns:
            The appended Action, or None if no drag was in progress

        Raises:
            UnknownRedactionModeError: If the mode source reports an
                                       illegal kind
        """
        self._state, rect = gesture_state.pointer_up(self._state, self._to_local(x, y))
        if rect is None:
            return None

        if self.overlay is not None:
            self.overlay.clear()

        mode = self.mode_source.current()
        if mode not in REDACTION_KINDS:
            raise UnknownRedactionModeError(mode)

        action = Action(kind=mode, rect=rect)
        self.event_log.append(action)
        logger.debug(f"Selection completed: {mode} {rect.as_tuple()}")
        return action
