"""
Rectangle-selection gesture state machine.

The gesture is either idle or dragging. Transitions are pure functions
from one immutable GestureState to the next; nothing here draws or touches
a pixel buffer.

    idle --pointer_down--> dragging
    dragging --pointer_move--> dragging
    dragging --pointer_up--> idle   (emits the normalized Rectangle)

A pointer move or pointer up while idle is ignored. A pointer down while
dragging restarts the drag from the new position.
"""

from dataclasses import dataclass
from typing import Optional, Tuple

from OR_Libs.ImageEditingLib.redaction_models import Point, Rectangle

IDLE = "idle"
DRAGGING = "dragging"


@dataclass(frozen=True)
class GestureState:
    phase: str = IDLE
    start: Optional[Point] = None
    end: Optional[Point] = None

    @property
    def is_dragging(self) -> bool:
        return self.phase == DRAGGING

    def preview_rect(self) -> Optional[Rectangle]:
        """Normalized rectangle for the in-progress drag, if any."""
        if not self.is_dragging or self.start is None or self.end is None:
            return None
        return Rectangle.from_points(self.start, self.end)


def pointer_down(state: GestureState, point: Point) -> GestureState:
    return GestureState(phase=DRAGGING, start=point, end=point)


def pointer_move(state: GestureState, point: Point) -> GestureState:
    if not state.is_dragging:
        return state
    return GestureState(phase=DRAGGING, start=state.start, end=point)


def pointer_up(state: GestureState, point: Point) -> Tuple[GestureState, Optional[Rectangle]]:
    """
    Finish the drag at ``point``.

    Returns:
        (next_state, rect). ``rect`` is None when no drag was in progress.
        A zero-width or zero-height rectangle is returned as is.
    """
    if not state.is_dragging or state.start is None:
        return state, None
    return GestureState(), Rectangle.from_points(state.start, point)
