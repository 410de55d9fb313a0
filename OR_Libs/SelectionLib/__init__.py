"""
SelectionLib - Rectangle selection over the pixel buffer

Modules:
    gesture_state: Pure idle/dragging transition functions
    selection_overlay: Preview surface for the drag outline
    selection_controller: Controller appending one action per gesture
"""

from OR_Libs.SelectionLib.gesture_state import DRAGGING, IDLE, GestureState
from OR_Libs.SelectionLib.selection_overlay import SelectionOverlay
from OR_Libs.SelectionLib.selection_controller import ModeSelector, SelectionController

__all__ = [
    "DRAGGING",
    "IDLE",
    "GestureState",
    "SelectionOverlay",
    "ModeSelector",
    "SelectionController",
]
