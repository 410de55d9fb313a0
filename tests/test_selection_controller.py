"""
Tests for the SelectionController and ModeSelector.

These drive full gestures through a RedactionSession-free wiring: a
pixel buffer, default library, event log and overlay built per test.
"""

from unittest.mock import Mock

import pytest

from OR_Libs.constants import SELECTION_OUTLINE_COLOR, TRANSPARENT
from OR_Libs.exceptions import UnknownRedactionModeError
from OR_Libs.ImageEditingLib.redaction_models import Action, Rectangle
from OR_Libs.SelectionLib.gesture_state import DRAGGING, IDLE
from OR_Libs.SelectionLib.selection_controller import ModeSelector, SelectionController
from OR_Libs.SelectionLib.selection_overlay import SelectionOverlay

from conftest import BLACK, WHITE


@pytest.fixture
def wired(white_image, log_factory):
    buffer, log = log_factory(white_image)
    modes = ModeSelector()
    overlay = SelectionOverlay(500, 500)
    controller = SelectionController(log, modes, overlay)
    return buffer, log, modes, overlay, controller


class TestGestures:
    def test_drag_blacks_out_region(self, wired):
        buffer, log, _, _, controller = wired

        controller.pointer_down(10, 10)
        controller.pointer_move(40, 40)
        action = controller.pointer_up(60, 60)

        assert action == Action("black-out", Rectangle(10, 10, 60, 60))
        assert buffer.get_pixel(30, 30) == BLACK
        assert buffer.get_pixel(5, 5) == WHITE

        log.undo()
        assert buffer.get_pixel(30, 30) == WHITE

        log.redo()
        assert buffer.get_pixel(30, 30) == BLACK

    def test_state_cycles(self, wired):
        *_, controller = wired

        assert controller.state.phase == IDLE
        controller.pointer_down(0, 0)
        assert controller.state.phase == DRAGGING
        controller.pointer_up(5, 5)
        assert controller.state.phase == IDLE
        controller.pointer_down(1, 1)
        assert controller.is_dragging

    def test_move_while_idle_is_ignored(self, wired):
        _, log, _, overlay, controller = wired

        controller.pointer_move(30, 30)

        assert controller.state.phase == IDLE
        assert overlay.is_clear
        assert len(log) == 0

    def test_up_while_idle_appends_nothing(self, wired):
        _, log, _, _, controller = wired

        assert controller.pointer_up(30, 30) is None
        assert len(log) == 0

    def test_move_draws_preview_without_touching_buffer(self, wired):
        buffer, _, _, overlay, controller = wired

        controller.pointer_down(10, 10)
        controller.pointer_move(30, 30)

        assert overlay.outline == Rectangle(10, 10, 30, 30)
        assert overlay.image.getpixel((10, 10)) == SELECTION_OUTLINE_COLOR
        assert overlay.image.getpixel((20, 20)) == TRANSPARENT
        assert buffer.get_pixel(10, 10) == WHITE

    def test_up_clears_preview(self, wired):
        _, _, _, overlay, controller = wired

        controller.pointer_down(10, 10)
        controller.pointer_move(30, 30)
        controller.pointer_up(30, 30)

        assert overlay.is_clear
        assert overlay.image.getpixel((10, 10)) == TRANSPARENT

    def test_degenerate_gesture_is_appended(self, wired):
        buffer, log, _, _, controller = wired
        before = buffer.to_image().tobytes()

        controller.pointer_down(25, 25)
        action = controller.pointer_up(25, 25)

        assert action.rect.is_empty
        assert log.cursor == 1
        assert log.events == (action,)
        assert buffer.to_image().tobytes() == before

    def test_reversed_drag_is_normalized(self, wired):
        buffer, log, _, _, controller = wired

        controller.pointer_down(60, 60)
        controller.pointer_up(10, 10)

        rect = log.events[0].rect
        assert rect.x0 <= rect.x1 and rect.y0 <= rect.y1
        assert rect == Rectangle(10, 10, 60, 60)
        assert buffer.get_pixel(30, 30) == BLACK

    def test_origin_converts_to_buffer_coordinates(self, white_image, log_factory):
        _, log = log_factory(white_image)
        controller = SelectionController(log, ModeSelector(), origin=(100, 50))

        controller.pointer_down(110, 60)
        controller.pointer_up(160, 110)

        assert log.events[0].rect == Rectangle(10, 10, 60, 60)

    def test_works_without_overlay(self, white_image, log_factory):
        buffer, log = log_factory(white_image)
        controller = SelectionController(log, ModeSelector())

        controller.pointer_down(0, 0)
        controller.pointer_move(5, 5)
        controller.pointer_up(10, 10)

        assert buffer.get_pixel(5, 5) == BLACK


class TestModes:
    def test_mode_read_at_completion(self, wired):
        _, log, modes, _, controller = wired

        controller.pointer_down(10, 10)
        modes.mode = "blur"
        controller.pointer_up(60, 60)

        assert log.events[0].kind == "blur"

    def test_illegal_mode_fails_loudly(self, white_image, log_factory):
        _, log = log_factory(white_image)
        source = Mock()
        source.current.return_value = "pixelate"
        controller = SelectionController(log, source)

        controller.pointer_down(10, 10)
        with pytest.raises(UnknownRedactionModeError):
            controller.pointer_up(60, 60)
        assert len(log) == 0
        assert controller.state.phase == IDLE


class TestModeSelector:
    def test_default_is_black_out(self):
        assert ModeSelector().current() == "black-out"

    def test_set_blur(self):
        modes = ModeSelector()

        modes.mode = "blur"

        assert modes.current() == "blur"

    def test_rejects_unknown_mode(self):
        modes = ModeSelector()

        with pytest.raises(ValueError):
            modes.mode = "pixelate"
        assert modes.current() == "black-out"

    def test_rejects_unknown_initial_mode(self):
        with pytest.raises(ValueError):
            ModeSelector("pixelate")
