"""
Tests for redaction operations and the RedactionLibrary registry.
"""

from unittest.mock import Mock

import numpy as np
import pytest

from OR_Libs.constants import FILTER_NONE
from OR_Libs.exceptions import BufferNotInitializedError, UnknownRedactionKindError
from OR_Libs.ImageEditingLib.pixel_buffer import PixelBuffer
from OR_Libs.ImageEditingLib.redaction_models import Rectangle
from OR_Libs.ImageEditingLib.redaction_ops import (
    RedactionLibrary,
    black_out,
    blur,
    create_default_library,
)
from OR_Libs.ImageEditingLib.scheduling import DeferredScheduler, completed_future

from conftest import BLACK, WHITE


class TestBlackOut:
    def test_fills_rectangle(self, white_image):
        buffer = PixelBuffer.from_image(white_image)

        black_out(Rectangle(10, 10, 60, 60), buffer)

        assert buffer.get_pixel(10, 10) == BLACK
        assert buffer.get_pixel(59, 59) == BLACK
        assert buffer.get_pixel(60, 60) == WHITE

    def test_custom_fill_color(self, white_image):
        buffer = PixelBuffer.from_image(white_image)

        black_out(Rectangle(0, 0, 5, 5), buffer, fill_color=(255, 0, 0, 255))

        assert buffer.get_pixel(2, 2) == (255, 0, 0, 255)

    def test_is_idempotent(self, checkerboard_image):
        once = PixelBuffer.from_image(checkerboard_image)
        twice = PixelBuffer.from_image(checkerboard_image)
        rect = Rectangle(12, 7, 55, 81)

        black_out(rect, once)
        black_out(rect, twice)
        black_out(rect, twice)

        assert once.to_image().tobytes() == twice.to_image().tobytes()

    def test_completes_synchronously(self, white_image):
        buffer = PixelBuffer.from_image(white_image)

        future = black_out(Rectangle(0, 0, 5, 5), buffer)

        assert future.done()
        assert future.result() is None


class TestBlur:
    def test_only_rectangle_changes(self, checkerboard_image):
        buffer = PixelBuffer.from_image(checkerboard_image)
        before = np.array(buffer.to_image())

        blur(Rectangle(20, 20, 60, 60), buffer)
        after = np.array(buffer.to_image())

        outside = np.ones(before.shape[:2], dtype=bool)
        outside[20:60, 20:60] = False
        assert np.array_equal(before[outside], after[outside])
        assert not np.array_equal(before[20:60, 20:60], after[20:60, 20:60])

    def test_waits_for_snapshot(self, checkerboard_image):
        scheduler = DeferredScheduler()
        buffer = PixelBuffer.from_image(checkerboard_image)
        before = buffer.to_image().tobytes()

        future = blur(Rectangle(20, 20, 60, 60), buffer, scheduler=scheduler)

        assert not future.done()
        assert buffer.to_image().tobytes() == before

        scheduler.run_all()

        assert future.done()
        assert buffer.to_image().tobytes() != before

    def test_filter_disabled_afterwards(self, checkerboard_image):
        buffer = PixelBuffer.from_image(checkerboard_image)

        blur(Rectangle(0, 0, 50, 50), buffer)

        assert buffer.filter == FILTER_NONE

    def test_successive_blurs_compound(self, checkerboard_image):
        once = PixelBuffer.from_image(checkerboard_image)
        twice = PixelBuffer.from_image(checkerboard_image)
        rect = Rectangle(10, 10, 90, 90)

        blur(rect, once)
        blur(rect, twice)
        blur(rect, twice)

        assert once.to_image().tobytes() != twice.to_image().tobytes()

    def test_zero_area_rectangle_is_noop(self, checkerboard_image):
        buffer = PixelBuffer.from_image(checkerboard_image)
        before = buffer.to_image().tobytes()

        future = blur(Rectangle(30, 30, 30, 30), buffer)

        assert future.done()
        assert buffer.to_image().tobytes() == before

    def test_rectangle_past_edge_keeps_uniform_color(self, white_image):
        buffer = PixelBuffer.from_image(white_image)

        future = blur(Rectangle(-20, -20, 30, 30), buffer)

        assert future.done()
        assert buffer.get_pixel(0, 0) == WHITE
        assert buffer.get_pixel(2, 10) == WHITE
        assert buffer.get_pixel(29, 29) == WHITE

    def test_rectangle_past_edge_matches_clipped_rectangle(self, checkerboard_image):
        overflowing = PixelBuffer.from_image(checkerboard_image)
        clipped = PixelBuffer.from_image(checkerboard_image)

        blur(Rectangle(70, -15, 130, 40), overflowing)
        blur(Rectangle(70, 0, 100, 40), clipped)

        assert overflowing.to_image().tobytes() == clipped.to_image().tobytes()

    def test_failure_is_set_on_future(self, checkerboard_image):
        scheduler = DeferredScheduler()
        buffer = PixelBuffer.from_image(checkerboard_image)

        future = blur(Rectangle(0, 0, 10, 10), buffer, scheduler=scheduler, radius=500)

        scheduler.run_all()

        assert isinstance(future.exception(), ValueError)
        assert buffer.filter == FILTER_NONE


class TestRedactionLibrary:
    def setup_method(self):
        self.library = RedactionLibrary(buffer=Mock())

    def test_register_and_execute(self):
        operation = Mock(return_value=completed_future())
        self.library.register("mark", operation)
        rect = Rectangle(0, 0, 1, 1)

        self.library.execute("mark", rect)

        operation.assert_called_once_with(rect, buffer=self.library.buffer)

    def test_register_duplicate_raises(self):
        self.library.register("mark", Mock())

        with pytest.raises(RuntimeError):
            self.library.register("mark", Mock())

    def test_register_empty_kind_raises(self):
        with pytest.raises(ValueError):
            self.library.register("  ", Mock())

    def test_register_non_callable_raises(self):
        with pytest.raises(ValueError):
            self.library.register("mark", "not callable")

    def test_unregister(self):
        self.library.register("mark", Mock())

        assert self.library.unregister("mark") is True
        assert self.library.unregister("mark") is False
        assert not self.library.has_operation("mark")

    def test_unknown_kind_raises_key_error(self):
        with pytest.raises(KeyError):
            self.library.get_operation("pixelate")
        with pytest.raises(UnknownRedactionKindError):
            self.library.get_metadata("pixelate")

    def test_bind_without_buffer_raises(self):
        library = RedactionLibrary()
        library.register("mark", Mock())

        with pytest.raises(BufferNotInitializedError):
            library.bind("mark")

    def test_bind_buffer_later(self, white_image):
        library = create_default_library()
        buffer = PixelBuffer.from_image(white_image)
        library.bind_buffer(buffer)

        library.execute("black-out", Rectangle(0, 0, 4, 4))

        assert buffer.get_pixel(1, 1) == BLACK


class TestDefaultLibrary:
    def test_registers_both_kinds(self):
        library = create_default_library()

        assert library.list_kinds() == ["black-out", "blur"]

    def test_blur_is_marked_asynchronous(self):
        library = create_default_library()

        assert library.get_metadata("blur")["asynchronous"] is True
        assert library.get_metadata("black-out")["asynchronous"] is False

    def test_uses_configured_fill_color(self, white_image):
        buffer = PixelBuffer.from_image(white_image)
        library = create_default_library(buffer, fill_color=(10, 20, 30, 255))

        library.execute("black-out", Rectangle(0, 0, 4, 4))

        assert buffer.get_pixel(1, 1) == (10, 20, 30, 255)
