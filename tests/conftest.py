"""
Pytest configuration and shared fixtures for Open Redact tests.

This module provides shared test images, buffers and event logs
used across multiple test modules.
"""

import pytest
from PIL import Image, ImageDraw

from OR_Libs.HistoryLib.event_log import EventLog
from OR_Libs.ImageEditingLib.pixel_buffer import PixelBuffer
from OR_Libs.ImageEditingLib.redaction_ops import create_default_library
from OR_Libs.ImageEditingLib.scheduling import run_immediately

WHITE = (255, 255, 255, 255)
BLACK = (0, 0, 0, 255)


def make_checkerboard(size=100, block=8):
    """Black/white checkerboard with ``block`` pixel squares."""
    image = Image.new("RGBA", (size, size), WHITE)
    draw = ImageDraw.Draw(image)
    for y in range(0, size, block):
        for x in range(0, size, block):
            if (x // block + y // block) % 2:
                draw.rectangle((x, y, x + block - 1, y + block - 1), fill=BLACK)
    return image


@pytest.fixture
def white_image():
    """500x500 opaque white image."""
    return Image.new("RGBA", (500, 500), WHITE)


@pytest.fixture
def checkerboard_image():
    """100x100 checkerboard with 8 pixel squares."""
    return make_checkerboard()


@pytest.fixture
def log_factory():
    """
    Build (buffer, log) pairs over a pristine image.

    The reset hook clears the buffer and redraws the pristine image.
    """

    def build(image, scheduler=run_immediately, serialize_replay=True):
        buffer = PixelBuffer.from_image(image)
        library = create_default_library(buffer, scheduler=scheduler)

        def reset():
            buffer.clear()
            buffer.draw_image(image)

        log = EventLog(library, reset_hook=reset, serialize_replay=serialize_replay)
        return buffer, log

    return build
