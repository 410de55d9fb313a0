"""
Preview surface for the selection outline.

The overlay is a transparent RGBA image stacked above the pixel buffer. The
outline drawn here never reaches the buffer itself.
"""

from typing import Any, Optional, Tuple

from PIL import Image, ImageDraw

from OR_Libs.constants import (
    BUFFER_MODE,
    DEFAULT_CANVAS_HEIGHT,
    DEFAULT_CANVAS_WIDTH,
    SELECTION_OUTLINE_COLOR,
    SELECTION_OUTLINE_WIDTH,
    TRANSPARENT,
)
from OR_Libs.ImageEditingLib.redaction_models import Rectangle, RgbaColor


class SelectionOverlay:
    def __init__(
        self,
        width: int = DEFAULT_CANVAS_WIDTH,
        height: int = DEFAULT_CANVAS_HEIGHT,
        outline_color: RgbaColor = SELECTION_OUTLINE_COLOR,
        outline_width: int = SELECTION_OUTLINE_WIDTH,
    ) -> None:
        self._image = Image.new(BUFFER_MODE, (int(width), int(height)), TRANSPARENT)
        self.outline_color = tuple(outline_color)
        self.outline_width = int(outline_width)
        self._outline: Optional[Rectangle] = None

    @property
    def size(self) -> Tuple[int, int]:
        return self._image.size

    @property
    def image(self) -> Any:
        return self._image

    @property
    def outline(self) -> Optional[Rectangle]:
        return self._outline

    @property
    def is_clear(self) -> bool:
        return self._outline is None

    def resize(self, width: int, height: int) -> None:
        self._image = Image.new(BUFFER_MODE, (int(width), int(height)), TRANSPARENT)
        self._outline = None

    def clear(self) -> None:
        self._image.paste(TRANSPARENT, (0, 0) + self.size)
        self._outline = None

    def draw_outline(self, rect: Rectangle) -> None:
        """Replace any previous outline with one around ``rect``."""
        self.clear()
        left, top, right, bottom = rect.to_box()
        # ImageDraw boxes are inclusive of the bottom-right pixel
        draw = ImageDraw.Draw(self._image)
        draw.rectangle(
            (left, top, max(left, right - 1), max(top, bottom - 1)),
            outline=self.outline_color,
            width=self.outline_width,
        )
        self._outline = rect

    def composite_onto(self, base: Any) -> Any:
        """Return ``base`` with the overlay drawn on top (sizes must match)."""
        merged = base.convert(BUFFER_MODE) if base.mode != BUFFER_MODE else base.copy()
        merged.alpha_composite(self._image)
        return merged
