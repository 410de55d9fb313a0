"""
Mutable raster surface that redaction operations draw on.

The buffer wraps a Pillow RGBA image and offers a small drawing contract:
filled rectangles, image drawing with optional source cropping and a
switchable filter, raw pixel region access, and PNG encoding.

Classes:
    PixelBuffer: The live raster surface

Functions:
    decode_image: Decode encoded image bytes into a loaded RGBA image
"""

import io
import logging
from typing import Any, Optional, Tuple

import numpy as np
from PIL import Image

from OR_Libs.constants import (
    BUFFER_MODE,
    DEFAULT_CANVAS_HEIGHT,
    DEFAULT_CANVAS_WIDTH,
    DEFAULT_FILL_COLOR,
    EXPORT_FORMAT,
    FILTER_BLUR,
    FILTER_NONE,
    SNAPSHOT_FORMAT,
    TRANSPARENT,
)
from OR_Libs.ImageEditingLib.blur_filter import ImageFilterFunction, make_blur_filter
from OR_Libs.ImageEditingLib.redaction_models import Rectangle, RgbaColor

logger = logging.getLogger(__name__)


def decode_image(data: bytes) -> Any:
    """
    Decode encoded image bytes into a fully loaded RGBA image.

    Args:
        data: Encoded image bytes (PNG, JPEG, ...)

    Returns:
        PIL Image in RGBA mode

    Raises:
        OSError: If the bytes cannot be decoded
    """
    with Image.open(io.BytesIO(data)) as image:
        image.load()
        return image.convert(BUFFER_MODE)


class PixelBuffer:
    """
    RGBA raster surface with a canvas-like drawing contract.

    Example:
        >>> buffer = PixelBuffer(200, 100)
        >>> buffer.fill_rect(Rectangle(10, 10, 50, 50))
        >>> buffer.get_pixel(20, 20)
        (0, 0, 0, 255)
    """

    def __init__(
        self,
        width: int = DEFAULT_CANVAS_WIDTH,
        height: int = DEFAULT_CANVAS_HEIGHT,
        background: RgbaColor = TRANSPARENT,
    ) -> None:
        if width <= 0 or height <= 0:
            raise ValueError(f"Buffer size must be positive, got {width}x{height}")

        self._image = Image.new(BUFFER_MODE, (int(width), int(height)), background)
        self._filter_name = FILTER_NONE
        self._filter: Optional[ImageFilterFunction] = None
        self.fill_style: RgbaColor = DEFAULT_FILL_COLOR

    @classmethod
    def from_image(cls, image: Any) -> "PixelBuffer":
        """Create a buffer sized to ``image`` and draw it at the origin."""
        buffer = cls(image.width, image.height)
        buffer.draw_image(image)
        return buffer

    # ------------------------------------------------------------------
    # Geometry
    # ------------------------------------------------------------------

    @property
    def size(self) -> Tuple[int, int]:
        return self._image.size

    @property
    def width(self) -> int:
        return self._image.width

    @property
    def height(self) -> int:
        return self._image.height

    def clear(self, color: RgbaColor = TRANSPARENT) -> None:
        """Overwrite every pixel with ``color``."""
        self._image.paste(color, (0, 0) + self.size)

    def resize(self, width: int, height: int) -> None:
        """Replace the surface with a blank one of the new size."""
        if width <= 0 or height <= 0:
            raise ValueError(f"Buffer size must be positive, got {width}x{height}")
        self._image = Image.new(BUFFER_MODE, (int(width), int(height)), TRANSPARENT)
        logger.debug(f"Resized pixel buffer to {width}x{height}")

    # ------------------------------------------------------------------
    # Filter toggle
    # ------------------------------------------------------------------

    @property
    def filter(self) -> str:
        """Name of the active filter ('none' when drawing unfiltered)."""
        return self._filter_name

    def set_filter(self, name: str, **params: Any) -> None:
        """
        Enable a named filter for subsequent draw_image calls.

        Args:
            name: 'blur' or 'none'
            **params: Filter parameters (blur: blur_type, radius)

        Raises:
            ValueError: If the filter name or its parameters are invalid
        """
        name = str(name).strip().lower()

        if name == FILTER_NONE:
            self.clear_filter()
            return

        if name == FILTER_BLUR:
            self._filter = make_blur_filter(**params)
            self._filter_name = FILTER_BLUR
            return

        raise ValueError(f"Unknown filter: {name}. Valid filters: {FILTER_NONE}, {FILTER_BLUR}")

    def clear_filter(self) -> None:
        self._filter = None
        self._filter_name = FILTER_NONE

    # ------------------------------------------------------------------
    # Drawing
    # ------------------------------------------------------------------

    def fill_rect(self, rect: Rectangle) -> None:
        """Fill ``rect`` with the current fill style (no blending)."""
        left, top, right, bottom = rect.clipped(self.width, self.height).to_box()
        if right <= left or bottom <= top:
            return
        self._image.paste(tuple(self.fill_style), (left, top, right, bottom))

    def draw_image(
        self,
        image: Any,
        source: Optional[Rectangle] = None,
        dest: Optional[Rectangle] = None,
    ) -> None:
        """
        Draw ``image`` onto the buffer with source-over compositing.

        Args:
            image: PIL Image to draw
            source: Region of ``image`` to draw (default: whole image)
            dest: Destination region in the buffer (default: source size at
                  the origin). The source is scaled when sizes differ.

        The active filter, if any, is applied to the (cropped, scaled) source
        before it is composited.
        """
        if not hasattr(image, "crop"):
            raise TypeError(f"Expected PIL Image, got {type(image)}")

        layer = image if image.mode == BUFFER_MODE else image.convert(BUFFER_MODE)

        if source is not None:
            left, top, right, bottom = source.to_box()
            if right <= left or bottom <= top:
                return
            layer = layer.crop((left, top, right, bottom))

        if dest is None:
            dest = Rectangle(0, 0, layer.width, layer.height)

        dest_left, dest_top, dest_right, dest_bottom = dest.to_box()
        dest_size = (dest_right - dest_left, dest_bottom - dest_top)
        if dest_size[0] <= 0 or dest_size[1] <= 0:
            return

        if layer.size != dest_size:
            layer = layer.resize(dest_size, Image.Resampling.LANCZOS)

        if self._filter is not None:
            layer = self._filter(layer)

        # Stage on a full-size transparent layer so negative or overflowing
        # destinations are clipped by paste() rather than rejected.
        staged = Image.new(BUFFER_MODE, self.size, TRANSPARENT)
        staged.paste(layer, (dest_left, dest_top))
        self._image.alpha_composite(staged)

    # ------------------------------------------------------------------
    # Raw pixel access
    # ------------------------------------------------------------------

    def get_pixel(self, x: int, y: int) -> RgbaColor:
        return self._image.getpixel((int(x), int(y)))

    def read_region(self, rect: Rectangle) -> np.ndarray:
        """
        Read raw RGBA pixels inside ``rect``.

        Returns:
            uint8 array of shape (height, width, 4), clipped to the buffer
        """
        box = rect.clipped(self.width, self.height).to_box()
        return np.array(self._image.crop(box), dtype=np.uint8)

    def write_region(self, pixels: Any, x: int, y: int) -> None:
        """
        Write raw RGBA pixels with their top-left corner at (x, y).

        Pixels replace the existing content (no blending).

        Raises:
            ValueError: If ``pixels`` is not an (h, w, 4) array
        """
        array = np.asarray(pixels, dtype=np.uint8)
        if array.ndim != 3 or array.shape[2] != 4:
            raise ValueError(f"Expected (height, width, 4) RGBA array, got shape {array.shape}")
        self._image.paste(Image.fromarray(array), (int(x), int(y)))

    # ------------------------------------------------------------------
    # Encoding
    # ------------------------------------------------------------------

    def encode(self, format: str = EXPORT_FORMAT) -> bytes:
        buffer = io.BytesIO()
        self._image.save(buffer, format=format)
        return buffer.getvalue()

    def snapshot(self) -> bytes:
        """Encode the current raster as PNG bytes."""
        return self.encode(SNAPSHOT_FORMAT)

    def to_image(self) -> Any:
        """Return a detached copy of the current raster."""
        return self._image.copy()
