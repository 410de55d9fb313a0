"""
Redaction session: one image, its history, and the selection gesture.

The session wires a pixel buffer, the selection overlay, the redaction
library, the event log, and the selection controller together, and owns the
pristine copy of the loaded image that the log's reset hook restores.

Example:
    >>> session = RedactionSession()
    >>> session.load_image("scan.png")
    >>> session.selection.pointer_down(10, 10)
    >>> session.selection.pointer_up(60, 60)
    >>> session.undo()
    >>> session.export_png("scan_redacted.png")
"""

import concurrent.futures
import logging
from pathlib import Path
from typing import Any, Optional, Union

from PIL import Image

from OR_Libs.config import RedactionConfig
from OR_Libs.constants import BUFFER_MODE
from OR_Libs.HistoryLib.event_log import EventLog
from OR_Libs.ImageEditingLib.pixel_buffer import PixelBuffer, decode_image
from OR_Libs.ImageEditingLib.redaction_ops import create_default_library
from OR_Libs.ImageEditingLib.scheduling import Scheduler, run_immediately
from OR_Libs.SelectionLib.selection_controller import ModeSelector, SelectionController
from OR_Libs.SelectionLib.selection_overlay import SelectionOverlay

logger = logging.getLogger(__name__)

ImageSource = Union[str, Path, bytes, Any]


def open_image(source: ImageSource) -> Any:
    """
    Open an image from a path, encoded bytes, or an existing PIL Image.

    Returns:
        A loaded RGBA copy

    Raises:
        FileNotFoundError: If a path does not exist
        OSError: If the data cannot be decoded
    """
    if isinstance(source, (bytes, bytearray)):
        return decode_image(bytes(source))

    if hasattr(source, "convert"):
        return source.convert(BUFFER_MODE)

    path = Path(source)
    if not path.exists():
        raise FileNotFoundError(f"Image file not found: {path}")

    with Image.open(path) as image:
        image.load()
        return image.convert(BUFFER_MODE)


class RedactionSession:
    def __init__(
        self,
        config: Optional[RedactionConfig] = None,
        scheduler: Scheduler = run_immediately,
    ) -> None:
        self.config = config or RedactionConfig()
        self._scheduler = scheduler
        self._pristine: Optional[Any] = None

        self.buffer = PixelBuffer(self.config.canvas_width, self.config.canvas_height)
        self.overlay = SelectionOverlay(
            self.config.canvas_width,
            self.config.canvas_height,
            outline_color=self.config.outline_color,
            outline_width=self.config.outline_width,
        )
        self.library = create_default_library(
            self.buffer,
            scheduler=scheduler,
            fill_color=self.config.fill_color,
            blur_type=self.config.blur_type,
            blur_radius=self.config.blur_radius,
        )
        self.event_log = EventLog(self.library, serialize_replay=self.config.serialize_replay)
        self.mode_selector = ModeSelector(self.config.default_mode)
        self.selection = SelectionController(self.event_log, self.mode_selector, self.overlay)

    @property
    def has_image(self) -> bool:
        return self._pristine is not None

    @property
    def mode(self) -> str:
        return self.mode_selector.current()

    def set_mode(self, mode: str) -> None:
        self.mode_selector.mode = mode

    def load_image(self, source: ImageSource) -> None:
        """
        Load a new base image.

        The image is decoded now and drawn when the scheduler resumes. The
        reset hook is rebound to the new image and the history is cleared,
        since earlier actions belong to the previous image. The first draw
        is queued on the event log, so actions recorded before it lands are
        applied on top of it rather than wiped by it.
        """
        image = open_image(source)
        self._pristine = image
        self.event_log.clear()
        self.event_log.bind_reset(self._restore_pristine)
        logger.info(f"Loaded image {image.width}x{image.height}")

        def draw_loaded() -> None:
            if self.config.match_image_size and self.buffer.size != image.size:
                self.buffer.resize(image.width, image.height)
                self.overlay.resize(image.width, image.height)
            self._restore_pristine()

        def schedule_draw() -> concurrent.futures.Future:
            future: concurrent.futures.Future = concurrent.futures.Future()

            def on_image_loaded() -> None:
                try:
                    draw_loaded()
                except Exception as exc:
                    logger.error(f"Drawing loaded image failed: {exc}")
                    future.set_exception(exc)
                    return
                future.set_result(None)

            self._scheduler(on_image_loaded)
            return future

        self.event_log.enqueue(schedule_draw)

    def _restore_pristine(self) -> None:
        self.buffer.clear()
        self.buffer.draw_image(self._pristine)

    def undo(self) -> None:
        self.event_log.undo()

    def redo(self) -> None:
        self.event_log.redo()

    def render(self) -> Any:
        """Current buffer with the selection overlay on top."""
        return self.overlay.composite_onto(self.buffer.to_image())

    def export_png(self, path: Optional[Union[str, Path]] = None) -> bytes:
        """
        Encode the buffer as PNG, optionally writing it to ``path``.

        Raises:
            OSError: If the file cannot be written
        """
        data = self.buffer.encode()
        if path is not None:
            Path(path).write_bytes(data)
            logger.info(f"Exported {len(data)} bytes to {path}")
        return data
