"""
Redaction Operations and Library.

This module provides the two redaction operations and a registry that
dispatches them by kind name. Each operation takes a rectangle and a pixel
buffer, mutates the buffer, and returns a future that resolves once the
pixels have actually changed.

Classes:
    RedactionLibrary: Registry of redaction operations bound to one buffer

Functions:
    black_out: Fill a rectangle with an opaque color
    blur: Redraw a rectangle from a snapshot with the blur filter enabled
    create_default_library: Build a library with both built-in kinds
"""

import concurrent.futures
import logging
from functools import partial
from typing import Any, Callable, Dict, List, Optional

from OR_Libs.constants import (
    DEFAULT_BLUR_RADIUS,
    DEFAULT_BLUR_TYPE,
    DEFAULT_FILL_COLOR,
    FILTER_BLUR,
    REDACTION_BLACK_OUT,
    REDACTION_BLUR,
)
from OR_Libs.exceptions import BufferNotInitializedError, UnknownRedactionKindError
from OR_Libs.ImageEditingLib.pixel_buffer import PixelBuffer, decode_image
from OR_Libs.ImageEditingLib.redaction_models import Rectangle, RgbaColor
from OR_Libs.ImageEditingLib.scheduling import Scheduler, completed_future, run_immediately

logger = logging.getLogger(__name__)

# Type alias for operation functions
RedactionOperation = Callable[[Rectangle, PixelBuffer], concurrent.futures.Future]
BoundOperation = Callable[[Rectangle], concurrent.futures.Future]


# ============================================================================
# Operations
# ============================================================================

def black_out(
    rect: Rectangle,
    buffer: PixelBuffer,
    fill_color: RgbaColor = DEFAULT_FILL_COLOR,
) -> concurrent.futures.Future:
    """
    Fill ``rect`` with an opaque solid color.

    Idempotent: applying it twice over the same rectangle gives the same
    pixels as applying it once. Completes synchronously.
    """
    buffer.fill_style = fill_color
    buffer.fill_rect(rect)
    return completed_future()


def blur(
    rect: Rectangle,
    buffer: PixelBuffer,
    scheduler: Scheduler = run_immediately,
    blur_type: str = DEFAULT_BLUR_TYPE,
    radius: float = DEFAULT_BLUR_RADIUS,
) -> concurrent.futures.Future:
    """
    Smooth the pixels inside ``rect``.

    A snapshot of the whole raster is encoded immediately. Decoding it is
    handed to ``scheduler``; once decoded, the blur filter is enabled, the
    snapshot is drawn back with ``rect`` as both source and destination, and
    the filter is disabled again. Only ``rect`` changes.

    The pixel mutation therefore happens whenever the scheduler runs the
    callback, not necessarily before this function returns.

    Returns:
        Future resolved after the filtered redraw. If the redraw fails the
        exception is logged and set on the future.
    """
    future: concurrent.futures.Future = concurrent.futures.Future()
    # Pixels outside the buffer would crop in as transparent black and bleed
    # into the edge under the filter.
    rect = rect.clipped(buffer.width, buffer.height)
    snapshot = buffer.snapshot()

    def on_snapshot_loaded() -> None:
        try:
            image = decode_image(snapshot)
            buffer.set_filter(FILTER_BLUR, blur_type=blur_type, radius=radius)
            try:
                buffer.draw_image(image, source=rect, dest=rect)
            finally:
                buffer.clear_filter()
        except Exception as exc:
            logger.error(f"Blur of {rect.as_tuple()} failed: {exc}")
            future.set_exception(exc)
            return
        future.set_result(None)

    scheduler(on_snapshot_loaded)
    return future


# ============================================================================
# Registry
# ============================================================================

class RedactionLibrary:
    """
    Registry of redaction operations keyed by kind name.

    Operations are looked up by ``Action.kind`` and run against the bound
    pixel buffer. Adding a redaction kind means registering one more
    operation here.

    Example:
        >>> library = RedactionLibrary(buffer)
        >>> library.register("black-out", black_out)
        >>> library.execute("black-out", Rectangle(0, 0, 10, 10))
    """

    def __init__(self, buffer: Optional[PixelBuffer] = None):
        """
        Initialize an empty library.

        Args:
            buffer: The pixel buffer operations draw on. May be bound later
                    with bind_buffer().
        """
        self._buffer = buffer
        self._operations: Dict[str, RedactionOperation] = {}
        self._metadata: Dict[str, Dict[str, Any]] = {}

    @property
    def buffer(self) -> Optional[PixelBuffer]:
        return self._buffer

    def bind_buffer(self, buffer: PixelBuffer) -> None:
        self._buffer = buffer

    def register(
        self,
        kind: str,
        operation: RedactionOperation,
        description: str = "",
        asynchronous: bool = False,
    ) -> None:
        """
        Register a redaction operation.

        Args:
            kind: Unique kind name (e.g., "black-out")
            operation: Callable accepting (rect, buffer) and returning a Future
            description: Human-readable description
            asynchronous: Whether the pixel mutation may complete after the
                          operation returns

        Raises:
            ValueError: If kind is empty or operation is not callable
            RuntimeError: If kind is already registered
        """
        kind = str(kind).strip()

        if not kind:
            raise ValueError("kind cannot be empty")

        if not callable(operation):
            raise ValueError(f"operation must be callable, got {type(operation)}")

        if kind in self._operations:
            raise RuntimeError(
                f"Redaction kind '{kind}' is already registered. "
                f"Use unregister() first to replace it."
            )

        self._operations[kind] = operation
        self._metadata[kind] = {
            "description": str(description),
            "asynchronous": bool(asynchronous),
        }

        logger.debug(f"Registered redaction operation: {kind}")

    def unregister(self, kind: str) -> bool:
        """
        Unregister a redaction operation.

        Returns:
            True if unregistered, False if kind was not registered
        """
        kind = str(kind).strip()

        if kind in self._operations:
            del self._operations[kind]
            del self._metadata[kind]
            logger.debug(f"Unregistered redaction operation: {kind}")
            return True

        return False

    def get_operation(self, kind: str) -> RedactionOperation:
        """
        Get the operation registered for a kind.

        Raises:
            UnknownRedactionKindError: If kind is not registered
        """
        kind = str(kind).strip()

        if kind not in self._operations:
            available = ", ".join(self.list_kinds())
            raise UnknownRedactionKindError(
                f"No operation registered for redaction kind '{kind}'. "
                f"Available kinds: {available}"
            )

        return self._operations[kind]

    def has_operation(self, kind: str) -> bool:
        return str(kind).strip() in self._operations

    def list_kinds(self) -> List[str]:
        return sorted(self._operations.keys())

    def get_metadata(self, kind: str) -> Dict[str, Any]:
        """
        Get metadata for a kind.

        Raises:
            UnknownRedactionKindError: If kind is not registered
        """
        kind = str(kind).strip()

        if kind not in self._metadata:
            raise UnknownRedactionKindError(f"No metadata for redaction kind: {kind}")

        return dict(self._metadata[kind])

    def bind(self, kind: str) -> BoundOperation:
        """
        Resolve ``kind`` against the bound buffer without running it.

        Both preconditions (known kind, bound buffer) are checked here, so
        callers can validate before committing any state.

        Raises:
            UnknownRedactionKindError: If kind is not registered
            BufferNotInitializedError: If no buffer is bound
        """
        operation = self.get_operation(kind)
        if self._buffer is None:
            raise BufferNotInitializedError(
                f"Cannot run '{kind}': pixel buffer is not initialized"
            )
        return partial(operation, buffer=self._buffer)

    def execute(self, kind: str, rect: Rectangle) -> concurrent.futures.Future:
        """Look up ``kind`` and run it on ``rect`` against the bound buffer."""
        return self.bind(kind)(rect)


def create_default_library(
    buffer: Optional[PixelBuffer] = None,
    scheduler: Scheduler = run_immediately,
    fill_color: RgbaColor = DEFAULT_FILL_COLOR,
    blur_type: str = DEFAULT_BLUR_TYPE,
    blur_radius: float = DEFAULT_BLUR_RADIUS,
) -> RedactionLibrary:
    """
    Build a library with the built-in redaction kinds registered.

    Args:
        buffer: Pixel buffer to bind (may be bound later)
        scheduler: Scheduler used for the blur snapshot decode
        fill_color: Color used by black-out
        blur_type: 'gaussian' or 'box'
        blur_radius: Blur radius in pixels

    Returns:
        A RedactionLibrary with 'black-out' and 'blur' registered
    """
    library = RedactionLibrary(buffer)

    library.register(
        kind=REDACTION_BLACK_OUT,
        operation=partial(black_out, fill_color=tuple(fill_color)),
        description="Fill the region with an opaque solid color",
    )

    library.register(
        kind=REDACTION_BLUR,
        operation=partial(blur, scheduler=scheduler, blur_type=blur_type, radius=blur_radius),
        description="Smooth the region by redrawing it through a blur filter",
        asynchronous=True,
    )

    logger.info("Registered default redaction operations")
    return library
