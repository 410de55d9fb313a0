"""
Blur Filter Operations.

Provides the blur algorithms a pixel buffer can switch on while drawing:
- Gaussian blur: Natural smooth blur with circular falloff
- Box blur: Simple averaging blur

Example:
    >>> from PIL import Image
    >>> img = Image.open("photo.jpg")
    >>>
    >>> # Gaussian blur
    >>> blurred = apply_gaussian_blur(img, radius=10)
    >>>
    >>> # Filter callable for a pixel buffer
    >>> blur = make_blur_filter("box", radius=4)
    >>> smoothed = blur(img)
"""

from typing import Any, Callable

from PIL import ImageFilter

from OR_Libs.constants import (
    BLUR_TYPE_BOX,
    BLUR_TYPE_GAUSSIAN,
    BLUR_TYPES,
    DEFAULT_BLUR_RADIUS,
    MAX_BLUR_RADIUS,
)

# Type alias for a filter applied to an image before it is drawn
ImageFilterFunction = Callable[[Any], Any]


def _validate_radius(radius: float) -> float:
    if not (0 < radius <= MAX_BLUR_RADIUS):
        raise ValueError(f"radius must be 0 < r <= {MAX_BLUR_RADIUS:g}, got {radius}")
    return float(radius)


# ============================================================================
# Gaussian Blur
# ============================================================================

def apply_gaussian_blur(
    image: Any,
    radius: float = DEFAULT_BLUR_RADIUS,
) -> Any:
    """
    Apply Gaussian blur to image.

    Args:
        image: PIL Image
        radius: Blur radius in pixels (0-100, exclusive of 0)
                Higher values = stronger blur

    Returns:
        Blurred PIL Image (same mode as input, palette images become RGBA)

    Raises:
        ValueError: If radius <= 0 or > 100
        TypeError: If image not PIL Image
    """
    if not hasattr(image, "filter"):
        raise TypeError(f"Expected PIL Image, got {type(image)}")

    radius = _validate_radius(radius)

    if image.mode == "P":
        image = image.convert("RGBA")

    return image.filter(ImageFilter.GaussianBlur(radius=radius))


# ============================================================================
# Box Blur
# ============================================================================

def apply_box_blur(
    image: Any,
    radius: float = DEFAULT_BLUR_RADIUS,
) -> Any:
    """
    Apply box blur (averaging) to image.

    Args:
        image: PIL Image
        radius: Size of the averaging box in each direction (0-100,
                exclusive of 0). 1 = light, 5-10 = moderate, 15+ = heavy

    Returns:
        Blurred PIL Image (same mode as input, palette images become RGBA)

    Raises:
        ValueError: If radius <= 0 or > 100
        TypeError: If image not PIL Image
    """
    if not hasattr(image, "filter"):
        raise TypeError(f"Expected PIL Image, got {type(image)}")

    radius = _validate_radius(radius)

    if image.mode == "P":
        image = image.convert("RGBA")

    return image.filter(ImageFilter.BoxBlur(radius))


# ============================================================================
# Filter factory
# ============================================================================

def make_blur_filter(
    blur_type: str = BLUR_TYPE_GAUSSIAN,
    radius: float = DEFAULT_BLUR_RADIUS,
) -> ImageFilterFunction:
    """
    Build a single-argument filter callable for the given blur settings.

    Parameters are validated eagerly so a bad configuration fails when the
    filter is switched on rather than on first draw.

    Args:
        blur_type: 'gaussian' or 'box'
        radius: Blur radius in pixels

    Returns:
        Callable taking a PIL Image and returning the blurred image

    Raises:
        ValueError: If blur_type is unknown or radius invalid
    """
    blur_type = str(blur_type).strip().lower()
    radius = _validate_radius(radius)

    if blur_type == BLUR_TYPE_GAUSSIAN:
        return lambda image: apply_gaussian_blur(image, radius)

    elif blur_type == BLUR_TYPE_BOX:
        return lambda image: apply_box_blur(image, radius)

    else:
        raise ValueError(
            f"Unknown blur_type: {blur_type}. "
            f"Valid types: {', '.join(BLUR_TYPES)}"
        )
