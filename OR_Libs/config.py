"""
Redaction session configuration.

Example:
    >>> config = RedactionConfig(blur_radius=8.0, default_mode="blur")
    >>> RedactionConfig.from_dict(config.to_dict()) == config
    True
"""

from dataclasses import dataclass
from typing import Any, Dict

from OR_Libs.constants import (
    BLUR_TYPES,
    DEFAULT_BLUR_RADIUS,
    DEFAULT_BLUR_TYPE,
    DEFAULT_CANVAS_HEIGHT,
    DEFAULT_CANVAS_WIDTH,
    DEFAULT_FILL_COLOR,
    DEFAULT_REDACTION_MODE,
    MAX_BLUR_RADIUS,
    REDACTION_KINDS,
    SELECTION_OUTLINE_COLOR,
    SELECTION_OUTLINE_WIDTH,
)
from OR_Libs.ImageEditingLib.redaction_models import RgbaColor


def _validate_color(name: str, color: Any) -> RgbaColor:
    values = tuple(color)
    if len(values) != 4 or not all(isinstance(v, int) and 0 <= v <= 255 for v in values):
        raise ValueError(f"{name} must be 4 integers in 0-255, got {color!r}")
    return values


@dataclass
class RedactionConfig:
    """Configuration for a redaction session.

    Attributes:
        fill_color: RGBA color used by black-out
        blur_type: Blur algorithm ('gaussian' or 'box')
        blur_radius: Blur radius in pixels (0-100, exclusive of 0)
        default_mode: Redaction kind selected at startup
        serialize_replay: Start each buffer mutation only after the previous
                          one has completed
        outline_color: RGBA color of the selection preview outline
        outline_width: Width of the selection preview outline in pixels
        canvas_width: Buffer width before any image is loaded
        canvas_height: Buffer height before any image is loaded
        match_image_size: Resize the buffer to each loaded image
    """
    fill_color: RgbaColor = DEFAULT_FILL_COLOR
    blur_type: str = DEFAULT_BLUR_TYPE
    blur_radius: float = DEFAULT_BLUR_RADIUS
    default_mode: str = DEFAULT_REDACTION_MODE
    serialize_replay: bool = True
    outline_color: RgbaColor = SELECTION_OUTLINE_COLOR
    outline_width: int = SELECTION_OUTLINE_WIDTH
    canvas_width: int = DEFAULT_CANVAS_WIDTH
    canvas_height: int = DEFAULT_CANVAS_HEIGHT
    match_image_size: bool = True

    def __post_init__(self) -> None:
        self.fill_color = _validate_color("fill_color", self.fill_color)
        self.outline_color = _validate_color("outline_color", self.outline_color)

        if self.blur_type not in BLUR_TYPES:
            raise ValueError(f"blur_type must be one of {', '.join(BLUR_TYPES)}, got {self.blur_type!r}")

        if not (0 < self.blur_radius <= MAX_BLUR_RADIUS):
            raise ValueError(f"blur_radius must be 0 < r <= {MAX_BLUR_RADIUS:g}, got {self.blur_radius}")

        if self.default_mode not in REDACTION_KINDS:
            raise ValueError(f"default_mode must be one of {', '.join(REDACTION_KINDS)}, got {self.default_mode!r}")

        if self.outline_width < 1:
            raise ValueError(f"outline_width must be >= 1, got {self.outline_width}")

        if self.canvas_width <= 0 or self.canvas_height <= 0:
            raise ValueError(f"canvas size must be positive, got {self.canvas_width}x{self.canvas_height}")

    def to_dict(self) -> Dict[str, Any]:
        """Convert to dictionary."""
        return {
            "fill_color": list(self.fill_color),
            "blur_type": self.blur_type,
            "blur_radius": self.blur_radius,
            "default_mode": self.default_mode,
            "serialize_replay": self.serialize_replay,
            "outline_color": list(self.outline_color),
            "outline_width": self.outline_width,
            "canvas_width": self.canvas_width,
            "canvas_height": self.canvas_height,
            "match_image_size": self.match_image_size,
        }

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "RedactionConfig":
        """Create from dictionary. Unknown keys are ignored."""
        filtered = {k: v for k, v in data.items()
                    if k in cls.__dataclass_fields__}
        return cls(**filtered)
