"""
Redaction data models for Open Redact.

This module defines core data structures used throughout the redaction system.

Classes:
    Rectangle: Normalized axis-aligned region in buffer pixel coordinates
    Action: Immutable record of one redaction kind applied to a rectangle

Type Aliases:
    RgbaColor: A tuple of 4 integers representing RGBA color values (0-255)
    Point: An (x, y) pair in buffer pixel coordinates
    PixelBox: Integer (left, top, right, bottom) box as used by Pillow
"""

from dataclasses import dataclass
from typing import Tuple

RgbaColor = Tuple[int, int, int, int]
Point = Tuple[float, float]
PixelBox = Tuple[int, int, int, int]


@dataclass(frozen=True)
class Rectangle:
    """
    Axis-aligned rectangle with ``x0 <= x1`` and ``y0 <= y1``.

    Use :meth:`from_points` to build one from two raw pointer positions in
    any drag direction.
    """
    x0: float
    y0: float
    x1: float
    y1: float

    def __post_init__(self) -> None:
        if self.x0 > self.x1 or self.y0 > self.y1:
            raise ValueError(
                f"Rectangle corners out of order: ({self.x0}, {self.y0}, {self.x1}, {self.y1}). "
                f"Use Rectangle.from_points() to normalize."
            )

    @classmethod
    def from_points(cls, start: Point, end: Point) -> "Rectangle":
        """
        Normalize two raw points into a rectangle.

        Each axis is swapped independently, so the result is valid for any
        drag direction.

        Args:
            start: First corner (e.g. pointer-down position)
            end: Opposite corner (e.g. pointer-up position)

        Returns:
            A Rectangle spanning both points
        """
        sx, sy = start
        ex, ey = end
        x0, x1 = (sx, ex) if sx <= ex else (ex, sx)
        y0, y1 = (sy, ey) if sy <= ey else (ey, sy)
        return cls(x0, y0, x1, y1)

    @property
    def width(self) -> float:
        return self.x1 - self.x0

    @property
    def height(self) -> float:
        return self.y1 - self.y0

    @property
    def is_empty(self) -> bool:
        return self.width == 0 or self.height == 0

    def clipped(self, width: int, height: int) -> "Rectangle":
        """Return this rectangle clamped to a ``width`` x ``height`` surface."""
        return Rectangle(
            min(max(self.x0, 0), width),
            min(max(self.y0, 0), height),
            min(max(self.x1, 0), width),
            min(max(self.y1, 0), height),
        )

    def to_box(self) -> PixelBox:
        """Round the corners to whole pixels for Pillow box arguments."""
        return (
            int(round(self.x0)),
            int(round(self.y0)),
            int(round(self.x1)),
            int(round(self.y1)),
        )

    def as_tuple(self) -> Tuple[float, float, float, float]:
        return (self.x0, self.y0, self.x1, self.y1)


@dataclass(frozen=True)
class Action:
    kind: str
    rect: Rectangle
