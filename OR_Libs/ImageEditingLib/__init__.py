"""
ImageEditingLib - Core image redaction functionality

This module provides the pixel buffer, redaction operations, and models
for the Open Redact project.
"""

from OR_Libs.ImageEditingLib.redaction_models import Action, Point, Rectangle, RgbaColor
from OR_Libs.ImageEditingLib.pixel_buffer import PixelBuffer, decode_image
from OR_Libs.ImageEditingLib.redaction_ops import (
    RedactionLibrary,
    black_out,
    blur,
    create_default_library,
)
from OR_Libs.ImageEditingLib.scheduling import DeferredScheduler, run_immediately

__all__ = [
    "Action",
    "Point",
    "Rectangle",
    "RgbaColor",
    "PixelBuffer",
    "decode_image",
    "RedactionLibrary",
    "black_out",
    "blur",
    "create_default_library",
    "DeferredScheduler",
    "run_immediately",
]
