"""
Constants and configuration values for Open Redact.

This module centralizes all constant values, magic numbers, and
default settings used throughout the application.
"""

# Redaction kinds
REDACTION_BLACK_OUT = "black-out"
REDACTION_BLUR = "blur"
REDACTION_KINDS = (REDACTION_BLACK_OUT, REDACTION_BLUR)
DEFAULT_REDACTION_MODE = REDACTION_BLACK_OUT

# Canvas defaults
DEFAULT_CANVAS_WIDTH = 500
DEFAULT_CANVAS_HEIGHT = 500
BUFFER_MODE = "RGBA"
TRANSPARENT = (0, 0, 0, 0)

# Black-out
DEFAULT_FILL_COLOR = (0, 0, 0, 255)

# Blur
BLUR_TYPE_GAUSSIAN = "gaussian"
BLUR_TYPE_BOX = "box"
BLUR_TYPES = (BLUR_TYPE_GAUSSIAN, BLUR_TYPE_BOX)
DEFAULT_BLUR_TYPE = BLUR_TYPE_GAUSSIAN
DEFAULT_BLUR_RADIUS = 5.0
MAX_BLUR_RADIUS = 100.0

# Buffer filter names
FILTER_NONE = "none"
FILTER_BLUR = "blur"

# Selection preview
SELECTION_OUTLINE_COLOR = (0, 0, 255, 255)
SELECTION_OUTLINE_WIDTH = 2

# Encoding
SNAPSHOT_FORMAT = "PNG"
EXPORT_FORMAT = "PNG"

# UI constants
DEFAULT_WINDOW_WIDTH = 900
DEFAULT_WINDOW_HEIGHT = 650

# Supported file formats
SUPPORTED_STANDARD_IMAGES = {".png", ".jpg", ".jpeg", ".bmp", ".gif", ".tiff", ".webp"}
