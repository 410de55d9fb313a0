"""
OR_Libs - Open Redact Library Modules

This package contains core functionality for the Open Redact project,
organized into specialized sub-packages:

- ImageEditingLib: Pixel buffer, redaction operations and models
- HistoryLib: Action log with replay-based undo/redo
- SelectionLib: Rectangle-selection gesture state machine and preview overlay
"""

__version__ = "0.1.0"
