"""
Exception types raised by the Open Redact core.

Conditions with a dedicated name subclass the built-in exception that
already describes them, so callers may catch either.
"""


class ResetNotConfiguredError(NotImplementedError):
    """Raised when undo is requested before a reset hook has been bound."""

    def __init__(self, message: str = "reset hook not configured") -> None:
        super().__init__(message)


class BufferNotInitializedError(RuntimeError):
    """Raised when an operation runs before a pixel buffer is bound."""

    def __init__(self, message: str = "pixel buffer is not initialized") -> None:
        super().__init__(message)


class UnknownRedactionModeError(RuntimeError):
    """Raised when the mode source reports a value outside the legal kinds."""

    def __init__(self, mode: object) -> None:
        super().__init__(f"Unreachable redaction mode: {mode!r}")
        self.mode = mode


class UnknownRedactionKindError(KeyError):
    """Raised when no operation is registered for a redaction kind."""
