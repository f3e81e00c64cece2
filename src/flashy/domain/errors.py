"""Exceptions raised by the scheduling core and its adapters."""


class FlashyError(Exception):
    """Base class for all flashy errors."""


class InvalidArgumentError(FlashyError, ValueError):
    """A caller passed a value outside the documented domain.

    These are programming errors on the calling side and are never retried
    or silently corrected.
    """


class CardFileError(FlashyError):
    """A card snapshot file could not be read or failed validation."""

    def __init__(self, path, message: str):
        self.path = path
        super().__init__(f"{path}: {message}")
