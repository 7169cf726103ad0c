"""
Errors - Exception hierarchy for icon builds

Every failure aborts the whole build; nothing here is retried or downgraded
to a warning. Callers can catch IcoBuilderError to handle all of them.
"""

from pathlib import Path
from typing import Optional, Union


class IcoBuilderError(Exception):
    """Base class for all icobuilder errors."""


class ImageDecodeError(IcoBuilderError):
    """A source could not be decoded into a raster."""

    def __init__(self, origin: str, reason: str = ""):
        self.origin = origin
        self.reason = reason
        message = f"Cannot decode image {origin}"
        if reason:
            message += f": {reason}"
        super().__init__(message)


class NonSquareImageError(IcoBuilderError):
    """A decoded source is not square."""

    def __init__(self, path: Union[str, Path], width: int, height: int):
        self.path = path
        self.width = width
        self.height = height
        super().__init__(f"Image {path} ({width} × {height}) is not a square")


class MissingIconSizeError(IcoBuilderError):
    """No source is large enough for a requested size."""

    def __init__(self, size: int):
        self.size = size
        super().__init__(f"No icon in the sources is >= {size}px")


class ImageEncodeError(IcoBuilderError):
    """A resampled frame could not be compressed."""

    def __init__(self, size: int, reason: str = ""):
        self.size = size
        message = f"Cannot encode {size}px frame"
        if reason:
            message += f": {reason}"
        super().__init__(message)


class IcoIOError(IcoBuilderError):
    """A source could not be read or the output could not be written."""

    def __init__(self, path: Optional[Union[str, Path]], reason: str):
        self.path = path
        self.reason = reason
        if path is None:
            super().__init__(reason)
        else:
            super().__init__(f"{path}: {reason}")


class InvalidIconSizeError(IcoBuilderError):
    """A configured size cannot be stored in an ICO directory."""

    def __init__(self, size):
        self.size = size
        super().__init__(f"Invalid icon size {size!r}: must be an integer from 1 to 256")


class ContainerFormatError(IcoBuilderError):
    """Bytes that were expected to be an ICO container are malformed."""


class BuildSystemError(IcoBuilderError):
    """The build-system environment is missing something we need."""
