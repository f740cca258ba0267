"""
Custom exceptions for splatview.

This module provides domain-specific exceptions for better error handling
and clearer error messages throughout the point-cloud loading layer.

Clean Architecture Note:
- This file belongs to the Shared layer (cross-cutting concerns)
- Can be imported by any layer (domain, infrastructure, viewer)
"""


class SplatViewError(Exception):
    """Base exception for all splatview errors."""

    pass


class FormatError(SplatViewError):
    """Raised when a point-cloud buffer is structurally invalid."""

    def __init__(
        self,
        message: str,
        line: str | None = None,
        offset: int | None = None,
    ):
        """
        Initialize FormatError.

        Parameters
        ----------
        message : str
            Error message
        line : str | None
            Header line that triggered the error
        offset : int | None
            Byte offset in the buffer where the problem was detected
        """
        self.line = line
        self.offset = offset

        full_message = message
        if line:
            full_message = f"{full_message} (line: {line!r})"
        if offset is not None:
            full_message = f"{full_message} (offset: {offset})"

        super().__init__(full_message)


class PointCloudLoadError(SplatViewError):
    """Raised when a point-cloud source cannot be read."""

    def __init__(self, message: str, path: str | None = None):
        """
        Initialize PointCloudLoadError.

        Parameters
        ----------
        message : str
            Error message
        path : str | None
            Path or URL of the source that failed to load
        """
        self.path = path

        full_message = message
        if path:
            full_message = f"{full_message} (path: {path})"

        super().__init__(full_message)
