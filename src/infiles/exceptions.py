"""
Custom exception hierarchy for the in-files cache.

All exceptions inherit from InFilesError, which provides optional context
for structured error handling and logging.

Filesystem failures other than "not found" are not wrapped: the raw
OSError reaches the caller unchanged.
"""

from __future__ import annotations

from typing import Any


class InFilesError(Exception):
    """Base exception for all cache errors.

    Attributes:
        message: Human-readable error message.
        context: Optional structured context for logging/debugging.
    """

    def __init__(self, message: str, context: dict[str, Any] | None = None) -> None:
        super().__init__(message)
        self.message = message
        self.context = context or {}

    def __str__(self) -> str:
        if self.context:
            ctx_str = ", ".join(f"{k}={v!r}" for k, v in self.context.items())
            return f"{self.message} ({ctx_str})"
        return self.message

    def __repr__(self) -> str:
        return f"{self.__class__.__name__}({self.message!r}, context={self.context!r})"


class ConfigurationError(InFilesError):
    """Raised when configuration is invalid or missing.

    Examples:
        - ROOT_MARKER containing a path separator
        - Unreadable .env file values
    """

    pass


class InvalidRequestError(InFilesError):
    """Raised when a cache request is malformed.

    Context should include:
        - field: The offending field
        - value: The rejected value
    """

    pass


class MissingSourceFileError(InFilesError):
    """Raised when a real source file is expected but absent or empty.

    Context should include:
        - file_path: The project-relative path that was read
    """

    def __init__(self, file_path: str, context: dict[str, Any] | None = None) -> None:
        super().__init__(
            f"There is no such a file: {file_path}",
            {"file_path": file_path, **(context or {})},
        )
        self.file_path = file_path


class ProjectRootNotFoundError(InFilesError):
    """Raised when no ancestor directory contains the root marker file.

    Context should include:
        - marker: The marker file name searched for
        - start: The directory the search started from
    """

    pass
