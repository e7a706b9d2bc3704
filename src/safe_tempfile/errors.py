"""Error taxonomy for temporary file creation."""

from __future__ import annotations

import errno
import os


class TempfileError(Exception):
    """Base class for every fatal condition the tool reports."""

    context = "tempfile"

    def diagnostic(self) -> str:
        return f"{self.context}: {self}"


class InvalidModeError(TempfileError, ValueError):
    context = "mode"

    def __init__(self, text: str) -> None:
        super().__init__(f"Invalid mode `{text}'.  Mode must be octal.")
        self.text = text

    def diagnostic(self) -> str:
        return str(self)


class NameGenerationError(TempfileError):
    context = "tempnam"


class _OSFailure(TempfileError):
    """Wraps an OSError raised while operating on a specific path."""

    def __init__(self, path: str, error: OSError) -> None:
        self.path = path
        self.error = error
        self.errno = error.errno
        super().__init__(f"{path}: {error.strerror or error}")


class AlreadyExistsError(_OSFailure):
    context = "open"

    def __init__(self, path: str, error: OSError | None = None) -> None:
        if error is None:
            error = FileExistsError(errno.EEXIST, os.strerror(errno.EEXIST), path)
        super().__init__(path, error)


class CreationError(_OSFailure):
    context = "open"


class CloseError(_OSFailure):
    context = "close"
