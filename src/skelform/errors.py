"""Custom exception types raised while initialising a package skeleton."""

from __future__ import annotations

from enum import Enum
from pathlib import Path


class ErrorKind(str, Enum):
    """Failure categories reported by :class:`~skelform.scaffold.ScaffoldResult`."""

    INVALID_INPUT = "invalid_input"
    IO_ERROR = "io_error"


class ScaffoldError(RuntimeError):
    """Base class for every error that aborts an initialisation run."""

    kind: ErrorKind

    def __init__(self, message: str) -> None:
        super().__init__(message)


class InvalidInputError(ScaffoldError):
    """Raised when a required value is missing or fails validation."""

    kind = ErrorKind.INVALID_INPUT

    def __init__(self, message: str, *, field: str | None = None) -> None:
        super().__init__(message)
        self.field = field


class TemplateIOError(ScaffoldError):
    """Raised when a template file cannot be read, written or renamed."""

    kind = ErrorKind.IO_ERROR

    def __init__(self, message: str, *, path: str | Path | None = None) -> None:
        super().__init__(message)
        self.path = Path(path) if path is not None else None


__all__ = ["ErrorKind", "InvalidInputError", "ScaffoldError", "TemplateIOError"]
