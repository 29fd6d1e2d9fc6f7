"""Abstract interfaces for the file-system collaborator."""

from __future__ import annotations

from abc import ABC, abstractmethod
from pathlib import Path


class FileSystem(ABC):
    """Whole-file access to the skeleton being initialised.

    Paths may be relative; implementations resolve them against their own
    root. Every method raises :class:`OSError` (or a subclass) on failure.
    """

    @abstractmethod
    def read_text(self, path: str | Path, *, encoding: str = "utf-8") -> str:
        """Return the full content of ``path``."""

    @abstractmethod
    def write_text(self, path: str | Path, text: str, *, encoding: str = "utf-8") -> None:
        """Replace the content of ``path`` with ``text``."""

    @abstractmethod
    def exists(self, path: str | Path) -> bool:
        """Whether a file exists at ``path``."""

    @abstractmethod
    def rename(self, source: str | Path, target: str | Path) -> None:
        """Move ``source`` to ``target``. ``target`` must not exist yet."""


__all__ = ["FileSystem"]
