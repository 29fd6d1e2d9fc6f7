"""File-system access used by the substitution engine and orchestrator."""

from __future__ import annotations

from .adapters.local import LocalFileSystem
from .interfaces import FileSystem

__all__ = ["FileSystem", "LocalFileSystem"]
