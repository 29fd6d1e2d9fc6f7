"""Concrete file-system adapters."""

from .local import LocalFileSystem

__all__ = ["LocalFileSystem"]
