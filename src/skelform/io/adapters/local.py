"""Local disk backed file-system adapter."""

from __future__ import annotations

from pathlib import Path

from ..interfaces import FileSystem


class LocalFileSystem(FileSystem):
    """Access files below ``root`` on the local disk."""

    def __init__(self, root: Path | str | None = None):
        self._root = Path(root) if root is not None else Path.cwd()

    @property
    def root(self) -> Path:
        """Directory relative paths are resolved against."""

        return self._root

    def resolve(self, path: str | Path) -> Path:
        return self._root / path

    def read_text(self, path: str | Path, *, encoding: str = "utf-8") -> str:
        return self.resolve(path).read_text(encoding=encoding)

    def write_text(self, path: str | Path, text: str, *, encoding: str = "utf-8") -> None:
        target = self.resolve(path)
        if not target.is_file():
            raise FileNotFoundError(target)
        target.write_text(text, encoding=encoding)

    def exists(self, path: str | Path) -> bool:
        return self.resolve(path).exists()

    def rename(self, source: str | Path, target: str | Path) -> None:
        source_path = self.resolve(source)
        target_path = self.resolve(target)
        if target_path.exists():
            raise FileExistsError(target_path)
        source_path.rename(target_path)


__all__ = ["LocalFileSystem"]
