"""Literal placeholder substitution for skeleton template files.

Placeholders use a single canonical syntax: the token name wrapped in double
braces with no inner whitespace, e.g. ``{{package}}``. The vocabulary is fixed
(see :data:`TOKEN_NAMES`); anything else that happens to look like a
placeholder is left untouched.
"""

from __future__ import annotations

import logging
import re
from dataclasses import dataclass, field
from pathlib import Path
from typing import Mapping

from .errors import TemplateIOError
from .io import FileSystem, LocalFileSystem

__all__ = [
    "TOKEN_NAMES",
    "TokenSubstituter",
    "placeholder",
    "substitute",
]


LOGGER = logging.getLogger(__name__)

TOKEN_NAMES: tuple[str, ...] = (
    "package",
    "vendor",
    "description",
    "namespace",
    "escaped_namespace",
    "class_name",
    "author",
    "author_email",
    "package_title",
    "year",
    "copyright_holder",
    "package_homepage",
    "author_homepage",
)


def placeholder(name: str) -> str:
    """Return the literal marker for the token called ``name``."""

    return "{{" + name + "}}"


def _compile(tokens: Mapping[str, str]) -> re.Pattern[str] | None:
    if not tokens:
        return None
    # Longest first so that a token which prefixes another never shadows it.
    ordered = sorted(tokens, key=len, reverse=True)
    return re.compile("|".join(re.escape(token) for token in ordered))


def substitute(text: str, tokens: Mapping[str, str]) -> tuple[str, int]:
    """Replace every literal occurrence of each key of ``tokens`` in ``text``.

    The replacement happens in a single pass: values inserted for one token are
    never scanned again, so a value that itself contains a placeholder is
    written out verbatim. Returns the new text and the number of replacements.
    """

    pattern = _compile({token: value for token, value in tokens.items() if token})
    if pattern is None:
        return text, 0
    return pattern.subn(lambda match: tokens[match.group(0)], text)


@dataclass(slots=True)
class TokenSubstituter:
    """Rewrite template files in place using :func:`substitute`."""

    fs: FileSystem = field(default_factory=LocalFileSystem)
    encoding: str = "utf-8"

    def apply(self, path: str | Path, tokens: Mapping[str, str]) -> int:
        """Substitute ``tokens`` inside the file at ``path``.

        The whole file is read, rewritten in memory and written back. Files that
        contain none of the tokens are left alone. Returns the number of
        replacements made.

        Raises
        ------
        TemplateIOError
            If the file does not exist or cannot be read or written.
        """

        try:
            text = self.fs.read_text(path, encoding=self.encoding)
        except (OSError, UnicodeDecodeError) as exc:
            raise TemplateIOError(f"cannot read template '{path}': {exc}", path=path) from exc

        rendered, count = substitute(text, tokens)
        LOGGER.debug("substituted %d placeholder(s) in %s", count, path)
        if count == 0:
            return 0

        try:
            self.fs.write_text(path, rendered, encoding=self.encoding)
        except OSError as exc:
            raise TemplateIOError(f"cannot write template '{path}': {exc}", path=path) from exc

        return count
