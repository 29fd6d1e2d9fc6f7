"""String normalisation utilities used to derive package identifiers."""

from __future__ import annotations

import re
import unicodedata
from typing import Iterable

__all__ = ["clean_name", "normalize_class_name", "slugify", "studly"]


PROVIDER_SUFFIX = "ServiceProvider"

_SEPARATORS = re.compile(r"[\s\-]+")
_NON_ALPHANUMERIC = re.compile(r"[^0-9a-zA-Z]+")


def _to_ascii(text: str) -> str:
    text = unicodedata.normalize("NFKD", text)
    return text.encode("ascii", "ignore").decode("ascii")


def _capitalize_first(word: str) -> str:
    return word[:1].upper() + word[1:]


def slugify(value: str | Iterable[str], *, separator: str = "-") -> str:
    """Create a lowercase, ``separator`` delimited slug from ``value``.

    Runs of whitespace and punctuation collapse into a single ``separator`` and
    the result never starts or ends with one. Accents are folded to ASCII and
    any remaining non ASCII characters are dropped.

    Parameters
    ----------
    value:
        The text to normalise. When an iterable of strings is provided the values
        are joined with spaces before slugification.
    separator:
        The character used to join individual words.
    """

    if isinstance(value, Iterable) and not isinstance(value, (str, bytes)):
        value = " ".join(str(part) for part in value)

    text = _to_ascii(str(value)).lower()
    words = [word for word in _NON_ALPHANUMERIC.split(text) if word]
    return separator.join(words)


def studly(value: str) -> str:
    """Return the PascalCase form of a hyphen or space separated ``value``.

    Only the first letter of every segment is touched, so ``studly("my-API")``
    yields ``"MyAPI"``.
    """

    return "".join(_capitalize_first(segment) for segment in _SEPARATORS.split(value) if segment)


def clean_name(value: str) -> str:
    """Return a human readable, title cased name such as ``"My Cool Lib"``."""

    words = [word for word in _SEPARATORS.split(value.replace("_", " ")) if word]
    return " ".join(word.capitalize() for word in words)


def normalize_class_name(name: str, *, suffix: str = PROVIDER_SUFFIX, fallback: str = "Package") -> str:
    """Return a class name from ``name`` that contains ``suffix`` once, at the end.

    ``"acme"``, ``"AcmeServiceProvider"`` and ``"acme-service-provider"`` all
    normalise to ``"AcmeServiceProvider"``. Occurrences of ``suffix`` anywhere
    else in ``name`` are dropped, so ``"ServiceProviderAcme"`` gives the same
    result. When nothing but the suffix is left ``fallback`` is used as the stem.
    """

    words = _NON_ALPHANUMERIC.split(_to_ascii(name))
    stem = "".join(_capitalize_first(word) for word in words if word)

    while suffix and suffix in stem:
        stem = stem.replace(suffix, "")

    if not stem:
        stem = fallback
    if stem[0].isdigit():
        stem = f"{fallback}{stem}"

    return f"{stem}{suffix}"
