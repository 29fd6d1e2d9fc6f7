"""Obtain input values from command line flags or interactive prompts."""

from __future__ import annotations

import logging
import sys
from abc import ABC, abstractmethod
from typing import Callable, Mapping, Optional, Sequence

from .config import FIELDS, FieldSpec, Validator
from .errors import InvalidInputError

__all__ = [
    "FlagValueSource",
    "PromptFunction",
    "PromptValueSource",
    "ValueResolver",
    "ValueSource",
    "console_prompt",
]


LOGGER = logging.getLogger(__name__)

PromptFunction = Callable[[str, str, bool, Optional[Validator]], str]
"""``prompt(label, placeholder, required, validator) -> answer``."""


def _present(value: str | None) -> str | None:
    if value is None or not value.strip():
        return None
    return value


class ValueSource(ABC):
    """Somewhere a value for a :class:`FieldSpec` may come from."""

    @abstractmethod
    def get(self, field: FieldSpec) -> str | None:
        """Return the value for ``field`` or ``None`` when it has none."""


class FlagValueSource(ValueSource):
    """Values passed explicitly, usually parsed command line options."""

    def __init__(self, values: Mapping[str, str | None] | None = None):
        self._values = dict(values or {})

    def get(self, field: FieldSpec) -> str | None:
        return _present(self._values.get(field.key))


class PromptValueSource(ValueSource):
    """Ask the user through an injected prompt function."""

    def __init__(self, prompt: PromptFunction):
        self._prompt = prompt

    def get(self, field: FieldSpec) -> str | None:
        answer = self._prompt(field.label, field.placeholder, field.required, field.validator)
        return _present(answer)


class ValueResolver:
    """Pick the value of each field from flags first, then from the prompt.

    Without a prompt the resolver runs non-interactively and a missing required
    value fails immediately.
    """

    def __init__(
        self,
        flags: ValueSource | Mapping[str, str | None] | None = None,
        prompt: ValueSource | PromptFunction | None = None,
    ) -> None:
        if flags is None or isinstance(flags, Mapping):
            flags = FlagValueSource(flags)
        if prompt is not None and not isinstance(prompt, ValueSource):
            prompt = PromptValueSource(prompt)
        self._flags = flags
        self._prompt = prompt

    @property
    def interactive(self) -> bool:
        return self._prompt is not None

    def source_for(self, field: FieldSpec) -> tuple[ValueSource | None, str | None]:
        """Return the source that answers ``field`` together with its value."""

        value = self._flags.get(field)
        if value is not None:
            return self._flags, value
        if self._prompt is None:
            return None, None
        return self._prompt, self._prompt.get(field)

    def resolve(self, field: FieldSpec) -> str:
        """Return the value of ``field``.

        Flag values are used as given. Otherwise the prompt is asked and a
        blank answer falls back to ``field.default``.

        Raises
        ------
        InvalidInputError
            If ``field`` is required and no value could be obtained.
        """

        source, value = self.source_for(field)
        if value is None and field.default is not None:
            source, value = None, field.default
        if value is None:
            if field.required:
                raise InvalidInputError(f"{field.label} is required ({field.flag})", field=field.key)
            value = ""
        LOGGER.debug("resolved %s from %s", field.key, type(source).__name__ if source else "default")
        return value

    def resolve_all(self, fields: Sequence[FieldSpec] = FIELDS) -> dict[str, str]:
        """Resolve ``fields`` in order and return the values keyed by field name."""

        return {field.key: self.resolve(field) for field in fields}


def console_prompt(
    label: str,
    placeholder: str = "",
    required: bool = False,
    validator: Validator | None = None,
) -> str:
    """Read an answer from standard input, asking again until it is acceptable.

    An empty answer to an optional field is returned as is so that the caller
    can apply its default. End of input returns an empty string.
    """

    prompt = f"{label} [{placeholder}]: " if placeholder else f"{label}: "
    while True:
        try:
            answer = input(prompt).strip()
        except EOFError:
            return ""
        if not answer:
            if not required:
                return ""
            print("This field is required.", file=sys.stderr)
            continue
        if validator is not None:
            error = validator(answer)
            if error:
                print(error, file=sys.stderr)
                continue
        return answer
