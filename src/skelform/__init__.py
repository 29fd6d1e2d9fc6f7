"""Turn a generic package skeleton into a concrete, named package.

Package and author details are collected from flags or prompts, normalised into
slugs, namespaces and class names, and written into a fixed set of template
files using ``{{token}}`` placeholders.
"""

from __future__ import annotations

from .config import FIELDS, FieldSpec, SkeletonLayout
from .errors import ErrorKind, InvalidInputError, ScaffoldError, TemplateIOError
from .metadata import PackageMetadata, validate_email
from .naming import clean_name, normalize_class_name, slugify, studly
from .resolver import FlagValueSource, PromptValueSource, ValueResolver, ValueSource
from .scaffold import PackageInitializer, RunState, ScaffoldResult, StepReport
from .template import TOKEN_NAMES, TokenSubstituter, placeholder, substitute

__all__ = [
    "ErrorKind",
    "FIELDS",
    "FieldSpec",
    "FlagValueSource",
    "InvalidInputError",
    "PackageInitializer",
    "PackageMetadata",
    "PromptValueSource",
    "RunState",
    "ScaffoldError",
    "ScaffoldResult",
    "SkeletonLayout",
    "StepReport",
    "TOKEN_NAMES",
    "TemplateIOError",
    "TokenSubstituter",
    "ValueResolver",
    "ValueSource",
    "clean_name",
    "normalize_class_name",
    "placeholder",
    "slugify",
    "studly",
    "substitute",
    "validate_email",
]

__version__ = "0.1.0"
