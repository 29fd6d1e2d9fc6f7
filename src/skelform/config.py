"""Configuration shared by the value resolver, orchestrator and CLI."""

from __future__ import annotations

from dataclasses import dataclass
from pathlib import PurePosixPath
from typing import Callable, Optional

from .metadata import validate_email
from .naming import PROVIDER_SUFFIX

Validator = Callable[[str], Optional[str]]


@dataclass(slots=True, frozen=True)
class SkeletonLayout:
    """Location of every template file inside the skeleton.

    Attributes
    ----------
    manifest:
        The dependency manifest (``composer.json`` for the bundled skeleton).
    readme:
        The README document.
    provider_stub:
        The provider class stub. After substitution it is renamed to
        ``<ClassName>.<source_extension>`` next to the stub.
    test_case, test_bootstrap:
        The two test scaffold sources.
    license:
        The license file. Only the copyright tokens are replaced there.
    namespace_separator:
        Separator placed between the vendor and package namespace segments.
    """

    manifest: str = "composer.json"
    readme: str = "README.md"
    provider_stub: str = "src/PackageServiceProvider.php.stub"
    test_case: str = "tests/TestCase.php"
    test_bootstrap: str = "tests/Pest.php"
    license: str = "LICENSE.md"
    source_extension: str = "php"
    namespace_separator: str = "\\"

    def provider_target(self, class_name: str) -> str:
        """Return the path the provider stub is renamed to for ``class_name``."""

        stub = PurePosixPath(self.provider_stub)
        return str(stub.parent / f"{class_name}.{self.source_extension}")


@dataclass(slots=True, frozen=True)
class FieldSpec:
    """Describe one value collected from a flag or an interactive prompt."""

    key: str
    label: str
    placeholder: str = ""
    default: str | None = None
    required: bool = False
    validator: Validator | None = None

    @property
    def flag(self) -> str:
        return "--" + self.key.replace("_", "-")


FIELDS: tuple[FieldSpec, ...] = (
    FieldSpec("package", "Package name", placeholder="package-name", required=True),
    FieldSpec("vendor", "Package vendor", placeholder="vendor"),
    FieldSpec(
        "description",
        "Package description",
        placeholder="Write a short description of two lines at max",
        required=True,
    ),
    FieldSpec("package_homepage", "Package homepage", placeholder="https://github.com/vendor/package-name"),
    FieldSpec(
        "class_name",
        "Service Provider class name",
        placeholder=f"Package{PROVIDER_SUFFIX}",
        default=f"Package{PROVIDER_SUFFIX}",
    ),
    FieldSpec("author", "Author's name", required=True),
    FieldSpec(
        "author_email",
        "Author's email",
        placeholder="john@doe.com",
        required=True,
        validator=validate_email,
    ),
    FieldSpec("author_homepage", "Author's homepage", placeholder="https://github.com/vendor"),
)


def field_by_key(key: str) -> FieldSpec:
    """Return the :data:`FIELDS` entry named ``key``."""

    for candidate in FIELDS:
        if candidate.key == key:
            return candidate
    raise KeyError(key)


__all__ = ["FIELDS", "FieldSpec", "SkeletonLayout", "Validator", "field_by_key"]
