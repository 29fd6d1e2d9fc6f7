"""Immutable package metadata resolved at the start of a run."""

from __future__ import annotations

from datetime import date
from typing import Annotated, Mapping

from email_validator import EmailNotValidError
from email_validator import validate_email as _validate_address
from pydantic import AfterValidator, BaseModel, ConfigDict, Field, ValidationError, field_validator

from .errors import InvalidInputError
from .naming import PROVIDER_SUFFIX, clean_name, normalize_class_name, slugify, studly
from .template import placeholder

__all__ = ["PackageMetadata", "validate_email"]


EMAIL_ERROR = "The email should be a valid email"
SLUG_PATTERN = r"^[a-z0-9]+(-[a-z0-9]+)*$"

# Model fields that are fed from an input field with a different name.
_INPUT_FIELDS = {
    "package_slug": "package",
    "vendor_slug": "vendor",
    "author_name": "author",
}


def validate_email(value: str) -> str | None:
    """Return ``None`` for a syntactically valid bare address, else an error message.

    Display name forms such as ``Jane <jane@acme.io>`` are rejected.
    """

    if not value or "<" in value or value != value.strip():
        return EMAIL_ERROR
    try:
        _validate_address(value, check_deliverability=False)
    except EmailNotValidError:
        return EMAIL_ERROR
    return None


def _check_email(value: str) -> str:
    if validate_email(value) is not None:
        raise ValueError(EMAIL_ERROR)
    return value


EmailAddress = Annotated[str, AfterValidator(_check_email)]


def _current_year() -> int:
    return date.today().year


class PackageMetadata(BaseModel):
    """Everything the substitution steps need to know about the new package."""

    model_config = ConfigDict(extra="forbid", frozen=True)

    package_slug: str = Field(..., pattern=SLUG_PATTERN, description="Slug of the package name.")
    vendor_slug: str = Field(..., pattern=SLUG_PATTERN, description="Slug of the vendor name.")
    description: str = Field(..., description="Free text package description.")
    class_name: str = Field(..., description="Service provider class name.")
    author_name: str = Field(..., min_length=1, description="Author's full name.")
    author_email: EmailAddress = Field(..., description="Author's email address.")
    package_homepage: str = Field("", description="Package homepage URL.")
    author_homepage: str = Field("", description="Author homepage URL.")
    copyright_year: int = Field(default_factory=_current_year, description="Year written to the license.")
    namespace_separator: str = Field("\\", min_length=1, description="Separator between namespace segments.")

    @field_validator("description", "author_name")
    @classmethod
    def _reject_blank(cls, value: str) -> str:
        if not value.strip():
            raise ValueError("must not be blank")
        return value

    @field_validator("class_name")
    @classmethod
    def _ensure_provider_suffix(cls, value: str) -> str:
        return normalize_class_name(value)

    @classmethod
    def from_answers(
        cls,
        answers: Mapping[str, str | None],
        *,
        namespace_separator: str = "\\",
        copyright_year: int | None = None,
    ) -> "PackageMetadata":
        """Build metadata from raw resolved values keyed by input field name.

        The package and vendor names are slugified, a blank vendor falls back
        to the author's first name and a blank class name to
        ``PackageServiceProvider``.

        Raises
        ------
        InvalidInputError
            If a value is blank where one is required or fails validation.
        """

        def answer(key: str) -> str:
            return (answers.get(key) or "").strip()

        author = answer("author")
        vendor = answer("vendor") or (author.split()[0] if author else "")

        package_slug = slugify(answer("package"))
        if not package_slug:
            raise InvalidInputError("the package name must contain letters or digits", field="package")
        vendor_slug = slugify(vendor)
        if not vendor_slug:
            raise InvalidInputError("the vendor name must contain letters or digits", field="vendor")

        data: dict[str, object] = {
            "package_slug": package_slug,
            "vendor_slug": vendor_slug,
            "description": answers.get("description") or "",
            "class_name": answer("class_name") or f"Package{PROVIDER_SUFFIX}",
            "author_name": author,
            "author_email": answer("author_email"),
            "package_homepage": answer("package_homepage") or f"https://github.com/{vendor_slug}/{package_slug}",
            "author_homepage": answer("author_homepage") or f"https://github.com/{vendor_slug}",
            "namespace_separator": namespace_separator,
        }
        if copyright_year is not None:
            data["copyright_year"] = copyright_year

        try:
            return cls.model_validate(data)
        except ValidationError as exc:
            error = exc.errors()[0]
            name = str(error["loc"][0]) if error["loc"] else "value"
            name = _INPUT_FIELDS.get(name, name)
            message = EMAIL_ERROR if name == "author_email" else error["msg"]
            raise InvalidInputError(f"invalid {name.replace('_', ' ')}: {message}", field=name) from exc

    @property
    def namespace(self) -> str:
        return self.namespace_separator.join(studly(slug) for slug in (self.vendor_slug, self.package_slug))

    @property
    def escaped_namespace(self) -> str:
        return self.namespace.replace(self.namespace_separator, self.namespace_separator * 2)

    @property
    def title_cased_package(self) -> str:
        return clean_name(self.package_slug)

    @property
    def copyright_holder(self) -> str:
        return self.author_name

    def license_tokens(self) -> dict[str, str]:
        """Return the tokens substituted into the license file."""

        return {
            placeholder("year"): str(self.copyright_year),
            placeholder("copyright_holder"): self.copyright_holder,
        }

    def tokens(self) -> dict[str, str]:
        """Return the full placeholder to value map."""

        tokens = {
            placeholder("package"): self.package_slug,
            placeholder("vendor"): self.vendor_slug,
            placeholder("description"): self.description,
            placeholder("namespace"): self.namespace,
            placeholder("escaped_namespace"): self.escaped_namespace,
            placeholder("class_name"): self.class_name,
            placeholder("author"): self.author_name,
            placeholder("author_email"): str(self.author_email),
            placeholder("package_title"): self.title_cased_package,
            placeholder("package_homepage"): self.package_homepage,
            placeholder("author_homepage"): self.author_homepage,
        }
        tokens.update(self.license_tokens())
        return tokens
