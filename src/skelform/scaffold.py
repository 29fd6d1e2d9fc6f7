"""Rewrite the skeleton's template files for a freshly resolved package."""

from __future__ import annotations

import logging
from dataclasses import dataclass
from enum import Enum
from typing import Callable

from .config import SkeletonLayout
from .errors import ErrorKind, InvalidInputError, ScaffoldError, TemplateIOError
from .io import FileSystem, LocalFileSystem
from .metadata import PackageMetadata
from .resolver import ValueResolver
from .template import TokenSubstituter

__all__ = [
    "PackageInitializer",
    "RunState",
    "STEP_NAMES",
    "ScaffoldResult",
    "StepReport",
]


LOGGER = logging.getLogger(__name__)

STEP_NAMES: tuple[str, ...] = (
    "manifest",
    "readme",
    "provider",
    "test_case",
    "test_bootstrap",
    "license",
)


class RunState(str, Enum):
    """Lifecycle of a single initialisation run."""

    COLLECTING_INPUT = "collecting_input"
    SUBSTITUTING = "substituting"
    COMPLETED = "completed"
    FAILED = "failed"


@dataclass(slots=True, frozen=True)
class StepReport:
    """Outcome of one completed substitution step."""

    name: str
    path: str
    replacements: int
    renamed_to: str | None = None


@dataclass(slots=True, frozen=True)
class ScaffoldResult:
    """Final state of a run.

    Steps that completed before a failure are listed in :attr:`steps`; their
    files stay modified.
    """

    state: RunState
    steps: tuple[StepReport, ...] = ()
    metadata: PackageMetadata | None = None
    error_kind: ErrorKind | None = None
    failed_step: str | None = None
    field: str | None = None
    message: str = ""

    @property
    def ok(self) -> bool:
        return self.state is RunState.COMPLETED

    @property
    def exit_code(self) -> int:
        return 0 if self.ok else 1


StepCallback = Callable[[StepReport], None]


class PackageInitializer:
    """Collect metadata and apply it to every template file, in order.

    The run stops at the first error. Nothing is rolled back, so a failure in
    a later step leaves the files of the earlier steps rewritten.
    """

    def __init__(
        self,
        fs: FileSystem | None = None,
        layout: SkeletonLayout | None = None,
        *,
        on_step: StepCallback | None = None,
    ) -> None:
        self.fs = fs or LocalFileSystem()
        self.layout = layout or SkeletonLayout()
        self.substituter = TokenSubstituter(self.fs)
        self.on_step = on_step
        self.state = RunState.COLLECTING_INPUT
        self.step_index: int | None = None

    def collect(self, resolver: ValueResolver) -> PackageMetadata:
        """Resolve every input field and build the package metadata."""

        answers = resolver.resolve_all()
        return PackageMetadata.from_answers(answers, namespace_separator=self.layout.namespace_separator)

    def run(self, resolver: ValueResolver) -> ScaffoldResult:
        """Collect input through ``resolver`` and rewrite the skeleton."""

        self.state = RunState.COLLECTING_INPUT
        self.step_index = None
        try:
            metadata = self.collect(resolver)
        except InvalidInputError as exc:
            return self._fail(exc, metadata=None, steps=[], step=None)
        return self.apply(metadata)

    def apply(self, metadata: PackageMetadata) -> ScaffoldResult:
        """Run every substitution step for ``metadata``."""

        completed: list[StepReport] = []
        for index, (name, action) in enumerate(self._plan(metadata)):
            self.state = RunState.SUBSTITUTING
            self.step_index = index
            try:
                report = action()
            except ScaffoldError as exc:
                return self._fail(exc, metadata=metadata, steps=completed, step=name)
            completed.append(report)
            LOGGER.info("step %s completed (%s)", name, report.path)
            if self.on_step is not None:
                self.on_step(report)

        self.state = RunState.COMPLETED
        LOGGER.info("package %s/%s initialised", metadata.vendor_slug, metadata.package_slug)
        return ScaffoldResult(state=self.state, steps=tuple(completed), metadata=metadata)

    def _plan(self, metadata: PackageMetadata) -> list[tuple[str, Callable[[], StepReport]]]:
        tokens = metadata.tokens()
        layout = self.layout

        def rewrite(name: str, path: str, step_tokens: dict[str, str]) -> Callable[[], StepReport]:
            return lambda: StepReport(name, path, self.substituter.apply(path, step_tokens))

        actions: dict[str, Callable[[], StepReport]] = {
            "manifest": rewrite("manifest", layout.manifest, tokens),
            "readme": rewrite("readme", layout.readme, tokens),
            "provider": lambda: self._create_provider(metadata, tokens),
            "test_case": rewrite("test_case", layout.test_case, tokens),
            "test_bootstrap": rewrite("test_bootstrap", layout.test_bootstrap, tokens),
            "license": rewrite("license", layout.license, metadata.license_tokens()),
        }
        return [(name, actions[name]) for name in STEP_NAMES]

    def _create_provider(self, metadata: PackageMetadata, tokens: dict[str, str]) -> StepReport:
        stub = self.layout.provider_stub
        target = self.layout.provider_target(metadata.class_name)
        if self.fs.exists(target):
            raise TemplateIOError(f"provider class '{target}' already exists", path=target)

        count = self.substituter.apply(stub, tokens)
        try:
            self.fs.rename(stub, target)
        except OSError as exc:
            raise TemplateIOError(f"cannot rename '{stub}' to '{target}': {exc}", path=stub) from exc

        LOGGER.info("renamed %s to %s", stub, target)
        return StepReport("provider", stub, count, renamed_to=target)

    def _fail(
        self,
        exc: ScaffoldError,
        *,
        metadata: PackageMetadata | None,
        steps: list[StepReport],
        step: str | None,
    ) -> ScaffoldResult:
        self.state = RunState.FAILED
        LOGGER.info("initialisation failed%s: %s", f" at step {step}" if step else "", exc)
        return ScaffoldResult(
            state=self.state,
            steps=tuple(steps),
            metadata=metadata,
            error_kind=exc.kind,
            failed_step=step,
            field=getattr(exc, "field", None),
            message=str(exc),
        )
