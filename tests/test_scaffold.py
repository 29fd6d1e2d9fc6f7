from __future__ import annotations

import json
import re
from pathlib import Path

import pytest

from skelform.errors import ErrorKind
from skelform.io import LocalFileSystem
from skelform.metadata import PackageMetadata
from skelform.resolver import ValueResolver
from skelform.scaffold import STEP_NAMES, PackageInitializer, RunState, StepReport
from tests.fixtures.memory_fs import MemoryFileSystem
from tests.fixtures.skeleton import SKELETON_FILES, snapshot

TOKEN = re.compile(r"{{[a-z_]+}}")


@pytest.fixture()
def initializer(skeleton: Path) -> PackageInitializer:
    return PackageInitializer(LocalFileSystem(skeleton))


def test_run_initialises_the_skeleton(skeleton: Path, answers):
    reports: list[StepReport] = []
    initializer = PackageInitializer(LocalFileSystem(skeleton), on_step=reports.append)

    result = initializer.run(ValueResolver(answers))

    assert result.ok
    assert result.exit_code == 0
    assert result.state is RunState.COMPLETED
    assert initializer.state is RunState.COMPLETED
    assert [report.name for report in reports] == list(STEP_NAMES)
    assert result.steps == tuple(reports)

    metadata = result.metadata
    assert metadata.package_slug == "my-cool-lib"
    assert metadata.vendor_slug == "acme"
    assert metadata.namespace == "Acme\\MyCoolLib"
    assert metadata.class_name == "PackageServiceProvider"

    composer = json.loads((skeleton / "composer.json").read_text(encoding="utf-8"))
    assert composer["name"] == "acme/my-cool-lib"
    assert composer["autoload"]["psr-4"] == {"Acme\\MyCoolLib\\": "src/"}
    assert composer["extra"]["laravel"]["providers"] == ["Acme\\MyCoolLib\\PackageServiceProvider"]
    assert composer["authors"][0]["email"] == "jane@acme.io"
    assert not TOKEN.search((skeleton / "composer.json").read_text(encoding="utf-8"))

    readme = (skeleton / "README.md").read_text(encoding="utf-8")
    assert readme.startswith("# My Cool Lib\n")
    assert "composer require acme/my-cool-lib" in readme

    assert not (skeleton / "src" / "PackageServiceProvider.php.stub").exists()
    provider = (skeleton / "src" / "PackageServiceProvider.php").read_text(encoding="utf-8")
    assert "namespace Acme\\MyCoolLib;" in provider
    assert "class PackageServiceProvider extends ServiceProvider" in provider
    assert reports[2].renamed_to == "src/PackageServiceProvider.php"

    test_case = (skeleton / "tests" / "TestCase.php").read_text(encoding="utf-8")
    assert "use Acme\\MyCoolLib\\PackageServiceProvider;" in test_case
    pest = (skeleton / "tests" / "Pest.php").read_text(encoding="utf-8")
    assert "uses(Acme\\MyCoolLib\\Tests\\TestCase::class)" in pest


def test_license_only_receives_copyright_tokens(skeleton: Path, answers):
    PackageInitializer(LocalFileSystem(skeleton)).apply(PackageMetadata.from_answers(answers, copyright_year=2031))

    license_text = (skeleton / "LICENSE.md").read_text(encoding="utf-8")
    assert "Copyright (c) 2031 Jane Doe" in license_text
    assert "The {{package}} marker" in license_text


def test_custom_class_name_renames_provider(skeleton: Path, answers):
    answers["class_name"] = "CoolLib"
    result = PackageInitializer(LocalFileSystem(skeleton)).run(ValueResolver(answers))

    assert result.ok
    assert (skeleton / "src" / "CoolLibServiceProvider.php").is_file()
    assert not (skeleton / "src" / "PackageServiceProvider.php.stub").exists()


def test_missing_required_input_touches_nothing(skeleton: Path, answers, initializer):
    before = snapshot(skeleton)
    answers["package"] = None
    steps: list[StepReport] = []
    initializer.on_step = steps.append

    result = initializer.run(ValueResolver(answers))

    assert not result.ok
    assert result.exit_code == 1
    assert result.state is RunState.FAILED
    assert result.error_kind is ErrorKind.INVALID_INPUT
    assert result.failed_step is None
    assert result.steps == ()
    assert steps == []
    assert snapshot(skeleton) == before


def test_invalid_email_from_flag_fails_before_any_step(skeleton: Path, answers, initializer):
    before = snapshot(skeleton)
    answers["author_email"] = "not-an-email"

    result = initializer.run(ValueResolver(answers))

    assert result.error_kind is ErrorKind.INVALID_INPUT
    assert "valid email" in result.message
    assert snapshot(skeleton) == before


def test_missing_file_stops_the_run_without_rollback(answers):
    files = dict(SKELETON_FILES)
    del files["tests/TestCase.php"]
    fs = MemoryFileSystem(files)
    initializer = PackageInitializer(fs)

    result = initializer.run(ValueResolver(answers))

    assert result.state is RunState.FAILED
    assert result.error_kind is ErrorKind.IO_ERROR
    assert result.failed_step == "test_case"
    assert [report.name for report in result.steps] == ["manifest", "readme", "provider"]
    assert initializer.step_index == STEP_NAMES.index("test_case")
    assert "acme/my-cool-lib" in fs.files["composer.json"]
    assert fs.files["tests/Pest.php"] == SKELETON_FILES["tests/Pest.php"]
    assert fs.files["LICENSE.md"] == SKELETON_FILES["LICENSE.md"]


def test_unwritable_file_is_an_io_error(answers):
    fs = MemoryFileSystem(SKELETON_FILES, read_only={"README.md"})

    result = PackageInitializer(fs).run(ValueResolver(answers))

    assert result.failed_step == "readme"
    assert result.error_kind is ErrorKind.IO_ERROR
    assert fs.writes == ["composer.json"]


def test_existing_provider_target_fails_the_provider_step(answers):
    files = dict(SKELETON_FILES)
    files["src/PackageServiceProvider.php"] = "<?php // keep me\n"
    fs = MemoryFileSystem(files)

    result = PackageInitializer(fs).run(ValueResolver(answers))

    assert result.failed_step == "provider"
    assert result.error_kind is ErrorKind.IO_ERROR
    assert fs.files["src/PackageServiceProvider.php"] == "<?php // keep me\n"
    assert fs.files["src/PackageServiceProvider.php.stub"] == SKELETON_FILES["src/PackageServiceProvider.php.stub"]


def test_second_run_against_consumed_tree_fails_on_the_stub(skeleton: Path, answers):
    assert PackageInitializer(LocalFileSystem(skeleton)).run(ValueResolver(answers)).ok

    result = PackageInitializer(LocalFileSystem(skeleton)).run(ValueResolver(answers))

    assert result.failed_step == "provider"
    assert [report.replacements for report in result.steps] == [0, 0]


def test_steps_follow_the_step_name_order(answers, monkeypatch):
    monkeypatch.setattr("skelform.scaffold.STEP_NAMES", ("readme", "manifest"))
    fs = MemoryFileSystem(SKELETON_FILES)

    result = PackageInitializer(fs).run(ValueResolver(answers))

    assert result.ok
    assert [report.name for report in result.steps] == ["readme", "manifest"]
    assert fs.writes == ["README.md", "composer.json"]
    assert fs.exists("src/PackageServiceProvider.php.stub")


def test_failed_input_names_the_field(answers):
    answers["description"] = None

    result = PackageInitializer(MemoryFileSystem(SKELETON_FILES)).run(ValueResolver(answers))

    assert result.field == "description"
    assert result.failed_step is None
