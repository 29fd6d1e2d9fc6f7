from __future__ import annotations

import sys
from pathlib import Path

import pytest

ROOT = Path(__file__).resolve().parents[1]
SRC = ROOT / "src"
if str(SRC) not in sys.path:
    sys.path.insert(0, str(SRC))

from tests.fixtures.skeleton import write_skeleton  # noqa: E402


@pytest.fixture()
def skeleton(tmp_path: Path) -> Path:
    """A fresh copy of the bundled test skeleton."""

    return write_skeleton(tmp_path / "skeleton")


@pytest.fixture()
def answers() -> dict[str, str | None]:
    return {
        "package": "My Cool Lib",
        "vendor": "Acme",
        "description": "Helpers for cool things",
        "package_homepage": None,
        "class_name": None,
        "author": "Jane Doe",
        "author_email": "jane@acme.io",
        "author_homepage": None,
    }
