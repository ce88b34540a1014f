"""Tests for the package metadata."""

from __future__ import annotations

import pytest
from conftest import ROOT

tomllib = pytest.importorskip("tomllib")


def test_readme_is_the_project_readme() -> None:
    project = tomllib.loads((ROOT / "pyproject.toml").read_text(encoding="utf-8"))["project"]

    assert project["readme"] == "README.md"
    assert (ROOT / "README.md").read_text(encoding="utf-8").startswith("# richtext2md")
