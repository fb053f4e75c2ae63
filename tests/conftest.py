"""Global test fixtures and configuration."""

from __future__ import annotations

from typing import TYPE_CHECKING

import pytest

from tests.helpers import RepoBuilder

if TYPE_CHECKING:
	from pathlib import Path


@pytest.fixture
def repo_builder(tmp_path: Path) -> RepoBuilder:
	"""A fresh repository with an unborn ``main`` branch."""
	return RepoBuilder(tmp_path / "repo")


@pytest.fixture
def output_path(tmp_path: Path) -> Path:
	"""Where render tests write their document."""
	return tmp_path / "diagram.md"
