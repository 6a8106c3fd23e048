"""Shared pytest fixtures for the cmdloader test suite.

Guidelines
----------
* Command directories live under ``tmp_path``; nothing touches the
  real working directory.
* Core tests use :class:`RegistryModuleSource` with mocked handlers.
* Tests must not depend on OS state.
"""

from __future__ import annotations

import textwrap
from collections.abc import Callable
from pathlib import Path

import pytest


@pytest.fixture
def commands_dir(tmp_path: Path) -> Path:
    path = tmp_path / "commands"
    path.mkdir()
    return path


@pytest.fixture
def manuals_dir(tmp_path: Path) -> Path:
    path = tmp_path / "manuals"
    path.mkdir()
    return path


@pytest.fixture
def write_command(commands_dir: Path) -> Callable[[str, str], Path]:
    """Return a helper writing ``<commands_dir>/<name>.py`` from dedented source."""

    def _write(name: str, source: str) -> Path:
        path = commands_dir / f"{name}.py"
        path.write_text(textwrap.dedent(source), encoding="utf-8")
        return path

    return _write
