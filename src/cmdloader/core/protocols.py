"""Protocols (interfaces) consumed by the core layer.

These define the contracts that infrastructure adapters must satisfy.
Core code depends ONLY on these protocols — never on concrete
implementations.
"""

from __future__ import annotations

from collections.abc import Sequence
from pathlib import Path
from typing import Any, Protocol


class ModuleSource(Protocol):
    """Contract for command-module backends.

    Any object that implements :meth:`load` and :meth:`names` with the
    correct signatures satisfies this protocol structurally.
    """

    def load(self, root: Path, name: str) -> Any:
        """Load and return the value exported for *name* under *root*.

        The value is either an object exposing ``run`` and ``usage``, or
        a bare callable.  Nothing is cached between calls.

        Raises
        ------
        CommandModuleNotFoundError
            When no module exists for *name*.
        CommandModuleLoadError
            When the module exists but raised while loading.
        """
        ...  # pragma: no cover

    def names(self, root: Path) -> Sequence[str]:
        """Return the command names available under *root*."""
        ...  # pragma: no cover


class ManualReader(Protocol):
    """Contract for manual-file lookup."""

    def read(self, directory: Path, name: str) -> str | None:
        """Return the text of manual *name* in *directory*, or ``None``."""
        ...  # pragma: no cover
