"""Module sources — where command modules come from.

Both classes satisfy :class:`~cmdloader.core.protocols.ModuleSource`
structurally.  Raw import-time exceptions are caught here and
re-raised as :class:`~cmdloader.exceptions.CommandModuleLoadError`;
nothing raw escapes the infrastructure boundary.
"""

from __future__ import annotations

import importlib.util
import logging
import re
import sys
from collections.abc import Callable, Mapping
from dataclasses import dataclass
from pathlib import Path
from types import ModuleType
from typing import Any

from cmdloader.exceptions import CommandModuleLoadError, CommandModuleNotFoundError

LOG = logging.getLogger(__name__)

EXPORT_ATTRIBUTE: str = "command"
"""Module attribute holding the exported value, when a module defines it."""

_MODULE_PREFIX: str = "cmdloader_command_"


def _not_found(name: str, root: Path) -> CommandModuleNotFoundError:
    return CommandModuleNotFoundError(
        f'No command module named "{name}" in {root}', name=name,
    )


# ---------------------------------------------------------------------------
# Filesystem
# ---------------------------------------------------------------------------

class FilesystemModuleSource:
    """Load one Python file (or package) per command from a directory.

    ``<root>/<name>.py`` is tried first, then ``<root>/<name>/__init__.py``.
    The module is executed afresh on every call and removed from
    :data:`sys.modules` afterwards, so edits on disk are picked up by
    the next lookup.
    """

    def locate(self, root: Path, name: str) -> Path | None:
        """Return the file implementing *name*, or ``None``."""
        if not name or name.startswith(".") or "/" in name or "\\" in name:
            return None
        candidates = (root / f"{name}.py", root / name / "__init__.py")
        return next((path for path in candidates if path.is_file()), None)

    def load(self, root: Path, name: str) -> Any:
        path = self.locate(Path(root), name)
        if path is None:
            raise _not_found(name, Path(root))
        module = self._execute(name, path)
        return getattr(module, EXPORT_ATTRIBUTE, module)

    def names(self, root: Path) -> list[str]:
        root = Path(root)
        if not root.is_dir():
            return []
        found: list[str] = []
        for entry in root.iterdir():
            if entry.name.startswith(("_", ".")):
                continue
            if entry.is_file() and entry.suffix == ".py":
                found.append(entry.stem)
            elif entry.is_dir() and (entry / "__init__.py").is_file():
                found.append(entry.name)
        return sorted(found)

    @staticmethod
    def _execute(name: str, path: Path) -> ModuleType:
        module_name = _MODULE_PREFIX + re.sub(r"\W", "_", name)
        is_package = path.name == "__init__.py"
        spec = importlib.util.spec_from_file_location(
            module_name,
            path,
            submodule_search_locations=[str(path.parent)] if is_package else None,
        )
        if spec is None or spec.loader is None:
            raise CommandModuleLoadError(
                f"Cannot build an import spec for {path}", name=name,
            )

        module = importlib.util.module_from_spec(spec)
        # Registered while executing so relative imports and dataclasses work.
        sys.modules[module_name] = module
        try:
            spec.loader.exec_module(module)
        except (Exception, SystemExit) as exc:
            raise CommandModuleLoadError(
                f"{type(exc).__name__}: {exc}", name=name,
            ) from exc
        finally:
            stale = [
                loaded for loaded in sys.modules
                if loaded == module_name or loaded.startswith(module_name + ".")
            ]
            for loaded in stale:
                del sys.modules[loaded]

        LOG.debug("Loaded command module %s from %s", name, path)
        return module


# ---------------------------------------------------------------------------
# In-memory registry
# ---------------------------------------------------------------------------

@dataclass(frozen=True, slots=True)
class Lazy:
    """A registry entry built on each lookup by calling *factory*."""

    factory: Callable[[], Any]


def lazy(factory: Callable[[], Any]) -> Lazy:
    """Wrap *factory* so a registry calls it on every lookup."""
    return Lazy(factory)


class RegistryModuleSource:
    """Serve commands from a name → value mapping.

    Useful for tools that bundle their commands instead of scanning a
    directory.  The ``root`` argument is ignored.
    """

    def __init__(self, registry: Mapping[str, Any]) -> None:
        self._registry: dict[str, Any] = dict(registry)

    def load(self, root: Path, name: str) -> Any:
        if name not in self._registry:
            raise _not_found(name, Path(root))
        entry = self._registry[name]
        if not isinstance(entry, Lazy):
            return entry
        try:
            return entry.factory()
        except (Exception, SystemExit) as exc:
            raise CommandModuleLoadError(
                f"{type(exc).__name__}: {exc}", name=name,
            ) from exc

    def names(self, root: Path) -> list[str]:
        return sorted(self._registry)
