"""Public construction helper wiring infrastructure into the core."""

from __future__ import annotations

from pathlib import Path

from cmdloader.core.loader import CommandLoader
from cmdloader.core.models import DEFAULT_ROOT, DEFAULT_USAGE, LoaderConfig
from cmdloader.core.protocols import ModuleSource
from cmdloader.infra.manuals import FileManualReader
from cmdloader.infra.module_sources import FilesystemModuleSource


def create_loader(
    root: str | Path | None = None,
    *,
    strict: bool = False,
    usage: str | None = None,
    fallback: str | None = None,
    manuals: str | Path | None = None,
    program: str = "cmdloader",
    source: ModuleSource | None = None,
) -> CommandLoader:
    """Build a :class:`CommandLoader` reading commands from *root*.

    Empty or ``None`` values fall back to the defaults: the built-in
    ``commands`` directory, ``"help"`` as usage command, and the usage
    command as fallback.
    """
    config = LoaderConfig(
        root=Path(root) if root else DEFAULT_ROOT,
        strict=bool(strict),
        usage=usage or DEFAULT_USAGE,
        fallback=fallback or None,
        manuals=Path(manuals) if manuals else None,
        program=program,
    )
    return CommandLoader(
        config,
        source=source or FilesystemModuleSource(),
        manual_reader=FileManualReader(),
    )
