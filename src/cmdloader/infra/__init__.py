"""Infrastructure layer — filesystem and registry integration.

Every raw exception raised while importing a command module is caught
here and re-raised as a :class:`~cmdloader.exceptions.CmdLoaderError`
subclass.

Rules
-----
* No imports from ``cli``.
* No user-facing output.
"""

from cmdloader.infra.manuals import FileManualReader
from cmdloader.infra.module_sources import (
    FilesystemModuleSource,
    Lazy,
    RegistryModuleSource,
    lazy,
)

__all__: list[str] = [
    "FileManualReader",
    "FilesystemModuleSource",
    "Lazy",
    "RegistryModuleSource",
    "lazy",
]
