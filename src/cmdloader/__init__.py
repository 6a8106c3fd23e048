"""cmdloader — command-dispatch loader for command-line tools.

Resolves a command name to a handler found in a directory of command
modules, parses arguments, and falls back to a help command when no
match is found.
"""

from cmdloader.api import create_loader
from cmdloader.core.loader import CommandLoader, is_command
from cmdloader.core.models import Command, LoaderConfig, ParsedArguments
from cmdloader.version import __version__

__all__: list[str] = [
    "Command",
    "CommandLoader",
    "LoaderConfig",
    "ParsedArguments",
    "__version__",
    "create_loader",
    "is_command",
]
