"""Core layer — command resolution, dispatch, and argument tokenizing.

Rules
-----
* No ``print()`` calls.
* No filesystem access; modules and manuals come through protocols.
* No imports from ``cli`` or ``infra``.
"""

from cmdloader.core.loader import CommandLoader, is_command
from cmdloader.core.models import (
    Command,
    Dispatch,
    LoaderConfig,
    OptionSpec,
    Outcome,
    ParsedArguments,
)
from cmdloader.core.protocols import ManualReader, ModuleSource
from cmdloader.core.tokenizer import tokenize

__all__: list[str] = [
    "Command",
    "CommandLoader",
    "Dispatch",
    "LoaderConfig",
    "ManualReader",
    "ModuleSource",
    "OptionSpec",
    "Outcome",
    "ParsedArguments",
    "is_command",
    "tokenize",
]
