"""Domain models for cmdloader.

All models are **frozen** dataclasses — immutable value objects with no
behaviour beyond data access.  They carry zero I/O and stay valid for
the whole lifetime of a dispatch.
"""

from __future__ import annotations

import enum
from collections.abc import Callable, Iterator, Mapping
from dataclasses import dataclass, field
from pathlib import Path
from typing import Any

DEFAULT_ROOT: Path = Path(__file__).resolve().parent.parent / "commands"
"""Built-in command directory, a sibling of the ``core`` package."""

DEFAULT_USAGE: str = "help"


# ---------------------------------------------------------------------------
# Configuration
# ---------------------------------------------------------------------------

@dataclass(frozen=True, slots=True)
class LoaderConfig:
    """Settings of a :class:`~cmdloader.core.loader.CommandLoader`.

    Paths are not checked here; a bad ``root`` only shows up as missing
    commands on the first lookup.
    """

    root: Path = DEFAULT_ROOT
    """Directory holding the command modules."""

    strict: bool = False
    """Report unknown command names instead of passing them to the fallback."""

    usage: str = DEFAULT_USAGE
    """Command run when ``--help`` is given."""

    fallback: str | None = None
    """Command run when no command is named.  Defaults to :attr:`usage`."""

    manuals: Path | None = None
    """Directory of plain-text manuals for callable-only commands."""

    program: str = "cmdloader"
    """Tool name used in user-facing error messages."""

    def __post_init__(self) -> None:
        object.__setattr__(self, "root", Path(self.root))
        if self.manuals is not None:
            object.__setattr__(self, "manuals", Path(self.manuals))
        if not self.fallback:
            object.__setattr__(self, "fallback", self.usage)


# ---------------------------------------------------------------------------
# Parsed arguments
# ---------------------------------------------------------------------------

@dataclass(frozen=True, slots=True)
class ParsedArguments:
    """Flags and positional arguments produced by the tokenizer.

    Supports read-only mapping access to the flags, so handlers can
    write ``options["force"]`` or ``"force" in options``.
    """

    flags: Mapping[str, Any] = field(default_factory=dict)
    positionals: tuple[str, ...] = ()

    def __getitem__(self, key: str) -> Any:
        return self.flags[key]

    def __contains__(self, key: object) -> bool:
        return key in self.flags

    def __iter__(self) -> Iterator[str]:
        return iter(self.flags)

    def get(self, key: str, default: Any = None) -> Any:
        return self.flags.get(key, default)


@dataclass(frozen=True, slots=True)
class OptionSpec:
    """Declaration of a single option understood by the tokenizer."""

    alias: tuple[str, ...] = ()
    boolean: bool = False
    string: bool = False
    default: Any = None


# ---------------------------------------------------------------------------
# Commands
# ---------------------------------------------------------------------------

Handler = Callable[[list[str], ParsedArguments, Any], None]
"""``handler(args, options, loader)`` — the callable behind a command."""


@dataclass(frozen=True, slots=True)
class Command:
    """A runnable command: its handler plus its usage text."""

    run: Handler
    usage: str


# ---------------------------------------------------------------------------
# Resolution outcome
# ---------------------------------------------------------------------------

class Outcome(enum.Enum):
    """How :meth:`CommandLoader.plan` settled on a handler."""

    HELP = "help"
    """``--help`` was given; the usage command runs."""

    COMMAND = "command"
    """The first positional named an existing command."""

    PASSTHROUGH = "passthrough"
    """Unknown first positional (non-strict); the fallback receives it."""

    FALLBACK = "fallback"
    """No positional was given; the fallback runs."""

    STRICT_MISS = "strict_miss"
    """Unknown first positional in strict mode; nothing runs."""

    UNRESOLVED = "unresolved"
    """Neither the requested command nor the fallback could be loaded."""


@dataclass(frozen=True, slots=True)
class Dispatch:
    """Everything needed to invoke (or refuse to invoke) a handler."""

    outcome: Outcome
    name: str | None
    handler: Handler | None
    args: tuple[str, ...]
    options: ParsedArguments

    @property
    def runnable(self) -> bool:
        return self.handler is not None
