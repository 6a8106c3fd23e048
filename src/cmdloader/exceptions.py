"""Custom exception hierarchy for cmdloader.

Every failure the loader knows about maps to a subclass of
:class:`CmdLoaderError`.  Raw exceptions raised while importing a
command module must NEVER escape the infrastructure layer — they are
caught and re-raised as :class:`CommandModuleLoadError`, chained to the
original cause.

Hierarchy
---------
CmdLoaderError
├── DispatchError
│   └── UnknownCommandError
├── ModuleSourceError
│   ├── CommandModuleNotFoundError
│   └── CommandModuleLoadError
├── OptionSpecError
└── EnvironmentError
"""

from __future__ import annotations


class CmdLoaderError(Exception):
    """Base exception for all cmdloader errors.

    The CLI error boundary renders these as a clean message plus an
    optional hint, without a stack trace.
    """

    def __init__(self, message: str, *, hint: str | None = None) -> None:
        super().__init__(message)
        self.hint: str | None = hint
        """Optional actionable guidance shown below the error message."""


# --- Dispatch ---------------------------------------------------------------

class DispatchError(CmdLoaderError):
    """Emitted on a loader's error channel.  Never raised by the loader."""


class UnknownCommandError(DispatchError):
    """A strict loader was asked to run a command that does not exist."""

    def __init__(self, message: str, *, name: str, hint: str | None = None) -> None:
        super().__init__(message, hint=hint)
        self.name: str = name


# --- Module sources ---------------------------------------------------------

class ModuleSourceError(CmdLoaderError):
    """Base class for failures reported by a module source."""

    def __init__(self, message: str, *, name: str, hint: str | None = None) -> None:
        super().__init__(message, hint=hint)
        self.name: str = name


class CommandModuleNotFoundError(ModuleSourceError):
    """No command module exists under the requested name."""


class CommandModuleLoadError(ModuleSourceError):
    """A command module exists but could not be loaded."""


# --- Arguments --------------------------------------------------------------

class OptionSpecError(CmdLoaderError):
    """Raised when an option spec handed to the tokenizer is malformed."""


# --- Environment / tooling --------------------------------------------------

class EnvironmentError(CmdLoaderError):
    """Raised when an optional runtime dependency is not available."""
