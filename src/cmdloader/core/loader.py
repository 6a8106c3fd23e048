"""Command resolution and dispatch.

:class:`CommandLoader` owns a :class:`~cmdloader.core.models.LoaderConfig`
and resolves command names to handlers through an injected
:class:`~cmdloader.core.protocols.ModuleSource`.  It never caches: every
lookup goes back to the source.

Guarantees
----------
* No exception crosses the public boundary except those raised by an
  invoked handler.
* Load failures other than "missing" produce exactly one ERROR log
  record and are otherwise treated as a missing command.
* Dispatch problems are reported on the error channel, never raised.
"""

from __future__ import annotations

import logging
import sys
from collections.abc import Callable, Mapping, Sequence
from typing import Any

from cmdloader.core.models import (
    Command,
    Dispatch,
    Handler,
    LoaderConfig,
    OptionSpec,
    Outcome,
    ParsedArguments,
)
from cmdloader.core.protocols import ManualReader, ModuleSource
from cmdloader.core.tokenizer import tokenize
from cmdloader.exceptions import (
    CmdLoaderError,
    CommandModuleNotFoundError,
    DispatchError,
    UnknownCommandError,
)

LOG = logging.getLogger(__name__)

ErrorHandler = Callable[[CmdLoaderError], Any]
Tokenizer = Callable[..., ParsedArguments]


def _field(candidate: Any, name: str) -> Any:
    if isinstance(candidate, Mapping):
        return candidate.get(name)
    return getattr(candidate, name, None)


def is_command(candidate: Any) -> bool:
    """Return ``True`` if *candidate* has a callable ``run`` and a ``str`` usage.

    Both attributes and mapping keys are accepted, so a plain dict
    ``{"run": fn, "usage": "..."}`` qualifies.
    """
    return (
        candidate is not None
        and callable(_field(candidate, "run"))
        and isinstance(_field(candidate, "usage"), str)
    )


class CommandLoader:
    """Resolve command names to handlers and run them.

    Parameters
    ----------
    config:
        Loader settings.  Defaults to :class:`LoaderConfig` defaults.
    source:
        Where command modules come from.
    manual_reader:
        Lookup for manuals of callable-only commands.
    tokenizer:
        Argument tokenizer; :func:`~cmdloader.core.tokenizer.tokenize`
        unless overridden.
    """

    is_command = staticmethod(is_command)

    def __init__(
        self,
        config: LoaderConfig | None = None,
        *,
        source: ModuleSource,
        manual_reader: ManualReader,
        tokenizer: Tokenizer = tokenize,
    ) -> None:
        self.config: LoaderConfig = config or LoaderConfig()
        self._source = source
        self._manual_reader = manual_reader
        self._tokenizer = tokenizer
        self._error_handlers: list[ErrorHandler] = []

    def __repr__(self) -> str:
        return (
            f"{type(self).__name__}(root={str(self.config.root)!r}, "
            f"strict={self.config.strict})"
        )

    # ------------------------------------------------------------------
    # Error channel
    # ------------------------------------------------------------------

    def on_error(self, handler: ErrorHandler) -> ErrorHandler:
        """Subscribe *handler* to the error channel.  Usable as a decorator."""
        self._error_handlers.append(handler)
        return handler

    def remove_error_handler(self, handler: ErrorHandler) -> None:
        if handler in self._error_handlers:
            self._error_handlers.remove(handler)

    def error(self, message: str | CmdLoaderError) -> CommandLoader:
        """Signal *message* to every error subscriber and return ``self``.

        A string is wrapped in a :class:`DispatchError`.  Without any
        subscriber the error is logged at ERROR level instead of being
        raised.  Applications that configure no logging see it on stderr
        through the standard library's last-resort handler; subscribe a
        handler to take over how errors are reported.
        """
        exc = message if isinstance(message, CmdLoaderError) else DispatchError(message)
        if not self._error_handlers:
            LOG.error("%s", exc)
            return self
        for handler in list(self._error_handlers):
            handler(exc)
        return self

    # ------------------------------------------------------------------
    # Parsing
    # ------------------------------------------------------------------

    def parse(
        self,
        args: Sequence[str],
        option_spec: Mapping[str, OptionSpec | Mapping[str, Any]] | None = None,
    ) -> ParsedArguments:
        """Tokenize *args* with *option_spec* (or no spec)."""
        return self._tokenizer(args, option_spec or {})

    # ------------------------------------------------------------------
    # Lookup
    # ------------------------------------------------------------------

    def load_command(self, name: str) -> Command | None:
        """Load the command called *name*, or ``None`` if there is none.

        Broken modules are logged and reported as ``None`` too.
        """
        name = str(name)
        try:
            value = self._source.load(self.config.root, name)
        except CommandModuleNotFoundError:
            return None
        except Exception as exc:  # noqa: BLE001
            LOG.error(
                'Error while loading "%s": %s',
                name,
                exc,
                exc_info=exc,
            )
            return None

        if callable(value) and not is_command(value):
            value = Command(
                run=value,
                usage=getattr(value, "usage", None) or self.load_manual(name),
            )

        if not is_command(value):
            return None
        if isinstance(value, Command):
            return value
        return Command(run=_field(value, "run"), usage=_field(value, "usage"))

    def get_usage(self, name: str) -> str | None:
        command = self.load_command(name)
        return command.usage if command else None

    def get_run(self, name: str) -> Handler | None:
        command = self.load_command(name)
        return command.run if command else None

    def load_manual(self, name: str) -> str | None:
        """Return the manual text for *name*, or ``None``.

        ``None`` when no manuals directory is configured or the file
        does not exist.
        """
        if self.config.manuals is None:
            return None
        return self._manual_reader.read(self.config.manuals, str(name))

    def list_commands(self) -> list[str]:
        """Return the sorted command names offered under the root."""
        return sorted(self._source.names(self.config.root))

    # ------------------------------------------------------------------
    # Dispatch
    # ------------------------------------------------------------------

    def plan(self, args: Sequence[str] | None = None) -> Dispatch:
        """Decide which handler :meth:`run` would invoke, without invoking it."""
        if args is None:
            args = sys.argv[1:]
        argv = [str(arg) for arg in args]
        options = self.parse(argv)
        handler: Handler | None = None
        name: str | None = None
        outcome = Outcome.FALLBACK

        if options.get("help"):
            # --help wins over any command named positionally.
            name = self.config.usage
            handler = self.get_run(name)
            outcome = Outcome.HELP
        elif options.positionals:
            first = options.positionals[0]
            handler = self.get_run(first)
            if handler is not None:
                name = first
                outcome = Outcome.COMMAND
                argv = argv[argv.index(first) + 1:]
                options = self.parse(argv)
            elif self.config.strict:
                return Dispatch(Outcome.STRICT_MISS, first, None, tuple(argv), options)
            else:
                outcome = Outcome.PASSTHROUGH

        if handler is None:
            if outcome is Outcome.HELP:
                outcome = Outcome.FALLBACK
            name = self.config.fallback
            handler = self.get_run(name)
            if handler is None:
                return Dispatch(Outcome.UNRESOLVED, name, None, tuple(argv), options)

        return Dispatch(outcome, name, handler, tuple(argv), options)

    def run(self, args: Sequence[str] | None = None) -> CommandLoader:
        """Resolve a command from *args* and invoke it.

        *args* defaults to ``sys.argv[1:]``.  Returns ``self``.
        """
        dispatch = self.plan(args)
        LOG.debug(
            "Dispatch outcome %s for %r", dispatch.outcome.value, dispatch.name,
        )

        if dispatch.outcome is Outcome.STRICT_MISS:
            program = self.config.program
            return self.error(
                UnknownCommandError(
                    f'"{dispatch.name}" is not a {program} command. '
                    f"See `{program} help` for more information.",
                    name=str(dispatch.name),
                )
            )
        if dispatch.handler is None:
            return self.error(
                DispatchError(
                    f'No "{dispatch.name}" command could be found.',
                    hint=f"Looked in {self.config.root}",
                )
            )

        dispatch.handler(list(dispatch.args), dispatch.options, self)
        return self
