"""CLI application entry point for cmdloader.

This module is the **sole error boundary** for the ``cmdloader``
console script.  It catches :class:`~cmdloader.exceptions.CmdLoaderError`,
``KeyboardInterrupt``, and any unexpected ``Exception``, rendering
user-friendly messages and returning well-defined exit codes.

Tool authors embedding the loader call :func:`dispatch` from their own
entry point; it supplies the process arguments and turns errors
emitted on the loader's error channel into an exit code.
"""

from __future__ import annotations

import argparse
import sys
from collections.abc import Sequence

from cmdloader.api import create_loader
from cmdloader.cli import exit_codes
from cmdloader.cli.console import configure_logging, console
from cmdloader.core.loader import CommandLoader
from cmdloader.exceptions import CmdLoaderError
from cmdloader.version import __version__


# ---------------------------------------------------------------------------
# Argument parser
# ---------------------------------------------------------------------------

def _build_parser() -> argparse.ArgumentParser:
    """Construct the parser for loader settings.

    ``--help`` is deliberately not handled here: it is forwarded to the
    loader, which runs the configured usage command.  The parser only
    sees the settings picked out by :func:`_split_argv`.
    """
    parser = argparse.ArgumentParser(
        prog="cmdloader",
        description="Run commands from a directory of command modules.",
        add_help=False,
        allow_abbrev=False,
    )
    parser.add_argument(
        "-V",
        "--version",
        action="version",
        version=f"%(prog)s {__version__}",
    )
    parser.add_argument("--root", default=None, help="Directory of command modules.")
    parser.add_argument(
        "--strict",
        action="store_true",
        help="Fail on unknown command names instead of passing them on.",
    )
    parser.add_argument("--usage", default=None, help="Command run for --help.")
    parser.add_argument(
        "--fallback", default=None, help="Command run when none is named.",
    )
    parser.add_argument("--manuals", default=None, help="Directory of manual files.")
    parser.add_argument(
        "--program",
        default="cmdloader",
        help="Tool name shown in error messages.",
    )
    parser.add_argument(
        "-v", "--verbose", action="store_true", help="Enable debug logging.",
    )
    return parser


_VALUE_OPTIONS = frozenset({"--root", "--usage", "--fallback", "--manuals", "--program"})
_SWITCH_OPTIONS = frozenset({"--strict", "-v", "--verbose", "-V", "--version"})


def _is_flag(token: str) -> bool:
    if token == "--" or len(token) < 2 or not token.startswith("-"):
        return False
    return not (token[1].isdigit() or token[1] == ".")


def _split_argv(argv: Sequence[str]) -> tuple[list[str], list[str]]:
    """Separate loader settings from the arguments forwarded to the loader.

    Settings are collected up to the command name.  Other flags seen on
    the way (such as ``--help``) are forwarded in order, together with
    the value that follows them, the way the loader's tokenizer reads
    them.  The command name and everything after it are forwarded
    untouched.
    """
    settings: list[str] = []
    forwarded: list[str] = []
    index = 0
    while index < len(argv):
        token = argv[index]
        key = token.split("=", 1)[0]
        if key in _VALUE_OPTIONS:
            width = 1 if "=" in token else 2
            settings.extend(argv[index:index + width])
            index += width
        elif token in _SWITCH_OPTIONS:
            settings.append(token)
            index += 1
        elif _is_flag(token):
            forwarded.append(token)
            index += 1
            takes_value = (
                "=" not in token and not token.startswith("--no-")
                if token.startswith("--")
                else token[1:].isalpha()
            )
            if takes_value and index < len(argv) and not argv[index].startswith("-"):
                forwarded.append(argv[index])
                index += 1
        else:
            break
    return settings, [*forwarded, *argv[index:]]


# ---------------------------------------------------------------------------
# Dispatch helper
# ---------------------------------------------------------------------------

def _render_error(exc: CmdLoaderError) -> None:
    console.print(f"Error: {exc}", markup=False)
    if exc.hint:
        console.print(f"Hint: {exc.hint}", markup=False)


def dispatch(loader: CommandLoader, argv: Sequence[str] | None = None) -> int:
    """Run *loader* and return an exit code.

    Parameters
    ----------
    loader:
        A configured :class:`CommandLoader`.
    argv:
        Arguments to dispatch.  When ``None``, ``sys.argv[1:]`` is used.

    Returns
    -------
    int
        :data:`exit_codes.GENERAL_ERROR` if anything was emitted on the
        loader's error channel, :data:`exit_codes.SUCCESS` otherwise.
    """
    emitted: list[CmdLoaderError] = []

    def _on_error(exc: CmdLoaderError) -> None:
        emitted.append(exc)
        _render_error(exc)

    loader.on_error(_on_error)
    try:
        loader.run(list(sys.argv[1:] if argv is None else argv))
    finally:
        loader.remove_error_handler(_on_error)
    return exit_codes.GENERAL_ERROR if emitted else exit_codes.SUCCESS


# ---------------------------------------------------------------------------
# Main entry point
# ---------------------------------------------------------------------------

def main(argv: list[str] | None = None) -> int:
    """Run the cmdloader CLI.

    Parameters
    ----------
    argv:
        Explicit argument list.  When ``None`` (default), ``sys.argv[1:]``
        is used.

    Returns
    -------
    int
        OS process exit code.
    """
    leading, forwarded = _split_argv(sys.argv[1:] if argv is None else argv)
    settings = _build_parser().parse_args(leading)
    configure_logging(settings.verbose)

    loader = create_loader(
        settings.root,
        strict=settings.strict,
        usage=settings.usage,
        fallback=settings.fallback,
        manuals=settings.manuals,
        program=settings.program,
    )
    return dispatch(loader, forwarded)


# ---------------------------------------------------------------------------
# Script-level error boundary
# ---------------------------------------------------------------------------

def cli() -> None:
    """Top-level error boundary invoked by the console-script entry point."""
    try:
        code = main()
        sys.exit(code)
    except CmdLoaderError as exc:
        _render_error(exc)
        sys.exit(exit_codes.GENERAL_ERROR)
    except KeyboardInterrupt:
        console.print("\nAborted by user.", markup=False)
        sys.exit(exit_codes.KEYBOARD_INTERRUPT)
    except Exception as exc:  # noqa: BLE001
        console.print(
            "[bold red]Unexpected error.[/bold red] "
            "Please report this issue.\n"
            f"  {type(exc).__name__}: {exc}"
        )
        sys.exit(exit_codes.UNEXPECTED_ERROR)
