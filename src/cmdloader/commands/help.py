"""``help`` — show usage for one command, or list every command."""

from __future__ import annotations

from typing import Any

from cmdloader.cli.console import console

usage = """\
Usage: help [COMMAND]

Show the usage of COMMAND, or list the available commands."""


def _summary(text: str | None) -> str:
    lines = (text or "").strip().splitlines()
    return lines[0] if lines else ""


def run(args: list[str], options: Any, loader: Any) -> None:
    if options.positionals:
        name = options.positionals[0]
        text = loader.get_usage(name)
        if text is None:
            loader.error(f'No help found for "{name}".')
            return
        console.print(text.rstrip(), markup=False)
        return

    console.print(usage, markup=False)
    names = loader.list_commands()
    if not names:
        return
    console.print("\nCommands:", markup=False)
    width = max(len(name) for name in names)
    for name in names:
        summary = _summary(loader.get_usage(name))
        console.print(f"  {name.ljust(width)}  {summary}".rstrip(), markup=False)
