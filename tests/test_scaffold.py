"""Smoke tests — verify wiring of the package and the CLI.

These tests prove that:
* The CLI entry point is importable and callable.
* The exception hierarchy is correctly structured.
* Version is accessible.
* Exit codes are defined.
"""

from __future__ import annotations

import sys
from collections.abc import Callable
from pathlib import Path
from unittest.mock import patch

import pytest

from cmdloader import __version__, create_loader
from cmdloader.cli import exit_codes
from cmdloader.cli.app import cli, dispatch, main
from cmdloader.exceptions import (
    CmdLoaderError,
    CommandModuleLoadError,
    CommandModuleNotFoundError,
    DispatchError,
    EnvironmentError,
    ModuleSourceError,
    OptionSpecError,
    UnknownCommandError,
)

WriteCommand = Callable[[str, str], Path]

DEPLOY = """\
usage = "Usage: deploy [--force]"

def run(args, options, loader):
    print("deploying", args, options.get("force"))
"""


# ---------------------------------------------------------------------------
# Version
# ---------------------------------------------------------------------------

class TestVersion:
    def test_version_is_string(self) -> None:
        assert isinstance(__version__, str)

    def test_version_is_semver_like(self) -> None:
        parts = __version__.split(".")
        assert len(parts) == 3
        assert all(part.isdigit() for part in parts)


# ---------------------------------------------------------------------------
# Exception hierarchy
# ---------------------------------------------------------------------------

class TestExceptions:
    @pytest.mark.parametrize(
        "exc_class",
        [
            DispatchError,
            UnknownCommandError,
            ModuleSourceError,
            CommandModuleNotFoundError,
            CommandModuleLoadError,
            OptionSpecError,
            EnvironmentError,
        ],
    )
    def test_all_exceptions_inherit_from_base(
        self, exc_class: type[CmdLoaderError]
    ) -> None:
        assert issubclass(exc_class, CmdLoaderError)

    def test_base_inherits_from_exception(self) -> None:
        assert issubclass(CmdLoaderError, Exception)

    def test_unknown_command_is_a_dispatch_error(self) -> None:
        assert issubclass(UnknownCommandError, DispatchError)

    def test_hint_is_stored(self) -> None:
        err = CmdLoaderError("boom", hint="try this")
        assert str(err) == "boom"
        assert err.hint == "try this"

    def test_hint_defaults_to_none(self) -> None:
        assert CmdLoaderError("boom").hint is None

    def test_name_is_stored(self) -> None:
        assert CommandModuleLoadError("x", name="deploy").name == "deploy"


# ---------------------------------------------------------------------------
# Exit codes
# ---------------------------------------------------------------------------

class TestExitCodes:
    def test_success_is_zero(self) -> None:
        assert exit_codes.SUCCESS == 0

    def test_general_error_is_one(self) -> None:
        assert exit_codes.GENERAL_ERROR == 1

    def test_keyboard_interrupt_is_130(self) -> None:
        assert exit_codes.KEYBOARD_INTERRUPT == 130

    def test_unexpected_error_is_two(self) -> None:
        assert exit_codes.UNEXPECTED_ERROR == 2


# ---------------------------------------------------------------------------
# CLI routing
# ---------------------------------------------------------------------------

class TestCLIRouting:
    def test_no_args_runs_builtin_help(self, capsys: pytest.CaptureFixture[str]) -> None:
        code = main([])
        assert code == exit_codes.SUCCESS
        err = capsys.readouterr().err
        assert "Usage: help [COMMAND]" in err
        assert "Commands:" in err

    def test_help_flag_is_forwarded(self, capsys: pytest.CaptureFixture[str]) -> None:
        assert main(["--help"]) == exit_codes.SUCCESS
        assert "Usage: help [COMMAND]" in capsys.readouterr().err

    def test_version_flag(self) -> None:
        with pytest.raises(SystemExit) as exc_info:
            main(["--version"])
        assert exc_info.value.code == 0

    def test_runs_command_from_root(
        self,
        commands_dir: Path,
        write_command: WriteCommand,
        capsys: pytest.CaptureFixture[str],
    ) -> None:
        write_command("deploy", DEPLOY)
        code = main(["--root", str(commands_dir), "deploy", "--force"])
        assert code == exit_codes.SUCCESS
        assert capsys.readouterr().out == "deploying ['--force'] True\n"

    def test_loader_options_after_command_belong_to_command(
        self,
        commands_dir: Path,
        write_command: WriteCommand,
        capsys: pytest.CaptureFixture[str],
    ) -> None:
        write_command("deploy", DEPLOY)
        main(["--root", str(commands_dir), "deploy", "--strict"])
        assert capsys.readouterr().out == "deploying ['--strict'] None\n"

    def test_loader_options_after_leading_flag_value(
        self,
        commands_dir: Path,
        write_command: WriteCommand,
        capsys: pytest.CaptureFixture[str],
    ) -> None:
        write_command("deploy", DEPLOY)
        code = main(["--env", "prod", "--root", str(commands_dir), "deploy", "--force"])
        assert code == exit_codes.SUCCESS
        assert capsys.readouterr().out == "deploying ['--force'] True\n"

    def test_inline_setting_value(
        self,
        commands_dir: Path,
        write_command: WriteCommand,
        capsys: pytest.CaptureFixture[str],
    ) -> None:
        write_command("deploy", DEPLOY)
        code = main([f"--root={commands_dir}", "--no-color", "deploy"])
        assert code == exit_codes.SUCCESS
        assert capsys.readouterr().out == "deploying [] None\n"

    def test_strict_unknown_command(
        self, commands_dir: Path, capsys: pytest.CaptureFixture[str],
    ) -> None:
        code = main(["--root", str(commands_dir), "--strict", "bogus"])
        assert code == exit_codes.GENERAL_ERROR
        assert (
            'Error: "bogus" is not a cmdloader command.'
            in capsys.readouterr().err
        )

    def test_program_name_in_message(
        self, commands_dir: Path, capsys: pytest.CaptureFixture[str],
    ) -> None:
        main(["--root", str(commands_dir), "--strict", "--program", "ship", "bogus"])
        assert "See `ship help`" in capsys.readouterr().err

    def test_missing_fallback(
        self, commands_dir: Path, capsys: pytest.CaptureFixture[str],
    ) -> None:
        code = main(["--root", str(commands_dir)])
        assert code == exit_codes.GENERAL_ERROR
        assert 'No "help" command could be found.' in capsys.readouterr().err


# ---------------------------------------------------------------------------
# dispatch helper
# ---------------------------------------------------------------------------

class TestDispatch:
    def test_defaults_to_process_arguments(
        self,
        commands_dir: Path,
        write_command: WriteCommand,
        monkeypatch: pytest.MonkeyPatch,
        capsys: pytest.CaptureFixture[str],
    ) -> None:
        write_command("deploy", DEPLOY)
        monkeypatch.setattr(sys, "argv", ["tool", "deploy"])

        code = dispatch(create_loader(commands_dir))

        assert code == exit_codes.SUCCESS
        assert capsys.readouterr().out == "deploying [] None\n"

    def test_error_handler_is_removed_afterwards(self, commands_dir: Path) -> None:
        loader = create_loader(commands_dir, strict=True)
        assert dispatch(loader, ["bogus"]) == exit_codes.GENERAL_ERROR
        assert loader._error_handlers == []


# ---------------------------------------------------------------------------
# Error boundary
# ---------------------------------------------------------------------------

class TestErrorBoundary:
    @pytest.mark.parametrize(
        ("raised", "expected"),
        [
            (CmdLoaderError("known", hint="do this"), exit_codes.GENERAL_ERROR),
            (KeyboardInterrupt(), exit_codes.KEYBOARD_INTERRUPT),
            (RuntimeError("surprise"), exit_codes.UNEXPECTED_ERROR),
        ],
    )
    def test_exit_codes(self, raised: BaseException, expected: int) -> None:
        with patch("cmdloader.cli.app.main", side_effect=raised):
            with pytest.raises(SystemExit) as exc_info:
                cli()
        assert exc_info.value.code == expected

    def test_success_exit(self) -> None:
        with patch("cmdloader.cli.app.main", return_value=exit_codes.SUCCESS):
            with pytest.raises(SystemExit) as exc_info:
                cli()
        assert exc_info.value.code == exit_codes.SUCCESS

    def test_hint_is_rendered(self, capsys: pytest.CaptureFixture[str]) -> None:
        with patch(
            "cmdloader.cli.app.main",
            side_effect=CmdLoaderError("known", hint="do this"),
        ):
            with pytest.raises(SystemExit):
                cli()
        err = capsys.readouterr().err
        assert "Error: known" in err
        assert "Hint: do this" in err
