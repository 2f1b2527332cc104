"""Regression tests for optional dependency boundaries (rich / python-dotenv).

The library core and the CLI's ``--help``/``--version`` paths must keep
working when rich or python-dotenv is missing; only the paths that need
them fail, and they fail with a typed :class:`MissingDependencyError`.
"""

from __future__ import annotations

import sys
from pathlib import Path
from unittest.mock import patch

import pytest

from envbind.cli import exit_codes
from envbind.cli.app import cli, main
from envbind.exceptions import EnvbindError, MissingDependencyError
from envbind.infra.dotenv_source import dotenv_file


def _hide_rich(monkeypatch: pytest.MonkeyPatch) -> None:
    monkeypatch.setitem(sys.modules, "rich", None)
    monkeypatch.setitem(sys.modules, "rich.console", None)
    monkeypatch.setitem(sys.modules, "rich.markup", None)
    monkeypatch.setitem(sys.modules, "rich.table", None)


def _hide_dotenv(monkeypatch: pytest.MonkeyPatch) -> None:
    monkeypatch.setitem(sys.modules, "dotenv", None)


def test_help_works_without_rich_or_dotenv(monkeypatch: pytest.MonkeyPatch) -> None:
    _hide_rich(monkeypatch)
    _hide_dotenv(monkeypatch)

    with pytest.raises(SystemExit) as exc_info:
        main(["--help"])
    assert exc_info.value.code == 0


def test_version_works_without_rich_or_dotenv(monkeypatch: pytest.MonkeyPatch) -> None:
    _hide_rich(monkeypatch)
    _hide_dotenv(monkeypatch)

    with pytest.raises(SystemExit) as exc_info:
        main(["--version"])
    assert exc_info.value.code == 0


def test_report_falls_back_to_plain_table(
    monkeypatch: pytest.MonkeyPatch,
    capsys: pytest.CaptureFixture[str],
) -> None:
    _hide_rich(monkeypatch)

    code = main(["--no-env", "PORT:int", "--", "--port", "8080"])
    assert code == exit_codes.SUCCESS
    err = capsys.readouterr().err
    assert "PORT" in err
    assert "8080" in err
    assert "OK" in err


def test_env_only_report_works_without_dotenv(monkeypatch: pytest.MonkeyPatch) -> None:
    _hide_dotenv(monkeypatch)
    monkeypatch.setenv("ENVBIND_OPTIONAL_NAME", "x")

    assert main(["ENVBIND_OPTIONAL_NAME"]) == exit_codes.SUCCESS


def test_dotenv_source_raises_without_dotenv(
    monkeypatch: pytest.MonkeyPatch,
    tmp_path: Path,
) -> None:
    _hide_dotenv(monkeypatch)

    with pytest.raises(MissingDependencyError, match="python-dotenv is not installed"):
        dotenv_file(tmp_path / ".env")


def test_dotenv_flag_errors_cleanly_without_dotenv(
    monkeypatch: pytest.MonkeyPatch,
    tmp_path: Path,
) -> None:
    _hide_dotenv(monkeypatch)

    with pytest.raises(MissingDependencyError):
        main(["--dotenv", str(tmp_path / ".env"), "PORT"])


def test_library_core_needs_neither(monkeypatch: pytest.MonkeyPatch) -> None:
    _hide_rich(monkeypatch)
    _hide_dotenv(monkeypatch)
    from envbind import Registry, from_mapping

    registry = Registry(from_mapping({"PORT": "80"}))
    port = registry.var(int, "PORT")
    assert registry.resolve() is None
    assert port.value == 80


def test_error_boundary_prints_plain_text_without_rich(
    monkeypatch: pytest.MonkeyPatch,
    capsys: pytest.CaptureFixture[str],
) -> None:
    _hide_rich(monkeypatch)

    with patch("envbind.cli.app.main", side_effect=EnvbindError("bad [x]", hint="try")):
        with pytest.raises(SystemExit) as exc_info:
            cli()
    assert exc_info.value.code == exit_codes.GENERAL_ERROR
    err = capsys.readouterr().err
    assert "Error: bad [x]" in err
    assert "Hint: try" in err


def test_interrupt_message_drops_markup_without_rich(
    monkeypatch: pytest.MonkeyPatch,
    capsys: pytest.CaptureFixture[str],
) -> None:
    _hide_rich(monkeypatch)

    with patch("envbind.cli.app.main", side_effect=KeyboardInterrupt):
        with pytest.raises(SystemExit):
            cli()
    err = capsys.readouterr().err
    assert "Aborted by user." in err
    assert "[yellow]" not in err
