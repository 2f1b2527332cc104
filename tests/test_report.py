"""Tests for the resolution report (cli/report.py).

Coverage:
* ``NAME[:TYPE]`` request parsing;
* source tracing and per-name status;
* exit codes of ``run_report`` with and without ``strict``;
* plain-text output when Rich is hidden.
"""

from __future__ import annotations

from collections.abc import Callable
from datetime import timedelta
from unittest.mock import patch

import pytest

from envbind.cli import exit_codes
from envbind.cli.report import (
    STATUS_ERROR,
    STATUS_MISSING,
    STATUS_OK,
    parse_request,
    probe,
    run_report,
    trace,
)
from envbind.core.protocols import LookupFunc
from envbind.exceptions import EnvbindError

SourceFactory = Callable[..., LookupFunc]


# ---------------------------------------------------------------------------
# parse_request
# ---------------------------------------------------------------------------

class TestParseRequest:
    def test_defaults_to_str(self) -> None:
        assert parse_request("HOST") == ("HOST", "str")

    def test_explicit_type(self) -> None:
        assert parse_request("PORT:int16") == ("PORT", "int16")

    def test_type_is_case_insensitive(self) -> None:
        assert parse_request("DEBUG:Bool") == ("DEBUG", "bool")

    def test_unknown_type(self) -> None:
        with pytest.raises(EnvbindError, match="Unknown type 'complex'") as exc_info:
            parse_request("X:complex")
        assert exc_info.value.hint is not None
        assert "duration" in exc_info.value.hint

    def test_empty_name(self) -> None:
        with pytest.raises(EnvbindError, match="Invalid request"):
            parse_request(":int")


# ---------------------------------------------------------------------------
# trace / probe
# ---------------------------------------------------------------------------

class TestTrace:
    def test_reports_first_source(self, source: SourceFactory) -> None:
        sources = [("args", source(PORT="1")), ("env", source(PORT="2", HOST="h"))]
        assert trace("PORT", sources) == ("1", "args")
        assert trace("HOST", sources) == ("h", "env")
        assert trace("NOPE", sources) == (None, None)


class TestProbe:
    def test_statuses(self, source: SourceFactory) -> None:
        sources = [("env", source(PORT="80", TIMEOUT="soon"))]
        results = probe(
            [("PORT", "int"), ("TIMEOUT", "duration"), ("HOST", "str")],
            sources,
        )
        by_name = {item.name: item for item in results}

        assert by_name["PORT"].status == STATUS_OK
        assert by_name["PORT"].value == 80
        assert by_name["PORT"].source == "env"

        assert by_name["TIMEOUT"].status == STATUS_ERROR
        assert 'parse duration: parsing "soon": invalid syntax' in by_name["TIMEOUT"].detail

        assert by_name["HOST"].status == STATUS_MISSING
        assert by_name["HOST"].raw is None
        assert by_name["HOST"].value == ""

    def test_preserves_request_order(self, source: SourceFactory) -> None:
        results = probe([("B", "str"), ("A", "str")], [("env", source())])
        assert [item.name for item in results] == ["B", "A"]

    def test_typed_values(self, source: SourceFactory) -> None:
        results = probe(
            [("WAIT", "duration"), ("TAGS", "list"), ("LIMITS", "map")],
            [("env", source(WAIT="1m", TAGS="a,b", LIMITS="cpu=2"))],
        )
        assert [item.value for item in results] == [
            timedelta(minutes=1),
            ["a", "b"],
            {"cpu": "2"},
        ]

    def test_no_sources(self) -> None:
        with pytest.raises(EnvbindError, match="No sources selected"):
            probe([("A", "str")], [])


# ---------------------------------------------------------------------------
# run_report
# ---------------------------------------------------------------------------

class TestRunReport:
    def test_success(self, source: SourceFactory) -> None:
        code = run_report([("PORT", "int")], [("env", source(PORT="80"))])
        assert code == exit_codes.SUCCESS

    def test_missing_is_fine_without_strict(self, source: SourceFactory) -> None:
        code = run_report([("PORT", "int")], [("env", source())])
        assert code == exit_codes.SUCCESS

    def test_missing_fails_with_strict(self, source: SourceFactory) -> None:
        code = run_report([("PORT", "int")], [("env", source())], strict=True)
        assert code == exit_codes.RESOLUTION_FAILED

    def test_parse_error_fails(self, source: SourceFactory) -> None:
        code = run_report([("PORT", "uint8")], [("env", source(PORT="256"))])
        assert code == exit_codes.RESOLUTION_FAILED

    @patch.dict("sys.modules", {"rich": None, "rich.table": None, "rich.markup": None})
    def test_plain_output(
        self,
        source: SourceFactory,
        capsys: pytest.CaptureFixture[str],
    ) -> None:
        run_report(
            [("PORT", "int"), ("DEBUG", "bool")],
            [("env", source(PORT="80", DEBUG="maybe"))],
        )
        err = capsys.readouterr().err
        assert "PORT" in err
        assert STATUS_OK in err
        assert STATUS_ERROR in err
        assert 'parse bool: parsing "maybe": invalid syntax' in err
