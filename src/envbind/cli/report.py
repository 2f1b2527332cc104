"""``envbind NAME[:TYPE]...``: report how names resolve through a source chain.

For each requested name the command reports the raw value, which source
supplied it, and the value parsed into the requested type.  Parsing
goes through a real :class:`~envbind.core.registry.Registry`, so the
output matches what an application binding the same names would see.

This module lives in the CLI layer and renders via Rich, falling back
to a plain-text table when Rich is not installed.
"""

from __future__ import annotations

import sys
from collections.abc import Sequence
from dataclasses import dataclass
from datetime import timedelta
from typing import Any

from envbind.cli import exit_codes
from envbind.cli.console import console, rich_available
from envbind.core.kinds import Float32, Int8, Int16, Int32, Int64, Uint, Uint8, Uint16, Uint32, Uint64
from envbind.core.protocols import LookupFunc
from envbind.core.registry import Registry
from envbind.exceptions import EnvbindError, ParseFailure, RequiredMissingError

Source = tuple[str, LookupFunc]
"""A labelled lookup function, e.g. ``("env", lookup_env)``."""

TYPE_NAMES: dict[str, Any] = {
    "str": str,
    "int": int,
    "int8": Int8,
    "int16": Int16,
    "int32": Int32,
    "int64": Int64,
    "uint": Uint,
    "uint8": Uint8,
    "uint16": Uint16,
    "uint32": Uint32,
    "uint64": Uint64,
    "float": float,
    "float32": Float32,
    "bool": bool,
    "duration": timedelta,
    "bytes": bytes,
    "list": list[str],
    "map": dict[str, str],
}

STATUS_OK = "OK"
STATUS_MISSING = "NOT FOUND"
STATUS_ERROR = "ERROR"


@dataclass(frozen=True, slots=True)
class Probe:
    """Outcome for one requested name."""

    name: str
    type_name: str
    raw: str | None
    source: str | None
    value: Any
    status: str
    detail: str = ""


# ---------------------------------------------------------------------------
# Probing
# ---------------------------------------------------------------------------

def parse_request(token: str) -> tuple[str, str]:
    """Split ``NAME[:TYPE]`` into ``(name, type_name)``.

    Raises
    ------
    EnvbindError
        When the name is empty or the type is unknown.
    """
    name, _, type_name = token.partition(":")
    type_name = type_name.strip().lower() or "str"
    if not name:
        raise EnvbindError(f"Invalid request: {token!r}", hint="Use NAME or NAME:TYPE.")
    if type_name not in TYPE_NAMES:
        raise EnvbindError(
            f"Unknown type {type_name!r} for {name}",
            hint="Known types: " + ", ".join(sorted(TYPE_NAMES)),
        )
    return name, type_name


def trace(name: str, sources: Sequence[Source]) -> tuple[str | None, str | None]:
    """Return ``(raw_value, source_label)`` of the first source that has *name*."""
    for label, lookup in sources:
        value, found = lookup(name)
        if found:
            return value, label
    return None, None


def probe(
    requests: Sequence[tuple[str, str]],
    sources: Sequence[Source],
    *,
    strict: bool = False,
) -> list[Probe]:
    """Resolve *requests* against *sources* and describe each outcome.

    With *strict*, names absent from every source count as errors.
    """
    if not sources:
        raise EnvbindError("No sources selected.", hint="Drop --no-env or add --dir/--dotenv/args.")

    registry = Registry(*(lookup for _, lookup in sources))
    cells = {
        name: (type_name, registry.var(TYPE_NAMES[type_name], name, required=strict))
        for name, type_name in requests
    }
    error = registry.resolve()
    failures = {err.name: err for err in error.errors} if error is not None else {}

    probes: list[Probe] = []
    for name, (type_name, cell) in cells.items():
        raw, source = trace(name, sources)
        failure = failures.get(name)
        if isinstance(failure, ParseFailure):
            status, detail = STATUS_ERROR, str(failure.cause)
        elif isinstance(failure, RequiredMissingError) or raw is None:
            status, detail = STATUS_MISSING, ""
        else:
            status, detail = STATUS_OK, ""
        probes.append(Probe(name, type_name, raw, source, cell.value, status, detail))
    return probes


# ---------------------------------------------------------------------------
# Rendering
# ---------------------------------------------------------------------------

_STATUS_MARKUP: dict[str, str] = {
    STATUS_OK: "[green]OK[/green]",
    STATUS_MISSING: "[yellow]NOT FOUND[/yellow]",
    STATUS_ERROR: "[red]ERROR[/red]",
}


def _value_cell(item: Probe) -> str:
    if item.status == STATUS_ERROR:
        return item.detail
    if item.status == STATUS_MISSING:
        return "-"
    return repr(item.value)


def _print_plain_table(probes: Sequence[Probe]) -> None:
    """Render results without Rich."""
    print(file=sys.stderr)
    print(f"{'Name':<24} {'Source':<8} {'Status':<10} Value", file=sys.stderr)
    print("-" * 72, file=sys.stderr)
    for item in probes:
        print(
            f"{item.name:<24} {item.source or '-':<8} {item.status:<10} {_value_cell(item)}",
            file=sys.stderr,
        )
    print(file=sys.stderr)


def run_report(
    requests: Sequence[tuple[str, str]],
    sources: Sequence[Source],
    *,
    strict: bool = False,
) -> int:
    """Probe *requests* and render a summary table.

    Returns
    -------
    int
        :data:`exit_codes.SUCCESS` when nothing failed,
        :data:`exit_codes.RESOLUTION_FAILED` on a parse error or, with
        *strict*, a missing name.
    """
    probes = probe(requests, sources, strict=strict)

    if rich_available():
        from rich.markup import escape
        from rich.table import Table

        table = Table(
            title="envbind",
            show_header=True,
            header_style="bold cyan",
            border_style="dim",
        )
        table.add_column("Name", style="bold", min_width=12)
        table.add_column("Type", min_width=6)
        table.add_column("Source", min_width=6)
        table.add_column("Status", justify="center", min_width=9)
        table.add_column("Value", min_width=20)

        for item in probes:
            table.add_row(
                escape(item.name),
                item.type_name,
                item.source or "-",
                _STATUS_MARKUP[item.status],
                escape(_value_cell(item)),
            )

        console.print()
        console.print(table)
        console.print()
    else:
        _print_plain_table(probes)

    failed = any(
        item.status == STATUS_ERROR or (strict and item.status == STATUS_MISSING)
        for item in probes
    )
    return exit_codes.RESOLUTION_FAILED if failed else exit_codes.SUCCESS
