"""CLI application entry point for envbind.

This module is the **sole error boundary** of the command-line tool.
It catches :class:`~envbind.exceptions.EnvbindError`, ``KeyboardInterrupt``,
and any unexpected ``Exception``, rendering user-friendly messages and
returning well-defined exit codes.

Usage::

    envbind [--dir DIR] [--dotenv PATH] [--no-env] [--strict] NAME[:TYPE]... [-- ARG...]

Arguments after ``--`` are fed to the command-line source, so
``envbind PORT:int -- --port 8080`` shows what an application reading
``PORT`` from its own flags would get.
"""

from __future__ import annotations

import argparse
import sys
from collections.abc import Sequence

from envbind.cli import exit_codes
from envbind.cli.console import configure_logging, console
from envbind.core.protocols import LookupFunc
from envbind.exceptions import EnvbindError
from envbind.version import __version__

_PASSTHROUGH = "--"


# ---------------------------------------------------------------------------
# Argument parser
# ---------------------------------------------------------------------------

def _build_parser() -> argparse.ArgumentParser:
    """Construct the top-level argument parser."""
    parser = argparse.ArgumentParser(
        prog="envbind",
        description="Show how configuration names resolve through envbind sources.",
        epilog="Arguments after '--' are used as the command-line source.",
    )
    parser.add_argument(
        "-V",
        "--version",
        action="version",
        version=f"%(prog)s {__version__}",
    )
    parser.add_argument(
        "-v",
        "--verbose",
        action="store_true",
        help="Enable debug logging.",
    )
    parser.add_argument(
        "--dotenv",
        metavar="PATH",
        default=None,
        help="Read a .env file (checked after command-line arguments).",
    )
    parser.add_argument(
        "--no-env",
        action="store_true",
        help="Do not consult the process environment.",
    )
    parser.add_argument(
        "--dir",
        metavar="DIR",
        default=None,
        help="Read NAME as a file under DIR (checked last).",
    )
    parser.add_argument(
        "--strict",
        action="store_true",
        help="Treat names missing from every source as errors.",
    )
    parser.add_argument(
        "names",
        nargs="*",
        metavar="NAME[:TYPE]",
        help="Names to resolve, optionally typed (e.g. PORT:int, TAGS:list).",
    )
    return parser


def _split_passthrough(argv: Sequence[str]) -> tuple[list[str], list[str] | None]:
    """Split *argv* at the first ``--`` into (own args, source args)."""
    args = list(argv)
    if _PASSTHROUGH not in args:
        return args, None
    index = args.index(_PASSTHROUGH)
    return args[:index], args[index + 1:]


def _build_sources(
    args: argparse.Namespace,
    source_args: list[str] | None,
) -> list[tuple[str, LookupFunc]]:
    """Assemble the labelled source chain in precedence order."""
    from envbind.infra.command_line import command_line_args
    from envbind.infra.dotenv_source import dotenv_file
    from envbind.infra.environment import lookup_env
    from envbind.infra.file_system import FileSystemOptions, file_system

    sources: list[tuple[str, LookupFunc]] = []
    if source_args:
        sources.append(("args", command_line_args(*source_args)))
    if args.dotenv is not None:
        sources.append(("dotenv", dotenv_file(args.dotenv)))
    if not args.no_env:
        sources.append(("env", lookup_env))
    if args.dir is not None:
        sources.append(("file", file_system(FileSystemOptions(base=args.dir))))
    return sources


# ---------------------------------------------------------------------------
# Main entry point
# ---------------------------------------------------------------------------

def main(argv: list[str] | None = None) -> int:
    """Run the envbind CLI.

    Parameters
    ----------
    argv:
        Explicit argument list.  When ``None`` (default), ``sys.argv[1:]``
        is used.  Accepting *argv* enables deterministic testing without
        monkeypatching.

    Returns
    -------
    int
        OS process exit code.
    """
    own_args, source_args = _split_passthrough(sys.argv[1:] if argv is None else argv)
    parser = _build_parser()
    args = parser.parse_args(own_args)

    configure_logging(args.verbose)

    if not args.names:
        parser.print_help()
        return exit_codes.SUCCESS

    from envbind.cli.report import parse_request, run_report

    requests = [parse_request(token) for token in args.names]
    sources = _build_sources(args, source_args)
    return run_report(requests, sources, strict=args.strict)


# ---------------------------------------------------------------------------
# Script-level error boundary
# ---------------------------------------------------------------------------

def cli() -> None:
    """Top-level error boundary invoked by the console-script entry point.

    This function wraps :func:`main` and guarantees the process never
    exits with a raw stack trace during normal usage.
    """
    try:
        code = main()
        sys.exit(code)
    except EnvbindError as exc:
        console.labelled("Error:", "bold red", str(exc))
        if exc.hint:
            console.labelled("Hint:", "yellow", exc.hint)
        sys.exit(exit_codes.GENERAL_ERROR)
    except KeyboardInterrupt:
        console.print("\n[yellow]Aborted by user.[/yellow]")
        sys.exit(exit_codes.KEYBOARD_INTERRUPT)
    except Exception as exc:  # noqa: BLE001
        console.labelled(
            "Unexpected error.",
            "bold red",
            f"Please report this issue.\n  {type(exc).__name__}: {exc}",
        )
        sys.exit(exit_codes.UNEXPECTED_ERROR)
