"""Command-line source adapter.

Turns a flat argument list into a ``flag -> [values]`` table so that
names declared for environment variables can be supplied as flags too.
``DATABASE_URL`` is found through ``--database-url``: lookups are
case-insensitive and underscores match dashes.

Tokenizer rules (left to right, one token of lookahead):

* a token starting with ``-`` is a flag; its leading dashes are stripped
  and its name lowercased;
* ``--name=value`` records ``value`` immediately;
* otherwise the flag becomes *pending* and the next non-flag token is its
  value;
* a pending flag followed by another flag, or by the end of input, with
  no value recorded so far is a boolean and records ``"true"``;
* non-flag tokens with nothing pending are positional and ignored.

Repeated flags accumulate; the lookup joins them with ``,`` which is
exactly what sequence destinations split on.
"""

from __future__ import annotations

import logging
import sys
from collections.abc import Sequence

from envbind.core.protocols import LookupFunc

logger = logging.getLogger(__name__)

_BOOLEAN_TRUE = "true"


def flag_name(name: str) -> str:
    """Normalise a binding name to its flag spelling (``A_B`` -> ``a-b``)."""
    return name.lower().replace("_", "-")


def tokenize(args: Sequence[str]) -> dict[str, list[str]]:
    """Build the ``flag -> values`` table for *args*."""
    table: dict[str, list[str]] = {}
    pending = ""

    def close_pending() -> None:
        if pending and not table.get(pending):
            table[pending] = [_BOOLEAN_TRUE]

    for arg in args:
        if arg.startswith("-"):
            close_pending()
            name, sep, value = arg.lstrip("-").partition("=")
            pending = name.lower()
            if sep:
                table.setdefault(pending, []).append(value)
                pending = ""
        elif pending:
            table.setdefault(pending, []).append(arg)
            pending = ""
        # else: positional argument, skipped

    close_pending()
    return table


def command_line_args(*args: str) -> LookupFunc:
    """Return a lookup over flags in *args* (default: ``sys.argv[1:]``).

    The arguments are tokenized once, when the lookup is created.
    """
    argv: Sequence[str] = args if args else sys.argv[1:]
    table = tokenize(argv)
    logger.debug("Parsed command-line flags: %s", sorted(table))

    def lookup(name: str) -> tuple[str, bool]:
        values = table.get(flag_name(name))
        if values is None:
            return "", False
        return ",".join(values), True

    return lookup
