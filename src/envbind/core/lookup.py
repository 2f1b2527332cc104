"""Lookup composition: many sources chained into one lookup function."""

from __future__ import annotations

from envbind.core.protocols import LookupFunc
from envbind.infra.environment import lookup_env


def compose(*lookups: LookupFunc | None) -> LookupFunc:
    """Chain *lookups* so that the first source reporting ``found`` wins.

    ``None`` entries are dropped.  With no sources left, the result is
    the process-environment lookup itself.
    """
    chain: tuple[LookupFunc, ...] = tuple(fn for fn in lookups if fn is not None)
    if not chain:
        return lookup_env
    if len(chain) == 1:
        return chain[0]

    def lookup(name: str) -> tuple[str, bool]:
        for fn in chain:
            value, found = fn(name)
            if found:
                return value, True
        return "", False

    return lookup
