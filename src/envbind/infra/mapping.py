"""In-memory source adapter over any ``Mapping[str, str]``."""

from __future__ import annotations

from collections.abc import Mapping

from envbind.core.protocols import LookupFunc


def from_mapping(values: Mapping[str, str]) -> LookupFunc:
    """Return a lookup over *values*.

    The mapping is read on every call, so later changes are visible.
    """

    def lookup(name: str) -> tuple[str, bool]:
        if name in values:
            return values[name], True
        return "", False

    return lookup
