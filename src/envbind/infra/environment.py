"""Process-environment source adapter."""

from __future__ import annotations

import os

from envbind.core.protocols import LookupFunc


def lookup_env(name: str) -> tuple[str, bool]:
    """Look *name* up in ``os.environ`` at call time."""
    value = os.environ.get(name)
    if value is None:
        return "", False
    return value, True


def environment() -> LookupFunc:
    """Return the environment lookup (for symmetry with other adapters)."""
    return lookup_env
