"""Process-wide default registry reading ``os.environ``.

A thin convenience layer for scripts that want zero set-up::

    from envbind import default

    port = default.var(int, "PORT", default=8080)
    default.must_resolve()

Libraries and larger programs should build their own
:class:`~envbind.core.registry.Registry` instead.
"""

from __future__ import annotations

from typing import Any

from envbind.core.models import UNSET, Options, Var
from envbind.core.protocols import Destination, LookupFunc
from envbind.core.registry import Registry
from envbind.exceptions import ResolutionError

ENVIRONMENT: Registry = Registry()
"""The shared registry behind the module-level functions."""


def var(target_type: Any, name: str, *, required: bool = False, default: Any = UNSET) -> Var[Any]:
    return ENVIRONMENT.var(target_type, name, required=required, default=default)


def register(destination: Destination, name: str, options: Options[Any] | None = None) -> None:
    ENVIRONMENT.register(destination, name, options)


def set_lookup(*lookups: LookupFunc | None) -> None:
    ENVIRONMENT.set_lookup(*lookups)


def resolve() -> ResolutionError | None:
    return ENVIRONMENT.resolve()


def must_resolve() -> None:
    ENVIRONMENT.must_resolve()
