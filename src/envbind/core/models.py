"""Data model: destinations, binding options and bindings.

:class:`Var` and :class:`AttrRef` are the two shipped
:class:`~envbind.core.protocols.Destination` implementations; any other
object with ``target_type``, ``get`` and ``set`` works as well.
"""

from __future__ import annotations

import copy
import typing
from dataclasses import dataclass
from typing import Any, Generic, TypeVar

from envbind.core.kinds import Unsupported, resolve_kind, unsupported_type_error
from envbind.core.protocols import Destination
from envbind.exceptions import EnvbindError

T = TypeVar("T")


class _Unset:
    """Sentinel type for "no default given"."""

    _instance: _Unset | None = None

    def __new__(cls) -> _Unset:
        if cls._instance is None:
            cls._instance = super().__new__(cls)
        return cls._instance

    def __repr__(self) -> str:
        return "UNSET"

    def __bool__(self) -> bool:
        return False


UNSET: Any = _Unset()
"""Marks an :class:`Options` default as not given (use the zero value)."""


# ---------------------------------------------------------------------------
# Destinations
# ---------------------------------------------------------------------------

class Var(Generic[T]):
    """A standalone typed cell.

    Usage::

        port = Var(int)
        registry.register(port, "PORT")
        registry.must_resolve()
        port.value  # -> 8080
    """

    def __init__(self, target_type: Any, value: T | None = None) -> None:
        self.target_type: Any = target_type
        self.value: T | None = value

    def get(self) -> T | None:
        return self.value

    def set(self, value: T) -> None:
        self.value = value

    def __repr__(self) -> str:
        return f"Var({self.target_type!r}, {self.value!r})"


class AttrRef:
    """An attribute of an existing object used as a destination.

    When *target_type* is omitted it is read from the owner class's type
    hints, so dataclass fields bind without repeating their types.
    """

    def __init__(self, owner: object, attr: str, target_type: Any = None) -> None:
        if target_type is None:
            target_type = _attribute_hint(type(owner), attr)
        self.owner: object = owner
        self.attr: str = attr
        self.target_type: Any = target_type

    def get(self) -> Any:
        return getattr(self.owner, self.attr, None)

    def set(self, value: Any) -> None:
        setattr(self.owner, self.attr, value)

    def __repr__(self) -> str:
        return f"AttrRef({type(self.owner).__name__}.{self.attr}, {self.target_type!r})"


def _attribute_hint(cls: type, attr: str) -> Any:
    try:
        hints = typing.get_type_hints(cls, include_extras=True)
    except NameError as exc:
        raise EnvbindError(
            f"cannot evaluate type hints of {cls.__qualname__}: {exc}",
            hint="Pass target_type explicitly.",
        ) from exc
    if attr not in hints:
        raise EnvbindError(
            f"{cls.__qualname__}.{attr} has no type annotation",
            hint="Annotate the attribute or pass target_type explicitly.",
        )
    return hints[attr]


# ---------------------------------------------------------------------------
# Options and bindings
# ---------------------------------------------------------------------------

@dataclass(frozen=True)
class Options(Generic[T]):
    """Per-binding policy.

    Attributes
    ----------
    required:
        Absence from every source is an error.
    default:
        Value assigned when the name is absent and not required.  When
        left :data:`UNSET` the zero value of the destination type is used.
    """

    required: bool = False
    default: T = UNSET

    def fallback_for(self, hint: Any) -> Any:
        """Return the value to assign when the name is absent.

        Defaults are copied so that repeated resolution never hands out
        a shared mutable container.

        Raises
        ------
        UnsupportedTypeError
            When no default is given and *hint* has no zero value because
            no parsing strategy handles it.
        """
        if self.default is UNSET:
            kind = resolve_kind(hint)
            if isinstance(kind, Unsupported):
                raise unsupported_type_error(hint)
            return kind.zero()
        return copy.copy(self.default)


@dataclass(frozen=True, slots=True)
class Binding:
    """A name bound to a destination and its options."""

    name: str
    destination: Destination
    options: Options[Any]
