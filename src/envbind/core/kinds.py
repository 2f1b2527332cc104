"""Target kinds: the closed set of shapes a destination type can take.

A destination's type hint is classified once (the result is cached per
hint) into one of:

* :class:`Scalar` - integers, unsigned integers, floats, bools, strings
  and durations, each with a bit width;
* :class:`ByteSequence` - ``bytes``;
* :class:`FlatSequence` - ``list[T]``, ``tuple[T, ...]``, ``set[T]``,
  ``frozenset[T]``;
* :class:`FlatMapping` - ``dict[K, V]``;
* :class:`CustomText` / :class:`CustomBinary` - types with a decoding
  hook;
* :class:`Indirect` - ``Optional[T]``;
* :class:`Unsupported` - anything else.

The parsing engine dispatches on these variants instead of inspecting
types on every call.
"""

from __future__ import annotations

import collections
import collections.abc
import enum
import functools
import types
from collections.abc import Callable, Iterable
from dataclasses import dataclass
from datetime import timedelta
from typing import Annotated, Any, Union, get_args, get_origin

from envbind.core.protocols import BinaryDecoder, TextDecoder
from envbind.exceptions import UnsupportedTypeError


# ---------------------------------------------------------------------------
# Numeric width markers
# ---------------------------------------------------------------------------

@dataclass(frozen=True, slots=True)
class Width:
    """``Annotated`` marker declaring the bit width of a numeric type.

    ``Annotated[int, Width(16)]`` is a signed 16-bit integer,
    ``Annotated[int, Width(32, signed=False)]`` an unsigned one and
    ``Annotated[float, Width(32)]`` a single-precision float.
    """

    bits: int
    signed: bool = True


Int8 = Annotated[int, Width(8)]
Int16 = Annotated[int, Width(16)]
Int32 = Annotated[int, Width(32)]
Int64 = Annotated[int, Width(64)]
Uint = Annotated[int, Width(64, signed=False)]
Uint8 = Annotated[int, Width(8, signed=False)]
Uint16 = Annotated[int, Width(16, signed=False)]
Uint32 = Annotated[int, Width(32, signed=False)]
Uint64 = Annotated[int, Width(64, signed=False)]
Float32 = Annotated[float, Width(32)]
Float64 = Annotated[float, Width(64)]


class ScalarKind(enum.Enum):
    """Primitive conversions understood by :mod:`envbind.core.scalars`."""

    INT = "int"
    UINT = "uint"
    FLOAT = "float"
    BOOL = "bool"
    STRING = "string"
    DURATION = "duration"


_SCALAR_ZEROS: dict[ScalarKind, Any] = {
    ScalarKind.INT: 0,
    ScalarKind.UINT: 0,
    ScalarKind.FLOAT: 0.0,
    ScalarKind.BOOL: False,
    ScalarKind.STRING: "",
    ScalarKind.DURATION: timedelta(0),
}


# ---------------------------------------------------------------------------
# Variants
# ---------------------------------------------------------------------------

@dataclass(frozen=True, slots=True)
class Scalar:
    subkind: ScalarKind
    bits: int = 64

    def zero(self) -> Any:
        return _SCALAR_ZEROS[self.subkind]


@dataclass(frozen=True, slots=True)
class ByteSequence:
    def zero(self) -> bytes:
        return b""


@dataclass(frozen=True, slots=True)
class FlatSequence:
    element: TargetKind
    factory: Callable[[Iterable[Any]], Any]

    def zero(self) -> Any:
        return self.factory(())


@dataclass(frozen=True, slots=True)
class FlatMapping:
    key: TargetKind
    value: TargetKind
    factory: Callable[[], Any] = dict

    def zero(self) -> Any:
        return self.factory()


@dataclass(frozen=True, slots=True)
class CustomText:
    cls: type

    def zero(self) -> Any:
        return _new_instance(self.cls)


@dataclass(frozen=True, slots=True)
class CustomBinary:
    cls: type

    def zero(self) -> Any:
        return _new_instance(self.cls)


@dataclass(frozen=True, slots=True)
class Indirect:
    inner: TargetKind

    def zero(self) -> None:
        return None


@dataclass(frozen=True, slots=True)
class Unsupported:
    hint: Any

    def zero(self) -> None:
        return None


TargetKind = Union[
    Scalar,
    ByteSequence,
    FlatSequence,
    FlatMapping,
    CustomText,
    CustomBinary,
    Indirect,
    Unsupported,
]


# ---------------------------------------------------------------------------
# Classification
# ---------------------------------------------------------------------------

_PLAIN_SCALARS: dict[Any, Scalar] = {
    bool: Scalar(ScalarKind.BOOL),
    int: Scalar(ScalarKind.INT, 64),
    float: Scalar(ScalarKind.FLOAT, 64),
    str: Scalar(ScalarKind.STRING),
    timedelta: Scalar(ScalarKind.DURATION, 64),
}

_SEQUENCE_FACTORIES: dict[Any, Callable[[Iterable[Any]], Any]] = {
    list: list,
    set: set,
    frozenset: frozenset,
    collections.abc.Sequence: list,
    collections.abc.MutableSequence: list,
    collections.abc.Set: frozenset,
    collections.abc.MutableSet: set,
}

_MAPPING_FACTORIES: dict[Any, Callable[[], Any]] = {
    dict: dict,
    collections.OrderedDict: collections.OrderedDict,
    collections.abc.Mapping: dict,
    collections.abc.MutableMapping: dict,
}


def resolve_kind(hint: Any) -> TargetKind:
    """Classify *hint* into a :data:`TargetKind`.

    Decoding hooks are checked first so that a ``list`` or ``str``
    subclass defining ``decode_text`` is still treated as custom.
    Results are cached per hint; hints that cannot be hashed (e.g.
    ``Annotated[int, ["meta"]]``) are classified on every call.
    """
    if _is_hashable(hint):
        return _classify_cached(hint)
    return _classify(hint)


def _classify(hint: Any) -> TargetKind:
    origin = get_origin(hint)

    if origin is Annotated:
        return _resolve_annotated(hint)

    if origin is Union or origin is types.UnionType:
        return _resolve_union(hint)

    cls = origin if origin is not None else hint
    if isinstance(cls, type):
        if issubclass(cls, TextDecoder):
            return CustomText(cls)
        if issubclass(cls, BinaryDecoder):
            return CustomBinary(cls)

    if not _is_hashable(cls):
        return Unsupported(hint)

    if _is_hashable(hint) and hint in _PLAIN_SCALARS:
        return _PLAIN_SCALARS[hint]
    if hint is bytes:
        return ByteSequence()

    args = get_args(hint)

    if cls is tuple:
        # Only homogeneous ``tuple[T, ...]`` (or a bare ``tuple``) is a sequence.
        if not args:
            return FlatSequence(resolve_kind(str), tuple)
        if len(args) == 2 and args[1] is Ellipsis:
            return FlatSequence(resolve_kind(args[0]), tuple)
        return Unsupported(hint)

    if cls in _SEQUENCE_FACTORIES:
        element = args[0] if args else str
        return FlatSequence(resolve_kind(element), _SEQUENCE_FACTORIES[cls])

    if cls in _MAPPING_FACTORIES:
        key, value = args if len(args) == 2 else (str, str)
        return FlatMapping(resolve_kind(key), resolve_kind(value), _MAPPING_FACTORIES[cls])

    return Unsupported(hint)


def _resolve_annotated(hint: Any) -> TargetKind:
    base, *metadata = get_args(hint)
    kind = resolve_kind(base)
    widths = [item for item in metadata if isinstance(item, Width)]
    if not widths or not isinstance(kind, Scalar):
        return kind

    width = widths[-1]
    if kind.subkind is ScalarKind.INT:
        subkind = ScalarKind.INT if width.signed else ScalarKind.UINT
        return Scalar(subkind, width.bits)
    if kind.subkind is ScalarKind.FLOAT:
        return Scalar(ScalarKind.FLOAT, width.bits)
    return kind


def _resolve_union(hint: Any) -> TargetKind:
    members = get_args(hint)
    non_none = [member for member in members if member is not type(None)]
    if len(non_none) == 1 and len(members) == 2:
        return Indirect(resolve_kind(non_none[0]))
    return Unsupported(hint)


def describe(hint: Any) -> str:
    """Short human-readable name for *hint*, used in error messages."""
    if isinstance(hint, type) and get_origin(hint) is None:
        return hint.__qualname__
    return repr(hint).replace("typing.", "")


_classify_cached = functools.lru_cache(maxsize=None)(_classify)


def _is_hashable(hint: Any) -> bool:
    try:
        hash(hint)
    except TypeError:
        return False
    return True


def _new_instance(cls: type) -> Any:
    """Zero value of a hook type: ``cls()``, or ``None`` when that needs arguments."""
    try:
        return cls()
    except TypeError:
        return None


def unsupported_type_error(hint: Any) -> UnsupportedTypeError:
    """The error reported for a destination type no strategy handles."""
    return UnsupportedTypeError(
        f"unsupported destination type: {describe(hint)}",
        hint="Give the type a decode_text(self, data: bytes) method.",
    )
