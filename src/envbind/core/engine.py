"""Value parsing engine: raw text into a value of an arbitrary type.

Strategy, in strict priority order:

1. the type defines ``decode_text`` (:class:`~envbind.core.protocols.TextDecoder`);
2. the type defines ``decode_binary`` (:class:`~envbind.core.protocols.BinaryDecoder`);
3. ``Optional[T]`` is parsed as ``T``;
4. shape dispatch: scalars, ``bytes``, flat sequences, flat mappings.

Containers are only accepted at the top level; a container nested in
another container raises :class:`~envbind.exceptions.UnsupportedNestingError`.
Container parsing is transactional: the container is fully built before
it is returned, so a failing element never leaves a half-filled value
in a destination.
"""

from __future__ import annotations

from typing import Any

from envbind.core.kinds import (
    ByteSequence,
    CustomBinary,
    CustomText,
    FlatMapping,
    FlatSequence,
    Indirect,
    Scalar,
    TargetKind,
    Unsupported,
    resolve_kind,
    unsupported_type_error,
)
from envbind.core.protocols import Destination
from envbind.core.scalars import coerce
from envbind.exceptions import (
    MapEntryError,
    UnsupportedNestingError,
)


def parse_value(
    hint: Any,
    text: str,
    *,
    current: Any = None,
    top_level: bool = True,
) -> Any:
    """Parse *text* into a value of type *hint* and return it.

    Parameters
    ----------
    hint:
        Destination type or type hint.
    text:
        Raw text from a source.
    current:
        The destination's present value.  Decoding hooks are invoked on
        it when it is an instance of the hook type; otherwise a fresh
        instance is created.
    top_level:
        ``False`` for container elements, which may not be containers
        themselves.

    Raises
    ------
    ValueParseError
        For scalar, nesting, mapping-entry and unsupported-type failures.
    Exception
        Whatever a decoding hook raises, unchanged.
    """
    return _parse(resolve_kind(hint), text, current, top_level)


def parse_into(destination: Destination, text: str) -> None:
    """Top-level parse of *text* into *destination*.

    The destination is only assigned once parsing has succeeded.
    """
    value = parse_value(destination.target_type, text, current=destination.get())
    destination.set(value)


def _parse(kind: TargetKind, text: str, current: Any, top_level: bool) -> Any:
    if isinstance(kind, CustomText):
        target = current if isinstance(current, kind.cls) else kind.cls()
        target.decode_text(text.encode("utf-8"))
        return target

    if isinstance(kind, CustomBinary):
        target = current if isinstance(current, kind.cls) else kind.cls()
        target.decode_binary(text.encode("utf-8"))
        return target

    if isinstance(kind, Indirect):
        return _parse(kind.inner, text, current, top_level)

    if isinstance(kind, Scalar):
        return coerce(text, kind.subkind, kind.bits)

    if isinstance(kind, ByteSequence):
        return text.encode("utf-8")

    if isinstance(kind, FlatSequence):
        if not top_level:
            raise UnsupportedNestingError("cannot support nested sequences")
        return _parse_sequence(kind, text)

    if isinstance(kind, FlatMapping):
        if not top_level:
            raise UnsupportedNestingError("cannot support nested mappings")
        return _parse_mapping(kind, text)

    raise unsupported_type_error(kind.hint if isinstance(kind, Unsupported) else kind)


def _parse_sequence(kind: FlatSequence, text: str) -> Any:
    if not text.strip():
        return kind.factory(())
    items = [_parse(kind.element, piece, None, False) for piece in text.split(",")]
    return kind.factory(items)


def _parse_mapping(kind: FlatMapping, text: str) -> Any:
    text = text.strip()
    target = kind.factory()
    if not text:
        return target

    for entry in text.split(","):
        key_text, sep, value_text = entry.partition("=")
        if not sep:
            continue

        try:
            key = _parse(kind.key, key_text, None, False)
        except Exception as exc:
            raise MapEntryError("failed to parse key", key=key_text, cause=exc) from exc

        try:
            value = _parse(kind.value, value_text, None, False)
        except Exception as exc:
            raise MapEntryError(
                "failed to parse value at key", key=key_text, cause=exc,
            ) from exc

        target[key] = value
    return target
