"""Scalar coercion: raw text to one primitive value.

Every function here is **pure**: no I/O, fully deterministic, and raises
:class:`~envbind.exceptions.RangeOrSyntaxError` naming the offending text
on failure.

Accepted forms
--------------
* integers: optional sign, ``0x`` / ``0o`` / ``0b`` prefixes, a leading
  ``0`` for octal, ``_`` between digits; range-checked against the bit
  width.  Unsigned integers reject any sign.
* booleans: ``1 t T TRUE true True`` and ``0 f F FALSE false False``.
* floats: decimal with optional exponent, hexadecimal with a ``p``
  exponent, ``inf`` / ``infinity`` / ``nan`` in any case.
* durations: ``[-+]`` then one or more ``<number><unit>`` groups, units
  ``ns us µs μs ms s m h`` (``"300ms"``, ``"1h30m"``, ``"-1.5h"``).
"""

from __future__ import annotations

import math
import re
import struct
from datetime import timedelta
from fractions import Fraction
from typing import Any

from envbind.core.kinds import ScalarKind
from envbind.exceptions import RangeOrSyntaxError

_SYNTAX = RangeOrSyntaxError.SYNTAX
_RANGE = RangeOrSyntaxError.RANGE


# ---------------------------------------------------------------------------
# Booleans
# ---------------------------------------------------------------------------

_TRUE_WORDS: frozenset[str] = frozenset({"1", "t", "T", "TRUE", "true", "True"})
_FALSE_WORDS: frozenset[str] = frozenset({"0", "f", "F", "FALSE", "false", "False"})


def parse_bool(text: str) -> bool:
    if text in _TRUE_WORDS:
        return True
    if text in _FALSE_WORDS:
        return False
    raise RangeOrSyntaxError("parse bool", text, _SYNTAX)


# ---------------------------------------------------------------------------
# Integers
# ---------------------------------------------------------------------------

_DIGITS = re.compile(r"[0-9A-Za-z_]+")
_PREFIX_BASES: dict[str, int] = {"0x": 16, "0o": 8, "0b": 2}


def _parse_magnitude(func: str, text: str, body: str) -> int:
    """Parse an unsigned integer literal *body* with base auto-detection."""
    base = 10
    digits = body
    prefixed = False
    if body[:2].lower() in _PREFIX_BASES:
        base = _PREFIX_BASES[body[:2].lower()]
        digits = body[2:]
        prefixed = True
    elif len(body) > 1 and body[0] == "0":
        base = 8
        digits = body[1:]
        prefixed = True

    if (
        not digits
        or not _DIGITS.fullmatch(digits)
        or digits.endswith("_")
        or "__" in digits
        or (digits.startswith("_") and not prefixed)
    ):
        raise RangeOrSyntaxError(func, text, _SYNTAX)

    try:
        return int(digits.replace("_", ""), base)
    except ValueError as exc:
        raise RangeOrSyntaxError(func, text, _SYNTAX) from exc


def parse_int(text: str, bits: int = 64) -> int:
    """Parse a signed integer that fits in *bits* bits."""
    func = f"parse int{bits}"
    if not text:
        raise RangeOrSyntaxError(func, text, _SYNTAX)

    negative = text[0] == "-"
    body = text[1:] if text[0] in "+-" else text
    if not body:
        raise RangeOrSyntaxError(func, text, _SYNTAX)

    value = _parse_magnitude(func, text, body)
    if negative:
        value = -value

    lower, upper = -(1 << (bits - 1)), (1 << (bits - 1)) - 1
    if not lower <= value <= upper:
        raise RangeOrSyntaxError(func, text, _RANGE)
    return value


def parse_uint(text: str, bits: int = 64) -> int:
    """Parse an unsigned integer that fits in *bits* bits."""
    func = f"parse uint{bits}"
    if not text or text[0] in "+-":
        raise RangeOrSyntaxError(func, text, _SYNTAX)

    value = _parse_magnitude(func, text, text)
    if value > (1 << bits) - 1:
        raise RangeOrSyntaxError(func, text, _RANGE)
    return value


# ---------------------------------------------------------------------------
# Floats
# ---------------------------------------------------------------------------

_DECIMAL_FLOAT = re.compile(r"[+-]?(?:[0-9]+\.?[0-9]*|\.[0-9]+)(?:[eE][+-]?[0-9]+)?")
_HEX_FLOAT = re.compile(
    r"[+-]?0[xX](?:[0-9a-fA-F]+\.?[0-9a-fA-F]*|\.[0-9a-fA-F]+)[pP][+-]?[0-9]+"
)
_SPECIAL_FLOAT = re.compile(r"[+-]?(?:inf|infinity|nan)", re.IGNORECASE)


def parse_float(text: str, bits: int = 64) -> float:
    """Parse a float at single (32) or double (64) precision."""
    func = f"parse float{bits}"
    special = _SPECIAL_FLOAT.fullmatch(text) is not None

    if special or _DECIMAL_FLOAT.fullmatch(text):
        value = float(text)
    elif _HEX_FLOAT.fullmatch(text):
        try:
            value = float.fromhex(text)
        except OverflowError as exc:
            raise RangeOrSyntaxError(func, text, _RANGE) from exc
    else:
        raise RangeOrSyntaxError(func, text, _SYNTAX)

    if math.isinf(value) and not special:
        raise RangeOrSyntaxError(func, text, _RANGE)

    if bits == 32:
        try:
            (value,) = struct.unpack("<f", struct.pack("<f", value))
        except OverflowError as exc:
            raise RangeOrSyntaxError(func, text, _RANGE) from exc
    return value


# ---------------------------------------------------------------------------
# Durations
# ---------------------------------------------------------------------------

_UNIT_NANOS: dict[str, int] = {
    "ns": 1,
    "us": 1_000,
    "µs": 1_000,  # micro sign
    "μs": 1_000,  # greek mu
    "ms": 1_000_000,
    "s": 1_000_000_000,
    "m": 60 * 1_000_000_000,
    "h": 3600 * 1_000_000_000,
}
_DURATION_GROUP = re.compile(
    r"(?P<whole>[0-9]*)(?:\.(?P<frac>[0-9]*))?(?P<unit>ns|us|µs|μs|ms|s|m|h)"
)
_MAX_NANOS = (1 << 63) - 1


def parse_duration(text: str) -> timedelta:
    """Parse a duration literal such as ``"1h30m"`` into a timedelta.

    Sub-microsecond precision is truncated toward zero.
    """
    func = "parse duration"
    rest = text
    negative = False
    if rest and rest[0] in "+-":
        negative = rest[0] == "-"
        rest = rest[1:]

    if rest == "0":
        return timedelta(0)
    if not rest:
        raise RangeOrSyntaxError(func, text, _SYNTAX)

    total = Fraction(0)
    pos = 0
    while pos < len(rest):
        match = _DURATION_GROUP.match(rest, pos)
        if match is None or not (match["whole"] or match["frac"]):
            raise RangeOrSyntaxError(func, text, _SYNTAX)
        amount = Fraction(int(match["whole"] or "0"))
        if match["frac"]:
            amount += Fraction(int(match["frac"]), 10 ** len(match["frac"]))
        total += amount * _UNIT_NANOS[match["unit"]]
        pos = match.end()

    limit = _MAX_NANOS + 1 if negative else _MAX_NANOS
    if total > limit:
        raise RangeOrSyntaxError(func, text, _RANGE)

    micros = int(total / 1000)
    return timedelta(microseconds=-micros if negative else micros)


# ---------------------------------------------------------------------------
# Dispatcher
# ---------------------------------------------------------------------------

def coerce(text: str, kind: ScalarKind, bits: int = 64) -> Any:
    """Convert *text* to the primitive described by *kind* and *bits*."""
    if kind is ScalarKind.STRING:
        return text
    if kind is ScalarKind.BOOL:
        return parse_bool(text)
    if kind is ScalarKind.INT:
        return parse_int(text, bits)
    if kind is ScalarKind.UINT:
        return parse_uint(text, bits)
    if kind is ScalarKind.FLOAT:
        return parse_float(text, bits)
    if kind is ScalarKind.DURATION:
        return parse_duration(text)
    raise ValueError(f"unknown scalar kind: {kind!r}")
