"""Protocols (interfaces) shared by the core layer.

Sources, destinations and custom decoding hooks are all matched
structurally: any object with the right shape satisfies the protocol,
no explicit inheritance required.
"""

from __future__ import annotations

from collections.abc import Callable
from typing import Any, Protocol, runtime_checkable

LookupFunc = Callable[[str], "tuple[str, bool]"]
"""A pure ``name -> (raw_value, found)`` resolver.

When ``found`` is ``False`` the returned value is meaningless
(conventionally ``""``).
"""


class Destination(Protocol):
    """A caller-owned, mutable cell that a binding writes into.

    ``target_type`` is a type or type hint (``int``, ``list[str]``,
    ``Optional[Token]``, ``Annotated[int, Width(8)]``...) that drives how
    raw text is parsed.
    """

    @property
    def target_type(self) -> Any:
        ...  # pragma: no cover

    def get(self) -> Any:
        """Return the value currently held (``None`` when unset)."""
        ...  # pragma: no cover

    def set(self, value: Any) -> None:
        """Replace the held value."""
        ...  # pragma: no cover


@runtime_checkable
class TextDecoder(Protocol):
    """Capability hook: the type decodes itself from text.

    ``decode_text`` receives the UTF-8 bytes of the raw value, mutates
    ``self`` and raises on failure.  It takes priority over every other
    parsing strategy, including :class:`BinaryDecoder`.
    """

    def decode_text(self, data: bytes) -> None:
        ...  # pragma: no cover


@runtime_checkable
class BinaryDecoder(Protocol):
    """Capability hook: the type decodes itself from raw bytes.

    Same contract as :class:`TextDecoder`; consulted only when the type
    has no ``decode_text``.
    """

    def decode_binary(self, data: bytes) -> None:
        ...  # pragma: no cover
