"""Core layer: type classification, parsing and orchestration.

Rules
-----
* No imports from ``cli``.
* Sources are consumed through :data:`~envbind.core.protocols.LookupFunc`
  only; the single infra import is the environment default used by
  :func:`~envbind.core.lookup.compose`.
* Parsing functions are pure and deterministic.
"""

from envbind.core.engine import parse_into, parse_value
from envbind.core.kinds import Width, resolve_kind
from envbind.core.lookup import compose
from envbind.core.models import UNSET, AttrRef, Binding, Options, Var
from envbind.core.protocols import BinaryDecoder, Destination, LookupFunc, TextDecoder
from envbind.core.registry import Registry

__all__: list[str] = [
    "UNSET",
    "AttrRef",
    "BinaryDecoder",
    "Binding",
    "Destination",
    "LookupFunc",
    "Options",
    "Registry",
    "TextDecoder",
    "Var",
    "Width",
    "compose",
    "parse_into",
    "parse_value",
    "resolve_kind",
]
