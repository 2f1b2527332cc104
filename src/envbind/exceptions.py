"""Custom exception hierarchy for envbind.

Every error raised by the library derives from :class:`EnvbindError`.
Value-level failures (:class:`ValueParseError` subclasses) are raised
by the parsing engine; binding-level failures (:class:`BindingError`
subclasses) are what a :class:`~envbind.core.registry.Registry` records
while resolving, and a whole failed pass is reported as a single
:class:`ResolutionError`.

Hierarchy
---------
EnvbindError
├── ValueParseError
│   ├── RangeOrSyntaxError
│   ├── UnsupportedNestingError
│   ├── UnsupportedTypeError
│   └── MapEntryError
├── BindingError
│   ├── RequiredMissingError
│   └── ParseFailure
├── ResolutionError
└── MissingDependencyError
"""

from __future__ import annotations

from collections.abc import Sequence


class EnvbindError(Exception):
    """Base exception for all envbind errors.

    Every user-visible error condition maps to a subclass of this
    exception so that the CLI error boundary can render a clean message
    without leaking internal stack traces.
    """

    def __init__(self, message: str, *, hint: str | None = None) -> None:
        super().__init__(message)
        self.hint: str | None = hint
        """Optional actionable guidance shown below the error message."""


# --- Value parsing ---------------------------------------------------------

class ValueParseError(EnvbindError):
    """Raised when raw text cannot be converted into the target type."""


class RangeOrSyntaxError(ValueParseError):
    """Raised when scalar text is malformed or outside the target range.

    The message names the conversion and the offending text, e.g.
    ``parse int8: parsing "300": value out of range``.
    """

    SYNTAX = "invalid syntax"
    RANGE = "value out of range"

    def __init__(self, func: str, text: str, reason: str) -> None:
        super().__init__(f"{func}: parsing {_quote(text)}: {reason}")
        self.func: str = func
        self.text: str = text
        self.reason: str = reason


class UnsupportedNestingError(ValueParseError):
    """Raised when a container appears inside another container."""


class UnsupportedTypeError(ValueParseError):
    """Raised when no parsing strategy exists for a destination type."""


class MapEntryError(ValueParseError):
    """Raised when a key or value of a mapping entry fails to parse.

    The original failure is available as :attr:`cause` (and as
    ``__cause__`` when raised with ``from``).
    """

    def __init__(self, message: str, *, key: str, cause: BaseException) -> None:
        super().__init__(f"{message}: {key}: {cause}")
        self.key: str = key
        self.cause: BaseException = cause


# --- Bindings --------------------------------------------------------------

class BindingError(EnvbindError):
    """Base class for per-name failures recorded during resolution."""

    def __init__(self, message: str, *, name: str) -> None:
        super().__init__(message)
        self.name: str = name


class RequiredMissingError(BindingError):
    """Raised when a required name is absent from every source."""

    def __init__(self, name: str) -> None:
        super().__init__(f"{_quote(name)} is required but not found", name=name)


class ParseFailure(BindingError):
    """Raised when a found value could not be parsed into its destination.

    *cause* is kept verbatim: a :class:`ValueParseError` from the engine
    or whatever a custom decoding hook raised.
    """

    def __init__(self, name: str, cause: BaseException) -> None:
        super().__init__(f"failed to parse {name}: {cause}", name=name)
        self.cause: BaseException = cause


# --- Aggregate -------------------------------------------------------------

class ResolutionError(EnvbindError):
    """All failures collected from a single resolve pass.

    The message joins the individual messages with newlines.
    """

    def __init__(self, errors: Sequence[BindingError]) -> None:
        self.errors: tuple[BindingError, ...] = tuple(errors)
        super().__init__("\n".join(str(err) for err in self.errors))

    @property
    def names(self) -> frozenset[str]:
        """Names of every binding that failed."""
        return frozenset(err.name for err in self.errors)

    def __len__(self) -> int:
        return len(self.errors)


# --- Environment / tooling -------------------------------------------------

class MissingDependencyError(EnvbindError):
    """Raised when an optional third-party package is not installed."""


def _quote(text: str) -> str:
    """Double-quote *text*, backslash-escaping quotes and control characters."""
    escaped = text.replace("\\", "\\\\").replace('"', '\\"')
    escaped = escaped.replace("\n", "\\n").replace("\t", "\\t").replace("\r", "\\r")
    return f'"{escaped}"'
