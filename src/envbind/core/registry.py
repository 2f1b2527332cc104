"""Field registry and resolution orchestrator.

A :class:`Registry` holds named bindings and one composed lookup
function.  :meth:`Registry.resolve` walks every binding, applies the
required/default policy, runs the parsing engine and collects **all**
failures into a single :class:`~envbind.exceptions.ResolutionError`, so
one malformed value never hides another.

Guarantees
----------
* Resolution is repeatable: each pass re-derives every destination from
  the current state of the sources.
* Only lookup failures escape a pass (e.g. an unreadable file from
  :func:`~envbind.infra.file_system.file_system`); everything else is
  recorded.
* Registration is not synchronised; register everything before
  resolving.
"""

from __future__ import annotations

import logging
from typing import Any

from envbind.core.engine import parse_into
from envbind.core.lookup import compose
from envbind.core.models import UNSET, AttrRef, Binding, Options, Var
from envbind.core.protocols import Destination, LookupFunc
from envbind.exceptions import (
    BindingError,
    ParseFailure,
    RequiredMissingError,
    ResolutionError,
    UnsupportedTypeError,
)

logger = logging.getLogger(__name__)


class Registry:
    """A named collection of bindings resolved against a source chain.

    Parameters
    ----------
    *lookups:
        Sources tried in order, first ``found`` wins.  ``None`` entries
        are ignored; with no sources the process environment is used.
    """

    def __init__(self, *lookups: LookupFunc | None) -> None:
        self._bindings: dict[str, Binding] = {}
        self._lookup: LookupFunc = compose(*lookups)

    # ------------------------------------------------------------------
    # Sources
    # ------------------------------------------------------------------

    @property
    def lookup(self) -> LookupFunc:
        """The composed lookup function used by :meth:`resolve`."""
        return self._lookup

    def set_lookup(self, *lookups: LookupFunc | None) -> None:
        """Replace the source chain (same rules as the constructor)."""
        self._lookup = compose(*lookups)

    # ------------------------------------------------------------------
    # Registration
    # ------------------------------------------------------------------

    def register(
        self,
        destination: Destination,
        name: str,
        options: Options[Any] | None = None,
    ) -> None:
        """Bind *name* to *destination*.

        Registering a name twice replaces the earlier binding.
        """
        if name in self._bindings:
            logger.debug("Replacing binding for %s", name)
        self._bindings[name] = Binding(name, destination, options or Options())

    def var(
        self,
        target_type: Any,
        name: str,
        *,
        required: bool = False,
        default: Any = UNSET,
    ) -> Var[Any]:
        """Create a :class:`Var` of *target_type*, bind it and return it."""
        cell: Var[Any] = Var(target_type)
        self.register(cell, name, Options(required=required, default=default))
        return cell

    def bind(
        self,
        owner: object,
        attr: str,
        name: str,
        *,
        required: bool = False,
        default: Any = UNSET,
    ) -> AttrRef:
        """Bind *name* to ``owner.attr``, typed from the owner's annotations."""
        ref = AttrRef(owner, attr)
        self.register(ref, name, Options(required=required, default=default))
        return ref

    def names(self) -> frozenset[str]:
        return frozenset(self._bindings)

    def __len__(self) -> int:
        return len(self._bindings)

    def __contains__(self, name: object) -> bool:
        return name in self._bindings

    # ------------------------------------------------------------------
    # Resolution
    # ------------------------------------------------------------------

    def resolve(self) -> ResolutionError | None:
        """Resolve every binding and return the combined error, if any.

        Returns
        -------
        ResolutionError | None
            ``None`` when every binding resolved; otherwise one error
            carrying each :class:`RequiredMissingError` and
            :class:`ParseFailure` of the pass.
        """
        errors: list[BindingError] = []
        for binding in list(self._bindings.values()):
            error = self._resolve_one(binding)
            if error is not None:
                errors.append(error)

        if not errors:
            return None
        logger.warning("Resolution finished with %d error(s)", len(errors))
        return ResolutionError(errors)

    def must_resolve(self) -> None:
        """Like :meth:`resolve` but raises the combined error."""
        error = self.resolve()
        if error is not None:
            raise error

    def _resolve_one(self, binding: Binding) -> BindingError | None:
        raw, found = self._lookup(binding.name)

        if not found:
            if binding.options.required:
                return RequiredMissingError(binding.name)
            try:
                fallback = binding.options.fallback_for(binding.destination.target_type)
            except UnsupportedTypeError as exc:
                return ParseFailure(binding.name, exc)
            binding.destination.set(fallback)
            logger.debug("%s not found, applied fallback", binding.name)
            return None

        try:
            parse_into(binding.destination, raw)
        except Exception as exc:
            # Decoding hooks may raise anything; it is carried as the cause.
            return ParseFailure(binding.name, exc)

        logger.debug("%s resolved", binding.name)
        return None
