"""Shared pytest fixtures and configuration for the envbind test suite.

Guidelines
----------
* Tests never depend on the real process environment or ``sys.argv``;
  use ``monkeypatch`` or in-memory sources.
* File-system tests work under ``tmp_path`` only.
"""

from __future__ import annotations

from collections.abc import Callable

import pytest

from envbind.core.protocols import LookupFunc
from envbind.infra.mapping import from_mapping


@pytest.fixture
def source() -> Callable[..., LookupFunc]:
    """Factory for in-memory sources: ``source(PORT="80")``."""

    def make(**values: str) -> LookupFunc:
        return from_mapping(values)

    return make
