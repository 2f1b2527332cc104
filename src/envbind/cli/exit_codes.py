"""Process exit codes of the ``envbind`` command.

Scripts can tell a bad invocation (``GENERAL_ERROR``) apart from a
configuration that does not resolve (``RESOLUTION_FAILED``), e.g. to gate
a deployment on ``envbind --strict DATABASE_URL PORT:int``.
"""

from __future__ import annotations

SUCCESS: int = 0
"""Every requested name parsed; optional names may be absent."""

GENERAL_ERROR: int = 1
"""Bad invocation or environment: unknown type, no sources, missing package."""

UNEXPECTED_ERROR: int = 2
"""A bug: an exception that is not an ``EnvbindError`` reached the boundary."""

RESOLUTION_FAILED: int = 3
"""A value failed to parse or, with ``--strict``, a name was not found."""

KEYBOARD_INTERRUPT: int = 130
"""Interrupted with Ctrl+C (128 + SIGINT)."""
