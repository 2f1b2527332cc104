"""``.env`` file source adapter backed by python-dotenv.

The file is read once, when the adapter is created, and never touches
``os.environ``.  Keys declared without a value (a bare ``KEY`` line) are
reported as not found.
"""

from __future__ import annotations

import logging
from pathlib import Path

from envbind.core.protocols import LookupFunc
from envbind.exceptions import MissingDependencyError
from envbind.infra.mapping import from_mapping

logger = logging.getLogger(__name__)


def dotenv_file(path: str | Path = ".env", *, encoding: str = "utf-8") -> LookupFunc:
    """Return a lookup over the variables defined in the dotenv file *path*.

    A missing file yields a lookup that finds nothing.

    Raises
    ------
    MissingDependencyError
        When python-dotenv is not installed.
    """
    try:
        from dotenv import dotenv_values
    except ModuleNotFoundError as exc:
        raise MissingDependencyError(
            "python-dotenv is not installed. Install with: pip install python-dotenv",
        ) from exc

    dotenv_path = Path(path)
    if not dotenv_path.is_file():
        logger.debug("No dotenv file at %s", dotenv_path)
        return from_mapping({})

    raw = dotenv_values(dotenv_path=dotenv_path, encoding=encoding)
    values = {key: value for key, value in raw.items() if value is not None}
    logger.debug("Loaded %d variable(s) from %s", len(values), dotenv_path)
    return from_mapping(values)
