"""File-system source adapter: a whole file's contents is one value.

Useful for mounted secrets (``/run/secrets/db_password``) and config
directories.  Relative names are resolved against a base directory.

Rules
-----
* A missing file is "not found", never an error.
* Any other ``OSError`` (permission denied, a directory, ...) is
  misconfiguration: it is logged and re-raised, aborting the resolve
  pass instead of being recorded as a binding failure.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass
from pathlib import Path

from envbind.core.protocols import LookupFunc

logger = logging.getLogger(__name__)


@dataclass(frozen=True, slots=True)
class FileSystemOptions:
    """Configuration for :func:`file_system`.

    Attributes
    ----------
    base : str | Path
        Directory that relative names are joined to.  Defaults to the
        current working directory.
    encoding : str
        Text encoding of the files.
    """

    base: str | Path = "."
    encoding: str = "utf-8"


def file_system(options: FileSystemOptions | None = None) -> LookupFunc:
    """Return a lookup that reads files named by the requested key."""
    opts = options or FileSystemOptions()
    base = Path(opts.base or ".")

    def lookup(name: str) -> tuple[str, bool]:
        path = Path(name)
        if not path.is_absolute():
            path = base / path

        try:
            return path.read_text(encoding=opts.encoding), True
        except FileNotFoundError:
            return "", False
        except OSError:
            logger.error("Cannot read configuration file %s", path)
            raise

    return lookup
