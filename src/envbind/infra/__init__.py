"""Infrastructure layer: source adapters over external state.

Every adapter returns a :data:`~envbind.core.protocols.LookupFunc`.

Rules
-----
* No imports from ``cli`` or ``envbind.core.registry``.
* No user-facing output; diagnostics go through :mod:`logging`.
* A missing key is never an error; broken environments (unreadable
  files, missing optional packages) raise.
"""

from envbind.infra.command_line import command_line_args, flag_name, tokenize
from envbind.infra.dotenv_source import dotenv_file
from envbind.infra.environment import environment, lookup_env
from envbind.infra.file_system import FileSystemOptions, file_system
from envbind.infra.mapping import from_mapping

__all__: list[str] = [
    "FileSystemOptions",
    "command_line_args",
    "dotenv_file",
    "environment",
    "file_system",
    "flag_name",
    "from_mapping",
    "lookup_env",
    "tokenize",
]
