"""envbind: bind environment variables, flags and files to typed values.

Sources are plain ``name -> (value, found)`` functions, destinations are
typed cells, and a :class:`Registry` resolves every binding in one pass,
reporting all failures together.
"""

import logging

from envbind.core.engine import parse_into, parse_value
from envbind.core.kinds import (
    Float32,
    Float64,
    Int8,
    Int16,
    Int32,
    Int64,
    Uint,
    Uint8,
    Uint16,
    Uint32,
    Uint64,
    Width,
)
from envbind.core.lookup import compose
from envbind.core.models import UNSET, AttrRef, Options, Var
from envbind.core.protocols import BinaryDecoder, Destination, LookupFunc, TextDecoder
from envbind.core.registry import Registry
from envbind.exceptions import (
    EnvbindError,
    ParseFailure,
    RequiredMissingError,
    ResolutionError,
)
from envbind.infra import (
    FileSystemOptions,
    command_line_args,
    dotenv_file,
    environment,
    file_system,
    from_mapping,
)
from envbind.version import __version__

logging.getLogger(__name__).addHandler(logging.NullHandler())

__all__: list[str] = [
    "UNSET",
    "AttrRef",
    "BinaryDecoder",
    "Destination",
    "EnvbindError",
    "FileSystemOptions",
    "Float32",
    "Float64",
    "Int8",
    "Int16",
    "Int32",
    "Int64",
    "LookupFunc",
    "Options",
    "ParseFailure",
    "Registry",
    "RequiredMissingError",
    "ResolutionError",
    "TextDecoder",
    "Uint",
    "Uint8",
    "Uint16",
    "Uint32",
    "Uint64",
    "Var",
    "Width",
    "__version__",
    "command_line_args",
    "compose",
    "dotenv_file",
    "environment",
    "file_system",
    "from_mapping",
    "parse_into",
    "parse_value",
]
