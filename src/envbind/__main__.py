"""``python -m envbind``: the ``envbind`` command under the interpreter."""

from __future__ import annotations

from envbind.cli.app import cli

if __name__ == "__main__":
    cli()
