"""Stderr output for the CLI: Rich when installed, plain text otherwise.

Everything the command shows goes through :data:`console`: error
messages from the boundary in :mod:`envbind.cli.app`, the report table
and, with ``--verbose``, the library's log records
(:class:`ConsoleLogHandler`).  Rich is imported lazily so that
``--help`` and ``--version`` keep working without it.
"""

from __future__ import annotations

import logging
import re
import sys
from typing import Any

from envbind.exceptions import MissingDependencyError

_MARKUP_TAG = re.compile(r"\[/?[a-z]*(?: [a-z]+)*\]")

_LEVEL_STYLES: dict[str, str] = {
	"DEBUG": "dim",
	"INFO": "cyan",
	"WARNING": "yellow",
	"ERROR": "bold red",
	"CRITICAL": "bold red",
}


def rich_available() -> bool:
	"""Return whether ``rich`` can be imported."""
	try:
		import rich.console  # noqa: F401
	except ModuleNotFoundError:
		return False
	return True


def get_rich_console() -> Any:
	"""Create a Rich console targeting stderr or raise ``MissingDependencyError``."""
	try:
		from rich.console import Console
	except ModuleNotFoundError as exc:
		raise MissingDependencyError(
			"rich is not installed. Install with: pip install rich",
		) from exc
	return Console(stderr=True, highlight=False)


def strip_markup(text: str) -> str:
	"""Drop Rich style tags such as ``[bold red]`` / ``[/]``."""
	return _MARKUP_TAG.sub("", text)


class _ConsoleProxy:
	"""``print``-compatible stderr writer with a plain-text fallback."""

	def print(self, *objects: object) -> None:
		"""Render with Rich when available; otherwise print without markup."""
		try:
			rich_console = get_rich_console()
		except MissingDependencyError:
			plain = [strip_markup(obj) if isinstance(obj, str) else obj for obj in objects]
			print(*plain, file=sys.stderr)
			return
		rich_console.print(*objects)

	def labelled(self, label: str, style: str, text: str) -> None:
		"""Write *label* in *style* followed by *text*, which is never read as markup."""
		try:
			rich_console = get_rich_console()
		except MissingDependencyError:
			print(f"{label} {text}", file=sys.stderr)
			return
		from rich.markup import escape

		rich_console.print(f"[{style}]{escape(label)}[/] {escape(text)}")

	def log(self, level: str, message: str) -> None:
		self.labelled(f"{level:<8}", _LEVEL_STYLES.get(level, "dim"), message)


console = _ConsoleProxy()


class ConsoleLogHandler(logging.Handler):
	"""Logging handler writing records through :data:`console`."""

	def emit(self, record: logging.LogRecord) -> None:
		try:
			console.log(record.levelname, self.format(record))
		except Exception:  # noqa: BLE001
			self.handleError(record)


def configure_logging(verbose: bool) -> None:
	"""Route ``envbind`` log records to the console when *verbose*.

	Calling it again replaces the handler installed earlier.
	"""
	logger = logging.getLogger("envbind")
	for handler in list(logger.handlers):
		if isinstance(handler, ConsoleLogHandler):
			logger.removeHandler(handler)
	if not verbose:
		return

	handler = ConsoleLogHandler()
	handler.setFormatter(logging.Formatter("%(name)s: %(message)s"))
	logger.addHandler(handler)
	logger.setLevel(logging.DEBUG)
