"""CLI console helpers with optional Rich support.

Diagnostics go to stderr through Rich; command results go to stdout as
plain text so they can be captured by scripts.  Rich is imported lazily
so bootstrap paths (``--help``, ``--version``) keep working without it.
"""

from __future__ import annotations

import sys
from typing import Any

from dealmaker.exceptions import EnvironmentError, missing_dependency


def _load_rich_console_class() -> type[Any]:
	"""Return ``rich.console.Console`` class or raise ``EnvironmentError``."""
	try:
		from rich.console import Console
	except ModuleNotFoundError as exc:
		raise missing_dependency("rich") from exc
	return Console


def get_rich_console() -> Any:
	"""Create a Rich console instance targeting stderr."""
	console_class = _load_rich_console_class()
	return console_class(stderr=True)


class _ConsoleProxy:
	"""Minimal ``print``-compatible proxy with Rich fallback."""

	def print(self, *objects: object) -> None:
		"""Render with Rich when available, else plain stderr print."""
		try:
			rich_console = get_rich_console()
		except EnvironmentError:
			print(*objects, file=sys.stderr)
			return
		rich_console.print(*objects)


console = _ConsoleProxy()


def emit_result(value: object) -> None:
	"""Write a command result to stdout, one line, no markup."""
	print(value, file=sys.stdout, flush=True)
