"""CLI console and logging helpers with optional Rich support.

This module intentionally avoids module-level imports of optional UI
dependencies so bootstrap paths (``--help``, ``--version``) remain
functional even when Rich is not installed.
"""

from __future__ import annotations

import logging
import sys
from typing import Any

from liveroot.exceptions import EnvironmentError

LOGGER_NAME = "liveroot"


def _load_rich_console_class() -> type[Any]:
	"""Return ``rich.console.Console`` class or raise ``EnvironmentError``."""
	try:
		from rich.console import Console
	except ModuleNotFoundError as exc:
		raise EnvironmentError(
			"rich is not installed. Install with: pip install rich",
		) from exc
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


def _build_log_handler() -> logging.Handler:
	"""Return a Rich log handler, or a plain stderr handler without Rich."""
	try:
		from rich.logging import RichHandler
	except ModuleNotFoundError:
		handler = logging.StreamHandler(sys.stderr)
		handler.setFormatter(logging.Formatter("%(levelname)s: %(message)s"))
		return handler
	return RichHandler(
		console=get_rich_console(),
		show_time=False,
		show_path=False,
		markup=False,
	)


def configure_logging(verbose: bool = False) -> logging.Logger:
	"""Attach a single handler to the ``liveroot`` logger.

	WARNING and above are shown by default, everything with *verbose*.
	Calling this again replaces the previously installed handler.
	"""
	logger = logging.getLogger(LOGGER_NAME)
	for handler in list(logger.handlers):
		logger.removeHandler(handler)
	logger.addHandler(_build_log_handler())
	logger.setLevel(logging.DEBUG if verbose else logging.WARNING)
	return logger
