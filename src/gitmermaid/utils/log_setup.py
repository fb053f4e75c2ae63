"""
Logging setup for gitmermaid.

Log records go to stderr through rich, so the console output of a watch
session (the watched paths) stays readable. Long watch sessions can also log
to a file.

"""

from __future__ import annotations

import logging
from pathlib import Path

from rich.console import Console
from rich.logging import RichHandler
from rich.rule import Rule
from rich.text import Text

# Shared console for user-facing output
console = Console()

FILE_LOG_FORMAT = "%(asctime)s %(levelname)-8s %(name)s: %(message)s"


def setup_logging(is_verbose: bool = False, log_file_path: Path | str | None = None) -> None:
	"""
	Configure the root logger.

	Args:
	    is_verbose: Log DEBUG records to the console instead of warnings only.
	    log_file_path: Also write every record, DEBUG included, to this file.

	"""
	console_level = logging.DEBUG if is_verbose else logging.WARNING

	root_logger = logging.getLogger()
	for handler in root_logger.handlers[:]:
		root_logger.removeHandler(handler)
		if isinstance(handler, logging.FileHandler):
			handler.close()

	root_logger.addHandler(
		RichHandler(
			level=console_level,
			console=Console(stderr=True),
			rich_tracebacks=True,
			show_path=is_verbose,
		)
	)
	root_logger.setLevel(console_level)

	if log_file_path:
		path = Path(log_file_path)
		path.parent.mkdir(parents=True, exist_ok=True)
		file_handler = logging.FileHandler(path, mode="a", encoding="utf-8")
		file_handler.setFormatter(logging.Formatter(FILE_LOG_FORMAT))
		root_logger.addHandler(file_handler)
		root_logger.setLevel(logging.DEBUG)
		logging.getLogger(__name__).debug("Logging to file: %s", path)


def _display_summary(title: str, message: str, color: str) -> None:
	console.print()
	console.print(Rule(Text(title, style=f"bold {color}"), style=color))
	console.print(f"\n{message}\n")
	console.print(Rule(style=color))
	console.print()


def display_error_summary(error_message: str) -> None:
	"""Print an error between red rules."""
	_display_summary("Error Summary", error_message, "red")


def display_warning_summary(warning_message: str) -> None:
	"""Print a warning between yellow rules."""
	_display_summary("Warning Summary", warning_message, "yellow")
