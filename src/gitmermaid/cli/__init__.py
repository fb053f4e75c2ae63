"""Command-line interface package for gitmermaid."""

from __future__ import annotations

import sys

import typer

from gitmermaid import __version__

from .render_cmd import register_command as register_render_command

# Initialize the main CLI app
app = typer.Typer(
	help=f"gitmermaid - Draw a git repository as a Mermaid diagram\n\nVersion: {__version__}",
	context_settings={"help_option_names": ["-h", "--help"]},
)

# A single registered command runs without a subcommand name.
register_render_command(app)


# --- Main Entry Point ---
def main() -> int:
	"""Run the CLI application."""
	return app()


if __name__ == "__main__":
	sys.exit(main())
