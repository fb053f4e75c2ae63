"""
Implementation of the render command.

Draws the repository once and, with ``--watch``, keeps redrawing it whenever
a ref or object is created.

"""

from __future__ import annotations

import logging
from pathlib import Path
from typing import TYPE_CHECKING, Annotated

import typer

from gitmermaid import __version__
from gitmermaid.config import ConfigError, ConfigLoader
from gitmermaid.diagram import RenderError, render_diagram
from gitmermaid.utils.cli_utils import exit_with_error, handle_keyboard_interrupt, show_warning
from gitmermaid.utils.log_setup import console, setup_logging
from gitmermaid.watcher import RepoWatcher, WatchSetupError

if TYPE_CHECKING:
	from collections.abc import Iterable

	from gitmermaid.diagram import DiagramConfig

logger = logging.getLogger(__name__)

# Command line argument annotations
DirOpt = Annotated[
	Path,
	typer.Option(
		"--dir",
		help="Git repository directory",
		show_default=True,
	),
]

OutputOpt = Annotated[
	Path | None,
	typer.Option(
		"--output",
		"-o",
		help="Output document (overrides config, default diagram.md)",
	),
]

ConfigOpt = Annotated[
	Path | None,
	typer.Option(
		"--config",
		"-c",
		help="Path to config file",
	),
]

TreeFlag = Annotated[bool | None, typer.Option("--tree/--no-tree", help="Show trees")]
BlobFlag = Annotated[bool | None, typer.Option("--blob/--no-blob", help="Show blobs")]
BranchFlag = Annotated[bool | None, typer.Option("--branch/--no-branch", help="Show branches")]
HeadFlag = Annotated[bool | None, typer.Option("--head/--no-head", help="Show HEAD")]
HistoryFlag = Annotated[bool | None, typer.Option("--history/--no-history", help="Show commit history")]
ContentFlag = Annotated[
	bool | None,
	typer.Option("--content/--no-content", help="Show blob content (one line, max 10 chars)"),
]
IndexFlag = Annotated[bool | None, typer.Option("--index/--no-index", help="Show index (staging area)")]
RemoteFlag = Annotated[bool | None, typer.Option("--remote/--no-remote", help="Show remotes")]
WatchFlag = Annotated[bool | None, typer.Option("--watch/--no-watch", help="Re-render when the repository changes")]

VerboseFlag = Annotated[
	bool,
	typer.Option(
		"--verbose",
		"-v",
		help="Enable verbose logging",
	),
]

LogFileOpt = Annotated[
	Path | None,
	typer.Option(
		"--log-file",
		help="Also write debug logs to this file",
	),
]


def _version_callback(value: bool) -> None:
	"""Callback for --version option."""
	if value:
		typer.echo(f"gitmermaid version: {__version__}")
		raise typer.Exit


def _render(repo_dir: Path, config: DiagramConfig, output_path: Path) -> None:
	"""Run one render pass, exiting the process if it fails."""
	try:
		result = render_diagram(repo_dir, config, output_path)
	except (RenderError, OSError) as e:
		exit_with_error(f"Failed to render diagram for {repo_dir}", exception=e)
		return
	logger.debug("Rendered %d statements to %s", result.statement_count, result.output_path)


def _watch(repo_dir: Path, config: DiagramConfig, output_path: Path, ignored_suffixes: Iterable[str]) -> None:
	"""Re-render on every qualifying repository change until interrupted."""

	def rerender(path: str) -> None:
		console.print(path)
		render_diagram(repo_dir, config, output_path)

	watcher = RepoWatcher(
		repo_dir,
		on_change=rerender,
		ignored_suffixes=ignored_suffixes,
	)
	try:
		watcher.start()
	except WatchSetupError as e:
		show_warning(f"No git repository to watch: {e}")
		return

	console.print(f"watching..{repo_dir}")
	try:
		watcher.wait()
	except KeyboardInterrupt:
		watcher.stop()
		handle_keyboard_interrupt()
	except (RenderError, OSError) as e:
		exit_with_error(f"Failed to re-render diagram for {repo_dir}", exception=e)


def render_command(
	repo_dir: DirOpt = Path(),
	tree: TreeFlag = None,
	blob: BlobFlag = None,
	branch: BranchFlag = None,
	head: HeadFlag = None,
	history: HistoryFlag = None,
	content: ContentFlag = None,
	index: IndexFlag = None,
	remote: RemoteFlag = None,
	watch: WatchFlag = None,
	output: OutputOpt = None,
	config: ConfigOpt = None,
	is_verbose: VerboseFlag = False,
	log_file: LogFileOpt = None,
	_version: Annotated[
		bool | None,
		typer.Option("--version", help="Show version and exit.", callback=_version_callback, is_eager=True),
	] = None,
) -> None:
	"""
	Render a git repository's object graph as a Mermaid diagram.

	Flags that are not given fall back to the configuration file, then to off.

	Examples:
	        gitmermaid --tree --blob --content      # Commits, trees and file previews
	        gitmermaid --branch --head --history    # Branch and history overview
	        gitmermaid --dir ../repo --index --watch

	"""
	setup_logging(is_verbose=is_verbose, log_file_path=log_file)

	try:
		app_config = ConfigLoader(config).get
	except ConfigError as e:
		exit_with_error("Configuration error", exception=e)
		return

	diagram_config = app_config.diagram.to_config(
		tree=tree,
		blob=blob,
		branch=branch,
		head=head,
		history=history,
		content=content,
		index=index,
		remote=remote,
	)
	output_path = output or Path(app_config.output)
	should_watch = watch if watch is not None else app_config.watch.enabled

	_render(repo_dir, diagram_config, output_path)

	if should_watch:
		_watch(repo_dir, diagram_config, output_path, app_config.watch.ignored_suffixes)


def register_command(app: typer.Typer) -> None:
	"""Register the render command with the CLI app."""
	app.command(name="render")(render_command)
