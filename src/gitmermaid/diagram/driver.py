"""Render driver: one complete pass from repository to diagram document."""

from __future__ import annotations

import logging
from pathlib import Path

from gitmermaid.diagram.emitter import GraphEmitter
from gitmermaid.diagram.mermaid import MermaidWriter
from gitmermaid.diagram.models import DEFAULT_OUTPUT, DiagramConfig, RenderResult
from gitmermaid.git.errors import EmptyRepositoryError, StoreError
from gitmermaid.git.store import PygitObjectStore

logger = logging.getLogger(__name__)


class RenderError(Exception):
	"""Raised when a render pass fails while expanding repository objects."""


def render_diagram(
	repo_dir: Path | str,
	config: DiagramConfig | None = None,
	output_path: Path | str = DEFAULT_OUTPUT,
) -> RenderResult:
	"""
	Render the repository at ``repo_dir`` into ``output_path``.

	The document is overwritten and always ends with a closing fence, whether
	the pass succeeds, falls back to the empty placeholder or fails.

	Sections are drawn in a fixed order: index, commits, branches, remotes, HEAD.
	A missing repository, a failed commit listing or an empty repository are
	drawn as a single placeholder node. Any other store failure aborts the pass;
	sections already written stay in the document.

	Args:
	    repo_dir: Directory of the repository to draw.
	    config: Sections to draw. Defaults to bare commits only.
	    output_path: Document to write.

	Returns:
	    RenderResult: Summary of the written document.

	Raises:
	    RenderError: If an object cannot be read while drawing.

	"""
	config = config or DiagramConfig()
	output_path = Path(output_path)
	logger.debug("Rendering %s to %s with %s", repo_dir, output_path, config)

	with output_path.open("w", encoding="utf-8") as stream:
		writer = MermaidWriter(stream)
		writer.open_block()
		try:
			try:
				store = PygitObjectStore.open(repo_dir)
				commits = store.list_commits()
			except StoreError as e:
				logger.info("Drawing empty diagram: %s", e)
				writer.placeholder()
				return RenderResult(output_path, writer.statement_count, placeholder=True)

			emitter = GraphEmitter(store, config, writer)
			try:
				emitter.emit_index()
				emitter.emit_commits(commits)
				emitter.emit_branches()
				emitter.emit_remotes()
				emitter.emit_head()
			except EmptyRepositoryError as e:
				logger.info("Drawing empty diagram: %s", e)
				writer.placeholder()
				return RenderResult(output_path, writer.statement_count, placeholder=True)
			except StoreError as e:
				logger.error("Render of %s aborted: %s", repo_dir, e)
				msg = f"Failed to render {repo_dir}: {e}"
				raise RenderError(msg) from e
		finally:
			writer.close_block()

	logger.info("Wrote %d statements for %d commits to %s", writer.statement_count, len(commits), output_path)
	return RenderResult(output_path, writer.statement_count)

