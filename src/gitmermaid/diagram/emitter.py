"""
Projection of repository objects onto Mermaid statements.

Each ``emit_*`` method draws one section of the diagram. Sections only read
from the object store and append to the writer, so running them twice over an
unchanged repository writes the same text.

"""

from __future__ import annotations

import logging
from typing import TYPE_CHECKING

from gitmermaid.diagram import mermaid
from gitmermaid.git.errors import RemoteListError
from gitmermaid.git.models import GITIGNORE, short_hash

if TYPE_CHECKING:
	from collections.abc import Iterable

	from gitmermaid.diagram.mermaid import MermaidWriter
	from gitmermaid.diagram.models import DiagramConfig
	from gitmermaid.git.models import CommitInfo, TreeInfo
	from gitmermaid.git.store import ObjectStore

logger = logging.getLogger(__name__)


class GraphEmitter:
	"""Draws the objects of one repository under a fixed configuration."""

	def __init__(self, store: ObjectStore, config: DiagramConfig, writer: MermaidWriter) -> None:
		"""
		Initialize the emitter.

		Args:
		    store: Object store to query.
		    config: Sections and details to draw.
		    writer: Destination of the statements.

		"""
		self.store = store
		self.config = config
		self.writer = writer

	def _blob(self, blob_id: str) -> str:
		"""Blob node text, with a content preview when requested."""
		short_id = short_hash(blob_id)
		if not self.config.show_content:
			return mermaid.blob_node(short_id)
		preview = mermaid.truncate_preview(self.store.read_blob(blob_id))
		return mermaid.blob_node(short_id, preview)

	def emit_index(self) -> None:
		"""
		Draw the staging area, or check that the repository is not empty.

		Raises:
		    EmptyRepositoryError: If the index is not drawn and HEAD does not resolve.
		    ObjectDecodeError: If the index or a staged blob cannot be read.

		"""
		if not self.config.show_index:
			self.store.require_head()
			return

		index = self.store.read_index()
		if not index.entries:
			self.writer.statement(mermaid.index_node())
			return
		if index.only_gitignore:
			self.writer.statement(mermaid.index_node())

		if not index.has_cache:
			self.writer.statement(mermaid.style(mermaid.INDEX_ID, mermaid.INDEX_STYLE))

		if not self.config.show_blob:
			self.writer.statement(mermaid.index_node())
			return

		for entry in index.entries:
			if entry.path == GITIGNORE:
				continue
			self.writer.statement(mermaid.edge(mermaid.index_node(), self._blob(entry.id), label=entry.path))

	def emit_commits(self, commits: Iterable[CommitInfo]) -> None:
		"""Draw every commit in ``commits``."""
		for commit in commits:
			self.emit_commit(commit)

	def emit_commit(self, commit: CommitInfo) -> None:
		"""
		Draw one commit with its tree, blobs and parents as configured.

		Raises:
		    ObjectDecodeError: If a tree or blob below the commit cannot be read.

		"""
		commit_id = short_hash(commit.id)
		node = mermaid.commit_node(commit_id)

		if self.config.show_tree:
			tree_id = short_hash(commit.tree_id)
			self.writer.statement(mermaid.edge(node, mermaid.tree_node(tree_id)))
			if self.config.show_blob:
				self.emit_tree_entries(self.store.get_tree(commit.tree_id))
		elif self.config.show_blob:
			# Top-level files only, hung directly off the commit.
			tree = self.store.get_tree(commit.tree_id)
			for entry in tree.entries:
				if entry.is_file and entry.name != GITIGNORE:
					self.writer.statement(mermaid.edge(node, self._blob(entry.id), label=entry.name))
		else:
			self.writer.statement(node)

		if self.config.show_history:
			for parent_id in commit.parent_ids:
				parent = mermaid.commit_node(short_hash(parent_id))
				self.writer.statement(mermaid.history_edge(node, parent))

	def emit_tree_entries(self, tree: TreeInfo) -> None:
		"""
		Draw the files and sub-trees of ``tree``, descending into sub-trees.

		Files hang off their immediate parent tree. Trees are acyclic, so the
		recursion needs no visited set.

		Raises:
		    ObjectDecodeError: If a sub-tree or blob cannot be read.

		"""
		tree_id = short_hash(tree.id)
		for entry in tree.entries:
			if entry.is_file:
				if entry.name == GITIGNORE:
					continue
				self.writer.statement(mermaid.edge(tree_id, self._blob(entry.id), label=entry.name))
			elif entry.is_tree:
				subtree = self.store.get_tree(entry.id)
				self.writer.statement(
					mermaid.edge(
						mermaid.tree_node(tree_id),
						mermaid.tree_node(short_hash(subtree.id)),
						label=entry.name,
					)
				)
				self.emit_tree_entries(subtree)
			else:
				logger.debug("Skipping submodule entry %s in tree %s", entry.name, tree_id)

	def emit_branches(self) -> None:
		"""Draw each local branch pointing at its commit."""
		if not self.config.show_branch:
			return
		for branch in self.store.list_branches():
			node = mermaid.ref_node(branch.name, branch.name)
			self.writer.statement(mermaid.edge(node, short_hash(branch.target)))

	def emit_remotes(self) -> None:
		"""Draw each remote as a subgraph of its advertised refs."""
		if not self.config.show_remote:
			return
		for remote in self.store.list_remotes():
			try:
				refs = self.store.list_remote_refs(remote.name)
			except RemoteListError as e:
				logger.warning("Cannot list refs of remote '%s': %s", remote.name, e)
				refs = []

			self.writer.statement(mermaid.subgraph_open(remote.name))
			for ref in refs:
				self.writer.statement(mermaid.ref_node(f"{remote.name}{ref.name}", ref.name))
			self.writer.statement(mermaid.subgraph_close())
			self.writer.statement(mermaid.style(remote.name, mermaid.REMOTE_STYLE))

			for ref in refs:
				node = mermaid.ref_node(f"{remote.name}{ref.name}", ref.name)
				self.writer.statement(mermaid.edge(node, mermaid.commit_node(short_hash(ref.target))))

	def emit_head(self) -> None:
		"""Draw HEAD pointing at its branch or directly at its commit."""
		if not self.config.show_head:
			return
		head = self.store.resolve_head()
		if head is None:
			logger.debug("HEAD does not resolve, not drawing it")
			if not self.config.show_index:
				self.writer.placeholder()
			return

		self.writer.statement(mermaid.style(mermaid.HEAD_ID, mermaid.HEAD_STYLE))
		if head.is_branch and self.config.show_branch:
			target = head.branch
		else:
			target = short_hash(head.target)
		self.writer.statement(mermaid.edge(mermaid.head_node(), target))
