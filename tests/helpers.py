"""Repository builders, an in-memory object store and other test helpers."""

from __future__ import annotations

import io
from collections.abc import Sequence
from pathlib import Path

import pygit2
from pygit2.enums import ObjectType

from gitmermaid.diagram import DiagramConfig, GraphEmitter, MermaidWriter
from gitmermaid.git import (
	BranchInfo,
	CommitInfo,
	HeadInfo,
	IndexInfo,
	ObjectDecodeError,
	ObjectStore,
	RemoteInfo,
	RemoteListError,
	RemoteRefInfo,
	TreeInfo,
)


class FakeObjectStore(ObjectStore):
	"""Object store answering from dictionaries."""

	def __init__(
		self,
		commits: Sequence[CommitInfo] = (),
		trees: Sequence[TreeInfo] = (),
		blobs: dict[str, str] | None = None,
		index: IndexInfo | None = None,
		branches: Sequence[BranchInfo] = (),
		remotes: dict[str, Sequence[RemoteRefInfo] | Exception] | None = None,
		head: HeadInfo | None = None,
	) -> None:
		self.commits = list(commits)
		self.trees = {tree.id: tree for tree in trees}
		self.blobs = blobs or {}
		self.index = index or IndexInfo()
		self.branches = list(branches)
		self.remotes = remotes or {}
		self.head = head

	def list_commits(self) -> list[CommitInfo]:
		return sorted(self.commits, key=lambda commit: commit.id)

	def get_tree(self, tree_id: str) -> TreeInfo:
		try:
			return self.trees[tree_id]
		except KeyError as e:
			msg = f"missing tree {tree_id}"
			raise ObjectDecodeError(msg) from e

	def read_blob(self, blob_id: str) -> str:
		try:
			return self.blobs[blob_id]
		except KeyError as e:
			msg = f"missing blob {blob_id}"
			raise ObjectDecodeError(msg) from e

	def read_index(self) -> IndexInfo:
		return self.index

	def list_branches(self) -> list[BranchInfo]:
		return self.branches

	def list_remotes(self) -> list[RemoteInfo]:
		return [RemoteInfo(name=name) for name in sorted(self.remotes)]

	def list_remote_refs(self, remote_name: str) -> Sequence[RemoteRefInfo]:
		refs = self.remotes[remote_name]
		if isinstance(refs, Exception):
			msg = f"cannot reach {remote_name}"
			raise RemoteListError(msg) from refs
		return refs

	def resolve_head(self) -> HeadInfo | None:
		return self.head


def hexid(prefix: str) -> str:
	"""Pad a short id to a full 40-character object id."""
	return prefix.ljust(40, "0")


def emit(store: ObjectStore, config: DiagramConfig, section: str, *args: object) -> list[str]:
	"""Run one emitter section and return the written statements."""
	stream = io.StringIO()
	emitter = GraphEmitter(store, config, MermaidWriter(stream))
	getattr(emitter, f"emit_{section}")(*args)
	return stream.getvalue().splitlines()


SIGNATURE = pygit2.Signature("Test User", "test@example.com", 1700000000, 0)


class RepoBuilder:
	"""Builds small git repositories on disk with fixed signatures."""

	def __init__(self, path: Path) -> None:
		self.path = path
		self.repo = pygit2.init_repository(str(path), initial_head="main")

	@property
	def git_dir(self) -> Path:
		return Path(self.repo.path)

	def write(self, rel_path: str, content: str) -> Path:
		file_path = self.path / rel_path
		file_path.parent.mkdir(parents=True, exist_ok=True)
		file_path.write_text(content, encoding="utf-8")
		return file_path

	def stage(self, files: dict[str, str]) -> None:
		"""Write and stage files without committing."""
		index = self.repo.index
		for rel_path, content in files.items():
			self.write(rel_path, content)
			index.add(rel_path)
		index.write()

	def commit(self, files: dict[str, str] | None = None, message: str = "commit") -> str:
		"""Stage ``files`` and commit the whole index on the current branch."""
		index = self.repo.index
		for rel_path, content in (files or {}).items():
			self.write(rel_path, content)
			index.add(rel_path)
		tree_id = index.write_tree()
		index.write()
		parents = [] if self.repo.head_is_unborn else [self.repo.head.target]
		return str(self.repo.create_commit("HEAD", SIGNATURE, SIGNATURE, message, tree_id, parents))

	def branch(self, name: str, commit_id: str) -> None:
		self.repo.branches.local.create(name, self.repo[commit_id])

	def tree_id(self, commit_id: str) -> str:
		return str(self.repo[commit_id].tree_id)

	def entry_id(self, commit_id: str, path: str) -> str:
		"""Id of the object at ``path`` inside a commit's tree."""
		return str(self.repo[commit_id].tree[path].id)

	def add_remote(self, name: str, upstream: RepoBuilder) -> None:
		"""Register ``upstream`` as a remote reached through the local filesystem."""
		self.repo.remotes.create(name, str(upstream.path))

	def tag(self, name: str, commit_id: str) -> str:
		"""Create an annotated tag, which remotes also advertise peeled."""
		target = self.repo[commit_id].id
		return str(self.repo.create_tag(name, target, ObjectType.COMMIT, SIGNATURE, name))
