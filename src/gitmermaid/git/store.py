"""Read-only object store interface and its pygit2 implementation."""

from __future__ import annotations

import abc
import logging
from pathlib import Path
from typing import TYPE_CHECKING

from pygit2 import Blob, Commit, GitError, Repository, Tree
from pygit2.enums import RepositoryOpenFlag

from gitmermaid.git.errors import (
	EmptyRepositoryError,
	NotARepositoryError,
	ObjectDecodeError,
	RemoteListError,
	StoreError,
)
from gitmermaid.git.index_probe import probe_index_file
from gitmermaid.git.models import (
	BranchInfo,
	CommitInfo,
	HeadInfo,
	IndexEntryInfo,
	IndexInfo,
	RemoteInfo,
	RemoteRefInfo,
	TreeEntryInfo,
	TreeInfo,
	shorten_ref_name,
)

if TYPE_CHECKING:
	from collections.abc import Sequence

logger = logging.getLogger(__name__)

BRANCH_REF_PREFIX = "refs/heads/"
PEELED_SUFFIX = "^{}"


class ObjectStore(abc.ABC):
	"""Read-only queries over a repository's objects and refs."""

	@abc.abstractmethod
	def list_commits(self) -> Sequence[CommitInfo]:
		"""
		List every commit stored in the object database.

		Returns:
		    Commits ordered by full object id.

		Raises:
		    StoreError: If the object database cannot be enumerated.

		"""

	@abc.abstractmethod
	def get_tree(self, tree_id: str) -> TreeInfo:
		"""
		Read a tree object.

		Raises:
		    ObjectDecodeError: If the tree is missing or unreadable.

		"""

	@abc.abstractmethod
	def read_blob(self, blob_id: str) -> str:
		"""
		Read a blob's content as text.

		Raises:
		    ObjectDecodeError: If the blob is missing or unreadable.

		"""

	@abc.abstractmethod
	def read_index(self) -> IndexInfo:
		"""Read the staging area."""

	@abc.abstractmethod
	def list_branches(self) -> Sequence[BranchInfo]:
		"""List local branches ordered by name."""

	@abc.abstractmethod
	def list_remotes(self) -> Sequence[RemoteInfo]:
		"""List configured remotes ordered by name."""

	@abc.abstractmethod
	def list_remote_refs(self, remote_name: str) -> Sequence[RemoteRefInfo]:
		"""
		List the refs a remote advertises, without the symbolic HEAD.

		Raises:
		    RemoteListError: If the remote cannot be queried.

		"""

	@abc.abstractmethod
	def resolve_head(self) -> HeadInfo | None:
		"""Resolve HEAD, or return None when it does not point at a commit."""

	def require_head(self) -> HeadInfo:
		"""
		Resolve HEAD or fail.

		Raises:
		    EmptyRepositoryError: If HEAD does not resolve.

		"""
		head = self.resolve_head()
		if head is None:
			msg = "Repository has no HEAD commit"
			raise EmptyRepositoryError(msg)
		return head


class PygitObjectStore(ObjectStore):
	"""Object store backed by a pygit2 repository."""

	def __init__(self, repo: Repository) -> None:
		"""
		Initialize the store around an open repository.

		Args:
		    repo: An open pygit2 repository.

		"""
		self.repo = repo

	@classmethod
	def open(cls, repo_dir: Path | str) -> PygitObjectStore:
		"""
		Open the repository located exactly at ``repo_dir``.

		Parent directories are not searched.

		Args:
		    repo_dir: Working directory (or git directory) of the repository.

		Returns:
		    PygitObjectStore: Store for the repository.

		Raises:
		    NotARepositoryError: If no repository lives at ``repo_dir``.

		"""
		path = Path(repo_dir).expanduser().resolve()
		try:
			repo = Repository(str(path), RepositoryOpenFlag.NO_SEARCH)
		except (GitError, OSError) as e:
			msg = f"Not a git repository: {path}"
			raise NotARepositoryError(msg) from e
		logger.debug("Opened repository at %s", repo.path)
		return cls(repo)

	@property
	def git_dir(self) -> Path:
		"""Path of the repository's git directory."""
		return Path(self.repo.path)

	def list_commits(self) -> list[CommitInfo]:
		"""List every commit object in the object database, ordered by id."""
		commits: list[CommitInfo] = []
		try:
			for oid in self.repo.odb:
				obj = self.repo.get(oid)
				if isinstance(obj, Commit):
					commits.append(
						CommitInfo(
							id=str(obj.id),
							tree_id=str(obj.tree_id),
							parent_ids=tuple(str(parent_id) for parent_id in obj.parent_ids),
						)
					)
		except GitError as e:
			msg = f"Failed to enumerate commits in {self.repo.path}: {e}"
			raise StoreError(msg) from e
		commits.sort(key=lambda commit: commit.id)
		logger.debug("Found %d commits", len(commits))
		return commits

	def get_tree(self, tree_id: str) -> TreeInfo:
		"""Read a tree and its entries in git order."""
		try:
			tree = self.repo.get(tree_id)
			if not isinstance(tree, Tree):
				msg = f"Object {tree_id} is not a readable tree"
				raise ObjectDecodeError(msg)
			entries = tuple(TreeEntryInfo(name=entry.name, id=str(entry.id), kind=entry.type_str) for entry in tree)
		except (GitError, ValueError) as e:
			msg = f"Failed to read tree {tree_id}: {e}"
			raise ObjectDecodeError(msg) from e
		return TreeInfo(id=tree_id, entries=entries)

	def read_blob(self, blob_id: str) -> str:
		"""Read a blob and decode it as UTF-8, replacing invalid bytes."""
		try:
			blob = self.repo.get(blob_id)
		except (GitError, ValueError) as e:
			msg = f"Failed to read blob {blob_id}: {e}"
			raise ObjectDecodeError(msg) from e
		if not isinstance(blob, Blob):
			msg = f"Object {blob_id} is not a readable blob"
			raise ObjectDecodeError(msg)
		return blob.data.decode("utf-8", errors="replace")

	def read_index(self) -> IndexInfo:
		"""Read the staging area and probe its cached tree."""
		if self.repo.is_bare:
			return IndexInfo()
		try:
			index = self.repo.index
			index.read()
			entries = tuple(IndexEntryInfo(path=entry.path, id=str(entry.id)) for entry in index)
		except GitError as e:
			msg = f"Failed to read index of {self.repo.path}: {e}"
			raise ObjectDecodeError(msg) from e
		has_cache = probe_index_file(self.git_dir / "index")
		return IndexInfo(entries=entries, has_cache=has_cache)

	def list_branches(self) -> list[BranchInfo]:
		"""List local branches ordered by name."""
		branches = []
		try:
			for name in sorted(self.repo.branches.local):
				branch = self.repo.branches.local[name]
				branches.append(BranchInfo(name=name, target=str(branch.target)))
		except (GitError, KeyError) as e:
			msg = f"Failed to list branches: {e}"
			raise StoreError(msg) from e
		return branches

	def list_remotes(self) -> list[RemoteInfo]:
		"""List configured remotes ordered by name."""
		try:
			remotes = [RemoteInfo(name=remote.name, url=remote.url) for remote in self.repo.remotes]
		except GitError as e:
			msg = f"Failed to list remotes: {e}"
			raise StoreError(msg) from e
		return sorted(remotes, key=lambda remote: remote.name)

	def list_remote_refs(self, remote_name: str) -> list[RemoteRefInfo]:
		"""Ask the remote for its refs, skipping HEAD and peeled tag entries."""
		try:
			remote = self.repo.remotes[remote_name]
			heads = remote.list_heads()
		except (GitError, KeyError) as e:
			msg = f"Failed to list refs of remote '{remote_name}': {e}"
			raise RemoteListError(msg) from e

		refs = []
		for head in heads:
			name = head.name
			if name == "HEAD" or name.endswith(PEELED_SUFFIX):
				continue
			refs.append(RemoteRefInfo(name=shorten_ref_name(name), target=str(head.oid)))
		return refs

	def resolve_head(self) -> HeadInfo | None:
		"""Resolve HEAD to its commit and, when attached, its branch."""
		try:
			if self.repo.head_is_unborn:
				return None
			head = self.repo.head
		except GitError:
			logger.debug("HEAD does not resolve in %s", self.repo.path)
			return None

		branch = shorten_ref_name(head.name) if head.name.startswith(BRANCH_REF_PREFIX) else None
		return HeadInfo(target=str(head.target), branch=branch)

