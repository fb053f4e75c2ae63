"""Read views over the objects and refs of a git repository."""

from __future__ import annotations

from dataclasses import dataclass

GITIGNORE = ".gitignore"
SHORT_HASH_LENGTH = 4


def short_hash(object_id: str) -> str:
	"""Return the diagram identifier for a full hex object id."""
	return object_id[:SHORT_HASH_LENGTH]


@dataclass(frozen=True)
class CommitInfo:
	"""A commit object with its root tree and parents."""

	id: str
	tree_id: str
	parent_ids: tuple[str, ...] = ()


@dataclass(frozen=True)
class TreeEntryInfo:
	"""One entry of a tree object."""

	name: str
	id: str
	kind: str  # "blob", "tree" or "commit" (gitlink)

	@property
	def is_file(self) -> bool:
		"""Whether the entry points at a blob."""
		return self.kind == "blob"

	@property
	def is_tree(self) -> bool:
		"""Whether the entry points at a sub-tree."""
		return self.kind == "tree"


@dataclass(frozen=True)
class TreeInfo:
	"""A tree object and its entries in canonical order."""

	id: str
	entries: tuple[TreeEntryInfo, ...] = ()


@dataclass(frozen=True)
class IndexEntryInfo:
	"""A staged path and the blob it points at."""

	path: str
	id: str


@dataclass(frozen=True)
class IndexInfo:
	"""The staging area.

	Attributes:
	    entries: Staged entries in index order.
	    has_cache: True when the index carries a non-empty cached tree extension.
	"""

	entries: tuple[IndexEntryInfo, ...] = ()
	has_cache: bool = False

	@property
	def only_gitignore(self) -> bool:
		"""Whether the single staged entry is the ignore file."""
		return len(self.entries) == 1 and self.entries[0].path == GITIGNORE


@dataclass(frozen=True)
class BranchInfo:
	"""A local branch."""

	name: str
	target: str


@dataclass(frozen=True)
class RemoteRefInfo:
	"""A ref advertised by a remote."""

	name: str
	target: str


@dataclass(frozen=True)
class RemoteInfo:
	"""A configured remote."""

	name: str
	url: str | None = None


@dataclass(frozen=True)
class HeadInfo:
	"""Where HEAD points.

	Attributes:
	    target: Full id of the commit HEAD resolves to.
	    branch: Short branch name when HEAD is attached to a branch, else None.
	"""

	target: str
	branch: str | None = None

	@property
	def is_branch(self) -> bool:
		"""Whether HEAD is attached to a branch."""
		return self.branch is not None


REF_PREFIXES = ("refs/heads/", "refs/tags/", "refs/remotes/", "refs/")


def shorten_ref_name(ref_name: str) -> str:
	"""Strip the well-known namespace prefix from a full ref name."""
	for prefix in REF_PREFIXES:
		if ref_name.startswith(prefix):
			return ref_name[len(prefix) :]
	return ref_name
