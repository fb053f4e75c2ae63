"""Read-only access to git repositories."""

from gitmermaid.git.errors import (
	EmptyRepositoryError,
	NotARepositoryError,
	ObjectDecodeError,
	RemoteListError,
	StoreError,
)
from gitmermaid.git.models import (
	GITIGNORE,
	BranchInfo,
	CommitInfo,
	HeadInfo,
	IndexEntryInfo,
	IndexInfo,
	RemoteInfo,
	RemoteRefInfo,
	TreeEntryInfo,
	TreeInfo,
	short_hash,
)
from gitmermaid.git.store import ObjectStore, PygitObjectStore

__all__ = [
	"GITIGNORE",
	"BranchInfo",
	"CommitInfo",
	"EmptyRepositoryError",
	"HeadInfo",
	"IndexEntryInfo",
	"IndexInfo",
	"NotARepositoryError",
	"ObjectDecodeError",
	"ObjectStore",
	"PygitObjectStore",
	"RemoteInfo",
	"RemoteListError",
	"RemoteRefInfo",
	"StoreError",
	"TreeEntryInfo",
	"TreeInfo",
	"short_hash",
]
