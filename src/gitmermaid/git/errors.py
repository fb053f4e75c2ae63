"""Exceptions raised by the object store adapter."""

from __future__ import annotations


class StoreError(Exception):
	"""Base exception for object store query failures."""


class NotARepositoryError(StoreError):
	"""Raised when the target directory does not hold a git repository."""


class EmptyRepositoryError(StoreError):
	"""Raised when the repository has nothing to draw (HEAD does not resolve)."""


class ObjectDecodeError(StoreError):
	"""Raised when a tree, blob or commit cannot be read from the object database."""


class RemoteListError(StoreError):
	"""Raised when the refs advertised by a remote cannot be listed."""
