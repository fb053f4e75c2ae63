"""
Read-only probe for the cached tree extension of a git index file.

libgit2 keeps the cached tree (``TREE`` extension) private, so this module walks
just enough of the on-disk index format to find it. Entries are skipped, never
interpreted.

"""

from __future__ import annotations

import logging
import struct
from typing import TYPE_CHECKING

from gitmermaid.git.errors import ObjectDecodeError

if TYPE_CHECKING:
	from pathlib import Path

logger = logging.getLogger(__name__)

INDEX_SIGNATURE = b"DIRC"
TREE_SIGNATURE = b"TREE"
HEADER_SIZE = 12
CHECKSUM_SIZE = 20
OID_SIZE = 20
# ctime, mtime, dev, ino, mode, uid, gid, size, oid, flags
ENTRY_FIXED_SIZE = 40 + OID_SIZE + 2
EXTENDED_FLAG = 0x4000


def _read_varint(data: bytes, offset: int) -> tuple[int, int]:
	"""Decode the offset-encoded integer used by index version 4."""
	byte = data[offset]
	offset += 1
	value = byte & 0x7F
	while byte & 0x80:
		value += 1
		byte = data[offset]
		offset += 1
		value = (value << 7) + (byte & 0x7F)
	return value, offset


def _skip_entries(data: bytes, version: int, count: int) -> int:
	"""Return the offset just past the last index entry."""
	offset = HEADER_SIZE
	for _ in range(count):
		start = offset
		(flags,) = struct.unpack_from(">H", data, offset + ENTRY_FIXED_SIZE - 2)
		offset += ENTRY_FIXED_SIZE
		if version >= 3 and flags & EXTENDED_FLAG:
			offset += 2
		if version >= 4:
			_, offset = _read_varint(data, offset)
			offset = data.index(b"\x00", offset) + 1
		else:
			name_end = data.index(b"\x00", offset)
			entry_length = name_end - start
			offset = start + ((entry_length + 8) // 8) * 8
	return offset


def count_cached_trees(payload: bytes) -> int:
	"""
	Count the valid entries of a ``TREE`` extension payload.

	Invalidated entries (entry count ``-1``) carry no object id and are not counted.

	Args:
	    payload: Raw extension data without signature and size.

	Returns:
	    Number of cached trees still valid.

	"""
	valid = 0
	offset = 0
	while offset < len(payload):
		offset = payload.index(b"\x00", offset) + 1
		count_end = payload.index(b" ", offset)
		entry_count = int(payload[offset:count_end])
		offset = payload.index(b"\n", count_end) + 1
		if entry_count >= 0:
			offset += OID_SIZE
			valid += 1
	return valid


def has_cached_tree(data: bytes) -> bool:
	"""
	Check whether raw index bytes carry a non-empty cached tree.

	Args:
	    data: Full content of a ``.git/index`` file.

	Returns:
	    True when a ``TREE`` extension with at least one valid entry is present.

	Raises:
	    ObjectDecodeError: If the data is not a readable index file.

	"""
	if len(data) < HEADER_SIZE + CHECKSUM_SIZE or data[:4] != INDEX_SIGNATURE:
		msg = "Index file has no DIRC header"
		raise ObjectDecodeError(msg)

	version, count = struct.unpack_from(">II", data, 4)
	try:
		offset = _skip_entries(data, version, count)
		end = len(data) - CHECKSUM_SIZE
		while offset + 8 <= end:
			signature = data[offset : offset + 4]
			(size,) = struct.unpack_from(">I", data, offset + 4)
			offset += 8
			if signature == TREE_SIGNATURE:
				return count_cached_trees(data[offset : offset + size]) > 0
			offset += size
	except (ValueError, IndexError, struct.error) as e:
		msg = f"Malformed index file (version {version}, {count} entries)"
		raise ObjectDecodeError(msg) from e
	return False


def probe_index_file(index_path: Path) -> bool:
	"""
	Report whether the index file at ``index_path`` has a cached tree.

	A missing index file has no cache.

	Args:
	    index_path: Path to the repository's index file.

	Returns:
	    True if the cached tree extension is present and non-empty.

	"""
	if not index_path.exists():
		logger.debug("No index file at %s", index_path)
		return False
	try:
		data = index_path.read_bytes()
	except OSError as e:
		msg = f"Cannot read index file {index_path}: {e}"
		raise ObjectDecodeError(msg) from e
	return has_cached_tree(data)
