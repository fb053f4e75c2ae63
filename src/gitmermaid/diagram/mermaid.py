"""Mermaid flowchart statement syntax for repository objects."""

from __future__ import annotations

from typing import TYPE_CHECKING

if TYPE_CHECKING:
	from typing import TextIO

FENCE_OPEN = "```mermaid"
FENCE_CLOSE = "```"
GRAPH_DIRECTION = "graph LR"

PREVIEW_LENGTH = 10

INDEX_ID = "Index"
HEAD_ID = "HEAD"
EMPTY_NODE = "empty((empty))"

INDEX_STYLE = "fill:#e3f542,stroke:#333,color:#000000"
HEAD_STYLE = "fill:#266e38,stroke:#333,color:#ffffff"
REMOTE_STYLE = "fill:#1cb8e8,color:#000000"


def truncate_preview(content: str, length: int = PREVIEW_LENGTH) -> str:
	"""
	Return the first line of ``content``, cut to at most ``length`` characters.

	Args:
	    content: Text to preview.
	    length: Maximum number of characters kept.

	Returns:
	    The preview text; empty when ``length`` is not positive.

	"""
	if length <= 0:
		return ""
	first_line = content.split("\n", 1)[0]
	return first_line[:length]


# Node shapes


def commit_node(commit_id: str) -> str:
	"""Commits are drawn as double circles."""
	return f"{commit_id}((({commit_id})))"


def tree_node(tree_id: str) -> str:
	"""Trees are drawn as rhombuses."""
	return f"{tree_id}{{{tree_id}}}"


def blob_node(blob_id: str, preview: str | None = None) -> str:
	"""Blobs are drawn as rectangles, optionally carrying a content preview."""
	if preview is None:
		return f"{blob_id}[{blob_id}]"
	return f"{blob_id}[{blob_id} {preview}]"


def ref_node(node_id: str, label: str) -> str:
	"""Branches and remote refs are drawn as subroutines."""
	return f"{node_id}[[{label}]]"


def index_node() -> str:
	"""The index is drawn as a cylinder."""
	return f"{INDEX_ID}[(index)]"


def head_node() -> str:
	"""HEAD is drawn as a hexagon."""
	return f"{HEAD_ID}{{{{{HEAD_ID}}}}}"


# Edges


def edge(source: str, target: str, label: str | None = None) -> str:
	"""Structural edge, labelled when ``label`` is given."""
	if label is None:
		return f"{source}-->{target}"
	return f"{source}--{label}-->{target}"


def history_edge(source: str, target: str) -> str:
	"""Dashed edge from a commit to one of its parents."""
	return f"{source}-.->{target}"


def style(node_id: str, spec: str) -> str:
	"""Highlight directive for ``node_id``."""
	return f"style {node_id} {spec}"


def subgraph_open(name: str) -> str:
	"""Start a subgraph boundary."""
	return f"subgraph {name}"


def subgraph_close() -> str:
	return "end"


class MermaidWriter:
	"""Writes Mermaid statements, one per line, to a text stream."""

	def __init__(self, stream: TextIO) -> None:
		"""
		Initialize the writer.

		Args:
		    stream: Open text stream receiving the document.

		"""
		self.stream = stream
		self.statement_count = 0

	def open_block(self) -> None:
		"""Write the fenced block opening and the graph direction."""
		self.stream.write(f"{FENCE_OPEN}\n")
		self.stream.write(f"{GRAPH_DIRECTION}\n")

	def close_block(self) -> None:
		"""Write the closing fence."""
		self.stream.write(f"{FENCE_CLOSE}\n")

	def statement(self, text: str) -> None:
		"""Append one statement."""
		self.stream.write(f"{text}\n")
		self.statement_count += 1

	def placeholder(self) -> None:
		"""Append the node shown for empty or unreadable repositories."""
		self.statement(EMPTY_NODE)
