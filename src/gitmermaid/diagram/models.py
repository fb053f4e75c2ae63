"""Configuration and result types for diagram rendering."""

from __future__ import annotations

from dataclasses import dataclass
from pathlib import Path

DEFAULT_OUTPUT = Path("diagram.md")


@dataclass(frozen=True)
class DiagramConfig:
	"""Which parts of the repository a render pass draws."""

	show_tree: bool = False
	show_blob: bool = False
	show_branch: bool = False
	show_head: bool = False
	show_history: bool = False
	show_content: bool = False
	show_index: bool = False
	show_remote: bool = False


@dataclass(frozen=True)
class RenderResult:
	"""
	Outcome of one render pass.

	Attributes:
	    output_path: Document that was written.
	    statement_count: Number of diagram statements written.
	    placeholder: True when the repository was drawn as the empty placeholder.

	"""

	output_path: Path
	statement_count: int
	placeholder: bool = False
