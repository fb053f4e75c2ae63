"""Tests for Mermaid statement formatting."""

from __future__ import annotations

import io

import pytest

from gitmermaid.diagram import mermaid
from gitmermaid.diagram.mermaid import MermaidWriter, truncate_preview


@pytest.mark.unit
@pytest.mark.parametrize(
	("content", "expected"),
	[
		("hello\nworld", "hello"),
		("short", "short"),
		("exactly10!", "exactly10!"),
		("0123456789abcdef", "0123456789"),
		("", ""),
		("\nsecond line", ""),
		("héllo wörld ünïcode", "héllo wörl"),
		("tab\there\nnext", "tab\there"),
	],
)
def test_truncate_preview(content: str, expected: str) -> None:
	"""Previews keep the first line, capped at ten characters."""
	assert truncate_preview(content) == expected


@pytest.mark.unit
def test_truncate_preview_non_positive_length() -> None:
	assert truncate_preview("hello", 0) == ""
	assert truncate_preview("hello", -3) == ""


@pytest.mark.unit
def test_node_shapes() -> None:
	assert mermaid.commit_node("ab12") == "ab12(((ab12)))"
	assert mermaid.tree_node("cd34") == "cd34{cd34}"
	assert mermaid.blob_node("ef56") == "ef56[ef56]"
	assert mermaid.blob_node("ef56", "hi") == "ef56[ef56 hi]"
	assert mermaid.ref_node("originmain", "main") == "originmain[[main]]"
	assert mermaid.index_node() == "Index[(index)]"
	assert mermaid.head_node() == "HEAD{{HEAD}}"


@pytest.mark.unit
def test_edges() -> None:
	assert mermaid.edge("a", "b") == "a-->b"
	assert mermaid.edge("a", "b", label="x.txt") == "a--x.txt-->b"
	assert mermaid.history_edge("a", "b") == "a-.->b"
	assert mermaid.style("HEAD", mermaid.HEAD_STYLE) == "style HEAD fill:#266e38,stroke:#333,color:#ffffff"


@pytest.mark.unit
def test_writer_document_layout() -> None:
	stream = io.StringIO()
	writer = MermaidWriter(stream)
	writer.open_block()
	writer.statement("ab12(((ab12)))")
	writer.placeholder()
	writer.close_block()

	assert stream.getvalue() == "```mermaid\ngraph LR\nab12(((ab12)))\nempty((empty))\n```\n"
	assert writer.statement_count == 2
