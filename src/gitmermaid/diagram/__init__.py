"""Mermaid diagram rendering for git repositories."""

from gitmermaid.diagram.driver import RenderError, render_diagram
from gitmermaid.diagram.emitter import GraphEmitter
from gitmermaid.diagram.mermaid import MermaidWriter, truncate_preview
from gitmermaid.diagram.models import DEFAULT_OUTPUT, DiagramConfig, RenderResult

__all__ = [
	"DEFAULT_OUTPUT",
	"DiagramConfig",
	"GraphEmitter",
	"MermaidWriter",
	"RenderError",
	"RenderResult",
	"render_diagram",
	"truncate_preview",
]
