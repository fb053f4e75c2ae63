"""gitmermaid - Render a git repository's object graph as a Mermaid diagram."""

from __future__ import annotations

__version__ = "0.1.0"
__author__ = "gitmermaid contributors"
