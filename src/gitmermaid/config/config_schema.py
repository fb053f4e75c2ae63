"""Schemas for the gitmermaid configuration file."""

from __future__ import annotations

from pydantic import BaseModel, ConfigDict, Field

from gitmermaid.diagram.models import DiagramConfig
from gitmermaid.watcher.repo_watcher import DEFAULT_IGNORED_SUFFIXES


class DiagramSchema(BaseModel):
	"""Default feature toggles, overridden by command-line flags."""

	model_config = ConfigDict(extra="forbid")

	tree: bool = False
	blob: bool = False
	branch: bool = False
	head: bool = False
	history: bool = False
	content: bool = False
	index: bool = False
	remote: bool = False

	def to_config(self, **overrides: bool | None) -> DiagramConfig:
		"""
		Build the render configuration, letting non-None overrides win.

		Args:
		    **overrides: Toggle values keyed by schema field name.

		Returns:
		    DiagramConfig: Immutable configuration for a render pass.

		"""
		values = self.model_dump()
		values.update({key: value for key, value in overrides.items() if value is not None})
		return DiagramConfig(**{f"show_{key}": value for key, value in values.items()})


class WatchSchema(BaseModel):
	"""Change monitor settings."""

	model_config = ConfigDict(extra="forbid")

	enabled: bool = False
	ignored_suffixes: list[str] = Field(default_factory=lambda: list(DEFAULT_IGNORED_SUFFIXES))


class AppConfigSchema(BaseModel):
	"""Top-level configuration file schema."""

	model_config = ConfigDict(extra="forbid")

	diagram: DiagramSchema = Field(default_factory=DiagramSchema)
	output: str = "diagram.md"
	watch: WatchSchema = Field(default_factory=WatchSchema)
