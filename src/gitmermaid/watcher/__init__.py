"""Watcher module for re-rendering diagrams when a repository changes."""

from gitmermaid.watcher.repo_watcher import (
	DEFAULT_IGNORED_SUFFIXES,
	MonitorState,
	RepoEventHandler,
	RepoWatcher,
	WatchMessage,
	WatchSetupError,
	is_render_trigger,
)

__all__ = [
	"DEFAULT_IGNORED_SUFFIXES",
	"MonitorState",
	"RepoEventHandler",
	"RepoWatcher",
	"WatchMessage",
	"WatchSetupError",
	"is_render_trigger",
]
