"""Repository change monitoring that triggers diagram re-renders."""

from __future__ import annotations

import logging
import queue
import threading
from dataclasses import dataclass
from enum import Enum
from pathlib import Path
from typing import TYPE_CHECKING

from watchdog.events import FileSystemEvent, FileSystemEventHandler, FileSystemMovedEvent
from watchdog.observers import Observer

from gitmermaid.git.errors import StoreError
from gitmermaid.git.store import PygitObjectStore

if TYPE_CHECKING:
	from collections.abc import Callable, Iterable

logger = logging.getLogger(__name__)

# Transient or log-only files git creates while updating refs.
DEFAULT_IGNORED_SUFFIXES = (".lock", "logs", "COMMIT_EDITMSG", "ORIG_HEAD")


class WatchSetupError(Exception):
	"""Raised when the repository directories cannot be watched."""


class MonitorState(str, Enum):
	"""Lifecycle of a RepoWatcher."""

	IDLE = "idle"
	WATCHING = "watching"
	RENDERING = "rendering"
	STOPPED = "stopped"


@dataclass(frozen=True)
class WatchMessage:
	"""Item passed from the observer threads to the consumer: a path or an error."""

	path: str | None = None
	error: Exception | None = None


def _as_str(path: str | bytes) -> str:
	return path.decode() if isinstance(path, bytes) else str(path)


def is_render_trigger(path: str, ignored_suffixes: Iterable[str] = DEFAULT_IGNORED_SUFFIXES) -> bool:
	"""
	Check whether a newly created path should trigger a re-render.

	Args:
	    path: Path that was created.
	    ignored_suffixes: Path endings that never trigger a render.

	Returns:
	    bool: True unless ``path`` ends with one of ``ignored_suffixes``.

	"""
	return not any(path.endswith(suffix) for suffix in ignored_suffixes)


class RepoEventHandler(FileSystemEventHandler):
	"""Forwards qualifying creation events to a message queue."""

	def __init__(
		self,
		messages: queue.Queue[WatchMessage | None],
		ignored_suffixes: Iterable[str] = DEFAULT_IGNORED_SUFFIXES,
	) -> None:
		"""
		Initialize the event handler.

		Args:
		    messages: Queue read by the consumer thread.
		    ignored_suffixes: Path endings that never trigger a render.

		"""
		super().__init__()
		self.messages = messages
		self.ignored_suffixes = tuple(ignored_suffixes)

	def _accept(self, path: str) -> None:
		if not is_render_trigger(path, self.ignored_suffixes):
			logger.debug("Ignoring created path: %s", path)
			return
		self.messages.put(WatchMessage(path=path))

	def dispatch(self, event: FileSystemEvent) -> None:
		"""Dispatch the event, reporting handler failures on the queue."""
		try:
			super().dispatch(event)
		except Exception as e:
			self.messages.put(WatchMessage(error=e))

	def on_created(self, event: FileSystemEvent) -> None:
		"""
		Handle creation events.

		Args:
		    event: The file system event

		"""
		self._accept(_as_str(event.src_path))

	def on_moved(self, event: FileSystemEvent) -> None:
		"""
		Handle a rename into a watched directory as the creation of its destination.

		Args:
		    event: The file system event

		"""
		if isinstance(event, FileSystemMovedEvent):
			self._accept(_as_str(event.dest_path))


class RepoWatcher:
	"""Watches a repository's ref directories and re-renders on change."""

	def __init__(
		self,
		repo_dir: str | Path,
		on_change: Callable[[str], object],
		ignored_suffixes: Iterable[str] = DEFAULT_IGNORED_SUFFIXES,
	) -> None:
		"""
		Initialize the watcher.

		Args:
		    repo_dir: Working directory of the repository.
		    on_change: Called with the created path, one call at a time.
		    ignored_suffixes: Path endings that never trigger a render.

		"""
		self.repo_dir = Path(repo_dir)
		self.git_dir = self.repo_dir / ".git"
		self.on_change = on_change
		self.messages: queue.Queue[WatchMessage | None] = queue.Queue()
		self.event_handler = RepoEventHandler(self.messages, ignored_suffixes)
		self.observer = Observer()
		self.state = MonitorState.IDLE
		self.paths: list[Path] = []
		self._done = threading.Event()
		self._failure: BaseException | None = None
		self._consumer: threading.Thread | None = None

	def _schedule(self, path: Path) -> None:
		self.observer.schedule(self.event_handler, str(path), recursive=False)
		self.paths.append(path)

	def _remote_paths(self) -> list[Path]:
		try:
			remotes = PygitObjectStore.open(self.repo_dir).list_remotes()
		except StoreError as e:
			msg = f"No repository to watch at {self.repo_dir}"
			raise WatchSetupError(msg) from e
		paths = []
		for remote in remotes:
			path = self.git_dir / "refs" / "remotes" / remote.name
			if path.is_dir():
				paths.append(path)
			else:
				logger.debug("Remote '%s' has no ref directory yet", remote.name)
		return paths

	def start(self) -> None:
		"""
		Attach the watches and start consuming events.

		Raises:
		    WatchSetupError: If the ref directories cannot be watched.

		"""
		for path in (self.git_dir / "refs" / "heads", self.git_dir):
			if not path.is_dir():
				msg = f"Cannot watch {path}: not a directory"
				raise WatchSetupError(msg)
			self._schedule(path)
		for path in self._remote_paths():
			self._schedule(path)

		try:
			self.observer.start()
		except OSError as e:
			msg = f"Failed to start watching {self.repo_dir}: {e}"
			raise WatchSetupError(msg) from e

		self._consumer = threading.Thread(target=self._consume, name="gitmermaid-watch", daemon=True)
		self.state = MonitorState.WATCHING
		self._consumer.start()
		logger.info("Watching paths: %s", [str(path) for path in self.paths])

	def _consume(self) -> None:
		"""Handle queued messages one at a time until the queue is closed."""
		try:
			while True:
				message = self.messages.get()
				if message is None:
					break
				if message.error is not None:
					logger.error("Watch error: %s", message.error)
					continue
				logger.debug("Change detected: %s", message.path)
				self.state = MonitorState.RENDERING
				self.on_change(message.path)
				self.state = MonitorState.WATCHING
		except Exception as e:
			logger.debug("Re-render failed, stopping watcher")
			self._failure = e
		finally:
			self.state = MonitorState.STOPPED
			self._done.set()

	def _stop_observer(self) -> None:
		if self.observer.is_alive():
			self.observer.stop()
			self.observer.join()
			logger.info("Watchdog observer stopped.")

	def stop(self) -> None:
		"""Detach the watches and close the message queue."""
		self._stop_observer()
		self.messages.put(None)

	def wait(self, timeout: float | None = None) -> bool:
		"""
		Block until the watcher has stopped.

		Args:
		    timeout: Seconds to wait, or None to wait indefinitely.

		Returns:
		    bool: True if the watcher stopped within ``timeout``.

		Raises:
		    Exception: The error raised by ``on_change`` that stopped the watcher.

		"""
		if not self._done.wait(timeout):
			return False
		self._stop_observer()
		if self._failure is not None:
			raise self._failure
		return True
