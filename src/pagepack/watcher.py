"""File watcher — triggers rebuilds during development.

Monitors the project root and reports changes to files matching the
dev-server watch globs (``src/**/*.js``, ``src/**/*.pcss``, ...), page
modules, and the project config file.  The generated styles file and the
build output are ignored so that a rebuild never triggers itself.
"""

from __future__ import annotations

import queue
import threading
from dataclasses import dataclass
from fnmatch import fnmatchcase
from pathlib import Path
from typing import TYPE_CHECKING, Literal

from watchfiles import Change

if TYPE_CHECKING:
    from collections.abc import Sequence

    from pagepack.config import ProjectConfig



@dataclass(frozen=True, slots=True)
class ChangeEvent:
    """A file change detected by the watcher.

    Attributes:
        path: Absolute path to the changed file.
        kind: Type of filesystem change.

    """

    path: Path
    kind: Literal["created", "modified", "deleted"]


# Mapping from watchfiles Change enum to our kind literals.
_CHANGE_KIND_MAP: dict[Change, Literal["created", "modified", "deleted"]] = {
    Change.added: "created",
    Change.modified: "modified",
    Change.deleted: "deleted",
}


def rebuild_globs(config: ProjectConfig) -> tuple[str, ...]:
    """Globs whose changes trigger a development rebuild.

    The dev-server globs plus page modules and the project config files.
    """
    from pagepack.bundle.assembler import watch_globs
    from pagepack.config_loader import CONFIG_FILENAMES

    pages = config.pages_dir.rstrip("/")
    return (*watch_globs(config), f"{pages}/*.py", *CONFIG_FILENAMES)


def matches_glob(relative: str, pattern: str) -> bool:
    """Match a ``/``-separated relative path against a ``**`` glob.

    ``src/**/*.js`` matches both ``src/app.js`` and ``src/a/b/app.js``.
    """
    if fnmatchcase(relative, pattern):
        return True
    return "**/" in pattern and fnmatchcase(relative, pattern.replace("**/", ""))


def is_watched(path: Path, config: ProjectConfig, globs: Sequence[str]) -> bool:
    """Return True if a change to *path* should trigger a rebuild."""
    if path == config.styles_path:
        return False
    try:
        path.relative_to(config.output_path)
    except ValueError:
        pass
    else:
        return False

    try:
        rel = path.relative_to(config.root).as_posix()
    except ValueError:
        return False
    return any(matches_glob(rel, pattern) for pattern in globs)


class BuildWatcher:
    """Watches the project for source changes in a background thread.

    Uses watchfiles for filesystem monitoring and hands batches of
    relevant :class:`ChangeEvent` objects to the caller through a queue.

    """

    def __init__(self, config: ProjectConfig, globs: Sequence[str]) -> None:
        self._config = config
        self._globs = tuple(globs)
        self._queue: queue.Queue[tuple[ChangeEvent, ...]] = queue.Queue()
        self._stop_event = threading.Event()
        self._thread: threading.Thread | None = None

    @property
    def is_running(self) -> bool:
        """Whether the watcher background thread is active."""
        return self._thread is not None and self._thread.is_alive()

    def start(self) -> None:
        """Start watching for file changes in a background thread."""
        if self.is_running:
            return

        self._stop_event.clear()
        self._thread = threading.Thread(
            target=self._watch_loop,
            name="pagepack-watcher",
            daemon=True,
        )
        self._thread.start()

    def stop(self) -> None:
        """Signal the watcher to stop and wait for the thread to finish."""
        self._stop_event.set()
        if self._thread is not None:
            self._thread.join(timeout=5.0)
            self._thread = None

    def next_batch(self, timeout: float | None = None) -> tuple[ChangeEvent, ...]:
        """Block until a batch of changes arrives; empty on timeout."""
        try:
            return self._queue.get(timeout=timeout)
        except queue.Empty:
            return ()

    def filter_changes(self, raw_changes: set[tuple[Change, str]]) -> tuple[ChangeEvent, ...]:
        """Convert raw watchfiles changes into relevant events, sorted by path."""
        events = [
            ChangeEvent(path=Path(path_str), kind=_CHANGE_KIND_MAP.get(change, "modified"))
            for change, path_str in raw_changes
            if is_watched(Path(path_str), self._config, self._globs)
        ]
        return tuple(sorted(events, key=lambda e: str(e.path)))

    def _watch_loop(self) -> None:
        """Background thread: run watchfiles and push batches to the queue."""
        from watchfiles import watch

        for raw_changes in watch(
            self._config.root,
            stop_event=self._stop_event,
            debounce=300,
            step=100,
        ):
            events = self.filter_changes(raw_changes)
            if events:
                self._queue.put(events)
