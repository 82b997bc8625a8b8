"""
Watches the launch document for edits made outside the store
"""

import threading
import time
from pathlib import Path
from typing import Callable, Optional

from watchdog.events import (
    EVENT_TYPE_CREATED,
    EVENT_TYPE_DELETED,
    EVENT_TYPE_MODIFIED,
    EVENT_TYPE_MOVED,
    FileSystemEvent,
    FileSystemEventHandler,
)
from watchdog.observers import Observer

from constants import config
from log import logger
from notifier import ChangeNotifier

# Opened/closed events fire on plain reads and must not count as edits
CONTENT_EVENTS = frozenset(
    {EVENT_TYPE_CREATED, EVENT_TYPE_DELETED, EVENT_TYPE_MODIFIED, EVENT_TYPE_MOVED}
)


class RefreshDebouncer:
    """Trailing-edge debouncing for refresh signals.

    The first event in a quiet period refreshes at once. Events inside the
    window are folded into one refresh that runs when the window closes.
    """

    def __init__(self, delay: float = config.DEBOUNCE_DELAY):
        self.delay = delay
        self.last_refresh_time = 0.0
        self._timer: Optional[threading.Timer] = None
        self._lock = threading.Lock()

    def should_debounce(self) -> bool:
        """Check if we should debounce this refresh"""
        time_since_last = time.time() - self.last_refresh_time
        return time_since_last < self.delay

    def mark_refreshed(self) -> None:
        self.last_refresh_time = time.time()

    @property
    def pending(self) -> bool:
        return self._timer is not None

    def submit(self, refresh: Callable[[], None]) -> bool:
        """Refresh now, or once the window closes. True when run immediately"""
        with self._lock:
            if self._timer is not None:
                return False
            if self.should_debounce():
                remaining = self.delay - (time.time() - self.last_refresh_time)
                self._timer = threading.Timer(
                    max(remaining, 0.0), self._run_trailing, args=(refresh,)
                )
                self._timer.daemon = True
                self._timer.start()
                return False
            self.mark_refreshed()
        refresh()
        return True

    def _run_trailing(self, refresh: Callable[[], None]) -> None:
        with self._lock:
            self._timer = None
            self.mark_refreshed()
        refresh()

    def cancel(self) -> None:
        with self._lock:
            if self._timer is not None:
                self._timer.cancel()
                self._timer = None


class LaunchFileHandler(FileSystemEventHandler):
    """Turns file system events on the launch document into refresh signals"""

    def __init__(
        self,
        launch_path: Path,
        notifier: ChangeNotifier,
        delay: float = config.DEBOUNCE_DELAY,
    ):
        self.launch_path = launch_path.resolve()
        self.notifier = notifier
        self.debouncer = RefreshDebouncer(delay)

    def _is_launch_file(self, path) -> bool:
        if not path:
            return False
        return Path(str(path)).resolve() == self.launch_path

    def on_any_event(self, event: FileSystemEvent) -> None:
        if event.is_directory or event.event_type not in CONTENT_EVENTS:
            return

        paths = [event.src_path, getattr(event, "dest_path", "")]
        if not any(self._is_launch_file(p) for p in paths):
            return

        logger.debug(f"Launch document {event.event_type}: {self.launch_path}")

        if not self.debouncer.submit(self.notifier.refresh):
            logger.debug(f"Deferring refresh for {self.launch_path}")


class CatalogWatcher:
    """Runs a watchdog observer on the launch document's directory"""

    def __init__(
        self,
        launch_path: Path,
        notifier: ChangeNotifier,
        delay: float = config.DEBOUNCE_DELAY,
        observer: Optional[Observer] = None,
    ):
        self.launch_path = Path(launch_path)
        self.handler = LaunchFileHandler(self.launch_path, notifier, delay)
        self._observer = observer or Observer()
        self.running = False

    def start(self) -> bool:
        watch_dir = self.launch_path.parent
        try:
            watch_dir.mkdir(parents=True, exist_ok=True)
            self._observer.schedule(self.handler, str(watch_dir), recursive=False)
            self._observer.start()
        except Exception as e:
            logger.error(f"Failed to watch {watch_dir}: {e}")
            return False

        self.running = True
        logger.info(f"Watching launch document {self.launch_path}")
        return True

    def stop(self) -> None:
        if not self.running:
            return
        self._observer.stop()
        self._observer.join()
        self.handler.debouncer.cancel()
        self.running = False
        logger.info("Launch document watcher stopped")
