"""Custom filter list settings backed by the YAML config file.

Exposes the configured list file path (empty means filtering is disabled)
and notifies subscribers whenever that path changes, be it through the
management API or an edit of the config file on disk.

Config layout (data/config/customlists.yaml):

    customlists:
      file_path: data/customlists/filterlist.txt
      watch_config: true
"""

from __future__ import annotations

import logging
import threading
from pathlib import Path
from typing import Callable

import yaml
from watchdog.events import FileSystemEventHandler
from watchdog.observers import Observer

logger = logging.getLogger(__name__)

CONFIG_SECTION = "customlists"


class FilterListSettings:
    """Configuration source for the custom filter list."""

    def __init__(
        self,
        config_path: str | Path | None,
        base_path: Path | None = None,
        debounce_seconds: float = 1.0,
    ) -> None:
        """Initialize the settings.

        Args:
            config_path: YAML config file, None to keep settings in memory only
            base_path: Base path for resolving relative paths
            debounce_seconds: Delay before re-reading a changed config file
        """
        self._config_path = Path(config_path) if config_path else None
        self._base_path = base_path
        self._debounce_seconds = debounce_seconds
        self._file_path = ""
        self._watch_config = False
        self._listeners: list[Callable[[str], object]] = []
        self._lock = threading.Lock()
        self._observer: Observer | None = None
        self._handler: _ConfigChangeHandler | None = None

    @property
    def config_path(self) -> Path | None:
        return self._config_path

    @property
    def watch_config(self) -> bool:
        return self._watch_config

    def load(self) -> None:
        """(Re)read the YAML config file.

        A missing or invalid file disables filtering; it never raises.
        """
        section = self._read_section()

        raw_path = section.get("file_path") or ""
        if not isinstance(raw_path, str):
            logger.warning(f"Ignoring non-string file_path (value={raw_path!r})")
            raw_path = ""

        self._watch_config = bool(section.get("watch_config", False))
        self._update_file_path(raw_path.strip())

    def get_file_path(self) -> str:
        """Return the configured list file path, "" when disabled."""
        with self._lock:
            raw_path = self._file_path
        return self._resolve(raw_path)

    def set_file_path(self, file_path: str, persist: bool = True) -> None:
        """Change the configured list file path.

        Args:
            file_path: New path, "" to disable filtering
            persist: Also write the value back to the YAML config file

        Raises:
            OSError: If the config file cannot be written
        """
        file_path = file_path.strip()
        if persist and self._config_path is not None:
            self._write_file_path(file_path)
        self._update_file_path(file_path)

    def subscribe(self, callback: Callable[[str], object]) -> None:
        """Register a callback run with the new path whenever it changes."""
        with self._lock:
            self._listeners.append(callback)

    def start_watching(self) -> bool:
        """Watch the config file and reload it on change.

        Returns:
            True if the watcher started, False otherwise
        """
        if self._config_path is None or not self._config_path.parent.exists():
            logger.warning("No config directory to watch")
            return False

        self.stop_watching()
        try:
            handler = _ConfigChangeHandler(self, self._debounce_seconds)
            observer = Observer()
            observer.schedule(handler, str(self._config_path.parent), recursive=False)
            observer.start()
        except OSError as e:
            logger.error(f"Failed to start config watcher (error={e})")
            return False

        self._observer = observer
        self._handler = handler
        logger.info(f"Watching config file for changes (path={self._config_path})")
        return True

    def stop_watching(self) -> None:
        """Stop watching the config file."""
        if self._observer is not None:
            self._observer.stop()
            self._observer.join(timeout=5.0)
            self._observer = None
            logger.info("Config watcher stopped")
        if self._handler is not None:
            self._handler.cancel()
            self._handler = None

    @property
    def is_watching(self) -> bool:
        return self._observer is not None

    def _read_section(self) -> dict:
        if self._config_path is None:
            return {}
        if not self._config_path.exists():
            logger.warning(f"Config file not found: {self._config_path}")
            return {}

        try:
            with open(self._config_path, "r", encoding="utf-8") as f:
                data = yaml.safe_load(f) or {}
        except (OSError, yaml.YAMLError) as e:
            logger.error(f"Error loading config {self._config_path}: {e}")
            return {}

        section = data.get(CONFIG_SECTION) if isinstance(data, dict) else None
        return section if isinstance(section, dict) else {}

    def _write_file_path(self, file_path: str) -> None:
        data: dict = {}
        if self._config_path.exists():
            with open(self._config_path, "r", encoding="utf-8") as f:
                try:
                    loaded = yaml.safe_load(f)
                except yaml.YAMLError as e:
                    logger.warning(f"Overwriting invalid config (error={e})")
                    loaded = None
            if isinstance(loaded, dict):
                data = loaded

        section = data.get(CONFIG_SECTION)
        if not isinstance(section, dict):
            section = {}
            data[CONFIG_SECTION] = section
        section["file_path"] = file_path

        self._config_path.parent.mkdir(parents=True, exist_ok=True)
        with open(self._config_path, "w", encoding="utf-8") as f:
            yaml.safe_dump(data, f, default_flow_style=False, sort_keys=False)

    def _update_file_path(self, raw_path: str) -> None:
        with self._lock:
            changed = raw_path != self._file_path
            self._file_path = raw_path
            listeners = list(self._listeners)

        if not changed:
            return

        resolved = self._resolve(raw_path)
        logger.info(f"Custom filter list path changed (path={resolved or '<disabled>'})")
        for callback in listeners:
            try:
                callback(resolved)
            except Exception as e:
                logger.error(f"Config change listener failed (error={e})")

    def _resolve(self, raw_path: str) -> str:
        if not raw_path:
            return ""
        path = Path(raw_path)
        if not path.is_absolute() and self._base_path:
            path = self._base_path / path
        return str(path)


class _ConfigChangeHandler(FileSystemEventHandler):
    """Reloads the settings when the config file changes.

    Uses trailing-edge debounce: waits for changes to stop before reloading.
    """

    def __init__(self, settings: FilterListSettings, debounce_seconds: float) -> None:
        super().__init__()
        self._settings = settings
        self._debounce_seconds = debounce_seconds
        self._pending_timer: threading.Timer | None = None
        self._timer_lock = threading.Lock()
        self._cancelled = False

    def dispatch(self, event) -> None:
        """Handle file system events for the config file only."""
        if event.is_directory:
            return
        if event.event_type not in ("modified", "created", "moved", "deleted"):
            return

        config_name = self._settings.config_path.name
        paths = [str(event.src_path), str(getattr(event, "dest_path", "") or "")]
        if not any(Path(p).name == config_name for p in paths if p):
            return

        self._schedule_reload()

    def cancel(self) -> None:
        """Drop any pending reload; later events are ignored."""
        with self._timer_lock:
            self._cancelled = True
            if self._pending_timer is not None:
                self._pending_timer.cancel()
                self._pending_timer = None

    def _schedule_reload(self) -> None:
        with self._timer_lock:
            if self._cancelled:
                return
            if self._pending_timer is not None:
                self._pending_timer.cancel()

            self._pending_timer = threading.Timer(self._debounce_seconds, self._do_reload)
            self._pending_timer.daemon = True
            self._pending_timer.start()

    def _do_reload(self) -> None:
        with self._timer_lock:
            if self._cancelled:
                return
            self._pending_timer = None

        logger.info("Config file changed, reloading settings")
        self._settings.load()
