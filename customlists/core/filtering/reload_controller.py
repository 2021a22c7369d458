"""Change detection and reload of the custom filter list file.

check_and_update() is the single entry point for every trigger: the
periodic task, the management API and config changes. It is serialized
internally, re-arms the periodic check before parsing and only publishes
a new snapshot when the file parsed successfully.
"""

from __future__ import annotations

import logging
import os
import threading
import time
from datetime import datetime, timedelta
from typing import Callable, Protocol

from customlists.core.filtering.filter_store import FilterListStore
from customlists.core.filtering.parser import FilterListParseError, parse_file
from customlists.models.filter_list import FilterListStats, FilterSets, ParseResult

logger = logging.getLogger(__name__)

INITIAL_CHECK_DELAY = 20.0
CHECK_INTERVAL = 60.0


class FilePathSource(Protocol):
    def get_file_path(self) -> str: ...


class Scheduler(Protocol):
    """Runs the next periodic check; returns None when it declines to."""

    def schedule(self, when: datetime) -> object | None: ...


class ReloadController:
    """Detects changes of the configured list file and reloads the store."""

    def __init__(
        self,
        store: FilterListStore,
        settings: FilePathSource,
        scheduler: Scheduler | None = None,
        parser: Callable[[str], ParseResult] = parse_file,
        check_interval: float = CHECK_INTERVAL,
    ) -> None:
        """Initialize the controller.

        Args:
            store: Store receiving the new snapshots
            settings: Source of the configured file path
            scheduler: Runs the next periodic check, None for manual checks only
            parser: Turns a file path into a ParseResult
            check_interval: Seconds between periodic checks
        """
        self._store = store
        self._settings = settings
        self._scheduler = scheduler
        self._parser = parser
        self._check_interval = check_interval
        self._update_lock = threading.Lock()
        self._last_error: dict[str, str] | None = None

    @property
    def check_interval(self) -> float:
        return self._check_interval

    @property
    def last_error(self) -> dict[str, str] | None:
        """Code and message of the latest failed reload, None after a success."""
        return self._last_error

    def check_and_update(self) -> bool:
        """Reload the filter list if the configured file changed.

        Returns:
            True if a new snapshot was published
        """
        with self._update_lock:
            file_path = self._settings.get_file_path()
            if not file_path:
                logger.debug("No custom filter list configured")
                return False

            self._schedule_next_check()

            modified_ns = self._get_modified_time(file_path)
            state = self._store.state
            if state.file_path == file_path and state.modified_ns == modified_ns:
                return False

            try:
                result = self._parser(file_path)
            except FilterListParseError as e:
                self._last_error = {"code": e.code, "message": e.message}
                logger.error(
                    f"Failed to parse custom filter list, keeping previous entries "
                    f"(code={e.code}, error={e.message})"
                )
                return False

            stats = FilterListStats.from_parse_result(result, file_path)
            self._store.reload(
                result.sets,
                file_path=file_path,
                modified_ns=modified_ns,
                stats=stats,
            )
            self._last_error = None
            return True

    def deactivate(self) -> None:
        """Drop the loaded entries after the list file setting was cleared."""
        with self._update_lock:
            self._store.reload(FilterSets.empty(), file_path="", modified_ns=None)
            self._last_error = None
        logger.info("Custom filter list disabled, entries cleared")

    def _schedule_next_check(self) -> None:
        if self._scheduler is None:
            return
        when = datetime.now() + timedelta(seconds=self._check_interval)
        if self._scheduler.schedule(when) is None:
            return
        self._store.set_next_check(when)

    def _get_modified_time(self, file_path: str) -> int:
        # A file that cannot be stat'd gets "now", so every check retries the
        # parse instead of latching the last recorded timestamp.
        try:
            return os.stat(file_path).st_mtime_ns
        except OSError as e:
            logger.warning(f"Cannot stat custom filter list (path={file_path}, error={e})")
            return time.time_ns()
