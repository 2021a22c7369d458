"""Custom filter list component.

Owns the filter store, the reload controller and the periodic update
task. One instance is created by the application factory and shared with
whichever code performs lookups.
"""

from __future__ import annotations

import ipaddress
import logging
import threading
from datetime import datetime, timedelta
from typing import Callable

from customlists.core.filtering.filter_store import FilterListStore
from customlists.core.filtering.parser import parse_file
from customlists.core.filtering.reload_controller import (
    CHECK_INTERVAL,
    INITIAL_CHECK_DELAY,
    ReloadController,
)
from customlists.models.filter_list import ParseResult
from customlists.services.settings import FilterListSettings
from customlists.services.update_scheduler import UpdateTask

logger = logging.getLogger(__name__)

UPDATE_TASK_NAME = "customlists-file-update-check"
UPDATE_SUCCESS_MESSAGE = "Custom filter list loaded successfully."


class CustomFilterLists:
    """Custom filter list: lookups plus hot reload of the source file."""

    def __init__(
        self,
        settings: FilterListSettings,
        initial_check_delay: float = INITIAL_CHECK_DELAY,
        check_interval: float = CHECK_INTERVAL,
        parser: Callable[[str], ParseResult] = parse_file,
    ) -> None:
        self._settings = settings
        self._initial_check_delay = initial_check_delay
        self._running = False
        self._state_lock = threading.Lock()

        self.store = FilterListStore()
        self._task = UpdateTask(UPDATE_TASK_NAME, self._run_update_check)
        self.controller = ReloadController(
            self.store,
            settings,
            scheduler=_RunningScheduler(self),
            parser=parser,
            check_interval=check_interval,
        )

        settings.subscribe(self._on_config_change)

    @property
    def settings(self) -> FilterListSettings:
        return self._settings

    @property
    def is_running(self) -> bool:
        return self._running

    def start(self) -> None:
        """Schedule the first update check and watch the config if enabled."""
        when = datetime.now() + timedelta(seconds=self._initial_check_delay)
        with self._state_lock:
            self._running = True
            self._task.schedule(when)
        self.store.set_next_check(when)

        if self._settings.watch_config:
            self._settings.start_watching()

        logger.info(f"Custom filter lists started (first_check_in={self._initial_check_delay}s)")

    def stop(self) -> None:
        """Cancel the pending update check and stop the config watcher."""
        with self._state_lock:
            self._running = False
            self._task.cancel()
        self.store.set_next_check(None)
        self._settings.stop_watching()
        logger.info("Custom filter lists stopped")

    def trigger_update(self) -> str:
        """Re-check the list file now.

        The outcome is only reported in the logs: once the check was
        attempted the trigger always reports success.
        """
        self.controller.check_and_update()
        return UPDATE_SUCCESS_MESSAGE

    def lookup_ip(self, ip: str | ipaddress.IPv4Address | ipaddress.IPv6Address) -> bool:
        return self.store.lookup_ip(ip)

    def lookup_domain(self, domain: str, match_subdomains: bool) -> tuple[bool, str]:
        return self.store.lookup_domain(domain, match_subdomains)

    def lookup_asn(self, number: int) -> bool:
        return self.store.lookup_asn(number)

    def lookup_country(self, country_code: str) -> bool:
        return self.store.lookup_country(country_code)

    def get_status(self) -> dict:
        """Statistics, reload state and last error of the filter list."""
        return {
            "enabled": bool(self._settings.get_file_path()),
            "configured_path": self._settings.get_file_path(),
            "stats": self.store.stats.to_dict(),
            "state": self.store.state.to_dict(),
            "last_error": self.controller.last_error,
            "check_interval": self.controller.check_interval,
        }

    def _run_update_check(self) -> None:
        self.controller.check_and_update()

    def _on_config_change(self, file_path: str) -> None:
        if not file_path:
            self.controller.deactivate()
            return

        logger.info("Custom filter list setting changed, checking for update")
        self.controller.check_and_update()


class _RunningScheduler:
    """Re-arms the update task only while the component is running."""

    def __init__(self, owner: CustomFilterLists) -> None:
        self._owner = owner

    def schedule(self, when: datetime) -> UpdateTask | None:
        owner = self._owner
        with owner._state_lock:
            if not owner._running:
                return None
            return owner._task.schedule(when)
