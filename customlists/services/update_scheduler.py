"""Timer-backed task scheduling for periodic update checks.

An UpdateTask wraps a callable and runs it once at a given time on a
daemon thread. Scheduling again replaces the pending run, so the task
itself decides its cadence by re-arming from inside the callable.

Thread naming convention:
- service-{task name}
"""

from __future__ import annotations

import logging
import threading
from datetime import datetime
from typing import Callable

logger = logging.getLogger(__name__)


class UpdateTask:
    """A callable run once at a scheduled time, re-armable at will."""

    def __init__(self, name: str, func: Callable[[], object]) -> None:
        """Initialize the task.

        Args:
            name: Task name, used for logs and the timer thread name
            func: Callable run when the task fires
        """
        self._name = name
        self._func = func
        self._timer: threading.Timer | None = None
        self._next_run: datetime | None = None
        self._timer_lock = threading.Lock()

    @property
    def name(self) -> str:
        return self._name

    @property
    def next_run(self) -> datetime | None:
        """Time of the pending run, None if nothing is scheduled."""
        with self._timer_lock:
            return self._next_run

    @property
    def is_scheduled(self) -> bool:
        with self._timer_lock:
            return self._timer is not None

    def schedule(self, when: datetime) -> UpdateTask:
        """Run the task at the given time, replacing any pending run.

        Args:
            when: Naive local time at which to run (past times run immediately)

        Returns:
            The task itself, for chaining
        """
        delay = max(0.0, (when - datetime.now()).total_seconds())

        with self._timer_lock:
            if self._timer is not None:
                self._timer.cancel()

            timer = threading.Timer(delay, self._run)
            timer.name = f"service-{self._name}"
            timer.daemon = True
            self._timer = timer
            self._next_run = when
            timer.start()

        logger.debug(f"Task scheduled (task={self._name}, delay={delay:.1f}s)")
        return self

    def cancel(self) -> None:
        """Cancel the pending run, if any."""
        with self._timer_lock:
            if self._timer is not None:
                self._timer.cancel()
                self._timer = None
                self._next_run = None
                logger.debug(f"Task cancelled (task={self._name})")

    def _run(self) -> None:
        with self._timer_lock:
            if self._timer is threading.current_thread():
                self._timer = None
                self._next_run = None

        try:
            self._func()
        except Exception as e:
            logger.error(f"Task failed (task={self._name}, error={e})")
