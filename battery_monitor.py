"""
Battery level notifications and the critical-charge shutdown safeguard.

The monitor owns the battery status. It is given a notifier (something that
shows and closes desktop notifications) and a scheduler (something that runs
a callback after a delay and can cancel it), so it has no GUI dependency of
its own.
"""

import logging
import subprocess
from typing import Any, Callable, List, Optional, Protocol

import config
from battery_status import (
    BatteryLevel,
    BatteryStatus,
    Notice,
    ShutdownError,
    get_notice,
    should_notify,
)

logger = logging.getLogger(__name__)


class Notifier(Protocol):
    def show(
        self,
        notice: Notice,
        body: str,
        actions: Optional[List[tuple]] = None,
    ) -> Any:
        """Display a notification and return a handle to it."""

    def close(self, handle: Any) -> None:
        """Close a displayed notification."""


class Scheduler(Protocol):
    def schedule(self, delay: int, callback: Callable[[], None]) -> Any:
        """Run ``callback`` once after ``delay`` seconds and return a handle."""

    def cancel(self, handle: Any) -> None:
        """Cancel a scheduled callback that has not run yet."""


def power_off() -> None:
    """Start the power-off command without waiting for it."""
    try:
        subprocess.Popen(config.SHUTDOWN_COMMAND, start_new_session=True)
    except OSError as e:
        raise ShutdownError(f"Could not run {' '.join(config.SHUTDOWN_COMMAND)}: {e}") from e


class BatteryMonitor:
    """
    Notifies once per battery level change and powers off at critical charge.
    """

    def __init__(
        self,
        capacity_path: str,
        ac_path: str,
        notifier: Notifier,
        scheduler: Scheduler,
        shutdown: Callable[[], None] = power_off,
    ) -> None:
        self.capacity_path = capacity_path
        self.ac_path = ac_path
        self.notifier = notifier
        self.scheduler = scheduler
        self.shutdown = shutdown
        self.status = BatteryStatus()
        self.pending_shutdowns: List[Any] = []

    def refresh(self) -> None:
        """Read the battery, classify it and notify if the level calls for it."""
        self.status.update(self.capacity_path, self.ac_path)

        if should_notify(self.status.battery_level, self.status.last_notif_level):
            self._dispatch(self.status.battery_level)

        logger.debug("%s", self.status)

    def _dispatch(self, level: BatteryLevel) -> None:
        notice = get_notice(level)
        body = notice.format_body(self.status.battery_percentage)

        actions = None
        if level is BatteryLevel.CRITICAL:
            actions = [("abort", config.ABORT_ACTION_LABEL, self.abort_shutdown)]

        handle = self.notifier.show(notice, body, actions)
        self.status.last_notif_level = level
        logger.info("Notified %s: %s", notice.summary, body)

        # Nothing to unplug
        if level is BatteryLevel.HIGH and not self.status.plugged_in:
            self.notifier.close(handle)

        if level is BatteryLevel.CRITICAL:
            self._schedule_shutdown()

    def _schedule_shutdown(self) -> None:
        handle = None

        def fire() -> None:
            if handle in self.pending_shutdowns:
                self.pending_shutdowns.remove(handle)
            logger.info("Powering off")
            self.shutdown()

        handle = self.scheduler.schedule(config.SHUTDOWN_DELAY, fire)
        self.pending_shutdowns.append(handle)
        logger.info("Shutdown scheduled in %d seconds", config.SHUTDOWN_DELAY)

    def abort_shutdown(self) -> None:
        """Cancel every pending shutdown."""
        if not self.pending_shutdowns:
            return
        for handle in self.pending_shutdowns:
            self.scheduler.cancel(handle)
        logger.info("Aborted %d pending shutdown(s)", len(self.pending_shutdowns))
        self.pending_shutdowns.clear()

    def stop(self) -> None:
        """Release everything tied to the monitor's lifetime."""
        self.abort_shutdown()
