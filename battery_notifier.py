#!/usr/bin/env python3
"""
Linux Battery Notifier

A small background notifier for Linux using GLib and libnotify.
Warns about high and low battery charge with desktop notifications and
powers the machine off shortly after the charge becomes critical.
"""

import logging
import os
import sys
from typing import Any, Callable, List, Optional

import gi
gi.require_version('Notify', '0.7')
from gi.repository import GLib, Notify

import config
from battery_monitor import BatteryMonitor
from battery_status import (
    BatteryMonitorError,
    Notice,
    NotificationError,
    Urgency,
    find_supply_path,
)
from watcher import FileWatcher

logger = logging.getLogger(__name__)

URGENCY_MAP = {
    Urgency.LOW: Notify.Urgency.LOW,
    Urgency.NORMAL: Notify.Urgency.NORMAL,
    Urgency.CRITICAL: Notify.Urgency.CRITICAL,
}


class DesktopNotifier:
    """Shows notifications through libnotify."""

    def __init__(self, guard: Callable[[Callable], Callable]) -> None:
        self.guard = guard
        # Notifications with actions must stay referenced until closed
        self._active: List[Notify.Notification] = []

    def show(
        self,
        notice: Notice,
        body: str,
        actions: Optional[List[tuple]] = None,
    ) -> Notify.Notification:
        """
        Display a notification.

        Args:
            notice: Summary, urgency, timeout and icon to use.
            body: Notification body text.
            actions: Optional (id, label, callback) tuples shown as buttons.

        Returns:
            The displayed notification.
        """
        notification = Notify.Notification.new(notice.summary, body, notice.icon)
        notification.set_urgency(URGENCY_MAP[notice.urgency])
        notification.set_timeout(notice.timeout)
        for action_id, label, callback in actions or []:
            notification.add_action(action_id, label, self._on_action, callback)

        try:
            notification.show()
        except GLib.Error as e:
            raise NotificationError(f"Could not show '{notice.summary}': {e.message}") from e

        if actions:
            self._active.append(notification)
            notification.connect("closed", self._on_closed)
        return notification

    def close(self, handle: Notify.Notification) -> None:
        try:
            handle.close()
        except GLib.Error as e:
            raise NotificationError(f"Could not close notification: {e.message}") from e

    def _on_action(self, notification: Notify.Notification, action: str, callback: Callable) -> None:
        self.guard(callback)()

    def _on_closed(self, notification: Notify.Notification) -> None:
        if notification in self._active:
            self._active.remove(notification)


class GLibScheduler:
    """Runs one-shot callbacks from the GLib main loop."""

    def __init__(self, guard: Callable[[Callable], Callable]) -> None:
        self.guard = guard

    def schedule(self, delay: int, callback: Callable[[], None]) -> int:
        wrapped = self.guard(callback)

        def run_once() -> bool:
            wrapped()
            return False

        return GLib.timeout_add_seconds(delay, run_once)

    def cancel(self, handle: int) -> None:
        GLib.source_remove(handle)


class BatteryNotifierApp:
    """
    Wires the battery monitor to the capacity watcher, libnotify and the
    GLib main loop.
    """

    def __init__(self) -> None:
        """Find the battery and adapter and set up the monitor."""
        battery_path = find_supply_path(config.BATTERY_PATHS)
        adapter_path = find_supply_path(config.ADAPTER_PATHS)
        capacity_path = os.path.join(battery_path, config.CAPACITY_FILE)
        ac_path = os.path.join(adapter_path, config.AC_ONLINE_FILE)
        logger.info("Watching %s (AC state from %s)", capacity_path, ac_path)

        self.loop = GLib.MainLoop()
        self.error: Optional[BaseException] = None
        self.poll_source_id: Optional[int] = None

        self.notifier = DesktopNotifier(self.guard)
        self.scheduler = GLibScheduler(self.guard)
        self.monitor = BatteryMonitor(capacity_path, ac_path, self.notifier, self.scheduler)
        self.watcher = FileWatcher(capacity_path, self.monitor.refresh, self._on_watch_error)

    def guard(self, func: Callable) -> Callable:
        """
        Wrap a main loop callback so an exception stops the loop.

        PyGObject only prints exceptions raised inside callbacks, so the
        error is kept and re-raised from run() once the loop has quit.

        Returns:
            The wrapped callback. It returns False after a failure.
        """
        def wrapper(*args: Any) -> Any:
            try:
                return func(*args)
            except Exception as e:
                self.error = e
                self.loop.quit()
                return False
        return wrapper

    def _poll(self) -> bool:
        if not self.guard(self.watcher.poll)():
            self.poll_source_id = None
            return False
        return True

    def _on_watch_error(self, error: OSError) -> None:
        logger.error("Watch error: %s", error)

    def run(self) -> None:
        """Poll the battery until the loop quits. Re-raises a callback failure."""
        self.poll_source_id = GLib.timeout_add(config.POLL_INTERVAL_MS, self._poll)
        try:
            self.loop.run()
        finally:
            self.stop()

        if self.error is not None:
            raise self.error

    def stop(self) -> None:
        """Stop polling and cancel pending shutdowns."""
        if self.poll_source_id is not None:
            GLib.source_remove(self.poll_source_id)
            self.poll_source_id = None
        self.monitor.stop()
        if self.loop.is_running():
            self.loop.quit()


def main() -> None:
    """Main entry point for the battery notifier."""
    logging.basicConfig(level=config.LOG_LEVEL, format=config.LOG_FORMAT)

    # Check if running on a system with a display
    if not os.environ.get('DISPLAY') and not os.environ.get('WAYLAND_DISPLAY'):
        logger.error("No display server found. This application requires X11 or Wayland.")
        sys.exit(1)

    if not Notify.init(config.APP_NAME):
        logger.error("Could not connect to the notification daemon.")
        sys.exit(1)

    try:
        app = BatteryNotifierApp()
        app.run()
    except KeyboardInterrupt:
        logger.info("Exiting...")
        sys.exit(0)
    except BatteryMonitorError as e:
        logger.error("%s", e)
        sys.exit(1)
    except Exception:
        logger.exception("Unexpected error")
        sys.exit(1)
    finally:
        Notify.uninit()


if __name__ == "__main__":
    main()
