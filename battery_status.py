"""
Battery status model.

Reads the charge percentage and AC adapter state from sysfs and classifies
the charge into the levels the notifier reacts to.
"""

import enum
import os
from dataclasses import dataclass
from typing import Optional

import config


class BatteryMonitorError(Exception):
    """Base class for battery notifier failures."""


class BatteryReadError(BatteryMonitorError):
    """A sysfs file is missing, unreadable or holds unexpected content."""


class NotificationError(BatteryMonitorError):
    """The notification daemon could not display a notification."""


class ShutdownError(BatteryMonitorError):
    """The power-off command could not be started."""


class BatteryLevel(enum.Enum):
    HIGH = "high"
    NORMAL = "normal"
    LOW = "low"
    VERY_LOW = "very_low"
    CRITICAL = "critical"


class Urgency(enum.Enum):
    LOW = "low"
    NORMAL = "normal"
    CRITICAL = "critical"


@dataclass(frozen=True)
class Notice:
    """Fixed notification content for a battery level."""

    summary: str
    body: str
    urgency: Urgency
    timeout: int  # milliseconds
    icon: str = "battery-low-symbolic"

    def format_body(self, percentage: int) -> str:
        return f"[{percentage}%] {self.body}"


def classify(percentage: int) -> BatteryLevel:
    """
    Map a charge percentage to its battery level.

    Args:
        percentage: Battery percentage (0-100).

    Returns:
        The level band the percentage falls into.

    Raises:
        ValueError: If the percentage is outside 0-100.
    """
    if not 0 <= percentage <= 100:
        raise ValueError(f"Battery percentage out of range: {percentage}")

    if percentage <= config.CRITICAL_MAX:
        return BatteryLevel.CRITICAL
    elif percentage <= config.VERY_LOW_MAX:
        return BatteryLevel.VERY_LOW
    elif percentage <= config.LOW_MAX:
        return BatteryLevel.LOW
    elif percentage >= config.HIGH_MIN:
        return BatteryLevel.HIGH
    else:
        return BatteryLevel.NORMAL


def should_notify(level: BatteryLevel, last_notif_level: Optional[BatteryLevel]) -> bool:
    """Return True if a notification is due for ``level``."""
    if level is BatteryLevel.NORMAL:
        return False
    return last_notif_level is None or last_notif_level is not level


def get_notice(level: BatteryLevel) -> Notice:
    """Build the notice configured for a non-normal level."""
    entry = config.NOTIFICATIONS[level.value]
    return Notice(
        summary=entry["summary"],
        body=entry["body"],
        urgency=Urgency(entry["urgency"]),
        timeout=int(entry["timeout"]),
        icon=entry.get("icon", "battery-low-symbolic"),
    )


def find_supply_path(candidates: list) -> str:
    """
    Find the first existing power supply directory.

    Args:
        candidates: Directories to try, in order.

    Returns:
        The first directory that exists.

    Raises:
        BatteryReadError: If none of the candidates exist.
    """
    for path in candidates:
        if os.path.exists(path):
            return path
    raise BatteryReadError(f"No power supply found in {', '.join(candidates)}")


def _read_int(filepath: str) -> int:
    try:
        with open(filepath, 'r') as f:
            content = f.read().strip()
    except OSError as e:
        raise BatteryReadError(f"Cannot read {filepath}: {e}") from e

    try:
        return int(content)
    except ValueError as e:
        raise BatteryReadError(f"Unexpected content in {filepath}: {content!r}") from e


def read_capacity(filepath: str) -> int:
    """Read the battery charge percentage from a sysfs ``capacity`` file."""
    capacity = _read_int(filepath)
    if not 0 <= capacity <= 100:
        raise BatteryReadError(f"Capacity out of range in {filepath}: {capacity}")
    return capacity


def read_ac_online(filepath: str) -> bool:
    """Read whether the AC adapter is online from a sysfs ``online`` file."""
    return _read_int(filepath) != 0


@dataclass
class BatteryStatus:
    """Latest battery reading plus the level that was last notified."""

    battery_percentage: int = 0
    battery_level: BatteryLevel = BatteryLevel.NORMAL
    plugged_in: bool = False
    last_notif_level: Optional[BatteryLevel] = None

    def update(self, capacity_path: str, ac_path: str) -> None:
        """Refresh percentage, level and plugged-in state. Leaves the latch alone."""
        percentage = read_capacity(capacity_path)
        plugged_in = read_ac_online(ac_path)

        self.battery_percentage = percentage
        self.battery_level = classify(percentage)
        self.plugged_in = plugged_in
