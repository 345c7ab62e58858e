from collections.abc import Callable
from pathlib import Path
from typing import Any

import pytest

from battery_monitor import BatteryMonitor
from battery_status import Notice


class FakeNotifier:
    def __init__(self) -> None:
        self.shown: list[tuple[Notice, str, Any]] = []
        self.closed: list[int] = []

    def show(self, notice: Notice, body: str, actions: Any = None) -> int:
        self.shown.append((notice, body, actions))
        return len(self.shown) - 1

    def close(self, handle: int) -> None:
        self.closed.append(handle)

    @property
    def summaries(self) -> list[str]:
        return [notice.summary for notice, _, _ in self.shown]


class FakeScheduler:
    def __init__(self) -> None:
        self.pending: dict[int, tuple[int, Callable[[], None]]] = {}
        self.cancelled: list[int] = []
        self._next_id = 1

    def schedule(self, delay: int, callback: Callable[[], None]) -> int:
        handle = self._next_id
        self._next_id += 1
        self.pending[handle] = (delay, callback)
        return handle

    def cancel(self, handle: int) -> None:
        del self.pending[handle]
        self.cancelled.append(handle)

    def run_pending(self) -> None:
        for handle in list(self.pending):
            _, callback = self.pending.pop(handle)
            callback()


class SysfsBattery:
    """Writable stand-in for the battery ``capacity`` and adapter ``online`` files."""

    def __init__(self, root: Path) -> None:
        self.capacity_path = root / "BAT0" / "capacity"
        self.ac_path = root / "ADP1" / "online"
        self.capacity_path.parent.mkdir()
        self.ac_path.parent.mkdir()
        self.set(50, plugged_in=False)

    def set(self, capacity: Any, plugged_in: bool = False) -> None:
        self.capacity_path.write_text(f"{capacity}\n")
        self.ac_path.write_text("1\n" if plugged_in else "0\n")


@pytest.fixture
def battery(tmp_path: Path) -> SysfsBattery:
    return SysfsBattery(tmp_path)


@pytest.fixture
def notifier() -> FakeNotifier:
    return FakeNotifier()


@pytest.fixture
def scheduler() -> FakeScheduler:
    return FakeScheduler()


@pytest.fixture
def shutdowns() -> list[str]:
    return []


@pytest.fixture
def monitor(
    battery: SysfsBattery,
    notifier: FakeNotifier,
    scheduler: FakeScheduler,
    shutdowns: list[str],
) -> BatteryMonitor:
    return BatteryMonitor(
        str(battery.capacity_path),
        str(battery.ac_path),
        notifier,
        scheduler,
        shutdown=lambda: shutdowns.append("poweroff"),
    )
