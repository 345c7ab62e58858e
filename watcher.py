"""Content-comparing file watcher, polled from a GLib timeout."""

import logging
from typing import Callable, Optional

logger = logging.getLogger(__name__)


class FileWatcher:
    """
    Detects changes to a file by comparing its contents on every poll.

    sysfs attributes do not emit inotify events, so the file is read on
    each poll and compared against the previous read.
    """

    def __init__(
        self,
        path: str,
        on_change: Callable[[], None],
        on_error: Optional[Callable[[OSError], None]] = None,
    ) -> None:
        self.path = path
        self.on_change = on_change
        self.on_error = on_error
        self._last_contents: Optional[bytes] = None
        self._failing: bool = False

    def poll(self) -> bool:
        """
        Read the file once and report a change or a watch error.

        Returns:
            True to continue the timeout.
        """
        try:
            with open(self.path, 'rb') as f:
                contents = f.read()
        except OSError as e:
            # Only the first error of a streak is reported
            if self._failing:
                logger.debug("Watch error on %s: %s", self.path, e)
            elif self.on_error is not None:
                self.on_error(e)
            else:
                logger.error("Watch error on %s: %s", self.path, e)
            self._failing = True
            return True

        if self._failing:
            logger.info("%s is readable again", self.path)
            self._failing = False

        if contents != self._last_contents:
            self._last_contents = contents
            self.on_change()
        return True
