# renderer/pixel_manager.py
import logging
import threading
import time
from typing import Optional, Tuple

logger = logging.getLogger(__name__)


class PixelManager:
    """
    Hands out pixel coordinates to render workers and tracks progress.

    Both counters are shared between workers and only touched under a lock.
    Progress is logged at most once per `print_interval` seconds; 0 disables
    the report.
    """
    def __init__(self, nx: int, ny: int, print_interval: float = 0.0):
        self.nx = nx
        self.ny = ny
        self.total = nx * ny
        self.print_interval = print_interval
        self._lock = threading.Lock()
        self._next = 0
        self._done = 0
        self._last_print = time.monotonic()

    @property
    def done(self) -> int:
        with self._lock:
            return self._done

    def next_pixel(self) -> Optional[Tuple[int, int]]:
        """
        Returns the next (col, row) to render, or None when all are taken.
        """
        with self._lock:
            if self._next >= self.total:
                return None
            index = self._next
            self._next += 1
        return index % self.nx, index // self.nx

    def pixel_done(self):
        report = None
        with self._lock:
            self._done += 1
            if self.print_interval > 0:
                now = time.monotonic()
                if now - self._last_print >= self.print_interval or self._done == self.total:
                    self._last_print = now
                    report = self._done
        if report is not None:
            logger.info("Rendered %d/%d pixels (%.1f%%)",
                        report, self.total, 100.0 * report / self.total)
