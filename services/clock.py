"""
Host clock for the HTTP adapter.

Timestamps are integer milliseconds since the epoch, the same unit a
block timestamp uses. The clock never goes backwards within a process.
"""
import threading
import time
from typing import Callable


class MonotonicClock:
     """Wall-clock milliseconds clamped to be non-decreasing."""

     def __init__(self, source: Callable[[], float] = time.time):
          self._source = source
          self._last = 0
          self._lock = threading.Lock()

     def now(self) -> int:
          with self._lock:
               current = max(int(self._source() * 1000), self._last)
               self._last = current
               return current
