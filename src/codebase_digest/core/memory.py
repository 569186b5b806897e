"""
Memory ceiling enforcement during context assembly.

The default probe reports the Python heap allocations traced by
``tracemalloc``. Tracing is switched on for the assembly phase only, so the
measurement covers what the analysis itself holds (file contents and the
growing context), not the interpreter and its imported libraries.
"""

import logging
import threading
import tracemalloc
from contextlib import contextmanager
from typing import Callable, Iterator, Optional

from .exceptions import MemoryLimitExceededError

logger = logging.getLogger(__name__)

MemoryProbe = Callable[[], int]

BYTES_PER_MB = 1024 * 1024

# Open tracking windows across all guards; tracing stops when the last closes
_tracking_lock = threading.Lock()
_open_windows = 0
_owns_tracing = False


def traced_heap_bytes() -> int:
    """Bytes currently allocated by Python code, or 0 when tracing is off."""
    if not tracemalloc.is_tracing():
        return 0
    current, _peak = tracemalloc.get_traced_memory()
    return current


class MemoryGuard:
    """Aborts an analysis once measured heap usage passes a ceiling."""

    def __init__(self, limit_mb: float, probe: Optional[MemoryProbe] = None):
        """
        Args:
            limit_mb: Ceiling in megabytes.
            probe: Callable returning current heap usage in bytes. Defaults
                to tracemalloc's traced memory.
        """
        self.limit_mb = limit_mb
        self.probe = probe or traced_heap_bytes

    @contextmanager
    def tracking(self) -> Iterator["MemoryGuard"]:
        """
        Keep tracemalloc running for the enclosed block.

        Windows from several guards may overlap; tracing stops only when the
        last one closes, and never if something else had started it.
        """
        if self.probe is not traced_heap_bytes:
            yield self
            return

        global _open_windows, _owns_tracing
        with _tracking_lock:
            if _open_windows == 0:
                _owns_tracing = not tracemalloc.is_tracing()
                if _owns_tracing:
                    tracemalloc.start()
            _open_windows += 1
        try:
            yield self
        finally:
            with _tracking_lock:
                _open_windows -= 1
                if _open_windows == 0 and _owns_tracing:
                    tracemalloc.stop()
                    _owns_tracing = False

    def used_mb(self) -> float:
        return self.probe() / BYTES_PER_MB

    def check(self) -> None:
        """
        Raise if current usage exceeds the limit.

        Raises:
            MemoryLimitExceededError: With the measured and configured values.
        """
        used = self.used_mb()
        if used > self.limit_mb:
            logger.error(
                f"Memory limit exceeded: {used:.2f} MB used, limit is {self.limit_mb} MB."
            )
            raise MemoryLimitExceededError(used, self.limit_mb)
