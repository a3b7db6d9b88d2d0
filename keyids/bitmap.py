"""Round-robin id allocation over a bit array, with a cool-off before reuse."""

from __future__ import annotations

import logging
import threading
import time
from collections.abc import Callable

logger = logging.getLogger(__name__)

#: Microseconds a freed id must rest before it may be handed out again.
COOL_OFF_US = 3_000_000


class NoIdsAvailableError(RuntimeError):
    """Raised when every id in the range is in use or still cooling off."""


def now_us() -> int:
    """Return the current wall-clock time in microseconds."""
    return time.time_ns() // 1000


class IdBitmap:
    """Hands out ids from 1 to ``range_`` in round-robin order.

    Id 0 is reserved and never handed out. A freed id is not reused until
    more than :data:`COOL_OFF_US` microseconds have passed, as measured by
    ``clock``.
    """

    def __init__(self, range_: int, clock: Callable[[], int] | None = None) -> None:
        if range_ < 1:
            raise ValueError(f"range must be at least 1, got {range_}")
        self._capacity = range_ + 1
        self._bits = bytearray((self._capacity + 7) // 8)
        self._freed_at: list[int | None] = [None] * self._capacity
        self._clock = clock if clock is not None else now_us
        self._next_free = 0
        self._count = 0
        self._lock = threading.Lock()
        self._try_set(0)

    @staticmethod
    def _locate(id_: int) -> tuple[int, int]:
        return id_ >> 3, 1 << (id_ & 7)

    def _test(self, id_: int) -> bool:
        byte, mask = self._locate(id_)
        return bool(self._bits[byte] & mask)

    def _try_set(self, id_: int) -> bool:
        if self._test(id_):
            return False
        freed_at = self._freed_at[id_]
        if freed_at is not None and self._clock() - freed_at <= COOL_OFF_US:
            return False
        byte, mask = self._locate(id_)
        self._bits[byte] |= mask
        return True

    def allocate(self) -> int:
        """Take the next free id after the last one handed out."""
        with self._lock:
            if self._count == self._capacity - 1:
                raise NoIdsAvailableError("no ids available")
            for offset in range(self._capacity):
                index = (self._next_free + offset) % self._capacity
                if self._try_set(index):
                    self._count += 1
                    self._next_free = (index + 1) % self._capacity
                    logger.debug("allocated id %d", index)
                    return index
        raise NoIdsAvailableError("no ids available: all free ids are cooling off")

    def free(self, id_: int) -> None:
        """Release ``id_`` and start its cool-off period."""
        if not 1 <= id_ < self._capacity:
            raise ValueError(f"id {id_} is outside 1..{self._capacity - 1}")
        with self._lock:
            if not self._test(id_):
                raise ValueError(f"id {id_} is already free")
            byte, mask = self._locate(id_)
            self._bits[byte] &= ~mask & 0xFF
            self._count -= 1
            self._freed_at[id_] = self._clock()
            logger.debug("freed id %d", id_)

    def is_set(self, id_: int) -> bool:
        """Tell whether ``id_`` is currently taken (id 0 always is)."""
        if not 0 <= id_ < self._capacity:
            raise ValueError(f"id {id_} is outside 0..{self._capacity - 1}")
        with self._lock:
            return self._test(id_)

    def __len__(self) -> int:
        """Number of ids currently allocated, not counting the reserved id 0."""
        return self._count