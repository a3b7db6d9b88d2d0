"""Chained hash table mapping string keys to integer ids."""

from __future__ import annotations

import logging
import threading

logger = logging.getLogger(__name__)

#: Longest key accepted, in UTF-8 bytes.
MAX_KEY_SIZE = 127
#: Buckets per id in the range, keeping the load factor at one half.
LOAD_FACTOR = 2

_MASK_64 = (1 << 64) - 1


class KeyTooLongError(ValueError):
    """Raised for a key longer than :data:`MAX_KEY_SIZE` bytes."""


def _key_bytes(key: str) -> bytes:
    data = key.encode("utf-8")
    if len(data) > MAX_KEY_SIZE:
        raise KeyTooLongError(
            f"key of {len(data)} bytes is too long, max key size {MAX_KEY_SIZE}"
        )
    return data


def hash_key(key: str) -> int:
    """Position-weighted XOR hash of the key's bytes, as an unsigned 64-bit value."""
    total = 0
    for position, byte in enumerate(key.encode("utf-8"), start=1):
        signed = byte - 256 if byte >= 128 else byte
        total += (signed ^ 2) * position
    return total & _MASK_64


class KeyHashTable:
    """Thread-safe hash table whose buckets hold ``(key, id)`` pairs, newest first."""

    def __init__(self, range_: int) -> None:
        if range_ < 1:
            raise ValueError(f"range must be at least 1, got {range_}")
        self._buckets: list[list[tuple[str, int]]] = [
            [] for _ in range(range_ * LOAD_FACTOR)
        ]
        self._lock = threading.Lock()

    def index_of(self, key: str) -> int:
        """Bucket index for ``key``."""
        return hash_key(key) % len(self._buckets)

    def insert(self, key: str, id_: int) -> None:
        """Add ``key`` with ``id_`` at the front of its bucket."""
        _key_bytes(key)
        index = self.index_of(key)
        with self._lock:
            self._buckets[index].insert(0, (key, id_))

    def remove(self, key: str) -> None:
        """Remove the newest entry for ``key``; raise KeyError if there is none."""
        index = self.index_of(key)
        with self._lock:
            bucket = self._buckets[index]
            for position, (stored, _) in enumerate(bucket):
                if stored == key:
                    del bucket[position]
                    return
        logger.debug("entry %r not found", key)
        raise KeyError(key)

    def find(self, index: int, key: str) -> int | None:
        """Id stored for ``key`` in bucket ``index``, or None."""
        with self._lock:
            return next(
                (id_ for stored, id_ in self._buckets[index] if stored == key), None
            )

    def lookup(self, key: str) -> int | None:
        """Id stored for ``key``, or None."""
        return self.find(self.index_of(key), key)