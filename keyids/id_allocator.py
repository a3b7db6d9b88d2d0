"""Allocate small integer ids for string keys and look them up both ways."""

from __future__ import annotations

import logging
import threading
from collections.abc import Callable, Iterator

from keyids.bitmap import IdBitmap
from keyids.hashmap import MAX_KEY_SIZE, KeyHashTable, KeyTooLongError

logger = logging.getLogger(__name__)

MIN_ID = 1
MAX_ID = 2000


class InvalidIdError(ValueError):
    """Raised for an id outside ``MIN_ID..MAX_ID``."""


class UnknownIdError(LookupError):
    """Raised for an id that has no key assigned."""


class IdAllocator:
    """Gives each distinct key a unique id and remembers the mapping."""

    def __init__(
        self,
        range_: int = MAX_ID - MIN_ID + 1,
        clock: Callable[[], int] | None = None,
    ) -> None:
        if not 1 <= range_ <= MAX_ID - MIN_ID + 1:
            raise ValueError(f"range must be within 1..{MAX_ID - MIN_ID + 1}")
        self._table = KeyHashTable(range_)
        self._bitmap = IdBitmap(range_, clock)
        self._keys: dict[int, str] = {}
        self._lock = threading.Lock()

    @staticmethod
    def _check_id(id_: int) -> None:
        if not MIN_ID <= id_ <= MAX_ID:
            raise InvalidIdError(f"invalid id {id_}")

    def create(self, key: str) -> int:
        """Return the id for ``key``, allocating a new one if it has none."""
        if len(key.encode("utf-8")) > MAX_KEY_SIZE:
            raise KeyTooLongError(
                f"invalid key size, max allowed key size {MAX_KEY_SIZE}"
            )
        if not key:
            raise ValueError("key must not be empty")
        with self._lock:
            existing = self._table.lookup(key)
            if existing is not None:
                logger.info("entry already exists with id %d", existing)
                return existing
            id_ = self._bitmap.allocate()
            self._table.insert(key, id_)
            self._keys[id_] = key
        logger.info("created id %d for key %s", id_, key)
        return id_

    def delete(self, id_: int) -> None:
        """Release ``id_`` and forget its key."""
        self._check_id(id_)
        with self._lock:
            try:
                key = self._keys.pop(id_)
            except KeyError:
                raise UnknownIdError(f"id {id_} doesn't exist") from None
            self._table.remove(key)
            self._bitmap.free(id_)

    def query(self, id_: int) -> str:
        """Key assigned to ``id_``."""
        self._check_id(id_)
        with self._lock:
            try:
                return self._keys[id_]
            except KeyError:
                raise UnknownIdError(f"id {id_} doesn't exist") from None

    def items(self) -> Iterator[tuple[int, str]]:
        """Yield ``(id, key)`` pairs in ascending id order."""
        with self._lock:
            snapshot = sorted(self._keys.items())
        yield from snapshot

    def format_all(self) -> str:
        """All assignments, one ``"<id> <key>"`` line each."""
        return "".join(f"{id_} {key}\n" for id_, key in self.items())