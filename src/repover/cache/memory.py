"""In-memory record cache keyed by repository path."""

import threading
from collections.abc import Callable

import structlog

from repover.core.models.repository import RepositoryRecord

logger = structlog.get_logger(__name__)


class InMemoryRecordCache:
    """Unbounded cache of RepositoryRecord snapshots.

    Entries never expire; only ``invalidate`` or ``clear`` removes them.
    A lock per key makes ``get_or_compute`` compute a key at most once
    between invalidations, even with concurrent callers. Each key also
    carries a generation bumped on invalidation: a record computed across
    an invalidation is returned to its caller but never stored.
    """

    def __init__(self) -> None:
        self._records: dict[str, RepositoryRecord] = {}
        self._generations: dict[str, int] = {}
        self._lock = threading.Lock()
        self._key_locks: dict[str, threading.Lock] = {}

    def __contains__(self, path: object) -> bool:
        with self._lock:
            return path in self._records

    def __len__(self) -> int:
        with self._lock:
            return len(self._records)

    def get(self, path: str) -> RepositoryRecord | None:
        with self._lock:
            return self._records.get(path)

    def set(self, path: str, record: RepositoryRecord) -> None:
        with self._lock:
            self._records[path] = record

    def get_or_compute(
        self, path: str, compute: Callable[[], RepositoryRecord]
    ) -> RepositoryRecord:
        """Return the cached record or compute, store and return it."""
        record = self.get(path)
        if record is not None:
            return record

        with self._key_lock(path):
            with self._lock:
                # Another caller may have filled the entry while we waited
                record = self._records.get(path)
                generation = self._generations.get(path, 0)
            if record is not None:
                return record

            record = compute()
            with self._lock:
                if self._generations.get(path, 0) == generation:
                    self._records[path] = record
                    logger.debug("Cache populated", path=path)
                else:
                    logger.debug("Discarding record computed across invalidation", path=path)
            return record

    def invalidate(self, path: str) -> bool:
        """Drop the entry for ``path``; returns whether one existed."""
        with self._lock:
            self._generations[path] = self._generations.get(path, 0) + 1
            removed = self._records.pop(path, None) is not None
        if removed:
            logger.debug("Cache invalidated", path=path)
        return removed

    def clear(self) -> None:
        with self._lock:
            for path in set(self._records) | set(self._key_locks):
                self._generations[path] = self._generations.get(path, 0) + 1
            self._records.clear()

    def _key_lock(self, path: str) -> threading.Lock:
        with self._lock:
            return self._key_locks.setdefault(path, threading.Lock())
