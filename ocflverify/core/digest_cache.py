"""Process-wide, single-flight cache of stored object digests.

Physical keys are content-addressed and immutable once written, so a
digest, once read, is cached for the life of the process.  Concurrent
lookups of the same key share one in-flight request; failures are
handed to every waiter and not cached.
"""

from __future__ import annotations

import logging
import threading
from concurrent.futures import Future

from ocflverify.store.base import ObjectStore

logger = logging.getLogger(__name__)


def normalize_digest(value: str) -> str:
    """Strip one leading and one trailing double quote (S3 ETag style)."""
    value = value.removeprefix('"')
    return value.removesuffix('"')


class DigestCache:
    """Caches ``head_metadata(key).content_digest`` per physical key.

    Parameters
    ----------
    store:
        Backend queried on a cache miss.
    """

    def __init__(self, store: ObjectStore) -> None:
        self._store = store
        self._lock = threading.Lock()
        self._entries: dict[str, Future[str]] = {}

    def __len__(self) -> int:
        with self._lock:
            return sum(1 for f in self._entries.values() if f.done())

    def get(self, key: str) -> str:
        """Return the normalized digest stored under *key*.

        Raises whatever the store raised when the lookup failed.
        """
        with self._lock:
            future = self._entries.get(key)
            owner = future is None
            if owner:
                future = Future()
                self._entries[key] = future

        if not owner:
            return future.result()

        try:
            digest = normalize_digest(self._store.head_metadata(key).content_digest)
        except BaseException as exc:
            with self._lock:
                self._entries.pop(key, None)
            future.set_exception(exc)
            raise
        future.set_result(digest)
        logger.debug("Cached digest for %s", key)
        return digest

    def clear(self) -> None:
        """Drop every completed entry."""
        with self._lock:
            self._entries = {k: f for k, f in self._entries.items() if not f.done()}
