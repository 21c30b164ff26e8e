"""Dict-backed object store for tests and local demos."""

from __future__ import annotations

import threading

from ocflverify.store.base import ObjectMetadata, ObjectNotFoundError


class InMemoryObjectStore:
    """Keeps objects and their digests in memory.

    Digests are supplied by the caller and reported ETag-style, wrapped in
    double quotes, the way S3 reports them.  ``head_calls`` counts
    ``head_metadata`` requests per key.
    """

    def __init__(self) -> None:
        self._objects: dict[str, tuple[bytes, str, str]] = {}
        self._lock = threading.Lock()
        self.head_calls: dict[str, int] = {}

    def put(
        self,
        key: str,
        data: bytes,
        digest: str,
        *,
        content_type: str = "application/octet-stream",
    ) -> None:
        with self._lock:
            self._objects[key] = (data, digest, content_type)

    def delete(self, key: str) -> None:
        with self._lock:
            self._objects.pop(key, None)

    def keys(self) -> list[str]:
        with self._lock:
            return sorted(self._objects)

    def fetch(self, key: str) -> bytes:
        with self._lock:
            stored = self._objects.get(key)
        if stored is None:
            raise ObjectNotFoundError(f"GetObject {key}: object not found")
        return stored[0]

    def head_metadata(self, key: str) -> ObjectMetadata:
        with self._lock:
            self.head_calls[key] = self.head_calls.get(key, 0) + 1
            stored = self._objects.get(key)
        if stored is None:
            raise ObjectNotFoundError(f"HeadObject {key}: object not found")
        data, digest, content_type = stored
        return ObjectMetadata(
            content_digest=f'"{digest}"',
            content_length=len(data),
            content_type=content_type,
        )
