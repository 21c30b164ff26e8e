"""Object-store read access — the protocol the verification engine consumes.

Any object with ``fetch(key)`` and ``head_metadata(key)`` satisfies
:class:`ObjectStore`.  Backends translate their native failures into the
exception hierarchy below so callers never depend on a client library.
"""

from __future__ import annotations

from typing import Protocol, runtime_checkable

from pydantic import BaseModel, ConfigDict


class ObjectStoreError(RuntimeError):
    """Raised when an object-store request fails."""


class ObjectNotFoundError(ObjectStoreError):
    """Raised when the requested key does not exist."""


class ObjectAccessDeniedError(ObjectStoreError):
    """Raised when the store refuses access to the requested key."""


class ObjectMetadata(BaseModel):
    """Stored metadata of one object, retrieved without its content.

    ``content_digest`` is reported as the store hands it over — S3 ETags
    arrive wrapped in double quotes.
    """

    model_config = ConfigDict(frozen=True)

    content_digest: str
    content_length: int = 0
    content_type: str = ""


@runtime_checkable
class ObjectStore(Protocol):
    """Protocol for read-only object-store backends."""

    def fetch(self, key: str) -> bytes:
        """Return the full content stored under *key*.

        Raises
        ------
        ObjectNotFoundError
            If *key* does not exist.
        ObjectStoreError
            For any other failure.
        """
        ...

    def head_metadata(self, key: str) -> ObjectMetadata:
        """Return the metadata stored under *key* without its content."""
        ...
