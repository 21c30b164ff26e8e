"""Object-store backends.

Backends implement the :class:`ObjectStore` protocol:

- :class:`S3ObjectStore` — boto3 against an S3 or S3-compatible bucket.
- :class:`InMemoryObjectStore` — dict-backed, for tests and demos.
"""

from ocflverify.store.base import (
    ObjectAccessDeniedError,
    ObjectMetadata,
    ObjectNotFoundError,
    ObjectStore,
    ObjectStoreError,
)
from ocflverify.store.memory import InMemoryObjectStore
from ocflverify.store.s3 import S3ObjectStore

__all__ = [
    "ObjectStore",
    "ObjectMetadata",
    "ObjectStoreError",
    "ObjectNotFoundError",
    "ObjectAccessDeniedError",
    "InMemoryObjectStore",
    "S3ObjectStore",
]
