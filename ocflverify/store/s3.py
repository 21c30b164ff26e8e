"""S3 object-store backend (boto3).

Reads inventories with ``GetObject`` and stored digests with
``HeadObject``.  Credentials, region and an optional endpoint override
(S3-compatible stores, local mocks) come from :class:`ProdConfig`.
"""

from __future__ import annotations

import logging
from typing import Any

import boto3
from botocore.config import Config as BotoConfig
from botocore.exceptions import BotoCoreError, ClientError

from ocflverify.config import ProdConfig
from ocflverify.store.base import (
    ObjectAccessDeniedError,
    ObjectMetadata,
    ObjectNotFoundError,
    ObjectStoreError,
)

logger = logging.getLogger(__name__)

_NOT_FOUND_CODES = {"NoSuchKey", "404", "NotFound"}
_ACCESS_DENIED_CODES = {"AccessDenied", "403", "Forbidden"}


def _error_code(err: ClientError) -> str:
    return str(err.response.get("Error", {}).get("Code", ""))


def _translate(err: Exception, operation: str, key: str) -> ObjectStoreError:
    """Map a botocore failure onto the store exception hierarchy."""
    if isinstance(err, ClientError):
        code = _error_code(err)
        if code in _NOT_FOUND_CODES:
            return ObjectNotFoundError(f"{operation} {key}: object not found: {err}")
        if code in _ACCESS_DENIED_CODES:
            return ObjectAccessDeniedError(f"{operation} {key}: access denied: {err}")
    return ObjectStoreError(f"{operation} {key}: {err}")


class S3ObjectStore:
    """Read-only access to one S3 bucket.

    Parameters
    ----------
    bucket:
        Bucket holding the OCFL storage root.
    client:
        A boto3 S3 client.  Use :meth:`from_config` to build one from
        settings; tests pass a stubbed client directly.
    """

    def __init__(self, bucket: str, client: Any) -> None:
        self.bucket = bucket
        self._s3 = client

    @classmethod
    def from_config(cls, config: ProdConfig) -> S3ObjectStore:
        """Build a store and its client from production settings."""
        session_kwargs: dict[str, Any] = {"region_name": config.region}
        if config.access_key_id:
            session_kwargs["aws_access_key_id"] = config.access_key_id
            session_kwargs["aws_secret_access_key"] = config.secret_access_key
        session = boto3.Session(**session_kwargs)

        endpoint_url = config.endpoint_override or None
        if endpoint_url:
            logger.info("Object store endpoint override: %s", endpoint_url)

        client = session.client(
            "s3",
            region_name=config.region,
            endpoint_url=endpoint_url,
            config=BotoConfig(
                connect_timeout=config.connect_timeout,
                read_timeout=config.read_timeout,
                retries={"max_attempts": config.max_attempts, "mode": "standard"},
            ),
        )
        return cls(config.bucket_name, client)

    # ------------------------------------------------------------------
    # ObjectStore protocol
    # ------------------------------------------------------------------

    def fetch(self, key: str) -> bytes:
        """Download the object stored under *key*."""
        try:
            resp = self._s3.get_object(Bucket=self.bucket, Key=key)
            body = resp["Body"]
            try:
                return body.read()
            finally:
                body.close()
        except (ClientError, BotoCoreError) as exc:
            raise _translate(exc, "GetObject", key) from exc

    def head_metadata(self, key: str) -> ObjectMetadata:
        """Return the ETag, size and content type stored under *key*."""
        try:
            resp = self._s3.head_object(Bucket=self.bucket, Key=key)
        except (ClientError, BotoCoreError) as exc:
            raise _translate(exc, "HeadObject", key) from exc

        etag = resp.get("ETag")
        if not isinstance(etag, str) or not etag:
            raise ObjectStoreError(f"HeadObject {key}: response carries no ETag")
        return ObjectMetadata(
            content_digest=etag,
            content_length=int(resp.get("ContentLength", 0)),
            content_type=str(resp.get("ContentType", "")),
        )
