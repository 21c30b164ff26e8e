"""Core verification engine: key building, path resolution, verification."""

from ocflverify.core.digest_cache import DigestCache, normalize_digest
from ocflverify.core.errors import (
    InventoryNotFoundError,
    InventoryParseError,
    OcflVerifyError,
)
from ocflverify.core.inventory_loader import InventoryLoader
from ocflverify.core.keys import build_key, reduce_key
from ocflverify.core.resolver import ManifestResolver, ResolvedEntry
from ocflverify.core.verifier import ErrorCollector, VerificationFailed, Verifier

__all__ = [
    "build_key",
    "reduce_key",
    "normalize_digest",
    "DigestCache",
    "InventoryLoader",
    "ManifestResolver",
    "ResolvedEntry",
    "ErrorCollector",
    "Verifier",
    "VerificationFailed",
    "OcflVerifyError",
    "InventoryNotFoundError",
    "InventoryParseError",
]
