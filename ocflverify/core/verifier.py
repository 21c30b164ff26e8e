"""Verification engine — reconciles caller checksums with stored digests.

Two modes share one pipeline:

    load inventory -> fan out one unit per expected path
        -> resolve path -> build key -> stored digest -> compare
            -> (ingest only) sweep head state for unclaimed paths
                -> raise VerificationFailed if any error was recorded

Units are independent.  A failure fetching one path's digest becomes that
path's error entry and never aborts its siblings.  Request-level failures
(inventory missing or malformed) propagate before any unit runs.
"""

from __future__ import annotations

import logging
import threading
from collections.abc import Mapping
from concurrent.futures import ThreadPoolExecutor
from typing import Any

from ocflverify.core.digest_cache import DigestCache
from ocflverify.core.errors import OcflVerifyError
from ocflverify.core.inventory_loader import InventoryLoader
from ocflverify.core.keys import build_key
from ocflverify.core.resolver import ManifestResolver
from ocflverify.models.errors import ErrorKind, VerificationError
from ocflverify.models.inventory import OcflInventory
from ocflverify.store.base import ObjectStore

logger = logging.getLogger(__name__)


class VerificationFailed(OcflVerifyError):
    """Raised when at least one path failed verification.

    ``errors`` maps each failing logical path to its single error entry.
    """

    def __init__(self, errors: dict[str, VerificationError]) -> None:
        super().__init__(f"Verification failed for {len(errors)} path(s)")
        self.errors = errors

    def to_dict(self) -> dict[str, dict[str, Any]]:
        return {path: error.to_dict() for path, error in sorted(self.errors.items())}


class ErrorCollector:
    """Thread-safe path -> error map; the first error recorded for a path wins."""

    def __init__(self) -> None:
        self._errors: dict[str, VerificationError] = {}
        self._lock = threading.Lock()

    def add(self, path: str, error: VerificationError) -> None:
        with self._lock:
            self._errors.setdefault(path, error)

    def __bool__(self) -> bool:
        with self._lock:
            return bool(self._errors)

    def snapshot(self) -> dict[str, VerificationError]:
        with self._lock:
            return dict(self._errors)


class Verifier:
    """Verifies caller checksums for one OCFL object per call.

    Parameters
    ----------
    store:
        Object-store backend holding the OCFL objects.
    loader:
        Inventory loader; defaults to one reading ``inventory.json`` from
        *store*.
    digest_cache:
        Shared digest cache; defaults to a new cache over *store*.  Pass
        one instance to every verifier in the process to share it.
    max_workers:
        Size of the per-call thread pool.
    """

    def __init__(
        self,
        store: ObjectStore,
        *,
        loader: InventoryLoader | None = None,
        digest_cache: DigestCache | None = None,
        max_workers: int = 8,
    ) -> None:
        if max_workers < 1:
            raise ValueError(f"max_workers must be at least 1, got {max_workers}")
        self._loader = loader or InventoryLoader(store)
        self._digests = digest_cache or DigestCache(store)
        self._max_workers = max_workers

    # ------------------------------------------------------------------
    # Public operations
    # ------------------------------------------------------------------

    def verify_ingest(self, object_id: int, expected: Mapping[str, str]) -> OcflInventory:
        """Strict mode: every path of the head state must be accounted for.

        Raises
        ------
        VerificationFailed
            With mismatches, fetch failures, unknown paths and head-state
            paths missing from *expected*.
        InventoryNotFoundError, InventoryParseError, ObjectStoreError
            Request-level failures.
        """
        logger.info("Verifying ingest of object %s (%d paths)", object_id, len(expected))
        return self._verify(object_id, expected, update=False)

    def verify_update(self, object_id: int, expected: Mapping[str, str]) -> OcflInventory:
        """Relaxed mode: only the supplied paths are checked."""
        logger.info("Verifying update of object %s (%d paths)", object_id, len(expected))
        return self._verify(object_id, expected, update=True)

    # ------------------------------------------------------------------
    # Pipeline
    # ------------------------------------------------------------------

    def _verify(
        self,
        object_id: int,
        expected: Mapping[str, str],
        *,
        update: bool,
    ) -> OcflInventory:
        inventory = self._loader.load(object_id)
        inputs = dict(expected)
        resolver = ManifestResolver(inventory)
        errors = ErrorCollector()

        if inputs:
            workers = min(self._max_workers, len(inputs))
            with ThreadPoolExecutor(max_workers=workers, thread_name_prefix="verify") as pool:
                futures = [
                    pool.submit(
                        self._check_path,
                        object_id,
                        resolver,
                        path,
                        digest,
                        errors,
                        update,
                    )
                    for path, digest in inputs.items()
                ]
                for future in futures:
                    future.result()

        if not update:
            for path in sorted(inventory.head_paths() - inputs.keys()):
                errors.add(path, VerificationError.from_message(ErrorKind.MISSING_INPUT))

        if errors:
            failed = errors.snapshot()
            logger.warning(
                "Object %s failed %s verification: %d error(s)",
                object_id,
                "update" if update else "ingest",
                len(failed),
            )
            raise VerificationFailed(failed)

        logger.info("Object %s verified (%d paths)", object_id, len(inputs))
        return inventory

    def _check_path(
        self,
        object_id: int,
        resolver: ManifestResolver,
        path: str,
        expected: str,
        errors: ErrorCollector,
        update: bool,
    ) -> None:
        """One unit of work: resolve, fetch, compare."""
        entry = None
        if not update or resolver.inventory.exists(path):
            entry = resolver.resolve(path)
        if entry is None:
            errors.add(path, VerificationError.from_message(ErrorKind.NOT_FOUND))
            return

        key = build_key(object_id, entry.stored_location)
        try:
            actual = self._digests.get(key)
        except Exception as exc:  # noqa: BLE001
            logger.error("Failed to get head object of manifest entry %s: %s", key, exc)
            errors.add(path, VerificationError.from_message(str(exc)))
            return

        if expected != actual:
            logger.debug("Checksum mismatch for %s: expected=%s actual=%s", path, expected, actual)
            errors.add(path, VerificationError.mismatch(expected, actual))
