"""Builds the store and verifier the CLI commands run against."""

from __future__ import annotations

from ocflverify.config import config
from ocflverify.core.inventory_loader import InventoryLoader
from ocflverify.core.verifier import Verifier
from ocflverify.store.base import ObjectStore
from ocflverify.store.s3 import S3ObjectStore


def build_store() -> ObjectStore:
    return S3ObjectStore.from_config(config)


def build_loader(store: ObjectStore | None = None) -> InventoryLoader:
    return InventoryLoader(store or build_store(), config.inventory_name)


def build_verifier() -> Verifier:
    store = build_store()
    return Verifier(
        store,
        loader=build_loader(store),
        max_workers=config.max_workers,
    )
