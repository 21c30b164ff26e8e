"""Fetch and parse an object's OCFL inventory from the object store."""

from __future__ import annotations

import logging

from pydantic import ValidationError

from ocflverify.core.errors import InventoryNotFoundError, InventoryParseError
from ocflverify.core.keys import build_key
from ocflverify.models.inventory import OcflInventory
from ocflverify.store.base import ObjectNotFoundError, ObjectStore

logger = logging.getLogger(__name__)


class InventoryLoader:
    """Loads ``{shard}/{shard}/{id}/inventory.json`` into an :class:`OcflInventory`.

    Parameters
    ----------
    store:
        Backend the inventory is read from.
    inventory_name:
        File name of the inventory at the object root.
    """

    def __init__(self, store: ObjectStore, inventory_name: str = "inventory.json") -> None:
        self._store = store
        self._inventory_name = inventory_name

    def key_for(self, object_id: int) -> str:
        return build_key(object_id, self._inventory_name)

    def load(self, object_id: int) -> OcflInventory:
        """Fetch and validate the inventory of *object_id*.

        Raises
        ------
        InventoryNotFoundError
            If the store has no inventory for *object_id*.
        InventoryParseError
            If the document is not valid JSON or violates the schema.
        ObjectStoreError
            For any other store failure.
        """
        key = self.key_for(object_id)
        try:
            raw = self._store.fetch(key)
        except ObjectNotFoundError as exc:
            raise InventoryNotFoundError(object_id, key) from exc

        try:
            inventory = OcflInventory.model_validate_json(raw)
        except ValidationError as exc:
            logger.error("Inventory %s failed validation: %s", key, exc)
            raise InventoryParseError(
                f"Inventory for object {object_id} at {key} is invalid: "
                f"{exc.error_count()} error(s); first: {exc.errors()[0]['msg']}"
            ) from exc

        logger.info(
            "Loaded inventory %s: head=%s versions=%d manifest=%d",
            inventory.id,
            inventory.head,
            len(inventory.versions),
            len(inventory.manifest),
        )
        return inventory
