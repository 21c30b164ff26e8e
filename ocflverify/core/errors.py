"""Request-level failures — raised before any per-path work begins."""

from __future__ import annotations


class OcflVerifyError(RuntimeError):
    """Base class for request-level verification failures."""


class InventoryNotFoundError(OcflVerifyError):
    """Raised when no inventory exists for the requested object id."""

    def __init__(self, object_id: int, key: str) -> None:
        super().__init__(f"Inventory for object {object_id} not found at {key}")
        self.object_id = object_id
        self.key = key


class InventoryParseError(OcflVerifyError):
    """Raised when an inventory document is malformed or violates the schema."""
