"""ocflverify data models — all Pydantic v2, all frozen (immutable)."""

from ocflverify.models.errors import ErrorKind, VerificationError
from ocflverify.models.inventory import (
    OcflInventory,
    OcflUser,
    OcflVersion,
    version_sort_key,
)

__all__ = [
    # inventory
    "OcflInventory",
    "OcflUser",
    "OcflVersion",
    "version_sort_key",
    # errors
    "ErrorKind",
    "VerificationError",
]
