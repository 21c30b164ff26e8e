"""Per-path verification error entries."""

from __future__ import annotations

from typing import Any

from pydantic import BaseModel, ConfigDict


class ErrorKind:
    """Messages carried by the non-transport error entries."""

    CHECKSUM_MISMATCH = "Checksums do not match"
    MISSING_INPUT = "Missing input checksum"
    NOT_FOUND = "Not found in inventory manifest"


class VerificationError(BaseModel):
    """One path's verification failure.

    ``expected`` and ``actual`` are only set for checksum mismatches; fetch
    failures carry the underlying exception message as ``error``.
    """

    model_config = ConfigDict(frozen=True)

    error: str
    expected: str | None = None
    actual: str | None = None

    @classmethod
    def mismatch(cls, expected: str, actual: str) -> VerificationError:
        return cls(error=ErrorKind.CHECKSUM_MISMATCH, expected=expected, actual=actual)

    @classmethod
    def from_message(cls, message: str) -> VerificationError:
        return cls(error=message)

    def to_dict(self) -> dict[str, Any]:
        """JSON shape with inapplicable fields omitted."""
        return self.model_dump(exclude_none=True)
