"""ocflverify: checksum verification for OCFL objects in an object store.

Resolves caller paths (current, suffix or historical logical paths)
against an object's versioned inventory and compares caller checksums
with the digests the object store reports:
  - strict ingest mode: every head-state path must be accounted for
  - relaxed update mode: only the supplied paths are checked
  - concurrent per-path fan-out with a single-flight digest cache
  - S3 backend (boto3), Starlette HTTP surface, Typer CLI
"""

__version__ = "0.1.0"
__description__ = "Checksum verification of OCFL objects held in an object store"

from ocflverify.core.verifier import VerificationFailed, Verifier
from ocflverify.models.inventory import OcflInventory

__all__ = ["Verifier", "VerificationFailed", "OcflInventory", "__version__"]
