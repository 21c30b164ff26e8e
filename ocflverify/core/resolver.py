"""Path resolution against an inventory's manifest and version history.

A caller path may be a suffix of a physical manifest location
(``data/a.txt`` for ``v00001/content/data/a.txt``) or a logical path that
only appears in some version's state, because its content was
deduplicated against a location recorded elsewhere.  The resolver maps
either form to one manifest entry and consumes that entry: within one
verification call a physical object satisfies at most one caller path.

Resolution order:

    working manifest (suffix match)
        -> versions newest to oldest (exact logical match)
            -> not found

Suffix matching is plain string matching, not path-segment matching:
``0254.txt`` matches ``v00001/content/data/400000254.txt``.
"""

from __future__ import annotations

import logging
import threading

from pydantic import BaseModel, ConfigDict

from ocflverify.models.inventory import OcflInventory, version_sort_key

logger = logging.getLogger(__name__)


class ResolvedEntry(BaseModel):
    """A manifest entry claimed for one caller path.

    ``locations`` is what resolution reports: the manifest's own locations
    for a direct match, or the single version-qualified reconstruction
    ``{version}/{contentDirectory}/{path}`` for a historical match.
    ``stored_locations`` always holds the manifest's physical locations,
    where the content actually resides in the store.
    """

    model_config = ConfigDict(frozen=True)

    digest: str
    version: str | None = None
    locations: list[str]
    stored_locations: list[str]

    @property
    def location(self) -> str:
        return self.locations[0]

    @property
    def stored_location(self) -> str:
        return self.stored_locations[0]


class ManifestResolver:
    """Single-use resolver over a working copy of one inventory's manifest.

    The inventory itself is never modified.  Removal from the working copy
    is the only synchronization point: when two caller paths reduce to the
    same digest concurrently, whichever removes it first wins and the other
    observes "not found".

    Parameters
    ----------
    inventory:
        The parsed inventory to resolve against.
    """

    def __init__(self, inventory: OcflInventory) -> None:
        self._inventory = inventory
        self._working: dict[str, list[str]] = {
            digest: list(locations) for digest, locations in inventory.manifest.items()
        }
        self._lock = threading.Lock()
        self._versions = inventory.version_labels()

    @property
    def inventory(self) -> OcflInventory:
        return self._inventory

    def remaining(self) -> dict[str, list[str]]:
        """Snapshot of the manifest entries not yet consumed."""
        with self._lock:
            return {digest: list(locations) for digest, locations in self._working.items()}

    # ------------------------------------------------------------------
    # Resolution
    # ------------------------------------------------------------------

    def find(self, fragment: str) -> str | None:
        """Resolve *fragment* and return its first location, or ``None``."""
        entry = self.resolve(fragment)
        return entry.location if entry is not None else None

    def resolve(self, fragment: str) -> ResolvedEntry | None:
        """Resolve *fragment* to a manifest entry, consuming it."""
        if not fragment:
            return None
        digest = self._match_manifest(fragment)
        version: str | None = None
        if digest is None:
            version, digest = self._match_history(fragment)
        if digest is None:
            return None

        stored = self._consume(digest)
        if stored is None:
            logger.debug("Manifest entry %s for %s already consumed", digest, fragment)
            return None

        if version is None:
            locations = stored
        else:
            locations = [self._inventory.qualify(version, fragment)]
            logger.debug(
                "Resolved %s via version %s to stored location %s",
                fragment,
                version,
                stored[0],
            )
        return ResolvedEntry(
            digest=digest,
            version=version,
            locations=locations,
            stored_locations=stored,
        )

    def _match_manifest(self, fragment: str) -> str | None:
        # Several versions may hold a file at the same path; the newest copy wins.
        best: str | None = None
        best_rank: tuple[int, str] | None = None
        for digest, locations in self._snapshot():
            for location in locations:
                if not location.endswith(fragment):
                    continue
                rank = version_sort_key(location.split("/", 1)[0])
                if best_rank is None or rank > best_rank:
                    best, best_rank = digest, rank
        return best

    def _match_history(self, fragment: str) -> tuple[str | None, str | None]:
        versions = self._inventory.versions
        for label in self._versions:
            digest = versions[label].find(fragment)
            if digest is not None and self._is_available(digest):
                return label, digest
        return None, None

    # ------------------------------------------------------------------
    # Working copy
    # ------------------------------------------------------------------

    def _snapshot(self) -> list[tuple[str, list[str]]]:
        with self._lock:
            return list(self._working.items())

    def _is_available(self, digest: str) -> bool:
        with self._lock:
            return digest in self._working

    def _consume(self, digest: str) -> list[str] | None:
        """Atomic remove-if-present."""
        with self._lock:
            return self._working.pop(digest, None)
