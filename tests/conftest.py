"""Shared test fixtures for ocflverify.

Two OCFL objects are seeded into an in-memory object store:

* ``FLAT_ID`` — one version, four files, every logical path stored verbatim.
* ``HISTORY_ID`` — three versions.  ``metadata/b_textMD.xml`` is a logical
  path that only exists in ``v00002``; its content was deduplicated
  against ``v00001/content/metadata/a_textMD.xml``.  ``data/c.txt`` changed
  content in ``v00003``.
"""

from __future__ import annotations

import json
from collections.abc import Callable
from typing import Any

import pytest

from ocflverify.core.keys import build_key
from ocflverify.core.verifier import Verifier
from ocflverify.models.inventory import OcflInventory
from ocflverify.store.memory import InMemoryObjectStore

FLAT_ID = 1254624
HISTORY_ID = 1254654
MISSING_ID = 4265456

# manifest digest -> stored (ETag) digest
FLAT_ETAGS: dict[str, str] = {
    "sha512-mets": "52fe5cdbf844ebc72fc5d1e10f036279",
    "sha512-structmap": "17e0a42b63075f7a60fa1db80cfe26b9",
    "sha512-textmd": "0aff68fa16c9be40ca946f403e4e5180",
    "sha512-txt": "872c1b7d198907a3f3f9e6735b32f0ee",
}

FLAT_DOC: dict[str, Any] = {
    "id": "URN-3:HUL.DRS.OBJECT:1254624",
    "type": "https://ocfl.io/1.0/spec/#inventory",
    "digestAlgorithm": "sha512",
    "head": "v00001",
    "contentDirectory": "content",
    "manifest": {
        "sha512-mets": ["v00001/content/descriptor/400000252_mets.xml"],
        "sha512-structmap": ["v00001/content/metadata/400000252_structureMap.xml"],
        "sha512-textmd": ["v00001/content/metadata/400000254_textMD.xml"],
        "sha512-txt": ["v00001/content/data/400000254.txt"],
    },
    "versions": {
        "v00001": {
            "created": "2021-03-01T12:00:00Z",
            "message": "Ingest",
            "user": {"name": "drs", "address": "mailto:drs@example.org"},
            "state": {
                "sha512-mets": ["descriptor/400000252_mets.xml"],
                "sha512-structmap": ["metadata/400000252_structureMap.xml"],
                "sha512-textmd": ["metadata/400000254_textMD.xml"],
                "sha512-txt": ["data/400000254.txt"],
            },
        }
    },
}

HISTORY_ETAGS: dict[str, str] = {
    "sha512-wav": "cfd9b3e993c7b030f4807688cddbd77c",
    "sha512-textmd": "6f559e7352abee9d8972447eda23cc84",
    "sha512-c-old": "60da72142a630e223a205877e29be9c9",
    "sha512-c-new": "a6e126e393d9917e300394d57756ffac",
}

HISTORY_DOC: dict[str, Any] = {
    "id": "URN-3:HUL.DRS.OBJECT:1254654",
    "type": "https://ocfl.io/1.0/spec/#inventory",
    "digestAlgorithm": "sha512",
    "head": "v00003",
    "contentDirectory": "content",
    "manifest": {
        "sha512-wav": ["v00001/content/data/a.wav"],
        "sha512-textmd": ["v00001/content/metadata/a_textMD.xml"],
        "sha512-c-old": ["v00002/content/data/c.txt"],
        "sha512-c-new": ["v00003/content/data/c.txt"],
    },
    "versions": {
        "v00001": {
            "created": "2021-03-01T12:00:00Z",
            "message": "Ingest",
            "state": {
                "sha512-wav": ["data/a.wav"],
                "sha512-textmd": ["metadata/a_textMD.xml"],
            },
        },
        "v00002": {
            "created": "2021-04-01T12:00:00Z",
            "message": "Rename technical metadata, add text",
            "state": {
                "sha512-wav": ["data/a.wav"],
                "sha512-textmd": ["metadata/b_textMD.xml"],
                "sha512-c-old": ["data/c.txt"],
            },
        },
        "v00003": {
            "created": "2021-05-01T12:00:00Z",
            "message": "Replace text",
            "state": {
                "sha512-wav": ["data/a.wav"],
                "sha512-c-new": ["data/c.txt"],
            },
        },
    },
}


def seed_object(
    store: InMemoryObjectStore,
    object_id: int,
    doc: dict[str, Any],
    etags: dict[str, str],
) -> None:
    """Write an inventory and one stored object per manifest location."""
    store.put(
        build_key(object_id, "inventory.json"),
        json.dumps(doc).encode("utf-8"),
        "inventory-etag",
        content_type="application/json",
    )
    for digest, locations in doc["manifest"].items():
        for location in locations:
            store.put(build_key(object_id, location), location.encode("utf-8"), etags[digest])


@pytest.fixture
def store() -> InMemoryObjectStore:
    """Provide an in-memory store seeded with the flat and history objects."""
    s = InMemoryObjectStore()
    seed_object(s, FLAT_ID, FLAT_DOC, FLAT_ETAGS)
    seed_object(s, HISTORY_ID, HISTORY_DOC, HISTORY_ETAGS)
    return s


@pytest.fixture
def verifier(store: InMemoryObjectStore) -> Verifier:
    """Provide a Verifier over the seeded store."""
    return Verifier(store, max_workers=4)


@pytest.fixture
def flat_inventory() -> OcflInventory:
    return OcflInventory.model_validate(FLAT_DOC)


@pytest.fixture
def history_inventory() -> OcflInventory:
    return OcflInventory.model_validate(HISTORY_DOC)


@pytest.fixture
def flat_checksums() -> dict[str, str]:
    """Expected checksums for every head path of the flat object."""
    state = FLAT_DOC["versions"]["v00001"]["state"]
    return {path: FLAT_ETAGS[digest] for digest, paths in state.items() for path in paths}


@pytest.fixture
def history_checksums() -> dict[str, str]:
    """Expected checksums for every head path of the history object."""
    state = HISTORY_DOC["versions"]["v00003"]["state"]
    return {path: HISTORY_ETAGS[digest] for digest, paths in state.items() for path in paths}


@pytest.fixture
def make_inventory() -> Callable[..., OcflInventory]:
    """Factory fixture: build an inventory from FLAT_DOC with overrides."""

    def _factory(**overrides: Any) -> OcflInventory:
        doc = json.loads(json.dumps(FLAT_DOC))
        doc.update(overrides)
        return OcflInventory.model_validate(doc)

    return _factory


@pytest.fixture
def flat_doc() -> dict[str, Any]:
    """A deep copy of the flat object's inventory document."""
    return json.loads(json.dumps(FLAT_DOC))


@pytest.fixture
def history_doc() -> dict[str, Any]:
    """A deep copy of the history object's inventory document."""
    return json.loads(json.dumps(HISTORY_DOC))
