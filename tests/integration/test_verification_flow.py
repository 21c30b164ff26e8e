"""End-to-end verification over HTTP — store, loader, resolver, cache and app together.

Mirrors the lifecycle of a preserved object: ingest, a later update that
renames and replaces content, then verification of both the current and
the historical logical paths.
"""

from __future__ import annotations

import json
from typing import Any

import pytest
from starlette.testclient import TestClient

from ocflverify.core.digest_cache import DigestCache
from ocflverify.core.keys import build_key
from ocflverify.core.verifier import Verifier
from ocflverify.server.app import create_app
from ocflverify.store.memory import InMemoryObjectStore

OBJECT_ID = 101000305


def _inventory(versions: dict[str, Any], manifest: dict[str, list[str]], head: str) -> bytes:
    return json.dumps(
        {
            "id": f"URN-3:HUL.DRS.OBJECT:{OBJECT_ID}",
            "type": "https://ocfl.io/1.0/spec/#inventory",
            "digestAlgorithm": "sha512",
            "head": head,
            "contentDirectory": "content",
            "manifest": manifest,
            "versions": versions,
        }
    ).encode("utf-8")


class TestObjectLifecycle:
    @pytest.fixture
    def store(self) -> InMemoryObjectStore:
        s = InMemoryObjectStore()
        s.put(build_key(OBJECT_ID, "v00001/content/descriptor/mets.xml"), b"m1", "aaa1")
        s.put(build_key(OBJECT_ID, "v00001/content/data/image.jp2"), b"i1", "bbb1")
        s.put(build_key(OBJECT_ID, "v00002/content/descriptor/mets.xml"), b"m2", "aaa2")
        return s

    @pytest.fixture
    def client(self, store: InMemoryObjectStore) -> TestClient:
        verifier = Verifier(store, digest_cache=DigestCache(store), max_workers=4)
        return TestClient(create_app(verifier))

    def _publish_v1(self, store: InMemoryObjectStore) -> None:
        store.put(
            build_key(OBJECT_ID, "inventory.json"),
            _inventory(
                head="v00001",
                manifest={
                    "d-mets-1": ["v00001/content/descriptor/mets.xml"],
                    "d-image": ["v00001/content/data/image.jp2"],
                },
                versions={
                    "v00001": {
                        "created": "2021-01-01T00:00:00Z",
                        "state": {
                            "d-mets-1": ["descriptor/mets.xml"],
                            "d-image": ["data/image.jp2"],
                        },
                    }
                },
            ),
            "inv1",
        )

    def _publish_v2(self, store: InMemoryObjectStore) -> None:
        store.put(
            build_key(OBJECT_ID, "inventory.json"),
            _inventory(
                head="v00002",
                manifest={
                    "d-mets-1": ["v00001/content/descriptor/mets.xml"],
                    "d-image": ["v00001/content/data/image.jp2"],
                    "d-mets-2": ["v00002/content/descriptor/mets.xml"],
                },
                versions={
                    "v00001": {
                        "created": "2021-01-01T00:00:00Z",
                        "state": {
                            "d-mets-1": ["descriptor/mets.xml"],
                            "d-image": ["data/image.jp2"],
                        },
                    },
                    "v00002": {
                        "created": "2021-02-01T00:00:00Z",
                        "state": {
                            "d-mets-2": ["descriptor/mets.xml"],
                            "d-image": ["data/master.jp2"],
                        },
                    },
                },
            ),
            "inv2",
        )

    def test_ingest_then_update(self, store: InMemoryObjectStore, client: TestClient):
        self._publish_v1(store)
        response = client.post(
            f"/verify/{OBJECT_ID}",
            json={"descriptor/mets.xml": "aaa1", "data/image.jp2": "bbb1"},
        )
        assert response.status_code == 200

        self._publish_v2(store)
        response = client.post(
            f"/verify/{OBJECT_ID}/update",
            json={"descriptor/mets.xml": "aaa2", "data/master.jp2": "bbb1"},
        )
        assert response.status_code == 200

    def test_renamed_path_resolves_to_deduplicated_copy(
        self, store: InMemoryObjectStore, client: TestClient
    ):
        self._publish_v2(store)
        response = client.post(
            f"/verify/{OBJECT_ID}",
            json={"descriptor/mets.xml": "aaa2", "data/master.jp2": "bbb1"},
        )
        assert response.status_code == 200

    def test_stale_checksum_after_update(self, store: InMemoryObjectStore, client: TestClient):
        self._publish_v2(store)
        response = client.post(
            f"/verify/{OBJECT_ID}",
            json={"descriptor/mets.xml": "aaa1", "data/master.jp2": "bbb1"},
        )
        assert response.status_code == 409
        assert response.json()["descriptor/mets.xml"]["actual"] == "aaa2"

    def test_repeat_verification_succeeds(self, store: InMemoryObjectStore, client: TestClient):
        self._publish_v1(store)
        payload = {"descriptor/mets.xml": "aaa1", "data/image.jp2": "bbb1"}
        assert client.post(f"/verify/{OBJECT_ID}", json=payload).status_code == 200
        assert client.post(f"/verify/{OBJECT_ID}", json=payload).status_code == 200
