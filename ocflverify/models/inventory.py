"""OCFL inventory models — the parsed form of an object's ``inventory.json``.

The models are frozen.  Manifest entries consumed while resolving paths
live in a per-request working copy owned by
:class:`ocflverify.core.resolver.ManifestResolver`, never here.
"""

from __future__ import annotations

import re

from pydantic import BaseModel, ConfigDict, Field, field_validator, model_validator

_VERSION_LABEL = re.compile(r"^v(\d+)$")


def version_sort_key(label: str) -> tuple[int, str]:
    """Order ``v1 < v2 < v10`` and ``v00001 < v00002`` alike.

    Labels that do not follow the ``v<digits>`` convention sort before the
    conforming ones, lexically among themselves.
    """
    match = _VERSION_LABEL.match(label)
    if match:
        return (int(match.group(1)), label)
    return (-1, label)


class OcflUser(BaseModel):
    """Name/address pair recorded against a version (passthrough)."""

    model_config = ConfigDict(frozen=True)

    name: str
    address: str = ""


class OcflVersion(BaseModel):
    """A snapshot of which logical paths existed, keyed by digest."""

    model_config = ConfigDict(frozen=True)

    created: str
    message: str = ""
    user: OcflUser | None = None
    state: dict[str, list[str]] = {}

    def find(self, logical_path: str) -> str | None:
        """Return the digest whose path list contains *logical_path* exactly."""
        for digest, paths in self.state.items():
            if logical_path in paths:
                return digest
        return None

    def paths(self) -> set[str]:
        """All logical paths valid in this version."""
        return {path for paths in self.state.values() for path in paths}


class OcflInventory(BaseModel):
    """Versioned manifest of one preserved object.

    ``manifest`` maps a digest to the physical locations
    (``v00001/content/data/file.txt``) sharing that content.  ``versions``
    maps a version label to its :class:`OcflVersion`; ``head`` names the
    newest one.
    """

    model_config = ConfigDict(frozen=True, populate_by_name=True)

    id: str
    type: str = ""
    digest_algorithm: str = Field(alias="digestAlgorithm")
    head: str
    content_directory: str = Field(default="content", alias="contentDirectory")
    fixity: dict[str, dict[str, list[str]]] = {}
    manifest: dict[str, list[str]]
    versions: dict[str, OcflVersion]

    @field_validator("manifest")
    @classmethod
    def _locations_not_empty(cls, manifest: dict[str, list[str]]) -> dict[str, list[str]]:
        for digest, locations in manifest.items():
            if not locations:
                raise ValueError(f"manifest entry {digest} has no locations")
        return manifest

    @field_validator("content_directory")
    @classmethod
    def _content_directory_is_segment(cls, value: str) -> str:
        if not value or "/" in value or value in (".", ".."):
            raise ValueError(f"invalid contentDirectory: {value!r}")
        return value

    @model_validator(mode="after")
    def _head_is_a_version(self) -> OcflInventory:
        if self.head not in self.versions:
            raise ValueError(f"head version {self.head} not present in versions")
        return self

    # ------------------------------------------------------------------
    # Derived queries
    # ------------------------------------------------------------------

    @property
    def head_version(self) -> OcflVersion:
        return self.versions[self.head]

    def version_labels(self) -> list[str]:
        """Version labels, newest first."""
        return sorted(self.versions, key=version_sort_key, reverse=True)

    def head_paths(self) -> set[str]:
        """Every logical path asserted to exist in the current state."""
        return self.head_version.paths()

    def qualify(self, version: str, logical_path: str) -> str:
        """Physical location of *logical_path* as written under *version*."""
        return f"{version}/{self.content_directory}/{logical_path}"

    def exists(self, path: str) -> bool:
        """Whether *path* is known to this inventory at all.

        True when *path* ends a manifest location or appears verbatim in
        any version's state.  Read-only; nothing is consumed.
        """
        if not path:
            return False
        for locations in self.manifest.values():
            if any(location.endswith(path) for location in locations):
                return True
        return any(version.find(path) is not None for version in self.versions.values())
