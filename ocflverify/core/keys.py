"""Physical object-store key construction.

Storage layout: {reversed_id[0:4]}/{reversed_id[4:8]}/{id}/{path}

The identifier is zero-padded to eight digits and reversed so the
low-order, highest-entropy digits lead, giving a balanced two-level
fan-out whatever the identifier's magnitude.
"""

from __future__ import annotations


def build_key(object_id: int, path: str) -> str:
    """Return the object-store key for *path* within object *object_id*.

    >>> build_key(11112222, "inventory.json")
    '2222/1111/11112222/inventory.json'
    >>> build_key(1, "inventory.json")
    '1000/0000/1/inventory.json'
    """
    if object_id < 0:
        raise ValueError(f"object id must be non-negative, got {object_id}")
    reversed_id = str(object_id).zfill(8)[::-1]
    return f"{reversed_id[:4]}/{reversed_id[4:8]}/{object_id}/{path}"


def reduce_key(content_directory: str, key: str) -> str:
    """Strip everything up to and including ``{content_directory}/``.

    ``reduce_key("content", "v00002/content/data/a.txt") == "data/a.txt"``.
    A key that does not contain the content directory is returned unchanged.
    """
    marker = f"{content_directory}/"
    index = key.find(marker)
    if index < 0:
        return key
    return key[index + len(marker):]
