"""
Catalog loader — read/write item catalogs from/to JSON files.

Usage:
    from evopack.dataset.loader import load_catalog, save_catalog
    items = load_catalog("dataset/boxes_6.json")
"""

import json
import os
from typing import List, Optional

from evopack.config import Container, ItemType


def load_catalog(path: str) -> List[ItemType]:
    """
    Load a catalog JSON and return its item types.

    Expected JSON schema::

        { "items": [{"id": "A", "shape": {"kind": "box", "width": 10,
                     "height": 10, "depth": 10}, "quantity": 5, "value": 2}, ...] }
    """
    with open(path, "r") as f:
        data = json.load(f)
    return [ItemType.from_dict(d) for d in data["items"]]


def load_catalog_container(path: str) -> Optional[Container]:
    """Container stored alongside the catalog, if any."""
    with open(path, "r") as f:
        data = json.load(f)
    if data.get("container") is None:
        return None
    return Container.from_dict(data["container"])


def load_catalog_metadata(path: str) -> dict:
    """Load catalog JSON and return metadata (everything except items)."""
    with open(path, "r") as f:
        data = json.load(f)
    return {k: v for k, v in data.items() if k != "items"}


def save_catalog(
    items: List[ItemType],
    path: str,
    container: Optional[Container] = None,
    name: Optional[str] = None,
    generator: str = "custom",
    params: Optional[dict] = None,
) -> None:
    """Save item types (and optionally their container) as a catalog JSON file."""
    directory = os.path.dirname(path)
    if directory:
        os.makedirs(directory, exist_ok=True)

    data = {
        "name": name or os.path.splitext(os.path.basename(path))[0],
        "generator": generator,
        "params": params or {},
        "container": container.to_dict() if container is not None else None,
        "item_count": len(items),
        "items": [item.to_dict() for item in items],
    }
    with open(path, "w") as f:
        json.dump(data, f, indent=2)
