"""
Catalog generator — reference setups and random item catalogs.

Generators:
    reference_container / reference_catalog — 100×80×100 volume, types A–D
    shapes_2d_container / shapes_2d_catalog — 50×40 area, one type per shape
    generate_box_catalog   — random box types sized relative to a container
    generate_shape_catalog — random 2D shape types sized relative to a container

Usage:
    from evopack.dataset.generator import generate_box_catalog
    items = generate_box_catalog(6, seed=7, save_path="dataset/boxes_6.json")
"""

import random
from typing import List, Optional

from evopack.config import Container, ItemType
from evopack.dataset.loader import save_catalog


# ─────────────────────────────────────────────────────────────────────────────
# Reference setups
# ─────────────────────────────────────────────────────────────────────────────

def reference_container() -> Container:
    return Container(width=100, height=80, depth=100)


def reference_catalog() -> List[ItemType]:
    """The four box types of the reference volume setup."""
    return [
        ItemType.box("A", 10, 10, 10, quantity=150, value=150),
        ItemType.box("B", 20, 15, 12, quantity=70, value=70),
        ItemType.box("C", 5, 8, 6, quantity=60, value=60),
        ItemType.box("D", 10, 12, 10, quantity=300, value=300),
    ]


def shapes_2d_container() -> Container:
    return Container(width=50, height=40)


def shapes_2d_catalog() -> List[ItemType]:
    """One type per planar shape kind."""
    return [
        ItemType.rectangle("R", 8, 6, quantity=20, value=12),
        ItemType.square("S", 5, quantity=25, value=8),
        ItemType.circle("C", 3, quantity=15, value=10),
        ItemType.triangle("T", 6, 4, quantity=15, value=5),
    ]


# ─────────────────────────────────────────────────────────────────────────────
# Random catalogs
# ─────────────────────────────────────────────────────────────────────────────

def generate_box_catalog(
    n_types: int,
    container: Optional[Container] = None,
    min_frac: float = 0.05,
    max_frac: float = 0.25,
    max_quantity: int = 100,
    save_path: Optional[str] = None,
    seed: Optional[int] = None,
) -> List[ItemType]:
    """
    Generate *n_types* box types with each side in
    ``[min_frac, max_frac]`` of the matching container side.

    Args:
        n_types:      Number of item types (ids T0, T1, ...).
        container:    3D container used for relative sizing.
        max_quantity: Supply drawn from U{1, max_quantity}.
        save_path:    If given, save the catalog JSON here.
        seed:         Random seed for reproducibility.
    """
    rng = random.Random(seed)
    cfg = container or reference_container()
    if not cfg.is_3d:
        raise ValueError("generate_box_catalog needs a 3D container")

    items: List[ItemType] = []
    for i in range(n_types):
        w, h, d = (max(1, round(rng.uniform(min_frac * ref, max_frac * ref)))
                   for ref in cfg.dims)
        quantity = rng.randint(1, max_quantity)
        # Value roughly tracks size, with some noise.
        value = round(w * h * d / 10 * rng.uniform(0.5, 1.5), 1)
        items.append(ItemType.box(f"T{i}", w, h, d, quantity=quantity, value=value))

    if save_path:
        save_catalog(items, save_path, container=cfg, generator="box",
                     params={"n_types": n_types, "min_frac": min_frac,
                             "max_frac": max_frac, "seed": seed})
    return items


def generate_shape_catalog(
    n_types: int,
    container: Optional[Container] = None,
    min_frac: float = 0.05,
    max_frac: float = 0.2,
    max_quantity: int = 30,
    save_path: Optional[str] = None,
    seed: Optional[int] = None,
) -> List[ItemType]:
    """
    Generate *n_types* planar item types, cycling through rectangle,
    square, circle and triangle.  Sizes are relative to the shorter
    container side.
    """
    rng = random.Random(seed)
    cfg = container or shapes_2d_container()
    if cfg.is_3d:
        raise ValueError("generate_shape_catalog needs a 2D container")
    ref = min(cfg.dims)

    def size() -> float:
        return round(max(1.0, rng.uniform(min_frac * ref, max_frac * ref)), 1)

    items: List[ItemType] = []
    for i in range(n_types):
        kind = i % 4
        quantity = rng.randint(1, max_quantity)
        value = round(rng.uniform(1, 20), 1)
        if kind == 0:
            item = ItemType.rectangle(f"R{i}", size(), size(), quantity, value)
        elif kind == 1:
            item = ItemType.square(f"S{i}", size(), quantity, value)
        elif kind == 2:
            item = ItemType.circle(f"C{i}", size() / 2, quantity, value)
        else:
            item = ItemType.triangle(f"T{i}", size(), size(), quantity, value)
        items.append(item)

    if save_path:
        save_catalog(items, save_path, container=cfg, generator="shape",
                     params={"n_types": n_types, "min_frac": min_frac,
                             "max_frac": max_frac, "seed": seed})
    return items
