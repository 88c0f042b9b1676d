"""
dataset — reference setups, catalog generation and loading utilities.

Public API:
    from evopack.dataset.generator import reference_catalog, generate_box_catalog
    from evopack.dataset.loader import load_catalog, save_catalog
"""

from evopack.dataset.generator import (
    reference_container,
    reference_catalog,
    shapes_2d_container,
    shapes_2d_catalog,
    generate_box_catalog,
    generate_shape_catalog,
)
from evopack.dataset.loader import (
    load_catalog,
    load_catalog_container,
    load_catalog_metadata,
    save_catalog,
)

__all__ = [
    "reference_container", "reference_catalog",
    "shapes_2d_container", "shapes_2d_catalog",
    "generate_box_catalog", "generate_shape_catalog",
    "load_catalog", "load_catalog_container", "load_catalog_metadata", "save_catalog",
]
