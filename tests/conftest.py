"""
Shared fixtures for the evopack test suite.

Run with:
    python -m pytest tests -v
"""

import os
import sys

import pytest

# Ensure the src/ tree is importable without an editable install
sys.path.insert(0, os.path.join(os.path.dirname(__file__), "..", "src"))

from evopack.config import Container, ItemType, PackingConfig  # noqa: E402
from evopack.dataset.generator import (  # noqa: E402
    reference_catalog,
    reference_container,
    shapes_2d_catalog,
    shapes_2d_container,
)


@pytest.fixture
def box_container():
    """Small 10×10×10 container for fast 3D tests."""
    return Container(width=10, height=10, depth=10)


@pytest.fixture
def area_container():
    """20×20 area (capacity 400)."""
    return Container(width=20, height=20)


@pytest.fixture
def cube():
    return ItemType.box("cube", 2, 2, 2, quantity=100, value=1)


@pytest.fixture
def tile():
    return ItemType.rectangle("tile", 4, 4, quantity=100, value=1)


@pytest.fixture
def reference_config():
    """100×80×100 reference setup with types A–D."""
    return PackingConfig(container=reference_container(), catalog=tuple(reference_catalog()))


@pytest.fixture
def shapes_config():
    return PackingConfig(container=shapes_2d_container(), catalog=tuple(shapes_2d_catalog()))
