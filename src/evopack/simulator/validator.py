"""
Placement validator — pure-function constraint checking.

All checks are stateless functions: they take the current occupancy grid
(or a finished placement list) and a proposed placement, returning True or
raising an error.

Checks (always enforced):
  1. Rotation — code must be valid for the item's dimensionality
  2. Bounds   — the rotated cell block must fit inside the grid
  3. Overlap  — no cell of the block may already be occupied

Whole-solution checks (``verify_solution``):
  - every placement inside the container
  - no two placements share a cell (pairwise block intersection)
  - no item type placed more often than its available quantity
"""

from collections import Counter
from typing import Sequence

from evopack.config import Container, ItemType, Orientation, Placement
from evopack.simulator.occupancy_grid import OccupancyGrid


# ─────────────────────────────────────────────────────────────────────────────
# Errors
# ─────────────────────────────────────────────────────────────────────────────

class PlacementError(Exception):
    """Base class for placement validation errors."""


class InvalidRotationError(PlacementError):
    """Rotation code is not valid for this item."""


class OutOfBoundsError(PlacementError):
    """Item extends outside the container grid."""


class OverlapError(PlacementError):
    """Item would share a cell with an already-placed item."""


class SupplyExceededError(PlacementError):
    """Item type placed more times than its available quantity."""


# ─────────────────────────────────────────────────────────────────────────────
# Single placement
# ─────────────────────────────────────────────────────────────────────────────

def validate_placement(
    grid: OccupancyGrid,
    item: ItemType,
    anchor: Sequence[int],
    rotation: int = 0,
) -> bool:
    """
    Validate a proposed placement against the current grid.

    Returns:
        True if all checks pass.

    Raises:
        InvalidRotationError: rotation code outside the item's range.
        OutOfBoundsError:     block leaves the grid (or wrong arity).
        OverlapError:         block touches an occupied cell.
    """
    try:
        extent = Orientation.dims(item.cell_dims, rotation)
    except ValueError as e:
        raise InvalidRotationError(str(e)) from e

    if len(anchor) != grid.ndim:
        raise OutOfBoundsError(
            f"Anchor {tuple(anchor)} has {len(anchor)} coordinates, grid is {grid.ndim}D"
        )
    if not grid.in_bounds(anchor, extent):
        raise OutOfBoundsError(
            f"Item '{item.id}' extent {extent} at {tuple(anchor)} "
            f"exceeds grid {grid.shape}"
        )
    if not grid.is_region_free(anchor, extent):
        raise OverlapError(
            f"Item '{item.id}' at {tuple(anchor)} overlaps an occupied cell"
        )
    return True


# ─────────────────────────────────────────────────────────────────────────────
# Whole solution
# ─────────────────────────────────────────────────────────────────────────────

def _blocks_intersect(a: Placement, b: Placement) -> bool:
    """Half-open cell blocks intersect only if they overlap on every axis."""
    return all(
        a_lo < b_hi and b_lo < a_hi
        for a_lo, a_hi, b_lo, b_hi in zip(a.position, a.upper, b.position, b.upper)
    )


def verify_solution(placements: Sequence[Placement], container: Container) -> bool:
    """
    Exhaustively check a finished placement list.

    Raises:
        OutOfBoundsError:    a placement leaves ``[0, gridDim)`` on some axis.
        OverlapError:        two placements share at least one cell.
        SupplyExceededError: an item type exceeds its available quantity.
    """
    shape = container.grid_shape

    for p in placements:
        if len(p.position) != len(shape) or any(
            lo < 0 or hi > n for lo, hi, n in zip(p.position, p.upper, shape)
        ):
            raise OutOfBoundsError(
                f"Placement of '{p.item_id}' at {p.position} exceeds grid {shape}"
            )

    for i, a in enumerate(placements):
        for b in placements[i + 1:]:
            if _blocks_intersect(a, b):
                raise OverlapError(
                    f"'{a.item_id}' at {a.position} overlaps '{b.item_id}' at {b.position}"
                )

    counts = Counter(p.item_id for p in placements)
    quantities = {p.item_id: p.item.quantity for p in placements}
    for item_id, n in counts.items():
        if n > quantities[item_id]:
            raise SupplyExceededError(
                f"'{item_id}' placed {n} times, only {quantities[item_id]} available"
            )
    return True
