"""
Occupancy grid — tracks which cells of the container are filled.

The OccupancyGrid is the primary data object exchanged between the
simulator and strategies.  It provides:

  Spatial queries:
    .can_place(item, anchor, rotation)   — bounds + overlap check
    .feasible_anchors(cell_dims)          — every free anchor at once
    .occupied_cells / .fill_ratio         — utilisation of the grid

  State mutation (simulator only):
    .mark_occupied(item, anchor, rotation)

  Safe cloning:
    .copy()                               — deep copy for what-if queries

One grid belongs to exactly one simulation run; it is created fresh for
every fitness evaluation and never shared.

Usage:
    grid = OccupancyGrid(container)
    if grid.can_place(item, (0, 0, 0)):
        grid.mark_occupied(item, (0, 0, 0))
"""

import itertools
from typing import Dict, Optional, Sequence, Tuple

import numpy as np

from evopack.config import Container, ItemType, Orientation


class OccupancyGrid:
    """
    Dense boolean field over the container's integer cells.

    Axis order is (x, y) for 2D containers and (x, y, z) for 3D ones,
    matching ``Container.grid_shape``.

    ``feasible_anchors`` evaluates every anchor of a footprint in one pass
    from an n-dimensional summed-area table of the occupancy.  The table
    and per-footprint results are cached until the next ``mark_occupied``.
    """

    __slots__ = ("container", "cells", "_prefix", "_feasible_cache")

    def __init__(self, container: Container) -> None:
        self.container: Container = container
        self.cells: np.ndarray = np.zeros(container.grid_shape, dtype=bool)
        self._prefix: Optional[np.ndarray] = None
        self._feasible_cache: Dict[Tuple[int, ...], Optional[np.ndarray]] = {}

    # ── Geometry helpers ─────────────────────────────────────────────────

    @property
    def shape(self) -> Tuple[int, ...]:
        return self.cells.shape

    @property
    def ndim(self) -> int:
        return self.cells.ndim

    def _region(self, anchor: Sequence[int], extent: Sequence[int]) -> Tuple[slice, ...]:
        return tuple(slice(a, a + e) for a, e in zip(anchor, extent))

    def in_bounds(self, anchor: Sequence[int], extent: Sequence[int]) -> bool:
        if len(anchor) != self.ndim or len(extent) != self.ndim:
            return False
        return all(
            a >= 0 and e > 0 and a + e <= n
            for a, e, n in zip(anchor, extent, self.shape)
        )

    # ── Spatial queries (for strategies) ─────────────────────────────────

    def can_place(self, item: ItemType, anchor: Sequence[int], rotation: int = 0) -> bool:
        """
        True if the item's rotated cell block starting at *anchor* lies
        inside the grid and touches no occupied cell.

        Cost is proportional to the item footprint, not the container.
        """
        extent = Orientation.dims(item.cell_dims, rotation)
        if not self.in_bounds(anchor, extent):
            return False
        return not bool(self.cells[self._region(anchor, extent)].any())

    def is_region_free(self, anchor: Sequence[int], extent: Sequence[int]) -> bool:
        if not self.in_bounds(anchor, extent):
            return False
        return not bool(self.cells[self._region(anchor, extent)].any())

    def feasible_anchors(self, extent: Sequence[int]) -> Optional[np.ndarray]:
        """
        Boolean field ``F`` with ``F[a] == True`` iff a block of *extent*
        cells anchored at ``a`` is free.

        The field spans ``[0, gridDim - itemDim]`` on each axis, in the
        grid's own axis order.  Returns None when the block is larger than
        the grid on any axis.
        """
        extent = tuple(int(e) for e in extent)
        if extent in self._feasible_cache:
            return self._feasible_cache[extent]

        if len(extent) != self.ndim or any(
            e <= 0 or e > n for e, n in zip(extent, self.shape)
        ):
            self._feasible_cache[extent] = None
            return None

        prefix = self._summed_area()
        counts_shape = tuple(n - e + 1 for n, e in zip(self.shape, extent))
        occupied = np.zeros(counts_shape, dtype=np.int64)

        # Inclusion–exclusion over the 2**ndim corners of each block.
        for corner in itertools.product((0, 1), repeat=self.ndim):
            sign = -1 if (self.ndim - sum(corner)) % 2 else 1
            region = tuple(
                slice(e * c, e * c + m)
                for e, c, m in zip(extent, corner, counts_shape)
            )
            occupied += sign * prefix[region]

        feasible = occupied == 0
        self._feasible_cache[extent] = feasible
        return feasible

    @property
    def occupied_cells(self) -> int:
        return int(np.count_nonzero(self.cells))

    @property
    def fill_ratio(self) -> float:
        """Occupied cells / total cells."""
        if self.cells.size == 0:
            return 0.0
        return self.occupied_cells / self.cells.size

    # ── State mutation (simulator only, NOT for strategies) ─────────────

    def mark_occupied(self, item: ItemType, anchor: Sequence[int], rotation: int = 0) -> None:
        """
        Fill the item's rotated cell block starting at *anchor*.

        Clips silently at the grid edges; callers check ``can_place`` first.
        """
        extent = Orientation.dims(item.cell_dims, rotation)
        region = tuple(
            slice(max(a, 0), min(a + e, n))
            for a, e, n in zip(anchor, extent, self.shape)
        )
        self.cells[region] = True
        self._invalidate()

    def _invalidate(self) -> None:
        self._prefix = None
        self._feasible_cache.clear()

    def _summed_area(self) -> np.ndarray:
        """Zero-padded cumulative occupancy table of shape ``grid + 1``."""
        if self._prefix is None:
            table = self.cells.astype(np.int64)
            for axis in range(self.ndim):
                table = np.cumsum(table, axis=axis)
            self._prefix = np.pad(table, [(1, 0)] * self.ndim)
        return self._prefix

    # ── Cloning ──────────────────────────────────────────────────────────

    def copy(self) -> "OccupancyGrid":
        """Deep copy; changes to the clone never reach this grid."""
        clone = OccupancyGrid(self.container)
        clone.cells = self.cells.copy()
        return clone

    # ── Representation ───────────────────────────────────────────────────

    def __repr__(self) -> str:
        dims = "×".join(str(n) for n in self.shape)
        return f"OccupancyGrid({dims}, fill={self.fill_ratio:.1%})"
