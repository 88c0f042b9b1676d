"""
Layered strategy — biases placement toward one depth band.

The depth axis is split into three equal bands (band size = depth // 3).

Algorithm:
  1. Scan z → y → x starting at the first slice of the preferred band
     (``StrategyParams.layer_preference``, taken modulo 3).  The scan
     continues past the band to the back of the container.
  2. If nothing fits, scan z → y → x over the full depth from the front.
"""

from typing import Optional, Tuple

from evopack.config import ItemType, PlacementDecision
from evopack.simulator.occupancy_grid import OccupancyGrid
from evopack.strategies.base_strategy import BaseStrategy, register_strategy
from evopack.strategies.scan import X, Y, Z, first_from, first_in_order

SCAN_ORDER = (Z, Y, X)
BANDS = 3


def band_start(depth_cells: int, preference: int) -> int:
    """First z slice of band *preference* (modulo the band count)."""
    return (preference % BANDS) * (depth_cells // BANDS)


def find_layered(grid: OccupancyGrid, item: ItemType, preference: int) -> Optional[Tuple[int, ...]]:
    feasible = grid.feasible_anchors(item.cell_dims)
    start = band_start(grid.shape[Z], preference)
    anchor = first_from(feasible, SCAN_ORDER, (0, 0, start))
    if anchor is None:
        anchor = first_in_order(feasible, SCAN_ORDER)
    return anchor


@register_strategy
class LayeredStrategy(BaseStrategy):
    """Preferred depth band first, full-depth fallback."""

    name = "layered"
    ndim = 3

    def decide_placement(
        self,
        item: ItemType,
        grid: OccupancyGrid,
    ) -> Optional[PlacementDecision]:
        anchor = find_layered(grid, item, self.params.layer_preference)
        if anchor is None:
            return None
        return PlacementDecision(position=anchor)
