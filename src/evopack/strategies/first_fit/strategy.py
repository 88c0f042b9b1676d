"""
First-fit strategy (2D) — row-by-row raster scan.

Scan order y → x: the lowest row with room wins, leftmost anchor within it.
"""

from typing import Optional

from evopack.config import ItemType, PlacementDecision
from evopack.simulator.occupancy_grid import OccupancyGrid
from evopack.strategies.base_strategy import BaseStrategy, register_strategy
from evopack.strategies.scan import X, Y, first_in_order

SCAN_ORDER = (Y, X)


@register_strategy
class FirstFitStrategy(BaseStrategy):

    name = "first_fit"
    ndim = 2

    def decide_placement(
        self,
        item: ItemType,
        grid: OccupancyGrid,
    ) -> Optional[PlacementDecision]:
        anchor = first_in_order(grid.feasible_anchors(item.cell_dims), SCAN_ORDER)
        if anchor is None:
            return None
        return PlacementDecision(position=anchor)
