"""
Bottom-left strategy (2D) — column-by-column scan from the bottom edge.

Scan order x → y: the leftmost column with room wins, lowest anchor within it.
"""

from typing import Optional

from evopack.config import ItemType, PlacementDecision
from evopack.simulator.occupancy_grid import OccupancyGrid
from evopack.strategies.base_strategy import BaseStrategy, register_strategy
from evopack.strategies.scan import X, Y, first_in_order

SCAN_ORDER = (X, Y)


@register_strategy
class BottomLeftStrategy(BaseStrategy):

    name = "bottom_left"
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
