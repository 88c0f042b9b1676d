"""
Bottom-up strategy — fills the floor before stacking.

Scan order y → x → z from the origin; the first free anchor wins.
"""

from typing import Optional

from evopack.config import ItemType, PlacementDecision
from evopack.simulator.occupancy_grid import OccupancyGrid
from evopack.strategies.base_strategy import BaseStrategy, register_strategy
from evopack.strategies.scan import X, Y, Z, first_in_order

SCAN_ORDER = (Y, X, Z)


@register_strategy
class BottomUpStrategy(BaseStrategy):

    name = "bottom_up"
    ndim = 3

    def decide_placement(
        self,
        item: ItemType,
        grid: OccupancyGrid,
    ) -> Optional[PlacementDecision]:
        anchor = first_in_order(grid.feasible_anchors(item.cell_dims), SCAN_ORDER)
        if anchor is None:
            return None
        return PlacementDecision(position=anchor)
