"""
Best-fit strategy (2D) — anchor closest to the origin.

Among all free anchors pick the one with the smallest Euclidean distance
to (0, 0).  Equal distances resolve in row-by-row scan order (y → x), so
the result is the first such anchor a raster scan would meet.
"""

from typing import Optional

from evopack.config import ItemType, PlacementDecision
from evopack.simulator.occupancy_grid import OccupancyGrid
from evopack.strategies.base_strategy import BaseStrategy, register_strategy
from evopack.strategies.scan import X, Y, nearest_to_origin

TIE_ORDER = (Y, X)


@register_strategy
class BestFitStrategy(BaseStrategy):

    name = "best_fit"
    ndim = 2

    def decide_placement(
        self,
        item: ItemType,
        grid: OccupancyGrid,
    ) -> Optional[PlacementDecision]:
        anchor = nearest_to_origin(grid.feasible_anchors(item.cell_dims), TIE_ORDER)
        if anchor is None:
            return None
        return PlacementDecision(position=anchor)
