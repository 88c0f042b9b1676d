"""
Hinted scan strategy — resumes the search where the last item went.

Algorithm:
  1. Scan anchors in y → z → x order, starting at the hint position
     (lexicographically: the hint row first, from the hint x onward).
  2. If nothing fits from the hint, scan again from the origin.
  3. After every committed placement advance the hint:
       x = placed.x + placed width
       if x ≥ container width:  x = 0, z += layer step
       if z ≥ container depth:  z = 0, y += layer step

The hint makes item order matter more than a plain raster scan does, which
is what a permutation search over item sequences needs to see.
"""

from typing import List, Optional

from evopack.config import Container, ItemType, Placement, PlacementDecision, StrategyParams
from evopack.simulator.occupancy_grid import OccupancyGrid
from evopack.strategies.base_strategy import BaseStrategy, register_strategy
from evopack.strategies.scan import X, Y, Z, first_from, first_in_order

SCAN_ORDER = (Y, Z, X)


@register_strategy
class HintedScanStrategy(BaseStrategy):
    """First fit from a remembered hint, then from the origin."""

    name = "hinted_scan"
    ndim = 3

    def __init__(self) -> None:
        super().__init__()
        self._hint: List[int] = [0, 0, 0]

    @property
    def hint(self) -> tuple:
        return tuple(self._hint)

    def on_episode_start(self, container: Container, params: Optional[StrategyParams] = None) -> None:
        super().on_episode_start(container, params)
        self._hint = [0, 0, 0]

    def decide_placement(
        self,
        item: ItemType,
        grid: OccupancyGrid,
    ) -> Optional[PlacementDecision]:
        feasible = grid.feasible_anchors(item.cell_dims)
        anchor = first_from(feasible, SCAN_ORDER, self._hint)
        if anchor is None:
            anchor = first_in_order(feasible, SCAN_ORDER)
        if anchor is None:
            return None
        return PlacementDecision(position=anchor)

    def on_placement(self, placement: Placement) -> None:
        width, _, depth = self.container.grid_shape
        step = self.params.hint_layer_step

        x = placement.position[X] + placement.extent[X]
        y, z = self._hint[Y], self._hint[Z]
        if x >= width:
            x = 0
            z += step
            if z >= depth:
                z = 0
                y += step
        self._hint = [x, y, z]
