"""
Mixed strategy — switches scan family on the layer preference.

  preference 0     → bottom-up scan (y → x → z)
  preference 1, 2  → layered scan starting in that band
  either fails     → front-to-back scan (z → y → x)
"""

from typing import Optional

from evopack.config import ItemType, PlacementDecision
from evopack.simulator.occupancy_grid import OccupancyGrid
from evopack.strategies.base_strategy import BaseStrategy, register_strategy
from evopack.strategies.bottom_up.strategy import SCAN_ORDER as BOTTOM_UP_ORDER
from evopack.strategies.front_to_back.strategy import SCAN_ORDER as FRONT_TO_BACK_ORDER
from evopack.strategies.layered.strategy import BANDS, find_layered
from evopack.strategies.scan import first_in_order


@register_strategy
class MixedStrategy(BaseStrategy):

    name = "mixed"
    ndim = 3

    def decide_placement(
        self,
        item: ItemType,
        grid: OccupancyGrid,
    ) -> Optional[PlacementDecision]:
        preference = self.params.layer_preference % BANDS
        if preference == 0:
            anchor = first_in_order(grid.feasible_anchors(item.cell_dims), BOTTOM_UP_ORDER)
        else:
            anchor = find_layered(grid, item, preference)

        if anchor is None:
            anchor = first_in_order(grid.feasible_anchors(item.cell_dims), FRONT_TO_BACK_ORDER)
        if anchor is None:
            return None
        return PlacementDecision(position=anchor)
