"""
Packing simulator - the central authority for item placement.

Data flow:
  1. Simulator resolves the next item id against the catalog and checks
     the remaining supply of that type.
  2. Strategy receives the item and the OccupancyGrid and returns a
     PlacementDecision(position, rotation) or None.
  3. Simulator validates the proposal, marks the grid, logs the step and
     notifies the strategy via ``on_placement``.
  4. Any failure (no position, unknown id, supply exhausted, invalid
     proposal) becomes a rejection record; nothing is retried.

Usage:
    sim = PackingSimulator(container, catalog)
    placements = sim.run(["A", "A", "B"], get_strategy("bottom_up"))
    sim.get_summary()
"""

import logging
import time
from collections import Counter
from dataclasses import dataclass
from typing import Dict, Iterable, List, Optional, Sequence

from evopack.config import Container, ItemType, Placement, StrategyParams
from evopack.simulator.occupancy_grid import OccupancyGrid
from evopack.simulator.validator import PlacementError, validate_placement

logger = logging.getLogger(__name__)


# ---------------------------------------------------------------------------
# StepRecord -- immutable log entry for each placement attempt
# ---------------------------------------------------------------------------

@dataclass(frozen=True)
class StepRecord:
    """Log of a single placement attempt (success or rejection)."""
    step: int
    item_id: str
    success: bool
    placement: Optional[Placement] = None
    rejection_reason: str = ""
    fill_ratio_after: float = 0.0
    elapsed_ms: float = 0.0

    def to_dict(self) -> dict:
        d = {
            "step": self.step,
            "item_id": self.item_id,
            "success": self.success,
            "fill_ratio_after": round(self.fill_ratio_after, 6),
            "elapsed_ms": round(self.elapsed_ms, 3),
        }
        if self.success and self.placement is not None:
            d["placement"] = self.placement.to_dict()
        else:
            d["rejection_reason"] = self.rejection_reason
        return d


# ---------------------------------------------------------------------------
# PackingSimulator
# ---------------------------------------------------------------------------

class PackingSimulator:
    """
    Deterministic placement engine for one container.

    Enforces:

    * No item outside the container grid
    * No overlapping items
    * No item type placed more often than its available quantity

    A simulator owns exactly one OccupancyGrid.  ``run()`` starts from an
    empty grid each time, so one instance can be reused sequentially but
    never shared between concurrent evaluations.

    Public interface
    ~~~~~~~~~~~~~~~~
    run(sequence, strategy, params) -> List[Placement]
    get_grid()                      -> OccupancyGrid
    attempt_placement(...)          -> Placement | None
    record_rejection(...)           -> None
    get_step_log()                  -> List[StepRecord]
    get_summary()                   -> dict
    """

    def __init__(
        self,
        container: Container,
        catalog: Iterable[ItemType],
        verbose: bool = False,
    ) -> None:
        self._container = container
        self._items: Dict[str, ItemType] = {item.id: item for item in catalog}
        self._verbose = verbose
        self._reset()

    def _reset(self) -> None:
        self._grid = OccupancyGrid(self._container)
        self._placements: List[Placement] = []
        self._placed_counts: Counter = Counter()
        self._step_log: List[StepRecord] = []
        self._step_counter: int = 0

    # -- Public: state access ------------------------------------------------

    @property
    def container(self) -> Container:
        return self._container

    def get_grid(self) -> OccupancyGrid:
        """Current occupancy grid (strategies read this)."""
        return self._grid

    @property
    def placements(self) -> List[Placement]:
        return list(self._placements)

    # -- Public: full run ----------------------------------------------------

    def run(
        self,
        sequence: Sequence[str],
        strategy,
        params: Optional[StrategyParams] = None,
    ) -> List[Placement]:
        """
        Feed *sequence* through *strategy* once, in order.

        Returns:
            The successful placements in placement order.
        """
        self._reset()
        strategy.on_episode_start(self._container, params or StrategyParams())

        for item_id in sequence:
            item = self._items.get(item_id)
            if item is None:
                self._record(item_id, f"Unknown item id '{item_id}'")
                continue
            if self._placed_counts[item.id] >= item.quantity:
                self.record_rejection(item, "Supply exhausted")
                continue

            decision = strategy.decide_placement(item, self._grid)
            if decision is None:
                self.record_rejection(item, "No feasible position")
                continue

            placement = self.attempt_placement(item, decision.position, decision.rotation)
            if placement is not None:
                strategy.on_placement(placement)

        summary = self.get_summary()
        strategy.on_episode_end(summary)
        logger.debug(
            "Run with %s: %d/%d placed, fill %.3f",
            getattr(strategy, "name", type(strategy).__name__),
            summary["items_placed"], summary["items_total"], summary["fill_ratio"],
        )
        return self.placements

    # -- Public: placement ---------------------------------------------------

    def attempt_placement(
        self, item: ItemType, position: Sequence[int], rotation: int = 0,
    ) -> Optional[Placement]:
        """
        Validate and commit *item* at *position*.

        Returns:
            Placement on success, None on rejection.
        """
        t0 = time.perf_counter()
        step = self._step_counter
        position = tuple(int(p) for p in position)

        if self._placed_counts[item.id] >= item.quantity:
            self._log_rejection(step, item.id, t0, "Supply exhausted")
            return None

        try:
            validate_placement(self._grid, item, position, rotation)
        except PlacementError as e:
            self._log_rejection(step, item.id, t0, str(e))
            return None

        placement = Placement(item=item, position=position, rotation=rotation, step=step)
        self._grid.mark_occupied(item, position, rotation)
        self._placements.append(placement)
        self._placed_counts[item.id] += 1

        elapsed = (time.perf_counter() - t0) * 1000
        record = StepRecord(
            step=step, item_id=item.id, success=True, placement=placement,
            fill_ratio_after=self._grid.fill_ratio, elapsed_ms=elapsed,
        )
        self._step_log.append(record)
        self._step_counter += 1
        if self._verbose:
            logger.info("step %d: %s placed at %s", step, item.id, position)
        return placement

    def record_rejection(self, item: ItemType, reason: str = "No feasible position") -> None:
        """Record a rejection when the strategy cannot place *item*."""
        self._record(item.id, reason)

    # -- Public: logs & summary ----------------------------------------------

    def get_step_log(self) -> List[StepRecord]:
        """Return a copy of the full step log."""
        return list(self._step_log)

    def get_summary(self) -> dict:
        """
        Compute a summary dict of the simulation results.

        Keys: items_total, items_placed, items_rejected, fill_ratio,
              computation_time_ms.
        """
        placed = sum(1 for r in self._step_log if r.success)
        total_time = sum(r.elapsed_ms for r in self._step_log)
        return {
            "items_total": len(self._step_log),
            "items_placed": placed,
            "items_rejected": len(self._step_log) - placed,
            "fill_ratio": self._grid.fill_ratio,
            "computation_time_ms": round(total_time, 2),
        }

    # -- Private helpers -----------------------------------------------------

    def _record(self, item_id: str, reason: str) -> None:
        self._step_log.append(StepRecord(
            step=self._step_counter,
            item_id=item_id,
            success=False,
            rejection_reason=reason,
            fill_ratio_after=self._grid.fill_ratio,
        ))
        self._step_counter += 1
        logger.debug("step %d: %s rejected (%s)", self._step_counter - 1, item_id, reason)

    def _log_rejection(self, step: int, item_id: str, t0: float, reason: str) -> None:
        elapsed = (time.perf_counter() - t0) * 1000
        self._step_log.append(StepRecord(
            step=step, item_id=item_id, success=False,
            rejection_reason=reason, fill_ratio_after=self._grid.fill_ratio,
            elapsed_ms=elapsed,
        ))
        self._step_counter += 1
        logger.debug("step %d: %s rejected (%s)", step, item_id, reason)
