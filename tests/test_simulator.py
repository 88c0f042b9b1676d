"""
Tests for PackingSimulator and the placement validator.

Tests cover:
- End-to-end reference run (50 × type A, bottom-up)
- Skipping: no position, supply exhausted, unknown ids
- Simulator-side validation of bad proposals
- Step log, summary and determinism
- verify_solution on broken placement lists
"""

import pytest

from evopack.config import Container, ItemType, Placement, PlacementDecision
from evopack.simulator.pipeline_simulator import PackingSimulator
from evopack.simulator.validator import (
    OutOfBoundsError,
    OverlapError,
    SupplyExceededError,
    verify_solution,
)
from evopack.strategies import get_strategy
from evopack.strategies.base_strategy import BaseStrategy


class FixedStrategy(BaseStrategy):
    """Proposes a fixed list of positions, one per call."""

    name = "fixed"
    ndim = 2

    def __init__(self, positions):
        super().__init__()
        self._positions = list(positions)

    def decide_placement(self, item, grid):
        if not self._positions:
            return None
        return PlacementDecision(position=self._positions.pop(0))


# ---------------------------------------------------------------------------
# 1. Reference scenario
# ---------------------------------------------------------------------------

class TestReferenceRun:
    def test_fifty_cubes_bottom_up(self, reference_config):
        sim = PackingSimulator(reference_config.container, reference_config.catalog)
        placements = sim.run(["A"] * 50, get_strategy("bottom_up"))

        assert len(placements) == 50
        summary = sim.get_summary()
        assert summary["items_rejected"] == 0
        assert all(p.position[1] == 0 for p in placements), "all cubes stay on the floor"
        assert placements[0].position == (0, 0, 0)
        assert placements[1].position == (0, 0, 10)
        assert placements[9].position == (0, 0, 90)
        assert placements[10].position == (10, 0, 0)
        assert sum(p.item.volume for p in placements) == 50_000


# ---------------------------------------------------------------------------
# 2. Skipping
# ---------------------------------------------------------------------------

class TestSkipping:
    def test_oversized_item_skipped(self, box_container, cube):
        giant = ItemType.box("giant", 5, 11, 5, quantity=3, value=100)
        sim = PackingSimulator(box_container, [cube, giant])
        placements = sim.run(["giant", "cube", "giant"], get_strategy("front_to_back"))
        assert [p.item_id for p in placements] == ["cube"]
        reasons = [r.rejection_reason for r in sim.get_step_log() if not r.success]
        assert reasons == ["No feasible position", "No feasible position"]

    def test_supply_limit(self, box_container):
        scarce = ItemType.box("scarce", 1, 1, 1, quantity=2, value=1)
        sim = PackingSimulator(box_container, [scarce])
        placements = sim.run(["scarce"] * 4, get_strategy("bottom_up"))
        assert len(placements) == 2
        log = sim.get_step_log()
        assert [r.success for r in log] == [True, True, False, False]
        assert log[-1].rejection_reason == "Supply exhausted"

    def test_unknown_id(self, box_container, cube):
        sim = PackingSimulator(box_container, [cube])
        placements = sim.run(["nope", "cube"], get_strategy("bottom_up"))
        assert len(placements) == 1
        first = sim.get_step_log()[0]
        assert not first.success and "nope" in first.rejection_reason

    def test_full_container_rejects_rest(self):
        container = Container(4, 4, 4)
        cube = ItemType.box("cube", 2, 2, 2, quantity=20, value=1)
        sim = PackingSimulator(container, [cube])
        placements = sim.run(["cube"] * 10, get_strategy("bottom_up"))
        assert len(placements) == 8
        assert sim.get_summary()["items_rejected"] == 2
        assert sim.get_grid().fill_ratio == 1.0


# ---------------------------------------------------------------------------
# 3. Simulator-side validation
# ---------------------------------------------------------------------------

class TestProposalValidation:
    def test_overlapping_proposal_rejected(self, area_container, tile):
        sim = PackingSimulator(area_container, [tile])
        placements = sim.run(["tile", "tile", "tile"], FixedStrategy([(0, 0), (2, 2), (4, 0)]))
        assert [p.position for p in placements] == [(0, 0), (4, 0)]
        assert "overlaps" in sim.get_step_log()[1].rejection_reason

    def test_out_of_bounds_proposal_rejected(self, area_container, tile):
        sim = PackingSimulator(area_container, [tile])
        assert sim.run(["tile"], FixedStrategy([(17, 0)])) == []
        assert "exceeds" in sim.get_step_log()[0].rejection_reason

    def test_attempt_placement_direct(self, area_container, tile):
        sim = PackingSimulator(area_container, [tile])
        assert sim.attempt_placement(tile, (0, 0)) is not None
        assert sim.attempt_placement(tile, (1, 1)) is None
        assert sim.attempt_placement(tile, (0, 4), rotation=3) is None


# ---------------------------------------------------------------------------
# 4. Logs, summary and determinism
# ---------------------------------------------------------------------------

class TestLogsAndSummary:
    def test_summary_keys(self, box_container, cube):
        sim = PackingSimulator(box_container, [cube])
        sim.run(["cube"] * 3, get_strategy("bottom_up"))
        summary = sim.get_summary()
        assert set(summary) == {
            "items_total", "items_placed", "items_rejected",
            "fill_ratio", "computation_time_ms",
        }
        assert summary["items_placed"] == 3
        assert summary["fill_ratio"] == pytest.approx(24 / 1000)

    def test_step_records(self, box_container, cube):
        sim = PackingSimulator(box_container, [cube])
        sim.run(["cube", "x"], get_strategy("bottom_up"))
        ok, bad = [r.to_dict() for r in sim.get_step_log()]
        assert ok["step"] == 0 and ok["placement"]["position"] == [0, 0, 0]
        assert bad["step"] == 1 and "rejection_reason" in bad

    def test_placement_steps_follow_sequence(self, box_container, cube):
        sim = PackingSimulator(box_container, [cube])
        placements = sim.run(["x", "cube", "cube"], get_strategy("bottom_up"))
        assert [p.step for p in placements] == [1, 2]

    def test_run_resets_state(self, box_container, cube):
        sim = PackingSimulator(box_container, [cube])
        first = sim.run(["cube"] * 4, get_strategy("layered"))
        second = sim.run(["cube"] * 4, get_strategy("layered"))
        assert first == second
        assert len(sim.get_step_log()) == 4

    @pytest.mark.parametrize("name", ["bottom_up", "layered", "front_to_back", "mixed", "hinted_scan"])
    def test_deterministic(self, name, reference_config):
        sequence = ["B", "C", "D", "A"] * 5
        runs = [
            PackingSimulator(reference_config.container, reference_config.catalog)
            .run(sequence, get_strategy(name))
            for _ in range(2)
        ]
        assert runs[0] == runs[1]


# ---------------------------------------------------------------------------
# 5. Whole-solution verification
# ---------------------------------------------------------------------------

class TestVerifySolution:
    def test_valid(self, area_container, tile):
        placements = [Placement(tile, (0, 0)), Placement(tile, (4, 0))]
        assert verify_solution(placements, area_container)

    def test_overlap(self, area_container, tile):
        with pytest.raises(OverlapError):
            verify_solution([Placement(tile, (0, 0)), Placement(tile, (3, 3))], area_container)

    def test_out_of_bounds(self, area_container, tile):
        with pytest.raises(OutOfBoundsError):
            verify_solution([Placement(tile, (17, 0))], area_container)

    def test_supply(self, area_container):
        one = ItemType.square("one", 1, quantity=1, value=0)
        with pytest.raises(SupplyExceededError):
            verify_solution([Placement(one, (0, 0)), Placement(one, (5, 5))], area_container)
