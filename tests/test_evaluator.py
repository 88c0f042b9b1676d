"""
Tests for encodings and the PackingEvaluator entry point.

Includes the whole-system guarantees every evaluation must satisfy:
no overlap, containment, supply limits, measure ordering, determinism.
"""

import logging
import textwrap

import pytest

from evopack.config import Container, ItemType, PackingConfig, StrategyParams
from evopack.evaluation.encoding import (
    PermutationEncoding,
    PriorityEncoding,
    build_instance_pool,
)
from evopack.evaluation.evaluator import PackingEvaluator
from evopack.settings import load_config
from evopack.simulator.validator import verify_solution


@pytest.fixture
def small_config():
    """Scaled-down volume setup that keeps full evaluations fast."""
    return PackingConfig(
        container=Container(20, 16, 20),
        catalog=(
            ItemType.box("A", 2, 2, 2, quantity=150, value=150),
            ItemType.box("B", 4, 3, 3, quantity=70, value=70),
            ItemType.box("C", 1, 2, 2, quantity=60, value=60),
            ItemType.box("D", 2, 3, 2, quantity=300, value=300),
        ),
    )


def assert_solution_invariants(solution):
    verify_solution(solution.placements, solution.container)
    for item_id, n in solution.count_by_item().items():
        item = next(p.item for p in solution.placements if p.item_id == item_id)
        assert n <= item.quantity
    m = solution.metrics
    assert 0 <= m.used_measure <= m.occupied_measure <= m.capacity
    assert m.wasted_measure >= 0
    assert solution.total_wastage >= 0


# ---------------------------------------------------------------------------
# 1. Priority decoding
# ---------------------------------------------------------------------------

class TestPriorityEncoding:
    def test_order_and_cap(self, reference_config):
        plan = PriorityEncoding((10, 90, 50, 90), strategy_gene=6, layer_gene=5).decode(
            reference_config)
        # Ties keep catalog order: B before D.
        runs = [plan.sequence[i * 50] for i in range(4)]
        assert runs == ["B", "D", "C", "A"]
        assert len(plan.sequence) == 200
        assert plan.strategy == "front_to_back"
        assert plan.params.layer_preference == 2

    def test_quantity_below_cap(self, small_config):
        cfg = PackingConfig(
            container=small_config.container,
            catalog=(ItemType.box("few", 1, 1, 1, quantity=3, value=1),),
        )
        assert PriorityEncoding((1,)).decode(cfg).sequence == ("few",) * 3

    def test_configurable_cap(self, small_config):
        cfg = PackingConfig(small_config.container, small_config.catalog, instance_cap=5)
        assert len(PriorityEncoding((1, 2, 3, 4)).decode(cfg).sequence) == 20

    def test_wrong_length(self, reference_config):
        with pytest.raises(ValueError, match="priorities"):
            PriorityEncoding((1, 2)).decode(reference_config)

    @pytest.mark.parametrize("bad", [float("nan"), float("inf")])
    def test_non_finite_priority_rejected(self, bad):
        with pytest.raises(ValueError, match="finite"):
            PriorityEncoding((1, bad, 3, 4))

    def test_2d_gene_table(self, shapes_config):
        plan = PriorityEncoding((1, 1, 1, 1), strategy_gene=2).decode(shapes_config)
        assert plan.strategy == "best_fit"

    def test_random_is_seeded(self):
        import numpy as np
        a = PriorityEncoding.random(4, np.random.default_rng(3))
        b = PriorityEncoding.random(4, np.random.default_rng(3))
        assert a == b
        assert all(0 <= p <= 100 for p in a.priorities)


# ---------------------------------------------------------------------------
# 2. Permutation decoding
# ---------------------------------------------------------------------------

class TestPermutationEncoding:
    def test_defaults_to_hinted_scan(self, reference_config):
        plan = PermutationEncoding(("A", "B")).decode(reference_config)
        assert plan.strategy == "hinted_scan"
        assert plan.sequence == ("A", "B")

    def test_defaults_to_first_fit_in_2d(self, shapes_config):
        encoding = PermutationEncoding(("R", "S", "C"))
        assert encoding.decode(shapes_config).strategy == "first_fit"
        fitness, solution = PackingEvaluator(shapes_config).evaluate(encoding)
        assert len(solution) == 3
        assert fitness == solution.fitness
        assert_solution_invariants(solution)

    def test_layer_preference_from_yaml(self, tmp_path):
        path = tmp_path / "layered.yaml"
        path.write_text(textwrap.dedent("""
            container: {width: 30, height: 20, depth: 30}
            items:
              - {id: A, width: 2, height: 2, depth: 2, quantity: 4, value: 1}
            strategy: {layer_preference: 2}
        """))
        cfg = load_config(path)
        plan = PermutationEncoding(("A",), strategy="layered").decode(cfg)
        assert plan.params.layer_preference == 2
        _, solution = PackingEvaluator(cfg).evaluate(
            PermutationEncoding(("A",), strategy="layered"))
        assert solution.placements[0].position == (0, 0, 20)

    def test_explicit_layer_preference_wins(self, reference_config):
        cfg = PackingConfig(
            container=reference_config.container,
            catalog=reference_config.catalog,
            params=StrategyParams(layer_preference=2),
        )
        plan = PermutationEncoding(("A",), layer_preference=1).decode(cfg)
        assert plan.params.layer_preference == 1

    def test_unknown_ids(self, reference_config):
        with pytest.raises(ValueError, match="Unknown"):
            PermutationEncoding(("A", "Z")).decode(reference_config)

    def test_excess_instances_dropped(self, reference_config, caplog):
        with caplog.at_level(logging.WARNING):
            plan = PermutationEncoding(["A"] * 60).decode(reference_config)
        assert len(plan.sequence) == 50
        assert "Dropped 10" in caplog.text

    def test_instance_pool(self, reference_config):
        pool = build_instance_pool(reference_config.catalog, 50)
        assert len(pool) == 200
        assert pool.count("C") == 50
        assert build_instance_pool(reference_config.catalog, 100).count("B") == 70


# ---------------------------------------------------------------------------
# 3. Evaluation scenarios
# ---------------------------------------------------------------------------

class TestEvaluate:
    def test_fifty_cubes_bottom_up(self, reference_config):
        evaluator = PackingEvaluator(reference_config)
        fitness, solution = evaluator.evaluate(
            PermutationEncoding(["A"] * 150, strategy="bottom_up"))
        assert len(solution) == 50
        assert solution.metrics.used_measure == 50_000
        assert fitness == solution.fitness
        assert fitness == pytest.approx(50_000 / 800_000 * 100 + 50 * 150 / 10)

    def test_empty_encoding(self, reference_config):
        fitness, solution = PackingEvaluator(reference_config).evaluate(PermutationEncoding(()))
        assert len(solution) == 0
        assert solution.total_wastage == 800_000
        assert solution.total_cost == 0
        assert fitness == 0

    def test_oversized_type_never_placed(self, small_config):
        cfg = PackingConfig(
            container=small_config.container,
            catalog=small_config.catalog + (ItemType.box("huge", 21, 1, 1, quantity=5, value=999),),
        )
        evaluator = PackingEvaluator(cfg)
        for gene in range(4):
            _, solution = evaluator.evaluate(PriorityEncoding((0, 0, 0, 0, 100), gene, 1))
            assert "huge" not in solution.count_by_item()

    @pytest.mark.parametrize("gene", range(4))
    @pytest.mark.parametrize("layer", range(3))
    def test_invariants_3d(self, small_config, gene, layer):
        _, solution = PackingEvaluator(small_config).evaluate(
            PriorityEncoding((30, 70, 10, 50), gene, layer))
        assert len(solution) > 0
        assert_solution_invariants(solution)

    @pytest.mark.parametrize("gene", range(4))
    def test_invariants_2d(self, shapes_config, gene):
        _, solution = PackingEvaluator(shapes_config).evaluate(
            PriorityEncoding((20, 40, 80, 60), gene))
        assert len(solution) > 0
        assert_solution_invariants(solution)

    def test_invariants_permutation(self, small_config):
        pool = build_instance_pool(small_config.catalog, small_config.instance_cap)
        pool = pool[::-1]
        _, solution = PackingEvaluator(small_config).evaluate(PermutationEncoding(pool))
        assert_solution_invariants(solution)

    def test_idempotent(self, small_config):
        evaluator = PackingEvaluator(small_config)
        encoding = PriorityEncoding((5, 15, 25, 35), 3, 2)
        first = evaluator.evaluate(encoding)
        second = evaluator.evaluate(encoding)
        assert first == second
        assert first[1].to_dict() == second[1].to_dict()


# ---------------------------------------------------------------------------
# 4. Batches
# ---------------------------------------------------------------------------

class TestEvaluateMany:
    def test_empty_batch(self, small_config):
        assert PackingEvaluator(small_config).evaluate_many([]) == []

    def test_sequential_matches_single(self, small_config):
        evaluator = PackingEvaluator(small_config)
        encodings = [PriorityEncoding((i, 10 - i, 3, 7), i % 4, i % 3) for i in range(4)]
        batch = evaluator.evaluate_many(encodings, max_workers=1)
        assert batch == [evaluator.evaluate(e) for e in encodings]

    def test_process_pool_preserves_order(self, small_config):
        evaluator = PackingEvaluator(small_config)
        encodings = [PriorityEncoding((i, 10 - i, 3, 7), i % 4, i % 3) for i in range(4)]
        pooled = evaluator.evaluate_many(encodings, max_workers=2)
        assert [f for f, _ in pooled] == [evaluator.evaluate(e)[0] for e in encodings]
