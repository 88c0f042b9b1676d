"""
Packing evaluator — the single entry point a search engine calls.

    evaluator = PackingEvaluator(config)
    fitness, solution = evaluator.evaluate(PriorityEncoding((80, 20, 50, 10), 0, 1))

Every evaluation builds its own grid, simulator and strategy instance, so
evaluations share nothing but the immutable configuration.  That makes
``evaluate_many`` safe to fan out across a process pool.
"""

import logging
import os
from concurrent.futures import ProcessPoolExecutor, as_completed
from typing import List, Optional, Sequence, Tuple

from evopack.config import PackingConfig
from evopack.evaluation.encoding import DecodedPlan, Encoding
from evopack.evaluation.solution import Solution
from evopack.simulator.pipeline_simulator import PackingSimulator
from evopack.strategies import get_strategy

logger = logging.getLogger(__name__)


class PackingEvaluator:
    """
    Turns encodings into (fitness, Solution) pairs for one configuration.

    The evaluator itself holds no per-evaluation state; calling
    ``evaluate`` twice with the same encoding yields identical results.
    """

    def __init__(self, config: PackingConfig) -> None:
        self._config = config

    @property
    def config(self) -> PackingConfig:
        return self._config

    def decode(self, encoding: Encoding) -> DecodedPlan:
        return encoding.decode(self._config)

    def simulate(self, plan: DecodedPlan, verbose: bool = False) -> Tuple[Solution, PackingSimulator]:
        """Run *plan* and also return the simulator for its step log."""
        config = self._config
        simulator = PackingSimulator(config.container, config.catalog, verbose=verbose)
        strategy = get_strategy(plan.strategy)
        placements = simulator.run(plan.sequence, strategy, plan.params)
        solution = Solution(placements, config.container, config.weights)
        return solution, simulator

    def evaluate(self, encoding: Encoding) -> Tuple[float, Solution]:
        """
        Decode, simulate and score one encoding.

        Returns:
            ``(fitness, solution)``; ``fitness == solution.fitness``.
        """
        plan = self.decode(encoding)
        solution, _ = self.simulate(plan)
        fitness = solution.fitness
        logger.debug(
            "Evaluated %s: %d placements, fitness %.4f",
            plan.strategy, len(solution), fitness,
        )
        return fitness, solution

    def evaluate_many(
        self,
        encodings: Sequence[Encoding],
        max_workers: Optional[int] = None,
    ) -> List[Tuple[float, Solution]]:
        """
        Evaluate a batch of encodings, results in input order.

        ``max_workers=1`` evaluates sequentially in this process; otherwise
        the batch is spread over a ``ProcessPoolExecutor``.
        """
        encodings = list(encodings)
        if not encodings:
            return []
        workers = max_workers or os.cpu_count() or 1
        if workers == 1 or len(encodings) == 1:
            return [self.evaluate(e) for e in encodings]

        results: List[Optional[Tuple[float, Solution]]] = [None] * len(encodings)
        with ProcessPoolExecutor(max_workers=min(workers, len(encodings))) as executor:
            futures = {
                executor.submit(_evaluate_one, self._config, enc): idx
                for idx, enc in enumerate(encodings)
            }
            for future in as_completed(futures):
                results[futures[future]] = future.result()
        logger.info("Evaluated %d encodings on %d workers", len(encodings), workers)
        return results


def _evaluate_one(config: PackingConfig, encoding: Encoding) -> Tuple[float, Solution]:
    """Process-pool worker (module level so it pickles)."""
    return PackingEvaluator(config).evaluate(encoding)
