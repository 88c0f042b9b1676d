"""
Solution — an ordered placement list with derived aggregates.

Every aggregate is recomputed from the solution's own placements on
access, so a Solution can never carry stale metrics.
"""

from collections import Counter
from dataclasses import dataclass, field
from typing import Dict, Tuple

from evopack.config import Container, FitnessWeights, Placement
from evopack.evaluation.fitness import PackingMetrics, compute_metrics, score


@dataclass(frozen=True)
class Solution:
    """
    Result of one evaluation.

    Attributes:
        placements: Successful placements, in placement order.
        container:  Container the placements live in.
        weights:    Fitness weights used for ``fitness``.
    """
    placements: Tuple[Placement, ...]
    container: Container
    weights: FitnessWeights = field(default_factory=FitnessWeights)

    def __post_init__(self) -> None:
        object.__setattr__(self, "placements", tuple(self.placements))

    @property
    def metrics(self) -> PackingMetrics:
        return compute_metrics(self.placements, self.container)

    @property
    def total_wastage(self) -> float:
        """Container capacity not covered by item material (≥ 0)."""
        return self.metrics.unfilled_measure

    @property
    def total_cost(self) -> float:
        """Summed unit value of the placed items."""
        return self.metrics.total_value

    @property
    def fitness(self) -> float:
        return score(self.metrics, self.weights, self.container.ndim)

    def count_by_item(self) -> Dict[str, int]:
        return dict(Counter(p.item_id for p in self.placements))

    def __len__(self) -> int:
        return len(self.placements)

    def to_dict(self) -> dict:
        return {
            "container": self.container.to_dict(),
            "fitness": round(self.fitness, 6),
            "total_wastage": round(self.total_wastage, 6),
            "total_cost": round(self.total_cost, 6),
            "metrics": self.metrics.to_dict(),
            "counts": self.count_by_item(),
            "placements": [p.to_dict() for p in self.placements],
        }
