"""
Fitness evaluation — aggregate metrics and the scalar score.

    used      = Σ true area/volume of the placed items
    occupied  = Σ bounding-box footprint of the placed items
    wasted    = occupied − used            (shape wastage)
    unfilled  = capacity − used            (reported separately)

    fitness   = uw · used/capacity · 100
              + total_value / value_divisor
              − wp · penalised/capacity · 100

``penalised`` is the shape wastage by default and the unfilled capacity
when ``FitnessWeights.wastage_basis == "capacity"``.  The score is clamped
at 0 in 3D mode unless ``clamp_negative`` says otherwise.

Both functions are pure: no grid, no simulator, just the placement list.
"""

from dataclasses import asdict, dataclass
from typing import Sequence

from evopack.config import Container, FitnessWeights, Placement


@dataclass(frozen=True)
class PackingMetrics:
    """Aggregate measures of one placement list."""
    used_measure: float
    occupied_measure: float
    wasted_measure: float
    unfilled_measure: float
    total_value: float
    capacity: float
    placement_count: int

    @property
    def utilization(self) -> float:
        """used / capacity in [0, 1]."""
        return self.used_measure / self.capacity if self.capacity > 0 else 0.0

    def to_dict(self) -> dict:
        d = asdict(self)
        d["utilization"] = round(self.utilization, 6)
        return d


def compute_metrics(placements: Sequence[Placement], container: Container) -> PackingMetrics:
    used = 0.0
    occupied = 0.0
    value = 0.0
    for p in placements:
        used += p.item.measure
        occupied += p.item.bounding_measure
        value += p.item.value

    capacity = container.capacity
    return PackingMetrics(
        used_measure=used,
        occupied_measure=occupied,
        # Float noise must never make wastage negative.
        wasted_measure=max(occupied - used, 0.0),
        unfilled_measure=max(capacity - used, 0.0),
        total_value=value,
        capacity=capacity,
        placement_count=len(placements),
    )


def score(metrics: PackingMetrics, weights: FitnessWeights, ndim: int) -> float:
    """Combine *metrics* into the scalar fitness (higher is better)."""
    if metrics.capacity <= 0:
        return 0.0

    if weights.wastage_basis == "capacity":
        penalised = metrics.unfilled_measure
    else:
        penalised = metrics.wasted_measure

    utilization_score = weights.utilization_weight * metrics.used_measure / metrics.capacity * 100
    value_score = metrics.total_value / weights.value_divisor
    wastage_penalty = weights.wastage_penalty_weight * penalised / metrics.capacity * 100

    fitness = utilization_score + value_score - wastage_penalty
    if weights.clamps(ndim):
        fitness = max(0.0, fitness)
    return fitness
