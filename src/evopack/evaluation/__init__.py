"""
evaluation — encodings, fitness metrics and the evaluator entry point.

Public API:
    from evopack.evaluation import PackingEvaluator, PriorityEncoding, PermutationEncoding
    from evopack.evaluation import Solution, PackingMetrics, compute_metrics, score
"""

from evopack.evaluation.fitness import PackingMetrics, compute_metrics, score
from evopack.evaluation.solution import Solution
from evopack.evaluation.encoding import (
    DecodedPlan,
    PermutationEncoding,
    PriorityEncoding,
    build_instance_pool,
)
from evopack.evaluation.evaluator import PackingEvaluator

__all__ = [
    "PackingMetrics", "compute_metrics", "score", "Solution",
    "DecodedPlan", "PriorityEncoding", "PermutationEncoding", "build_instance_pool",
    "PackingEvaluator",
]
