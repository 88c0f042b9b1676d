"""
evopack — packing placement simulator and fitness evaluator.

Feeds item sequences decoded from search-engine encodings through
deterministic placement strategies on a discrete occupancy grid and scores
the resulting layouts.

Public API:
    from evopack import PackingEvaluator, PriorityEncoding, PermutationEncoding
    from evopack import load_config, reference_config
"""

from evopack.config import (
    BoxShape,
    Circle,
    ConfigError,
    Container,
    FitnessWeights,
    InvalidContainerSpec,
    InvalidItemSpec,
    ItemType,
    PackingConfig,
    Placement,
    Rectangle,
    Square,
    StrategyParams,
    Triangle,
)
from evopack.evaluation import (
    PackingEvaluator,
    PermutationEncoding,
    PriorityEncoding,
    Solution,
)
from evopack.settings import load_config, reference_config

__version__ = "0.1.0"

__all__ = [
    "BoxShape", "Rectangle", "Square", "Circle", "Triangle",
    "ItemType", "Container", "Placement", "StrategyParams", "FitnessWeights",
    "PackingConfig", "InvalidItemSpec", "InvalidContainerSpec", "ConfigError",
    "PackingEvaluator", "PriorityEncoding", "PermutationEncoding", "Solution",
    "load_config", "reference_config",
]
