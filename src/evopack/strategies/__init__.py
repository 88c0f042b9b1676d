"""
strategies -- pluggable placement strategy interface.

Public API:
    from evopack.strategies import BaseStrategy, get_strategy, register_strategy
    from evopack.strategies import strategy_for_gene

3D strategies: hinted_scan, bottom_up, layered, front_to_back, mixed
2D strategies: bottom_left, top_left, best_fit, first_fit
"""

from typing import Tuple

from evopack.strategies.base_strategy import (
    BaseStrategy,
    STRATEGY_REGISTRY,
    get_strategy,
    register_strategy,
    strategy_names,
)
import evopack.strategies.hinted_scan  # registers HintedScanStrategy
import evopack.strategies.bottom_up  # registers BottomUpStrategy
import evopack.strategies.layered  # registers LayeredStrategy
import evopack.strategies.front_to_back  # registers FrontToBackStrategy
import evopack.strategies.mixed  # registers MixedStrategy
import evopack.strategies.bottom_left  # registers BottomLeftStrategy
import evopack.strategies.top_left  # registers TopLeftStrategy
import evopack.strategies.best_fit  # registers BestFitStrategy
import evopack.strategies.first_fit  # registers FirstFitStrategy

# Strategy gene -> strategy name, per container dimensionality.
GENE_TABLE_3D: Tuple[str, ...] = ("bottom_up", "layered", "front_to_back", "mixed")
GENE_TABLE_2D: Tuple[str, ...] = ("bottom_left", "top_left", "best_fit", "first_fit")
LAYER_BANDS = 3


def strategy_for_gene(gene: int, ndim: int) -> str:
    """Map a strategy gene (any int, taken modulo the table size) to a name."""
    table = GENE_TABLE_3D if ndim == 3 else GENE_TABLE_2D
    return table[int(gene) % len(table)]


def layer_for_gene(gene: int) -> int:
    return int(gene) % LAYER_BANDS


__all__ = [
    "BaseStrategy", "get_strategy", "register_strategy", "STRATEGY_REGISTRY",
    "strategy_names", "strategy_for_gene", "layer_for_gene",
    "GENE_TABLE_3D", "GENE_TABLE_2D", "LAYER_BANDS",
]
