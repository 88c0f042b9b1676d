"""
Encodings — how a search engine describes one candidate.

Two encodings are supported; both decode into a ``DecodedPlan``
(item-id sequence + strategy name + strategy parameters) that the
simulator consumes.

PriorityEncoding
    One priority per catalog entry plus a strategy gene and a layer gene.
    Item types are sorted by priority (highest first, ties in catalog
    order) and each type is repeated ``min(quantity, instance_cap)`` times.
    The strategy gene selects from the gene table of the container's
    dimensionality (modulo 4), the layer gene picks a depth band (modulo 3).

PermutationEncoding
    An explicit ordering of item ids, typically a shuffle of
    ``build_instance_pool``.  Without an explicit strategy it runs the
    hinted scan in 3D (where item order has the most effect) and first-fit
    in 2D.
"""

import logging
import math
from collections import Counter
from dataclasses import dataclass
from typing import List, Optional, Sequence, Tuple, Union

import numpy as np

from evopack.config import ItemType, PackingConfig, StrategyParams
from evopack.strategies import layer_for_gene, strategy_for_gene

logger = logging.getLogger(__name__)

DEFAULT_PERMUTATION_STRATEGY = {3: "hinted_scan", 2: "first_fit"}


@dataclass(frozen=True)
class DecodedPlan:
    """Concrete simulator input produced from an encoding."""
    sequence: Tuple[str, ...]
    strategy: str
    params: StrategyParams


# ─────────────────────────────────────────────────────────────────────────────
# Priority encoding
# ─────────────────────────────────────────────────────────────────────────────

@dataclass(frozen=True)
class PriorityEncoding:
    """
    Priorities (one per catalog entry, catalog order) and two control genes.

    Attributes:
        priorities:    Higher value ⇒ type is fed to the simulator earlier.
        strategy_gene: Index into the gene table (taken modulo its size).
        layer_gene:    Preferred depth band (taken modulo 3).
    """
    priorities: Tuple[float, ...]
    strategy_gene: int = 0
    layer_gene: int = 0

    def __post_init__(self) -> None:
        object.__setattr__(self, "priorities", tuple(float(p) for p in self.priorities))
        if not all(math.isfinite(p) for p in self.priorities):
            raise ValueError(f"Priorities must be finite, got {self.priorities}")

    @classmethod
    def random(
        cls,
        n_types: int,
        rng: Optional[np.random.Generator] = None,
        max_priority: int = 100,
    ) -> "PriorityEncoding":
        """Uniform random priorities in ``[0, max_priority]`` and random genes."""
        rng = rng or np.random.default_rng()
        priorities = rng.integers(0, max_priority + 1, size=n_types)
        genes = rng.integers(0, 11, size=2)
        return cls(tuple(int(p) for p in priorities), int(genes[0]), int(genes[1]))

    def decode(self, config: PackingConfig) -> DecodedPlan:
        if len(self.priorities) != len(config.catalog):
            raise ValueError(
                f"Expected {len(config.catalog)} priorities (one per item type), "
                f"got {len(self.priorities)}"
            )

        # sorted() is stable, so equal priorities keep catalog order.
        ranked = sorted(
            range(len(config.catalog)),
            key=lambda i: -self.priorities[i],
        )
        sequence: List[str] = []
        for i in ranked:
            item = config.catalog[i]
            sequence.extend([item.id] * min(item.quantity, config.instance_cap))

        params = StrategyParams(
            layer_preference=layer_for_gene(self.layer_gene),
            hint_layer_step=config.params.hint_layer_step,
        )
        return DecodedPlan(
            sequence=tuple(sequence),
            strategy=strategy_for_gene(self.strategy_gene, config.ndim),
            params=params,
        )


# ─────────────────────────────────────────────────────────────────────────────
# Permutation encoding
# ─────────────────────────────────────────────────────────────────────────────

@dataclass(frozen=True)
class PermutationEncoding:
    """
    Explicit item-id ordering.

    Attributes:
        sequence:         Item ids in the order they are offered.
        strategy:         Registered strategy name; ``None`` picks the default
                          for the container's dimensionality.
        layer_preference: Forwarded to band-aware strategies; ``None`` uses
                          the configured ``strategy.layer_preference``.
    """
    sequence: Tuple[str, ...]
    strategy: Optional[str] = None
    layer_preference: Optional[int] = None

    def __post_init__(self) -> None:
        object.__setattr__(self, "sequence", tuple(self.sequence))

    def decode(self, config: PackingConfig) -> DecodedPlan:
        items = config.items_by_id
        unknown = sorted({i for i in self.sequence if i not in items})
        if unknown:
            raise ValueError(f"Unknown item ids in permutation: {unknown}")

        seen: Counter = Counter()
        sequence: List[str] = []
        dropped = 0
        for item_id in self.sequence:
            limit = min(items[item_id].quantity, config.instance_cap)
            if seen[item_id] >= limit:
                dropped += 1
                continue
            seen[item_id] += 1
            sequence.append(item_id)
        if dropped:
            logger.warning(
                "Dropped %d permutation entries beyond per-type supply/cap", dropped,
            )

        layer = self.layer_preference
        if layer is None:
            layer = config.params.layer_preference
        params = StrategyParams(
            layer_preference=layer,
            hint_layer_step=config.params.hint_layer_step,
        )
        strategy = self.strategy or DEFAULT_PERMUTATION_STRATEGY[config.ndim]
        return DecodedPlan(sequence=tuple(sequence), strategy=strategy, params=params)


Encoding = Union[PriorityEncoding, PermutationEncoding]


def build_instance_pool(catalog: Sequence[ItemType], cap: int) -> List[str]:
    """
    Multiset of item ids a permutation search shuffles.

    Each type contributes ``min(quantity, cap)`` copies, in catalog order.
    """
    pool: List[str] = []
    for item in catalog:
        pool.extend([item.id] * min(item.quantity, cap))
    return pool
