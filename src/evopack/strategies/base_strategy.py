"""
Strategy interface — abstract base class for all placement strategies.

Each call to ``decide_placement()`` receives one item and the current
occupancy grid and proposes WHERE to anchor the item.  Strategies differ
only in scan order and tie-break; all of them return the first (or best)
feasible anchor, or None when nothing fits.

Creating a strategy
~~~~~~~~~~~~~~~~~~~
1. Create ``strategies/my_strategy/strategy.py``
2. Subclass ``BaseStrategy``, set ``name`` and ``ndim``, implement
   ``decide_placement()``
3. Decorate with ``@register_strategy``
4. Import the module in ``strategies/__init__.py``

Strategies may keep per-run state (the hinted scan remembers where the last
item went), so the simulator builds a fresh instance for every evaluation.
"""

from abc import ABC, abstractmethod
from typing import Dict, List, Optional, Type

from evopack.config import Container, ItemType, Placement, PlacementDecision, StrategyParams
from evopack.simulator.occupancy_grid import OccupancyGrid


# ─────────────────────────────────────────────────────────────────────────────
# BaseStrategy
# ─────────────────────────────────────────────────────────────────────────────

class BaseStrategy(ABC):
    """
    Abstract base for placement strategies.

    The ``OccupancyGrid`` passed to ``decide_placement()`` is read-only for
    strategies:

    +------------------------------+----------------------------------------+
    | Attribute / Method           | Description                            |
    +==============================+========================================+
    | ``.can_place(...)``          | Bounds + overlap check for one anchor  |
    | ``.feasible_anchors(dims)``  | Boolean field of every free anchor     |
    | ``.shape``                   | Grid cells per axis                    |
    | ``.fill_ratio``              | Occupied fraction of the grid          |
    +------------------------------+----------------------------------------+
    """

    name: str = "unnamed"
    ndim: int = 3

    def __init__(self) -> None:
        self._container: Optional[Container] = None
        self._params: StrategyParams = StrategyParams()

    @property
    def container(self) -> Container:
        """Container, available after ``on_episode_start()``."""
        if self._container is None:
            raise RuntimeError("Strategy not initialised — call on_episode_start() first")
        return self._container

    @property
    def params(self) -> StrategyParams:
        return self._params

    def on_episode_start(self, container: Container, params: Optional[StrategyParams] = None) -> None:
        """Called once before the first item.  Override to initialise state."""
        if container.ndim != self.ndim:
            raise ValueError(
                f"Strategy '{self.name}' is {self.ndim}D, container is {container.ndim}D"
            )
        self._container = container
        self._params = params or StrategyParams()

    def on_placement(self, placement: Placement) -> None:
        """Called after the simulator committed one of this strategy's proposals."""
        pass

    def on_episode_end(self, summary: dict) -> None:
        """Called after the last item.  Override for cleanup."""
        pass

    @abstractmethod
    def decide_placement(
        self,
        item: ItemType,
        grid: OccupancyGrid,
    ) -> Optional[PlacementDecision]:
        """
        Propose an anchor for *item* given the current grid.

        Returns:
            ``PlacementDecision(position, rotation)`` or ``None`` if the
            item cannot be placed anywhere.
        """
        ...


# ─────────────────────────────────────────────────────────────────────────────
# Strategy registry
# ─────────────────────────────────────────────────────────────────────────────

STRATEGY_REGISTRY: Dict[str, Type[BaseStrategy]] = {}


def register_strategy(cls: Type[BaseStrategy]) -> Type[BaseStrategy]:
    """Class decorator — registers a strategy in the global registry."""
    STRATEGY_REGISTRY[cls.name] = cls
    return cls


def get_strategy(name: str) -> BaseStrategy:
    """Look up a strategy by name and return a new instance."""
    if name not in STRATEGY_REGISTRY:
        available = ", ".join(sorted(STRATEGY_REGISTRY.keys()))
        raise ValueError(f"Unknown strategy '{name}'.  Available: [{available}]")
    return STRATEGY_REGISTRY[name]()


def strategy_names(ndim: Optional[int] = None) -> List[str]:
    """Registered strategy names, optionally restricted to one dimensionality."""
    return sorted(
        name for name, cls in STRATEGY_REGISTRY.items()
        if ndim is None or cls.ndim == ndim
    )
