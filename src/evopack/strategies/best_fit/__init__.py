"""Best-fit -- 2D anchor closest to the origin."""
from evopack.strategies.best_fit.strategy import BestFitStrategy

__all__ = ["BestFitStrategy"]
