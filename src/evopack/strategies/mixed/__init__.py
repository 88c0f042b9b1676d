"""Mixed -- bottom-up or layered by preference, front-to-back fallback."""
from evopack.strategies.mixed.strategy import MixedStrategy

__all__ = ["MixedStrategy"]
