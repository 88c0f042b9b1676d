"""Bottom-up -- fills the floor first (y, then x, then z)."""
from evopack.strategies.bottom_up.strategy import BottomUpStrategy

__all__ = ["BottomUpStrategy"]
