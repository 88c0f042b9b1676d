"""Bottom-left -- 2D column scan from the bottom edge."""
from evopack.strategies.bottom_left.strategy import BottomLeftStrategy

__all__ = ["BottomLeftStrategy"]
