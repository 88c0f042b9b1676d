"""Top-left -- 2D column scan from the top edge."""
from evopack.strategies.top_left.strategy import TopLeftStrategy

__all__ = ["TopLeftStrategy"]
