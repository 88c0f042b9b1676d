"""Front-to-back -- fills depth slices from the front (z, then y, then x)."""
from evopack.strategies.front_to_back.strategy import FrontToBackStrategy

__all__ = ["FrontToBackStrategy"]
