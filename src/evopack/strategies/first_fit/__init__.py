"""First-fit -- 2D row-by-row raster scan."""
from evopack.strategies.first_fit.strategy import FirstFitStrategy

__all__ = ["FirstFitStrategy"]
