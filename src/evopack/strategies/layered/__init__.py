"""Layered -- starts in a preferred depth band."""
from evopack.strategies.layered.strategy import LayeredStrategy

__all__ = ["LayeredStrategy"]
