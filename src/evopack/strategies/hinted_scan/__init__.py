"""Hinted scan -- resumes from the last placement's follow-on coordinate."""
from evopack.strategies.hinted_scan.strategy import HintedScanStrategy

__all__ = ["HintedScanStrategy"]
