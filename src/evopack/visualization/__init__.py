"""
visualization — step-by-step console logging.

Public API:
    from evopack.visualization.step_logger import StepLogger
"""

from evopack.visualization.step_logger import StepLogger

__all__ = ["StepLogger"]
