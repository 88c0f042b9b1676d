"""
simulator — placement engine, occupancy tracking and validation.

  **Core simulation**:
    PackingSimulator — feeds an item sequence through a strategy
    OccupancyGrid    — dense boolean field of filled container cells
    StepRecord       — immutable log entry per placement attempt

  **Validation**:
    validate_placement — single proposal against the current grid
    verify_solution    — exhaustive check of a finished placement list

Public API:
    from evopack.simulator import PackingSimulator, OccupancyGrid
    from evopack.simulator import verify_solution
"""

from evopack.simulator.occupancy_grid import OccupancyGrid
from evopack.simulator.pipeline_simulator import PackingSimulator, StepRecord
from evopack.simulator.validator import (
    validate_placement,
    verify_solution,
    PlacementError,
    InvalidRotationError,
    OutOfBoundsError,
    OverlapError,
    SupplyExceededError,
)

__all__ = [
    # Core simulation
    "PackingSimulator", "OccupancyGrid", "StepRecord",
    # Validation
    "validate_placement", "verify_solution", "PlacementError",
    "InvalidRotationError", "OutOfBoundsError", "OverlapError", "SupplyExceededError",
]
