"""
Step logger — console output and structured recording of each step.

Usage:
    step_logger = StepLogger(verbose=True)
    for record in simulator.get_step_log():
        step_logger.log_step(record)
    step_logger.print_summary(simulator.get_summary(), solution)
"""

from typing import List, Optional

from evopack.evaluation.solution import Solution
from evopack.simulator.pipeline_simulator import StepRecord


class StepLogger:
    """Logs placement steps to console and stores them for JSON output."""

    def __init__(self, verbose: bool = False) -> None:
        self.verbose = verbose
        self._records: List[dict] = []

    def log_step(self, record: StepRecord) -> None:
        """Log a single step (success or rejection)."""
        self._records.append(record.to_dict())

        if not self.verbose:
            return

        if record.success and record.placement is not None:
            p = record.placement
            dims_str = "x".join(str(e) for e in p.extent)
            pos_str = ", ".join(str(c) for c in p.position)
            print(
                f"  Step {record.step:3d}: "
                f"{record.item_id:>4s} ({dims_str}) "
                f"-> ({pos_str}) "
                f"rot={p.rotation}  "
                f"fill={record.fill_ratio_after:.1%}  "
                f"[{record.elapsed_ms:.1f}ms]  OK"
            )
        else:
            print(
                f"  Step {record.step:3d}: "
                f"{record.item_id:>4s} "
                f"-> REJECTED: {record.rejection_reason}"
            )

    def print_summary(self, summary: dict, solution: Optional[Solution] = None) -> None:
        """Print a formatted run summary block."""
        print("\n" + "=" * 65)
        print("  PACKING SUMMARY")
        print("=" * 65)
        print(f"  Grid fill:        {summary['fill_ratio']:.1%}")
        print(f"  Items placed:     {summary['items_placed']} / {summary['items_total']}")
        print(f"  Items rejected:   {summary['items_rejected']}")
        print(f"  Computation time: {summary['computation_time_ms']:.1f} ms")
        if solution is not None:
            m = solution.metrics
            print(f"  Utilization:      {m.utilization:.1%}")
            print(f"  Shape wastage:    {m.wasted_measure:.2f}")
            print(f"  Total wastage:    {solution.total_wastage:.2f}")
            print(f"  Total value:      {solution.total_cost:.2f}")
            print(f"  Fitness:          {solution.fitness:.4f}")
            counts = ", ".join(f"{k}={v}" for k, v in sorted(solution.count_by_item().items()))
            print(f"  Per type:         {counts or '-'}")
        print("=" * 65 + "\n")

    def get_records(self) -> List[dict]:
        """All logged step records as dicts (for JSON output)."""
        return list(self._records)
