"""Metrics tracking and export for packing evaluation batches.

Provides dataclasses for tracking per-evaluation results and utilities for
exporting them to JSON and CSV formats.
"""

from __future__ import annotations

import csv
import json
import statistics
from dataclasses import asdict, dataclass, field
from datetime import datetime, timezone
from pathlib import Path
from typing import Any

from evopack.evaluation.solution import Solution

CSV_FIELDS = [
    "label", "strategy", "fitness", "placements", "used_measure",
    "wasted_measure", "unfilled_measure", "total_value", "utilization_pct",
]


def _now() -> datetime:
    return datetime.now(timezone.utc)


@dataclass
class EvaluationRecord:
    """Result of evaluating one encoding.

    Attributes:
        label: Free-form identifier (e.g. "gene=1 layer=2" or "sample_007").
        strategy: Strategy name the encoding decoded to.
        fitness: Scalar fitness score.
        placements: Number of successful placements.
        used_measure: Summed true area/volume of placed items.
        wasted_measure: Summed shape wastage of placed items.
        unfilled_measure: Capacity not covered by item material.
        total_value: Summed unit value of placed items.
        utilization_pct: used / capacity in percent (0-100).
    """

    label: str
    strategy: str
    fitness: float
    placements: int
    used_measure: float
    wasted_measure: float
    unfilled_measure: float
    total_value: float
    utilization_pct: float

    @classmethod
    def from_solution(cls, label: str, strategy: str, solution: Solution) -> EvaluationRecord:
        m = solution.metrics
        return cls(
            label=label,
            strategy=strategy,
            fitness=solution.fitness,
            placements=m.placement_count,
            used_measure=m.used_measure,
            wasted_measure=m.wasted_measure,
            unfilled_measure=m.unfilled_measure,
            total_value=m.total_value,
            utilization_pct=m.utilization * 100,
        )

    def to_dict(self) -> dict[str, Any]:
        """Convert to dictionary.

        Example:
            >>> r = EvaluationRecord("a", "bottom_up", 12.5, 3, 300.0, 0.0, 700.0, 30.0, 30.0)
            >>> r.to_dict()["strategy"]
            'bottom_up'
        """
        return asdict(self)


@dataclass
class BatchMetrics:
    """Aggregate metrics over a batch of evaluations.

    Attributes:
        batch_id: Unique identifier for the batch.
        best_fitness: Highest fitness seen.
        mean_fitness: Mean fitness over all records.
        min_fitness: Lowest fitness seen.
        best_label: Label of the best record.
        started_at: Batch start timestamp.
        completed_at: Batch completion timestamp (None if running).
        records: Per-evaluation records.
    """

    batch_id: str
    best_fitness: float = 0.0
    mean_fitness: float = 0.0
    min_fitness: float = 0.0
    best_label: str = ""
    runtime_seconds: float = 0.0
    started_at: datetime = field(default_factory=_now)
    completed_at: datetime | None = None
    records: list[EvaluationRecord] = field(default_factory=list)

    def add_record(self, record: EvaluationRecord) -> None:
        """Add an evaluation result and refresh the aggregates.

        Example:
            >>> bm = BatchMetrics("b1")
            >>> bm.add_record(EvaluationRecord("a", "bottom_up", 12.5, 3, 300.0, 0.0, 700.0, 30.0, 30.0))
            >>> bm.best_label
            'a'
        """
        self.records.append(record)
        self._recalculate_stats()

    def mark_complete(self) -> None:
        self.completed_at = _now()
        self.runtime_seconds = (self.completed_at - self.started_at).total_seconds()

    @property
    def best_record(self) -> EvaluationRecord | None:
        if not self.records:
            return None
        return max(self.records, key=lambda r: r.fitness)

    def _recalculate_stats(self) -> None:
        """Recalculate aggregate statistics from the records."""
        if not self.records:
            return
        fitnesses = [r.fitness for r in self.records]
        best = self.best_record
        self.best_fitness = best.fitness
        self.best_label = best.label
        self.mean_fitness = statistics.fmean(fitnesses)
        self.min_fitness = min(fitnesses)

    def to_dict(self) -> dict[str, Any]:
        d = asdict(self)
        d["started_at"] = self.started_at.isoformat()
        d["completed_at"] = self.completed_at.isoformat() if self.completed_at else None
        d["records"] = [r.to_dict() for r in self.records]
        return d

    def to_summary_dict(self) -> dict[str, Any]:
        """Convert to summary dictionary without per-evaluation records."""
        d = self.to_dict()
        del d["records"]
        return d


def export_to_json(metrics: BatchMetrics, output_path: Path | str, include_records: bool = True) -> None:
    """Export batch metrics to a JSON file.

    Args:
        metrics: BatchMetrics instance to export.
        output_path: Path to output JSON file.
        include_records: If False, write the summary only.
    """
    output_path = Path(output_path)
    output_path.parent.mkdir(parents=True, exist_ok=True)

    data = metrics.to_dict() if include_records else metrics.to_summary_dict()

    with output_path.open("w") as f:
        json.dump(data, f, indent=2)


def export_to_csv(metrics: BatchMetrics, output_path: Path | str) -> None:
    """Export per-evaluation records to a CSV file (header only when empty)."""
    output_path = Path(output_path)
    output_path.parent.mkdir(parents=True, exist_ok=True)

    with output_path.open("w", newline="") as f:
        writer = csv.DictWriter(f, fieldnames=CSV_FIELDS)
        writer.writeheader()
        for record in metrics.records:
            writer.writerow(record.to_dict())


def format_summary(metrics: BatchMetrics) -> str:
    """Generate human-readable summary of batch metrics.

    Example:
        >>> bm = BatchMetrics("b1")
        >>> "Batch: b1" in format_summary(bm)
        True
    """
    lines = [
        "=" * 60,
        f"Batch: {metrics.batch_id}",
        "=" * 60,
        f"Evaluations: {len(metrics.records)}",
        "",
        "Fitness Statistics:",
        f"  Best:  {metrics.best_fitness:.4f}  ({metrics.best_label or '-'})",
        f"  Mean:  {metrics.mean_fitness:.4f}",
        f"  Min:   {metrics.min_fitness:.4f}",
        "",
        f"Runtime: {metrics.runtime_seconds:.2f} seconds",
        f"Started:   {metrics.started_at.isoformat()}",
        f"Completed: {metrics.completed_at.isoformat() if metrics.completed_at else 'In Progress'}",
        "=" * 60,
    ]
    return "\n".join(lines)
