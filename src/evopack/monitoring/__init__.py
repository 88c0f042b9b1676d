"""Batch metrics tracking and export."""

from evopack.monitoring.metrics import (
    BatchMetrics,
    EvaluationRecord,
    export_to_csv,
    export_to_json,
    format_summary,
)

__all__ = [
    "BatchMetrics", "EvaluationRecord",
    "export_to_csv", "export_to_json", "format_summary",
]
