"""
Experiment runner — command-line entry point for the packing evaluator.

Modes:
  single   evaluate one priority encoding and print its solution summary
  --sweep  evaluate every strategy gene × layer gene for the given priorities
  --samples N
           evaluate N random priority encodings in parallel (a baseline
           driver for comparison, not a search engine)

Usage (CLI):
    evopack-run --priorities 80 20 50 10 --strategy-gene 1 --layer-gene 2 -v
    evopack-run --config config/shapes_2d.yaml --sweep --output output/sweep
    evopack-run --catalog output/catalogs/boxes_8.json --sweep
    evopack-run --samples 200 --seed 7 --workers 4 --output output/random

Usage (Python):
    from evopack.runner.experiment import run_single
    result = run_single(config, PriorityEncoding((80, 20, 50, 10), 0, 0))
"""

import argparse
import dataclasses
import json
import logging
import os
import time
from typing import List, Optional, Sequence

import numpy as np

from evopack.config import PackingConfig
from evopack.dataset.loader import load_catalog, load_catalog_container, load_catalog_metadata
from evopack.evaluation.encoding import PriorityEncoding
from evopack.evaluation.evaluator import PackingEvaluator
from evopack.monitoring.metrics import (
    BatchMetrics,
    EvaluationRecord,
    export_to_csv,
    export_to_json,
    format_summary,
)
from evopack.settings import load_config, reference_config
from evopack.strategies import GENE_TABLE_2D, GENE_TABLE_3D, LAYER_BANDS
from evopack.visualization.step_logger import StepLogger

logger = logging.getLogger(__name__)


# ─────────────────────────────────────────────────────────────────────────────
# Core API
# ─────────────────────────────────────────────────────────────────────────────

def with_catalog(config: PackingConfig, path: str) -> PackingConfig:
    """
    Swap in the item types (and stored container, if any) of a catalog JSON.

    Fitness weights, instance cap and strategy parameters are kept.
    """
    meta = load_catalog_metadata(path)
    container = load_catalog_container(path)
    if container is None:
        container = config.container
    catalog = tuple(load_catalog(path))
    logger.info(
        "Catalog %s (%s): %d item types", meta.get("name"), meta.get("generator"), len(catalog),
    )
    return dataclasses.replace(config, container=container, catalog=catalog)


def run_single(config: PackingConfig, encoding: PriorityEncoding, verbose: bool = False) -> dict:
    """
    Evaluate one encoding and collect everything a report needs.

    Returns:
        dict with keys: strategy, params, fitness, summary, solution, step_log.
    """
    evaluator = PackingEvaluator(config)
    plan = evaluator.decode(encoding)
    step_logger = StepLogger(verbose=verbose)

    if verbose:
        dims = "×".join(f"{d:g}" for d in config.container.dims)
        print(f"\n  Strategy:   {plan.strategy}")
        print(f"  Layer pref: {plan.params.layer_preference}")
        print(f"  Items:      {len(plan.sequence)}")
        print(f"  Container:  {dims}")
        print("-" * 65)

    solution, simulator = evaluator.simulate(plan)
    for record in simulator.get_step_log():
        step_logger.log_step(record)

    summary = simulator.get_summary()
    if verbose:
        step_logger.print_summary(summary, solution)

    return {
        "strategy": plan.strategy,
        "params": {
            "layer_preference": plan.params.layer_preference,
            "hint_layer_step": plan.params.hint_layer_step,
        },
        "fitness": solution.fitness,
        "summary": summary,
        "solution": solution.to_dict(),
        "step_log": step_logger.get_records(),
    }


def sweep_encodings(priorities: Sequence[float], ndim: int) -> List[PriorityEncoding]:
    """Every strategy gene × layer gene (layer genes only matter in 3D)."""
    table = GENE_TABLE_3D if ndim == 3 else GENE_TABLE_2D
    layers = range(LAYER_BANDS) if ndim == 3 else range(1)
    return [
        PriorityEncoding(tuple(priorities), gene, layer)
        for gene in range(len(table))
        for layer in layers
    ]


def run_batch(
    config: PackingConfig,
    encodings: Sequence[PriorityEncoding],
    labels: Sequence[str],
    batch_id: str,
    max_workers: Optional[int] = None,
) -> BatchMetrics:
    """Evaluate *encodings* (possibly in parallel) into a BatchMetrics."""
    evaluator = PackingEvaluator(config)
    metrics = BatchMetrics(batch_id=batch_id)
    results = evaluator.evaluate_many(encodings, max_workers=max_workers)
    for label, encoding, (_, solution) in zip(labels, encodings, results):
        strategy = evaluator.decode(encoding).strategy
        metrics.add_record(EvaluationRecord.from_solution(label, strategy, solution))
    metrics.mark_complete()
    return metrics


def run_sweep(config: PackingConfig, priorities: Sequence[float],
              max_workers: Optional[int] = None) -> BatchMetrics:
    encodings = sweep_encodings(priorities, config.ndim)
    labels = [f"gene={e.strategy_gene} layer={e.layer_gene}" for e in encodings]
    return run_batch(config, encodings, labels, "sweep", max_workers)


def run_samples(config: PackingConfig, n: int, seed: Optional[int] = None,
                max_workers: Optional[int] = None) -> BatchMetrics:
    rng = np.random.default_rng(seed)
    encodings = [PriorityEncoding.random(len(config.catalog), rng) for _ in range(n)]
    labels = [f"sample_{i:04d}" for i in range(n)]
    return run_batch(config, encodings, labels, f"samples_{n}_{seed}", max_workers)


# ─────────────────────────────────────────────────────────────────────────────
# CLI
# ─────────────────────────────────────────────────────────────────────────────

def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="evopack-run",
        description="Packing placement simulator and fitness evaluator",
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog="""
Examples:
  evopack-run --priorities 80 20 50 10 --strategy-gene 1 --layer-gene 2 -v
  evopack-run --config config/shapes_2d.yaml --sweep
  evopack-run --catalog output/catalogs/boxes_8.json --sweep
  evopack-run --samples 200 --seed 7 --workers 4 --output output/random
        """,
    )
    parser.add_argument("--config", type=str, default=None,
                        help="YAML configuration (default: built-in reference setup)")
    parser.add_argument("--catalog", type=str, default=None, metavar="FILE",
                        help="Catalog JSON replacing the configured items (and container)")

    # Encoding
    parser.add_argument("--priorities", type=float, nargs="+", default=None,
                        help="One priority per item type (default: catalog order)")
    parser.add_argument("--strategy-gene", type=int, default=0)
    parser.add_argument("--layer-gene", type=int, default=0)

    # Batch modes
    mode = parser.add_mutually_exclusive_group()
    mode.add_argument("--sweep", action="store_true",
                      help="Evaluate every strategy gene × layer gene")
    mode.add_argument("--samples", type=int, metavar="N",
                      help="Evaluate N random priority encodings")
    parser.add_argument("--seed", type=int, default=42)
    parser.add_argument("--workers", type=int, default=None,
                        help="Worker processes for batch modes (1 = sequential)")

    # Output
    parser.add_argument("--output", type=str, default=None,
                        help="Directory for JSON/CSV results")
    parser.add_argument("--verbose", "-v", action="store_true")
    parser.add_argument("--log-level", default="WARNING",
                        choices=["DEBUG", "INFO", "WARNING", "ERROR"])
    return parser


def main(argv: Optional[Sequence[str]] = None) -> int:
    args = build_parser().parse_args(argv)
    logging.basicConfig(
        level=getattr(logging, args.log_level),
        format="%(asctime)s %(levelname)-7s %(name)s: %(message)s",
    )

    # ── Config ───────────────────────────────────────────────────────────
    config = load_config(args.config) if args.config else reference_config()
    if args.catalog:
        config = with_catalog(config, args.catalog)
    n_types = len(config.catalog)
    priorities = args.priorities
    if priorities is None:
        # Strictly decreasing keeps catalog order.
        priorities = [float(n_types - i) for i in range(n_types)]
    if len(priorities) != n_types:
        print(f"  --priorities needs {n_types} values (one per item type), got {len(priorities)}")
        return 2

    t_start = time.perf_counter()

    # ── Batch modes ──────────────────────────────────────────────────────
    if args.sweep or args.samples:
        if args.sweep:
            batch = run_sweep(config, priorities, args.workers)
        else:
            batch = run_samples(config, args.samples, args.seed, args.workers)
        print(format_summary(batch))
        if args.output:
            json_path = os.path.join(args.output, f"{batch.batch_id}.json")
            csv_path = os.path.join(args.output, f"{batch.batch_id}.csv")
            export_to_json(batch, json_path)
            export_to_csv(batch, csv_path)
            print(f"  Results saved: {json_path}")
            print(f"  Records saved: {csv_path}")
        return 0

    # ── Single evaluation ────────────────────────────────────────────────
    encoding = PriorityEncoding(tuple(priorities), args.strategy_gene, args.layer_gene)
    result = run_single(config, encoding, verbose=args.verbose)
    elapsed = (time.perf_counter() - t_start) * 1000

    if args.output:
        os.makedirs(args.output, exist_ok=True)
        json_path = os.path.join(args.output, f"single_{result['strategy']}.json")
        with open(json_path, "w") as f:
            json.dump(result, f, indent=2)
        print(f"  Results saved: {json_path}")

    s = result["solution"]
    print(f"\n  Strategy: {result['strategy']}  |  "
          f"Placed: {result['summary']['items_placed']}/{result['summary']['items_total']}  |  "
          f"Fitness: {s['fitness']:.4f}  |  "
          f"Time: {elapsed:.0f}ms\n")
    return 0


if __name__ == "__main__":
    raise SystemExit(main())
