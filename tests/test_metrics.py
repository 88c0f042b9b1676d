"""
Tests for batch metrics, export, catalogs on disk and the CLI.
"""

import csv
import json

import pytest

from evopack.dataset.generator import generate_box_catalog, generate_shape_catalog
from evopack.dataset.loader import load_catalog, load_catalog_container, load_catalog_metadata
from evopack.monitoring.metrics import (
    BatchMetrics,
    EvaluationRecord,
    export_to_csv,
    export_to_json,
    format_summary,
)
from evopack.config import Container
from evopack.runner.experiment import main, sweep_encodings, with_catalog

SMALL_YAML = """
container: {width: 12, height: 8, depth: 12}
items:
  - {id: A, width: 2, height: 2, depth: 2, quantity: 20, value: 5}
  - {id: B, width: 3, height: 2, depth: 4, quantity: 10, value: 9}
"""


def record(label, fitness):
    return EvaluationRecord(label, "bottom_up", fitness, 3, 300.0, 0.0, 700.0, 30.0, 30.0)


@pytest.fixture
def batch():
    b = BatchMetrics("b1")
    for label, fitness in [("a", 2.0), ("b", 5.0), ("c", 1.0)]:
        b.add_record(record(label, fitness))
    b.mark_complete()
    return b


class TestBatchMetrics:
    def test_aggregates(self, batch):
        assert batch.best_fitness == 5.0
        assert batch.best_label == "b"
        assert batch.min_fitness == 1.0
        assert batch.mean_fitness == pytest.approx(8 / 3)
        assert batch.completed_at is not None

    def test_summary_dict_has_no_records(self, batch):
        assert "records" not in batch.to_summary_dict()

    def test_format_summary(self, batch):
        text = format_summary(batch)
        assert "Batch: b1" in text
        assert "Evaluations: 3" in text


class TestExport:
    def test_json(self, batch, tmp_path):
        path = tmp_path / "out" / "batch.json"
        export_to_json(batch, path)
        data = json.loads(path.read_text())
        assert len(data["records"]) == 3
        export_to_json(batch, path, include_records=False)
        assert "records" not in json.loads(path.read_text())

    def test_csv(self, batch, tmp_path):
        path = tmp_path / "batch.csv"
        export_to_csv(batch, path)
        rows = list(csv.DictReader(path.open()))
        assert [r["label"] for r in rows] == ["a", "b", "c"]

    def test_csv_empty(self, tmp_path):
        path = tmp_path / "empty.csv"
        export_to_csv(BatchMetrics("e"), path)
        assert path.read_text().startswith("label,strategy,fitness")


class TestCatalogFiles:
    def test_box_catalog_round_trip(self, tmp_path):
        path = str(tmp_path / "boxes.json")
        items = generate_box_catalog(5, seed=11, save_path=path)
        assert load_catalog(path) == items
        assert load_catalog_container(path).is_3d
        assert load_catalog_metadata(path)["item_count"] == 5

    def test_seeded(self):
        assert generate_shape_catalog(8, seed=3) == generate_shape_catalog(8, seed=3)

    def test_shape_catalog_cycles_kinds(self):
        kinds = [i.shape.kind.value for i in generate_shape_catalog(4, seed=1)]
        assert kinds == ["rectangle", "square", "circle", "triangle"]


class TestCli:
    def test_sweep_size(self):
        assert len(sweep_encodings((1, 2), 3)) == 12
        assert len(sweep_encodings((1, 2), 2)) == 4

    def test_single(self, tmp_path, capsys):
        cfg = tmp_path / "small.yaml"
        cfg.write_text(SMALL_YAML)
        out = tmp_path / "out"
        assert main(["--config", str(cfg), "--priorities", "1", "2",
                     "--strategy-gene", "1", "--output", str(out), "-v"]) == 0
        assert "Fitness" in capsys.readouterr().out
        data = json.loads((out / "single_layered.json").read_text())
        assert data["summary"]["items_placed"] > 0

    def test_sweep(self, tmp_path, capsys):
        cfg = tmp_path / "small.yaml"
        cfg.write_text(SMALL_YAML)
        out = tmp_path / "sweep"
        assert main(["--config", str(cfg), "--sweep", "--workers", "1", "--output", str(out)]) == 0
        assert (out / "sweep.csv").exists()
        assert "Evaluations: 12" in capsys.readouterr().out

    def test_samples(self, tmp_path):
        cfg = tmp_path / "small.yaml"
        cfg.write_text(SMALL_YAML)
        out = tmp_path / "samples"
        assert main(["--config", str(cfg), "--samples", "3", "--seed", "1",
                     "--workers", "1", "--output", str(out)]) == 0
        data = json.loads((out / "samples_3_1.json").read_text())
        assert len(data["records"]) == 3

    def test_priority_count_mismatch(self, tmp_path):
        cfg = tmp_path / "small.yaml"
        cfg.write_text(SMALL_YAML)
        assert main(["--config", str(cfg), "--priorities", "1"]) == 2

    def test_with_catalog_swaps_items_and_container(self, reference_config, tmp_path):
        path = str(tmp_path / "shapes.json")
        items = generate_shape_catalog(4, seed=2, save_path=path)
        cfg = with_catalog(reference_config, path)
        assert cfg.ndim == 2
        assert cfg.catalog == tuple(items)
        assert cfg.weights == reference_config.weights
        assert cfg.instance_cap == reference_config.instance_cap

    def test_catalog_flag(self, tmp_path, capsys):
        path = str(tmp_path / "boxes.json")
        generate_box_catalog(3, container=Container(20, 16, 20), seed=5, save_path=path)
        assert main(["--catalog", path, "--sweep", "--workers", "1"]) == 0
        assert "Evaluations: 12" in capsys.readouterr().out
