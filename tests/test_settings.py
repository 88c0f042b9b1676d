"""
Tests for YAML configuration loading.
"""

import os
import textwrap

import pytest

from evopack.config import (
    Circle,
    ConfigError,
    InvalidContainerSpec,
    InvalidItemSpec,
)
from evopack.settings import config_from_dict, load_config, reference_config

CONFIG_DIR = os.path.join(os.path.dirname(__file__), "..", "config")


def write_yaml(tmp_path, body: str):
    path = tmp_path / "cfg.yaml"
    path.write_text(textwrap.dedent(body))
    return path


MINIMAL = {
    "container": {"width": 10, "height": 10},
    "items": [{"id": "s", "shape": "square", "side": 2, "quantity": 3, "value": 1}],
}


class TestShippedConfigs:
    def test_default_matches_reference(self):
        assert load_config(os.path.join(CONFIG_DIR, "default.yaml")) == reference_config()

    def test_shapes_2d(self):
        cfg = load_config(os.path.join(CONFIG_DIR, "shapes_2d.yaml"))
        assert cfg.ndim == 2
        assert [i.id for i in cfg.catalog] == ["R", "S", "C", "T"]
        assert cfg.items_by_id["C"].shape == Circle(3)


class TestLoadConfig:
    def test_minimal_defaults(self):
        cfg = config_from_dict(MINIMAL)
        assert cfg.instance_cap == 50
        assert cfg.weights.wastage_basis == "shape"
        assert cfg.params.hint_layer_step == 5

    def test_overrides(self, tmp_path):
        path = write_yaml(tmp_path, """
            container: {width: 30, height: 20, depth: 10}
            items:
              - {id: A, width: 2, height: 2, depth: 2, quantity: 4, value: 3}
            fitness: {value_divisor: 5, wastage_basis: capacity, clamp_negative: false}
            instance_cap: 2
            strategy: {layer_preference: 1, hint_layer_step: 3}
        """)
        cfg = load_config(path)
        assert cfg.catalog[0].volume == 8
        assert cfg.weights.value_divisor == 5
        assert cfg.weights.clamp_negative is False
        assert cfg.instance_cap == 2
        assert cfg.params.layer_preference == 1

    @pytest.mark.parametrize("patch", [
        {"instance_cap": 0},
        {"unexpected": True},
        {"items": []},
        {"fitness": {"wastage_basis": "volume"}},
        {"strategy": {"hint_layer_step": 0}},
    ])
    def test_schema_errors(self, patch):
        with pytest.raises(ConfigError):
            config_from_dict({**MINIMAL, **patch})

    def test_missing_container(self):
        with pytest.raises(ConfigError):
            config_from_dict({"items": MINIMAL["items"]})

    def test_negative_item_size_keeps_domain_error(self):
        data = {**MINIMAL, "items": [{"id": "s", "shape": "square", "side": -2, "quantity": 1}]}
        with pytest.raises(InvalidItemSpec):
            config_from_dict(data)

    def test_missing_shape_parameter(self):
        data = {**MINIMAL, "items": [{"id": "c", "shape": "circle", "quantity": 1}]}
        with pytest.raises(InvalidItemSpec):
            config_from_dict(data)

    def test_bad_container(self):
        with pytest.raises(InvalidContainerSpec):
            config_from_dict({**MINIMAL, "container": {"width": -1, "height": 10}})

    def test_not_a_mapping(self, tmp_path):
        with pytest.raises(ConfigError):
            load_config(write_yaml(tmp_path, "- just\n- a list\n"))

    def test_invalid_yaml(self, tmp_path):
        with pytest.raises(ConfigError):
            load_config(write_yaml(tmp_path, "container: {width: 1\n"))
