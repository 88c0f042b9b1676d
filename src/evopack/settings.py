"""
Settings — YAML configuration files validated with pydantic.

File layout::

    container: {width: 100, height: 80, depth: 100}   # omit depth for 2D
    items:
      - {id: A, shape: box, width: 10, height: 10, depth: 10, quantity: 150, value: 150}
      - {id: C, shape: circle, radius: 3, quantity: 15, value: 10}
    fitness:
      utilization_weight: 1.0
      value_divisor: 10.0
      wastage_penalty_weight: 0.5
      wastage_basis: shape          # or: capacity
      clamp_negative: null          # null = clamp in 3D only
    instance_cap: 50
    strategy:
      layer_preference: 0
      hint_layer_step: 5

The pydantic models check structure and types only; geometric validity
(positive sizes, supply, value) is left to the dataclasses in
``evopack.config`` so those errors keep their own types.

Usage:
    from evopack.settings import load_config
    config = load_config("config/default.yaml")
"""

from pathlib import Path
from typing import List, Literal, Optional, Union

import yaml
from pydantic import BaseModel, ConfigDict, Field, ValidationError

from evopack.config import (
    DEFAULT_INSTANCE_CAP,
    ConfigError,
    Container,
    FitnessWeights,
    ItemType,
    PackingConfig,
    ShapeKind,
    StrategyParams,
    shape_from_dict,
)
from evopack.dataset.generator import reference_catalog, reference_container

_SHAPE_PARAMS = ("width", "height", "depth", "side", "radius", "base")


class ContainerSettings(BaseModel):
    """Schema for the container block."""
    model_config = ConfigDict(extra="forbid")

    width: float = Field(description="X-axis extent")
    height: float = Field(description="Y-axis extent")
    depth: Optional[float] = Field(None, description="Z-axis extent; omit for 2D")

    def build(self) -> Container:
        return Container(width=self.width, height=self.height, depth=self.depth)


class ItemSettings(BaseModel):
    """Schema for one catalog entry; only the shape's own size fields are used."""
    model_config = ConfigDict(extra="forbid")

    id: str
    shape: ShapeKind = ShapeKind.BOX
    quantity: int
    value: float = 0.0
    width: Optional[float] = None
    height: Optional[float] = None
    depth: Optional[float] = None
    side: Optional[float] = None
    radius: Optional[float] = None
    base: Optional[float] = None

    def build(self) -> ItemType:
        shape = {"kind": self.shape.value}
        for name in _SHAPE_PARAMS:
            if getattr(self, name) is not None:
                shape[name] = getattr(self, name)
        return ItemType(id=self.id, shape=shape_from_dict(shape),
                        quantity=self.quantity, value=self.value)


class FitnessSettings(BaseModel):
    """Schema for the fitness weights block."""
    model_config = ConfigDict(extra="forbid")

    utilization_weight: float = Field(1.0, ge=0)
    value_divisor: float = Field(10.0, gt=0)
    wastage_penalty_weight: float = Field(0.5, ge=0)
    wastage_basis: Literal["shape", "capacity"] = "shape"
    clamp_negative: Optional[bool] = None

    def build(self) -> FitnessWeights:
        return FitnessWeights(**self.model_dump())


class StrategySettings(BaseModel):
    """Schema for parameters forwarded to strategies."""
    model_config = ConfigDict(extra="forbid")

    layer_preference: int = Field(0, ge=0)
    hint_layer_step: int = Field(5, ge=1)

    def build(self) -> StrategyParams:
        return StrategyParams(**self.model_dump())


class PackingSettings(BaseModel):
    """Root schema of a configuration file."""
    model_config = ConfigDict(extra="forbid")

    container: ContainerSettings
    items: List[ItemSettings] = Field(min_length=1)
    fitness: FitnessSettings = Field(default_factory=FitnessSettings)
    instance_cap: int = Field(DEFAULT_INSTANCE_CAP, ge=1)
    strategy: StrategySettings = Field(default_factory=StrategySettings)

    def build(self) -> PackingConfig:
        """Convert to the validated runtime configuration."""
        return PackingConfig(
            container=self.container.build(),
            catalog=tuple(item.build() for item in self.items),
            weights=self.fitness.build(),
            instance_cap=self.instance_cap,
            params=self.strategy.build(),
        )


def config_from_dict(data: dict) -> PackingConfig:
    """Validate a parsed mapping and build a ``PackingConfig``."""
    if not isinstance(data, dict):
        raise ConfigError(f"Configuration must be a mapping, got {type(data).__name__}")
    try:
        settings = PackingSettings.model_validate(data)
    except ValidationError as e:
        raise ConfigError(f"Invalid configuration:\n{e}") from e
    return settings.build()


def load_config(path: Union[str, Path]) -> PackingConfig:
    """Read a YAML configuration file into a ``PackingConfig``."""
    path = Path(path)
    try:
        with path.open("r") as f:
            data = yaml.safe_load(f)
    except yaml.YAMLError as e:
        raise ConfigError(f"{path}: not valid YAML ({e})") from e
    return config_from_dict(data)


def reference_config() -> PackingConfig:
    """The 100×80×100 reference setup with item types A–D."""
    return PackingConfig(container=reference_container(), catalog=tuple(reference_catalog()))
