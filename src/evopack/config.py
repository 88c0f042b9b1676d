"""
Central configuration and data models for the packing evaluator.

All modules import their core types from here to ensure consistency
across the catalog, simulator, strategy, evaluation and reporting layers.

Classes:
    ShapeKind        — tag of a shape variant
    BoxShape         — 3D axis-aligned box (width × height × depth)
    Rectangle        — 2D rectangle
    Square           — 2D square
    Circle           — 2D circle (radius)
    Triangle         — 2D triangle (base, height)
    ItemType         — catalog entry: shape, available quantity, unit value
    Container        — fixed 2D or 3D space items are placed into
    Orientation      — maps a rotation code to permuted cell dimensions
    Placement        — validated result of placing one item instance
    PlacementDecision— strategy's proposed anchor (before validation)
    StrategyParams   — tuneable parameters forwarded to strategies
    FitnessWeights   — weights of the scalar fitness score
    PackingConfig    — validated setup value for a whole run

Errors:
    InvalidItemSpec, InvalidContainerSpec, ConfigError
"""

import enum
import math
import numbers
from dataclasses import dataclass, field
from typing import Dict, Optional, Tuple, Union


# ─────────────────────────────────────────────────────────────────────────────
# Errors
# ─────────────────────────────────────────────────────────────────────────────

class InvalidItemSpec(ValueError):
    """Item type has a non-positive dimension, negative supply or value."""


class InvalidContainerSpec(ValueError):
    """Container has a non-positive (or sub-cell) dimension."""


class ConfigError(ValueError):
    """Configuration file does not match the expected schema."""


def _is_real(value) -> bool:
    return isinstance(value, numbers.Real) and not isinstance(value, bool)


def _is_positive(value) -> bool:
    return _is_real(value) and math.isfinite(value) and value > 0


# ─────────────────────────────────────────────────────────────────────────────
# Shapes
# ─────────────────────────────────────────────────────────────────────────────

class ShapeKind(str, enum.Enum):
    BOX = "box"
    RECTANGLE = "rectangle"
    SQUARE = "square"
    CIRCLE = "circle"
    TRIANGLE = "triangle"


class _ShapeMeasures:
    """Derived measures shared by every shape variant."""

    @property
    def bounding_measure(self) -> float:
        return math.prod(self.bounding_dims)

    @property
    def wastage_factor(self) -> float:
        return self.measure / self.bounding_measure


@dataclass(frozen=True)
class BoxShape(_ShapeMeasures):
    """Axis-aligned box.  Bounding box is exact, so wastage factor is 1."""
    width: float
    height: float
    depth: float

    kind = ShapeKind.BOX
    ndim = 3

    @property
    def params(self) -> Tuple[float, ...]:
        return (self.width, self.height, self.depth)

    @property
    def measure(self) -> float:
        return self.width * self.height * self.depth

    @property
    def bounding_dims(self) -> Tuple[float, ...]:
        return (self.width, self.height, self.depth)


@dataclass(frozen=True)
class Rectangle(_ShapeMeasures):
    width: float
    height: float

    kind = ShapeKind.RECTANGLE
    ndim = 2

    @property
    def params(self) -> Tuple[float, ...]:
        return (self.width, self.height)

    @property
    def measure(self) -> float:
        return self.width * self.height

    @property
    def bounding_dims(self) -> Tuple[float, ...]:
        return (self.width, self.height)


@dataclass(frozen=True)
class Square(_ShapeMeasures):
    side: float

    kind = ShapeKind.SQUARE
    ndim = 2

    @property
    def params(self) -> Tuple[float, ...]:
        return (self.side,)

    @property
    def measure(self) -> float:
        return self.side * self.side

    @property
    def bounding_dims(self) -> Tuple[float, ...]:
        return (self.side, self.side)


@dataclass(frozen=True)
class Circle(_ShapeMeasures):
    """Circle of radius *r*: area π·r², bounding square (2r)², factor π/4."""
    radius: float

    kind = ShapeKind.CIRCLE
    ndim = 2

    @property
    def params(self) -> Tuple[float, ...]:
        return (self.radius,)

    @property
    def measure(self) -> float:
        return math.pi * self.radius * self.radius

    @property
    def bounding_dims(self) -> Tuple[float, ...]:
        return (2 * self.radius, 2 * self.radius)


@dataclass(frozen=True)
class Triangle(_ShapeMeasures):
    """Triangle: area ½·base·height inside a base × height bounding box."""
    base: float
    height: float

    kind = ShapeKind.TRIANGLE
    ndim = 2

    @property
    def params(self) -> Tuple[float, ...]:
        return (self.base, self.height)

    @property
    def measure(self) -> float:
        return 0.5 * self.base * self.height

    @property
    def bounding_dims(self) -> Tuple[float, ...]:
        return (self.base, self.height)


Shape = Union[BoxShape, Rectangle, Square, Circle, Triangle]

SHAPE_TYPES: Dict[ShapeKind, type] = {
    ShapeKind.BOX: BoxShape,
    ShapeKind.RECTANGLE: Rectangle,
    ShapeKind.SQUARE: Square,
    ShapeKind.CIRCLE: Circle,
    ShapeKind.TRIANGLE: Triangle,
}


def shape_from_dict(d: dict) -> Shape:
    """Build a shape from ``{"kind": ..., <param>: ...}``."""
    try:
        kind = ShapeKind(d.get("kind", "box"))
    except ValueError as e:
        raise InvalidItemSpec(f"Unknown shape kind {d.get('kind')!r}") from e
    cls = SHAPE_TYPES[kind]
    names = cls.__dataclass_fields__.keys()
    missing = [n for n in names if n not in d]
    if missing:
        raise InvalidItemSpec(f"Shape '{kind.value}' is missing {missing}")
    return cls(**{n: d[n] for n in names})


def shape_to_dict(shape: Shape) -> dict:
    d = {"kind": shape.kind.value}
    for name in shape.__dataclass_fields__:
        d[name] = getattr(shape, name)
    return d


# ─────────────────────────────────────────────────────────────────────────────
# Item types
# ─────────────────────────────────────────────────────────────────────────────

@dataclass(frozen=True)
class ItemType:
    """
    One kind of packable item.

    Attributes:
        id:       Unique catalog key.
        shape:    Shape variant carrying only its own size parameters.
        quantity: Available supply (finite, ≥ 0).
        value:    Unit value (≥ 0), summed into the solution's total cost.
    """
    id: str
    shape: Shape
    quantity: int
    value: float

    def __post_init__(self) -> None:
        if not isinstance(self.id, str) or not self.id:
            raise InvalidItemSpec(f"Item id must be a non-empty string, got {self.id!r}")
        if not isinstance(self.shape, tuple(SHAPE_TYPES.values())):
            raise InvalidItemSpec(f"Item '{self.id}': unsupported shape {self.shape!r}")
        for p in self.shape.params:
            if not _is_positive(p):
                raise InvalidItemSpec(
                    f"Item '{self.id}': dimensions must be positive, got {self.shape.params}"
                )
        if (isinstance(self.quantity, bool) or not isinstance(self.quantity, numbers.Integral)
                or self.quantity < 0):
            raise InvalidItemSpec(
                f"Item '{self.id}': quantity must be a non-negative integer, got {self.quantity!r}"
            )
        object.__setattr__(self, "quantity", int(self.quantity))
        if not _is_real(self.value) or not math.isfinite(self.value) or self.value < 0:
            raise InvalidItemSpec(f"Item '{self.id}': value must be ≥ 0, got {self.value!r}")

    # ── Constructors ─────────────────────────────────────────────────────

    @classmethod
    def box(cls, id: str, width: float, height: float, depth: float,
            quantity: int, value: float) -> "ItemType":
        return cls(id, BoxShape(width, height, depth), quantity, value)

    @classmethod
    def rectangle(cls, id: str, width: float, height: float,
                  quantity: int, value: float) -> "ItemType":
        return cls(id, Rectangle(width, height), quantity, value)

    @classmethod
    def square(cls, id: str, side: float, quantity: int, value: float) -> "ItemType":
        return cls(id, Square(side), quantity, value)

    @classmethod
    def circle(cls, id: str, radius: float, quantity: int, value: float) -> "ItemType":
        return cls(id, Circle(radius), quantity, value)

    @classmethod
    def triangle(cls, id: str, base: float, height: float,
                 quantity: int, value: float) -> "ItemType":
        return cls(id, Triangle(base, height), quantity, value)

    # ── Derived quantities ───────────────────────────────────────────────

    @property
    def ndim(self) -> int:
        return self.shape.ndim

    @property
    def measure(self) -> float:
        """True geometric area (2D) or volume (3D)."""
        return self.shape.measure

    @property
    def area(self) -> float:
        return self.shape.measure

    @property
    def volume(self) -> float:
        return self.shape.measure

    @property
    def bounding_dims(self) -> Tuple[float, ...]:
        return self.shape.bounding_dims

    @property
    def bounding_measure(self) -> float:
        """Axis-aligned enclosing box footprint; always ≥ ``measure``."""
        return self.shape.bounding_measure

    @property
    def bounding_area(self) -> float:
        return self.bounding_measure

    @property
    def bounding_volume(self) -> float:
        return self.bounding_measure

    @property
    def wastage_factor(self) -> float:
        """True measure / bounding measure (1 for boxes and rectangles)."""
        return self.shape.wastage_factor

    @property
    def cell_dims(self) -> Tuple[int, ...]:
        """Bounding dims ceiling-rounded to whole grid cells."""
        return tuple(int(math.ceil(d)) for d in self.shape.bounding_dims)

    def to_dict(self) -> dict:
        return {"id": self.id, "shape": shape_to_dict(self.shape),
                "quantity": self.quantity, "value": self.value}

    @classmethod
    def from_dict(cls, d: dict) -> "ItemType":
        return cls(id=d["id"], shape=shape_from_dict(d["shape"]),
                   quantity=d["quantity"], value=d["value"])

    def __repr__(self) -> str:
        dims = "×".join(f"{p:g}" for p in self.shape.params)
        return (f"ItemType({self.id}: {self.shape.kind.value} {dims}, "
                f"qty={self.quantity}, value={self.value:g})")


# ─────────────────────────────────────────────────────────────────────────────
# Container
# ─────────────────────────────────────────────────────────────────────────────

@dataclass(frozen=True)
class Container:
    """
    The fixed space items are placed into.

    Attributes:
        width:  X-axis extent.
        height: Y-axis extent.
        depth:  Z-axis extent, or None for a 2D (area) container.
    """
    width: float
    height: float
    depth: Optional[float] = None

    def __post_init__(self) -> None:
        for name, d in (("width", self.width), ("height", self.height), ("depth", self.depth)):
            if name == "depth" and d is None:
                continue
            if not _is_positive(d):
                raise InvalidContainerSpec(f"Container {name} must be positive, got {d!r}")
            if d < 1:
                raise InvalidContainerSpec(
                    f"Container {name}={d!r} is smaller than one grid cell"
                )

    @property
    def ndim(self) -> int:
        return 2 if self.depth is None else 3

    @property
    def is_3d(self) -> bool:
        return self.depth is not None

    @property
    def dims(self) -> Tuple[float, ...]:
        if self.depth is None:
            return (self.width, self.height)
        return (self.width, self.height, self.depth)

    @property
    def capacity(self) -> float:
        """Declared area (2D) or volume (3D)."""
        return math.prod(self.dims)

    @property
    def grid_shape(self) -> Tuple[int, ...]:
        """Whole cells along each axis (floor, so every cell lies inside)."""
        return tuple(int(math.floor(d)) for d in self.dims)

    def to_dict(self) -> dict:
        return {"width": self.width, "height": self.height, "depth": self.depth}

    @classmethod
    def from_dict(cls, d: dict) -> "Container":
        return cls(width=d["width"], height=d["height"], depth=d.get("depth"))


# ─────────────────────────────────────────────────────────────────────────────
# Orientation
# ─────────────────────────────────────────────────────────────────────────────

class Orientation:
    """
    Maps a rotation code to the permuted cell dimensions.

    3D codes 0-5 cover all six axis permutations of (w, h, d):
      0:(w,h,d) 1:(w,d,h) 2:(h,w,d) 3:(h,d,w) 4:(d,w,h) 5:(d,h,w)
    2D items only accept code 0.
    """

    PERMUTATIONS_3D: Tuple[Tuple[int, int, int], ...] = (
        (0, 1, 2), (0, 2, 1), (1, 0, 2), (1, 2, 0), (2, 0, 1), (2, 1, 0),
    )

    @staticmethod
    def dims(dims: Tuple[int, ...], rotation: int = 0) -> Tuple[int, ...]:
        if len(dims) == 3:
            if not 0 <= rotation < len(Orientation.PERMUTATIONS_3D):
                raise ValueError(f"Rotation code must be in 0..5, got {rotation}")
            return tuple(dims[i] for i in Orientation.PERMUTATIONS_3D[rotation])
        if rotation != 0:
            raise ValueError(f"2D items only support rotation 0, got {rotation}")
        return tuple(dims)


# ─────────────────────────────────────────────────────────────────────────────
# Placement (validated, immutable result of an item placement)
# ─────────────────────────────────────────────────────────────────────────────

@dataclass(frozen=True)
class Placement:
    """
    A single validated item placement inside the container.

    Attributes:
        item:     The placed ItemType (read-only catalog reference).
        position: Anchor cell, 2 or 3 integer grid coordinates.
        rotation: Orientation code (0 for every current strategy).
        step:     Sequential step number in the simulation run.
    """
    item: ItemType
    position: Tuple[int, ...]
    rotation: int = 0
    step: int = 0

    @property
    def item_id(self) -> str:
        return self.item.id

    @property
    def extent(self) -> Tuple[int, ...]:
        """Cell span along each axis after rotation."""
        return Orientation.dims(self.item.cell_dims, self.rotation)

    @property
    def upper(self) -> Tuple[int, ...]:
        """Exclusive upper corner of the occupied cell block."""
        return tuple(p + e for p, e in zip(self.position, self.extent))

    def to_dict(self) -> dict:
        return {
            "step": self.step,
            "item_id": self.item.id,
            "position": list(self.position),
            "rotation": self.rotation,
            "extent": list(self.extent),
        }


# ─────────────────────────────────────────────────────────────────────────────
# PlacementDecision (strategy output, before simulator validation)
# ─────────────────────────────────────────────────────────────────────────────

@dataclass(frozen=True)
class PlacementDecision:
    """A strategy's proposed anchor (not yet validated by the simulator)."""
    position: Tuple[int, ...]
    rotation: int = 0


# ─────────────────────────────────────────────────────────────────────────────
# Strategy parameters & fitness weights
# ─────────────────────────────────────────────────────────────────────────────

@dataclass(frozen=True)
class StrategyParams:
    """
    Parameters forwarded to a strategy at episode start.

    Attributes:
        layer_preference: Preferred depth band (0..2) for layered / mixed.
        hint_layer_step:  Coarse z/y advance of the hinted scan on overflow.
    """
    layer_preference: int = 0
    hint_layer_step: int = 5

    def __post_init__(self) -> None:
        if self.hint_layer_step < 1:
            raise ConfigError(f"hint_layer_step must be ≥ 1, got {self.hint_layer_step}")


WASTAGE_BASES = ("shape", "capacity")


@dataclass(frozen=True)
class FitnessWeights:
    """
    Weights of the scalar fitness score.

    fitness = utilization_weight · used/capacity · 100
            + total_value / value_divisor
            − wastage_penalty_weight · wasted/capacity · 100

    Attributes:
        utilization_weight:     Multiplier of the 0-100 utilisation score.
        value_divisor:          Divisor applied to the summed unit values.
        wastage_penalty_weight: 0.5 penalises up to 50 points.
        wastage_basis:          "shape" penalises bounding-box wastage,
                                "capacity" penalises unfilled capacity.
        clamp_negative:         None clamps at 0 in 3D only.
    """
    utilization_weight: float = 1.0
    value_divisor: float = 10.0
    wastage_penalty_weight: float = 0.5
    wastage_basis: str = "shape"
    clamp_negative: Optional[bool] = None

    def __post_init__(self) -> None:
        if not _is_positive(self.value_divisor):
            raise ConfigError(f"value_divisor must be positive, got {self.value_divisor!r}")
        if self.utilization_weight < 0 or self.wastage_penalty_weight < 0:
            raise ConfigError("Fitness weights must be non-negative")
        if self.wastage_basis not in WASTAGE_BASES:
            raise ConfigError(
                f"wastage_basis must be one of {WASTAGE_BASES}, got {self.wastage_basis!r}"
            )

    def clamps(self, ndim: int) -> bool:
        if self.clamp_negative is None:
            return ndim == 3
        return self.clamp_negative

    def to_dict(self) -> dict:
        return {
            "utilization_weight": self.utilization_weight,
            "value_divisor": self.value_divisor,
            "wastage_penalty_weight": self.wastage_penalty_weight,
            "wastage_basis": self.wastage_basis,
            "clamp_negative": self.clamp_negative,
        }


# ─────────────────────────────────────────────────────────────────────────────
# Packing configuration
# ─────────────────────────────────────────────────────────────────────────────

DEFAULT_INSTANCE_CAP = 50


@dataclass(frozen=True)
class PackingConfig:
    """
    Everything a run needs, validated once at setup.

    Passed explicitly into the evaluator so independent runs (tests,
    parallel experiments) never share process-wide state.
    """
    container: Container
    catalog: Tuple[ItemType, ...]
    weights: FitnessWeights = field(default_factory=FitnessWeights)
    instance_cap: int = DEFAULT_INSTANCE_CAP
    params: StrategyParams = field(default_factory=StrategyParams)

    def __post_init__(self) -> None:
        object.__setattr__(self, "catalog", tuple(self.catalog))
        if self.instance_cap < 1:
            raise ConfigError(f"instance_cap must be ≥ 1, got {self.instance_cap}")
        seen = set()
        for item in self.catalog:
            if item.id in seen:
                raise InvalidItemSpec(f"Duplicate item id '{item.id}' in catalog")
            seen.add(item.id)
            if item.ndim != self.container.ndim:
                raise InvalidItemSpec(
                    f"Item '{item.id}' is {item.ndim}D but the container is "
                    f"{self.container.ndim}D"
                )

    @property
    def ndim(self) -> int:
        return self.container.ndim

    @property
    def items_by_id(self) -> Dict[str, ItemType]:
        return {item.id: item for item in self.catalog}

    def to_dict(self) -> dict:
        return {
            "container": self.container.to_dict(),
            "items": [item.to_dict() for item in self.catalog],
            "fitness": self.weights.to_dict(),
            "instance_cap": self.instance_cap,
            "strategy": {
                "layer_preference": self.params.layer_preference,
                "hint_layer_step": self.params.hint_layer_step,
            },
        }
