"""Pydantic data models for the pool profile and water readings."""

import math
import uuid
from enum import Enum
from typing import Optional

from pydantic import BaseModel, Field, field_validator


class PoolShape(str, Enum):
    """Pool shape, used for volume estimation."""
    RECTANGULAR = "rectangular"
    ROUND = "round"
    CUSTOM = "custom"

    def __str__(self) -> str:
        return self.value


class PoolType(str, Enum):
    """Kind of water body."""
    POOL = "pool"
    SPA = "spa"

    def __str__(self) -> str:
        return self.value


class CoatingType(str, Enum):
    """Interior finish of the pool."""
    TILE = "tile"
    FIBERGLASS = "fiberglass"
    VINYL = "vinyl"

    def __str__(self) -> str:
        return self.value


class ChlorineType(str, Enum):
    """Preferred sanitizer delivery form."""
    GRANULAR = "granular"
    TABLET = "tablet"

    def __str__(self) -> str:
        return self.value


class WaterAppearance(str, Enum):
    """Visual state of the water."""
    CLEAR = "clear"
    CLOUDY = "cloudy"
    GREEN = "green"
    BROWN = "brown"
    ALGAE = "algae"

    def __str__(self) -> str:
        return self.value


def calculate_volume(
    shape: PoolShape,
    length: float = 0.0,
    width: float = 0.0,
    depth: float = 0.0,
    diameter: float = 0.0,
) -> float:
    """Estimate pool volume in liters from dimensions in meters.

    Args:
        shape: Pool shape
        length: Length in meters (rectangular)
        width: Width in meters (rectangular)
        depth: Average depth in meters
        diameter: Diameter in meters (round)

    Returns:
        Volume in liters, 0 for shapes without a formula
    """
    shape = PoolShape(shape)
    if shape == PoolShape.RECTANGULAR:
        return length * width * depth * 1000
    if shape == PoolShape.ROUND:
        radius = diameter / 2
        return math.pi * radius ** 2 * depth * 1000
    return 0.0


def parse_chlorine_type(value):
    """Map blank and legacy chlorine preferences to granular."""
    if value is None or value == "" or value == "granulate":
        return ChlorineType.GRANULAR
    return value


class Pool(BaseModel):
    """Static pool profile."""

    id: str = Field(
        default_factory=lambda: uuid.uuid4().hex,
        description="Unique pool identifier"
    )
    name: str = Field(
        default="My Pool",
        description="Display name"
    )
    volume: float = Field(
        ...,
        gt=0,
        allow_inf_nan=False,
        description="Water volume in liters"
    )
    shape: PoolShape = Field(
        default=PoolShape.RECTANGULAR,
        description="Pool shape (informational)"
    )
    type: PoolType = Field(
        default=PoolType.POOL,
        description="Pool or spa"
    )
    coating: CoatingType = Field(
        default=CoatingType.TILE,
        description="Interior coating (informational)"
    )
    chlorine_type: ChlorineType = Field(
        default=ChlorineType.GRANULAR,
        description="Preferred chlorine delivery form"
    )

    @field_validator("chlorine_type", mode="before")
    @classmethod
    def normalize_chlorine_type(cls, v):
        """Accept legacy values and fall back to granular."""
        return parse_chlorine_type(v)

    @classmethod
    def from_dimensions(
        cls,
        shape: PoolShape,
        length: float = 0.0,
        width: float = 0.0,
        depth: float = 0.0,
        diameter: float = 0.0,
        **fields,
    ) -> "Pool":
        """Create a pool whose volume is computed from its dimensions.

        Raises:
            ValueError: If the dimensions do not yield a positive volume
        """
        volume = calculate_volume(shape, length, width, depth, diameter)
        if math.isnan(volume) or volume <= 0:
            raise ValueError(
                "Pool dimensions must describe a positive volume"
            )
        return cls(shape=shape, volume=round(volume), **fields)

    @property
    def is_spa(self) -> bool:
        """Check if this profile describes a spa."""
        return self.type == PoolType.SPA


class Measurements(BaseModel):
    """Snapshot of test kit readings.

    Every field is optional; a missing reading means the matching rule
    is not evaluated at all.
    """

    ph: Optional[float] = Field(
        default=None,
        ge=0,
        le=14,
        allow_inf_nan=False,
        description="pH (unitless)"
    )
    chlorine: Optional[float] = Field(
        default=None,
        ge=0,
        allow_inf_nan=False,
        description="Free chlorine in ppm"
    )
    alkalinity: Optional[float] = Field(
        default=None,
        ge=0,
        allow_inf_nan=False,
        description="Total alkalinity in ppm"
    )
    hardness: Optional[float] = Field(
        default=None,
        ge=0,
        allow_inf_nan=False,
        description="Calcium hardness in ppm"
    )
    cyanuric: Optional[float] = Field(
        default=None,
        ge=0,
        allow_inf_nan=False,
        description="Cyanuric acid in ppm (informational)"
    )

    @field_validator(
        "ph", "chlorine", "alkalinity", "hardness", "cyanuric", mode="before"
    )
    @classmethod
    def parse_reading(cls, v):
        """Parse string readings; blank input means not measured."""
        if isinstance(v, str):
            v = v.strip()
            if v == "":
                return None
            return float(v)
        return v


class VisualState(BaseModel):
    """Qualitative observation of the water."""

    appearance: WaterAppearance = Field(
        default=WaterAppearance.CLEAR,
        description="Water appearance"
    )
    strong_smell: bool = Field(
        default=False,
        description="Strong chlorine odor noticed"
    )
    heavy_usage: bool = Field(
        default=False,
        description="Pool was heavily used recently"
    )

    @property
    def has_algae(self) -> bool:
        """Green or algae-covered water."""
        return self.appearance in (WaterAppearance.GREEN, WaterAppearance.ALGAE)
