"""Data models for pools, readings, products and treatment results."""

from .pool import (
    Pool,
    PoolShape,
    PoolType,
    CoatingType,
    ChlorineType,
    WaterAppearance,
    Measurements,
    VisualState,
    calculate_volume,
)

from .products import (
    TreatmentCategory,
    ChemicalProduct,
    ProductDraft,
)

from .treatment import (
    TreatmentStatus,
    TreatmentStep,
    TreatmentResult,
)

__all__ = [
    # Pool and readings
    "Pool",
    "PoolShape",
    "PoolType",
    "CoatingType",
    "ChlorineType",
    "WaterAppearance",
    "Measurements",
    "VisualState",
    "calculate_volume",
    # Products
    "TreatmentCategory",
    "ChemicalProduct",
    "ProductDraft",
    # Results
    "TreatmentStatus",
    "TreatmentStep",
    "TreatmentResult",
]
