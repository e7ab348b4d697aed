"""PoolSense - water treatment dosage recommendations for pools and spas."""

__version__ = "1.0.0"

from .models import (
    Pool,
    Measurements,
    VisualState,
    ChemicalProduct,
    TreatmentCategory,
    TreatmentResult,
    TreatmentStatus,
    TreatmentStep,
)
from .engine import ProductCatalog, calculate_treatment, resolve_product

__all__ = [
    "__version__",
    "Pool",
    "Measurements",
    "VisualState",
    "ChemicalProduct",
    "TreatmentCategory",
    "TreatmentResult",
    "TreatmentStatus",
    "TreatmentStep",
    "ProductCatalog",
    "calculate_treatment",
    "resolve_product",
]
