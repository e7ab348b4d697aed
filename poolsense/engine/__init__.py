"""Treatment calculation engine."""

from .catalog import DEFAULT_PRODUCTS, ProductCatalog, resolve_product
from .dosing import compute_dose, compute_proportional_dose, tablet_dose
from .context import detect_persistent_issues
from .calculator import calculate_treatment

__all__ = [
    "DEFAULT_PRODUCTS",
    "ProductCatalog",
    "resolve_product",
    "compute_dose",
    "compute_proportional_dose",
    "tablet_dose",
    "detect_persistent_issues",
    "calculate_treatment",
]
