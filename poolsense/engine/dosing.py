"""Proportional dose arithmetic."""

import math
from typing import Tuple

from ..models.products import ChemicalProduct
from .constants import (
    TABLET_SMALL_POOL_MAX_VOLUME,
    MINI_TABLET_NAME,
    MINI_TABLET_LITERS_PER_UNIT,
    LARGE_TABLET_NAME,
    LARGE_TABLET_LITERS_PER_UNIT,
)


def round_dose(value: float) -> int:
    """Round a dose to the nearest whole unit, halves rounding up."""
    return int(math.floor(value + 0.5))


def compute_dose(
    product: ChemicalProduct,
    target_value: float,
    current_value: float,
    pool_volume: float,
) -> int:
    """Compute the dose needed to move a parameter to its target.

    dose = |target - current| / effect_change * dose_quantity
           * (pool_volume / volume_reference)

    A product with a zero effect_change or volume_reference yields 0.

    Args:
        product: Product whose rule is applied
        target_value: Desired parameter value
        current_value: Measured parameter value
        pool_volume: Water volume in liters

    Returns:
        Rounded dose in the product's unit
    """
    if product.effect_change == 0 or product.volume_reference == 0:
        return 0

    delta = abs(target_value - current_value)
    factor = delta / product.effect_change
    dose = factor * product.dose_quantity * (pool_volume / product.volume_reference)
    return round_dose(dose)


def compute_proportional_dose(product: ChemicalProduct, pool_volume: float) -> int:
    """Scale one reference dose to the pool volume (algicide, clarifier)."""
    if product.volume_reference == 0:
        return 0
    return round_dose(product.dose_quantity * (pool_volume / product.volume_reference))


def tablet_dose(pool_volume: float) -> Tuple[str, int]:
    """Pick the tablet size and count for maintenance chlorination.

    Pools up to the small-pool threshold get mini tablets, larger ones
    large tablets. At least one tablet is always recommended.

    Returns:
        (tablet product name, tablet count)
    """
    if pool_volume <= TABLET_SMALL_POOL_MAX_VOLUME:
        count = math.ceil(pool_volume / MINI_TABLET_LITERS_PER_UNIT)
        return MINI_TABLET_NAME, max(1, count)

    count = math.ceil(pool_volume / LARGE_TABLET_LITERS_PER_UNIT)
    return LARGE_TABLET_NAME, max(1, count)
