"""Default product table and user override resolution."""

import logging
from types import MappingProxyType
from typing import Dict, Iterable, Mapping, Optional, Tuple

from ..models.products import ChemicalProduct, TreatmentCategory

logger = logging.getLogger(__name__)


def _default(
    category: TreatmentCategory,
    name: str,
    dose_quantity: float,
    unit: str,
    effect_change: float,
    instructions: str,
) -> ChemicalProduct:
    return ChemicalProduct(
        name=name,
        category=category,
        dose_quantity=dose_quantity,
        unit=unit,
        effect_change=effect_change,
        volume_reference=1000,
        instructions=instructions,
        is_default=True,
    )


# Built-in products, one per category. Read-only.
DEFAULT_PRODUCTS: Mapping[TreatmentCategory, ChemicalProduct] = MappingProxyType({
    TreatmentCategory.PH_UP: _default(
        TreatmentCategory.PH_UP,
        "pH Increaser (Soda Ash)", 6, "g", 0.1,
        "Dissolve beforehand and spread across the pool.",
    ),
    TreatmentCategory.PH_DOWN: _default(
        TreatmentCategory.PH_DOWN,
        "pH Reducer (Liquid)", 8, "ml", 0.1,
        "Dilute the reducer in a bucket of water and apply.",
    ),
    TreatmentCategory.ALK_UP: _default(
        TreatmentCategory.ALK_UP,
        "Alkalinity Increaser (Bicarbonate)", 17, "g", 10,
        "Dissolve in a bucket of pool water and spread over the surface.",
    ),
    TreatmentCategory.ALK_DOWN: _default(
        TreatmentCategory.ALK_DOWN,
        "pH and Alkalinity Reducer (Liquid)", 10, "ml", 10,
        "Dilute in a bucket of water and pour along the pool edges.",
    ),
    TreatmentCategory.CHLORINE: _default(
        TreatmentCategory.CHLORINE,
        "Granular Chlorine", 3, "g", 1,
        "Dissolve in a bucket of water and spread across the pool.",
    ),
    TreatmentCategory.HARDNESS_UP: _default(
        TreatmentCategory.HARDNESS_UP,
        "Hardness Increaser (Calcium Chloride)", 15, "g", 10,
        "Dissolve and apply.",
    ),
    TreatmentCategory.CLARIFIER: _default(
        TreatmentCategory.CLARIFIER,
        "Clarifier", 4, "ml", 1,
        "Apply and keep the filter running.",
    ),
    TreatmentCategory.ALGICIDE: _default(
        TreatmentCategory.ALGICIDE,
        "Shock Algicide", 5, "ml", 1,
        "Pour along the pool edges with the pump running.",
    ),
})


def resolve_product(
    category: TreatmentCategory,
    user_products: Iterable[ChemicalProduct] = (),
    defaults: Mapping[TreatmentCategory, ChemicalProduct] = DEFAULT_PRODUCTS,
) -> ChemicalProduct:
    """Get the product to use for a treatment category.

    The first user-defined (non-default) product for the category wins;
    otherwise the built-in default is returned.

    Args:
        category: Treatment category to resolve
        user_products: User customizations, in any order
        defaults: Default table, one product per category

    Returns:
        The active product for the category
    """
    for product in user_products:
        if product.category == category and not product.is_default:
            return product
    return defaults[category]


class ProductCatalog:
    """Default products layered with user overrides.

    The catalog never mutates the default table; overrides are resolved
    on lookup.
    """

    def __init__(
        self,
        user_products: Iterable[ChemicalProduct] = (),
        defaults: Optional[Mapping[TreatmentCategory, ChemicalProduct]] = None,
    ):
        """Initialize the catalog.

        Args:
            user_products: User-defined products overriding defaults
            defaults: Default table (the built-in table if omitted)
        """
        self._user_products: Tuple[ChemicalProduct, ...] = tuple(user_products)
        self._defaults = DEFAULT_PRODUCTS if defaults is None else defaults

    @property
    def user_products(self) -> Tuple[ChemicalProduct, ...]:
        """User-defined products in this catalog."""
        return self._user_products

    def resolve(self, category: TreatmentCategory) -> ChemicalProduct:
        """Get the active product for a category."""
        return resolve_product(category, self._user_products, self._defaults)

    def is_customized(self, category: TreatmentCategory) -> bool:
        """Check if a user product overrides the category default."""
        return not self.resolve(category).is_default

    def active_products(self) -> Dict[TreatmentCategory, ChemicalProduct]:
        """Get the active product for every category."""
        return {category: self.resolve(category) for category in TreatmentCategory}

    def with_product(self, product: ChemicalProduct) -> "ProductCatalog":
        """Return a new catalog where ``product`` overrides its category."""
        others = [p for p in self._user_products if p.category != product.category]
        logger.debug(f"Overriding {product.category} with '{product.name}'")
        return ProductCatalog([product, *others], self._defaults)

    def without_override(self, category: TreatmentCategory) -> "ProductCatalog":
        """Return a new catalog restoring the default for a category."""
        others = [p for p in self._user_products if p.category != category]
        return ProductCatalog(others, self._defaults)
