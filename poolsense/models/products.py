"""Chemical product models.

A product describes a proportional dosing rule: ``dose_quantity`` units of
the product change the target parameter by ``effect_change`` when applied
to ``volume_reference`` liters of water.
"""

from enum import Enum
from typing import Optional

from pydantic import BaseModel, Field


class TreatmentCategory(str, Enum):
    """Treatment categories a product can cover."""
    PH_UP = "ph_up"
    PH_DOWN = "ph_down"
    ALK_UP = "alk_up"
    ALK_DOWN = "alk_down"
    CHLORINE = "chlorine"
    HARDNESS_UP = "hardness_up"
    ALGICIDE = "algicide"
    CLARIFIER = "clarifier"

    def __str__(self) -> str:
        return self.value


class ChemicalProduct(BaseModel):
    """Dosage rule for one treatment category."""

    name: str = Field(
        ...,
        min_length=1,
        description="Product display name"
    )
    category: TreatmentCategory = Field(
        ...,
        description="Treatment category this product covers"
    )
    dose_quantity: float = Field(
        ...,
        ge=0,
        allow_inf_nan=False,
        description="Amount of product per reference dose"
    )
    unit: str = Field(
        default="g",
        description="Unit of dose_quantity (g, ml, ...)"
    )
    effect_change: float = Field(
        ...,
        ge=0,
        allow_inf_nan=False,
        description="Change in the target parameter per reference dose"
    )
    volume_reference: float = Field(
        default=1000.0,
        ge=0,
        allow_inf_nan=False,
        description="Water volume in liters the reference dose applies to"
    )
    instructions: str = Field(
        default="",
        description="Free-text application instructions"
    )
    is_default: bool = Field(
        default=False,
        description="Built-in default (False for user customizations)"
    )

    model_config = {"frozen": True}


class ProductDraft(BaseModel):
    """Partially filled product, as edited by a user.

    Promote with :meth:`to_product` once the required fields are set.
    """

    name: Optional[str] = None
    category: Optional[TreatmentCategory] = None
    dose_quantity: Optional[float] = None
    unit: str = "g"
    effect_change: Optional[float] = None
    volume_reference: Optional[float] = None
    instructions: str = ""

    @classmethod
    def from_product(cls, product: ChemicalProduct) -> "ProductDraft":
        """Start a draft from an existing product (e.g. a default)."""
        return cls(
            name=product.name,
            category=product.category,
            dose_quantity=product.dose_quantity,
            unit=product.unit,
            effect_change=product.effect_change,
            volume_reference=product.volume_reference,
            instructions=product.instructions,
        )

    def to_product(self) -> ChemicalProduct:
        """Validate the draft and build a user-defined product.

        Raises:
            ValueError: If a required field is missing or zero
        """
        if not self.name or not self.name.strip():
            raise ValueError("Product name is required")
        if self.category is None:
            raise ValueError("Product category is required")
        if not self.dose_quantity:
            raise ValueError("Dose quantity must be a non-zero number")
        if not self.volume_reference:
            raise ValueError("Reference volume must be a non-zero number")
        if self.effect_change is None:
            raise ValueError("Effect change is required")

        return ChemicalProduct(
            name=self.name.strip(),
            category=self.category,
            dose_quantity=self.dose_quantity,
            unit=self.unit,
            effect_change=self.effect_change,
            volume_reference=self.volume_reference,
            instructions=self.instructions,
            is_default=False,
        )
