"""Treatment rule engine.

Evaluates one analysis in a fixed order of stages:

    1. Persistent issues from the previous analysis (advisories)
    2. Total alkalinity
    3. pH
    4. Calcium hardness
    5. Visual state (shock + algicide, or clarifier)
    6. Maintenance chlorine (skipped when a shock was applied)

Each stage may append steps and raise the status, never lower it.
"""

import logging
import uuid
from datetime import datetime, timezone
from typing import List, Optional

from ..models.pool import ChlorineType, Measurements, Pool, VisualState, WaterAppearance
from ..models.products import ChemicalProduct, TreatmentCategory
from ..models.treatment import TreatmentResult, TreatmentStatus, TreatmentStep
from .catalog import ProductCatalog
from .constants import (
    PH_MIN,
    PH_IDEAL,
    PH_MAX,
    ALKALINITY_MIN,
    ALKALINITY_IDEAL,
    ALKALINITY_MAX,
    CHLORINE_MIN,
    CHLORINE_IDEAL,
    HARDNESS_MIN,
    HARDNESS_IDEAL,
    HARDNESS_MAX,
    SHOCK_CHLORINE_INCREMENT,
    TABLET_UNIT,
    NO_VALUE,
    SUMMARY_OK,
    SUMMARY_WARNING,
    SUMMARY_CRITICAL,
)
from .dosing import compute_dose, compute_proportional_dose, tablet_dose
from .context import detect_persistent_issues

logger = logging.getLogger(__name__)

SUMMARIES = {
    TreatmentStatus.OK: SUMMARY_OK,
    TreatmentStatus.WARNING: SUMMARY_WARNING,
    TreatmentStatus.CRITICAL: SUMMARY_CRITICAL,
}


class TreatmentPlan:
    """Steps and status accumulated during a single calculation."""

    def __init__(self):
        self.steps: List[TreatmentStep] = []
        self.status = TreatmentStatus.OK

    @property
    def next_order(self) -> int:
        return len(self.steps) + 1

    def escalate(self, status: TreatmentStatus) -> None:
        self.status = self.status.escalate(status)

    def extend(self, steps: List[TreatmentStep]) -> None:
        self.steps.extend(steps)

    def add(
        self,
        title: str,
        product: str,
        dose: int,
        unit: str,
        instruction: str,
        wait_duration: str,
    ) -> None:
        step = TreatmentStep(
            order=self.next_order,
            title=title,
            product=product,
            dose=dose,
            unit=unit,
            instruction=instruction,
            wait_duration=wait_duration,
        )
        logger.debug(f"Step {step.order}: {step.title} ({step.dose} {step.unit})")
        self.steps.append(step)

    def add_product(
        self,
        title: str,
        product: ChemicalProduct,
        dose: int,
        situation: str,
        wait_duration: str,
    ) -> None:
        """Add a step applying a catalog product."""
        instruction = f"{situation} {product.instructions}".strip()
        self.add(title, product.name, dose, product.unit, instruction, wait_duration)


def _evaluate_alkalinity(
    plan: TreatmentPlan,
    pool: Pool,
    alkalinity: Optional[float],
    catalog: ProductCatalog,
) -> None:
    if alkalinity is None:
        return

    if alkalinity < ALKALINITY_MIN:
        product = catalog.resolve(TreatmentCategory.ALK_UP)
        plan.escalate(TreatmentStatus.WARNING)
        plan.add_product(
            "Adjust low alkalinity",
            product,
            compute_dose(product, ALKALINITY_IDEAL, alkalinity, pool.volume),
            "Alkalinity is low, which makes the pH unstable.",
            "6 hours filtering",
        )
    elif alkalinity > ALKALINITY_MAX:
        product = catalog.resolve(TreatmentCategory.ALK_DOWN)
        plan.escalate(TreatmentStatus.WARNING)
        plan.add_product(
            "Lower alkalinity",
            product,
            compute_dose(product, ALKALINITY_IDEAL, alkalinity, pool.volume),
            "Alkalinity is high. Lowering it also helps bring the pH down.",
            "6 hours circulating",
        )


def _evaluate_ph(
    plan: TreatmentPlan,
    pool: Pool,
    ph: Optional[float],
    catalog: ProductCatalog,
) -> None:
    if ph is None:
        return

    if ph < PH_MIN:
        product = catalog.resolve(TreatmentCategory.PH_UP)
        plan.escalate(TreatmentStatus.WARNING)
        plan.add_product(
            "Raise pH",
            product,
            compute_dose(product, PH_IDEAL, ph, pool.volume),
            "The pH is acidic.",
            "1 hour circulating",
        )
    elif ph > PH_MAX:
        product = catalog.resolve(TreatmentCategory.PH_DOWN)
        plan.escalate(TreatmentStatus.WARNING)
        plan.add_product(
            "Lower pH",
            product,
            compute_dose(product, PH_IDEAL, ph, pool.volume),
            "The pH is high.",
            "1 hour circulating",
        )


def _evaluate_hardness(
    plan: TreatmentPlan,
    pool: Pool,
    hardness: Optional[float],
    catalog: ProductCatalog,
) -> None:
    if hardness is None:
        return

    if hardness < HARDNESS_MIN:
        product = catalog.resolve(TreatmentCategory.HARDNESS_UP)
        plan.escalate(TreatmentStatus.WARNING)
        plan.add_product(
            "Adjust calcium hardness",
            product,
            compute_dose(product, HARDNESS_IDEAL, hardness, pool.volume),
            "Hardness is low, which can corrode equipment and grout.",
            "2 to 4 hours circulating",
        )
    elif hardness > HARDNESS_MAX:
        # No chemical lowers hardness; only dilution does.
        plan.escalate(TreatmentStatus.WARNING)
        plan.add(
            "High calcium hardness",
            "Water replacement",
            0,
            NO_VALUE,
            "Hardness is too high. The only effective way to lower it is to "
            "drain part of the water and refill with fresh water.",
            NO_VALUE,
        )


def _evaluate_visual(
    plan: TreatmentPlan,
    pool: Pool,
    visual: VisualState,
    catalog: ProductCatalog,
) -> bool:
    """Apply the visual rules.

    Returns:
        True if a shock chlorination was prescribed
    """
    if visual.has_algae:
        plan.escalate(TreatmentStatus.CRITICAL)

        # Green water always gets a full shock, even with tablet preference.
        chlorine = catalog.resolve(TreatmentCategory.CHLORINE)
        plan.add_product(
            "Shock treatment (green water)",
            chlorine,
            compute_dose(chlorine, SHOCK_CHLORINE_INCREMENT, 0, pool.volume),
            "Your pool has algae. It needs shock (granular) chlorine because "
            "tablets dissolve too slowly.",
            "Filter for 8 to 12 hours",
        )

        algicide = catalog.resolve(TreatmentCategory.ALGICIDE)
        plan.add_product(
            "Apply algicide",
            algicide,
            compute_proportional_dose(algicide, pool.volume),
            "Apply 1 hour after the chlorine and brush the pool walls.",
            "Filter together with the chlorine",
        )
        return True

    if visual.appearance == WaterAppearance.CLOUDY:
        clarifier = catalog.resolve(TreatmentCategory.CLARIFIER)
        plan.escalate(TreatmentStatus.WARNING)
        plan.add_product(
            "Clarify water",
            clarifier,
            compute_proportional_dose(clarifier, pool.volume),
            "The water is cloudy.",
            "6 to 8 hours",
        )

    return False


def _evaluate_chlorine(
    plan: TreatmentPlan,
    pool: Pool,
    chlorine: Optional[float],
    catalog: ProductCatalog,
    shock_applied: bool,
) -> None:
    if shock_applied or chlorine is None or chlorine >= CHLORINE_MIN:
        return

    plan.escalate(TreatmentStatus.WARNING)

    if pool.chlorine_type == ChlorineType.TABLET:
        tablet_name, count = tablet_dose(pool.volume)
        plan.add(
            "Replenish chlorine (tablet)",
            tablet_name,
            count,
            TABLET_UNIT,
            "Place the tablet in a floating dispenser or in the skimmer "
            "basket. Never drop it directly in the pool, it stains the coating.",
            "Check dissolution weekly",
        )
        return

    product = catalog.resolve(TreatmentCategory.CHLORINE)
    plan.add_product(
        "Replenish chlorine",
        product,
        compute_dose(product, CHLORINE_IDEAL, chlorine, pool.volume),
        "Sanitizer level is low.",
        "1 hour after application",
    )


def calculate_treatment(
    pool: Pool,
    measurements: Measurements,
    visual: VisualState,
    catalog: Optional[ProductCatalog] = None,
    previous_measurements: Optional[Measurements] = None,
    existing_id: Optional[str] = None,
) -> TreatmentResult:
    """Compute the treatment plan for one analysis.

    The calculation is pure: it reads its arguments and builds a new
    result. Missing readings skip their rules.

    Args:
        pool: Pool profile (volume and chlorine preference are used)
        measurements: Current readings
        visual: Current visual observation
        catalog: Active products; built-in defaults if omitted
        previous_measurements: Readings of the last analysis, for new
            analyses only
        existing_id: Identifier of a result being edited

    Returns:
        TreatmentResult with ordered steps, status and summary
    """
    if catalog is None:
        catalog = ProductCatalog()

    plan = TreatmentPlan()

    plan.extend(detect_persistent_issues(measurements, previous_measurements, plan.next_order))
    _evaluate_alkalinity(plan, pool, measurements.alkalinity, catalog)
    _evaluate_ph(plan, pool, measurements.ph, catalog)
    _evaluate_hardness(plan, pool, measurements.hardness, catalog)
    shock_applied = _evaluate_visual(plan, pool, visual, catalog)
    _evaluate_chlorine(plan, pool, measurements.chlorine, catalog, shock_applied)

    logger.debug(
        f"Treatment for '{pool.name}' ({pool.volume:.0f} L): "
        f"status={plan.status}, steps={len(plan.steps)}"
    )

    # The timestamp is refreshed on every call, including edits.
    return TreatmentResult(
        id=existing_id or uuid.uuid4().hex,
        date=datetime.now(timezone.utc),
        status=plan.status,
        summary=SUMMARIES[plan.status],
        steps=plan.steps,
        measurements=measurements.model_copy(deep=True),
        visual=visual.model_copy(deep=True),
    )
