"""Detection of problems that persist across consecutive analyses."""

import logging
from dataclasses import dataclass
from typing import List, Optional

from ..models.pool import Measurements
from ..models.treatment import TreatmentStep
from .constants import PH_MIN, PH_MAX, CHLORINE_DEPLETED, NO_VALUE

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class Advisory:
    """Fixed text of a dose-free advisory step."""
    title: str
    product: str
    instruction: str

    def to_step(self, order: int) -> TreatmentStep:
        """Build the advisory step at the given position."""
        return TreatmentStep(
            order=order,
            title=self.title,
            product=self.product,
            dose=0,
            unit=NO_VALUE,
            instruction=self.instruction,
            wait_duration=NO_VALUE,
        )


PH_STILL_LOW = Advisory(
    title="Attention: pH continues low",
    product="Check product / dosage",
    instruction=(
        "Your pH was low at the last analysis and has not risen. Check "
        "whether the product (soda ash) has expired or whether alkalinity "
        "is holding the pH down."
    ),
)

PH_STILL_HIGH = Advisory(
    title="Attention: pH continues high",
    product="Check application",
    instruction=(
        "The pH has not dropped since the last measurement. Make sure the "
        "previous dose was applied correctly."
    ),
)

CHLORINE_STILL_DEPLETED = Advisory(
    title="Attention: chlorine is being consumed quickly",
    product="Investigation",
    instruction=(
        "Chlorine is dropping to zero very quickly. This may indicate heavy "
        "organic contamination or too much stabilizer (cyanuric acid). "
        "Consider a stronger shock treatment."
    ),
)


def _both_below(previous: Optional[float], current: Optional[float], limit: float) -> bool:
    if previous is None or current is None:
        return False
    return previous < limit and current < limit


def _both_above(previous: Optional[float], current: Optional[float], limit: float) -> bool:
    if previous is None or current is None:
        return False
    return previous > limit and current > limit


def detect_persistent_issues(
    current: Measurements,
    previous: Optional[Measurements],
    start_order: int = 1,
) -> List[TreatmentStep]:
    """Compare the current readings with the previous analysis.

    A comparison is skipped when either of its two readings is missing.

    Args:
        current: Readings being analyzed
        previous: Readings from the most recent prior analysis, if any
        start_order: Order number of the first advisory

    Returns:
        Advisory steps (dose 0), pH first then chlorine
    """
    if previous is None:
        return []

    advisories: List[Advisory] = []

    if _both_below(previous.ph, current.ph, PH_MIN):
        advisories.append(PH_STILL_LOW)
    elif _both_above(previous.ph, current.ph, PH_MAX):
        advisories.append(PH_STILL_HIGH)

    if _both_below(previous.chlorine, current.chlorine, CHLORINE_DEPLETED):
        advisories.append(CHLORINE_STILL_DEPLETED)

    for advisory in advisories:
        logger.debug(f"Persistent issue: {advisory.title}")

    return [
        advisory.to_step(start_order + index)
        for index, advisory in enumerate(advisories)
    ]
