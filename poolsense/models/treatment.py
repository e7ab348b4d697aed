"""Treatment step and result models produced by the rule engine."""

from datetime import datetime
from enum import Enum
from typing import List

from pydantic import BaseModel, Field

from .pool import Measurements, VisualState


class TreatmentStatus(str, Enum):
    """Overall severity of an analysis."""
    OK = "ok"
    WARNING = "warning"
    CRITICAL = "critical"

    def __str__(self) -> str:
        return self.value

    @property
    def severity(self) -> int:
        """Numeric rank, higher is more severe."""
        return _SEVERITY[self]

    def escalate(self, other: "TreatmentStatus") -> "TreatmentStatus":
        """Return the more severe of this status and ``other``."""
        return other if other.severity > self.severity else self


_SEVERITY = {
    TreatmentStatus.OK: 0,
    TreatmentStatus.WARNING: 1,
    TreatmentStatus.CRITICAL: 2,
}


class TreatmentStep(BaseModel):
    """One recommended action. A dose of 0 marks an advisory."""

    order: int = Field(
        ...,
        ge=1,
        description="1-based position in the treatment plan"
    )
    title: str = Field(..., description="Short action title")
    product: str = Field(..., description="Product display name")
    dose: int = Field(
        default=0,
        ge=0,
        description="Rounded dose (0 = observation only)"
    )
    unit: str = Field(default="-", description="Dose unit label")
    instruction: str = Field(default="", description="How to apply")
    wait_duration: str = Field(
        default="-",
        description="Wait or recirculation time before the next step"
    )

    model_config = {"frozen": True}

    @property
    def is_advisory(self) -> bool:
        """Check if the step is an observation rather than a dose."""
        return self.dose == 0


class TreatmentResult(BaseModel):
    """Complete output of one treatment calculation."""

    id: str = Field(..., description="Result identifier")
    date: datetime = Field(..., description="Time of calculation (UTC)")
    status: TreatmentStatus = Field(
        default=TreatmentStatus.OK,
        description="Overall severity"
    )
    summary: str = Field(default="", description="Human-readable summary")
    steps: List[TreatmentStep] = Field(
        default_factory=list,
        description="Ordered treatment steps"
    )
    measurements: Measurements = Field(
        default_factory=Measurements,
        description="Readings the result was computed from"
    )
    visual: VisualState = Field(
        default_factory=VisualState,
        description="Visual state the result was computed from"
    )

    @property
    def dosed_steps(self) -> List[TreatmentStep]:
        """Steps that require applying a product."""
        return [step for step in self.steps if not step.is_advisory]

    def to_dict(self) -> dict:
        """Convert result to a JSON-serializable dictionary."""
        return {
            "id": self.id,
            "date": self.date.isoformat(),
            "status": str(self.status),
            "summary": self.summary,
            "steps": [
                {
                    "order": step.order,
                    "title": step.title,
                    "product": step.product,
                    "dose": step.dose,
                    "unit": step.unit,
                    "instruction": step.instruction,
                    "wait_duration": step.wait_duration,
                }
                for step in self.steps
            ],
            "measurements": self.measurements.model_dump(),
            "visual": {
                "appearance": str(self.visual.appearance),
                "strong_smell": self.visual.strong_smell,
                "heavy_usage": self.visual.heavy_usage,
            },
        }
