"""Plain-text rendering of a treatment result for sharing."""

from .models import TreatmentResult, TreatmentStatus

STATUS_LABELS = {
    TreatmentStatus.OK: "Balanced water",
    TreatmentStatus.WARNING: "Attention needed",
    TreatmentStatus.CRITICAL: "Critical",
}


def format_share_text(result: TreatmentResult) -> str:
    """Build a short message listing the products a result calls for."""
    lines = [
        f"PoolSense result - {result.date.strftime('%d/%m/%Y')}",
        f"Status: {STATUS_LABELS[result.status]}",
        "",
        "Products needed:",
    ]

    for step in result.steps:
        if step.dose > 0:
            lines.append(f"- {step.title}: {step.dose} {step.unit} of {step.product}")
        else:
            lines.append(f"- {step.title}: check {step.product}")

    if not result.steps:
        lines.append("- None")

    lines.extend(["", "Generated by PoolSense"])
    return "\n".join(lines)
