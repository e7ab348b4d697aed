"""In-memory analysis history.

Keeps results newest first and supplies the previous readings used by
the persistent-issue rules. Storage is left to the caller.
"""

import logging
from typing import Iterable, Iterator, List, Optional

from .engine.catalog import ProductCatalog
from .engine.calculator import calculate_treatment
from .models import Measurements, Pool, TreatmentResult, VisualState

logger = logging.getLogger(__name__)


class TreatmentHistory:
    """Newest-first list of treatment results for one pool."""

    def __init__(self, results: Iterable[TreatmentResult] = ()):
        self._results: List[TreatmentResult] = list(results)

    def __len__(self) -> int:
        return len(self._results)

    def __iter__(self) -> Iterator[TreatmentResult]:
        return iter(self._results)

    @property
    def results(self) -> List[TreatmentResult]:
        """Copy of the stored results, newest first."""
        return list(self._results)

    def latest(self) -> Optional[TreatmentResult]:
        """Get the most recent result."""
        return self._results[0] if self._results else None

    def get(self, result_id: str) -> Optional[TreatmentResult]:
        """Find a result by identifier."""
        for result in self._results:
            if result.id == result_id:
                return result
        return None

    def record(self, result: TreatmentResult) -> None:
        """Store a result.

        A result whose id is already present replaces that entry in
        place; otherwise it becomes the newest entry.
        """
        for index, existing in enumerate(self._results):
            if existing.id == result.id:
                self._results[index] = result
                logger.debug(f"Updated result {result.id}")
                return

        self._results.insert(0, result)
        logger.debug(f"Recorded result {result.id}")

    def remove(self, result_ids: Iterable[str]) -> int:
        """Delete results by identifier.

        Returns:
            Number of results removed
        """
        ids = set(result_ids)
        before = len(self._results)
        self._results = [r for r in self._results if r.id not in ids]
        return before - len(self._results)

    def clear(self) -> None:
        """Delete every result."""
        self._results.clear()

    def previous_measurements(self, editing: bool = False) -> Optional[Measurements]:
        """Readings to compare a new analysis against.

        Edits are never compared with history.
        """
        if editing or not self._results:
            return None
        return self._results[0].measurements


def run_analysis(
    pool: Pool,
    measurements: Measurements,
    visual: VisualState,
    history: TreatmentHistory,
    catalog: Optional[ProductCatalog] = None,
    editing: Optional[TreatmentResult] = None,
) -> TreatmentResult:
    """Calculate a treatment and record it in the history.

    Args:
        pool: Pool profile
        measurements: Current readings
        visual: Current visual observation
        history: History to read previous readings from and record into
        catalog: Active products
        editing: Result being edited, if any; its id is kept

    Returns:
        The recorded result
    """
    result = calculate_treatment(
        pool,
        measurements,
        visual,
        catalog=catalog,
        previous_measurements=history.previous_measurements(editing=editing is not None),
        existing_id=editing.id if editing else None,
    )
    history.record(result)
    return result
