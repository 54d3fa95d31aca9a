"""Result collector for a test run.

Builds a RunSummary incrementally while steps execute.
"""

from typing import Optional

from ..steps.schema import RunStatus, RunSummary, StepOutcome


class RunCollector:
    """Accumulates step outcomes into a run summary."""

    def __init__(self, test_id: str):
        self.summary = RunSummary(test_id=test_id)
        self._finalized = False

    def record(self, outcome: StepOutcome) -> None:
        """Record the outcome of an attempted step."""
        self._ensure_open()
        self.summary.outcomes.append(outcome)
        self.summary.attempted += 1
        if not outcome.passed:
            self.summary.failed += 1

    def skip(self, count: int) -> None:
        """Record steps that were never attempted."""
        self._ensure_open()
        self.summary.skipped += count

    def finish(self) -> RunSummary:
        """Close the run and compute its final status."""
        self._ensure_open()
        if self.summary.failed > 0:
            self.summary.final_status = RunStatus.FAILED
            self.summary.error_detail = (
                f"{self.summary.failed} of {self.summary.attempted} steps failed"
            )
        else:
            self.summary.final_status = RunStatus.PASSED
        self._finalized = True
        return self.summary

    def finish_without_steps(self) -> RunSummary:
        """Close a run that had nothing to execute."""
        self._ensure_open()
        self.summary.final_status = RunStatus.NO_STEPS
        self._finalized = True
        return self.summary

    def abort(self, error_detail: Optional[str]) -> RunSummary:
        """Close a run that failed before any step executed."""
        self._ensure_open()
        self.summary.final_status = RunStatus.FAILED
        self.summary.error_detail = error_detail
        self._finalized = True
        return self.summary

    def _ensure_open(self) -> None:
        if self._finalized:
            raise RuntimeError(f"Run of test {self.summary.test_id} is already finished")
