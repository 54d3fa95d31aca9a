"""Console reporter for test runs.

Streams per-step progress while a run executes, prints the final
outcome and optionally records it on the step source.
"""

import logging
from typing import IO, Optional, Protocol

import click

from ..steps.schema import RunStatus, RunSummary, Step, StepOutcome, ValidationResult
from ..transport.errors import StepSourceError, TransportError

logger = logging.getLogger(__name__)

REMOTE_STATUS = {
    RunStatus.PASSED: "passed",
    RunStatus.FAILED: "failed",
}


class FinishSink(Protocol):
    def report_finish(
        self, test_id: str, status: str, error: Optional[str] = None
    ) -> None: ...


class ExecutionReporter:
    """Prints run progress and the final result."""

    def __init__(
        self,
        finish_sink: Optional[FinishSink] = None,
        out: Optional[IO[str]] = None,
        err: Optional[IO[str]] = None,
    ):
        """Initialize the reporter.

        Args:
            finish_sink: Step source to post the final status to.
                None = remote reporting disabled.
            out: Stream for progress lines (default: stdout).
            err: Stream for errors (default: stderr).
        """
        self.finish_sink = finish_sink
        self.out = out
        self.err = err

    def fetch_started(self, test_id: str) -> None:
        self._echo(f"Fetching test steps for test: {test_id}")

    def fetch_failed(self, test_id: str, error: StepSourceError) -> None:
        if isinstance(error, TransportError):
            self._error(f"Connection failed while fetching steps of test {test_id}: {error}")
            return
        self._error(f"Error fetching test steps for test {test_id}: {error}")
        body = getattr(error, "body", None)
        if body:
            self._error(body)

    def steps_fetched(
        self, test_id: str, steps: list[Step], validation: ValidationResult
    ) -> None:
        for issue in validation.issues:
            label = "Warning" if issue.severity == "warning" else "Error"
            self._error(f"{label}: test {test_id}: {issue.message}")
        self._echo(f"Executing {len(steps)} steps...")

    def step_started(self, step: Step) -> None:
        self._echo(f"\n▶ Step {step.order}: {step.describe()}")

    def step_finished(self, step: Step, outcome: StepOutcome) -> None:
        if outcome.passed:
            self._echo(f"  ✓ Step {step.order} passed")
        else:
            self._error(f"  ✗ Step {step.order} failed: {outcome.diagnostic}")

    def steps_skipped(self, count: int) -> None:
        self._echo(f"\nStopping after first failure; {count} steps skipped")

    def report(self, summary: RunSummary) -> None:
        """Print the final line and post the finish report if enabled.

        A failed finish report is shown but never changes the summary's
        final status.
        """
        self._echo_result(summary)

        if summary.final_status == RunStatus.NO_STEPS or self.finish_sink is None:
            return

        status = REMOTE_STATUS[summary.final_status]
        try:
            self.finish_sink.report_finish(summary.test_id, status, summary.error_detail)
        except StepSourceError as e:
            logger.info("Finish report for %s failed: %s", summary.test_id, e)
            self._error(f"Warning: failed to report result of test {summary.test_id}: {e}")
            body = getattr(e, "body", None)
            if body:
                self._error(body)
            summary.finish_reported = False
            return

        summary.finish_reported = True
        self._echo(f"✓ Reported status '{status}' for test {summary.test_id}")

    def _echo_result(self, summary: RunSummary) -> None:
        if summary.final_status == RunStatus.NO_STEPS:
            self._echo(f"No steps found for test {summary.test_id}")
        elif summary.final_status == RunStatus.PASSED:
            self._echo(
                f"\n✓ Test {summary.test_id} passed "
                f"({summary.attempted}/{summary.attempted} steps)"
            )
        elif summary.attempted == 0:
            self._error(f"\n✗ Test {summary.test_id} failed: {summary.error_detail}")
        else:
            self._error(
                f"\n✗ Test {summary.test_id} failed "
                f"({summary.failed} of {summary.total_steps} steps failed)"
            )

    def _echo(self, message: str) -> None:
        click.echo(message, file=self.out)

    def _error(self, message: str) -> None:
        click.echo(message, file=self.err, err=True)
