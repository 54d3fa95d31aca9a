"""Test run orchestrator - drives one run of a remotely defined test.

Coordinates the run flow:
1. Fetch ordered steps from the step source
2. Validate the step list
3. Execute each step through the automation executable
4. Summarize and report the outcome
"""

import logging
import threading
import time
from contextlib import contextmanager
from typing import Iterator, Optional, Protocol

from ..reporting.console_reporter import ExecutionReporter
from ..steps.schema import FailurePolicy, RunSummary, Step
from ..steps.validator import validate_steps
from ..transport.errors import RemoteError, TransportError
from .result_collector import RunCollector
from .step_executor import StepExecutor

logger = logging.getLogger(__name__)


class StepSource(Protocol):
    """What the orchestrator needs from the step source."""

    def fetch_steps(self, test_id: str) -> list[Step]: ...

    def report_finish(
        self, test_id: str, status: str, error: Optional[str] = None
    ) -> None: ...


class RunInProgressError(RuntimeError):
    """Another run of the same test is already executing."""


class RunGuard:
    """Allows at most one concurrent run per test id.

    Only tests that are currently running are tracked.
    """

    def __init__(self):
        self._running: set[str] = set()
        self._lock = threading.Lock()

    @contextmanager
    def hold(self, test_id: str) -> Iterator[None]:
        with self._lock:
            if test_id in self._running:
                raise RunInProgressError(f"Test {test_id} is already running")
            self._running.add(test_id)
        try:
            yield
        finally:
            with self._lock:
                self._running.discard(test_id)


class TestRunOrchestrator:
    """Runs the steps of a test in order and reports the outcome.

    Step failures never abort the run under the default policy;
    a failed fetch aborts it before any step executes.
    """

    __test__ = False  # not a pytest test class

    def __init__(
        self,
        source: StepSource,
        step_executor: Optional[StepExecutor] = None,
        reporter: Optional[ExecutionReporter] = None,
        failure_policy: FailurePolicy = FailurePolicy.CONTINUE,
        guard: Optional[RunGuard] = None,
    ):
        """Initialize the orchestrator.

        Args:
            source: Step source client.
            step_executor: Executes single steps (default: agent-browser).
            reporter: Progress and result reporter.
            failure_policy: Continue or stop after a failed step.
            guard: Shared per-test lock registry.
        """
        self.source = source
        self.step_executor = step_executor or StepExecutor()
        self.reporter = reporter or ExecutionReporter()
        self.failure_policy = failure_policy
        self.guard = guard or RunGuard()

    def run(self, test_id: str) -> RunSummary:
        """Execute every step of a test.

        Returns:
            RunSummary, already passed to the reporter.

        Raises:
            RunInProgressError: If the test is already running here.
        """
        with self.guard.hold(test_id):
            start_time = time.time()
            summary = self._run_steps(test_id)
            summary.duration_ms = int((time.time() - start_time) * 1000)

        self.reporter.report(summary)
        return summary

    def _run_steps(self, test_id: str) -> RunSummary:
        collector = RunCollector(test_id)
        self.reporter.fetch_started(test_id)

        try:
            steps = self.source.fetch_steps(test_id)
        except TransportError as e:
            logger.info("Fetching steps of %s failed: %s", test_id, e)
            self.reporter.fetch_failed(test_id, e)
            return collector.abort(f"Connection failed: {e}")
        except RemoteError as e:
            logger.info("Fetching steps of %s failed: %s", test_id, e.detail)
            self.reporter.fetch_failed(test_id, e)
            return collector.abort(e.detail)

        if not steps:
            return collector.finish_without_steps()

        # stable: equal orders keep the order the source returned
        steps = sorted(steps, key=lambda s: s.order)

        validation = validate_steps(steps)
        for issue in validation.issues:
            logger.info("Test %s: %s: %s", test_id, issue.path, issue.message)
        self.reporter.steps_fetched(test_id, steps, validation)

        for index, step in enumerate(steps):
            self.reporter.step_started(step)
            outcome = self.step_executor.execute(step)
            collector.record(outcome)
            self.reporter.step_finished(step, outcome)

            if not outcome.passed and self.failure_policy == FailurePolicy.STOP_ON_FAILURE:
                remaining = len(steps) - index - 1
                if remaining:
                    collector.skip(remaining)
                    self.reporter.steps_skipped(remaining)
                break

        return collector.finish()
