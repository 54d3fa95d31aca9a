"""
Tests for console and JSON reporting.
"""

import json

from agelum_runner.reporting.console_reporter import ExecutionReporter
from agelum_runner.reporting.json_reporter import JsonReporter
from agelum_runner.steps.schema import RunStatus, RunSummary, StepOutcome
from agelum_runner.transport.errors import RemoteError, TransportError

from .conftest import FakeStepSource


def passed_summary():
    return RunSummary(
        test_id="t1",
        attempted=2,
        final_status=RunStatus.PASSED,
        outcomes=[
            StepOutcome(step_id="s1", launched=True, exit_success=True, exit_code=0),
            StepOutcome(step_id="s2", launched=True, exit_success=True, exit_code=0),
        ],
        duration_ms=120,
    )


def failed_summary():
    return RunSummary(
        test_id="t1",
        attempted=2,
        failed=1,
        final_status=RunStatus.FAILED,
        error_detail="1 of 2 steps failed",
        outcomes=[
            StepOutcome(step_id="s1", launched=True, exit_success=True, exit_code=0),
            StepOutcome(
                step_id="s2",
                launched=True,
                exit_success=False,
                exit_code=1,
                diagnostic="agent-browser command failed with status: 1",
            ),
        ],
    )


class TestExecutionReporter:
    """Tests for ExecutionReporter."""

    def test_final_line_failed(self, reporter, streams):
        reporter.report(failed_summary())

        assert "✗ Test t1 failed (1 of 2 steps failed)" in streams[1].getvalue()

    def test_fetch_failed_shows_status_and_body(self, reporter, streams):
        reporter.fetch_failed("t1", RemoteError("500 Internal Server Error", 500, "oops"))

        err = streams[1].getvalue()
        assert "Error fetching test steps for test t1: 500 Internal Server Error" in err
        assert "oops" in err

    def test_fetch_failed_transport(self, reporter, streams):
        reporter.fetch_failed("t1", TransportError("Cannot reach http://localhost:6500"))

        assert "Connection failed while fetching steps of test t1" in streams[1].getvalue()

    def test_no_finish_sink_means_no_report(self, reporter):
        summary = passed_summary()

        reporter.report(summary)

        assert summary.finish_reported is None

    def test_report_success_message(self, streams):
        source = FakeStepSource()
        reporter = ExecutionReporter(finish_sink=source, out=streams[0], err=streams[1])

        reporter.report(passed_summary())

        assert "Reported status 'passed' for test t1" in streams[0].getvalue()


class TestJsonReporter:
    """Tests for JsonReporter."""

    def test_generate(self):
        report = JsonReporter().generate(failed_summary())

        assert report["status"] == "failed"
        assert report["summary"] == {
            "attempted": 2,
            "failed": 1,
            "skipped": 0,
            "duration_ms": 0,
        }
        assert [s["status"] for s in report["steps"]] == ["pass", "fail"]
        assert report["steps"][1]["exit_code"] == 1
        assert report["error"] == "1 of 2 steps failed"

    def test_cli_output_passed(self):
        output = JsonReporter().generate_cli_output(passed_summary())

        assert output["success"] is True
        assert output["command"] == "navigate"
        assert output["message"] == "All steps passed"
        assert output["data"]["attempted"] == 2

    def test_cli_output_failed(self):
        output = JsonReporter().generate_cli_output(failed_summary())

        assert output["success"] is False
        assert output["message"] == "1 of 2 steps failed"

    def test_cli_output_no_steps_is_success(self):
        summary = RunSummary(test_id="t1", final_status=RunStatus.NO_STEPS)

        output = JsonReporter().generate_cli_output(summary)

        assert output["success"] is True
        assert output["message"] == "No steps found for test t1"

    def test_cli_output_fetch_failure(self):
        summary = RunSummary(
            test_id="t1", final_status=RunStatus.FAILED, error_detail="Connection failed: x"
        )

        output = JsonReporter().generate_cli_output(summary)

        assert output["message"] == "Test failed: Connection failed: x"

    def test_json_string(self):
        reporter = JsonReporter()
        text = reporter.to_json_string(reporter.generate(passed_summary()), pretty=False)

        assert "\n" not in text
        assert json.loads(text)["test_id"] == "t1"
