"""JSON report generator for test runs.

Generates structured JSON output from a run summary.
"""

import json
from datetime import datetime, timezone
from typing import Any

from ..steps.schema import RunStatus, RunSummary


class JsonReporter:
    """Generates JSON reports from run summaries."""

    def generate(self, summary: RunSummary) -> dict[str, Any]:
        """Generate a JSON report from a run summary.

        Returns:
            Report dictionary ready for JSON serialization.
        """
        return {
            "timestamp": datetime.now(timezone.utc).isoformat(),
            "test_id": summary.test_id,
            "status": summary.final_status.value,
            "summary": {
                "attempted": summary.attempted,
                "failed": summary.failed,
                "skipped": summary.skipped,
                "duration_ms": summary.duration_ms,
            },
            "steps": [
                {
                    "id": o.step_id,
                    "status": "pass" if o.passed else "fail",
                    "launched": o.launched,
                    "exit_code": o.exit_code,
                    "diagnostic": o.diagnostic,
                }
                for o in summary.outcomes
            ],
            "finish_reported": summary.finish_reported,
            "error": summary.error_detail,
        }

    def to_json_string(self, report: dict[str, Any], pretty: bool = True) -> str:
        """Convert report to JSON string."""
        if pretty:
            return json.dumps(report, indent=2, ensure_ascii=False)
        return json.dumps(report, ensure_ascii=False)

    def generate_cli_output(
        self, summary: RunSummary, command: str = "navigate"
    ) -> dict[str, Any]:
        """Generate the CLI JSON output envelope.

        {
            "success": bool,
            "command": str,
            "data": { ... },
            "message": str
        }
        """
        report = self.generate(summary)
        data: dict[str, Any] = {
            "test_id": summary.test_id,
            "status": report["status"],
            **report["summary"],
            "steps": report["steps"],
        }

        if summary.final_status == RunStatus.NO_STEPS:
            message = f"No steps found for test {summary.test_id}"
        elif summary.final_status == RunStatus.PASSED:
            message = "All steps passed"
        elif summary.attempted == 0:
            message = f"Test failed: {summary.error_detail}"
        else:
            message = f"{summary.failed} of {summary.total_steps} steps failed"

        return {
            "success": summary.final_status != RunStatus.FAILED,
            "command": command,
            "data": data,
            "message": message,
        }
