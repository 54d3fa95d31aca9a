"""Data models for remotely defined browser test steps.

Defines dataclasses for steps fetched from the step source, per-step
outcomes and the aggregate run summary.
"""

from dataclasses import dataclass, field
from enum import Enum
from typing import Optional


class RunStatus(str, Enum):
    """Final status of a test run."""
    PASSED = "passed"
    FAILED = "failed"
    NO_STEPS = "no_steps"


class FailurePolicy(str, Enum):
    """What the orchestrator does after a step fails."""
    CONTINUE = "continue"
    STOP_ON_FAILURE = "stop"


@dataclass(frozen=True)
class Step:
    """A single automation step."""
    id: str
    command: str
    args: tuple[str, ...] = ()
    order: int = 0

    @property
    def argv(self) -> list[str]:
        """Argument vector handed to the automation executable."""
        return [self.command, *self.args]

    def describe(self) -> str:
        return " ".join(self.argv)


@dataclass(frozen=True)
class StepOutcome:
    """Result of executing one step."""
    step_id: str
    launched: bool
    exit_success: bool
    exit_code: Optional[int] = None
    diagnostic: Optional[str] = None

    @property
    def passed(self) -> bool:
        return self.launched and self.exit_success


@dataclass
class RunSummary:
    """Aggregate outcome of one run of a test."""
    test_id: str
    attempted: int = 0
    failed: int = 0
    skipped: int = 0
    final_status: RunStatus = RunStatus.PASSED
    error_detail: Optional[str] = None
    outcomes: list[StepOutcome] = field(default_factory=list)
    duration_ms: int = 0
    finish_reported: Optional[bool] = None

    @property
    def total_steps(self) -> int:
        return self.attempted + self.skipped


@dataclass(frozen=True)
class ExecutionRecord:
    """Historical run record owned by the step source."""
    id: str
    test_id: str
    timestamp: str
    status: str
    error: Optional[str] = None

    def __str__(self) -> str:
        error_str = f" (Error: {self.error})" if self.error else ""
        return (
            f"[{self.id}/{self.timestamp}] {self.test_id} - "
            f"Status: {self.status}{error_str}"
        )


@dataclass
class ValidationIssue:
    """A single problem found in a fetched step list."""
    path: str
    message: str
    severity: str = "error"  # "error" or "warning"


@dataclass
class ValidationResult:
    """Result of step list validation."""
    valid: bool
    errors: list[ValidationIssue] = field(default_factory=list)
    warnings: list[ValidationIssue] = field(default_factory=list)

    @property
    def issues(self) -> list[ValidationIssue]:
        return [*self.errors, *self.warnings]
