"""Steps module - step definitions and run results."""

from .schema import (
    ExecutionRecord,
    FailurePolicy,
    RunStatus,
    RunSummary,
    Step,
    StepOutcome,
    ValidationIssue,
    ValidationResult,
)
from .parser import parse_executions_payload, parse_step, parse_steps_payload
from .validator import validate_steps

__all__ = [
    "ExecutionRecord",
    "FailurePolicy",
    "RunStatus",
    "RunSummary",
    "Step",
    "StepOutcome",
    "ValidationIssue",
    "ValidationResult",
    "parse_executions_payload",
    "parse_step",
    "parse_steps_payload",
    "validate_steps",
]
