"""Runner module - test run orchestration."""

from .executor import RunGuard, RunInProgressError, TestRunOrchestrator
from .process import DEFAULT_BROWSER_BINARY, ProcessOutcome, ProcessRunner
from .result_collector import RunCollector
from .step_executor import StepExecutor

__all__ = [
    "DEFAULT_BROWSER_BINARY",
    "ProcessOutcome",
    "ProcessRunner",
    "RunCollector",
    "RunGuard",
    "RunInProgressError",
    "StepExecutor",
    "TestRunOrchestrator",
]
