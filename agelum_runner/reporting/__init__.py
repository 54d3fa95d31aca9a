"""Reporting module - run progress and results."""

from .console_reporter import REMOTE_STATUS, ExecutionReporter
from .json_reporter import JsonReporter

__all__ = ["REMOTE_STATUS", "ExecutionReporter", "JsonReporter"]
