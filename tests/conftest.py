"""Shared fixtures for runner tests."""

import io
from typing import Optional

import pytest

from agelum_runner.reporting.console_reporter import ExecutionReporter
from agelum_runner.steps.schema import Step


class FakeStepSource:
    """In-memory step source recording every call."""

    def __init__(self, steps=None, fetch_error=None, finish_error=None):
        self.steps = list(steps or [])
        self.fetch_error = fetch_error
        self.finish_error = finish_error
        self.fetch_calls: list[str] = []
        self.finish_calls: list[tuple[str, str, Optional[str]]] = []

    def fetch_steps(self, test_id):
        self.fetch_calls.append(test_id)
        if self.fetch_error:
            raise self.fetch_error
        return list(self.steps)

    def report_finish(self, test_id, status, error=None):
        self.finish_calls.append((test_id, status, error))
        if self.finish_error:
            raise self.finish_error


@pytest.fixture
def two_steps():
    """Open a page, then click a button."""
    return [
        Step(id="s1", command="open", args=("http://x",), order=1),
        Step(id="s2", command="click", args=("#btn",), order=2),
    ]


@pytest.fixture
def streams():
    return io.StringIO(), io.StringIO()


@pytest.fixture
def reporter(streams):
    out, err = streams
    return ExecutionReporter(out=out, err=err)
