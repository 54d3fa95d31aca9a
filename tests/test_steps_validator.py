"""
Tests for step list validation.
"""

from agelum_runner.steps.schema import Step
from agelum_runner.steps.validator import validate_steps


def test_valid_steps(two_steps):
    result = validate_steps(two_steps)

    assert result.valid
    assert result.warnings == []


def test_duplicate_order_is_warning():
    steps = [
        Step(id="a", command="open", order=1),
        Step(id="b", command="click", order=1),
    ]

    result = validate_steps(steps)

    assert result.valid
    assert len(result.warnings) == 1
    assert "share order 1" in result.warnings[0].message


def test_empty_command_is_error():
    result = validate_steps([Step(id="a", command="  ", order=1)])

    assert not result.valid
    assert result.errors[0].path == "steps[0].command"
    assert result.warnings == []
