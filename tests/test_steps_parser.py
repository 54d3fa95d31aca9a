"""
Tests for step source payload parsing.
"""

import pytest

from agelum_runner.steps.parser import (
    parse_executions_payload,
    parse_step,
    parse_steps_payload,
)
from agelum_runner.steps.schema import Step


class TestParseSteps:
    """Tests for parse_steps_payload."""

    def test_sorts_by_order(self):
        payload = {
            "steps": [
                {"id": "b", "command": "click", "args": ["#btn"], "order": 2},
                {"id": "a", "command": "open", "args": ["http://x"], "order": 1},
            ]
        }

        steps = parse_steps_payload(payload)

        assert [s.id for s in steps] == ["a", "b"]
        assert steps[0] == Step(id="a", command="open", args=("http://x",), order=1)

    def test_equal_orders_keep_received_order(self):
        payload = {
            "steps": [
                {"id": "third", "command": "wait", "args": [], "order": 5},
                {"id": "first", "command": "open", "args": [], "order": 1},
                {"id": "second", "command": "snapshot", "args": [], "order": 5},
            ]
        }

        steps = parse_steps_payload(payload)

        assert [s.id for s in steps] == ["first", "third", "second"]

    def test_empty_list(self):
        assert parse_steps_payload({"steps": []}) == []

    def test_missing_args_defaults_to_empty(self):
        step = parse_step({"id": 7, "command": "reload", "order": 3})

        assert step.id == "7"
        assert step.args == ()
        assert step.argv == ["reload"]

    def test_args_preserved_verbatim(self):
        step = parse_step({
            "id": "x",
            "command": "fill",
            "args": ["input[name='q']", "hello  world", "--flag"],
            "order": 1,
        })

        assert step.argv == ["fill", "input[name='q']", "hello  world", "--flag"]

    @pytest.mark.parametrize("payload", [[], "steps", {"steps": "nope"}, {}])
    def test_malformed_payload(self, payload):
        with pytest.raises(ValueError):
            parse_steps_payload(payload)

    def test_missing_required_field(self):
        with pytest.raises(ValueError, match="'command'"):
            parse_steps_payload({"steps": [{"id": "a", "order": 1}]})

    @pytest.mark.parametrize("order", ["1", 1.5, True, None])
    def test_non_integer_order(self, order):
        with pytest.raises(ValueError, match="order"):
            parse_step({"id": "a", "command": "open", "order": order})


class TestParseExecutions:
    """Tests for parse_executions_payload."""

    def test_keeps_source_order(self):
        payload = {
            "executions": [
                {"id": "e2", "test_id": "t1", "timestamp": "2024-01-02", "status": "passed"},
                {"id": "e1", "test_id": "t1", "timestamp": "2024-01-01",
                 "status": "failed", "error": "timeout"},
            ]
        }

        records = parse_executions_payload(payload)

        assert [r.id for r in records] == ["e2", "e1"]
        assert records[0].error is None
        assert records[1].error == "timeout"

    def test_record_display(self):
        records = parse_executions_payload({
            "executions": [
                {"id": "e1", "test_id": "t1", "timestamp": "ts",
                 "status": "failed", "error": "boom"},
            ]
        })

        assert str(records[0]) == "[e1/ts] t1 - Status: failed (Error: boom)"

    def test_malformed(self):
        with pytest.raises(ValueError):
            parse_executions_payload({"executions": [{"id": "e1"}]})
