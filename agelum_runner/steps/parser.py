"""Payload parser for step source responses.

Parses JSON payloads returned by the step source into Step and
ExecutionRecord objects.
"""

import logging
from typing import Any

from .schema import ExecutionRecord, Step

logger = logging.getLogger(__name__)


def parse_steps_payload(data: Any, source: str = "<response>") -> list[Step]:
    """Parse a ``{"steps": [...]}`` payload into steps sorted by order.

    The sort is stable: steps sharing an ``order`` value keep the
    relative order in which the source returned them.

    Args:
        data: Decoded JSON payload.
        source: Source identifier for error messages.

    Returns:
        Steps in execution order.

    Raises:
        ValueError: If the payload is malformed or missing required fields.
    """
    if not isinstance(data, dict):
        raise ValueError(f"Steps payload must be an object, got {type(data).__name__}")

    steps_data = data.get("steps")
    if not isinstance(steps_data, list):
        raise ValueError(f"'steps' must be a list in {source}")

    steps = [
        parse_step(step_data, f"steps[{i}]", source)
        for i, step_data in enumerate(steps_data)
    ]
    ordered = sorted(steps, key=lambda s: s.order)
    logger.debug("Parsed %d steps from %s", len(ordered), source)
    return ordered


def parse_step(data: Any, context: str = "step", source: str = "<response>") -> Step:
    """Parse a single step mapping."""
    if not isinstance(data, dict):
        raise ValueError(f"{context} must be an object in {source}")

    _require_fields(data, ["id", "command", "order"], context, source)

    args = data.get("args") or []
    if not isinstance(args, list):
        raise ValueError(f"'args' must be a list in {context} ({source})")

    order = data["order"]
    if isinstance(order, bool) or not isinstance(order, int):
        raise ValueError(
            f"'order' must be an integer in {context} ({source}), got {order!r}"
        )

    return Step(
        id=str(data["id"]),
        command=str(data["command"]),
        args=tuple(str(a) for a in args),
        order=order,
    )


def parse_executions_payload(
    data: Any, source: str = "<response>"
) -> list[ExecutionRecord]:
    """Parse a ``{"executions": [...]}`` payload.

    Records are returned in the order the source sent them.
    """
    if not isinstance(data, dict):
        raise ValueError(
            f"Executions payload must be an object, got {type(data).__name__}"
        )

    records_data = data.get("executions")
    if not isinstance(records_data, list):
        raise ValueError(f"'executions' must be a list in {source}")

    records = []
    for i, record in enumerate(records_data):
        context = f"executions[{i}]"
        if not isinstance(record, dict):
            raise ValueError(f"{context} must be an object in {source}")
        _require_fields(record, ["id", "test_id", "timestamp", "status"], context, source)
        records.append(ExecutionRecord(
            id=str(record["id"]),
            test_id=str(record["test_id"]),
            timestamp=str(record["timestamp"]),
            status=str(record["status"]),
            error=record.get("error"),
        ))
    return records


def _require_fields(
    data: dict, fields: list[str], context: str, source: str
) -> None:
    """Check that required fields exist in a dictionary."""
    for field_name in fields:
        if field_name not in data:
            raise ValueError(
                f"Missing required field '{field_name}' in {context} ({source})"
            )
