"""Step list validator.

Checks a fetched step list for source-data anomalies before it runs.
"""

from collections import Counter

from .schema import Step, ValidationIssue, ValidationResult


def validate_steps(steps: list[Step]) -> ValidationResult:
    """Validate an ordered step list.

    Checks:
    - Every step has a non-empty command
    - No two steps share the same ``order`` value

    Args:
        steps: Steps as returned by the parser.

    Returns:
        ValidationResult with errors and warnings.
    """
    errors: list[ValidationIssue] = []
    warnings: list[ValidationIssue] = []

    for i, step in enumerate(steps):
        if not step.command.strip():
            errors.append(ValidationIssue(
                path=f"steps[{i}].command",
                message=f"Step {step.id} (order {step.order}) has an empty command.",
            ))

    counts = Counter(step.order for step in steps)
    for order, count in sorted(counts.items()):
        if count > 1:
            warnings.append(ValidationIssue(
                path="steps.order",
                message=(
                    f"{count} steps share order {order}; "
                    "they will run in the order the server returned them."
                ),
                severity="warning",
            ))

    return ValidationResult(
        valid=len(errors) == 0,
        errors=errors,
        warnings=warnings,
    )
