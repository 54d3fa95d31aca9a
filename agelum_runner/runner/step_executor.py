"""Step executor - runs one step through the process runner."""

import logging
from typing import Optional

from ..steps.schema import Step, StepOutcome
from .process import ProcessRunner

logger = logging.getLogger(__name__)


class StepExecutor:
    """Translates a step into one automation process invocation."""

    def __init__(self, process_runner: Optional[ProcessRunner] = None):
        self.process_runner = process_runner or ProcessRunner()

    def execute(self, step: Step) -> StepOutcome:
        """Execute a single step.

        The argument vector is ``[step.command, *step.args]`` exactly as
        received. Never raises for launch failures or non-zero exits.
        """
        outcome = self.process_runner.run(step.argv)

        if not outcome.success:
            logger.debug(
                "Step %s (order %d) failed: %s", step.id, step.order, outcome.diagnostic
            )

        return StepOutcome(
            step_id=step.id,
            launched=outcome.launched,
            exit_success=outcome.success,
            exit_code=outcome.exit_code,
            diagnostic=outcome.diagnostic,
        )
