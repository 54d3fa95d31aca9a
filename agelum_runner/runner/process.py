"""Process runner for the external browser automation executable.

The child inherits stdin/stdout/stderr so its output appears live,
interleaved with progress lines. Its stdout can be pointed at another
open stream (e.g. stderr when stdout carries a JSON document); output
is still written straight through, never captured. Outcomes come from the exit status
alone, never from captured output.
"""

import logging
import subprocess
from dataclasses import dataclass
from typing import IO, Optional, Sequence

logger = logging.getLogger(__name__)

DEFAULT_BROWSER_BINARY = "agent-browser"


@dataclass(frozen=True)
class ProcessOutcome:
    """Exit outcome of one process invocation."""
    launched: bool
    exit_code: Optional[int] = None
    diagnostic: Optional[str] = None

    @property
    def success(self) -> bool:
        return self.launched and self.exit_code == 0


class ProcessRunner:
    """Launches the automation executable and waits for it to exit."""

    def __init__(
        self,
        program: str = DEFAULT_BROWSER_BINARY,
        stdout: Optional[IO] = None,
    ):
        """Initialize process runner.

        Args:
            program: Executable name or path. Resolved through PATH.
            stdout: Stream the child writes its stdout to. None = inherit.
        """
        self.program = program
        self.stdout = stdout

    def run(self, args: Sequence[str]) -> ProcessOutcome:
        """Run ``<program> <args...>`` and block until it exits.

        No timeout is applied. Arguments are passed through untouched.

        Returns:
            ProcessOutcome; launch failures are reported, not raised.
        """
        argv = [self.program, *args]
        logger.debug("Launching %s", argv)

        try:
            if self.stdout is None:
                completed = subprocess.run(argv, check=False)
            else:
                completed = subprocess.run(argv, check=False, stdout=self.stdout)
        except FileNotFoundError:
            return ProcessOutcome(
                launched=False,
                diagnostic=f"{self.program} not found. Is it installed and on PATH?",
            )
        except OSError as e:
            return ProcessOutcome(
                launched=False,
                diagnostic=f"Failed to launch {self.program}: {e}",
            )

        if completed.returncode != 0:
            return ProcessOutcome(
                launched=True,
                exit_code=completed.returncode,
                diagnostic=(
                    f"{self.program} command failed with status: "
                    f"{completed.returncode}"
                ),
            )

        return ProcessOutcome(launched=True, exit_code=0)
