"""Errors raised by the step source client."""

from typing import Optional


class StepSourceError(Exception):
    """Base class for step source failures."""


class RemoteError(StepSourceError):
    """The step source answered with a non-success status.

    Attributes:
        status_code: HTTP status code, or None when no response was received.
        body: Response body text, if any.
    """

    def __init__(
        self,
        message: str,
        status_code: Optional[int] = None,
        body: Optional[str] = None,
    ):
        super().__init__(message)
        self.status_code = status_code
        self.body = body or None

    @property
    def detail(self) -> str:
        """Message suitable for the user, including the body text."""
        if self.body:
            return f"{self} - {self.body}"
        return str(self)


class TransportError(RemoteError):
    """The step source could not be reached."""

    def __init__(self, message: str):
        super().__init__(message, status_code=None, body=None)
