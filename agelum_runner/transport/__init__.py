"""Transport module - step source HTTP communication."""

from .errors import RemoteError, StepSourceError, TransportError
from .http_client import DEFAULT_BASE_URL, StepSourceClient

__all__ = [
    "DEFAULT_BASE_URL",
    "RemoteError",
    "StepSourceClient",
    "StepSourceError",
    "TransportError",
]
