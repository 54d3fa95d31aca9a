"""HTTP client for the remote step source.

Implements the step source protocol:
- GET  /api/tests/:id/steps       - Ordered step definitions
- POST /api/tests/:id/steps       - Append a step
- POST /api/tests/:id/run         - Mark a run as started
- POST /api/tests/:id/finish      - Record terminal status
- GET  /api/tests/:id/executions  - Recent execution records

Every call is attempted exactly once.
"""

import logging
from typing import Any, Optional
from urllib.parse import quote

import requests

from ..steps.parser import parse_executions_payload, parse_steps_payload
from ..steps.schema import ExecutionRecord, Step
from .errors import RemoteError, TransportError

logger = logging.getLogger(__name__)

DEFAULT_BASE_URL = "http://localhost:6500"


class StepSourceClient:
    """HTTP client for the step source API.

    Scoped to one repository; every request carries ``?repo=<repo>``.
    """

    def __init__(
        self,
        base_url: str = DEFAULT_BASE_URL,
        repo: str = "",
        request_timeout: float = 30.0,
        session: Optional[requests.Session] = None,
    ):
        """Initialize HTTP client.

        Args:
            base_url: Base URL of the step source (e.g., http://localhost:6500).
            repo: Repository the tests belong to.
            request_timeout: Request timeout in seconds.
            session: Pre-built session (tests inject a mock here).
        """
        self.base_url = base_url.rstrip("/")
        self.repo = repo
        self.request_timeout = request_timeout
        self._session = session or requests.Session()
        self._session.headers.update({
            "Content-Type": "application/json",
            "Accept": "application/json",
        })

    def fetch_steps(self, test_id: str) -> list[Step]:
        """Fetch the ordered step list of a test.

        GET /api/tests/:id/steps

        Returns:
            Steps sorted by ``order``.

        Raises:
            TransportError: If the step source is unreachable.
            RemoteError: On non-success status or malformed payload.
        """
        response = self._request("GET", self._test_url(test_id, "steps"))
        data = self._decode(response)
        try:
            return parse_steps_payload(data, source=f"steps of test {test_id}")
        except ValueError as e:
            raise RemoteError(
                "Malformed steps response", response.status_code, str(e)
            ) from e

    def add_step(self, test_id: str, command: str, args: list[str]) -> None:
        """Append a step to a test.

        POST /api/tests/:id/steps
        """
        self._request(
            "POST",
            self._test_url(test_id, "steps"),
            json={"command": command, "args": list(args)},
        )

    def start_run(self, test_id: str) -> None:
        """Mark a run as started on the step source.

        POST /api/tests/:id/run
        """
        self._request("POST", self._test_url(test_id, "run"))

    def report_finish(
        self, test_id: str, status: str, error: Optional[str] = None
    ) -> None:
        """Record the terminal status of a run.

        POST /api/tests/:id/finish
        """
        self._request(
            "POST",
            self._test_url(test_id, "finish"),
            json={"status": status, "error": error},
        )

    def list_executions(self, test_id: str, last: int = 5) -> list[ExecutionRecord]:
        """Fetch at most ``last`` recent execution records.

        GET /api/tests/:id/executions

        Records keep the order chosen by the step source.
        """
        response = self._request(
            "GET",
            self._test_url(test_id, "executions"),
            params={"last": last},
        )
        data = self._decode(response)
        try:
            return parse_executions_payload(
                data, source=f"executions of test {test_id}"
            )
        except ValueError as e:
            raise RemoteError(
                "Malformed executions response", response.status_code, str(e)
            ) from e

    def _test_url(self, test_id: str, action: str) -> str:
        return f"{self.base_url}/api/tests/{quote(test_id, safe='')}/{action}"

    def _request(
        self,
        method: str,
        url: str,
        params: Optional[dict[str, Any]] = None,
        **kwargs,
    ) -> requests.Response:
        """Execute one HTTP request and classify its failure.

        Raises:
            TransportError: On connection failure, timeout or any other
                failure to complete the request.
            RemoteError: On a non-2xx response.
        """
        query = {"repo": self.repo}
        if params:
            query.update(params)

        logger.debug("%s %s %s", method, url, query)
        try:
            response = self._session.request(
                method,
                url,
                params=query,
                timeout=self.request_timeout,
                **kwargs,
            )
        except (requests.ConnectionError, requests.Timeout) as e:
            raise TransportError(f"Cannot reach {self.base_url}: {e}") from e
        except requests.RequestException as e:
            raise TransportError(f"Request to {self.base_url} failed: {e}") from e

        if not 200 <= response.status_code < 300:
            status = f"{response.status_code} {response.reason or ''}".strip()
            raise RemoteError(status, response.status_code, response.text)

        return response

    @staticmethod
    def _decode(response: requests.Response) -> Any:
        try:
            return response.json()
        except ValueError as e:
            raise RemoteError(
                "Invalid JSON response", response.status_code, str(e)
            ) from e

    def close(self) -> None:
        """Close the HTTP session."""
        self._session.close()

    def __enter__(self):
        return self

    def __exit__(self, *args):
        self.close()
