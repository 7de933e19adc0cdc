"""
Ingestion worker RPC client.

Talks to the remote ingestion worker over its small HTTP control surface:
- POST /ingestion, GET /status/{id}
- GET /cancel|pause|resume|retry/{id}
- GET /embedding/{id}

Every call has a bounded timeout. Transport failures, timeouts, 5xx answers
and malformed bodies all surface as RemoteUnavailableError; a 409 answer
from a strict worker surfaces as InvalidTransitionError.

Dependencies: httpx, docman.core, docman.observability
System role: Orchestrator-side adapter for the remote worker
"""

import logging
from typing import Any

import httpx
from pydantic import ValidationError

from docman.core.exceptions import InvalidTransitionError, RemoteUnavailableError
from docman.models.ingestion import WorkerStatusResponse
from docman.observability.correlation import CORRELATION_HEADER, get_correlation_id

logger = logging.getLogger(__name__)

DEFAULT_TIMEOUT_SECONDS = 10.0
DEFAULT_CONNECT_TIMEOUT_SECONDS = 5.0


class IngestionWorkerClient:
    """
    Async client for the ingestion worker.

    Usage:
        async with IngestionWorkerClient("http://localhost:3000") as worker:
            response = await worker.start(job_id, {"name": "a"})
    """

    def __init__(
        self,
        base_url: str,
        timeout: float = DEFAULT_TIMEOUT_SECONDS,
        connect_timeout: float = DEFAULT_CONNECT_TIMEOUT_SECONDS,
        transport: httpx.AsyncBaseTransport | None = None,
    ) -> None:
        """
        Initialize worker client.

        Args:
            base_url: Worker base URL
            timeout: Total per-request timeout in seconds
            connect_timeout: Connection timeout in seconds
            transport: Optional httpx transport (ASGI or mock transports in tests)
        """
        if timeout <= 0 or connect_timeout <= 0:
            raise ValueError("Worker timeouts must be positive")

        self.base_url = base_url.rstrip("/")
        self._client = httpx.AsyncClient(
            base_url=self.base_url,
            timeout=httpx.Timeout(timeout, connect=connect_timeout),
            headers={"Accept": "application/json"},
            transport=transport,
        )

    async def close(self) -> None:
        """Close the HTTP client."""
        await self._client.aclose()

    async def __aenter__(self) -> "IngestionWorkerClient":
        return self

    async def __aexit__(self, exc_type, exc_val, exc_tb) -> None:
        await self.close()

    async def _request(
        self,
        operation: str,
        method: str,
        path: str,
        job_id: str | None = None,
        json: dict[str, Any] | None = None,
    ) -> Any:
        """
        Make one HTTP call to the worker and decode its JSON body.

        Args:
            operation: Operation name used in errors and logs
            method: HTTP method
            path: Path relative to the worker base URL
            job_id: Job the call is made for
            json: Request body

        Returns:
            Decoded JSON body, or None for an empty body

        Raises:
            RemoteUnavailableError: On transport failure, timeout, 5xx/4xx or bad JSON
            InvalidTransitionError: On 409 from a strict worker
        """
        headers = {}
        correlation_id = get_correlation_id()
        if correlation_id:
            headers[CORRELATION_HEADER] = correlation_id

        try:
            response = await self._client.request(method, path, json=json, headers=headers)
        except httpx.TimeoutException as e:
            logger.error(
                "Ingestion worker timeout",
                extra={"operation": operation, "job_id": job_id, "error": str(e)},
            )
            raise RemoteUnavailableError(operation, f"request timeout: {e}", job_id=job_id) from e
        except httpx.RequestError as e:
            logger.error(
                "Ingestion worker connection error",
                extra={"operation": operation, "job_id": job_id, "error": str(e)},
            )
            raise RemoteUnavailableError(operation, f"connection error: {e}", job_id=job_id) from e

        if response.status_code == 409:
            body = _json_or_empty(response)
            raise InvalidTransitionError(
                job_id=job_id or "",
                current_status=str(body.get("current_status", "unknown")),
                event=str(body.get("event", operation)),
            )

        if response.status_code >= 400:
            logger.error(
                "Ingestion worker error",
                extra={
                    "operation": operation,
                    "job_id": job_id,
                    "status_code": response.status_code,
                    "response": response.text[:500],
                },
            )
            raise RemoteUnavailableError(
                operation,
                f"worker answered {response.status_code}",
                job_id=job_id,
            )

        if not response.content:
            return None

        try:
            return response.json()
        except ValueError as e:
            raise RemoteUnavailableError(operation, "malformed JSON response", job_id=job_id) from e

    async def _status_call(
        self,
        operation: str,
        method: str,
        path: str,
        job_id: str,
        json: dict[str, Any] | None = None,
    ) -> WorkerStatusResponse:
        body = await self._request(operation, method, path, job_id=job_id, json=json)
        if body is None:
            return WorkerStatusResponse()
        if not isinstance(body, dict):
            raise RemoteUnavailableError(operation, "expected a JSON object", job_id=job_id)
        try:
            return WorkerStatusResponse.model_validate(body)
        except ValidationError as e:
            raise RemoteUnavailableError(operation, "malformed status response", job_id=job_id) from e

    async def start(self, job_id: str, payload: dict[str, Any]) -> WorkerStatusResponse:
        """
        Ask the worker to start ingesting a job.

        Args:
            job_id: Job id assigned by the orchestrator
            payload: Caller-supplied ingestion metadata

        Returns:
            WorkerStatusResponse: Worker's answer (normally status=Processing)
        """
        body = {**payload, "id": job_id}
        return await self._status_call("start", "POST", "/ingestion", job_id, json=body)

    async def status(self, job_id: str) -> WorkerStatusResponse:
        """Fetch the worker's authoritative status for a job."""
        return await self._status_call("status", "GET", f"/status/{job_id}", job_id)

    async def cancel(self, job_id: str) -> WorkerStatusResponse:
        """Signal cancellation."""
        return await self._status_call("cancel", "GET", f"/cancel/{job_id}", job_id)

    async def pause(self, job_id: str) -> WorkerStatusResponse:
        """Signal pause."""
        return await self._status_call("pause", "GET", f"/pause/{job_id}", job_id)

    async def resume(self, job_id: str) -> WorkerStatusResponse:
        """Signal resume."""
        return await self._status_call("resume", "GET", f"/resume/{job_id}", job_id)

    async def retry(self, job_id: str) -> WorkerStatusResponse:
        """Signal retry of a failed job."""
        return await self._status_call("retry", "GET", f"/retry/{job_id}", job_id)

    async def embedding(self, job_id: str) -> list[float]:
        """
        Fetch the document embedding for a job.

        Args:
            job_id: Job id

        Returns:
            list[float]: Embedding vector

        Raises:
            RemoteUnavailableError: On transport failure or a non-numeric body
        """
        body = await self._request("embedding", "GET", f"/embedding/{job_id}", job_id=job_id)
        if not isinstance(body, list) or not all(
            isinstance(v, (int, float)) and not isinstance(v, bool) for v in body
        ):
            raise RemoteUnavailableError("embedding", "expected a numeric array", job_id=job_id)
        return [float(v) for v in body]


def _json_or_empty(response: httpx.Response) -> dict:
    try:
        body = response.json()
    except ValueError:
        return {}
    if isinstance(body, dict):
        detail = body.get("detail")
        return detail if isinstance(detail, dict) else body
    return {}
