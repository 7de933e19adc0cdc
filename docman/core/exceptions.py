"""
Exception hierarchy for the document-management backend.

Provides layered exception structure for domain-specific errors.
All exceptions include context for observability and debugging.

Dependencies: None (pure domain layer)
System role: Centralized exception handling across the application
"""

from typing import Any


class DocManError(Exception):
    """Base exception for all document-management errors."""

    def __init__(self, message: str, details: dict[str, Any] | None = None) -> None:
        """
        Initialize base exception with message and optional context.

        Args:
            message: Human-readable error message
            details: Optional dictionary of additional context for debugging

        """
        self.message = message
        self.details = details or {}
        super().__init__(message)

    def __str__(self) -> str:
        """Return string representation including details."""
        if self.details:
            return f"{self.message} | Details: {self.details}"
        return self.message


class JobNotFoundError(DocManError):
    """Raised when no local ingestion record exists for an id."""

    def __init__(self, job_id: str, details: dict[str, Any] | None = None) -> None:
        """
        Initialize job not found error.

        Args:
            job_id: ID of the missing ingestion job
            details: Additional context
        """
        details = details or {}
        details["job_id"] = job_id
        self.job_id = job_id
        super().__init__(f"Ingestion job not found: {job_id}", details)


class RemoteUnavailableError(DocManError):
    """Raised when a call to the ingestion worker cannot complete."""

    def __init__(
        self,
        operation: str,
        reason: str,
        job_id: str | None = None,
        details: dict[str, Any] | None = None,
    ) -> None:
        """
        Initialize remote unavailable error.

        Args:
            operation: Worker operation that failed (start, status, cancel...)
            reason: Transport failure, timeout, or malformed response summary
            job_id: Job the call was made for, if any
            details: Additional context
        """
        details = details or {}
        details["operation"] = operation
        if job_id:
            details["job_id"] = job_id
        self.operation = operation
        self.reason = reason
        self.job_id = job_id
        super().__init__(f"Ingestion worker unavailable during {operation}: {reason}", details)


class InvalidTransitionError(DocManError):
    """Raised when a control event is not allowed from the job's current status."""

    def __init__(
        self,
        job_id: str,
        current_status: str,
        event: str,
        details: dict[str, Any] | None = None,
    ) -> None:
        """
        Initialize invalid transition error.

        Args:
            job_id: ID of the job the event targeted
            current_status: Authoritative status at the time of the event
            event: Rejected control event (pause, resume, retry, cancel)
            details: Additional context
        """
        details = details or {}
        details.update({"job_id": job_id, "current_status": current_status, "event": event})
        self.job_id = job_id
        self.current_status = current_status
        self.event = event
        super().__init__(f"Cannot {event} ingestion job {job_id} while {current_status}", details)
