"""
Ingestion job status vocabulary and worker transition table.

The worker owns the authoritative status while a job is in flight; the
orchestrator caches the last value it saw. Both sides share these names
on the wire.

Dependencies: None (pure domain layer)
System role: Job lifecycle state machine
"""

import enum


class IngestionStatus(str, enum.Enum):
    """
    Ingestion job lifecycle states.

    PENDING: Record persisted, worker not yet confirmed the start
    PROCESSING: Worker is ingesting (also the state after resume and retry)
    PAUSED: Worker holds the job; deferred completion is suspended
    CANCELLED: Terminal; no deferred completion may fire afterwards
    RETRIED: Legacy cache value; never written by the orchestrator
    COMPLETED: Terminal success
    FAILED: Terminal failure; the only state retry applies to
    """

    PENDING = "Pending"
    PROCESSING = "Processing"
    PAUSED = "Paused"
    CANCELLED = "Cancelled"
    RETRIED = "Retried"
    COMPLETED = "Completed"
    FAILED = "Failed"


# Wire value the worker answers with when it holds no state for an id.
NOT_FOUND = "Not Found"

TERMINAL_STATUSES = frozenset(
    {IngestionStatus.COMPLETED, IngestionStatus.FAILED, IngestionStatus.CANCELLED}
)


class WorkerEvent(str, enum.Enum):
    """Events that drive the worker-side state machine."""

    START = "start"
    COMPLETE = "complete"
    PAUSE = "pause"
    RESUME = "resume"
    CANCEL = "cancel"
    RETRY = "retry"


# (from, event) -> to. START is accepted from any state, including absent.
_TRANSITIONS: dict[tuple[IngestionStatus, WorkerEvent], IngestionStatus] = {
    (IngestionStatus.PROCESSING, WorkerEvent.PAUSE): IngestionStatus.PAUSED,
    (IngestionStatus.PAUSED, WorkerEvent.RESUME): IngestionStatus.PROCESSING,
    (IngestionStatus.FAILED, WorkerEvent.RETRY): IngestionStatus.PROCESSING,
}


def next_status(
    current: IngestionStatus | None,
    event: WorkerEvent,
) -> IngestionStatus | None:
    """
    Resolve the worker-side target status for an event.

    Args:
        current: Current authoritative status, None when the worker holds no state
        event: Control event (COMPLETE is resolved by the engine, not here)

    Returns:
        IngestionStatus | None: Target status, or None when the event is a no-op
    """
    if event is WorkerEvent.START:
        return IngestionStatus.PROCESSING
    if current is None:
        return None
    if event is WorkerEvent.CANCEL:
        return None if current in TERMINAL_STATUSES else IngestionStatus.CANCELLED
    return _TRANSITIONS.get((current, event))


def parse_status(value: object) -> IngestionStatus | None:
    """
    Map a wire status string onto IngestionStatus.

    Args:
        value: Raw value from a worker response

    Returns:
        IngestionStatus | None: Parsed status, None for "Not Found" or unknown values
    """
    if not isinstance(value, str):
        return None
    try:
        return IngestionStatus(value)
    except ValueError:
        return None
