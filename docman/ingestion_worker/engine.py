"""
Ingestion worker status engine.

Owns the per-job state machine and the deferred completion that moves a
Processing job to Completed or Failed after a randomised delay.

Each armed completion task carries the job's generation number. Any
superseding transition (start, retry, resume, pause, cancel) bumps the
generation and cancels the old task; a task that still wakes up compares
generations under the job lock and does nothing when it is stale.

Pause suspends the completion: the remaining delay is kept and resume
re-arms a task with it.

Dependencies: asyncio, random, docman.core
System role: Authoritative status engine behind the worker RPC surface
"""

import asyncio
import logging
import random
from dataclasses import dataclass

from docman.core.exceptions import InvalidTransitionError
from docman.core.job_states import (
    NOT_FOUND,
    IngestionStatus,
    WorkerEvent,
    next_status,
)
from docman.core.keyed_lock import KeyedLock

logger = logging.getLogger(__name__)

DEFAULT_EMBEDDING = (0.1, 0.2, 0.3, 0.4, 0.5)


@dataclass
class WorkerJobState:
    """
    Worker-side state for one job.

    Attributes:
        status: Authoritative status
        generation: Bumped on every superseding transition
        deadline: Loop time the armed completion is due at
        remaining: Seconds left on the completion when paused
        task: Armed completion task, if any
    """

    status: IngestionStatus
    generation: int = 0
    deadline: float | None = None
    remaining: float | None = None
    task: asyncio.Task | None = None


class IngestionWorkerEngine:
    """Per-job state machine with cancellable deferred completion."""

    def __init__(
        self,
        min_delay_seconds: float = 120.0,
        max_delay_seconds: float = 300.0,
        strict_transitions: bool = False,
        embedding: list[float] | None = None,
        rng: random.Random | None = None,
    ) -> None:
        """
        Initialize the engine.

        Args:
            min_delay_seconds: Lower bound of the completion delay
            max_delay_seconds: Upper bound of the completion delay
            strict_transitions: Raise InvalidTransitionError instead of ignoring
                control events the state table does not allow
            embedding: Placeholder vector returned by embedding()
            rng: Random source for delays and outcomes
        """
        if max_delay_seconds < min_delay_seconds:
            raise ValueError("max_delay_seconds must be >= min_delay_seconds")

        self.min_delay_seconds = min_delay_seconds
        self.max_delay_seconds = max_delay_seconds
        self.strict_transitions = strict_transitions
        self._embedding = tuple(embedding) if embedding is not None else DEFAULT_EMBEDDING
        self._rng = rng or random.Random()
        self._jobs: dict[str, WorkerJobState] = {}
        self._locks = KeyedLock()

    # ------------------------------------------------------------------
    # Control operations
    # ------------------------------------------------------------------

    async def start(self, job_id: str) -> str:
        """
        Create (or replace) the job's state and arm a fresh completion.

        Returns:
            str: Status after the call (Processing)
        """
        async with self._locks.hold(job_id):
            state = self._jobs.get(job_id)
            if state is None:
                state = self._jobs[job_id] = WorkerJobState(status=IngestionStatus.PROCESSING)
            state.status = IngestionStatus.PROCESSING
            state.remaining = None
            self._arm(job_id, state, self._draw_delay())
            logger.info(
                "Ingestion started",
                extra={"job_id": job_id, "generation": state.generation},
            )
            return state.status.value

    async def status(self, job_id: str) -> str:
        """Return the job's status, or "Not Found" when no state exists."""
        state = self._jobs.get(job_id)
        return state.status.value if state else NOT_FOUND

    async def cancel(self, job_id: str) -> str:
        """Move a non-terminal job to Cancelled and invalidate its completion."""
        return await self._control(job_id, WorkerEvent.CANCEL)

    async def pause(self, job_id: str) -> str:
        """Move a Processing job to Paused, suspending its completion."""
        return await self._control(job_id, WorkerEvent.PAUSE)

    async def resume(self, job_id: str) -> str:
        """Move a Paused job back to Processing with the remaining delay."""
        return await self._control(job_id, WorkerEvent.RESUME)

    async def retry(self, job_id: str) -> str:
        """Move a Failed job back to Processing with a new completion."""
        return await self._control(job_id, WorkerEvent.RETRY)

    def embedding(self, job_id: str) -> list[float]:
        """Deterministic placeholder embedding; independent of job state."""
        return list(self._embedding)

    def has_pending_completion(self, job_id: str) -> bool:
        """True when a completion task is armed and not yet finished for the job."""
        state = self._jobs.get(job_id)
        return bool(state and state.task and not state.task.done())

    def pending_completions(self) -> int:
        """Number of armed completion tasks across all jobs."""
        return sum(1 for s in self._jobs.values() if s.task and not s.task.done())

    async def aclose(self) -> None:
        """Cancel every armed completion task and wait for them to unwind."""
        tasks = []
        for state in self._jobs.values():
            if state.task and not state.task.done():
                tasks.append(state.task)
            self._disarm(state)
        if tasks:
            await asyncio.gather(*tasks, return_exceptions=True)

    # ------------------------------------------------------------------
    # Internals
    # ------------------------------------------------------------------

    async def _control(self, job_id: str, event: WorkerEvent) -> str:
        async with self._locks.hold(job_id):
            state = self._jobs.get(job_id)
            current = state.status if state else None
            target = next_status(current, event)

            if target is None:
                current_value = current.value if current else NOT_FOUND
                if self.strict_transitions:
                    raise InvalidTransitionError(job_id, current_value, event.value)
                logger.debug(
                    "Ignoring control event",
                    extra={"job_id": job_id, "event": event.value, "status": current_value},
                )
                return current_value

            loop = asyncio.get_running_loop()
            if event is WorkerEvent.PAUSE:
                remaining = None
                if state.deadline is not None:
                    remaining = max(0.0, state.deadline - loop.time())
                self._disarm(state)
                state.remaining = remaining
            elif event is WorkerEvent.RESUME:
                delay = state.remaining if state.remaining is not None else self._draw_delay()
                state.remaining = None
                self._arm(job_id, state, delay)
            elif event is WorkerEvent.RETRY:
                state.remaining = None
                self._arm(job_id, state, self._draw_delay())
            elif event is WorkerEvent.CANCEL:
                self._disarm(state)
                state.remaining = None

            state.status = target
            logger.info(
                "Ingestion transition",
                extra={
                    "job_id": job_id,
                    "event": event.value,
                    "from_status": current.value,
                    "to_status": target.value,
                    "generation": state.generation,
                },
            )
            return target.value

    def _draw_delay(self) -> float:
        return self._rng.uniform(self.min_delay_seconds, self.max_delay_seconds)

    def _disarm(self, state: WorkerJobState) -> None:
        state.generation += 1
        if state.task is not None and not state.task.done():
            state.task.cancel()
        state.task = None
        state.deadline = None

    def _arm(self, job_id: str, state: WorkerJobState, delay: float) -> None:
        self._disarm(state)
        loop = asyncio.get_running_loop()
        state.deadline = loop.time() + delay
        state.task = loop.create_task(
            self._complete_after(job_id, state.generation, delay),
            name=f"ingestion-completion-{job_id}-{state.generation}",
        )

    async def _complete_after(self, job_id: str, generation: int, delay: float) -> None:
        await asyncio.sleep(delay)
        async with self._locks.hold(job_id):
            state = self._jobs.get(job_id)
            if (
                state is None
                or state.generation != generation
                or state.status is not IngestionStatus.PROCESSING
            ):
                logger.debug(
                    "Discarding stale completion",
                    extra={"job_id": job_id, "generation": generation},
                )
                return

            outcome = (
                IngestionStatus.COMPLETED
                if self._rng.random() >= 0.5
                else IngestionStatus.FAILED
            )
            state.status = outcome
            state.task = None
            state.deadline = None
            logger.info(
                "Ingestion finished",
                extra={"job_id": job_id, "status": outcome.value, "generation": generation},
            )
