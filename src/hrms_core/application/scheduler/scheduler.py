"""Application scheduler – Scheduler port and the per-job run wrapper."""
from __future__ import annotations

import time
from collections.abc import MutableSequence
from dataclasses import dataclass, field
from datetime import UTC, datetime
from typing import Protocol, runtime_checkable

from hrms_core.application.scheduler.job import Job
from hrms_core.observability.logging import get_logger

__all__ = ["JobExecutedEvent", "JobExecutionContext", "Scheduler"]

logger = get_logger(__name__)


@dataclass(frozen=True)
class JobExecutedEvent:
    """Outcome of one run of a recurring job."""

    job_id: str
    run: int
    started_at: datetime
    duration_ms: float
    error: str | None = None

    @property
    def success(self) -> bool:
        return self.error is None


@dataclass
class JobExecutionContext:
    """Wraps a job's handler for a scheduler.

    Every call to :meth:`run` is numbered and recorded into *events*, which
    a scheduler may share across all of its jobs (a bounded ``deque`` keeps
    only recent history). A handler exception is logged and stored on the
    event; it never reaches the scheduler driving the job.
    """

    job: Job
    events: MutableSequence[JobExecutedEvent] = field(default_factory=list)
    runs: int = 0

    async def run(self) -> JobExecutedEvent:
        self.runs += 1
        started_at = datetime.now(tz=UTC)
        t0 = time.monotonic()
        error: str | None = None
        try:
            await self.job.handler()
        except Exception as exc:  # noqa: BLE001
            error = str(exc)
            logger.error("job_failed", job_id=self.job.id, run=self.runs, error=error)
        event = JobExecutedEvent(
            job_id=self.job.id,
            run=self.runs,
            started_at=started_at,
            duration_ms=(time.monotonic() - t0) * 1000,
            error=error,
        )
        self.events.append(event)
        return event


@runtime_checkable
class Scheduler(Protocol):
    """Port: register interval jobs and drive them while started.

    ``add_job``/``remove_job`` are synchronous so that owners such as the
    cache can register and drop their sweep outside a coroutine; a running
    scheduler applies the change to its live schedule.
    """

    def add_job(self, job: Job) -> None: ...
    def remove_job(self, job_id: str) -> None: ...
    async def start(self) -> None: ...
    async def stop(self) -> None: ...
    def list_jobs(self) -> list[Job]: ...
