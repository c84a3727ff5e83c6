"""Application scheduler – InMemoryScheduler, a manually driven fake."""
from __future__ import annotations

from hrms_core.application.scheduler.job import Job
from hrms_core.application.scheduler.scheduler import JobExecutedEvent, JobExecutionContext

__all__ = ["InMemoryScheduler"]


class InMemoryScheduler:
    """Scheduler that never fires on its own.

    Tests advance time themselves and then call :meth:`trigger` or
    :meth:`trigger_all`; ``run_counts`` tells how often each job ran.
    """

    def __init__(self) -> None:
        self._contexts: dict[str, JobExecutionContext] = {}
        self._running = False
        self.execution_log: list[JobExecutedEvent] = []

    def add_job(self, job: Job) -> None:
        self._contexts[job.id] = JobExecutionContext(job=job, events=self.execution_log)

    def remove_job(self, job_id: str) -> None:
        self._contexts.pop(job_id, None)

    async def start(self) -> None:
        self._running = True

    async def stop(self) -> None:
        self._running = False

    def list_jobs(self) -> list[Job]:
        return [ctx.job for ctx in self._contexts.values()]

    async def trigger(self, job_id: str) -> JobExecutedEvent:
        """Fire *job_id* once, enabled or not. Raises ``KeyError`` if unknown."""
        return await self._contexts[job_id].run()

    async def trigger_all(self) -> list[JobExecutedEvent]:
        """Fire every enabled job once, in registration order."""
        return [await ctx.run() for ctx in list(self._contexts.values()) if ctx.job.enabled]

    @property
    def run_counts(self) -> dict[str, int]:
        return {job_id: ctx.runs for job_id, ctx in self._contexts.items()}

    @property
    def is_running(self) -> bool:
        return self._running
