"""Application scheduler – APSchedulerAdapter driving interval jobs on APScheduler 4."""
from __future__ import annotations

import asyncio
from collections import deque
from contextlib import AsyncExitStack
from datetime import UTC, datetime, timedelta

from apscheduler import AsyncScheduler, ConflictPolicy
from apscheduler.triggers.interval import IntervalTrigger

from hrms_core.application.scheduler.job import Job
from hrms_core.application.scheduler.scheduler import JobExecutedEvent, JobExecutionContext
from hrms_core.observability.logging import get_logger

__all__ = ["APSchedulerAdapter"]

logger = get_logger(__name__)


async def _fire(context: JobExecutionContext) -> None:
    # module-level so APScheduler can reference it as a task function
    await context.run()


class APSchedulerAdapter:
    """Scheduler backed by an in-memory APScheduler ``AsyncScheduler``.

    Each enabled job becomes an interval schedule whose id is the job id;
    the first run happens one interval after registration. Jobs added or
    removed while the scheduler is running are applied to the live schedule
    in call order, and :meth:`stop` waits for those changes to land.
    """

    def __init__(self, history: int = 100) -> None:
        self._contexts: dict[str, JobExecutionContext] = {}
        self._scheduler: AsyncScheduler | None = None
        self._exit_stack: AsyncExitStack | None = None
        self._lock: asyncio.Lock | None = None
        self._pending: set[asyncio.Task[None]] = set()
        self.execution_log: deque[JobExecutedEvent] = deque(maxlen=history)

    def add_job(self, job: Job) -> None:
        previous = self._contexts.get(job.id)
        context = JobExecutionContext(job=job, events=self.execution_log)
        self._contexts[job.id] = context
        if self._scheduler is None:
            return
        if job.enabled:
            self._submit(self._register(self._scheduler, context))
        elif previous is not None and previous.job.enabled:
            self._submit(self._unregister(self._scheduler, job.id))

    def remove_job(self, job_id: str) -> None:
        context = self._contexts.pop(job_id, None)
        if context is not None and context.job.enabled and self._scheduler is not None:
            self._submit(self._unregister(self._scheduler, job_id))

    async def start(self) -> None:
        if self._scheduler is not None:
            return
        self._lock = asyncio.Lock()
        self._exit_stack = AsyncExitStack()
        scheduler = await self._exit_stack.enter_async_context(AsyncScheduler())
        for context in self._contexts.values():
            await self._register(scheduler, context)
        await scheduler.start_in_background()
        self._scheduler = scheduler
        logger.info("scheduler_started", jobs=len(self._contexts))

    async def stop(self) -> None:
        if self._scheduler is None or self._exit_stack is None:
            return
        await asyncio.gather(*self._pending)
        self._scheduler = None
        await self._exit_stack.aclose()
        self._exit_stack = None
        logger.info("scheduler_stopped")

    def list_jobs(self) -> list[Job]:
        return [context.job for context in self._contexts.values()]

    @property
    def is_running(self) -> bool:
        return self._scheduler is not None

    def _submit(self, coro) -> None:
        task = asyncio.get_running_loop().create_task(coro)
        self._pending.add(task)
        task.add_done_callback(self._pending.discard)

    async def _register(self, scheduler: AsyncScheduler, context: JobExecutionContext) -> None:
        job = context.job
        if not job.enabled:
            return
        interval = timedelta(seconds=job.interval_seconds)
        trigger = IntervalTrigger(
            seconds=job.interval_seconds, start_time=datetime.now(tz=UTC) + interval
        )
        async with self._guard():
            await scheduler.add_schedule(
                _fire,
                trigger,
                id=job.id,
                kwargs={"context": context},
                conflict_policy=ConflictPolicy.replace,
            )

    async def _unregister(self, scheduler: AsyncScheduler, job_id: str) -> None:
        async with self._guard():
            await scheduler.remove_schedule(job_id)

    def _guard(self) -> asyncio.Lock:
        if self._lock is None:
            self._lock = asyncio.Lock()
        return self._lock
