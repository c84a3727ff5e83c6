"""Application scheduler – recurring job port, APScheduler adapter and in-memory fake."""
from hrms_core.application.scheduler.apscheduler import APSchedulerAdapter
from hrms_core.application.scheduler.in_memory import InMemoryScheduler
from hrms_core.application.scheduler.job import Job
from hrms_core.application.scheduler.scheduler import (
    JobExecutedEvent,
    JobExecutionContext,
    Scheduler,
)

__all__ = [
    "APSchedulerAdapter",
    "InMemoryScheduler",
    "Job",
    "JobExecutedEvent",
    "JobExecutionContext",
    "Scheduler",
]
