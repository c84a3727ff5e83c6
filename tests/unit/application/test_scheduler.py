"""Unit tests for the recurring job scheduler."""
from __future__ import annotations

import asyncio
from collections import deque

import pytest

from hrms_core.application.scheduler import (
    APSchedulerAdapter,
    InMemoryScheduler,
    Job,
    JobExecutedEvent,
    JobExecutionContext,
    Scheduler,
)


async def _noop():
    pass


# ---------------------------------------------------------------------------
# Job
# ---------------------------------------------------------------------------
class TestJob:
    def test_interval_job(self):
        job = Job(id="j1", name="Sweep", handler=_noop, interval_seconds=30)
        assert job.interval_seconds == 30
        assert job.enabled is True

    @pytest.mark.parametrize("interval", [0, -1])
    def test_interval_must_be_positive(self, interval):
        with pytest.raises(ValueError, match="positive"):
            Job(id="j2", name="Bad", handler=_noop, interval_seconds=interval)


# ---------------------------------------------------------------------------
# JobExecutionContext
# ---------------------------------------------------------------------------
class TestJobExecutionContext:
    def test_success_event(self):
        ran = []

        async def handler():
            ran.append(True)

        ctx = JobExecutionContext(job=Job(id="j", name="J", handler=handler, interval_seconds=1))
        event = asyncio.run(ctx.run())
        assert isinstance(event, JobExecutedEvent)
        assert event.success
        assert event.job_id == "j"
        assert event.run == 1
        assert event.duration_ms >= 0
        assert ran == [True]
        assert ctx.events == [event]

    def test_failure_captured_not_raised(self):
        async def handler():
            raise RuntimeError("sweep failed")

        ctx = JobExecutionContext(job=Job(id="j", name="J", handler=handler, interval_seconds=1))
        event = asyncio.run(ctx.run())
        assert event.success is False
        assert event.error == "sweep failed"

    def test_runs_are_numbered(self):
        ctx = JobExecutionContext(job=Job(id="j", name="J", handler=_noop, interval_seconds=1))
        for _ in range(3):
            asyncio.run(ctx.run())
        assert ctx.runs == 3
        assert [event.run for event in ctx.events] == [1, 2, 3]

    def test_events_can_be_shared_and_bounded(self):
        shared = deque(maxlen=2)
        first = JobExecutionContext(
            job=Job(id="a", name="A", handler=_noop, interval_seconds=1), events=shared
        )
        second = JobExecutionContext(
            job=Job(id="b", name="B", handler=_noop, interval_seconds=1), events=shared
        )
        for ctx in (first, second, first):
            asyncio.run(ctx.run())
        assert [(event.job_id, event.run) for event in shared] == [("b", 1), ("a", 2)]


# ---------------------------------------------------------------------------
# InMemoryScheduler
# ---------------------------------------------------------------------------
class TestInMemoryScheduler:
    def test_satisfies_protocol(self):
        assert isinstance(InMemoryScheduler(), Scheduler)

    def test_add_list_remove(self):
        scheduler = InMemoryScheduler()
        job = Job(id="j", name="J", handler=_noop, interval_seconds=5)
        scheduler.add_job(job)
        assert scheduler.list_jobs() == [job]
        scheduler.remove_job("j")
        assert scheduler.list_jobs() == []
        scheduler.remove_job("j")

    def test_trigger_records_event(self):
        scheduler = InMemoryScheduler()
        scheduler.add_job(Job(id="j", name="J", handler=_noop, interval_seconds=5))
        event = asyncio.run(scheduler.trigger("j"))
        assert event.success
        assert scheduler.execution_log == [event]

    def test_trigger_unknown_job(self):
        with pytest.raises(KeyError):
            asyncio.run(InMemoryScheduler().trigger("missing"))

    def test_trigger_all_skips_disabled_jobs(self):
        scheduler = InMemoryScheduler()
        scheduler.add_job(Job(id="a", name="A", handler=_noop, interval_seconds=5))
        scheduler.add_job(Job(id="b", name="B", handler=_noop, interval_seconds=5, enabled=False))
        scheduler.add_job(Job(id="c", name="C", handler=_noop, interval_seconds=5))
        events = asyncio.run(scheduler.trigger_all())
        assert [event.job_id for event in events] == ["a", "c"]
        assert scheduler.run_counts == {"a": 1, "b": 0, "c": 1}

    def test_readding_a_job_resets_its_count(self):
        scheduler = InMemoryScheduler()
        job = Job(id="j", name="J", handler=_noop, interval_seconds=5)
        scheduler.add_job(job)
        asyncio.run(scheduler.trigger("j"))
        scheduler.add_job(job)
        assert scheduler.run_counts == {"j": 0}

    def test_start_stop(self):
        scheduler = InMemoryScheduler()
        asyncio.run(scheduler.start())
        assert scheduler.is_running
        asyncio.run(scheduler.stop())
        assert not scheduler.is_running


# ---------------------------------------------------------------------------
# APSchedulerAdapter
# ---------------------------------------------------------------------------
def _counting_job(runs, job_id="j", interval=0.02, **kwargs):
    async def handler():
        runs.append(job_id)

    return Job(id=job_id, name=job_id, handler=handler, interval_seconds=interval, **kwargs)


class TestAPSchedulerAdapter:
    def test_satisfies_protocol(self):
        assert isinstance(APSchedulerAdapter(), Scheduler)

    def test_jobs_tracked_before_start(self):
        scheduler = APSchedulerAdapter()
        job = _counting_job([])
        scheduler.add_job(job)
        assert scheduler.list_jobs() == [job]
        assert not scheduler.is_running
        scheduler.remove_job("j")
        assert scheduler.list_jobs() == []

    def test_runs_job_repeatedly(self):
        runs = []

        async def run():
            scheduler = APSchedulerAdapter()
            scheduler.add_job(_counting_job(runs))
            await scheduler.start()
            assert scheduler.is_running
            await asyncio.sleep(0.3)
            await scheduler.stop()
            return scheduler

        scheduler = asyncio.run(run())
        assert len(runs) >= 2
        assert not scheduler.is_running
        assert all(event.success for event in scheduler.execution_log)

    def test_failing_job_keeps_running(self):
        runs = []

        async def handler():
            runs.append(1)
            raise RuntimeError("boom")

        async def run():
            scheduler = APSchedulerAdapter()
            scheduler.add_job(Job(id="j", name="J", handler=handler, interval_seconds=0.02))
            await scheduler.start()
            await asyncio.sleep(0.3)
            await scheduler.stop()
            return scheduler

        scheduler = asyncio.run(run())
        assert len(runs) >= 2
        assert all(event.error == "boom" for event in scheduler.execution_log)

    def test_job_added_while_running_is_scheduled(self):
        runs = []

        async def run():
            scheduler = APSchedulerAdapter()
            await scheduler.start()
            scheduler.add_job(_counting_job(runs))
            await asyncio.sleep(0.3)
            await scheduler.stop()

        asyncio.run(run())
        assert runs

    def test_removed_job_is_unscheduled(self):
        runs = []

        async def run():
            scheduler = APSchedulerAdapter()
            scheduler.add_job(_counting_job(runs))
            await scheduler.start()
            await asyncio.sleep(0.2)
            scheduler.remove_job("j")
            await asyncio.sleep(0.05)
            count = len(runs)
            await asyncio.sleep(0.2)
            await scheduler.stop()
            return count

        count = asyncio.run(run())
        assert count >= 1
        assert len(runs) == count

    def test_disabled_job_never_runs(self):
        runs = []

        async def run():
            scheduler = APSchedulerAdapter()
            scheduler.add_job(_counting_job(runs, enabled=False))
            await scheduler.start()
            await asyncio.sleep(0.1)
            scheduler.remove_job("j")
            await scheduler.stop()

        asyncio.run(run())
        assert runs == []

    def test_history_is_bounded(self):
        async def run():
            scheduler = APSchedulerAdapter(history=2)
            scheduler.add_job(_counting_job([], interval=0.01))
            await scheduler.start()
            await asyncio.sleep(0.3)
            await scheduler.stop()
            return scheduler

        assert len(asyncio.run(run()).execution_log) == 2

    def test_stop_without_start(self):
        scheduler = APSchedulerAdapter()
        asyncio.run(scheduler.stop())
        assert not scheduler.is_running
