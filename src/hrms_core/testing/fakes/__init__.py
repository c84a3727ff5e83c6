"""Testing fakes – in-memory doubles for the clock, metrics and backend ports."""
from hrms_core.testing.fakes.backend import InMemoryBackend
from hrms_core.testing.fakes.clock import FakeClock
from hrms_core.testing.fakes.metrics import FakeMetricsRegistry

__all__ = ["FakeClock", "FakeMetricsRegistry", "InMemoryBackend"]
