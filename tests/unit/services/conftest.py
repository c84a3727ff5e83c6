"""Shared fixtures for the data-access service tests."""
from __future__ import annotations

import pytest

from hrms_core.application.cache import CacheStore
from hrms_core.services import ServiceSettings
from hrms_core.testing.fakes import FakeClock, InMemoryBackend


@pytest.fixture
def clock():
    return FakeClock()


@pytest.fixture
def backend():
    return InMemoryBackend(unique={"attendance_sessions": [("user_id", "date")]})


@pytest.fixture
def cache(clock):
    return CacheStore(clock=clock)


@pytest.fixture
def settings():
    # no backoff between attempts
    return ServiceSettings(retry_delay=0)


@pytest.fixture
def service_kwargs(settings, clock):
    return {"settings": settings, "clock": clock}
