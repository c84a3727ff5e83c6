"""Unit tests for observability logging."""

from __future__ import annotations

import json
import logging

import pytest
import structlog

from hrms_core.application.cache import CacheStore
from hrms_core.observability.logging import JsonLoggerFactory, get_logger


@pytest.fixture(autouse=True)
def _reset_structlog():
    yield
    structlog.reset_defaults()
    logging.getLogger().handlers.clear()


class TestJsonLoggerFactory:
    def test_configure_sets_root_level_and_handler(self) -> None:
        JsonLoggerFactory.configure(logging.DEBUG)
        root = logging.getLogger()
        assert root.level == logging.DEBUG
        assert len(root.handlers) == 1
        assert isinstance(root.handlers[0].formatter, structlog.stdlib.ProcessorFormatter)

    def test_configure_is_idempotent(self) -> None:
        JsonLoggerFactory.configure()
        JsonLoggerFactory.configure()
        assert len(logging.getLogger().handlers) == 1

    def test_emits_json_lines(self, capsys: pytest.CaptureFixture[str]) -> None:
        JsonLoggerFactory.configure(logging.INFO)
        get_logger("hrms.test").info("cache_evicted", removed=3)
        line = capsys.readouterr().err.strip().splitlines()[-1]
        payload = json.loads(line)
        assert payload["event"] == "cache_evicted"
        assert payload["removed"] == 3
        assert payload["level"] == "info"
        assert payload["logger"] == "hrms.test"


class TestGetLogger:
    def test_binds_initial_values(self) -> None:
        with structlog.testing.capture_logs() as logs:
            get_logger("hrms.test", cache="main").warning("cache_evicted")
        assert logs == [{"cache": "main", "event": "cache_evicted", "log_level": "warning"}]

    def test_cache_eviction_logged(self) -> None:
        store = CacheStore(max_memory=10)
        with structlog.testing.capture_logs() as logs:
            store.set("k", "x" * 20)
        assert any(entry["event"] == "cache_evicted" for entry in logs)
