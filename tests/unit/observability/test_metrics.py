"""Unit tests for the metrics ports and their test double."""

from __future__ import annotations

import pytest

from hrms_core.application.cache import CacheStore
from hrms_core.observability.metrics import Counter, Gauge, Metrics, NoopMetrics
from hrms_core.testing.fakes import FakeMetricsRegistry


class TestNoopMetrics:
    def test_instruments_accept_calls(self) -> None:
        metrics = NoopMetrics()
        counter = metrics.counter("c", labels={"cache": "main"})
        gauge = metrics.gauge("g")
        counter.inc()
        counter.inc(5)
        gauge.set(3)
        assert isinstance(counter, Counter)
        assert isinstance(gauge, Gauge)

    def test_ports_are_abstract(self) -> None:
        with pytest.raises(TypeError):
            Metrics()  # type: ignore[abstract]


class TestFakeMetricsRegistry:
    def test_counter_totals(self) -> None:
        metrics = FakeMetricsRegistry()
        metrics.counter("hits").inc()
        metrics.counter("hits").inc(2)
        metrics.assert_counter_total("hits", 3)
        assert metrics.counters["hits"].increments == [1.0, 2]

    def test_gauge_tracks_current(self) -> None:
        metrics = FakeMetricsRegistry()
        assert metrics.gauge("entries").current == 0.0
        metrics.gauge("entries").set(4)
        metrics.gauge("entries").set(1)
        assert metrics.gauge_value("entries") == 1
        assert metrics.gauges["entries"].history == [4, 1]

    def test_first_labels_win(self) -> None:
        metrics = FakeMetricsRegistry()
        metrics.counter("hits", labels={"cache": "a"})
        assert metrics.counter("hits", labels={"cache": "b"}).labels == {"cache": "a"}

    def test_missing_counter_assertion(self) -> None:
        with pytest.raises(AssertionError, match="never created"):
            FakeMetricsRegistry().assert_counter_total("ghost", 0)

    def test_cache_instruments_carry_cache_name(self) -> None:
        metrics = FakeMetricsRegistry()
        CacheStore(metrics=metrics, name="hrms")
        assert set(metrics.counters) == {
            "cache_hits_total",
            "cache_misses_total",
            "cache_evictions_total",
        }
        assert all(c.labels == {"cache": "hrms"} for c in metrics.counters.values())
        assert metrics.gauges["cache_entries"].labels == {"cache": "hrms"}
