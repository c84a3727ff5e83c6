"""Observability – metrics ports."""
from hrms_core.observability.metrics.noop import NoopMetrics
from hrms_core.observability.metrics.ports import Counter, Gauge, Metrics

__all__ = ["Counter", "Gauge", "Metrics", "NoopMetrics"]
