"""Resilience – retry backed by tenacity."""
from hrms_core.resilience.retry.tenacity_adapter import TenacityRetryPolicy

__all__ = ["TenacityRetryPolicy"]
