"""Observability – structured logging helpers."""
from hrms_core.observability.logging.factory import JsonLoggerFactory
from hrms_core.observability.logging.processors import get_logger

__all__ = ["JsonLoggerFactory", "get_logger"]
