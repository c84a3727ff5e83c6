"""Kernel time – Clock port + implementations."""
from hrms_core.kernel.time.clock import Clock, FrozenClock, SystemClock

__all__ = ["Clock", "FrozenClock", "SystemClock"]
