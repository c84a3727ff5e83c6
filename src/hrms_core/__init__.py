"""
hrms_core – data-access core of the HR management platform.

Import path convention::

    from hrms_core.application.cache import CacheStore, CacheKey
    from hrms_core.services import AttendanceService, LeaveService
    from hrms_core.container import build_container
"""

__version__ = "0.1.0"
__all__ = ["__version__"]
