"""Application pagination – page/sort/filter primitives."""
from hrms_core.application.pagination.page import Page
from hrms_core.application.pagination.page_request import (
    FILTER_OPERATORS,
    Filter,
    PageRequest,
    Sort,
    SortDirection,
)

__all__ = ["FILTER_OPERATORS", "Filter", "Page", "PageRequest", "Sort", "SortDirection"]
