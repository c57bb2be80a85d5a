"""
Data models package
"""

from .company import Company, COMPANY_HEADERS
from .event import EventSummary, EVENT_HEADERS, METADATA_COLUMNS
from .table import EventTable, SheetLayout, TableRange

__all__ = [
    "Company",
    "COMPANY_HEADERS",
    "EventSummary",
    "EVENT_HEADERS",
    "METADATA_COLUMNS",
    "EventTable",
    "SheetLayout",
    "TableRange",
]
