"""
Core of the truck load log: the in-memory load store, the printable report
layout and the exports built on top of them.

Nothing here imports Streamlit except ``layout``, so the store and report
can be tested on their own.
"""

from .context import FilterState, ReportContext
from .load_store import LoadNotFoundError, LoadStore
from .models import Load, LoadCategory, sample_loads
from .parsing import ParseResult, parse_load_number, parse_weight
from .report import Report, ReportFormatter, ReportSummary

__all__ = [
    "FilterState",
    "Load",
    "LoadCategory",
    "LoadNotFoundError",
    "LoadStore",
    "ParseResult",
    "Report",
    "ReportContext",
    "ReportFormatter",
    "ReportSummary",
    "parse_load_number",
    "parse_weight",
    "sample_loads",
]
