import hashlib
from dataclasses import dataclass
from datetime import date, datetime
from typing import Optional


@dataclass(frozen=True)
class FilterState:
    """Date-range filter shared between the list view and exports."""

    enabled: bool = False
    start: Optional[date] = None
    end: Optional[date] = None

    def is_active(self) -> bool:
        return self.enabled and self.start is not None and self.end is not None

    def summary(self) -> str:
        if not self.is_active():
            return "All loads"
        return f"{self.start.isoformat()} to {self.end.isoformat()}"

    def cache_key(self) -> str:
        """Stable identifier for artifacts derived from this filter set."""
        return hashlib.sha256(repr(self).encode("utf-8")).hexdigest()[:16]


@dataclass(frozen=True)
class ReportContext:
    """
    Immutable description of one export run. The PDF, HTML and metadata
    sidecar all carry the same report id and timestamp.
    """

    filters: FilterState
    generated_at: datetime
    title: str = "Load Report"

    @property
    def generated_ts(self) -> str:
        return self.generated_at.isoformat(timespec="seconds")

    @property
    def report_id(self) -> str:
        stem = f"{self.filters.cache_key()}|{self.generated_at.isoformat()}"
        digest = hashlib.sha256(stem.encode("utf-8")).hexdigest()[:8]
        return f"loads-{self.generated_at:%Y%m%d-%H%M%S-%f}-{digest}"

    @classmethod
    def create(cls, filters: FilterState, now: Optional[datetime] = None) -> "ReportContext":
        return cls(filters=filters, generated_at=now or datetime.now())
