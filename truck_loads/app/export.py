import logging
from dataclasses import dataclass
from datetime import datetime
from pathlib import Path
from typing import Optional, Sequence

from .config import DEFAULT_REPORT_NAME
from .context import FilterState, ReportContext
from .frames import frame_to_csv, loads_to_frame
from .html_report import build_html_report
from .models import Load
from .pdf import render_report_pdf
from .report import Report, ReportFormatter
from .report_store import report_metadata, save_report_pdf

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class ExportBundle:
    """Everything one export click produces for the current filtered view."""

    context: ReportContext
    report: Report
    pdf_bytes: bytes
    csv_text: str
    html: str

    @property
    def pdf_filename(self) -> str:
        return f"{DEFAULT_REPORT_NAME}.pdf"

    @property
    def csv_filename(self) -> str:
        return f"{DEFAULT_REPORT_NAME}.csv"

    @property
    def html_filename(self) -> str:
        return f"{DEFAULT_REPORT_NAME}.html"


def build_export(
    loads: Sequence[Load],
    filters: FilterState,
    formatter: Optional[ReportFormatter] = None,
    now: Optional[datetime] = None,
) -> ExportBundle:
    """Lay out, render and serialize the given (already filtered) loads."""
    ctx = ReportContext.create(filters, now=now)
    report = (formatter or ReportFormatter()).layout(loads)
    bundle = ExportBundle(
        context=ctx,
        report=report,
        pdf_bytes=render_report_pdf(report),
        csv_text=frame_to_csv(loads_to_frame(loads)),
        html=build_html_report(report, ctx),
    )
    logger.info(
        "Built export %s: %d load(s), %d page(s)",
        ctx.report_id,
        report.summary.total_loads,
        report.page_count,
    )
    return bundle


def save_export(bundle: ExportBundle, report_dir: Optional[Path] = None) -> Path:
    return save_report_pdf(
        bundle.context.report_id,
        bundle.pdf_bytes,
        report_metadata(bundle.context, bundle.report),
        report_dir=report_dir,
    )
