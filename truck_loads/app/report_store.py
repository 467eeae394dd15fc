import json
import logging
from pathlib import Path
from typing import Dict, Optional

from .config import resolve_report_dir
from .context import ReportContext
from .report import Report

logger = logging.getLogger(__name__)


def report_metadata(ctx: ReportContext, report: Report) -> Dict:
    return {
        "report_id": ctx.report_id,
        "title": ctx.title,
        "generated_at": ctx.generated_ts,
        "filter_summary": ctx.filters.summary(),
        "total_loads": report.summary.total_loads,
        "total_weight_kg": report.summary.total_weight_kg,
        "pages": report.page_count,
        "overflow_rows": report.overflow_rows,
    }


def save_report_pdf(
    report_id: str,
    pdf_bytes: bytes,
    metadata: Dict,
    report_dir: Optional[Path] = None,
) -> Path:
    """
    Persist a generated PDF and a small metadata sidecar under the report dir.
    Returns the PDF path.
    """
    report_dir = report_dir or resolve_report_dir()
    report_dir.mkdir(parents=True, exist_ok=True)
    pdf_path = report_dir / f"{report_id}.pdf"
    meta_path = report_dir / f"{report_id}.json"

    pdf_path.write_bytes(pdf_bytes)
    logger.info("Saved report %s (%d bytes)", pdf_path, len(pdf_bytes))

    sidecar = dict(metadata)
    sidecar["path"] = str(pdf_path)
    try:
        meta_path.write_text(json.dumps(sidecar, indent=2, default=str))
    except (OSError, TypeError, ValueError) as exc:
        # Metadata failures should not block PDF saving.
        logger.warning("Could not write report metadata %s: %s", meta_path, exc)
    return pdf_path
