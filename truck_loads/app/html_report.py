from pathlib import Path
from typing import Optional

from .config import DEFAULT_TEMPLATE_DIR
from .context import ReportContext
from .narrative import TemplateRenderer
from .report import Report


def build_html_report(report: Report, ctx: ReportContext, template_dir: Optional[Path] = None) -> str:
    """Render the load report as a standalone HTML page (templates/report.html)."""
    renderer = TemplateRenderer(template_dir or DEFAULT_TEMPLATE_DIR)
    payload = {
        "ctx": ctx,
        "summary": report.summary,
        "columns": report.columns,
        "rows": report.rows,
    }
    return renderer.render("report.html", payload)
