"""
Report layout for the load list export.

The formatter turns a filtered sequence of loads into totals, table rows and
positioned drawing commands for a fixed-size page. It never draws anything
itself; ``pdf.py`` replays the commands onto an fpdf2 document.
"""

import logging
from dataclasses import dataclass, field
from typing import Callable, List, Optional, Sequence, Tuple

from fpdf import FPDF

from .config import (
    BODY_FONT_SIZE,
    COLUMN_FONT_SIZE,
    COLUMN_HEADER_Y,
    COLUMN_RULE_Y,
    FIRST_ROW_Y,
    FONT_FAMILY,
    HEADER_LINE_GAP,
    HEADER_RULE_Y,
    HEADER_Y,
    LINE_HEIGHT,
    MIN_ROW_HEIGHT,
    PAGE_HEIGHT,
    PAGE_MARGIN,
    PAGE_WIDTH,
    REPORT_COLUMNS,
    REPORT_DATE_FORMAT,
    TITLE_FONT_SIZE,
)
from .models import Load

logger = logging.getLogger(__name__)

# measure(text, bold, size) -> width in points
Measure = Callable[[str, bool, float], float]

CELL_PADDING = 4.0
ELLIPSIS = "..."


def fpdf_measure() -> Measure:
    """Helvetica metrics from fpdf2, matching what the PDF layer draws with."""
    pdf = FPDF(orientation="P", unit="pt", format=(PAGE_WIDTH, PAGE_HEIGHT))

    def measure(text: str, bold: bool = False, size: float = BODY_FONT_SIZE) -> float:
        pdf.set_font(FONT_FAMILY, "B" if bold else "", size)
        return pdf.get_string_width(pdf_safe_text(text))

    return measure


def pdf_safe_text(text) -> str:
    if text is None:
        return ""
    return str(text).encode("latin-1", "replace").decode("latin-1")


def _wrap_paragraph(text: str, max_w: float, width: Callable[[str], float]) -> List[str]:
    lines: List[str] = []
    current = ""
    for word in text.split(" "):
        if word == "":
            continue
        candidate = word if not current else f"{current} {word}"
        if width(candidate) <= max_w:
            current = candidate
            continue

        if current:
            lines.append(current)
            current = ""

        if width(word) <= max_w:
            current = word
            continue

        # Word longer than the column: split it by characters.
        chunk = ""
        for ch in word:
            if not chunk or width(chunk + ch) <= max_w:
                chunk += ch
            else:
                lines.append(chunk)
                chunk = ch
        current = chunk

    if current:
        lines.append(current)
    return lines


def wrap_text(
    text: Optional[str],
    max_w: float,
    measure: Measure,
    bold: bool = False,
    size: float = BODY_FONT_SIZE,
) -> List[str]:
    """
    Word-wrap ``text`` into lines no wider than ``max_w``. Explicit newlines
    start a new line; empty text wraps to no lines at all.
    """
    if text is None or not str(text).strip():
        return []
    if max_w <= 0:
        return [str(text)]

    def width(s: str) -> float:
        return measure(s, bold, size)

    lines: List[str] = []
    for paragraph in str(text).splitlines():
        lines.extend(_wrap_paragraph(paragraph, max_w, width))
    return lines


def fit_text(
    text: Optional[str],
    max_w: float,
    measure: Measure,
    bold: bool = False,
    size: float = BODY_FONT_SIZE,
) -> str:
    """Shorten ``text`` with a trailing ellipsis so it fits in ``max_w``."""
    s = str(text or "").replace("\n", " ").strip()
    if not s or measure(s, bold, size) <= max_w:
        return s
    while s and measure(s.rstrip() + ELLIPSIS, bold, size) > max_w:
        s = s[:-1]
    return s.rstrip() + ELLIPSIS if s else ""


@dataclass(frozen=True)
class TextItem:
    x: float
    y: float
    text: str
    size: float = BODY_FONT_SIZE
    bold: bool = False


@dataclass(frozen=True)
class LineItem:
    x1: float
    y1: float
    x2: float
    y2: float


@dataclass(frozen=True)
class ReportSummary:
    total_loads: int
    total_weight: float

    @property
    def total_weight_kg(self) -> int:
        return int(self.total_weight)

    def header_lines(self) -> Tuple[str, str, str]:
        return (
            "Load Report",
            f"Total Loads: {self.total_loads}",
            f"Total Weight: {self.total_weight_kg} kg",
        )


@dataclass(frozen=True)
class ReportRow:
    load_id: str
    cells: Tuple[str, ...]
    notes_lines: Tuple[str, ...]
    height: float


@dataclass
class ReportPage:
    number: int
    texts: List[TextItem] = field(default_factory=list)
    lines: List[LineItem] = field(default_factory=list)


@dataclass
class Report:
    summary: ReportSummary
    columns: Tuple[str, ...]
    rows: List[ReportRow]
    pages: List[ReportPage]
    overflow_rows: int = 0

    @property
    def page_count(self) -> int:
        return len(self.pages)


def format_weight(weight: float) -> str:
    return f"{int(weight)} kg"


def row_values(load: Load) -> Tuple[str, ...]:
    return (
        load.date.strftime(REPORT_DATE_FORMAT),
        load.truck_number,
        str(load.load_number),
        load.category.display_name,
        load.origin,
        load.destination,
        format_weight(load.weight),
        load.notes,
    )


class ReportFormatter:
    """
    Builds the printable report for a filtered view.

    By default everything goes on one page and rows past the bottom edge are
    left for the surface to clip (``Report.overflow_rows`` counts them). With
    ``paginate=True`` those rows continue on further pages.
    """

    def __init__(
        self,
        measure: Optional[Measure] = None,
        paginate: bool = False,
        columns: Sequence[Tuple[str, float]] = REPORT_COLUMNS,
    ):
        self.measure = measure or fpdf_measure()
        self.paginate = paginate
        self.columns = tuple(columns)
        self.left = PAGE_MARGIN
        self.right = PAGE_WIDTH - PAGE_MARGIN
        self.bottom = PAGE_HEIGHT - PAGE_MARGIN

    @property
    def notes_width(self) -> float:
        return self.columns[-1][1] - CELL_PADDING

    def summarize(self, loads: Sequence[Load]) -> ReportSummary:
        return ReportSummary(
            total_loads=len(loads),
            total_weight=sum(load.weight for load in loads),
        )

    def rows(self, loads: Sequence[Load]) -> List[ReportRow]:
        rows = []
        for load in loads:
            cells = row_values(load)
            notes_lines = wrap_text(cells[-1], self.notes_width, self.measure)
            height = max(MIN_ROW_HEIGHT, len(notes_lines) * LINE_HEIGHT)
            rows.append(
                ReportRow(
                    load_id=load.id,
                    cells=cells,
                    notes_lines=tuple(notes_lines),
                    height=height,
                )
            )
        return rows

    def _column_offsets(self) -> List[float]:
        offsets = []
        x = self.left
        for _, width in self.columns:
            offsets.append(x)
            x += width
        return offsets

    def _rule(self, y: float) -> LineItem:
        return LineItem(self.left, y, self.right, y)

    def _new_page(self, number: int, summary: ReportSummary) -> ReportPage:
        page = ReportPage(number=number)
        title, count_line, weight_line = summary.header_lines()
        if number > 1:
            title = f"{title} (continued)"
        for i, text in enumerate((title, count_line, weight_line)):
            page.texts.append(
                TextItem(self.left, HEADER_Y + i * HEADER_LINE_GAP, text, TITLE_FONT_SIZE, bold=True)
            )
        page.lines.append(self._rule(HEADER_RULE_Y))

        for x, (header, width) in zip(self._column_offsets(), self.columns):
            label = fit_text(header, width - CELL_PADDING, self.measure, True, COLUMN_FONT_SIZE)
            page.texts.append(TextItem(x, COLUMN_HEADER_Y, label, COLUMN_FONT_SIZE, bold=True))
        page.lines.append(self._rule(COLUMN_RULE_Y))
        return page

    def _draw_row(self, page: ReportPage, row: ReportRow, y: float) -> None:
        offsets = self._column_offsets()
        last = len(self.columns) - 1
        for index, (x, value) in enumerate(zip(offsets, row.cells)):
            if index == last:
                for n, line in enumerate(row.notes_lines):
                    page.texts.append(TextItem(x, y + n * LINE_HEIGHT, line))
                continue
            width = self.columns[index][1] - CELL_PADDING
            page.texts.append(TextItem(x, y, fit_text(value, width, self.measure)))

    def layout(self, loads: Sequence[Load]) -> Report:
        summary = self.summarize(loads)
        rows = self.rows(loads)

        pages = [self._new_page(1, summary)]
        y = FIRST_ROW_Y
        overflow = 0
        for row in rows:
            if y + row.height > self.bottom and self.paginate and y > FIRST_ROW_Y:
                pages.append(self._new_page(len(pages) + 1, summary))
                y = FIRST_ROW_Y
            if y + row.height > self.bottom:
                overflow += 1
            page = pages[-1]
            self._draw_row(page, row, y)
            y += row.height
            page.lines.append(self._rule(y))

        if overflow:
            logger.warning(
                "%d of %d row(s) fall below the printable area of the last page",
                overflow,
                len(rows),
            )
        return Report(
            summary=summary,
            columns=tuple(name for name, _ in self.columns),
            rows=rows,
            pages=pages,
            overflow_rows=overflow,
        )
