from typing import Protocol

from fpdf import FPDF

from .config import FONT_FAMILY, PAGE_HEIGHT, PAGE_WIDTH
from .report import LineItem, Report, TextItem, pdf_safe_text

# TextItem.y is the top of the text; fpdf2 positions text by its baseline.
BASELINE_RATIO = 0.8


class Canvas(Protocol):
    """Drawing surface the report layout is replayed onto."""

    def new_page(self) -> None: ...

    def draw_text(self, item: TextItem) -> None: ...

    def draw_line(self, item: LineItem) -> None: ...


class FpdfCanvas:
    """fpdf2 document sized to the report page, in points."""

    def __init__(self, width: float = PAGE_WIDTH, height: float = PAGE_HEIGHT):
        self.pdf = FPDF(orientation="P", unit="pt", format=(width, height))
        self.pdf.set_auto_page_break(auto=False)
        self.pdf.set_margins(0, 0, 0)
        self.pdf.set_draw_color(0, 0, 0)
        self.pdf.set_line_width(0.5)

    def new_page(self) -> None:
        self.pdf.add_page()

    def draw_text(self, item: TextItem) -> None:
        self.pdf.set_font(FONT_FAMILY, "B" if item.bold else "", item.size)
        self.pdf.text(item.x, item.y + item.size * BASELINE_RATIO, pdf_safe_text(item.text))

    def draw_line(self, item: LineItem) -> None:
        self.pdf.line(item.x1, item.y1, item.x2, item.y2)

    def to_bytes(self) -> bytes:
        return bytes(self.pdf.output())


def draw_report(report: Report, canvas: Canvas) -> None:
    for page in report.pages:
        canvas.new_page()
        for line in page.lines:
            canvas.draw_line(line)
        for text in page.texts:
            canvas.draw_text(text)


def render_report_pdf(report: Report) -> bytes:
    """Replay the report layout onto a fresh PDF and return its bytes."""
    canvas = FpdfCanvas()
    draw_report(report, canvas)
    return canvas.to_bytes()

