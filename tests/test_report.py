from datetime import date

import pytest

from truck_loads.app.config import FIRST_ROW_Y, LINE_HEIGHT, MIN_ROW_HEIGHT, PAGE_MARGIN
from truck_loads.app.models import LoadCategory
from truck_loads.app.report import ReportFormatter, fit_text, fpdf_measure, wrap_text

from tests.helpers import CHAR_WIDTH, fixed_measure, make_load

DAY = date(2025, 1, 5)


@pytest.fixture
def formatter():
    return ReportFormatter(measure=fixed_measure)


def test_summary_totals_cover_exactly_the_given_loads(formatter):
    loads = [make_load(DAY, 1, weight=1000.4), make_load(DAY, 2, weight=499.9), make_load(DAY, 3, weight=0)]
    summary = formatter.summarize(loads[:2])
    assert summary.total_loads == 2
    assert summary.total_weight == pytest.approx(1500.3)
    assert summary.total_weight_kg == 1500
    assert summary.header_lines() == ("Load Report", "Total Loads: 2", "Total Weight: 1500 kg")


def test_summary_of_nothing(formatter):
    summary = formatter.summarize([])
    assert summary.total_loads == 0
    assert summary.total_weight == 0


def test_row_cells_are_formatted(formatter):
    load = make_load(
        DAY,
        4,
        category=LoadCategory.HAZMAT,
        truck_number="TRK42",
        origin="Galway",
        destination="Limerick",
        weight=1234.9,
        notes="Keep upright",
    )
    (row,) = formatter.rows([load])
    assert row.load_id == load.id
    assert row.cells == (
        "05/01/25",
        "TRK42",
        "4",
        "Hazmat/ADR Loads",
        "Galway",
        "Limerick",
        "1234 kg",
        "Keep upright",
    )
    assert row.notes_lines == ("Keep upright",)
    assert row.height == MIN_ROW_HEIGHT


def test_long_notes_grow_the_row(formatter):
    # 116pt notes column at 5pt per character holds 23 characters per line.
    notes = "pallets " * 10
    (row,) = formatter.rows([make_load(DAY, 1, notes=notes.strip())])
    assert len(row.notes_lines) == 4
    assert all(len(line) * CHAR_WIDTH <= formatter.notes_width for line in row.notes_lines)
    assert row.height == 4 * LINE_HEIGHT


def test_wrap_text_splits_words_longer_than_the_column():
    lines = wrap_text("x" * 25, 50, fixed_measure)
    assert lines == ["x" * 10, "x" * 10, "x" * 5]


def test_wrap_text_keeps_explicit_newlines_and_skips_empty():
    assert wrap_text("one\ntwo", 100, fixed_measure) == ["one", "two"]
    assert wrap_text("", 100, fixed_measure) == []
    assert wrap_text("   ", 100, fixed_measure) == []
    assert wrap_text(None, 100, fixed_measure) == []


def test_fit_text_adds_ellipsis_only_when_needed():
    assert fit_text("Cork", 40, fixed_measure) == "Cork"
    shortened = fit_text("Carrick-on-Shannon", 40, fixed_measure)
    assert shortened.endswith("...")
    assert len(shortened) * CHAR_WIDTH <= 40


def test_layout_places_header_columns_and_first_row(formatter):
    loads = [make_load(DAY, 1, weight=1000), make_load(DAY, 2, weight=500)]
    report = formatter.layout(loads)
    assert report.page_count == 1
    assert report.overflow_rows == 0
    page = report.pages[0]
    assert [t.text for t in page.texts[:3]] == ["Load Report", "Total Loads: 2", "Total Weight: 1500 kg"]
    column_labels = [t.text for t in page.texts[3:11]]
    assert column_labels == list(report.columns)

    first_row = [t for t in page.texts if t.y == FIRST_ROW_Y]
    assert first_row[0].x == PAGE_MARGIN
    assert first_row[0].text == "05/01/25"
    # Two header rules plus one separator per row.
    assert len(page.lines) == 4
    assert page.lines[-1].y1 == FIRST_ROW_Y + 2 * MIN_ROW_HEIGHT


def test_single_page_layout_reports_overflow(formatter):
    loads = [make_load(DAY, n) for n in range(1, 21)]
    report = formatter.layout(loads)
    assert report.page_count == 1
    # 16 rows of 40pt fit between y=110 and the 772pt bottom margin.
    assert report.overflow_rows == 4
    assert len(report.rows) == 20


def test_paginated_layout_continues_on_new_pages():
    formatter = ReportFormatter(measure=fixed_measure, paginate=True)
    loads = [make_load(DAY, n, origin=f"O{n}") for n in range(1, 21)]
    report = formatter.layout(loads)
    assert report.page_count == 2
    assert report.overflow_rows == 0
    second = report.pages[1]
    assert second.texts[0].text == "Load Report (continued)"
    assert second.texts[1].text == "Total Loads: 20"
    origins = [t.text for t in second.texts if t.text.startswith("O") and t.text[1:].isdigit()]
    assert origins == ["O17", "O18", "O19", "O20"]


def test_empty_report_still_has_one_page(formatter):
    report = formatter.layout([])
    assert report.page_count == 1
    assert report.rows == []
    assert report.pages[0].texts[1].text == "Total Loads: 0"


def test_fpdf_measure_uses_font_metrics():
    measure = fpdf_measure()
    regular = measure("abc", False, 10)
    assert regular > 0
    assert measure("abc", False, 20) == pytest.approx(2 * regular)
    assert measure("abc", True, 10) >= regular
