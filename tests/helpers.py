from datetime import date

from truck_loads.app.models import Load, LoadCategory

CHAR_WIDTH = 5.0


def fixed_measure(text, bold=False, size=9):
    """Every character is CHAR_WIDTH points wide, whatever the font."""
    return len(text) * CHAR_WIDTH


def make_load(day: date, number: int = 1, **overrides) -> Load:
    fields = dict(
        category=LoadCategory.GENERAL_FREIGHT,
        origin="Dublin",
        destination="Cork",
        weight=1000,
        notes="",
        date=day,
        truck_number="TRK1",
        load_number=number,
    )
    fields.update(overrides)
    return Load(**fields)
