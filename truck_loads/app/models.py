import uuid
from dataclasses import dataclass, field
from datetime import date, datetime
from enum import Enum
from typing import List


class LoadCategory(str, Enum):
    """Fixed freight categories offered on the load form."""

    GENERAL_FREIGHT = "General Freight"
    DRY_VAN = "Dry Van Loads"
    FLATBED = "Flatbed Loads"
    REFRIGERATED = "Refrigerated (Reefer) Loads"
    TANKER = "Tanker Loads"
    HAZMAT = "Hazmat/ADR Loads"
    OVERSIZED = "Oversized Loads"
    BULK_MATERIALS = "Bulk Materials"
    LIVESTOCK = "Livestock Loads"
    HIGH_VALUE = "High-Value/Expedited Loads"

    @property
    def display_name(self) -> str:
        return self.value

    @classmethod
    def from_label(cls, text: str) -> "LoadCategory":
        needle = str(text or "").strip().lower()
        for member in cls:
            if member.value.lower() == needle or member.name.lower() == needle:
                return member
        raise ValueError(f"Unknown load category: {text!r}")


DEFAULT_CATEGORY = LoadCategory.TANKER


def as_calendar_date(value) -> date:
    """Reduce datetimes to their calendar day; plain dates pass through."""
    if isinstance(value, datetime):
        return value.date()
    if isinstance(value, date):
        return value
    raise TypeError(f"Expected a date, got {type(value).__name__}")


def _new_id() -> str:
    return uuid.uuid4().hex


@dataclass
class Load:
    """
    A single freight shipment entered by the driver.

    Fields are mutable so the edit view can change them in place; the
    load number is only computed when the load is created.
    """

    category: LoadCategory
    origin: str
    destination: str
    weight: float
    notes: str
    date: date
    truck_number: str
    load_number: int
    id: str = field(default_factory=_new_id)

    def __post_init__(self) -> None:
        if not isinstance(self.category, LoadCategory):
            self.category = LoadCategory.from_label(self.category)
        self.date = as_calendar_date(self.date)
        self.weight = float(self.weight)
        if self.weight < 0:
            raise ValueError("Weight must be non-negative.")
        if int(self.load_number) < 1:
            raise ValueError("Load number must be a positive integer.")
        self.load_number = int(self.load_number)


def sample_loads(today: date) -> List[Load]:
    """The three demo loads the app opens with, all dated today."""
    return [
        Load(
            category=LoadCategory.GENERAL_FREIGHT,
            origin="New York",
            destination="Los Angeles",
            weight=1000,
            notes="Handle with care",
            date=today,
            truck_number="TRK123",
            load_number=1,
        ),
        Load(
            category=LoadCategory.DRY_VAN,
            origin="Chicago",
            destination="Houston",
            weight=500,
            notes="Fragile",
            date=today,
            truck_number="TRK456",
            load_number=2,
        ),
        Load(
            category=LoadCategory.FLATBED,
            origin="Miami",
            destination="Seattle",
            weight=2000,
            notes="Urgent delivery",
            date=today,
            truck_number="TRK789",
            load_number=3,
        ),
    ]
