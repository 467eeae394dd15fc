from typing import Sequence

import pandas as pd

from .models import Load

FRAME_COLUMNS = [
    "Date",
    "Truck Number",
    "Load Number",
    "Category",
    "Origin",
    "Destination",
    "Weight (kg)",
    "Notes",
]


def loads_to_frame(loads: Sequence[Load]) -> pd.DataFrame:
    """Tabular view of loads in list order, for display and CSV export."""
    if not loads:
        return pd.DataFrame(columns=FRAME_COLUMNS)
    records = [
        {
            "Date": load.date,
            "Truck Number": load.truck_number,
            "Load Number": load.load_number,
            "Category": load.category.display_name,
            "Origin": load.origin,
            "Destination": load.destination,
            "Weight (kg)": load.weight,
            "Notes": load.notes,
        }
        for load in loads
    ]
    return pd.DataFrame.from_records(records, columns=FRAME_COLUMNS)


def frame_to_csv(df: pd.DataFrame) -> str:
    return df.to_csv(index=False)
