import pandas as pd


def category_breakdown(frame: pd.DataFrame) -> pd.DataFrame:
    """
    Count and total weight per category, heaviest first.
    Expects the columns produced by ``loads_to_frame``.
    """
    if frame.empty:
        return pd.DataFrame(columns=["Category", "Loads", "Weight (kg)"])
    grouped = (
        frame.groupby("Category", sort=False)
        .agg(**{"Loads": ("Load Number", "size"), "Weight (kg)": ("Weight (kg)", "sum")})
        .reset_index()
        .sort_values(["Weight (kg)", "Category"], ascending=[False, True], kind="mergesort")
        .reset_index(drop=True)
    )
    return grouped


def daily_totals(frame: pd.DataFrame) -> pd.DataFrame:
    """Loads and weight per calendar day, oldest first."""
    if frame.empty:
        return pd.DataFrame(columns=["Date", "Loads", "Weight (kg)"])
    return (
        frame.groupby("Date")
        .agg(**{"Loads": ("Load Number", "size"), "Weight (kg)": ("Weight (kg)", "sum")})
        .reset_index()
        .sort_values("Date")
        .reset_index(drop=True)
    )
