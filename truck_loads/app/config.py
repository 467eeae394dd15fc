import os
from pathlib import Path

# Environment switches read once at import; helpers below re-read on demand.
ENV_REPORT_DIR = "TRUCK_LOADS_REPORT_DIR"
ENV_SEED_SAMPLES = "TRUCK_LOADS_SEED_SAMPLES"
ENV_PAGINATE = "TRUCK_LOADS_PAGINATE"
ENV_LOG_LEVEL = "TRUCK_LOADS_LOG_LEVEL"
ENV_LOG_FILE = "TRUCK_LOADS_LOG_FILE"

# Output locations for PDFs and HTML templates.
DEFAULT_REPORT_DIR = Path(__file__).resolve().parent.parent.parent / "reports"
DEFAULT_TEMPLATE_DIR = Path(__file__).resolve().parent.parent / "templates"
DEFAULT_REPORT_NAME = "LoadList"

# Page geometry in points (US Letter, same canvas as the mobile export).
PAGE_WIDTH = 612.0
PAGE_HEIGHT = 792.0
PAGE_MARGIN = 20.0
HEADER_Y = 20.0
HEADER_LINE_GAP = 16.0
HEADER_RULE_Y = 70.0
COLUMN_HEADER_Y = 80.0
COLUMN_RULE_Y = 100.0
FIRST_ROW_Y = 110.0
LINE_HEIGHT = 20.0
MIN_ROW_HEIGHT = 40.0

FONT_FAMILY = "Helvetica"
TITLE_FONT_SIZE = 14
COLUMN_FONT_SIZE = 10
BODY_FONT_SIZE = 9

# Column headers and widths; widths add up to the printable width.
REPORT_COLUMNS = (
    ("Date", 52.0),
    ("Truck No.", 60.0),
    ("Load No.", 48.0),
    ("Category", 92.0),
    ("Origin", 72.0),
    ("Destination", 72.0),
    ("Weight", 56.0),
    ("Notes", 120.0),
)

REPORT_DATE_FORMAT = "%d/%m/%y"

# Shared Plotly defaults so charts look consistent across the list view.
PLOTLY_CONFIG = {
    "displaylogo": False,
    "modeBarButtonsToRemove": [
        "lasso2d",
        "select2d",
        "autoScale2d",
        "resetScale2d",
    ],
}

_TRUTHY = {"1", "true", "yes", "on"}


def env_flag(name: str, default: bool = False) -> bool:
    raw = os.getenv(name, "").strip().lower()
    if not raw:
        return default
    return raw in _TRUTHY


def resolve_report_dir() -> Path:
    """
    Report directory from env, falling back to ./reports next to the package.
    """
    env_path = os.getenv(ENV_REPORT_DIR, "").strip()
    if env_path:
        return Path(env_path)
    return DEFAULT_REPORT_DIR


def seed_samples_enabled() -> bool:
    return env_flag(ENV_SEED_SAMPLES, default=True)


def paginate_enabled() -> bool:
    return env_flag(ENV_PAGINATE, default=False)
