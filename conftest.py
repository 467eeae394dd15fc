import os
import sys
from pathlib import Path

ROOT = Path(__file__).resolve().parent
if str(ROOT) not in sys.path:
    sys.path.insert(0, str(ROOT))

# Keep test runs from writing into the repo's reports/ directory by accident.
os.environ.pop("TRUCK_LOADS_REPORT_DIR", None)
os.environ.pop("TRUCK_LOADS_PAGINATE", None)
