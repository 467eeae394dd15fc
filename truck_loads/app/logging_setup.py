import logging
import os
from pathlib import Path
from typing import Optional, Union

from .config import ENV_LOG_FILE, ENV_LOG_LEVEL

LOG_FORMAT = "%(asctime)s - %(levelname)s - %(name)s - %(message)s"


def _resolve_level(level: Optional[Union[int, str]]) -> int:
    if level is None:
        level = os.getenv(ENV_LOG_LEVEL, "INFO")
    if isinstance(level, int):
        return level
    resolved = logging.getLevelName(str(level).strip().upper())
    return resolved if isinstance(resolved, int) else logging.INFO


def setup_logging(level: Optional[Union[int, str]] = None) -> logging.Logger:
    """Setup basic logging configuration for the app and its exports."""
    handlers: list[logging.Handler] = [logging.StreamHandler()]
    log_file = os.getenv(ENV_LOG_FILE, "").strip()
    if log_file:
        Path(log_file).parent.mkdir(parents=True, exist_ok=True)
        handlers.append(logging.FileHandler(log_file, encoding="utf-8"))

    logging.basicConfig(
        level=_resolve_level(level),
        format=LOG_FORMAT,
        handlers=handlers,
    )
    return logging.getLogger("truck_loads")
