from __future__ import annotations

import logging
from pathlib import Path

from .lib.env import DEFAULT_LOG_PATH

FALLBACK_LOG_NAME = "aptstage.log"
LOG_FORMAT = "%(asctime)s %(levelname)s %(name)s: %(message)s"


def _file_handler(log_path: str) -> tuple[logging.Handler, str]:
    # Build dirs are often read-only; fall back to the working directory.
    try:
        Path(log_path).parent.mkdir(parents=True, exist_ok=True)
        return logging.FileHandler(log_path), log_path
    except OSError:
        fallback = str(Path.cwd() / FALLBACK_LOG_NAME)
        return logging.FileHandler(fallback), fallback


def configure_logging(log_path: str = DEFAULT_LOG_PATH, level: int = logging.INFO) -> str:
    """Send records to log_path and the console; returns the file actually used.

    Handlers are installed once per process, later calls only adjust the level.
    """

    root = logging.getLogger()
    root.setLevel(level)
    if getattr(root, "_aptstage_log_path", None):
        return root._aptstage_log_path  # type: ignore[attr-defined]

    handler, chosen_path = _file_handler(log_path)
    fmt = logging.Formatter(fmt=LOG_FORMAT, datefmt="%Y-%m-%dT%H:%M:%S%z")
    for h in (handler, logging.StreamHandler()):
        h.setFormatter(fmt)
        root.addHandler(h)
    root._aptstage_log_path = chosen_path  # type: ignore[attr-defined]

    logging.getLogger(__name__).info("Logging to %s (requested %s)", chosen_path, log_path)
    return chosen_path
