from __future__ import annotations

import logging
import shutil
from pathlib import Path

logger = logging.getLogger(__name__)


def file_exists(path: str | Path) -> bool:
    """True if path exists; permission problems surface as OSError."""

    try:
        Path(path).stat()
    except FileNotFoundError:
        return False
    return True


def copy_file(src: str | Path, dst: str | Path) -> None:
    s = Path(src)
    d = Path(dst)
    if not s.exists():
        raise FileNotFoundError(str(s))

    d.parent.mkdir(parents=True, exist_ok=True)
    shutil.copy2(s, d)
    logger.debug("Copied %s -> %s", str(s), str(d))
