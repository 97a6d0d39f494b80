from __future__ import annotations

import logging
from contextlib import closing
from datetime import datetime, timezone
from email.utils import parsedate_to_datetime
from pathlib import Path
from typing import Optional

import requests

from ..errors import DownloadError

logger = logging.getLogger(__name__)

EPOCH = datetime(1970, 1, 1, tzinfo=timezone.utc)
CHUNK_SIZE = 64 * 1024


def local_mtime(path: Path) -> datetime:
    """mtime of a cached archive, or the epoch when there is none yet."""
    if not path.exists():
        return EPOCH
    return datetime.fromtimestamp(path.stat().st_mtime, tz=timezone.utc)


def parse_last_modified(value: Optional[str]) -> datetime:
    """Parse an HTTP date; an absent or malformed header counts as "now"."""

    if not value:
        logger.debug("No Last-Modified header; assuming remote is fresh")
        return datetime.now(timezone.utc)
    try:
        parsed = parsedate_to_datetime(value)
    except (TypeError, ValueError):
        logger.warning("Unparseable Last-Modified %r; assuming remote is fresh", value)
        return datetime.now(timezone.utc)
    if parsed.tzinfo is None:
        parsed = parsed.replace(tzinfo=timezone.utc)
    return parsed


def content_length(value: Optional[str]) -> int:
    """Declared body size, or -1 when the header is absent or not an integer."""

    if not value:
        return -1
    try:
        return int(value)
    except ValueError:
        logger.warning("Unparseable Content-Length %r; skipping size check", value)
        return -1


def fetch_if_newer(session: requests.Session, url: str, dest: Path) -> bool:
    """Download url into dest unless the cached copy is newer than the remote one.

    Equal timestamps still download. Returns True when dest was (re)written.
    A body shorter than its Content-Length raises DownloadError and leaves
    the partial file behind.
    """

    last_mod_local = local_mtime(dest)

    with closing(session.get(url, stream=True)) as resp:
        resp.raise_for_status()
        last_mod_remote = parse_last_modified(resp.headers.get("Last-Modified"))

        if last_mod_remote < last_mod_local:
            logger.info("Cached %s is newer than remote; skipping download", dest.name)
            return False

        expected = content_length(resp.headers.get("Content-Length"))
        written = 0
        with dest.open("wb") as f:
            try:
                for chunk in resp.iter_content(chunk_size=CHUNK_SIZE):
                    if chunk:
                        f.write(chunk)
                        written += len(chunk)
            except requests.exceptions.ChunkedEncodingError as e:
                # urllib3 reports a body cut short of Content-Length this way.
                raise DownloadError(
                    f"could only write {written} bytes of total {expected} for pkg {dest}"
                ) from e

        if written < expected:
            raise DownloadError(f"could only write {written} bytes of total {expected} for pkg {dest}")

    logger.info("Downloaded %s (%d bytes)", dest.name, written)
    return True
