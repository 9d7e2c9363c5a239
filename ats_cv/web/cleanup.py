"""Periodic removal of stale generated files."""

from __future__ import annotations

import asyncio
import logging
import time
from pathlib import Path
from typing import List, Optional, Union

logger = logging.getLogger("ats_cv.web.cleanup")


def cleanup_old_files(
    directory: Union[str, Path],
    max_age_seconds: float,
    now: Optional[float] = None,
) -> List[Path]:
    """Delete regular files in *directory* older than *max_age_seconds*.

    Args:
        directory: Directory to sweep (not recursive). A missing directory is a no-op.
        max_age_seconds: Files whose mtime is older than this are removed.
        now: Reference time as a UNIX timestamp; defaults to the current time.

    Returns:
        Paths that were removed.
    """
    root = Path(directory)
    if not root.is_dir():
        return []

    now = time.time() if now is None else now
    removed: List[Path] = []
    for entry in root.iterdir():
        try:
            if not entry.is_file() or now - entry.stat().st_mtime <= max_age_seconds:
                continue
            entry.unlink()
        except FileNotFoundError:
            # Removed concurrently (e.g. by another worker).
            continue
        except OSError as e:
            logger.error("Cleanup error for %s: %s", entry, e)
            continue
        logger.info("Cleaned up old file: %s", entry.name)
        removed.append(entry)
    return removed


async def run_periodic_cleanup(
    directory: Union[str, Path],
    interval_seconds: float,
    max_age_seconds: float,
) -> None:
    """Sweep *directory* every *interval_seconds* until cancelled."""
    while True:
        await asyncio.sleep(interval_seconds)
        try:
            await asyncio.to_thread(cleanup_old_files, directory, max_age_seconds)
        except OSError as e:
            logger.error("Cleanup error: %s", e)
