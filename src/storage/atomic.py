# src/storage/atomic.py

"""Replace-on-success file writes."""

import logging
import os
from collections.abc import Iterator
from contextlib import contextmanager
from pathlib import Path
from typing import TextIO

logger = logging.getLogger("listing_watch.storage")


def _fsync_dir(directory: Path) -> None:
    """Flush a directory entry so a rename survives power loss."""
    if os.name == "nt":
        return
    fd = os.open(directory, os.O_RDONLY)
    try:
        os.fsync(fd)
    finally:
        os.close(fd)


@contextmanager
def atomic_open(path: Path, newline: str | None = None) -> Iterator[TextIO]:
    """Open a sibling temp file and move it over *path* on success.

    Readers of *path* see either the old content or the complete new
    content. If the body raises, the temp file is removed and the
    original file is left as it was. After the move the parent
    directory is fsynced as well.
    """
    path.parent.mkdir(parents=True, exist_ok=True)
    tmp = path.with_name(f".{path.name}.tmp")
    try:
        with open(tmp, "w", encoding="utf-8", newline=newline) as f:
            yield f
            f.flush()
            os.fsync(f.fileno())
        tmp.replace(path)
        _fsync_dir(path.parent)
    except BaseException:
        try:
            tmp.unlink(missing_ok=True)
        except OSError as exc:
            logger.warning(
                "Could not remove temp file %s: %s", tmp, exc
            )
        raise
