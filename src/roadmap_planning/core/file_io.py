"""Safe file I/O utilities.

Provides whole-file replacement for JSON documents: the new content is
written to a sibling temp file, ``fsync``-ed, then renamed over the
target, so a crash mid-write leaves either the old or the new document.
"""

from __future__ import annotations

import logging
import os
import tempfile
from pathlib import Path

logger = logging.getLogger(__name__)


def safe_write_text(path: Path, text: str) -> None:
    """Atomically replace *path* with *text*.

    * The temp file lives in the same directory so ``os.replace`` is a
      same-filesystem rename.
    * ``os.fsync`` ensures the data hits disk before the rename.
    * Parent directories are created as needed.
    """
    path.parent.mkdir(parents=True, exist_ok=True)
    fd, tmp_name = tempfile.mkstemp(
        prefix=f".{path.name}.", suffix=".tmp", dir=path.parent
    )
    try:
        with os.fdopen(fd, "w", encoding="utf-8") as f:
            f.write(text)
            f.flush()
            os.fsync(f.fileno())
        os.replace(tmp_name, path)
    except BaseException:
        try:
            os.unlink(tmp_name)
        except FileNotFoundError:
            pass
        raise
    logger.debug("Wrote %d bytes to %s", len(text), path)


def read_text_if_exists(path: Path) -> str | None:
    """Return the file content, or ``None`` when the file does not exist."""
    try:
        return path.read_text(encoding="utf-8")
    except FileNotFoundError:
        return None
