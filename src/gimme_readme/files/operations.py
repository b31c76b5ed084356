"""Reading source files and persisting the generated output."""

from __future__ import annotations

import logging
import os
from pathlib import Path
import tempfile

from gimme_readme.exceptions import FileReadError, OutputWriteError

log = logging.getLogger(__name__)


def read_file(path: str | Path) -> str:
    """Return the text content of ``path``.

    Undecodable bytes are replaced rather than failing the whole request.

    Raises:
        FileReadError: If the path is missing, not a regular file, or unreadable.
    """
    file_path = Path(path)
    if not file_path.is_file():
        reason = "is a directory" if file_path.is_dir() else "no such file"
        raise FileReadError(path, FileNotFoundError(reason))
    try:
        return file_path.read_text(encoding="utf-8", errors="replace")
    except OSError as e:
        raise FileReadError(path, e) from e


def persist(path: str | Path, content: str) -> Path:
    """Write ``content`` to ``path``, replacing any existing file atomically.

    Content goes to a temporary sibling first and is moved into place with
    ``os.replace``, so an interrupted write never leaves a partial file.

    Returns:
        The path written.

    Raises:
        OutputWriteError: If the directory or file cannot be written.
    """
    target = Path(path)
    tmp_name: str | None = None
    try:
        target.parent.mkdir(parents=True, exist_ok=True)
        fd, tmp_name = tempfile.mkstemp(
            dir=target.parent, prefix=f".{target.name}.", suffix=".tmp"
        )
        with os.fdopen(fd, "w", encoding="utf-8", newline="") as f:
            f.write(content)
        # mkstemp creates 0600 files; keep the existing mode or use 0644.
        mode = target.stat().st_mode & 0o777 if target.exists() else 0o644
        os.chmod(tmp_name, mode)
        os.replace(tmp_name, target)
        tmp_name = None
    except OSError as e:
        raise OutputWriteError(target, e) from e
    finally:
        if tmp_name is not None:
            Path(tmp_name).unlink(missing_ok=True)
    log.debug("Wrote %d characters to %s", len(content), target)
    return target
