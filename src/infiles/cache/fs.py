"""
Raw synchronous filesystem primitives used by the cache.

read_text() reports a missing file as None instead of raising, so callers
decide whether absence is a miss or an error. Every other OSError
propagates.
"""

from __future__ import annotations

import os
import shutil
from pathlib import Path


def read_text(path: Path) -> str | None:
    """Read a UTF-8 text file, returning None if it does not exist.

    Line endings are returned untranslated.
    """
    try:
        with path.open("r", encoding="utf-8", newline="") as f:
            return f.read()
    except FileNotFoundError:
        return None


def write_text(path: Path, content: str) -> None:
    """Write a UTF-8 text file, creating parent directories.

    Writes to a sibling temp file first and moves it into place, so a
    concurrent reader sees either the old artifact or the new one.
    """
    path.parent.mkdir(parents=True, exist_ok=True)
    tmp_path = path.with_name(f"{path.name}.{os.getpid()}.tmp")
    try:
        with tmp_path.open("w", encoding="utf-8", newline="") as f:
            f.write(content)
    except BaseException:
        tmp_path.unlink(missing_ok=True)
        raise
    os.replace(tmp_path, path)


def remove_tree(path: Path) -> bool:
    """Recursively remove a directory.

    Returns:
        True if something was removed, False if the path did not exist.
    """
    try:
        shutil.rmtree(path)
    except FileNotFoundError:
        return False
    return True
