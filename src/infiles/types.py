"""
Core types for the in-files cache.

A cache request is a tagged union of two frozen dataclasses:
- VirtualSource: content supplied by the caller (e.g. a REPL buffer)
- RealSource: content read from disk at the given path

Both carry a file path used as the source identity and the extension given
to the generated cache file.
"""

from __future__ import annotations

from dataclasses import dataclass
from pathlib import Path
from typing import Any

from infiles.exceptions import InvalidRequestError


def _check_file_path(file_path: str) -> None:
    if not file_path:
        raise InvalidRequestError(
            "file_path must not be empty",
            {"field": "file_path", "value": file_path},
        )


@dataclass(frozen=True)
class VirtualSource:
    """Source whose content is supplied by the caller.

    The file does not need to exist; file_path only identifies it.
    """

    file_path: str
    file_content: str
    file_extension: str | None = None

    def __post_init__(self) -> None:
        _check_file_path(self.file_path)


@dataclass(frozen=True)
class RealSource:
    """Source whose content is read from disk at file_path."""

    file_path: str
    file_extension: str | None = None

    def __post_init__(self) -> None:
        _check_file_path(self.file_path)


CacheRequest = VirtualSource | RealSource


def cache_request(
    file_path: str,
    file_extension: str | None = None,
    file_content: str | None = None,
) -> CacheRequest:
    """Build a request from the optional-content shape.

    An empty file_content counts as not supplied, so the source is real.

    Args:
        file_path: Source path, absolute or relative to the project root.
        file_extension: Extension of the generated cache file (e.g. ".js").
        file_content: Caller-supplied content for virtual sources.

    Returns:
        VirtualSource when content is given, RealSource otherwise.
    """
    if file_content:
        return VirtualSource(file_path, file_content, file_extension)
    return RealSource(file_path, file_extension)


@dataclass(frozen=True)
class LoadedSource:
    """A request after its path is normalized and its content is known."""

    file_path: str  # project-relative
    content: str
    file_extension: str


@dataclass(frozen=True)
class CacheLocation:
    """Resolved location of one cache artifact.

    path == project_root / cache_dir / folder_name / file_name
    """

    project_root: Path
    cache_dir: str  # project-relative
    folder_name: str  # derived from the source path only
    file_name: str  # hash of content + extension

    @property
    def folder_path(self) -> Path:
        """Absolute path of the per-source folder."""
        return self.project_root / self.cache_dir.lstrip("/\\") / self.folder_name

    @property
    def path(self) -> Path:
        """Absolute path of the artifact file."""
        return self.folder_path / self.file_name

    def to_dict(self) -> dict[str, Any]:
        return {
            "project_root": str(self.project_root),
            "cache_dir": self.cache_dir,
            "folder_name": self.folder_name,
            "file_name": self.file_name,
            "path": str(self.path),
        }
