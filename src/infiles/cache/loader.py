"""
Source content loading.

Virtual sources carry their own content. Real sources are read from disk
relative to the project root, and a missing file is a hard error because
without content there is no cache file name.
"""

from __future__ import annotations

from pathlib import Path, PurePath

from infiles.cache import fs
from infiles.cache.paths import normalize_to_project_relative
from infiles.exceptions import MissingSourceFileError
from infiles.types import CacheRequest, LoadedSource, VirtualSource


def load_content(request: CacheRequest, project_root: Path) -> LoadedSource:
    """Normalize a request's path and produce the content to hash.

    Args:
        request: Virtual or real source request.
        project_root: Absolute project root.

    Returns:
        LoadedSource with a project-relative path, the effective content and
        the effective cache file extension.

    Raises:
        MissingSourceFileError: If a real source does not exist or is empty.
        OSError: For any other failure reading a real source.
    """
    file_path = normalize_to_project_relative(request.file_path, project_root)

    if isinstance(request, VirtualSource):
        content: str | None = request.file_content
    else:
        content = fs.read_text(project_root / file_path)

    if not content:
        raise MissingSourceFileError(file_path)

    file_extension = request.file_extension
    if file_extension is None:
        file_extension = PurePath(file_path.replace("\\", "/")).suffix

    return LoadedSource(file_path=file_path, content=content, file_extension=file_extension)
