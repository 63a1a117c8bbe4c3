"""
Cache path resolution.

Layout of one artifact:

    <project_root>/<cache_dir>/<folder_name>/<hash10><extension>

folder_name depends only on the source path, so every revision of one
source shares a folder and clearing that folder drops them all.
The file name depends only on the content and the requested extension.
"""

from __future__ import annotations

import hashlib
import re
from pathlib import Path

from infiles.types import CacheLocation, LoadedSource

# Truncated MD5: 40 bits. MD5 is not used for verification here, only for
# naming, and its truncated output stays uniformly distributed. Even at 32
# bits the chance of a collision across 50 revisions of one file is about
# 1 in 3.5 million.
HASH_LENGTH = 10

_EXTENSION_RE = re.compile(r"\.\w+")


def hash_content(content: str) -> str:
    """Return the first HASH_LENGTH hex chars of the MD5 of content."""
    digest = hashlib.md5(content.encode("utf-8"), usedforsecurity=False)
    return digest.hexdigest()[:HASH_LENGTH]


def resolve_cache_file_name(content: str, extension: str) -> str:
    """Cache file name for content; extension is appended verbatim."""
    return f"{hash_content(content)}{extension}"


def resolve_cache_folder_name(file_path: str) -> str:
    """Cache folder name for a source path.

    Directory segments and the extension-less file name are joined with
    "-": "/path/new-path/fileName.js" becomes "path-new-path-fileName".
    The extension is dropped because the source and the cached artifact
    usually differ in extension (.tsx vs .js).
    """
    tokens = file_path.replace("\\", "/")
    if tokens.startswith("/"):
        tokens = tokens[1:]
    *folders, file_name = tokens.split("/")

    base_name = _EXTENSION_RE.sub("", file_name, count=1)

    if folders:
        return "-".join([*folders, base_name])
    return base_name


def normalize_to_project_relative(path_value: str | Path, project_root: str | Path) -> str:
    """Make an absolute path under project_root relative to it.

    Relative paths and absolute paths outside the root come back unchanged.
    """
    value = str(path_value)
    root = str(project_root).rstrip("/\\")

    if value == root:
        return ""
    if value.startswith(root) and value[len(root)] in ("/", "\\"):
        return value[len(root):].lstrip("/\\")
    return value


def resolve_full_cache_path(
    source: LoadedSource,
    project_root: Path,
    cache_dir: str | Path,
) -> CacheLocation:
    """Resolve where the artifact for a loaded source lives.

    Args:
        source: Loaded source with a project-relative path and its content.
        project_root: Absolute project root.
        cache_dir: Cache base directory, absolute or project-relative.

    Returns:
        The artifact location.
    """
    return CacheLocation(
        project_root=project_root,
        cache_dir=normalize_to_project_relative(cache_dir, project_root),
        folder_name=resolve_cache_folder_name(source.file_path),
        file_name=resolve_cache_file_name(source.content, source.file_extension),
    )
