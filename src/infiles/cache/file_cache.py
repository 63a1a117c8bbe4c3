"""
Filesystem-backed cache for compiled/transformed source artifacts.

Two kinds of sources are supported.

"Virtual" sources do not exist on disk: their content comes from the caller
(for example a REPL). A file path is still required because it identifies
the source and names its cache folder.

"Real" sources exist on disk. Only the file path is passed and the cache
reads the content itself.

Each artifact lives at

    <project_root>/<cache_dir>/<folder_name>/<hash10><extension>

where folder_name comes from the source path and hash10 from the source
content. Editing a source adds a new file to the same folder; clearing a
source removes the folder.
"""

from __future__ import annotations

import asyncio
from pathlib import Path

from infiles.cache import fs
from infiles.cache.base import CacheProtocol
from infiles.cache.loader import load_content
from infiles.cache.paths import (
    hash_content,
    resolve_cache_file_name,
    resolve_cache_folder_name,
    resolve_full_cache_path,
)
from infiles.config import Settings, get_settings
from infiles.logging import get_logger, log_context
from infiles.project_root import locate_project_root
from infiles.types import CacheLocation, CacheRequest

logger = get_logger(__name__)


class InFilesCache(CacheProtocol):
    """Content-addressed artifact cache stored in plain files.

    The project root is found once, on first use, by looking for
    root_marker upward from start_dir, and reused for the lifetime of
    the instance.
    """

    def __init__(
        self,
        cache_dir: str | Path,
        *,
        root_marker: str = "package.json",
        start_dir: str | Path | None = None,
        project_root: str | Path | None = None,
    ) -> None:
        """Initialize the cache.

        Args:
            cache_dir: Cache base directory, absolute or relative to the
                project root.
            root_marker: File name marking the project root.
            start_dir: Where root discovery starts. Defaults to the working
                directory at first use.
            project_root: Known project root; skips discovery.
        """
        self.cache_dir = cache_dir
        self.root_marker = root_marker
        self.start_dir = start_dir
        self._project_root: Path | None = (
            Path(project_root).resolve() if project_root is not None else None
        )
        self._root_lock = asyncio.Lock()

    @classmethod
    def from_settings(cls, settings: Settings | None = None) -> InFilesCache:
        """Build a cache from application settings."""
        settings = settings or get_settings()
        return cls(settings.cache_dir, root_marker=settings.root_marker)

    async def get_project_root(self) -> Path:
        """Get the project root, discovering it on first call."""
        if self._project_root is not None:
            return self._project_root

        async with self._root_lock:
            if self._project_root is None:
                self._project_root = await locate_project_root(
                    self.root_marker, self.start_dir
                )
        return self._project_root

    async def locate(self, request: CacheRequest) -> CacheLocation:
        """Resolve the artifact location for a request.

        Raises:
            MissingSourceFileError: If a real source is missing.
            ProjectRootNotFoundError: If the project root cannot be found.
        """
        project_root = await self.get_project_root()
        source = load_content(request, project_root)
        return resolve_full_cache_path(source, project_root, self.cache_dir)

    async def get(self, request: CacheRequest) -> str | None:
        """Get the cached artifact, or None if nothing is cached yet."""
        with log_context(operation="get", cache_dir=str(self.cache_dir)):
            location = await self.locate(request)
            artifact = fs.read_text(location.path)
            logger.debug(
                "Cache hit" if artifact is not None else "Cache miss",
                folder=location.folder_name,
                file=location.file_name,
            )
            return artifact

    async def set(self, request: CacheRequest, artifact: str) -> None:
        """Store an artifact, overwriting one with the same content hash."""
        with log_context(operation="set", cache_dir=str(self.cache_dir)):
            location = await self.locate(request)
            fs.write_text(location.path, artifact)
            logger.debug(
                "Stored artifact",
                folder=location.folder_name,
                file=location.file_name,
                size=len(artifact),
            )

    async def clear(self, request: CacheRequest) -> None:
        """Remove every cached revision of the request's source."""
        with log_context(operation="clear", cache_dir=str(self.cache_dir)):
            location = await self.locate(request)
            removed = fs.remove_tree(location.folder_path)
            logger.debug("Cleared cache folder", folder=location.folder_name, removed=removed)

    async def exists(self, request: CacheRequest) -> bool:
        """Check if an artifact is cached without reading it."""
        location = await self.locate(request)
        return location.path.is_file()

    def hash(self, content: str) -> str:
        """Truncated content hash used in cache file names."""
        return hash_content(content)

    def resolve_cache_file_name(self, content: str, extension: str) -> str:
        """Cache file name for content; exposed for inspection and tests."""
        return resolve_cache_file_name(content, extension)

    def resolve_cache_folder_name(self, file_path: str) -> str:
        """Cache folder name for a source path; exposed for inspection and tests."""
        return resolve_cache_folder_name(file_path)
