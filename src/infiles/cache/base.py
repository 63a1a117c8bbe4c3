"""
Base classes for caching.

CacheProtocol is the interface build tools program against; InFilesCache
is the filesystem implementation.
"""

from __future__ import annotations

from abc import ABC, abstractmethod

from infiles.types import CacheRequest


class CacheProtocol(ABC):
    """Abstract interface for source-keyed artifact caches."""

    @abstractmethod
    async def get(self, request: CacheRequest) -> str | None:
        """Get the cached artifact for a source, or None on a miss."""
        ...

    @abstractmethod
    async def set(self, request: CacheRequest, artifact: str) -> None:
        """Store the artifact for a source."""
        ...

    @abstractmethod
    async def clear(self, request: CacheRequest) -> None:
        """Drop every cached revision for a source."""
        ...

    @abstractmethod
    async def exists(self, request: CacheRequest) -> bool:
        """Check if an artifact is cached for a source."""
        ...
