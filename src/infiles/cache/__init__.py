"""
Cache package for compiled source artifacts.

- base.py: CacheProtocol abstract interface
- file_cache.py: InFilesCache, the filesystem implementation
- paths.py: hashing and cache path resolution
- loader.py: virtual/real source content loading
- fs.py: raw file primitives
"""

from infiles.cache.base import CacheProtocol
from infiles.cache.file_cache import InFilesCache
from infiles.cache.paths import (
    HASH_LENGTH,
    hash_content,
    normalize_to_project_relative,
    resolve_cache_file_name,
    resolve_cache_folder_name,
    resolve_full_cache_path,
)

__all__ = [
    "CacheProtocol",
    "InFilesCache",
    "HASH_LENGTH",
    "hash_content",
    "normalize_to_project_relative",
    "resolve_cache_file_name",
    "resolve_cache_folder_name",
    "resolve_full_cache_path",
]
