"""
infiles - content-addressed file cache for compiled source artifacts.

Primary entrypoints:
 - cache.file_cache.InFilesCache (get/set/clear)
 - types.VirtualSource / types.RealSource (cache requests)
 - cli.main (Typer CLI)
"""

__version__ = "0.1.0"

__all__ = [
    "__version__",
]
