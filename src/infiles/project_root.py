"""
Project root discovery.

The project root is the closest ancestor directory (starting from the
current working directory) that contains a marker file such as
package.json or pyproject.toml.
"""

from __future__ import annotations

import asyncio
from pathlib import Path

from infiles.exceptions import ConfigurationError, ProjectRootNotFoundError
from infiles.logging import get_logger

logger = get_logger(__name__)


def find_project_root(marker: str = "package.json", start: str | Path | None = None) -> Path:
    """Find the closest directory containing the marker file.

    Args:
        marker: Bare file name to look for.
        start: Directory to start from. Defaults to the working directory.

    Returns:
        Absolute path to the directory holding the marker.

    Raises:
        ConfigurationError: If marker is not a bare file name.
        ProjectRootNotFoundError: If no ancestor contains the marker.
    """
    if not marker or "/" in marker or "\\" in marker:
        raise ConfigurationError("Root marker must be a bare file name", {"marker": marker})

    origin = Path(start).resolve() if start is not None else Path.cwd().resolve()

    for directory in (origin, *origin.parents):
        if (directory / marker).is_file():
            return directory

    raise ProjectRootNotFoundError(
        f"Could not find {marker} in {origin} or any parent directory",
        {"marker": marker, "start": str(origin)},
    )


async def locate_project_root(
    marker: str = "package.json", start: str | Path | None = None
) -> Path:
    """Async wrapper around find_project_root.

    The directory walk runs in the default executor so the event loop
    is not blocked on slow filesystems.
    """
    loop = asyncio.get_running_loop()
    root = await loop.run_in_executor(None, find_project_root, marker, start)
    logger.info("Resolved project root", root=str(root), marker=marker)
    return root
