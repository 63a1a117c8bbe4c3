"""
CLI for the in-files cache.

Commands:
    infiles hash CONTENT - Print the content hash used in cache file names
    infiles locate FILE - Print where the artifact for FILE is cached
    infiles get FILE - Print the cached artifact for FILE
    infiles set FILE ARTIFACT - Cache ARTIFACT (a file, or - for stdin) for FILE
    infiles clear FILE - Drop every cached revision of FILE
    infiles config - Show current configuration
    infiles version - Print version
"""

from __future__ import annotations

import asyncio
import sys
from pathlib import Path
from typing import Annotated, Any, Coroutine, Optional, TypeVar

import orjson
import typer
from pydantic import ValidationError
from rich.console import Console
from rich.table import Table

from infiles import __version__
from infiles.cache.file_cache import InFilesCache
from infiles.cache.paths import hash_content
from infiles.config import Settings, clear_settings_cache, get_settings
from infiles.exceptions import InFilesError
from infiles.logging import setup_logging
from infiles.types import CacheRequest, cache_request

T = TypeVar("T")

app = typer.Typer(
    name="infiles",
    help="In-files cache - content-addressed cache for compiled source artifacts",
    no_args_is_help=True,
)

console = Console()
error_console = Console(stderr=True)

FileArg = Annotated[str, typer.Argument(help="Source path, absolute or project-relative")]
ContentOpt = Annotated[
    Optional[str],
    typer.Option("--content", "-c", help="Virtual source content (skips reading FILE)"),
]
ExtOpt = Annotated[
    Optional[str],
    typer.Option("--ext", "-e", help="Cache file extension, e.g. .js (default: FILE's own)"),
]
CacheDirOpt = Annotated[
    Optional[Path],
    typer.Option("--cache-dir", "-d", help="Cache directory (default: INFILES_CACHE_DIR)"),
]
RootOpt = Annotated[
    Optional[Path],
    typer.Option("--root", "-r", help="Project root (default: found via INFILES_ROOT_MARKER)"),
]


def _get_settings_safe() -> Settings | None:
    """Get settings, returning None if configuration is invalid."""
    try:
        clear_settings_cache()
        return get_settings()
    except ValidationError:
        return None


def _require_settings() -> Settings:
    settings = _get_settings_safe()
    if settings is None:
        error_console.print(
            "[red]Error:[/red] Configuration is invalid. "
            "Run 'infiles config' to see what's wrong."
        )
        raise typer.Exit(1)
    setup_logging(settings.LOG_LEVEL, settings.LOG_FILE)
    return settings


def _build(
    file: str,
    content: str | None,
    ext: str | None,
    cache_dir: Path | None,
    root: Path | None,
) -> tuple[InFilesCache, CacheRequest]:
    settings = _require_settings()
    cache = InFilesCache(
        cache_dir if cache_dir is not None else settings.cache_dir,
        root_marker=settings.root_marker,
        project_root=root,
    )
    try:
        request = cache_request(file, file_extension=ext, file_content=content)
    except InFilesError as e:
        error_console.print(f"[red]Error:[/red] {e}")
        raise typer.Exit(1)
    return cache, request


def _run(coro: Coroutine[Any, Any, T]) -> T:
    """Run a cache coroutine, turning domain errors into exit code 1."""
    try:
        return asyncio.run(coro)
    except InFilesError as e:
        error_console.print(f"[red]Error:[/red] {e}")
        raise typer.Exit(1)


@app.command("hash")
def hash_command(
    content: Annotated[str, typer.Argument(help="Content to hash")],
) -> None:
    """Print the truncated content hash used in cache file names."""
    console.print(hash_content(content))


@app.command()
def locate(
    file: FileArg,
    content: ContentOpt = None,
    ext: ExtOpt = None,
    cache_dir: CacheDirOpt = None,
    root: RootOpt = None,
    as_json: Annotated[bool, typer.Option("--json", help="Print JSON")] = False,
) -> None:
    """Print where the artifact for FILE is (or would be) cached."""
    cache, request = _build(file, content, ext, cache_dir, root)
    location = _run(cache.locate(request))

    if as_json:
        sys.stdout.write(orjson.dumps(location.to_dict(), option=orjson.OPT_INDENT_2).decode())
        sys.stdout.write("\n")
        return

    console.print(str(location.path), soft_wrap=True)


@app.command()
def get(
    file: FileArg,
    content: ContentOpt = None,
    ext: ExtOpt = None,
    cache_dir: CacheDirOpt = None,
    root: RootOpt = None,
) -> None:
    """Print the cached artifact for FILE. Exits with 1 on a miss."""
    cache, request = _build(file, content, ext, cache_dir, root)
    artifact = _run(cache.get(request))

    if artifact is None:
        error_console.print(f"[yellow]No cached artifact for {file}[/yellow]")
        raise typer.Exit(1)

    sys.stdout.write(artifact)


@app.command("set")
def set_command(
    file: FileArg,
    artifact: Annotated[str, typer.Argument(help="File holding the artifact, or - for stdin")],
    content: ContentOpt = None,
    ext: ExtOpt = None,
    cache_dir: CacheDirOpt = None,
    root: RootOpt = None,
) -> None:
    """Cache ARTIFACT as the compiled form of FILE."""
    cache, request = _build(file, content, ext, cache_dir, root)

    if artifact == "-":
        artifact_text = sys.stdin.read()
    else:
        try:
            artifact_text = Path(artifact).read_text(encoding="utf-8")
        except FileNotFoundError:
            error_console.print(f"[red]Error:[/red] Artifact file not found: {artifact}")
            raise typer.Exit(1)

    _run(cache.set(request, artifact_text))
    console.print(f"[green]Cached[/green] {file}")


@app.command()
def clear(
    file: FileArg,
    content: ContentOpt = None,
    cache_dir: CacheDirOpt = None,
    root: RootOpt = None,
) -> None:
    """Drop every cached revision of FILE."""
    cache, request = _build(file, content, None, cache_dir, root)
    _run(cache.clear(request))
    console.print(f"[green]Cleared[/green] {file}")


@app.command()
def config() -> None:
    """Show current configuration."""
    settings = _get_settings_safe()

    if settings is None:
        error_console.print("[red]Configuration is invalid.[/red]")
        error_console.print()
        error_console.print("Check these environment variables:")
        error_console.print("  - INFILES_ROOT_MARKER (bare file name, e.g. package.json)")
        error_console.print("  - INFILES_LOG_LEVEL (DEBUG, INFO, WARNING, ERROR, CRITICAL)")
        raise typer.Exit(1)

    table = Table(title="Settings", show_header=True)
    table.add_column("Setting", style="cyan")
    table.add_column("Value", style="green")

    for key, value in settings.display().items():
        table.add_row(key, value if value is not None else "[dim]not set[/dim]")

    console.print(table)


@app.command()
def version() -> None:
    """Print the version number."""
    console.print(f"infiles-cache version {__version__}")


def main() -> None:
    """Entry point for the CLI."""
    app()


if __name__ == "__main__":
    main()
