"""CLI interface for gomodclean."""

from pathlib import Path
from typing import List, Optional

import typer
from rich.markup import escape

from gomodclean import __version__
from gomodclean.analyzer import analyze_cache
from gomodclean.cleaner import list_unused_paths, remove_unused
from gomodclean.config import default_cache_path, expand_path
from gomodclean.display import (
    CHOICE_REMOVE,
    CHOICE_VIEW,
    ask_action,
    console,
    show_analysis,
    show_cleanup_result,
    show_paths,
    show_scanning_progress,
)
from gomodclean.errors import CleanerError
from gomodclean.log import configure_logging
from gomodclean.models import CleanerConfig

# Create Typer app
app = typer.Typer(
    name="gomodclean",
    help="Clean up unused Go modules.",
    add_completion=False,
)


def version_callback(value: bool) -> None:
    """Print version and exit."""
    if value:
        console.print(f"gomodclean version {__version__}")
        raise typer.Exit()


@app.command()
def main(
    modfile: List[Path] = typer.Option(
        ...,
        "--modfile",
        "-m",
        help="go.mod files or directories that contain go.mod files; "
        "modules referenced by these files are considered in use",
    ),
    cache: Optional[str] = typer.Option(
        None,
        "--cache",
        help="Module cache root (default: $GOMODCACHE or $GOPATH/pkg/mod)",
    ),
    shallow: bool = typer.Option(
        False,
        "--shallow",
        help="Only keep modules referenced directly by the given go.mod files",
    ),
    list_only: bool = typer.Option(
        False, "--list", help="Print the paths that would be removed and exit"
    ),
    yes: bool = typer.Option(False, "-y", "--yes", help="Remove without prompting"),
    verbose: bool = typer.Option(False, "--verbose", "-v", help="Enable verbose mode"),
    version: bool = typer.Option(
        None,
        "--version",
        help="Show version and exit.",
        callback=version_callback,
        is_eager=True,
    ),
) -> None:
    """Clean up unused Go modules.

    Everything in the module cache is removed except the modules referenced
    by the given go.mod files and, unless --shallow is set, the modules
    those dependencies require in turn.
    """
    config = CleanerConfig(
        cache_path=expand_path(cache) if cache else default_cache_path(),
        modfile_paths=modfile,
        transitive=not shallow,
        verbose=verbose,
    )
    configure_logging(config.verbose)

    if not config.cache_path.is_dir():
        console.print(f"[red]Module cache not found: {escape(str(config.cache_path))}[/red]")
        raise typer.Exit(1)

    try:
        with show_scanning_progress() as progress:
            task = progress.add_task("Scanning...", total=None)

            def update_progress(description: str):
                progress.update(task, description=description)

            analysis = analyze_cache(config, progress_callback=update_progress)
    except CleanerError as e:
        console.print(f"[red]Error: {escape(str(e))}[/red]")
        raise typer.Exit(1)

    show_analysis(analysis)

    if analysis.unused_count == 0:
        console.print("[green]Nothing to clean.[/green]")
        raise typer.Exit(0)

    if list_only:
        choice = CHOICE_VIEW
    elif yes:
        choice = CHOICE_REMOVE
    else:
        choice = ask_action()

    try:
        if choice == CHOICE_REMOVE:
            result = remove_unused(
                config.cache_path,
                analysis.unused_extracted,
                analysis.unused_downloaded,
                progress_callback=lambda path: console.print(
                    f"[dim]Removing {escape(path)}[/dim]", highlight=False
                ),
            )
            show_cleanup_result(result)
        elif choice == CHOICE_VIEW:
            show_paths(
                list_unused_paths(
                    config.cache_path,
                    analysis.unused_extracted,
                    analysis.unused_downloaded,
                )
            )
    except CleanerError as e:
        console.print(f"[red]Error: {escape(str(e))}[/red]")
        raise typer.Exit(1)


if __name__ == "__main__":
    app()
