"""Rich terminal display for gomodclean."""

from pathlib import Path

from rich.console import Console
from rich.markup import escape
from rich.panel import Panel
from rich.progress import Progress, SpinnerColumn, TextColumn, TimeElapsedColumn
from rich.prompt import Prompt
from rich.table import Table

from gomodclean.models import Analysis, CleanupResult

console = Console()

CHOICE_REMOVE = "1"
CHOICE_VIEW = "2"
CHOICE_QUIT = "3"


def format_size(size_bytes: int) -> str:
    """Format bytes to human-readable string (decimal units)."""
    if size_bytes >= 1000**3:
        return f"{size_bytes / (1000**3):.1f} GB"
    elif size_bytes >= 1000**2:
        return f"{size_bytes / (1000**2):.1f} MB"
    elif size_bytes >= 1000:
        return f"{size_bytes / 1000:.1f} KB"
    else:
        return f"{size_bytes} B"


def show_scanning_progress() -> Progress:
    """Create spinner for the scan stages."""
    return Progress(
        SpinnerColumn(),
        TextColumn("[progress.description]{task.description}"),
        TimeElapsedColumn(),
        console=console,
        transient=True,
    )


def show_analysis(analysis: Analysis) -> None:
    """Display the unused module summary."""
    table = Table(
        title="Module Cache",
        caption=f"{analysis.in_use_count} modules in use",
        show_header=True,
        header_style="bold",
    )
    table.add_column("Kind")
    table.add_column("In cache", justify="right")
    table.add_column("Unused", justify="right")

    table.add_row("Extracted", str(analysis.extracted_count), str(len(analysis.unused_extracted)))
    table.add_row("Downloaded", str(analysis.downloaded_count), str(len(analysis.unused_downloaded)))

    console.print(table)
    console.print(
        Panel(
            f"Found [bold]{analysis.unused_count}[/bold] unused mods, "
            f"occupied [bold]{format_size(analysis.total_bytes)}[/bold] disk space.",
            title="Summary",
            border_style="blue",
        )
    )


def show_paths(paths: list[Path]) -> None:
    """Print one path per line."""
    for path in paths:
        console.print(str(path), markup=False, highlight=False, soft_wrap=True)


def show_cleanup_result(result: CleanupResult) -> None:
    """Display the outcome of a removal."""
    console.print()
    console.print("[bold green]Cleanup Complete![/bold green]")

    table = Table(show_header=False)
    table.add_column("Metric", style="bold")
    table.add_column("Value", justify="right")

    table.add_row("Paths removed", str(len(result.removed_paths)))
    table.add_row("Version lists rewritten", str(len(result.rewritten_indexes)))
    if result.index_errors:
        table.add_row("[red]Version lists failed[/red]", str(len(result.index_errors)))

    console.print(table)

    for module_path, error in result.index_errors.items():
        console.print(f"  [red]✗[/red] {escape(module_path)}: {escape(error)}")


def ask_action() -> str:
    """Prompt for what to do with the unused modules."""
    console.print()
    console.print("You can:")
    console.print(f"  ({CHOICE_REMOVE}) Remove them (may require administrator privileges).")
    console.print(f"  ({CHOICE_VIEW}) View them.")
    console.print(f"  ({CHOICE_QUIT}) Quit.")

    return Prompt.ask(
        "Type one of the numbers in parentheses",
        choices=[CHOICE_REMOVE, CHOICE_VIEW, CHOICE_QUIT],
        default=CHOICE_QUIT,
        console=console,
    )
