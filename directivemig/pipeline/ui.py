"""Central UI handler for dmig.

Single source of truth for Rich console styling. Import this instead of
instantiating Console() in every command file.

Usage:
    from directivemig.pipeline.ui import console, print_header, print_error

    console.print("[success]Migration complete[/success]")
    print_header("MIGRATION SUMMARY")
"""

import sys

from rich.console import Console
from rich.table import Table
from rich.theme import Theme

DMIG_THEME = Theme({
    "info": "bold cyan",
    "warning": "bold yellow",
    "error": "bold red",
    "success": "bold green",
    "cmd": "bold magenta",
    "path": "bold cyan",
    "dim": "dim white",
})

# Single console instance - import this, don't create your own
console = Console(
    theme=DMIG_THEME,
    force_terminal=sys.stdout.isatty()
)


def print_header(title: str) -> None:
    """Print a styled section header with horizontal rules."""
    console.rule(f"[bold]{title}[/bold]")


def print_error(msg: str) -> None:
    """Print an error message in red."""
    console.print(f"[error]ERROR:[/error] {msg}")


def print_warning(msg: str) -> None:
    """Print a warning message in yellow."""
    console.print(f"[warning]WARNING:[/warning] {msg}")


def print_success(msg: str) -> None:
    """Print a success message in green."""
    console.print(f"[success]OK:[/success] {msg}")


def print_summary_table(summary, dry_run: bool = False) -> None:
    """Render per-phase migration counts as a table."""
    title = "Migration Summary (dry run)" if dry_run else "Migration Summary"
    table = Table(title=title, expand=False)
    table.add_column("Phase", style="cmd")
    table.add_column("Directives", justify="right")
    table.add_column("Files scanned", justify="right")
    table.add_column("Files changed", justify="right")
    table.add_column("Lines rewritten", justify="right")

    for phase in summary.phases:
        table.add_row(
            phase.name,
            str(phase.directive_count),
            str(phase.files_scanned),
            str(phase.files_changed),
            str(phase.lines_rewritten),
        )

    table.add_row(
        "[bold]total[/bold]",
        "",
        str(summary.files_scanned),
        str(summary.files_changed),
        str(summary.lines_rewritten),
    )
    console.print(table)
