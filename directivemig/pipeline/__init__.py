"""Migration run orchestration and terminal output."""
from .phases import (
    PHASES,
    MigrationSummary,
    Phase,
    PhaseSummary,
    collect_directive_names,
    get_phases,
    run_migration,
    run_phase,
)
from .ui import console, print_error, print_header, print_success, print_summary_table, print_warning

__all__ = [
    "PHASES", "MigrationSummary", "Phase", "PhaseSummary", "collect_directive_names", "get_phases",
    "run_migration", "run_phase",
    "console", "print_error", "print_header", "print_success", "print_summary_table", "print_warning",
]
