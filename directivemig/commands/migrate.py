"""Rewrite known directives in the corpus from // to //@."""

import click

from directivemig.utils.error_handler import handle_exceptions


@click.command()
@handle_exceptions
@click.argument("corpus_root", required=False, type=click.Path(file_okay=False, path_type=str))
@click.option(
    "--phase",
    "phases",
    multiple=True,
    type=click.Choice(["ui", "rest"]),
    help="Run only this phase (repeatable). Default: ui, then rest",
)
@click.option("--target", default=None, help="Build triple whose collected directives are used")
@click.option(
    "--match-mode",
    type=click.Choice(["line", "body"]),
    default=None,
    help="Compare whole lines (default) or trimmed comment bodies",
)
@click.option(
    "--extension",
    "extensions",
    multiple=True,
    help="Candidate file extension (repeatable, e.g. --extension .rs --extension .fixed)",
)
@click.option("--dry-run", is_flag=True, help="Report what would change without writing files")
@click.option("--diff", "show_diff", is_flag=True, help="Print a unified diff for each changed file")
@click.pass_context
def migrate(ctx, corpus_root, phases, target, match_mode, extensions, dry_run, show_diff):
    """Rewrite directive comments in CORPUS_ROOT/tests from // to //@.

    Every comment line whose text exactly matches a directive collected by
    the test harness gets the explicit //@ marker. Other comments are left
    byte-for-byte unchanged. Each file is written to a temporary file and
    swapped in atomically.

    \b
    Collected directives are read from:
      CORPUS_ROOT/build/<target>/test/ui/__directive_lines.txt  (ui phase)
      CORPUS_ROOT/build/<target>/test/ui/__directive_lines/     (ui phase)
      CORPUS_ROOT/build/<target>/test/__directive_lines.txt     (rest phase)
      CORPUS_ROOT/build/<target>/test/__directive_lines/        (rest phase)

    \b
    Examples:
      dmig migrate ../rust --dry-run --diff
      dmig migrate ../rust --phase ui
      dmig migrate ../rust --extension .rs --extension .fixed

    \b
    EXIT CODES:
      0 = Success
      1 = File access failure, malformed directive or layout violation
      2 = Missing or invalid CORPUS_ROOT"""
    from directivemig.config_runtime import load_runtime_config
    from directivemig.context import RunContext
    from directivemig.pipeline.phases import get_phases, run_migration
    from directivemig.pipeline.ui import console, print_header, print_summary_table

    config = load_runtime_config(ctx.obj["config_path"])
    run_ctx = RunContext.from_config(
        corpus_root,
        config,
        target=target,
        match_mode=match_mode,
        extensions=tuple(extensions) or None,
        dry_run=dry_run,
        show_diff=show_diff,
    )

    def report(result):
        if not result.changed:
            return
        if dry_run:
            console.print(f"  [dim]\\[DRY-RUN][/dim] [path]{result.path}[/path] ({result.rewritten})", highlight=False)
        if show_diff:
            click.echo(result.unified_diff(), nl=False)

    mode_str = "[DRY RUN] " if dry_run else ""
    print_header(f"{mode_str}Directive migration: // -> //@")
    summary = run_migration(run_ctx, get_phases(phases), on_result=report)

    print_summary_table(summary, dry_run=dry_run)
    if dry_run:
        console.print("[info]Dry run - no files were modified[/info]")
