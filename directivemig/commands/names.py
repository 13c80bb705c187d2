"""Print the bare names of all collected directives."""

import json

import click

from directivemig.utils.error_handler import handle_exceptions


@click.command("collect-directive-names")
@handle_exceptions
@click.argument("corpus_root", required=False, type=click.Path(file_okay=False, path_type=str))
@click.option(
    "--phase",
    "phases",
    multiple=True,
    type=click.Choice(["ui", "rest"]),
    help="Only use the directives collected for this phase (repeatable)",
)
@click.option("--target", default=None, help="Build triple whose collected directives are used")
@click.option("--json", "as_json", is_flag=True, help="Print a JSON array instead of one name per line")
@click.pass_context
def collect_directive_names(ctx, corpus_root, phases, target, as_json):
    """List bare directive names found in the collected directives.

    Revision brackets, values and trailing text are stripped, so
    "//[rev] compile-flags: -O" contributes "compile-flags". Fails on a
    directive that cannot be parsed (unbalanced bracket, no marker).

    \b
    Examples:
      dmig collect-directive-names ../rust
      dmig collect-directive-names ../rust --phase ui --json"""
    from directivemig.config_runtime import load_runtime_config
    from directivemig.context import RunContext
    from directivemig.pipeline.phases import collect_directive_names as collect_names
    from directivemig.pipeline.phases import get_phases

    config = load_runtime_config(ctx.obj["config_path"])
    run_ctx = RunContext.from_config(corpus_root, config, target=target)

    names = collect_names(run_ctx, get_phases(phases))

    if as_json:
        click.echo(json.dumps(names, indent=2))
    else:
        for name in names:
            click.echo(name)
