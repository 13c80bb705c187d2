"""Write the default dmig configuration file."""

import click

from directivemig.utils.error_handler import handle_exceptions


@click.command("generate-config")
@handle_exceptions
@click.option(
    "--path",
    "path",
    default=None,
    type=click.Path(dir_okay=False, path_type=str),
    help="Where to write the config (default: the global --config path)",
)
@click.pass_context
def generate_config(ctx, path):
    """Create a default configuration file (never overwrites).

    The file holds the built-in defaults, including an empty
    "manual_directives" list for directives the collection step missed.

    \b
    EXIT CODES:
      0 = Config written
      1 = File write error
      3 = A config file already exists at the path"""
    from directivemig.config_runtime import write_default_config
    from directivemig.pipeline.ui import print_success

    written = write_default_config(path or ctx.obj["config_path"])
    print_success(f"Config written to {written}")
