"""dmig CLI - Main entry point and command registration hub."""
# ruff: noqa: E402 - Intentional lazy loading: commands imported after cli group definition

import click
from rich.table import Table

from directivemig import __version__
from directivemig.config_runtime import default_config_path
from directivemig.pipeline.ui import console


class VerboseGroup(click.Group):
    """Help page that lists commands by category."""

    def format_commands(self, ctx, formatter):
        """Suppress default command listing (categorized in format_help)."""
        pass

    COMMAND_CATEGORIES = {
        "MIGRATION": {
            "title": "MIGRATION",
            "description": "Rewrite legacy // directives to //@ in place",
            "commands": ["migrate"],
        },
        "INSPECTION": {
            "title": "INSPECTION",
            "description": "Look at the collected directive corpus",
            "commands": ["collect-directive-names"],
        },
        "SETUP": {
            "title": "SETUP",
            "description": "Configuration scaffolding",
            "commands": ["generate-config"],
        },
    }

    def format_help(self, ctx, formatter):
        super().format_help(ctx, formatter)

        registered = {
            name: cmd
            for name, cmd in self.commands.items()
            if not getattr(cmd, "hidden", False)
        }

        console.print()
        console.rule("[bold]COMMANDS[/bold]")

        for category_data in self.COMMAND_CATEGORIES.values():
            console.print(f"\n[bold cyan]{category_data['title']}[/bold cyan]")
            console.print(f"[dim]{category_data['description']}[/dim]")

            table = Table(show_header=False, box=None, padding=(0, 2, 0, 0))
            table.add_column("Command", style="cmd", width=26)
            table.add_column("Description", style="white")

            for cmd_name in category_data["commands"]:
                if cmd_name not in registered:
                    continue
                first_line = (registered[cmd_name].help or "").split("\n")[0].strip()
                table.add_row(cmd_name, first_line.rstrip("."))

            console.print(table)

        console.print()
        console.rule()
        console.print("For detailed options: [cmd]dmig <command> --help[/cmd]")


@click.group(cls=VerboseGroup)
@click.version_option(version=__version__, prog_name="dmig")
@click.help_option("-h", "--help")
@click.option(
    "--config",
    "config_path",
    type=click.Path(dir_okay=False, path_type=str),
    default=None,
    help="Config file (default: $DIRECTIVEMIG_CONFIG or ./directivemig.json)",
)
@click.pass_context
def cli(ctx, config_path):
    """Migrate compiletest-style // directives to explicit //@ directives.

    \b
    QUICK START:
      dmig generate-config              # Write directivemig.json
      dmig migrate ../rust --dry-run    # Preview changes
      dmig migrate ../rust              # Rewrite test files in place"""
    ctx.ensure_object(dict)
    ctx.obj["config_path"] = config_path or str(default_config_path())


from directivemig.commands.generate_config import generate_config
from directivemig.commands.migrate import migrate
from directivemig.commands.names import collect_directive_names

cli.add_command(migrate)
cli.add_command(collect_directive_names)
cli.add_command(generate_config)


def main():
    """Main entry point for console script."""
    cli()


if __name__ == "__main__":
    main()
