"""dmig subcommands."""
