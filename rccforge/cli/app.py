"""Main Typer application — imports and registers all CLI commands.

Entry point: ``rccforge`` (configured via pyproject.toml scripts).
"""

from __future__ import annotations

import typer

from rccforge.cli.commands.digest import digest_cmd
from rccforge.cli.commands.list_cmd import list_cmd
from rccforge.cli.commands.run import run_cmd

app = typer.Typer(
    name="rccforge",
    help="rccforge: incremental regeneration of rcc resource outputs.",
    no_args_is_help=True,
    rich_markup_mode="rich",
    add_completion=False,
)

# Register subcommands
app.command(name="run", help="Regenerate the rcc output if it is stale.")(run_cmd)
app.command(name="digest", help="Print the settings digest of a manifest.")(digest_cmd)
app.command(name="list", help="List the resource files of a manifest.")(list_cmd)


def main() -> None:
    """CLI entry point."""
    app()


if __name__ == "__main__":
    main()
