"""``rccforge digest`` — print the settings digest of a manifest.

Read-only: neither the settings record nor the lock file is touched.
"""

from __future__ import annotations

from pathlib import Path

import typer
from rich.console import Console
from rich.markup import escape
from rich.table import Table

from rccforge.core.errors import RccError
from rccforge.core.manifest import load_job
from rccforge.core.settings_store import format_record

console = Console()


def digest_cmd(
    manifest: Path = typer.Argument(..., help="Path to the JSON info file."),
    config: str = typer.Option(
        None,
        "--config",
        "-c",
        help="Build configuration for per-configuration manifest keys.",
    ),
    record: bool = typer.Option(
        False, "--record", help="Print the settings record line instead."
    ),
) -> None:
    """Print the digest rccforge would store for MANIFEST."""
    try:
        job = load_job(manifest, config)
    except RccError as exc:
        console.print(f"[red]{escape(str(exc))}[/red]", highlight=False, soft_wrap=True)
        raise typer.Exit(code=1) from exc

    digest = job.settings_digest()
    if record:
        console.print(format_record(digest), end="", highlight=False)
        return

    table = Table(show_header=False, box=None)
    table.add_column("Key", style="bold")
    table.add_column("Value")
    table.add_row("Source", escape(job.source))
    table.add_row("Output", escape(str(job.output_path)))
    table.add_row("Settings file", escape(str(job.settings_file)))
    table.add_row("Digest", f"[cyan]{digest}[/cyan]")
    console.print(table)
