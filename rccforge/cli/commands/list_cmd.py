"""``rccforge list`` — print the resource files a manifest depends on."""

from __future__ import annotations

from pathlib import Path

import typer
from rich.console import Console
from rich.markup import escape

from rccforge.core.errors import RccError
from rccforge.core.lister import ResourceLister
from rccforge.core.manifest import load_job

console = Console()


def list_cmd(
    manifest: Path = typer.Argument(..., help="Path to the JSON info file."),
    config: str = typer.Option(
        None,
        "--config",
        "-c",
        help="Build configuration for per-configuration manifest keys.",
    ),
) -> None:
    """List the dependent inputs of MANIFEST.

    Uses the manifest's explicit input list when present, otherwise runs
    rcc in list mode (or reads the .qrc file).
    """
    try:
        job = load_job(manifest, config)
        inputs = list(job.inputs) or ResourceLister(
            job.rcc_executable, job.rcc_list_options
        ).list(job.source)
    except RccError as exc:
        console.print(f"[red]{escape(str(exc))}[/red]", highlight=False, soft_wrap=True)
        raise typer.Exit(code=1) from exc

    for path in inputs:
        console.print(path, markup=False, highlight=False, soft_wrap=True)
