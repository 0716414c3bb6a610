"""``rccforge run`` — bring one rcc output up to date.

Loads the manifest, runs the full lock/evaluate/build/wrap cycle and prints
what was done.  Exits with status 1 on any failure, after printing the error
(including captured generator output).
"""

from __future__ import annotations

from pathlib import Path

import typer
from rich.console import Console
from rich.markup import escape

from rccforge.cli._logging import configure_logging
from rccforge.config import RccforgeConfig
from rccforge.core.errors import RccError
from rccforge.core.orchestrator import AutoRcc
from rccforge.models.decision import BuildDecision

console = Console()
err_console = Console(stderr=True)

_ACTION_STYLE = {
    BuildDecision.REBUILD: "[bold green]Rebuilt[/bold green]",
    BuildDecision.TOUCH_ONLY: "[yellow]Touched[/yellow]",
    BuildDecision.UP_TO_DATE: "[dim]Up to date[/dim]",
}


def run_cmd(
    manifest: Path = typer.Argument(..., help="Path to the JSON info file."),
    config: str = typer.Option(
        None,
        "--config",
        "-c",
        help="Build configuration for per-configuration manifest keys.",
    ),
    verbose: bool = typer.Option(
        False, "--verbose", "-v", help="Log reasons and commands."
    ),
    quiet: bool = typer.Option(
        False, "--quiet", "-q", help="Print nothing on success."
    ),
) -> None:
    """Regenerate the rcc output of MANIFEST if it is stale."""
    settings = RccforgeConfig()
    if verbose:
        settings = settings.model_copy(update={"verbosity": max(settings.verbosity, 1)})
    configure_logging(verbose or settings.verbosity > 0, settings)

    try:
        report = AutoRcc.from_manifest(manifest, config, settings=settings).process()
    except RccError as exc:
        err_console.print(f"[red]AutoRcc error:[/red] {escape(str(exc))}", highlight=False, soft_wrap=True)
        raise typer.Exit(code=1) from exc

    if quiet:
        return
    console.print(f"{_ACTION_STYLE[report.decision.action]}  {escape(report.output_path)}", soft_wrap=True)
    if report.wrapper_path:
        console.print(f"[dim]Wrapper:[/dim] {escape(report.wrapper_path)}", soft_wrap=True)
