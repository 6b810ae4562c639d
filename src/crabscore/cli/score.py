"""``crabscore score``: score one project and print the result."""

import json
from pathlib import Path
from typing import Optional

import typer
from rich.markup import escape

from ..exceptions import CrabScoreError
from ..logging_config import setup_logging
from ..pipeline import run_score
from ..report.generator import generate_json
from . import app
from ._common import console, err_console, resolve_config
from ._display import display_run


@app.command()
def score(
    ctx: typer.Context,
    path: Path = typer.Argument(
        Path("."),
        help="Cargo project, single .rs file or executable (default: current directory)",
    ),
    bin_name: Optional[str] = typer.Option(
        None,
        "--bin",
        "-b",
        help="Cargo bin target or path to the executable to benchmark",
    ),
    profile: Optional[str] = typer.Option(
        None,
        "--profile",
        "-p",
        help="Industry profile: web_services, iot_embedded, financial, gaming, enterprise",
    ),
    json_output: bool = typer.Option(
        False,
        "--json",
        help="Output the report as JSON",
    ),
    metrics: bool = typer.Option(
        False,
        "--metrics",
        help="With --json, include the raw metrics behind the score",
    ),
    config: Optional[Path] = typer.Option(
        None,
        "-c",
        "--config",
        help="Configuration file (TOML)",
        exists=True,
        file_okay=True,
        dir_okay=False,
        readable=True,
        hidden=True,
    ),
):
    """
    Score a Rust project.

    Builds and benchmarks the project when a runnable artifact can be found,
    otherwise estimates performance from the size of the source tree.

    [bold cyan]Examples:[/bold cyan]

      crabscore score

      crabscore score path/to/crate --bin server

      crabscore score src/main.rs --json

      crabscore score --json --metrics
    """
    logger = setup_logging((ctx.obj or {}).get("verbosity") or "normal")

    try:
        settings = resolve_config(ctx, path, profile=profile, config=config)
        setup_logging(settings.verbosity)

        if json_output:
            run = run_score(path, bin_name, settings)
            report = generate_json(run.score)
            if metrics:
                typer.echo(json.dumps({**report.to_dict(), "metrics": run.metrics_dict()}, indent=2))
            else:
                typer.echo(report.to_pretty_string())
            return

        console.print(f"[bright_cyan]Analyzing Rust project {path}...[/bright_cyan]")
        with console.status("[cyan]Scoring..."):
            run = run_score(path, bin_name, settings)
        display_run(run, console)

    except typer.Exit:
        raise

    except CrabScoreError as e:
        logger.error(f"{e.__class__.__name__}: {e}")
        err_console.print(f"[red]Error:[/red] {escape(str(e))}", highlight=False)
        raise typer.Exit(1)

    except KeyboardInterrupt:
        err_console.print("\n[yellow]Scoring interrupted[/yellow]")
        raise typer.Exit(130)
