"""``crabscore report``: write report files or serve the dashboard."""

from pathlib import Path
from typing import Optional

import typer
from rich.markup import escape

from ..exceptions import CrabScoreError
from ..logging_config import setup_logging
from ..pipeline import run_score
from ..report.generator import write_reports
from . import app
from ._common import console, err_console, resolve_config


@app.command()
def report(
    ctx: typer.Context,
    path: Path = typer.Argument(
        Path("."),
        help="Cargo project to score (default: current directory)",
    ),
    serve: bool = typer.Option(
        False,
        "--serve",
        help="Serve the report on a local dashboard instead of writing files",
    ),
    port: int = typer.Option(8080, "--port", help="Dashboard port", min=1, max=65535),
    host: str = typer.Option("127.0.0.1", "--host", help="Dashboard bind address"),
    output_dir: Path = typer.Option(
        Path("."),
        "--output-dir",
        "-o",
        help="Directory the report files are written to",
        file_okay=False,
        dir_okay=True,
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
    Score a project and publish the report.

    Writes crabscore_report.json, crabscore_report.html and report_csrd.json,
    or with --serve starts a dashboard serving / and /data.json.

    [bold cyan]Examples:[/bold cyan]

      crabscore report

      crabscore report --output-dir target/crabscore

      crabscore report --serve --port 9000
    """
    logger = setup_logging((ctx.obj or {}).get("verbosity") or "normal")

    if serve:
        try:
            from ..server import _check_deps

            _check_deps()
        except ImportError as exc:
            err_console.print(f"[red]{escape(str(exc))}[/red]")
            raise typer.Exit(1)

    try:
        settings = resolve_config(ctx, path, config=config)
        setup_logging(settings.verbosity)

        with console.status("[cyan]Scoring..."):
            run = run_score(path, config=settings)

        if not serve:
            written = write_reports(run.score, output_dir)
            console.print(
                "Reports written to " + ", ".join(f"[bold green]{p}[/bold green]" for p in written)
            )
            return

    except typer.Exit:
        raise

    except CrabScoreError as e:
        logger.error(f"{e.__class__.__name__}: {e}")
        err_console.print(f"[red]Error:[/red] {escape(str(e))}", highlight=False)
        raise typer.Exit(1)

    except OSError as e:
        logger.error(f"Cannot write reports: {e}")
        err_console.print(f"[red]Error:[/red] {escape(str(e))}", highlight=False)
        raise typer.Exit(1)

    import uvicorn

    from ..server.app import create_app

    url = f"http://{host}:{port}"
    console.print(f"[bold]Dashboard[/bold] → [link={url}]{url}[/link]")
    console.print("[dim]Press Ctrl+C to stop[/dim]")
    try:
        uvicorn.run(
            create_app(run.score),
            host=host,
            port=port,
            log_level="info" if settings.verbosity in ("verbose", "debug") else "warning",
        )
    except KeyboardInterrupt:
        pass
    finally:
        console.print("\n[dim]Stopped.[/dim]")
