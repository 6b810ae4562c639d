"""Global options shared by every subcommand."""

import typer

from . import app


@app.callback()
def root(
    ctx: typer.Context,
    verbose: int = typer.Option(
        0,
        "--verbose",
        "-v",
        count=True,
        help="More log output (-v info, -vv debug)",
    ),
    quiet: bool = typer.Option(
        False,
        "--quiet",
        "-q",
        help="Only log errors",
    ),
):
    """
    Score Rust projects on performance, energy and cost.

    [bold cyan]Examples:[/bold cyan]

      crabscore score

      crabscore -v score path/to/crate --profile gaming

      crabscore report --serve --port 8080
    """
    ctx.ensure_object(dict)
    if quiet:
        ctx.obj["verbosity"] = "quiet"
    elif verbose >= 2:
        ctx.obj["verbosity"] = "debug"
    elif verbose == 1:
        ctx.obj["verbosity"] = "verbose"
    else:
        # Leave the level to config files and CRABSCORE_VERBOSITY
        ctx.obj["verbosity"] = None
