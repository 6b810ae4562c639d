"""CLI entry point. Importing the command modules registers them."""

import typer

app = typer.Typer(
    name="crabscore",
    help="CrabScore - composite efficiency score for Rust projects",
    add_completion=False,
    rich_markup_mode="rich",
    no_args_is_help=True,
)


# Import subcommands to register them
from .root import root as _root_callback  # noqa: F401, E402
from .score import score as _score  # noqa: F401, E402
from .report import report as _report  # noqa: F401, E402
from .version import version as _version  # noqa: F401, E402


def main() -> None:
    app()
