"""``crabscore version``."""

from .. import __version__
from . import app
from ._common import console


@app.command()
def version():
    """Show the CrabScore version."""
    console.print(f"CrabScore CLI {__version__}", highlight=False)
