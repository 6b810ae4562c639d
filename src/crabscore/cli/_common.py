"""Shared CLI helpers."""

from dataclasses import replace
from pathlib import Path
from typing import Optional

import typer
from rich.console import Console

from ..config import ScoreConfig, load_config

console = Console()
err_console = Console(stderr=True)


def resolve_config(
    ctx: typer.Context,
    path: Path,
    profile: Optional[str] = None,
    config: Optional[Path] = None,
) -> ScoreConfig:
    """Build the run configuration from config files, environment and CLI options.

    An explicit ``--profile`` replaces any ``[weights]`` table from config files.
    """
    obj = ctx.obj or {}
    resolved = load_config(
        config_file=config,
        project_dir=path,
        verbosity=obj.get("verbosity"),
        profile=profile,
    )
    if profile is not None and resolved.custom_weights is not None:
        resolved = replace(resolved, custom_weights=None)
    return resolved
