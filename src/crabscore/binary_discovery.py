"""Locate or build a runnable artifact for benchmarking.

Resolution is an ordered list of independent attempts; the first one that
returns a path wins. Finding nothing is not an error: it sends the pipeline
down the estimation path instead. Build failures are logged and never raised.
"""

from __future__ import annotations

import os
import stat
import subprocess
from functools import partial
from pathlib import Path
from typing import Callable, Iterable, Optional, Sequence

from .logging_config import get_logger
from .scanning.complexity import MANIFEST_NAME

logger = get_logger(__name__)

Attempt = Callable[[], Optional[Path]]

DEFAULT_BUILD_TIMEOUT = 600.0


def is_executable(path: Path) -> bool:
    """POSIX: any execute bit is set. Elsewhere: the file has an ``.exe`` suffix."""
    if os.name != "posix":
        return path.suffix.lower() == ".exe"
    try:
        return bool(path.stat().st_mode & (stat.S_IXUSR | stat.S_IXGRP | stat.S_IXOTH))
    except OSError:
        return False


def _is_runnable(path: Path) -> bool:
    return path.is_file() and is_executable(path)


def is_cargo_project(path: Path) -> bool:
    """True if *path* or its parent holds a ``Cargo.toml``."""
    return (path / MANIFEST_NAME).exists() or (path.parent / MANIFEST_NAME).exists()


def first_present(attempts: Iterable[Attempt]) -> Optional[Path]:
    """Run *attempts* in order and return the first non-None result."""
    for attempt in attempts:
        result = attempt()
        if result is not None:
            return result
    return None


def scan_for_executable(directory: Path) -> Optional[Path]:
    """First executable regular file in *directory*.

    Directory order is platform-defined, so with several candidates the pick
    is arbitrary.
    """
    try:
        entries = list(directory.iterdir())
    except OSError:
        return None
    for entry in entries:
        if _is_runnable(entry):
            return entry
    return None


def run_cargo(args: Sequence[str], cwd: Path, timeout: float) -> bool:
    """Run ``cargo <args>`` in *cwd*; True only on a zero exit status."""
    command = ["cargo", *args]
    try:
        result = subprocess.run(
            command,
            cwd=cwd,
            capture_output=True,
            text=True,
            timeout=timeout,
        )
    except FileNotFoundError:
        logger.warning("cargo not found - continuing with static analysis")
        return False
    except subprocess.TimeoutExpired:
        logger.warning(
            "%s timed out after %ss - continuing with static analysis", " ".join(command), timeout
        )
        return False
    except OSError as e:
        logger.warning("Failed to run %s: %s - continuing with static analysis", " ".join(command), e)
        return False

    if result.returncode != 0:
        logger.warning("%s failed (exit %d)", " ".join(command), result.returncode)
        if result.stderr:
            logger.debug("cargo stderr:\n%s", result.stderr.strip())
        return False
    return True


def _explicit_binary(bin_name: Optional[str]) -> Optional[Path]:
    if bin_name is None:
        return None
    candidate = Path(bin_name)
    return candidate if _is_runnable(candidate) else None


def _input_is_binary(input_path: Path) -> Optional[Path]:
    return input_path if _is_runnable(input_path) else None


def _build_release(
    input_path: Path,
    bin_name: Optional[str],
    timeout: float,
    runner: Callable[[Sequence[str], Path, float], bool],
) -> Optional[Path]:
    logger.info("Attempting to build Cargo project at %s", input_path)
    args = ["build", "--release"]
    if bin_name is not None and not Path(bin_name).exists():
        args += ["--bin", bin_name]
    if not runner(args, input_path, timeout):
        logger.warning("Build failed - using static analysis")
        return None

    target_dir = input_path / "target" / "release"
    if bin_name is not None:
        candidate = target_dir / bin_name
        if _is_runnable(candidate):
            return candidate
    return scan_for_executable(target_dir)


def _build_examples(
    input_path: Path,
    timeout: float,
    runner: Callable[[Sequence[str], Path, float], bool],
) -> Optional[Path]:
    if not (input_path / "examples").exists():
        return None
    logger.info("Attempting to build examples at %s", input_path)
    if not runner(["build", "--examples", "--release"], input_path, timeout):
        return None
    found = scan_for_executable(input_path / "target" / "release" / "examples")
    if found is not None:
        logger.warning("Using example binary %s for analysis", found.name)
    return found


def find_or_build_binary(
    input_path: Path,
    bin_name: Optional[str] = None,
    cargo_project: Optional[bool] = None,
    build_timeout: float = DEFAULT_BUILD_TIMEOUT,
    runner: Callable[[Sequence[str], Path, float], bool] = run_cargo,
) -> Optional[Path]:
    """Resolve a runnable artifact for *input_path*, or None.

    Attempts, in order:
        1. *bin_name* as a path to an executable file
        2. *input_path* itself, if it is an executable file
        3. ``cargo build --release`` and the named or first executable in
           ``target/release``
        4. ``cargo build --examples --release`` and the first executable in
           ``target/release/examples``

    Args:
        input_path: Project directory, source file or executable
        bin_name: Cargo bin target name or path to an executable
        cargo_project: Override Cargo project detection
        build_timeout: Seconds allowed per build
        runner: Build command runner (``run_cargo`` signature)
    """
    if cargo_project is None:
        cargo_project = is_cargo_project(input_path)
    buildable = cargo_project and input_path.is_dir()

    attempts: list[Attempt] = [
        partial(_explicit_binary, bin_name),
        partial(_input_is_binary, input_path),
    ]
    if buildable:
        attempts.append(partial(_build_release, input_path, bin_name, build_timeout, runner))
        attempts.append(partial(_build_examples, input_path, build_timeout, runner))

    found = first_present(attempts)
    if found is None:
        logger.info("No executable found for %s", input_path)
    return found
