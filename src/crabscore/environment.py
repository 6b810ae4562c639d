"""Host environment discovery for score metadata.

Example:
    >>> env = detect_environment()
    >>> env.os
    'Linux'
"""

from __future__ import annotations

import os
import platform
import subprocess

from .logging_config import get_logger
from .score import Environment

logger = get_logger(__name__)

UNKNOWN = "unknown"


def _memory_gb() -> float:
    """Physical memory in GiB; 0.0 where the platform does not report it."""
    try:
        pages = os.sysconf("SC_PHYS_PAGES")
        page_size = os.sysconf("SC_PAGE_SIZE")
    except (AttributeError, ValueError, OSError):
        return 0.0
    if pages <= 0 or page_size <= 0:
        return 0.0
    return round(pages * page_size / 1024**3, 2)


def _cpu_description() -> str:
    return platform.processor() or platform.machine() or UNKNOWN


def rust_version(timeout: float = 10.0) -> str:
    """``rustc --version`` output, or ``"unknown"`` if rustc cannot be run."""
    try:
        result = subprocess.run(
            ["rustc", "--version"],
            capture_output=True,
            text=True,
            timeout=timeout,
        )
    except (subprocess.TimeoutExpired, OSError) as e:
        logger.debug("rustc --version unavailable: %s", e)
        return UNKNOWN
    if result.returncode != 0:
        return UNKNOWN
    return result.stdout.strip() or UNKNOWN


def detect_environment(timeout: float = 10.0) -> Environment:
    """Describe the current host."""
    env = Environment(
        os=platform.system() or UNKNOWN,
        cpu=_cpu_description(),
        memory_gb=_memory_gb(),
        rust_version=rust_version(timeout),
    )
    logger.debug("Environment: %s", env)
    return env
