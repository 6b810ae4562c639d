"""Project complexity analysis.

Line-oriented heuristics over Rust sources. These are deliberately not a
parser: one physical line may count as, say, both a doc line and a function
line, and nothing is de-duplicated. Unreadable files are skipped without
affecting any counter; this module never raises for file content.
"""

from __future__ import annotations

import os
import tomllib
from dataclasses import dataclass
from pathlib import Path
from typing import Any, Iterator, Optional

from ..logging_config import get_logger

logger = get_logger(__name__)

SOURCE_EXTENSION = ".rs"
MANIFEST_NAME = "Cargo.toml"

DOC_MARKERS = ("///", "//!")
FUNCTION_TOKEN = "fn "
MODULE_PREFIX = "mod "
TEST_TOKENS = ("#[test]", "#[cfg(test)]")


@dataclass(frozen=True)
class ProjectComplexity:
    """Size, documentation, test and dependency counters for one project."""

    file_count: int = 0
    total_lines: int = 0
    function_count: int = 0
    module_count: int = 0
    test_count: int = 0
    doc_lines: int = 0
    dependency_count: int = 0

    @property
    def doc_coverage(self) -> float:
        """Documentation lines per line of source (0.0 for an empty project)."""
        if self.total_lines == 0:
            return 0.0
        return self.doc_lines / self.total_lines

    @property
    def test_coverage(self) -> float:
        """Test markers per function (0.0 when there are no functions)."""
        if self.function_count == 0:
            return 0.0
        return self.test_count / self.function_count

    @property
    def complexity_factor(self) -> float:
        """Bounded [0, 10] size scalar that drives every estimation formula."""
        return min(self.total_lines / 1000.0, 10.0)


def split_lines(content: str) -> list[str]:
    """Split on ``\\n``, dropping a trailing ``\\r`` and the empty tail after a final newline."""
    if not content:
        return []
    lines = content.split("\n")
    if lines[-1] == "":
        lines.pop()
    return [line[:-1] if line.endswith("\r") else line for line in lines]


def iter_source_files(root: Path) -> Iterator[Path]:
    """Yield every ``.rs`` file below the directory *root* (order unspecified)."""
    for dirpath, _dirnames, filenames in os.walk(root):
        for name in filenames:
            if name.endswith(SOURCE_EXTENSION):
                yield Path(dirpath) / name


def load_manifest(root: Path) -> Optional[dict[str, Any]]:
    """Parse ``Cargo.toml`` at *root*; None if absent, unreadable or invalid."""
    manifest = root / MANIFEST_NAME
    if not manifest.is_file():
        return None
    try:
        with open(manifest, "rb") as f:
            return tomllib.load(f)
    except (OSError, tomllib.TOMLDecodeError) as e:
        logger.debug("Ignoring unreadable manifest %s: %s", manifest, e)
        return None


def count_dependencies(root: Path) -> int:
    """Size of the ``[dependencies]`` table, 0 when there is none."""
    manifest = load_manifest(root)
    if manifest is None:
        return 0
    deps = manifest.get("dependencies")
    return len(deps) if isinstance(deps, dict) else 0


def _read_source(path: Path) -> Optional[str]:
    try:
        return path.read_text(encoding="utf-8")
    except (OSError, UnicodeDecodeError) as e:
        logger.debug("Skipping unreadable source %s: %s", path, e)
        return None


def analyze_project_complexity(path: Path | str) -> ProjectComplexity:
    """Walk *path* and derive size/doc/test/dependency counters.

    *path* may be a project directory or a single ``.rs`` file. In the
    single-file case only the line, doc and function heuristics apply.
    """
    root = Path(path)
    counts = {
        "file_count": 0,
        "total_lines": 0,
        "function_count": 0,
        "module_count": 0,
        "test_count": 0,
        "doc_lines": 0,
    }

    if root.is_dir():
        for source in iter_source_files(root):
            content = _read_source(source)
            if content is None:
                continue
            lines = split_lines(content)
            counts["file_count"] += 1
            counts["total_lines"] += len(lines)
            for line in lines:
                trimmed = line.strip()
                if trimmed.startswith(DOC_MARKERS):
                    counts["doc_lines"] += 1
                if FUNCTION_TOKEN in trimmed:
                    counts["function_count"] += 1
                if trimmed.startswith(MODULE_PREFIX):
                    counts["module_count"] += 1
                if any(token in trimmed for token in TEST_TOKENS):
                    counts["test_count"] += 1

    if counts["file_count"] == 0 and root.is_file() and root.suffix == SOURCE_EXTENSION:
        # Single-file project: module and test heuristics are not applied here.
        counts["file_count"] = 1
        content = _read_source(root)
        if content is not None:
            lines = split_lines(content)
            counts["total_lines"] = len(lines)
            for line in lines:
                trimmed = line.strip()
                if FUNCTION_TOKEN in trimmed:
                    counts["function_count"] += 1
                if trimmed.startswith(DOC_MARKERS):
                    counts["doc_lines"] += 1

    complexity = ProjectComplexity(dependency_count=count_dependencies(root), **counts)
    logger.debug("Project complexity for %s: %s", root, complexity)
    return complexity
