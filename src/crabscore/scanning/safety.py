"""Static safety analysis over Rust syntax trees.

Two independent read-only folds run on each parsed file:

* unsafe regions: every ``unsafe`` block anywhere in the tree;
* McCabe complexity: decision points inside each top-level function, plus 1.

Unlike complexity counting, nothing here is best-effort: a file that cannot be
read or parsed fails the whole analysis.
"""

from __future__ import annotations

from pathlib import Path
from typing import Iterator

import tree_sitter

from ..logging_config import get_logger
from ..metrics import SafetyMetrics
from .complexity import SOURCE_EXTENSION, iter_source_files
from .treesitter_parser import RustParser, walk

logger = get_logger(__name__)

UNSAFE_NODE = "unsafe_block"
FUNCTION_NODE = "function_item"
DECISION_NODES = frozenset(
    {
        "if_expression",
        "match_expression",
        "for_expression",
        "while_expression",
    }
)


def count_unsafe_blocks(root: tree_sitter.Node) -> int:
    """Count unsafe blocks; nested blocks each count."""
    return sum(1 for node in walk(root) if node.type == UNSAFE_NODE)


def top_level_functions(root: tree_sitter.Node) -> list[tree_sitter.Node]:
    """Free functions declared directly in the file (no impl, trait or mod bodies)."""
    return [child for child in root.children if child.type == FUNCTION_NODE]


def function_complexity(function: tree_sitter.Node) -> int:
    """McCabe complexity: decision points in the body plus one.

    Closures and nested items are folded into the enclosing function.
    """
    body = function.child_by_field_name("body")
    if body is None:
        return 1
    return 1 + sum(1 for node in walk(body) if node.type in DECISION_NODES)


def _analysis_files(root: Path) -> Iterator[Path]:
    if root.is_file():
        if root.suffix == SOURCE_EXTENSION:
            yield root
        return
    yield from iter_source_files(root)


def analyze_safety(root: Path | str) -> SafetyMetrics:
    """Analyse every Rust file under *root* (a directory or a single file).

    Raises:
        FileAccessError: If a source file cannot be read or decoded
        ParsingError: If a source file does not parse
    """
    parser = RustParser()
    unsafe_blocks = 0
    total_complexity = 0
    function_count = 0

    for path in _analysis_files(Path(root)):
        tree = parser.parse_file(path)
        unsafe_blocks += count_unsafe_blocks(tree.root_node)
        for function in top_level_functions(tree.root_node):
            total_complexity += function_complexity(function)
            function_count += 1

    avg_cyclomatic = total_complexity / function_count if function_count else 1.0
    logger.debug(
        "Safety analysis of %s: %d unsafe block(s), %d function(s), avg complexity %.2f",
        root,
        unsafe_blocks,
        function_count,
        avg_cyclomatic,
    )
    return SafetyMetrics(
        unsafe_blocks=unsafe_blocks,
        clippy_warnings=0,
        avg_cyclomatic=avg_cyclomatic,
    )
