"""Tree-sitter parser wrapper for Rust sources.

Usage:
    parser = RustParser()
    tree = parser.parse_file(Path("src/main.rs"))
    for node in walk(tree.root_node):
        ...
"""

from __future__ import annotations

from pathlib import Path
from typing import Iterator

import tree_sitter
import tree_sitter_rust

from ..exceptions import FileAccessError, ParsingError

LANGUAGE_NAME = "rust"


def walk(node: tree_sitter.Node) -> Iterator[tree_sitter.Node]:
    """Yield *node* and every descendant, depth-first, without recursion."""
    stack = [node]
    while stack:
        current = stack.pop()
        yield current
        stack.extend(reversed(current.children))


def _first_error(node: tree_sitter.Node) -> tree_sitter.Node | None:
    for candidate in walk(node):
        if candidate.is_error or candidate.is_missing:
            return candidate
    return None


class RustParser:
    """Parse Rust source into tree-sitter syntax trees.

    Error recovery is turned into failure: a tree containing ``ERROR`` or
    missing nodes raises :class:`ParsingError`.
    """

    def __init__(self) -> None:
        self._language = tree_sitter.Language(tree_sitter_rust.language())
        self._parser = tree_sitter.Parser(self._language)

    def parse(self, code: bytes, filepath: Path | str = "<memory>") -> tree_sitter.Tree:
        """Parse *code*; *filepath* only labels errors."""
        tree = self._parser.parse(code)
        if tree.root_node.has_error:
            bad = _first_error(tree.root_node)
            where = f"line {bad.start_point[0] + 1}" if bad is not None else "unknown location"
            raise ParsingError(Path(filepath), LANGUAGE_NAME, f"syntax error at {where}")
        return tree

    def parse_file(self, filepath: Path) -> tree_sitter.Tree:
        """Read and parse *filepath* (must be UTF-8)."""
        try:
            code = filepath.read_bytes()
            code.decode("utf-8")
        except OSError as e:
            raise FileAccessError(filepath, f"Cannot read file: {e}")
        except UnicodeDecodeError as e:
            raise FileAccessError(filepath, f"Not valid UTF-8: {e}")
        return self.parse(code, filepath)
