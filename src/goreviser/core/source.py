"""Go source parsing with tree-sitter.

The parsed tree keeps byte offsets for every node, so any region the reviser
does not touch is copied verbatim from the input when the file is rebuilt.
"""
from __future__ import annotations

import logging
from dataclasses import dataclass
from functools import lru_cache
from pathlib import Path

import tree_sitter
import tree_sitter_go

from goreviser.core.errors import ParseError, ReviserIOError

logger = logging.getLogger(__name__)

# Node types Go accepts after the package clause.
TOP_LEVEL_DECLARATIONS = frozenset({
    "import_declaration",
    "function_declaration",
    "method_declaration",
    "type_declaration",
    "const_declaration",
    "var_declaration",
})


@lru_cache(maxsize=None)
def go_language() -> tree_sitter.Language:
    """Return the (shared, read-only) Go grammar."""
    return tree_sitter.Language(tree_sitter_go.language())


@dataclass
class SourceFile:
    """A parsed Go file.

    Attributes
    ----------
    path : Path
        Where the bytes came from.
    content : bytes
        Raw file content.
    tree : tree_sitter.Tree
        Concrete syntax tree over ``content``.
    """

    path: Path
    content: bytes
    tree: tree_sitter.Tree

    @property
    def root(self) -> tree_sitter.Node:
        return self.tree.root_node

    def text(self, node: tree_sitter.Node) -> str:
        """Source text covered by ``node``."""
        return self.content[node.start_byte : node.end_byte].decode("utf-8")


def parse_source(path: Path | str, content: bytes) -> SourceFile:
    """Parse ``content`` as Go source.

    Raises
    ------
    ParseError
        If the bytes are not UTF-8 or the tree contains syntax errors.
    """
    path = Path(path)
    try:
        content.decode("utf-8")
    except UnicodeDecodeError as e:
        raise ParseError(path, f"not valid UTF-8: {e}", e) from e

    # Parser objects are not shared between threads, the Language is.
    parser = tree_sitter.Parser(go_language())
    tree = parser.parse(content)

    if tree.root_node.has_error:
        node = _first_error(tree.root_node)
        row, column = node.start_point if node is not None else (0, 0)
        raise ParseError(path, f"syntax error at line {row + 1}, column {column + 1}")

    problem = _check_top_level(tree.root_node)
    if problem is not None:
        node, message = problem
        row, column = node.start_point
        raise ParseError(path, f"{message} at line {row + 1}, column {column + 1}")

    logger.debug("Parsed %s (%d bytes)", path, len(content))
    return SourceFile(path=path, content=content, tree=tree)


def read_bytes(path: Path | str) -> bytes:
    """Read a file, wrapping failures in ReviserIOError."""
    path = Path(path)
    try:
        return path.read_bytes()
    except OSError as e:
        raise ReviserIOError(path, f"cannot read file: {e}", e) from e


def read_source(path: Path | str) -> SourceFile:
    """Read and parse a file from disk."""
    return parse_source(path, read_bytes(path))


def _first_error(node: tree_sitter.Node) -> tree_sitter.Node | None:
    """Locate the first ERROR or MISSING node below ``node``."""
    if node.is_error or node.is_missing:
        return node
    for child in node.children:
        if child.has_error:
            found = _first_error(child)
            if found is not None:
                return found
    return None


def _check_top_level(root: tree_sitter.Node) -> tuple[tree_sitter.Node, str] | None:
    """Reject file structures the grammar tolerates but Go does not.

    The package clause must come first, imports must precede every other
    declaration, and statements may not appear outside a function.
    """
    children = [child for child in root.named_children if child.type != "comment"]
    if not children or children[0].type != "package_clause":
        return (children[0] if children else root), "expected 'package'"

    seen_other = False
    for child in children[1:]:
        if child.type not in TOP_LEVEL_DECLARATIONS:
            return child, f"expected declaration, found {child.type}"
        if child.type == "import_declaration":
            if seen_other:
                return child, "imports must appear before other declarations"
        else:
            seen_other = True
    return None
