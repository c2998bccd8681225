"""Import analysis over a tree-sitter Go tree.

Provides functionality to:
- Split the top-level declarations into import and other declarations
- Extract the import entries, keeping their comments
- Track which package names are used as selectors
- Detect unused imports
"""
from __future__ import annotations

import logging
from dataclasses import dataclass, field, replace
from typing import TYPE_CHECKING, Union

from goreviser.imports.aliases import version_alias

if TYPE_CHECKING:
    import tree_sitter

    from goreviser.core.source import SourceFile

logger = logging.getLogger(__name__)

BLANK_IDENTIFIER = "_"
DOT_IMPORT = "."
CGO_PATH = "C"


@dataclass
class ImportEntry:
    """One import spec.

    Attributes
    ----------
    path : str
        The import path exactly as written, quotes included.
    alias : str | None
        Explicit name (``yaml``, ``_`` or ``.``), or None.
    start_byte : int
        Offset of the spec in the source, 0 for synthesized entries.
    end_byte : int
        End offset of the spec in the source.
    line_number : int
        1-based line of the spec.
    doc : list[str]
        Comment lines directly above the spec inside a grouped declaration.
    comment : str | None
        Comment following the spec on the same line.
    """

    path: str
    alias: str | None = None
    start_byte: int = 0
    end_byte: int = 0
    line_number: int = 0
    doc: list[str] = field(default_factory=list)
    comment: str | None = None

    @property
    def value(self) -> str:
        """The import path without its quotes."""
        if len(self.path) >= 2 and self.path[0] in "\"`" and self.path[-1] == self.path[0]:
            return self.path[1:-1]
        return self.path

    @property
    def is_blank(self) -> bool:
        return self.alias == BLANK_IDENTIFIER

    @property
    def is_dot(self) -> bool:
        return self.alias == DOT_IMPORT

    @property
    def local_name(self) -> str:
        """Name the file uses to refer to this package.

        The explicit alias if there is one, otherwise the last path
        segment. A package whose declared name differs from that segment
        (``go-isatty`` declaring ``isatty``) is not recognized.

        Version-suffixed paths deliberately depart from the last-segment
        rule: ``gopkg.in/yaml.v3`` yields ``yaml`` and ``.../pg/v10`` yields
        ``pg``, the names the Go toolchain binds them to. Taking ``yaml.v3``
        or ``v10`` literally would mark every such import unused.
        """
        if self.alias:
            return self.alias
        derived = version_alias(self.value)
        if derived:
            return derived
        return self.value.rsplit("/", 1)[-1]

    @property
    def import_statement(self) -> str:
        """The spec as it appears inside an import block."""
        if self.alias:
            return f"{self.alias} {self.path}"
        return self.path

    def with_alias(self, alias: str | None) -> ImportEntry:
        return replace(self, alias=alias)


@dataclass
class ImportDecl:
    """A top-level ``import`` declaration.

    Attributes
    ----------
    start_byte, end_byte : int
        Span of the whole declaration.
    entries : list[ImportEntry]
        Specs in source order.
    grouped : bool
        True for the parenthesized form.
    dangling : list[str]
        Comments after the last spec of a grouped declaration.
    """

    start_byte: int
    end_byte: int
    entries: list[ImportEntry] = field(default_factory=list)
    grouped: bool = False
    dangling: list[str] = field(default_factory=list)

    @property
    def is_cgo(self) -> bool:
        """``import "C"`` must stay next to its preamble comment."""
        return len(self.entries) == 1 and self.entries[0].value == CGO_PATH


@dataclass
class OtherDecl:
    """Any other top-level node (package clause, funcs, types, comments)."""

    kind: str
    start_byte: int
    end_byte: int


Declaration = Union[ImportDecl, OtherDecl]


class ImportAnalyzer:
    """Analyze the imports of one parsed Go file.

    Parameters
    ----------
    source : SourceFile
        The parsed file. The analyzer only reads it.
    """

    def __init__(self, source: SourceFile) -> None:
        self._source = source
        self._declarations: list[Declaration] | None = None

    def declarations(self) -> list[Declaration]:
        """Top-level declarations in source order.

        A comment on the same line after a single-line import belongs to
        that import and is folded into its declaration.
        """
        if self._declarations is None:
            declarations: list[Declaration] = []
            for node in self._source.root.children:
                previous = declarations[-1] if declarations else None
                if (
                    node.type == "comment"
                    and isinstance(previous, ImportDecl)
                    and self._owns_trailing_comment(previous, node)
                ):
                    previous.entries[0].comment = self._source.text(node)
                    previous.end_byte = node.end_byte
                    continue
                declarations.append(self._declaration(node))
            self._declarations = declarations
        return self._declarations

    def import_declarations(self) -> list[ImportDecl]:
        """Import declarations the reviser may rewrite (cgo ones excluded)."""
        result = []
        for decl in self.declarations():
            if isinstance(decl, ImportDecl) and not decl.is_cgo:
                result.append(decl)
        return result

    def get_imports(self) -> list[ImportEntry]:
        """All rewritable imports in source order, without duplicate paths.

        When a path is imported twice the first spec wins, alias included.
        """
        seen: set[str] = set()
        imports: list[ImportEntry] = []
        for decl in self.import_declarations():
            for entry in decl.entries:
                if entry.path in seen:
                    logger.debug("%s: dropping duplicate import %s", self._source.path, entry.path)
                    continue
                seen.add(entry.path)
                imports.append(entry)
        return imports

    def dangling_comments(self) -> list[str]:
        comments: list[str] = []
        for decl in self.import_declarations():
            comments.extend(decl.dangling)
        return comments

    def get_used_names(self) -> set[str]:
        """Identifiers used on the left of a selector outside imports."""
        collector = SelectorCollector(self._source)
        collector.visit(self._source.root)
        return collector.used_names

    def find_unused_imports(self, imports: list[ImportEntry] | None = None) -> list[ImportEntry]:
        """Imports whose local name is never used.

        Blank and dot imports are never reported: the former exist for their
        side effects and the latter are used without a qualifier.
        """
        if imports is None:
            imports = self.get_imports()
        used = self.get_used_names()
        unused = []
        for entry in imports:
            if entry.is_blank or entry.is_dot:
                continue
            if entry.local_name not in used:
                unused.append(entry)
        return unused

    def remove_unused(self, imports: list[ImportEntry]) -> list[ImportEntry]:
        """Return ``imports`` without the unused ones."""
        unused = self.find_unused_imports(imports)
        for entry in unused:
            logger.debug("%s: removing unused import %s", self._source.path, entry.import_statement)
        unused_ids = {id(entry) for entry in unused}
        return [entry for entry in imports if id(entry) not in unused_ids]

    def _owns_trailing_comment(self, decl: ImportDecl, comment: tree_sitter.Node) -> bool:
        if decl.grouped or len(decl.entries) != 1 or decl.entries[0].comment is not None:
            return False
        gap = self._source.content[decl.end_byte : comment.start_byte]
        return not gap.strip(b" \t")

    def _declaration(self, node: tree_sitter.Node) -> Declaration:
        if node.type != "import_declaration":
            return OtherDecl(kind=node.type, start_byte=node.start_byte, end_byte=node.end_byte)

        decl = ImportDecl(start_byte=node.start_byte, end_byte=node.end_byte)
        for child in node.children:
            if child.type == "import_spec":
                decl.entries.append(self._entry(child))
            elif child.type == "comment" and decl.entries and decl.entries[-1].comment is None:
                decl.entries[-1].comment = self._source.text(child)
            elif child.type == "import_spec_list":
                decl.grouped = True
                self._collect_spec_list(child, decl)
        return decl

    def _collect_spec_list(self, node: tree_sitter.Node, decl: ImportDecl) -> None:
        pending: list[str] = []
        last_row = -1
        for child in node.children:
            if child.type == "import_spec":
                entry = self._entry(child)
                entry.doc = pending
                pending = []
                decl.entries.append(entry)
                last_row = child.end_point[0]
            elif child.type == "comment":
                text = self._source.text(child)
                if child.start_point[0] == last_row and decl.entries and decl.entries[-1].comment is None:
                    decl.entries[-1].comment = text
                else:
                    pending.append(text)
        decl.dangling = pending

    def _entry(self, node: tree_sitter.Node) -> ImportEntry:
        name = node.child_by_field_name("name")
        path = node.child_by_field_name("path")
        return ImportEntry(
            path=self._source.text(path),
            alias=self._source.text(name) if name is not None else None,
            start_byte=node.start_byte,
            end_byte=node.end_byte,
            line_number=node.start_point[0] + 1,
        )


class SelectorCollector:
    """Collect package-like names used as selector operands.

    Covers ``pkg.Func()`` / ``pkg.Var`` (selector expressions) and
    ``pkg.Type`` in type positions (qualified types). Import declarations
    and comments are not scanned. Scoping is ignored, so a local variable
    shadowing a package name counts as a use.
    """

    def __init__(self, source: SourceFile) -> None:
        self._source = source
        self.used_names: set[str] = set()

    def visit(self, root: tree_sitter.Node) -> None:
        stack = [root]
        while stack:
            node = stack.pop()
            if node.type in ("import_declaration", "comment"):
                continue
            if node.type == "selector_expression":
                operand = node.child_by_field_name("operand")
                if operand is not None and operand.type == "identifier":
                    self.used_names.add(self._source.text(operand))
            elif node.type == "qualified_type":
                package = node.child_by_field_name("package")
                if package is not None:
                    self.used_names.add(self._source.text(package))
            stack.extend(reversed(node.children))
