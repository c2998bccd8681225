"""Revising the import block of one Go file.

The pipeline is parse, extract, classify, prune unused (optional), alias
version-suffixed paths (optional), reorder and re-serialize. Everything
outside the import declarations is copied byte for byte unless a full
format was requested.

Example
-------
>>> from goreviser import OptionSet, ProjectContext, Reviser
>>>
>>> project = ProjectContext(module_name="example.com/proj")
>>> reviser = Reviser(project, OptionSet(remove_unused_imports=True))
>>> result = reviser.execute("cmd/main.go")
>>> if result and result.changed:
...     print(result.diff)
"""
from __future__ import annotations

import logging
import re
from pathlib import Path

from goreviser.core.diff import generate_diff
from goreviser.core.errors import EmitError, ReviserError
from goreviser.core.formatter import format_source
from goreviser.core.options import OptionSet, ProjectContext
from goreviser.core.results import ErrorResult, ReviseResult
from goreviser.core.source import SourceFile, parse_source, read_bytes
from goreviser.imports.aliases import assign_version_aliases
from goreviser.imports.analyzer import ImportAnalyzer, ImportDecl
from goreviser.imports.organizer import ImportOrganizer
from goreviser.imports.stdlib import DEFAULT_REGISTRY, StdlibRegistry

logger = logging.getLogger(__name__)

BLANK_LINE_TAIL = re.compile(rb"\n[ \t\r]*\n\Z")


class Reviser:
    """Rewrite the imports of Go files.

    A Reviser holds only immutable configuration, so one instance can be
    shared by any number of threads working on different files.

    Parameters
    ----------
    project : ProjectContext
        Module name and local prefixes used for classification.
    options : OptionSet
        Which optional stages to run.
    registry : StdlibRegistry
        Standard library paths.
    """

    def __init__(
        self,
        project: ProjectContext,
        options: OptionSet | None = None,
        registry: StdlibRegistry = DEFAULT_REGISTRY,
    ) -> None:
        self.project = project
        self.options = options or OptionSet()
        self._organizer = ImportOrganizer(project, registry)

    def revise(self, path: Path | str, content: bytes) -> bytes:
        """Return the revised bytes of ``content``.

        Raises
        ------
        ParseError
            If ``content`` is not valid Go.
        EmitError
            If the revised file cannot be produced.
        """
        path = Path(path)
        source = parse_source(path, content)
        analyzer = ImportAnalyzer(source)

        declarations = analyzer.import_declarations()
        if not declarations:
            logger.debug("%s: no imports", path)
            return content

        imports = analyzer.get_imports()
        logger.debug("%s: %d imports", path, len(imports))

        if self.options.remove_unused_imports:
            imports = analyzer.remove_unused(imports)

        if self.options.use_alias_for_version_suffix:
            imports = assign_version_aliases(imports)

        block = self._organizer.organize(
            imports, analyzer.dangling_comments(), grouped=declarations[0].grouped
        )
        output = _splice(source, declarations, block)

        if self.options.full_format:
            output = format_source(path, output, self.options.gofmt_command)
            # gofmt output must still be Go; anything else is a bug upstream.
            try:
                parse_source(path, output)
            except ReviserError as e:
                raise EmitError(path, "formatter produced invalid source", e) from e

        return output

    def execute(self, path: Path | str, content: bytes | None = None) -> ReviseResult | ErrorResult:
        """Revise one file without raising.

        Parameters
        ----------
        path : Path | str
            The file to revise. It is read unless ``content`` is given.
        content : bytes | None
            File bytes supplied by the caller.

        Returns
        -------
        ReviseResult | ErrorResult
            ``ReviseResult`` with ``output`` and ``changed`` on success,
            ``ErrorResult`` carrying the exception otherwise. The file on
            disk is never modified here.
        """
        path = Path(path)
        try:
            if content is None:
                content = read_bytes(path)
            output = self.revise(path, content)
        except ReviserError as e:
            logger.debug("%s: %s failed: %s", path, e.operation, e.message)
            return ErrorResult(
                message=str(e),
                exception=e,
                operation=e.operation,
                target_repr=str(path),
            )

        result = ReviseResult(path=path, original=content, output=output)
        if result.changed:
            result.message = f"Revised imports in {path}"
            result.files_changed = [path]
            result.diff = generate_diff(content, output, path)
        else:
            result.message = "Imports already organized"
        return result


def execute(
    project: ProjectContext,
    path: Path | str,
    options: OptionSet | None = None,
    content: bytes | None = None,
) -> ReviseResult | ErrorResult:
    """Revise a single file; see :meth:`Reviser.execute`."""
    return Reviser(project, options).execute(path, content)


def _splice(source: SourceFile, declarations: list[ImportDecl], block: str) -> bytes:
    """Put ``block`` where the first declaration was and drop the others.

    A dropped declaration takes its line with it, and the blank lines after
    it when a blank line already precedes it. An empty block drops every
    declaration.
    """
    content = source.content
    out = bytearray()
    cursor = 0

    for index, decl in enumerate(declarations):
        if index == 0 and block:
            out += content[cursor : decl.start_byte]
            out += block.encode("utf-8")
            cursor = decl.end_byte
            continue

        line_start = content.rfind(b"\n", 0, decl.start_byte) + 1
        if line_start < cursor or content[line_start : decl.start_byte].strip(b" \t"):
            # Shares its line with earlier code: cut only the declaration.
            out += content[cursor : decl.start_byte]
            cursor = decl.end_byte
            continue

        out += content[cursor:line_start]
        cursor = _removal_end(content, decl.end_byte, eat_blank_lines=_ends_with_blank_line(out))

    out += content[cursor:]
    return bytes(out)


def _ends_with_blank_line(out: bytearray) -> bool:
    return not out or BLANK_LINE_TAIL.search(out) is not None


def _removal_end(content: bytes, offset: int, eat_blank_lines: bool) -> int:
    """Widen ``offset`` past the rest of its line, and blank lines after."""
    end = offset
    while end < len(content) and content[end] in b" \t;":
        end += 1
    if end < len(content) and content[end] not in b"\r\n":
        # Something else follows on the same line.
        return offset

    newline = content.find(b"\n", end)
    if newline == -1:
        return len(content)
    end = newline + 1

    while eat_blank_lines and end < len(content):
        newline = content.find(b"\n", end)
        line = content[end:] if newline == -1 else content[end:newline]
        if line.strip(b" \t\r"):
            break
        end = len(content) if newline == -1 else newline + 1
    return end
