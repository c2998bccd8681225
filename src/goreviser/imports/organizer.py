"""Import organization.

Organizes imports into groups, separated by blank lines:
1. Standard library imports
2. General (third-party) imports
3. Project imports
"""
from __future__ import annotations

from enum import IntEnum
from typing import TYPE_CHECKING, Iterable

from goreviser.imports.stdlib import DEFAULT_REGISTRY, StdlibRegistry

if TYPE_CHECKING:
    from goreviser.core.options import ProjectContext
    from goreviser.imports.analyzer import ImportEntry


class ImportGroup(IntEnum):
    """Import groups in output order."""

    STANDARD = 0
    GENERAL = 1
    PROJECT = 2


class ImportOrganizer:
    """Classify, sort and render Go imports.

    Parameters
    ----------
    project : ProjectContext
        Module name and local prefixes of the file's project.
    registry : StdlibRegistry
        Standard library paths. Shared and never modified.
    """

    def __init__(self, project: ProjectContext, registry: StdlibRegistry = DEFAULT_REGISTRY) -> None:
        self._project = project
        self._stdlib = registry

    def classify(self, entry: ImportEntry) -> ImportGroup:
        """Assign an import to its group.

        Standard library paths are matched exactly. A path counts as a
        project import when it contains the module name anywhere (so nested
        packages match without exact prefix alignment) or starts with one
        of the local prefixes. Everything else is general.
        """
        path = entry.value

        if path in self._stdlib:
            return ImportGroup.STANDARD

        module_name = self._project.module_name
        if module_name and module_name in path:
            return ImportGroup.PROJECT

        for prefix in self._project.local_prefixes:
            if prefix and path.startswith(prefix):
                return ImportGroup.PROJECT

        return ImportGroup.GENERAL

    def group(self, imports: Iterable[ImportEntry]) -> dict[ImportGroup, list[ImportEntry]]:
        """Split imports into groups, each sorted byte-wise by path."""
        groups: dict[ImportGroup, list[ImportEntry]] = {group: [] for group in ImportGroup}
        for entry in imports:
            groups[self.classify(entry)].append(entry)

        for group in groups:
            groups[group].sort(key=lambda entry: entry.path.encode("utf-8"))
        return groups

    def render(
        self,
        groups: dict[ImportGroup, list[ImportEntry]],
        dangling: Iterable[str] = (),
        grouped: bool = False,
    ) -> str:
        """Build the import declaration text for the given groups.

        Returns an empty string when there is nothing to import. A lone
        import without doc comments keeps the single-line form unless the
        file started with a parenthesized block (``grouped``). Anything else
        is rendered as a parenthesized block with one blank line between
        non-empty groups.
        Trailing comments are aligned the way gofmt aligns them.
        """
        entries = [entry for group in ImportGroup for entry in groups.get(group, [])]
        dangling = list(dangling)
        if not entries:
            return ""

        if not grouped and len(entries) == 1 and not dangling and not entries[0].doc:
            return "import " + _align([_spec_row(entries[0])])[0]

        rows: list[str | tuple[str, str]] = []
        for group in ImportGroup:
            members = groups.get(group, [])
            if not members:
                continue
            if rows:
                rows.append("")
            for entry in members:
                rows.extend(entry.doc)
                rows.append(_spec_row(entry))
        rows.extend(dangling)

        lines = ["import ("]
        lines.extend("\t" + line if line else "" for line in _align(rows))
        lines.append(")")
        return "\n".join(lines)

    def organize(
        self,
        imports: Iterable[ImportEntry],
        dangling: Iterable[str] = (),
        grouped: bool = False,
    ) -> str:
        """Classify, sort and render in one step."""
        return self.render(self.group(imports), dangling, grouped)


def _spec_row(entry: ImportEntry) -> str | tuple[str, str]:
    if entry.comment:
        return (entry.import_statement, entry.comment)
    return entry.import_statement


def _align(rows: list[str | tuple[str, str]]) -> list[str]:
    """Join specs and trailing comments, padding each run of commented specs.

    A run is a sequence of consecutive rows that all carry a comment; any
    other line ends it. Within a run every comment starts one column past
    the widest spec.
    """
    lines: list[str] = []
    index = 0
    while index < len(rows):
        if not isinstance(rows[index], tuple):
            lines.append(rows[index])
            index += 1
            continue
        end = index
        while end < len(rows) and isinstance(rows[end], tuple):
            end += 1
        run = rows[index:end]
        width = max(len(spec) for spec, _ in run) + 1
        lines.extend(spec.ljust(width) + comment for spec, comment in run)
        index = end
    return lines
