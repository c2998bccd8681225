"""Aliases for imports whose path ends in a version marker.

Go modules at major version 2 and above live under a ``/vN`` path segment
(``github.com/go-pg/pg/v10``), and gopkg.in paths carry the version as a
``.vN`` suffix (``gopkg.in/yaml.v3``). In both cases the package name is the
part in front of the version, which this module turns into an explicit alias.
"""
from __future__ import annotations

import logging
import re
from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from goreviser.imports.analyzer import ImportEntry

logger = logging.getLogger(__name__)

VERSION_SEGMENT = re.compile(r"^[A-Za-z][0-9]+$")
VERSION_SUFFIX = re.compile(r"^(?P<name>.+)\.[A-Za-z][0-9]+$")
GO_IDENTIFIER = re.compile(r"^[A-Za-z_][A-Za-z0-9_]*$")

GO_KEYWORDS = frozenset({
    "break", "case", "chan", "const", "continue", "default", "defer", "else",
    "fallthrough", "for", "func", "go", "goto", "if", "import", "interface",
    "map", "package", "range", "return", "select", "struct", "switch", "type", "var",
})


def is_valid_identifier(name: str) -> bool:
    return bool(GO_IDENTIFIER.match(name)) and name not in GO_KEYWORDS


def version_alias(import_path: str) -> str | None:
    """Name in front of a trailing version marker, if any.

    Parameters
    ----------
    import_path : str
        Unquoted import path.

    Returns
    -------
    str | None
        ``"pg"`` for ``github.com/go-pg/pg/v10``, ``"yaml"`` for
        ``gopkg.in/yaml.v3``, None when the path has no version marker or
        the name would not be a valid Go identifier.

    Examples
    --------
    >>> version_alias("github.com/go-pg/pg/v10")
    'pg'
    >>> version_alias("gopkg.in/yaml.v3")
    'yaml'
    >>> version_alias("github.com/pkg/errors") is None
    True
    """
    segments = import_path.split("/")
    last = segments[-1]

    candidate = None
    if VERSION_SEGMENT.match(last):
        if len(segments) > 1:
            candidate = segments[-2]
    else:
        match = VERSION_SUFFIX.match(last)
        if match:
            candidate = match.group("name")

    if candidate and is_valid_identifier(candidate):
        return candidate
    return None


def assign_version_aliases(imports: list[ImportEntry]) -> list[ImportEntry]:
    """Give every unaliased, version-suffixed import an explicit alias.

    Entries that already have an alias, or whose path has no version
    marker, are returned unchanged.
    """
    result = []
    for entry in imports:
        if entry.alias is None:
            alias = version_alias(entry.value)
            if alias is not None:
                logger.debug("Aliasing %s as %s", entry.path, alias)
                entry = entry.with_alias(alias)
        result.append(entry)
    return result
