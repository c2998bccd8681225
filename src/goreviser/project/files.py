"""Discovery of Go source files below a set of paths."""
from __future__ import annotations

import fnmatch
import os
import re
from pathlib import Path
from typing import Iterable

GO_SUFFIX = ".go"

# Directories the go tool itself ignores when expanding ./...
SKIPPED_DIRS = frozenset({"testdata", "vendor"})

GENERATED_MARKER = re.compile(rb"^// Code generated .* DO NOT EDIT\.\r?$", re.MULTILINE)


def is_excluded(path: Path, root: Path, excludes: Iterable[str]) -> bool:
    """True if ``path`` matches one of the glob patterns.

    Patterns are tried against the path relative to ``root`` and against
    its file name.
    """
    try:
        relative = path.relative_to(root).as_posix()
    except ValueError:
        relative = path.as_posix()
    for pattern in excludes:
        pattern = pattern.rstrip("/")
        if fnmatch.fnmatch(relative, pattern) or fnmatch.fnmatch(path.name, pattern):
            return True
        if relative.startswith(pattern + "/"):
            return True
    return False


def is_generated(content: bytes) -> bool:
    """True for files carrying the standard ``Code generated`` header."""
    return GENERATED_MARKER.search(content) is not None


def find_go_files(paths: Iterable[Path | str], excludes: Iterable[str] = ()) -> list[Path]:
    """Expand files and directories into a sorted list of ``.go`` files.

    Files named explicitly are always returned. Directories are walked
    recursively, skipping hidden and ``_``-prefixed directories, ``vendor``
    and ``testdata``, and anything matching ``excludes``.
    """
    excludes = list(excludes)
    found: list[Path] = []

    for raw in paths:
        path = Path(raw)
        if path.is_file():
            if path not in found:
                found.append(path)
            continue
        if not path.is_dir():
            continue

        for directory, dirs, files in os.walk(path):
            current = Path(directory)
            dirs[:] = sorted(
                d for d in dirs
                if not d.startswith((".", "_"))
                and d not in SKIPPED_DIRS
                and not is_excluded(current / d, path, excludes)
            )
            for name in sorted(files):
                candidate = current / name
                if not name.endswith(GO_SUFFIX) or is_excluded(candidate, path, excludes):
                    continue
                if candidate not in found:
                    found.append(candidate)

    return found
