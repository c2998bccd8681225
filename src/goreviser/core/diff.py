"""Unified diffs of revised Go files, in the shape ``gofmt -d`` prints."""
from __future__ import annotations

import difflib
from pathlib import Path
from typing import TYPE_CHECKING, Iterable

if TYPE_CHECKING:
    from goreviser.core.results import Result

NO_NEWLINE = "\\ No newline at end of file\n"


def generate_diff(original: bytes, revised: bytes, path: Path | str, context_lines: int = 3) -> str:
    """Diff two versions of a file.

    Bytes that are not UTF-8 are shown as replacement characters. A last
    line without a newline is followed by the usual ``\\ No newline``
    marker so the diff still applies with ``patch``.

    Examples
    --------
    >>> print(generate_diff(b'import "os"\\n', b'import "fmt"\\n', "main.go"), end="")
    --- a/main.go
    +++ b/main.go
    @@ -1 +1 @@
    -import "os"
    +import "fmt"
    """
    if original == revised:
        return ""

    diff = difflib.unified_diff(
        _lines(original),
        _lines(revised),
        fromfile=f"a/{path}",
        tofile=f"b/{path}",
        n=context_lines,
    )
    out = []
    for line in diff:
        if line.endswith("\n"):
            out.append(line)
        else:
            out.append(line + "\n" + NO_NEWLINE)
    return "".join(out)


def combine_diffs(results: Iterable[Result]) -> str:
    """Concatenate the diffs of ``results`` in the order they were run."""
    return "".join(result.diff for result in results if result.success and result.diff)


def _lines(content: bytes) -> list[str]:
    # Only \n ends a line in Go source; \r and form feeds stay in place.
    *lines, last = content.decode("utf-8", errors="replace").split("\n")
    lines = [line + "\n" for line in lines]
    if last:
        lines.append(last)
    return lines
