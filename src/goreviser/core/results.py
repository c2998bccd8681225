"""Result types for revise operations.

This module defines the result classes returned at the public boundary:
- Result - Base result for all operations
- ReviseResult - Successful revision of a single file
- ErrorResult - Result for failed operations
- BatchResult - Aggregate result for many files
"""
from __future__ import annotations

from dataclasses import dataclass, field
from pathlib import Path
from typing import Iterator


@dataclass
class Result:
    """Base result for all operations.

    Operations never raise exceptions. Instead, they return Result objects
    that indicate success or failure.

    Attributes:
        success: Whether the operation succeeded
        message: Human-readable description of what happened
        files_changed: List of files that were (or would be) modified
        diff: Unified diff of the change, if any
    """

    success: bool
    message: str
    files_changed: list[Path] = field(default_factory=list)
    diff: str | None = None

    def __bool__(self) -> bool:
        return self.success

    def is_error(self) -> bool:
        """Check if this result represents an error."""
        return not self.success


@dataclass
class ReviseResult(Result):
    """Outcome of revising one file.

    Attributes:
        path: The file that was processed
        original: Input bytes
        output: Revised bytes (equal to ``original`` when nothing changed)
    """

    success: bool = field(default=True, init=False)
    message: str = ""
    path: Path | None = None
    original: bytes = b""
    output: bytes = b""

    @property
    def changed(self) -> bool:
        """True iff the output differs byte-for-byte from the input."""
        return self.output != self.original


@dataclass
class ErrorResult(Result):
    """Result for failed operations - never raises automatically.

    Attributes:
        exception: The original exception, if any
        operation: Name of the attempted operation
        target_repr: String representation of the target
    """

    success: bool = field(default=False, init=False)
    exception: Exception | None = None
    operation: str = ""
    target_repr: str = ""

    @property
    def changed(self) -> bool:
        return False

    def raise_if_error(self) -> None:
        """Explicitly re-raise the exception if the programmer wants to."""
        if self.exception:
            raise self.exception
        raise RuntimeError(self.message)


@dataclass
class BatchResult:
    """Aggregate result for a run over several files."""

    results: list[Result] = field(default_factory=list)

    @property
    def success(self) -> bool:
        """True if all operations succeeded."""
        return all(r.success for r in self.results)

    @property
    def succeeded(self) -> list[Result]:
        return [r for r in self.results if r.success]

    @property
    def failed(self) -> list[Result]:
        return [r for r in self.results if not r.success]

    @property
    def files_changed(self) -> list[Path]:
        """All files changed across all operations, in input order."""
        files: list[Path] = []
        for r in self.results:
            for path in r.files_changed:
                if path not in files:
                    files.append(path)
        return files

    @property
    def diff(self) -> str | None:
        """Diffs of all successful results, in input order."""
        from goreviser.core.diff import combine_diffs

        return combine_diffs(self.results) or None

    def __bool__(self) -> bool:
        return self.success

    def __len__(self) -> int:
        return len(self.results)

    def __iter__(self) -> Iterator[Result]:
        return iter(self.results)
