"""
goreviser - group, sort and prune the imports of Go source files.

Imports are split into three blocks separated by blank lines: standard
library, general (third-party) and project imports, each sorted by path.
Optionally unused imports are removed, version-suffixed paths get an explicit
alias, and the whole file is passed through gofmt.

Example
-------
>>> from goreviser import OptionSet, ProjectContext, Reviser
>>>
>>> project = ProjectContext.from_path("cmd/app/main.go")  # reads go.mod
>>> reviser = Reviser(project, OptionSet(remove_unused_imports=True))
>>> result = reviser.execute("cmd/app/main.go")
>>> result.changed
True

Classes
-------
Reviser
    Runs the import pipeline on one file.

OptionSet, ProjectContext
    Immutable configuration passed to every call.

Result, ReviseResult, ErrorResult, BatchResult
    Result classes. ``Reviser.execute`` never raises.
"""
from __future__ import annotations

__version__ = "0.1.0"

from goreviser.core.errors import (
    EmitError,
    ModuleResolutionError,
    ParseError,
    ReviserError,
    ReviserIOError,
)
from goreviser.core.options import OptionSet, ProjectContext
from goreviser.core.results import BatchResult, ErrorResult, Result, ReviseResult
from goreviser.core.reviser import Reviser, execute
from goreviser.imports.analyzer import ImportEntry
from goreviser.imports.organizer import ImportGroup

__all__ = [
    "__version__",
    "Reviser",
    "execute",
    "OptionSet",
    "ProjectContext",
    "Result",
    "ReviseResult",
    "ErrorResult",
    "BatchResult",
    "ImportEntry",
    "ImportGroup",
    "ReviserError",
    "ParseError",
    "ModuleResolutionError",
    "ReviserIOError",
    "EmitError",
]
