"""
Core module: the single-file revise pipeline and its result types.

Example
-------
>>> from goreviser.core import OptionSet, ProjectContext, Reviser
>>>
>>> reviser = Reviser(ProjectContext("example.com/proj"), OptionSet(use_alias_for_version_suffix=True))
>>> result = reviser.execute("main.go")
"""
from __future__ import annotations

from .options import OptionSet, ProjectContext
from .results import BatchResult, ErrorResult, Result, ReviseResult
from .reviser import Reviser, execute

__all__ = [
    "Reviser",
    "execute",
    "OptionSet",
    "ProjectContext",
    "Result",
    "ReviseResult",
    "ErrorResult",
    "BatchResult",
]
