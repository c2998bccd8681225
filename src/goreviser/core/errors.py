"""Exception types raised by the revising stages.

Every error is local to one file and carries its path. The orchestrator
converts them into :class:`~goreviser.core.results.ErrorResult` objects, so
callers of :meth:`Reviser.execute` never see them raised unless they ask for
it with ``raise_if_error()``.
"""
from __future__ import annotations

from pathlib import Path


class ReviserError(Exception):
    """Base class for all revising errors.

    Parameters
    ----------
    path : Path | str | None
        File the error relates to.
    message : str
        Human-readable description.
    cause : BaseException | None
        The underlying exception, if any.
    """

    operation = "revise"

    def __init__(
        self,
        path: Path | str | None,
        message: str,
        cause: BaseException | None = None,
    ) -> None:
        self.path = Path(path) if path is not None else None
        self.message = message
        self.cause = cause
        super().__init__(str(self))

    def __str__(self) -> str:
        if self.path is None:
            return self.message
        return f"{self.path}: {self.message}"


class ParseError(ReviserError):
    """The file is not syntactically valid Go source."""

    operation = "parse"


class ModuleResolutionError(ReviserError):
    """No usable ``go.mod`` was found when the module name had to be derived."""

    operation = "resolve module"


class ReviserIOError(ReviserError):
    """Reading or writing a file failed."""

    operation = "io"


class EmitError(ReviserError):
    """Re-serializing the revised file failed."""

    operation = "emit"
