"""Writing revised files back to disk or to a stream."""
from __future__ import annotations

import logging
import sys
from enum import Enum
from typing import BinaryIO

from goreviser.core.errors import ReviserIOError
from goreviser.core.results import ErrorResult, Result, ReviseResult

logger = logging.getLogger(__name__)


class OutputTarget(str, Enum):
    """Where revised content goes."""

    FILE = "file"
    STDOUT = "stdout"


def write_result(
    result: ReviseResult,
    target: OutputTarget = OutputTarget.FILE,
    stream: BinaryIO | None = None,
    dry_run: bool = False,
) -> Result:
    """Persist a successful revision.

    With ``OutputTarget.FILE`` the file is only rewritten when the content
    changed. With ``OutputTarget.STDOUT`` the output is always written to
    ``stream`` (``sys.stdout.buffer`` by default), changed or not.

    Parameters
    ----------
    result : ReviseResult
        What :meth:`Reviser.execute` returned.
    target : OutputTarget
        Destination.
    stream : BinaryIO | None
        Stream used for ``OutputTarget.STDOUT``.
    dry_run : bool
        Report what would be written without touching the file.

    Returns
    -------
    Result
        Success, or ``ErrorResult`` wrapping a ``ReviserIOError``.
    """
    path = result.path

    if target is OutputTarget.STDOUT:
        out = stream if stream is not None else sys.stdout.buffer
        out.write(result.output)
        out.flush()
        return Result(success=True, message=f"Wrote {path} to stdout")

    if not result.changed:
        return Result(success=True, message=f"{path} unchanged")

    if dry_run:
        return Result(
            success=True,
            message=f"[DRY RUN] Would revise imports in {path}",
            files_changed=[path],
            diff=result.diff,
        )

    try:
        path.write_bytes(result.output)
    except OSError as e:
        error = ReviserIOError(path, f"cannot write file: {e}", e)
        return ErrorResult(
            message=str(error),
            exception=error,
            operation=error.operation,
            target_repr=str(path),
        )

    logger.info("Revised imports in %s", path)
    return Result(
        success=True,
        message=f"Revised imports in {path}",
        files_changed=[path],
        diff=result.diff,
    )
