"""Whole-file formatting through gofmt."""
from __future__ import annotations

import logging
import subprocess
from pathlib import Path
from typing import Sequence

from goreviser.core.errors import EmitError

logger = logging.getLogger(__name__)


def format_source(path: Path, content: bytes, command: Sequence[str] = ("gofmt",)) -> bytes:
    """Run ``content`` through gofmt and return the formatted bytes.

    gofmt reads the source from stdin, so ``path`` is only used for error
    messages.

    Raises
    ------
    EmitError
        If the formatter cannot be started or rejects the source.
    """
    try:
        result = subprocess.run(
            list(command),
            input=content,
            capture_output=True,
            check=False,
        )
    except OSError as e:
        raise EmitError(path, f"cannot run {command[0]}: {e}", e) from e

    if result.returncode != 0:
        stderr = result.stderr.decode("utf-8", errors="replace").strip()
        raise EmitError(path, f"{command[0]} exited with status {result.returncode}: {stderr}")

    logger.debug("Formatted %s with %s", path, " ".join(command))
    return result.stdout
