"""Revise many files, sequentially or on a thread pool.

Each file is handled independently: its module name is resolved from the
nearest ``go.mod`` unless one is given, and a failure in one file never
affects the others. Results come back in input order.
"""
from __future__ import annotations

import concurrent.futures
import logging
from dataclasses import dataclass, field
from pathlib import Path
from typing import BinaryIO, Iterable

from goreviser.core.errors import ReviserError
from goreviser.core.options import OptionSet, ProjectContext
from goreviser.core.output import OutputTarget, write_result
from goreviser.core.results import BatchResult, ErrorResult, Result
from goreviser.core.reviser import Reviser
from goreviser.core.source import read_bytes
from goreviser.project.files import find_go_files, is_generated

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class RunConfig:
    """Settings for a batch run.

    Attributes
    ----------
    options : OptionSet
        Stages to run on every file.
    module_name : str | None
        Module name for every file; resolved per file from ``go.mod`` when None.
    local_prefixes : tuple[str, ...]
        Extra project-local prefixes.
    excludes : tuple[str, ...]
        Glob patterns of paths to skip while walking directories.
    skip_generated : bool
        Leave files with a ``Code generated ... DO NOT EDIT.`` header alone.
    target : OutputTarget
        Write back to the file or stream to stdout.
    dry_run : bool
        Compute results without writing anything.
    jobs : int
        Worker threads; 1 or less runs sequentially.
    """

    options: OptionSet = field(default_factory=OptionSet)
    module_name: str | None = None
    local_prefixes: tuple[str, ...] = ()
    excludes: tuple[str, ...] = ()
    skip_generated: bool = False
    target: OutputTarget = OutputTarget.FILE
    dry_run: bool = False
    jobs: int = 1


def process_file(path: Path, config: RunConfig, stream: BinaryIO | None = None) -> Result:
    """Revise one file and persist it according to ``config``."""
    try:
        content = read_bytes(path)
    except ReviserError as e:
        return _error(e)

    if config.skip_generated and is_generated(content):
        logger.debug("Skipping generated file %s", path)
        return Result(success=True, message=f"Skipped generated file {path}")

    try:
        project = ProjectContext.from_path(path, config.module_name, config.local_prefixes)
    except ReviserError as e:
        return _error(e)

    result = Reviser(project, config.options).execute(path, content)
    if not result.success:
        return result

    if config.dry_run and config.target is OutputTarget.FILE:
        # Report the revision itself so callers can inspect diffs.
        return result

    return write_result(result, config.target, stream=stream, dry_run=config.dry_run)


def run(paths: Iterable[Path | str], config: RunConfig, stream: BinaryIO | None = None) -> BatchResult:
    """Revise every Go file found under ``paths``."""
    files = find_go_files(paths, config.excludes)
    logger.debug("Found %d Go files", len(files))

    if config.jobs <= 1 or len(files) <= 1 or config.target is OutputTarget.STDOUT:
        return BatchResult(results=[process_file(path, config, stream) for path in files])

    with concurrent.futures.ThreadPoolExecutor(max_workers=config.jobs) as executor:
        futures = [executor.submit(process_file, path, config, stream) for path in files]
        results = [future.result() for future in futures]
    return BatchResult(results=results)


def _error(error: ReviserError) -> ErrorResult:
    return ErrorResult(
        message=str(error),
        exception=error,
        operation=error.operation,
        target_repr=str(error.path),
    )
