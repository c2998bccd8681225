"""Command-line interface."""
from __future__ import annotations

import argparse
import logging
import sys

from goreviser import __version__
from goreviser.core.options import OptionSet
from goreviser.core.output import OutputTarget
from goreviser.core.results import ReviseResult
from goreviser.runner import RunConfig, run

logger = logging.getLogger(__name__)


def _split(value: str | None) -> tuple[str, ...]:
    if not value:
        return ()
    return tuple(part.strip() for part in value.split(",") if part.strip())


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="goreviser",
        description="Group, sort and optionally prune the imports of Go files",
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog="""
Examples:
  goreviser main.go
  goreviser --rm-unused --set-alias --local github.com/acme/ ./...
  goreviser --project-name example.com/proj --output stdout cmd/app/main.go
  goreviser --list-diff .
        """,
    )

    parser.add_argument(
        "paths",
        nargs="+",
        help="Go files or directories (walked recursively; a trailing /... is accepted)",
    )

    parser.add_argument(
        "--project-name",
        help="Module name of the project (default: read from the nearest go.mod)",
    )

    parser.add_argument(
        "--local",
        help="Comma-separated import path prefixes that count as project imports",
    )

    parser.add_argument(
        "--rm-unused",
        action="store_true",
        help="Remove imports that are never used",
    )

    parser.add_argument(
        "--set-alias",
        action="store_true",
        help="Alias imports whose path ends in a version marker (e.g. /v2, .v3)",
    )

    parser.add_argument(
        "--format",
        action="store_true",
        help="Format the whole file with gofmt, not only the import block",
    )

    parser.add_argument(
        "--gofmt",
        default="gofmt",
        help="gofmt executable used by --format (default: gofmt)",
    )

    parser.add_argument(
        "--output",
        choices=[target.value for target in OutputTarget],
        default=OutputTarget.FILE.value,
        help="Write results back to the file or to stdout (default: file)",
    )

    parser.add_argument(
        "--list-diff",
        action="store_true",
        help="Only list files whose imports would change; exit with status 1 if any",
    )

    parser.add_argument(
        "--dry-run",
        action="store_true",
        help="Print a unified diff instead of writing files",
    )

    parser.add_argument(
        "--excludes",
        help="Comma-separated glob patterns of paths to skip",
    )

    parser.add_argument(
        "--skip-generated",
        action="store_true",
        help="Skip files marked 'Code generated ... DO NOT EDIT.'",
    )

    parser.add_argument(
        "--jobs",
        type=int,
        default=1,
        help="Number of files processed in parallel (default: 1)",
    )

    parser.add_argument(
        "--verbose", "-v",
        action="store_true",
        help="Enable debug logging",
    )

    parser.add_argument(
        "--version",
        action="version",
        version=f"%(prog)s {__version__}",
    )

    return parser


def main(argv: list[str] | None = None) -> int:
    """Main CLI entry point. Returns the process exit status."""
    args = build_parser().parse_args(argv)

    logging.basicConfig(
        level=logging.DEBUG if args.verbose else logging.INFO,
        format="%(levelname)s: %(message)s",
        stream=sys.stderr,
    )

    paths = [path[: -len("/...")] or "." if path.endswith("/...") else path for path in args.paths]

    config = RunConfig(
        options=OptionSet(
            remove_unused_imports=args.rm_unused,
            use_alias_for_version_suffix=args.set_alias,
            full_format=args.format,
            gofmt_command=(args.gofmt,),
        ),
        module_name=args.project_name,
        local_prefixes=_split(args.local),
        excludes=_split(args.excludes),
        skip_generated=args.skip_generated,
        target=OutputTarget.FILE if args.list_diff else OutputTarget(args.output),
        dry_run=args.dry_run or args.list_diff,
        jobs=args.jobs,
    )

    batch = run(paths, config)

    for result in batch.failed:
        logger.error("%s", result.message)

    changed = [r for r in batch.succeeded if isinstance(r, ReviseResult) and r.changed]
    if args.list_diff:
        for result in changed:
            print(result.path)
    elif args.dry_run and config.target is OutputTarget.FILE:
        sys.stdout.write(batch.diff or "")

    if not batch.success:
        return 1
    if args.list_diff and changed:
        return 1
    return 0


if __name__ == "__main__":
    sys.exit(main())
