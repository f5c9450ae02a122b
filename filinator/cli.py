"""Command-line front door for filinator.

Parses ``-encode <dir> [-output <dir>]`` or ``-decode <dir>``, prepares the
output directory, then dispatches into the tree walker.
"""

from __future__ import annotations

import argparse
import os
import sys
from pathlib import Path

from .codec import Direction
from .config import load_default_output_dir, load_max_path_length
from .errors import FilinatorError, OpenFailed, OutputDirInvalid, UsageError
from .fileops import make_dirs
from .walker import run

PROG = "filinator"


class _ArgumentParser(argparse.ArgumentParser):
    """argparse variant that raises ``UsageError`` instead of exiting with 2."""

    def error(self, message: str):  # type: ignore[override]
        raise UsageError(message)


def build_parser() -> argparse.ArgumentParser:
    parser = _ArgumentParser(
        prog=PROG,
        description="Reversibly encode file and directory names for safe upload and storage.",
        allow_abbrev=False,
        usage=f"\n  {PROG} -encode <dir> [-output <dir>]\n  {PROG} -decode <dir>",
    )
    mode = parser.add_mutually_exclusive_group(required=True)
    mode.add_argument(
        "-encode",
        metavar="DIR",
        help="Copy every file under DIR to a flattened encoded name in the output directory.",
    )
    mode.add_argument(
        "-decode",
        metavar="DIR",
        help="Decode names under DIR in place, recreating directories.",
    )
    parser.add_argument(
        "-output",
        metavar="DIR",
        default=None,
        help="Output directory for -encode (default: configured, else 'output').",
    )
    return parser


def ensure_output_directory(output_dir: Path, is_default: bool) -> None:
    """Create ``output_dir`` when missing; reject an existing non-directory."""
    if not output_dir.exists():
        try:
            make_dirs(output_dir)
        except FilinatorError as exc:
            raise OutputDirInvalid(exc.message, path=output_dir) from exc
        if is_default:
            print(f"Default output directory '{output_dir}' created")
    elif not output_dir.is_dir():
        raise OutputDirInvalid("exists but is not a directory", path=output_dir)


def _print_usage_error(parser: argparse.ArgumentParser, message: str) -> None:
    parser.print_usage(sys.stderr)
    print(f"{PROG}: error: {message}", file=sys.stderr)


def main(argv: list[str] | None = None) -> int:
    """Run one encode or decode invocation and return the process exit code.

    Per-entry failures are printed but still exit 0; usage errors, an
    unreadable root and output-directory problems exit 1.
    """
    parser = build_parser()
    try:
        args = parser.parse_args(argv)
        if args.decode is not None and args.output is not None:
            raise UsageError("-output is only accepted with -encode")
    except UsageError as exc:
        _print_usage_error(parser, exc.message)
        return 1

    direction = Direction.ENCODE if args.encode is not None else Direction.DECODE
    root = args.encode if args.encode is not None else args.decode
    if not os.path.isdir(root):
        print(f"{PROG}: {root}: not a directory", file=sys.stderr)
        return 1

    output_root: Path | None = None
    if direction is Direction.ENCODE:
        is_default = args.output is None
        output_root = Path(load_default_output_dir() if is_default else args.output)
        try:
            ensure_output_directory(output_root, is_default)
        except OutputDirInvalid as exc:
            print(f"{PROG}: {exc}", file=sys.stderr)
            return 1

    report = run(root, direction, output_root=output_root, max_length=load_max_path_length())

    root_error = report.first_error
    if isinstance(root_error, OpenFailed) and root_error.path == str(root):
        return 1
    if report.errors:
        print(f"{PROG}: {len(report.errors)} entries failed during {direction.value}", file=sys.stderr)
    return 0


if __name__ == "__main__":
    raise SystemExit(main())
