"""Recursive tree walker that applies the codec to a directory tree.

Directories are processed post-order: every child, including its own rename,
finishes before the parent name is considered. In-place runs rename entries;
output runs copy each file to a flattened name under the output root and
leave the source tree untouched.

A failing entry is recorded in the ``WalkReport`` and printed to stderr,
then the walk moves on to the next sibling.
"""

from __future__ import annotations

import os
import stat
import sys
from dataclasses import dataclass, field
from enum import Enum
from pathlib import Path

from .codec import PATH_MAX, Direction, EntityKind, is_noop, transform
from .errors import FilinatorError, OpenFailed, RenameFailed, StatFailed
from .fileops import absolute_path, copy_file, join_path, make_parent_dirs, rename_path


class RunMode(Enum):
    IN_PLACE = "in-place"
    TO_OUTPUT = "to-output"


@dataclass(frozen=True)
class TransformContext:
    """Immutable run configuration threaded through every recursive call."""

    direction: Direction
    output_root: Path | None = None
    max_length: int = PATH_MAX

    @property
    def mode(self) -> RunMode:
        return RunMode.IN_PLACE if self.output_root is None else RunMode.TO_OUTPUT

    @property
    def encoding(self) -> bool:
        return self.direction is Direction.ENCODE


@dataclass
class WalkReport:
    """Counters and per-entry errors accumulated over one run."""

    renamed: int = 0
    copied: int = 0
    errors: list[FilinatorError] = field(default_factory=list)

    @property
    def ok(self) -> bool:
        return not self.errors

    @property
    def first_error(self) -> FilinatorError | None:
        return self.errors[0] if self.errors else None

    def record(self, error: FilinatorError) -> None:
        self.errors.append(error)
        print(f"filinator: {error}", file=sys.stderr)


def entity_kind(path: str | Path) -> EntityKind:
    """Classify ``path`` without following symlinks."""
    try:
        st = os.stat(path, follow_symlinks=False)
    except OSError as exc:
        raise StatFailed(exc.strerror or str(exc), path=path) from exc
    if stat.S_ISDIR(st.st_mode):
        return EntityKind.DIRECTORY
    if stat.S_ISREG(st.st_mode):
        return EntityKind.FILE
    return EntityKind.OTHER


def _read_entry_names(path: str | Path) -> list[str]:
    try:
        with os.scandir(path) as entries:
            names = [entry.name for entry in entries]
    except OSError as exc:
        raise OpenFailed(f"cannot open directory: {exc.strerror or exc}", path=path) from exc
    names.sort()
    return names


def _same_path(left: str | Path, right: Path | None) -> bool:
    if right is None:
        return False
    try:
        return os.path.samefile(left, right)
    except OSError:
        return False


def _escapes_directory(relative: str) -> bool:
    """Whether joining ``relative`` could land outside the joining directory."""
    if os.path.isabs(relative) or os.path.splitdrive(relative)[0]:
        return True
    return os.pardir in relative.split(os.sep)


def copy_encoded(
    file_path: str | Path,
    output_root: str | Path,
    context: TransformContext,
    report: WalkReport | None = None,
) -> WalkReport:
    """Copy ``file_path`` to its flattened encoded name under ``output_root``."""
    if report is None:
        report = WalkReport()
    try:
        source = absolute_path(file_path)
        encoded = transform(source, Direction.ENCODE, EntityKind.FILE, max_length=context.max_length)
        destination = join_path(output_root, encoded, context.max_length)
        make_parent_dirs(destination)
        copy_file(file_path, destination)
    except FilinatorError as exc:
        report.record(exc)
        return report

    report.copied += 1
    print(f"Copied: {file_path} -> {destination}")
    return report


def rename_file(
    file_path: str | Path,
    context: TransformContext,
    report: WalkReport | None = None,
) -> WalkReport:
    """Rename one file in place to its encoded or decoded name.

    Encoding flattens the absolute path into one name; decoding expands the
    raw ``./<name>`` back into a relative path. Either result is placed under
    the file's containing directory, whose missing subdirectories are created
    when decoding.
    """
    if report is None:
        report = WalkReport()
    directory, name = os.path.split(os.fspath(file_path))
    try:
        if context.encoding:
            raw = absolute_path(file_path)
        else:
            raw = os.path.join(os.curdir, name)
        new_name = transform(raw, context.direction, EntityKind.FILE, max_length=context.max_length)
        if is_noop(name, new_name):
            return report
        if _escapes_directory(new_name):
            raise RenameFailed(f"decoded name leaves its directory: {new_name}", path=file_path)
        destination = join_path(directory, new_name, context.max_length)
        if not context.encoding:
            make_parent_dirs(destination)
        rename_path(file_path, destination)
    except FilinatorError as exc:
        report.record(exc)
        return report

    report.renamed += 1
    print(f"Renamed: {file_path} -> {destination}")
    return report


def rename_directory(
    dir_path: str | Path,
    context: TransformContext,
    report: WalkReport | None = None,
) -> WalkReport:
    """Rename one directory by transforming its bare name."""
    if report is None:
        report = WalkReport()
    parent, name = os.path.split(os.fspath(dir_path))
    try:
        new_name = transform(name, context.direction, EntityKind.DIRECTORY, max_length=context.max_length)
        if is_noop(name, new_name):
            return report
        destination = join_path(parent, new_name, context.max_length)
        rename_path(dir_path, destination)
    except FilinatorError as exc:
        report.record(exc)
        return report

    report.renamed += 1
    print(f"Renamed directory: {dir_path} -> {destination}")
    return report


def _process_entry(entry_path: str, context: TransformContext, report: WalkReport) -> None:
    try:
        kind = entity_kind(entry_path)
    except FilinatorError as exc:
        report.record(exc)
        return

    if kind is EntityKind.FILE:
        if context.mode is RunMode.TO_OUTPUT and context.encoding:
            copy_encoded(entry_path, context.output_root, context, report)
        else:
            rename_file(entry_path, context, report)
        return

    if kind is not EntityKind.DIRECTORY:
        return

    # Copies never feed back into the walk.
    if _same_path(entry_path, context.output_root):
        return

    process_directory(entry_path, context, skip_rename=False, report=report)


def process_directory(
    path: str | Path,
    context: TransformContext,
    skip_rename: bool = False,
    report: WalkReport | None = None,
) -> WalkReport:
    """Walk ``path`` depth-first, then rename ``path`` itself.

    The rename happens only after every descendant is done, and is skipped in
    output mode, when ``skip_rename`` is set (the user-supplied root), or when
    the directory could not be opened. The returned report holds every
    per-entry error; ``report.first_error`` is the first one.
    """
    if report is None:
        report = WalkReport()
    try:
        names = _read_entry_names(path)
    except FilinatorError as exc:
        report.record(exc)
        return report

    for name in names:
        try:
            entry_path = join_path(path, name, context.max_length)
        except FilinatorError as exc:
            report.record(exc)
            continue
        _process_entry(entry_path, context, report)

    if skip_rename or context.mode is RunMode.TO_OUTPUT:
        return report
    return rename_directory(path, context, report)


def run(
    root: str | Path,
    direction: Direction,
    output_root: str | Path | None = None,
    max_length: int = PATH_MAX,
) -> WalkReport:
    """Transform the contents of ``root``; ``root`` itself is never renamed."""
    context = TransformContext(
        direction=direction,
        output_root=None if output_root is None else Path(output_root),
        max_length=max_length,
    )
    return process_directory(root, context, skip_rename=True)


__all__ = [
    "RunMode",
    "TransformContext",
    "WalkReport",
    "entity_kind",
    "copy_encoded",
    "rename_file",
    "rename_directory",
    "process_directory",
    "run",
]
