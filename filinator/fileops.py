"""Filesystem helpers used by the tree walker.

Byte copy, create-all-parents, absolute path resolution, bounded joins and
collision-refusing renames. Every helper converts ``OSError`` into the
matching ``filinator.errors`` type.
"""

from __future__ import annotations

import os
from pathlib import Path

from .codec import PATH_MAX
from .errors import (
    CopyReadFailed,
    CopyWriteFailed,
    MkdirFailed,
    RenameFailed,
    StatFailed,
    TransformTooLong,
)

COPY_CHUNK_SIZE = 4096


def copy_file(src: str | Path, dst: str | Path, chunk_size: int = COPY_CHUNK_SIZE) -> int:
    """Stream ``src`` into ``dst`` in binary mode and return the byte count.

    Read-side failures (open or read) raise ``CopyReadFailed``; write-side
    failures raise ``CopyWriteFailed``. Both handles are closed on every path.
    """
    try:
        fsrc = open(src, "rb")
    except OSError as exc:
        raise CopyReadFailed(f"cannot open for reading: {exc.strerror or exc}", path=src) from exc

    copied = 0
    with fsrc:
        try:
            fdst = open(dst, "wb")
        except OSError as exc:
            raise CopyWriteFailed(f"cannot open for writing: {exc.strerror or exc}", path=dst) from exc
        with fdst:
            while True:
                try:
                    chunk = fsrc.read(chunk_size)
                except OSError as exc:
                    raise CopyReadFailed(f"read failed: {exc.strerror or exc}", path=src) from exc
                if not chunk:
                    break
                try:
                    fdst.write(chunk)
                except OSError as exc:
                    raise CopyWriteFailed(f"write failed: {exc.strerror or exc}", path=dst) from exc
                copied += len(chunk)
    return copied


def make_dirs(path: str | Path) -> None:
    """Create ``path`` and every missing ancestor; existing directories are fine."""
    if not str(path):
        return
    try:
        os.makedirs(path, exist_ok=True)
    except OSError as exc:
        raise MkdirFailed(f"cannot create directory: {exc.strerror or exc}", path=path) from exc


def make_parent_dirs(path: str | Path) -> None:
    """Materialize the parent chain of ``path`` (no-op for bare names)."""
    make_dirs(os.path.dirname(path))


def absolute_path(path: str | Path) -> str:
    """Resolve ``path`` to an absolute path with symlinks and ``..`` removed."""
    try:
        return os.path.realpath(path, strict=True)
    except OSError as exc:
        raise StatFailed(f"cannot resolve absolute path: {exc.strerror or exc}", path=path) from exc


def join_path(directory: str | Path, name: str, max_length: int = PATH_MAX) -> str:
    """Join ``directory`` and ``name``, refusing results beyond ``max_length``."""
    joined = os.path.join(directory, name)
    if len(joined) >= max_length:
        raise TransformTooLong(f"joined path exceeds {max_length - 1} characters", path=joined)
    return joined


def rename_path(src: str | Path, dst: str | Path) -> None:
    """Rename ``src`` to ``dst`` unless ``dst`` already names another entry."""
    if os.path.lexists(dst):
        try:
            same_entry = os.path.samefile(src, dst)
        except OSError:
            same_entry = False
        if not same_entry:
            raise RenameFailed(f"destination already exists: {dst}", path=src)
    try:
        os.rename(src, dst)
    except OSError as exc:
        raise RenameFailed(f"cannot rename to {dst}: {exc.strerror or exc}", path=src) from exc


__all__ = [
    "COPY_CHUNK_SIZE",
    "copy_file",
    "make_dirs",
    "make_parent_dirs",
    "absolute_path",
    "join_path",
    "rename_path",
]
