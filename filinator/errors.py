"""Error hierarchy for filinator runs.

Per-entry failures are recorded in a walk report and printed; they never
abort the walk. ``OutputDirInvalid`` and ``UsageError`` end an invocation
before traversal starts.
"""

from __future__ import annotations

from pathlib import Path


class FilinatorError(Exception):
    """Base error carrying the path it concerns, when there is one."""

    def __init__(self, message: str, path: str | Path | None = None) -> None:
        super().__init__(message)
        self.message = message
        self.path = None if path is None else str(path)

    def __str__(self) -> str:
        if self.path is None:
            return self.message
        return f"{self.path}: {self.message}"


class OpenFailed(FilinatorError):
    """Directory could not be opened for iteration."""


class StatFailed(FilinatorError):
    """Entry metadata or absolute path could not be read."""


class TransformTooLong(FilinatorError):
    """A transformed or joined path exceeds the maximum path length."""


class RenameFailed(FilinatorError):
    """Rename failed, or its destination already exists."""


class MkdirFailed(FilinatorError):
    """A parent directory could not be created."""


class CopyReadFailed(FilinatorError):
    pass


class CopyWriteFailed(FilinatorError):
    pass


class OutputDirInvalid(FilinatorError):
    """Output root exists but is not a directory, or cannot be created."""


class UsageError(FilinatorError):
    """Malformed command-line invocation."""


__all__ = [
    "FilinatorError",
    "OpenFailed",
    "StatFailed",
    "TransformTooLong",
    "RenameFailed",
    "MkdirFailed",
    "CopyReadFailed",
    "CopyWriteFailed",
    "OutputDirInvalid",
    "UsageError",
]
