"""Reversible name transformation rules.

Directory names only swap spaces and the marker character. File paths are
flattened into a single name on encode (separators become ``@``, spaces
become ``_``) and expanded back into a relative path on decode.
The codec is pure: it never touches the filesystem.
"""

from __future__ import annotations

import os
from enum import Enum

from .errors import TransformTooLong

PATH_MAX = 4096
MARKER_CHAR = "§"
# A lone 0xA7 byte (non-UTF-8 names written by Latin-1 tools) as it
# arrives through os.fsdecode; decoded like the marker, never produced.
RAW_MARKER_CHAR = "\udca7"
_MARKERS = (MARKER_CHAR, RAW_MARKER_CHAR)
SEPARATOR_ENCODE = "@"
SPACE_ENCODE = "_"

_SEPARATORS = ("/", "\\")
_RELATIVE_PREFIXES = ("./", ".\\")


class Direction(Enum):
    ENCODE = "encode"
    DECODE = "decode"


class EntityKind(Enum):
    FILE = "file"
    DIRECTORY = "directory"
    OTHER = "other"


def _directory_char(char: str, direction: Direction) -> str:
    if direction is Direction.ENCODE:
        return MARKER_CHAR if char == " " else char
    return " " if char in _MARKERS else char


def _file_encode_char(char: str) -> str:
    if char in _SEPARATORS:
        return SEPARATOR_ENCODE
    if char == " ":
        return SPACE_ENCODE
    if char in _MARKERS:
        return " "
    return char


def _file_decode_char(char: str) -> str:
    if char == SEPARATOR_ENCODE:
        return os.sep
    if char == SPACE_ENCODE or char in _MARKERS:
        return " "
    return char


def normalize_separators(path: str) -> str:
    """Rewrite both ``/`` and ``\\`` to the host separator."""
    return "".join(os.sep if char in _SEPARATORS else char for char in path)


def transform(
    text: str,
    direction: Direction,
    kind: EntityKind,
    *,
    max_length: int = PATH_MAX,
) -> str:
    """Return ``text`` encoded or decoded for an entity of ``kind``.

    Directory rules apply to a bare name. File encoding expects an absolute
    path; file decoding expects the raw stored path, may carry a leading
    ``./`` and always yields a relative path with host separators: every
    leading separator is dropped.

    Raises ``TransformTooLong`` when the result would not fit in
    ``max_length`` (one slot is reserved, as for a C path buffer).
    """
    if kind is EntityKind.OTHER:
        raise ValueError("only files and directories can be transformed")

    if kind is EntityKind.DIRECTORY:
        result = "".join(_directory_char(char, direction) for char in text)
    elif direction is Direction.ENCODE:
        result = "".join(_file_encode_char(char) for char in text)
    else:
        if text.startswith(_RELATIVE_PREFIXES):
            text = text[2:]
        result = "".join(_file_decode_char(char) for char in text)

    if len(result) >= max_length:
        raise TransformTooLong(
            f"transformed path exceeds {max_length - 1} characters",
            path=text,
        )

    if kind is EntityKind.FILE and direction is Direction.DECODE:
        result = result.lstrip("".join(_SEPARATORS))
        result = normalize_separators(result)
    return result


def is_noop(before: str, after: str) -> bool:
    """Whether a transform left its input unchanged, so no fs call is due."""
    return before == after


__all__ = [
    "PATH_MAX",
    "MARKER_CHAR",
    "RAW_MARKER_CHAR",
    "SEPARATOR_ENCODE",
    "SPACE_ENCODE",
    "Direction",
    "EntityKind",
    "normalize_separators",
    "transform",
    "is_noop",
]
