"""Existence checks over resolved generator inputs."""

from __future__ import annotations

import os
from pathlib import Path
from typing import AbstractSet, Iterable, List, Sequence, Tuple

_HEADER = "Invalid configuration detected!\nNon-existing or inaccessible files:"


class MissingInputFilesError(RuntimeError):
    """Raised when one or more resolved input files do not exist."""

    def __init__(self, missing: Iterable[Path]) -> None:
        self.missing: Tuple[Path, ...] = tuple(sorted(missing, key=str))
        super().__init__(format_missing_files(self.missing))


def format_missing_files(missing: Sequence[Path]) -> str:
    lines = [_HEADER]
    lines.extend(str(path) for path in missing)
    return "\n".join(lines)


def find_missing_files(paths: AbstractSet[Path]) -> List[Path]:
    """Return every path that does not exist, sorted."""
    return sorted((path for path in paths if not os.path.exists(path)), key=str)


def validate_file_existence(paths: AbstractSet[Path]) -> None:
    """Raise :class:`MissingInputFilesError` listing every missing path."""
    if not paths:
        return
    missing = find_missing_files(paths)
    if missing:
        raise MissingInputFilesError(missing)


__all__ = [
    "MissingInputFilesError",
    "find_missing_files",
    "format_missing_files",
    "validate_file_existence",
]
