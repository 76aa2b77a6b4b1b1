"""Argument assembly for the generator invocation."""

from __future__ import annotations

from pathlib import Path
from typing import Iterable, List, Sequence

GENERATE_COMMAND = "generate"


def sort_input_paths(paths: Iterable[Path]) -> List[Path]:
    """Order resolved inputs lexicographically by their string form."""
    return sorted(paths, key=str)


def build_arguments(
    output: Path,
    input_files: Iterable[Path],
    testable_modules: Sequence[str],
    options: Sequence[str],
) -> List[str]:
    """Return the generator arguments.

    The order is ``generate --output <path> [--testable <module>...]
    [<option>...] <input>...``. Modules keep the host order, options keep the
    configuration order, and inputs are sorted.
    """
    arguments: List[str] = [GENERATE_COMMAND, "--output", str(output)]
    if testable_modules:
        arguments.append("--testable")
        arguments.extend(testable_modules)
    if options:
        arguments.extend(options)
    arguments.extend(str(path) for path in sort_input_paths(input_files))
    return arguments


__all__ = ["GENERATE_COMMAND", "build_arguments", "sort_input_paths"]
