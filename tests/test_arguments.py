"""Tests for generator argument assembly."""

from __future__ import annotations

from pathlib import Path

from cuckoo_plugin.arguments import build_arguments, sort_input_paths


def test_arguments_follow_fixed_order() -> None:
    arguments = build_arguments(
        output=Path("/out/Gen.swift"),
        input_files={Path("/x/Z.swift"), Path("/x/A.swift")},
        testable_modules=["ModA", "ModB"],
        options=["--verbose"],
    )

    assert arguments == [
        "generate",
        "--output",
        "/out/Gen.swift",
        "--testable",
        "ModA",
        "ModB",
        "--verbose",
        "/x/A.swift",
        "/x/Z.swift",
    ]


def test_empty_modules_options_and_inputs() -> None:
    arguments = build_arguments(Path("/out/Gen.swift"), frozenset(), [], [])

    assert arguments == ["generate", "--output", "/out/Gen.swift"]


def test_testable_modules_keep_host_order_and_options_pass_through() -> None:
    arguments = build_arguments(
        Path("/out/Gen.swift"),
        frozenset(),
        ["Zeta", "Alpha"],
        ["--glob", "*.swift", "--no-timestamp"],
    )

    assert arguments[3:] == ["--testable", "Zeta", "Alpha", "--glob", "*.swift", "--no-timestamp"]


def test_sort_input_paths_is_lexicographic_on_strings() -> None:
    paths = {Path("/b/a.swift"), Path("/a/z.swift"), Path("/a/B.swift")}

    assert sort_input_paths(paths) == [
        Path("/a/B.swift"),
        Path("/a/z.swift"),
        Path("/b/a.swift"),
    ]
