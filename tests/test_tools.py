"""Tests for the tool locator."""

from __future__ import annotations

import os
from pathlib import Path

import pytest

from cuckoo_plugin.tools import ToolLocator, ToolResolutionError, parse_tool_overrides


def _make_executable(path: Path) -> Path:
    path.write_text("#!/bin/sh\nexit 0\n", encoding="utf-8")
    path.chmod(0o755)
    return path


def test_override_wins_over_environment_and_path(tmp_path: Path) -> None:
    override = _make_executable(tmp_path / "generator")
    locator = ToolLocator(
        {"CuckooGenerator": override},
        environ={"CUCKOO_TOOL_CUCKOOGENERATOR": "/elsewhere"},
        which=lambda name: "/usr/bin/other",
    )

    assert locator.path("CuckooGenerator") == override


def test_environment_variable_is_used(tmp_path: Path) -> None:
    tool = _make_executable(tmp_path / "gen")
    locator = ToolLocator(environ={"CUCKOO_TOOL_CUCKOOGENERATOR": str(tool)}, which=lambda name: None)

    assert locator.path("CuckooGenerator") == tool


def test_path_lookup_is_last_resort() -> None:
    locator = ToolLocator(environ={}, which=lambda name: f"/opt/bin/{name}")

    assert locator.path("CuckooGenerator") == Path("/opt/bin/CuckooGenerator")


def test_unresolvable_tool_raises() -> None:
    locator = ToolLocator(environ={}, which=lambda name: None)

    with pytest.raises(ToolResolutionError, match="CUCKOO_TOOL_CUCKOOGENERATOR"):
        locator.path("CuckooGenerator")


@pytest.mark.skipif(os.name == "nt", reason="POSIX permission bits")
def test_non_executable_override_raises(tmp_path: Path) -> None:
    plain = tmp_path / "generator"
    plain.write_text("", encoding="utf-8")

    with pytest.raises(ToolResolutionError, match="not executable"):
        ToolLocator({"CuckooGenerator": plain}).path("CuckooGenerator")


def test_env_key_sanitises_names() -> None:
    assert ToolLocator.env_key("swift-format") == "CUCKOO_TOOL_SWIFT_FORMAT"


def test_parse_tool_overrides() -> None:
    assert parse_tool_overrides(["CuckooGenerator=/bin/gen"]) == {"CuckooGenerator": "/bin/gen"}
    with pytest.raises(ValueError):
        parse_tool_overrides(["CuckooGenerator"])
