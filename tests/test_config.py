"""Tests for cuckoo_plugin.config."""

from __future__ import annotations

from pathlib import Path

import pytest

from cuckoo_plugin.config import ConfigError, ConfigFile, ConfigVersion, decode_config, load_config


def test_load_config_returns_defaults_when_missing(tmp_path: Path) -> None:
    config = load_config(tmp_path / "cuckoo.json")

    assert config == ConfigFile()
    assert config.version is ConfigVersion.V1
    assert config.options is None
    assert config.effective_options == ()
    assert config.input_files is None


def test_load_config_parses_expected_fields(tmp_path: Path) -> None:
    config_file = tmp_path / "cuckoo.json"
    config_file.write_text(
        """
{
  "version": 1,
  "options": ["--no-header", "--glob", "**/*.swift"],
  "inputFiles": ["Sources/MyApp/Service.swift", "Sources/MyApp/Client.swift"]
}
""",
        encoding="utf-8",
    )

    config = load_config(config_file)

    assert config.version is ConfigVersion.V1
    assert config.options == ("--no-header", "--glob", "**/*.swift")
    assert config.input_files == ("Sources/MyApp/Service.swift", "Sources/MyApp/Client.swift")


def test_null_fields_are_treated_as_absent() -> None:
    config = decode_config('{"version": 1, "options": null, "inputFiles": null}')

    assert config.options is None
    assert config.input_files is None


@pytest.mark.parametrize(
    "payload",
    [
        "",
        "{not json",
        "[]",
        '{"options": []}',
        '{"version": 2}',
        '{"version": "1"}',
        '{"version": true}',
        '{"version": 1, "options": "--verbose"}',
        '{"version": 1, "inputFiles": ["ok.swift", 3]}',
    ],
)
def test_invalid_documents_raise_config_error(payload: str) -> None:
    with pytest.raises(ConfigError):
        decode_config(payload)


def test_existing_but_invalid_file_is_not_defaulted(tmp_path: Path) -> None:
    config_file = tmp_path / "cuckoo.json"
    config_file.write_text('{"version": 7}', encoding="utf-8")

    with pytest.raises(ConfigError, match="unsupported version 7"):
        load_config(config_file)
