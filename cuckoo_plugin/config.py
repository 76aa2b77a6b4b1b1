"""Configuration loading for cuckoo-plugin (cuckoo.json)."""

from __future__ import annotations

import json
from dataclasses import dataclass
from enum import IntEnum
from pathlib import Path
from typing import Any, Dict, Optional, Tuple

CONFIG_FILE_NAME = "cuckoo.json"


class ConfigError(RuntimeError):
    """Raised when the configuration file exists but cannot be decoded."""


class ConfigVersion(IntEnum):
    V1 = 1


@dataclass(frozen=True)
class ConfigFile:
    """Represents the settings defined in cuckoo.json."""

    version: ConfigVersion = ConfigVersion.V1
    options: Optional[Tuple[str, ...]] = None
    # Relative to the package directory.
    input_files: Optional[Tuple[str, ...]] = None

    @property
    def effective_options(self) -> Tuple[str, ...]:
        return self.options or ()


def config_path_for(package_dir: Path) -> Path:
    return package_dir / CONFIG_FILE_NAME


def load_config(config_path: Path) -> ConfigFile:
    """Load configuration from disk.

    A missing file yields the defaults. A file that exists but does not decode
    raises :class:`ConfigError`; the two cases are never collapsed.
    """
    try:
        raw = config_path.read_bytes()
    except FileNotFoundError:
        return ConfigFile()
    except OSError as exc:
        raise ConfigError(f"Failed to read {config_path.name}: {exc}") from exc
    return decode_config(raw, source=config_path.name)


def decode_config(raw: bytes | str, *, source: str = CONFIG_FILE_NAME) -> ConfigFile:
    """Decode a JSON configuration document."""
    try:
        data = json.loads(raw)
    except (json.JSONDecodeError, UnicodeDecodeError) as exc:
        raise ConfigError(f"Failed to parse {source}: {exc}") from exc
    if not isinstance(data, dict):
        raise ConfigError(f"{source} must contain an object at the root")

    return ConfigFile(
        version=_as_version(data, source),
        options=_as_str_tuple(data, "options", source),
        input_files=_as_str_tuple(data, "inputFiles", source),
    )


def _as_version(data: Dict[str, Any], source: str) -> ConfigVersion:
    if "version" not in data:
        raise ConfigError(f"{source} is missing the required 'version' key")
    value = data["version"]
    # bool is an int subclass; `true` is not a version.
    if isinstance(value, bool) or not isinstance(value, int):
        raise ConfigError(f"{source}: 'version' must be an integer, got {value!r}")
    try:
        return ConfigVersion(value)
    except ValueError as exc:
        supported = ", ".join(str(int(v)) for v in ConfigVersion)
        raise ConfigError(
            f"{source}: unsupported version {value} (supported: {supported})"
        ) from exc


def _as_str_tuple(data: Dict[str, Any], key: str, source: str) -> Optional[Tuple[str, ...]]:
    value = data.get(key)
    if value is None:
        return None
    if not isinstance(value, list):
        raise ConfigError(f"{source}: '{key}' must be a list of strings")
    for index, item in enumerate(value):
        if not isinstance(item, str):
            raise ConfigError(f"{source}: '{key}[{index}]' must be a string, got {item!r}")
    return tuple(value)


__all__ = [
    "CONFIG_FILE_NAME",
    "ConfigError",
    "ConfigFile",
    "ConfigVersion",
    "config_path_for",
    "decode_config",
    "load_config",
]
