"""Lookup of external tool executables by logical name."""

from __future__ import annotations

import os
import re
import shutil
from pathlib import Path
from typing import Callable, Mapping, Optional

GENERATOR_TOOL_NAME = "CuckooGenerator"
ENV_PREFIX = "CUCKOO_TOOL_"

_ENV_SANITIZER = re.compile(r"[^A-Za-z0-9]")


class ToolResolutionError(RuntimeError):
    """Raised when a tool executable cannot be located."""


class ToolLocator:
    """Resolves tools from explicit overrides, the environment, then ``PATH``."""

    def __init__(
        self,
        overrides: Mapping[str, str | Path] | None = None,
        *,
        environ: Mapping[str, str] | None = None,
        which: Callable[[str], Optional[str]] | None = None,
    ) -> None:
        self._overrides = {name: Path(path) for name, path in (overrides or {}).items()}
        self._environ = environ if environ is not None else os.environ
        self._which = which or shutil.which

    @staticmethod
    def env_key(name: str) -> str:
        return ENV_PREFIX + _ENV_SANITIZER.sub("_", name).upper()

    def path(self, name: str) -> Path:
        """Return the executable path for ``name`` or raise :class:`ToolResolutionError`."""
        override = self._overrides.get(name)
        if override is not None:
            return self._ensure_executable(name, override, origin="override")

        env_value = self._environ.get(self.env_key(name))
        if env_value:
            return self._ensure_executable(name, Path(env_value), origin=self.env_key(name))

        found = self._which(name)
        if found:
            return Path(found)
        raise ToolResolutionError(
            f"Unable to locate tool '{name}'. Put it on PATH, set {self.env_key(name)}, "
            f"or pass --tool {name}=PATH."
        )

    @staticmethod
    def _ensure_executable(name: str, path: Path, *, origin: str) -> Path:
        if not path.is_file():
            raise ToolResolutionError(f"Tool '{name}' from {origin} does not exist: {path}")
        if not os.access(path, os.X_OK):
            raise ToolResolutionError(f"Tool '{name}' from {origin} is not executable: {path}")
        return path


def parse_tool_overrides(values: list[str] | None) -> dict[str, str]:
    """Parse ``NAME=PATH`` pairs given on the command line."""
    overrides: dict[str, str] = {}
    for value in values or []:
        name, sep, path = value.partition("=")
        if not sep or not name or not path:
            raise ValueError(f"Expected NAME=PATH, got '{value}'")
        overrides[name] = path
    return overrides


__all__ = [
    "ENV_PREFIX",
    "GENERATOR_TOOL_NAME",
    "ToolLocator",
    "ToolResolutionError",
    "parse_tool_overrides",
]
