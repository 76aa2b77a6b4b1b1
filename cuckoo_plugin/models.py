"""Core data models shared across cuckoo-plugin components."""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum
from pathlib import Path
from typing import Any, Dict, List, Tuple, Union


class ModuleKind(str, Enum):
    """Kind of a source module as reported by the host build graph."""

    GENERIC = "generic"
    EXECUTABLE = "executable"
    TEST = "test"
    MACRO = "macro"
    SNIPPET = "snippet"


class SourceFileType(str, Enum):
    """Role of a file inside a source module."""

    SOURCE = "source"
    RESOURCE = "resource"
    HEADER = "header"
    UNKNOWN = "unknown"


@dataclass(frozen=True)
class SourceFile:
    """A single file belonging to a source module."""

    path: Path
    type: SourceFileType = SourceFileType.SOURCE


@dataclass(frozen=True)
class ModuleDescriptor:
    """Read-only view of a dependency module handed to the core."""

    name: str
    kind: ModuleKind = ModuleKind.GENERIC
    source_files: Tuple[SourceFile, ...] = ()


@dataclass(frozen=True)
class Target:
    """A build target from the host graph.

    ``is_source_module`` is False for binary and system library targets; those
    never produce a :class:`ModuleDescriptor`.
    """

    name: str
    module_name: str
    kind: ModuleKind = ModuleKind.GENERIC
    is_source_module: bool = True
    source_files: Tuple[SourceFile, ...] = ()
    dependencies: Tuple["Dependency", ...] = ()

    def descriptor(self) -> ModuleDescriptor:
        return ModuleDescriptor(
            name=self.module_name,
            kind=self.kind,
            source_files=self.source_files,
        )


@dataclass(frozen=True)
class Product:
    """A library product exposing one or more targets."""

    name: str
    targets: Tuple[Target, ...] = ()


@dataclass(frozen=True)
class ProductDependency:
    product: Product


@dataclass(frozen=True)
class TargetDependency:
    target: Target


Dependency = Union[ProductDependency, TargetDependency]


@dataclass(frozen=True)
class CommandPlan:
    """Fully assembled generator invocation handed back to the host."""

    display_name: str
    executable: Path
    arguments: Tuple[str, ...]
    input_files: Tuple[Path, ...]
    output_files: Tuple[Path, ...]

    def command_line(self) -> List[str]:
        return [str(self.executable), *self.arguments]

    def to_dict(self) -> Dict[str, Any]:
        return {
            "display_name": self.display_name,
            "executable": str(self.executable),
            "arguments": list(self.arguments),
            "input_files": [str(path) for path in self.input_files],
            "output_files": [str(path) for path in self.output_files],
        }
