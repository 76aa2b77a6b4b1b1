"""Dependency filtering and generator input resolution."""

from __future__ import annotations

from pathlib import Path, PurePath
from typing import FrozenSet, Iterable, List, Sequence

from .config import ConfigFile
from .models import ModuleDescriptor, ModuleKind, SourceFileType

SUPPORT_MODULE_NAME = "Cuckoo"


def is_eligible(descriptor: ModuleDescriptor) -> bool:
    """Return True for generic modules other than the generator's support library."""
    return descriptor.kind == ModuleKind.GENERIC and descriptor.name != SUPPORT_MODULE_NAME


def filter_eligible(descriptors: Iterable[ModuleDescriptor]) -> List[ModuleDescriptor]:
    """Keep eligible descriptors in the order the host declared them."""
    return [descriptor for descriptor in descriptors if is_eligible(descriptor)]


def _under_root(package_dir: Path, entry: str) -> Path:
    relative = PurePath(entry)
    # Anchored entries are joined under the root, never substituted for it.
    if relative.anchor:
        relative = relative.relative_to(relative.anchor)
    return package_dir / relative


def testable_module_names(dependencies: Sequence[ModuleDescriptor]) -> List[str]:
    return [descriptor.name for descriptor in dependencies]


def resolve_inputs(
    config: ConfigFile,
    dependencies: Sequence[ModuleDescriptor],
    package_dir: Path,
) -> FrozenSet[Path]:
    """Return the set of files the generator should read.

    A non-empty ``inputFiles`` list in the configuration wins outright and the
    dependency sources are ignored. Otherwise every ``source`` file of the
    eligible dependencies is used.
    """
    if config.input_files:
        return frozenset(_under_root(package_dir, entry) for entry in config.input_files)

    return frozenset(
        Path(source.path)
        for descriptor in dependencies
        for source in descriptor.source_files
        if source.type == SourceFileType.SOURCE
    )


__all__ = [
    "SUPPORT_MODULE_NAME",
    "filter_eligible",
    "is_eligible",
    "resolve_inputs",
    "testable_module_names",
]
