"""Host build-graph loading and dependency flattening.

The host describes its targets and products in a YAML document::

    targets:
      - name: MyApp
        path: Sources/MyApp
        sources:
          - Models.swift
          - path: Resources/seed.json
            type: resource
        dependencies:
          - target: Networking
          - product: Cuckoo
      - name: Vendor
        type: binary
    products:
      - name: Cuckoo
        targets: [Cuckoo]

Target dependencies are either product or target references. They are
flattened into :class:`ModuleDescriptor` values before any resolution logic
runs, and non-source targets (``binary`` or ``system``) drop out at that point.
"""

from __future__ import annotations

import re
from dataclasses import dataclass, field
from pathlib import Path
from typing import Any, Dict, Iterable, List, Mapping, Set

import yaml

from .logging import get_logger
from .models import (
    Dependency,
    ModuleDescriptor,
    ModuleKind,
    Product,
    ProductDependency,
    SourceFile,
    SourceFileType,
    Target,
    TargetDependency,
)

DEFAULT_GRAPH_FILE = "build-graph.yml"

_SOURCE_MODULE_TYPES = {"source"}
_NON_SOURCE_MODULE_TYPES = {"binary", "system"}
_NON_IDENTIFIER = re.compile(r"[^A-Za-z0-9_]")

logger = get_logger("graph")


class GraphError(RuntimeError):
    """Raised when the host build graph is invalid or incomplete."""


@dataclass
class BuildGraph:
    """Targets and products known to the host, keyed by name."""

    targets: Dict[str, Target] = field(default_factory=dict)
    products: Dict[str, Product] = field(default_factory=dict)

    def target(self, name: str) -> Target:
        try:
            return self.targets[name]
        except KeyError:
            known = ", ".join(sorted(self.targets)) or "none"
            raise GraphError(f"Unknown target '{name}' (known targets: {known})") from None


def module_name_for(target_name: str) -> str:
    """Return the importable module name for a target name."""
    name = _NON_IDENTIFIER.sub("_", target_name)
    if name and name[0].isdigit():
        name = f"_{name}"
    return name


def flatten_dependencies(dependencies: Iterable[Dependency]) -> List[ModuleDescriptor]:
    """Expand product and target references into source-module descriptors.

    Order follows the declared dependency order, and a product contributes its
    targets in the order the product lists them.
    """
    targets: List[Target] = []
    for dependency in dependencies:
        if isinstance(dependency, ProductDependency):
            targets.extend(dependency.product.targets)
        elif isinstance(dependency, TargetDependency):
            targets.append(dependency.target)
        else:
            logger.debug("Ignoring unsupported dependency %r", dependency)
    return [target.descriptor() for target in targets if target.is_source_module]


def load_build_graph(path: Path, package_dir: Path | None = None) -> BuildGraph:
    """Load a build graph document from disk."""
    try:
        text = path.read_text(encoding="utf-8")
    except FileNotFoundError as exc:
        raise GraphError(f"Build graph not found: {path}") from exc
    try:
        data = yaml.safe_load(text)
    except yaml.YAMLError as exc:
        raise GraphError(f"Failed to parse {path.name}: {exc}") from exc
    base_dir = package_dir if package_dir is not None else path.parent
    return parse_build_graph(data or {}, base_dir.resolve())


def parse_build_graph(data: Any, package_dir: Path) -> BuildGraph:
    """Build a :class:`BuildGraph` from an already-decoded mapping."""
    if not isinstance(data, Mapping):
        raise GraphError("Build graph must contain a mapping at the root")

    raw_targets = _as_mapping_list(data.get("targets"), "targets")
    raw_products = _as_mapping_list(data.get("products"), "products")

    target_specs: Dict[str, Mapping[str, Any]] = {}
    for spec in raw_targets:
        name = _require_str(spec, "name", "target")
        if name in target_specs:
            raise GraphError(f"Duplicate target '{name}'")
        target_specs[name] = spec

    product_specs: Dict[str, Mapping[str, Any]] = {}
    for spec in raw_products:
        name = _require_str(spec, "name", "product")
        if name in product_specs:
            raise GraphError(f"Duplicate product '{name}'")
        product_specs[name] = spec

    builder = _GraphBuilder(target_specs, product_specs, package_dir)
    graph = BuildGraph()
    for name in target_specs:
        graph.targets[name] = builder.target(name)
    for name in product_specs:
        graph.products[name] = builder.product(name)
    logger.debug(
        "Loaded build graph with %d targets and %d products",
        len(graph.targets),
        len(graph.products),
    )
    return graph


class _GraphBuilder:
    """Materialises frozen targets bottom-up, rejecting dependency cycles."""

    def __init__(
        self,
        target_specs: Mapping[str, Mapping[str, Any]],
        product_specs: Mapping[str, Mapping[str, Any]],
        package_dir: Path,
    ) -> None:
        self._target_specs = target_specs
        self._product_specs = product_specs
        self._package_dir = package_dir
        self._targets: Dict[str, Target] = {}
        self._products: Dict[str, Product] = {}
        self._in_progress: Set[str] = set()

    def target(self, name: str) -> Target:
        if name in self._targets:
            return self._targets[name]
        spec = self._target_specs.get(name)
        if spec is None:
            raise GraphError(f"Unknown target '{name}'")
        if name in self._in_progress:
            raise GraphError(f"Dependency cycle detected at target '{name}'")
        self._in_progress.add(name)
        try:
            target = self._build_target(name, spec)
        finally:
            self._in_progress.discard(name)
        self._targets[name] = target
        return target

    def product(self, name: str) -> Product:
        if name in self._products:
            return self._products[name]
        spec = self._product_specs.get(name)
        if spec is None:
            raise GraphError(f"Unknown product '{name}'")
        target_names = _as_str_list(spec.get("targets"), f"product '{name}' targets")
        product = Product(name=name, targets=tuple(self.target(t) for t in target_names))
        self._products[name] = product
        return product

    def _build_target(self, name: str, spec: Mapping[str, Any]) -> Target:
        module_type = str(spec.get("type", "source")).lower()
        if module_type not in _SOURCE_MODULE_TYPES | _NON_SOURCE_MODULE_TYPES:
            raise GraphError(f"Target '{name}' has unknown type '{module_type}'")

        kind_value = str(spec.get("kind", ModuleKind.GENERIC.value)).lower()
        try:
            kind = ModuleKind(kind_value)
        except ValueError:
            raise GraphError(f"Target '{name}' has unknown kind '{kind_value}'") from None

        module_name = spec.get("module_name")
        if module_name is not None and not isinstance(module_name, str):
            raise GraphError(f"Target '{name}': 'module_name' must be a string")

        target_dir = self._package_dir / str(spec.get("path", ""))
        return Target(
            name=name,
            module_name=module_name or module_name_for(name),
            kind=kind,
            is_source_module=module_type in _SOURCE_MODULE_TYPES,
            source_files=tuple(self._source_files(name, spec.get("sources"), target_dir)),
            dependencies=tuple(self._dependencies(name, spec.get("dependencies"))),
        )

    def _source_files(self, name: str, value: Any, target_dir: Path) -> Iterable[SourceFile]:
        if value is None:
            return
        if not isinstance(value, list):
            raise GraphError(f"Target '{name}': 'sources' must be a list")
        for entry in value:
            if isinstance(entry, str):
                yield SourceFile(path=target_dir / entry)
                continue
            if not isinstance(entry, Mapping):
                raise GraphError(f"Target '{name}': invalid source entry {entry!r}")
            path = _require_str(entry, "path", f"source of target '{name}'")
            type_value = str(entry.get("type", SourceFileType.SOURCE.value)).lower()
            try:
                file_type = SourceFileType(type_value)
            except ValueError:
                raise GraphError(
                    f"Target '{name}': unknown source type '{type_value}' for {path}"
                ) from None
            yield SourceFile(path=target_dir / path, type=file_type)

    def _dependencies(self, name: str, value: Any) -> Iterable[Dependency]:
        if value is None:
            return
        if not isinstance(value, list):
            raise GraphError(f"Target '{name}': 'dependencies' must be a list")
        for entry in value:
            if isinstance(entry, str):
                yield TargetDependency(target=self.target(entry))
            elif isinstance(entry, Mapping) and "target" in entry:
                yield TargetDependency(target=self.target(str(entry["target"])))
            elif isinstance(entry, Mapping) and "product" in entry:
                yield ProductDependency(product=self.product(str(entry["product"])))
            else:
                raise GraphError(f"Target '{name}': invalid dependency entry {entry!r}")


def _as_mapping_list(value: Any, label: str) -> List[Mapping[str, Any]]:
    if value is None:
        return []
    if not isinstance(value, list) or not all(isinstance(item, Mapping) for item in value):
        raise GraphError(f"'{label}' must be a list of mappings")
    return list(value)


def _as_str_list(value: Any, label: str) -> List[str]:
    if value is None:
        return []
    if not isinstance(value, list) or not all(isinstance(item, str) for item in value):
        raise GraphError(f"{label} must be a list of strings")
    return list(value)


def _require_str(spec: Mapping[str, Any], key: str, label: str) -> str:
    value = spec.get(key)
    if not isinstance(value, str) or not value:
        raise GraphError(f"Every {label} needs a non-empty '{key}'")
    return value


__all__ = [
    "DEFAULT_GRAPH_FILE",
    "BuildGraph",
    "GraphError",
    "flatten_dependencies",
    "load_build_graph",
    "module_name_for",
    "parse_build_graph",
]
