"""Build-command planning for a single target evaluation."""

from __future__ import annotations

from dataclasses import dataclass
from pathlib import Path
from typing import Callable, List, Mapping

from .arguments import build_arguments, sort_input_paths
from .config import ConfigFile, config_path_for, load_config
from .graph import DEFAULT_GRAPH_FILE, flatten_dependencies, load_build_graph
from .logging import get_logger
from .models import CommandPlan, Target
from .resolver import filter_eligible, resolve_inputs, testable_module_names
from .tools import GENERATOR_TOOL_NAME, ToolLocator
from .validators import validate_file_existence

OUTPUT_FILE_NAME = "GeneratedMocks.swift"
DISPLAY_NAME = f"Run {GENERATOR_TOOL_NAME}"


@dataclass(frozen=True)
class PluginContext:
    """Host-provided facts for one evaluation."""

    package_dir: Path
    work_dir: Path
    tool_locator: ToolLocator

    def tool_path(self, name: str) -> Path:
        return self.tool_locator.path(name)


def default_work_dir(package_dir: Path, target_name: str) -> Path:
    return package_dir / ".build" / "plugins" / "cuckoo" / target_name


class Orchestrator:
    """Turns a target and its configuration into generator build commands."""

    def __init__(self, config_loader: Callable[[Path], ConfigFile] = load_config) -> None:
        self._config_loader = config_loader
        self.logger = get_logger("orchestrator")

    def create_build_commands(self, context: PluginContext, target: Target) -> List[CommandPlan]:
        """Resolve, validate and assemble the generator command for ``target``.

        Raises ``ConfigError`` for an undecodable configuration,
        ``MissingInputFilesError`` when resolved inputs are absent and
        ``ToolResolutionError`` when the generator cannot be found.
        """
        self.logger.info("Planning mock generation for target %s", target.name)
        config_path = config_path_for(context.package_dir)
        config = self._config_loader(config_path)

        dependencies = filter_eligible(flatten_dependencies(target.dependencies))
        testable_modules = testable_module_names(dependencies)
        self.logger.debug("Testable modules: %s", ", ".join(testable_modules) or "(none)")

        input_files = resolve_inputs(config, dependencies, context.package_dir)
        if config.input_files:
            self.logger.debug("Using %d explicit input files from %s", len(input_files), config_path.name)
        else:
            self.logger.debug("Collected %d input files from dependencies", len(input_files))
        validate_file_existence(input_files)

        output = context.work_dir / OUTPUT_FILE_NAME
        arguments = build_arguments(
            output=output,
            input_files=input_files,
            testable_modules=testable_modules,
            options=config.effective_options,
        )

        plan = CommandPlan(
            display_name=DISPLAY_NAME,
            executable=context.tool_path(GENERATOR_TOOL_NAME),
            arguments=tuple(arguments),
            input_files=(config_path, *sort_input_paths(input_files)),
            output_files=(output,),
        )
        return [plan]

    def plan_target(
        self,
        package_dir: str | Path,
        target_name: str,
        *,
        graph_path: str | Path | None = None,
        work_dir: str | Path | None = None,
        tools: Mapping[str, str] | None = None,
    ) -> List[CommandPlan]:
        """Load the host graph for ``package_dir`` and plan ``target_name``."""
        package = Path(package_dir).expanduser().resolve()
        graph_file = Path(graph_path) if graph_path else package / DEFAULT_GRAPH_FILE
        if not graph_file.is_absolute():
            graph_file = package / graph_file
        graph = load_build_graph(graph_file, package)
        target = graph.target(target_name)

        if work_dir is None:
            resolved_work_dir = default_work_dir(package, target.name)
        else:
            resolved_work_dir = Path(work_dir)
            if not resolved_work_dir.is_absolute():
                resolved_work_dir = package / resolved_work_dir

        context = PluginContext(
            package_dir=package,
            work_dir=resolved_work_dir,
            tool_locator=ToolLocator(tools),
        )
        return self.create_build_commands(context, target)


__all__ = [
    "DISPLAY_NAME",
    "OUTPUT_FILE_NAME",
    "Orchestrator",
    "PluginContext",
    "default_work_dir",
]
