"""Mock-generation planning for Cuckoo build targets."""

from .arguments import build_arguments, sort_input_paths
from .config import ConfigError, ConfigFile, ConfigVersion, load_config
from .models import CommandPlan, ModuleDescriptor, ModuleKind, SourceFile, SourceFileType
from .orchestrator import Orchestrator, PluginContext
from .resolver import filter_eligible, resolve_inputs
from .tools import ToolLocator, ToolResolutionError
from .validators import MissingInputFilesError, validate_file_existence

__all__ = [
    "CommandPlan",
    "ConfigError",
    "ConfigFile",
    "ConfigVersion",
    "MissingInputFilesError",
    "ModuleDescriptor",
    "ModuleKind",
    "Orchestrator",
    "PluginContext",
    "SourceFile",
    "SourceFileType",
    "ToolLocator",
    "ToolResolutionError",
    "build_arguments",
    "filter_eligible",
    "load_config",
    "resolve_inputs",
    "sort_input_paths",
    "validate_file_existence",
]
