"""Configuration management helpers."""

from .catalog import build_worklist, load_catalog, normalize_names
from .defaults import BUILTIN_CONFIG_DIR, DefaultFolder, normalize_output_dir
from .loader import ConfigLocation, ConfigResolver, document_names
from .schema import Bindings, OutputFile, UIConfig

__all__ = [
    "BUILTIN_CONFIG_DIR",
    "Bindings",
    "ConfigLocation",
    "ConfigResolver",
    "DefaultFolder",
    "OutputFile",
    "UIConfig",
    "build_worklist",
    "document_names",
    "load_catalog",
    "normalize_names",
    "normalize_output_dir",
]
