"""Build configuration for buildgraph."""

from rules.config import (
    BuildConfig,
    ConfigError,
    ModuleDef,
    PluginDef,
    RepositoryDef,
    load_config,
    resolve_output_dir,
)

__all__ = [
    "BuildConfig",
    "ConfigError",
    "ModuleDef",
    "PluginDef",
    "RepositoryDef",
    "load_config",
    "resolve_output_dir",
]
