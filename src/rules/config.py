from __future__ import annotations

from pathlib import Path
from typing import Any

import tomllib
from pydantic import BaseModel, ConfigDict, Field, field_validator

from project.models import DEFAULT_CONFIGURATION, DEFAULT_VERSION

CONFIG_FILENAME = "buildgraph.toml"


class RepositoryDef(BaseModel):
    """A repository declared for every module."""

    model_config = ConfigDict(extra="forbid")

    name: str = Field(description="Repository name (e.g., 'jcenter')")
    url: str | None = Field(
        default=None,
        description="Repository URL (default: canonical URL for well-known names)",
    )


class PluginDef(BaseModel):
    """A plugin declared at the root."""

    model_config = ConfigDict(extra="forbid")

    id: str = Field(description="Plugin id (e.g., 'org.jetbrains.kotlin.jvm')")
    version: str | None = Field(default=None, description="Plugin version")
    apply: bool = Field(
        default=True,
        description="Apply to the root (false only makes it available)",
    )


class ModuleDef(BaseModel):
    """A submodule declaration."""

    model_config = ConfigDict(extra="forbid")

    name: str = Field(description="Module name, nested modules use ':'")
    repositories: list[str] = Field(
        default_factory=list,
        description="Declared repositories this module refers to",
    )


class BuildConfig(BaseModel):
    """Configuration for a multi-module build."""

    model_config = ConfigDict(extra="forbid")

    root: str | None = Field(
        default=None,
        description="Root module name (default: build directory name)",
    )
    group: str = Field(default="", description="Group shared by all modules")
    version: str = Field(
        default=DEFAULT_VERSION,
        description="Version shared by all modules",
    )
    configuration: str = Field(
        default=DEFAULT_CONFIGURATION,
        description="Root configuration that aggregates submodule artifacts",
    )
    output_dir: str = Field(
        default=".buildgraph",
        description="Output directory for generated artifacts",
    )
    repositories: list[RepositoryDef] = Field(
        default_factory=list,
        description="Repositories attached to every module",
    )
    plugins: list[PluginDef] = Field(
        default_factory=list,
        description="Plugins declared at the root",
    )
    modules: list[ModuleDef] = Field(
        default_factory=list,
        description="Submodules in declaration order",
    )

    @field_validator("modules", mode="before")
    @classmethod
    def validate_modules(cls, v: Any) -> Any:
        """Accept bare module names alongside full module tables.

        Runs in `mode="before"` so ``modules = ["core", "app"]`` can be
        written without one table per module.
        """
        if v is None:
            return []

        if not isinstance(v, list):
            msg = "modules must be a list of names or module tables"
            raise ValueError(msg)

        return [{"name": item} if isinstance(item, str) else item for item in v]

    @field_validator("repositories", mode="before")
    @classmethod
    def validate_repositories(cls, v: Any) -> Any:
        """Accept bare repository names alongside repository tables."""
        if v is None:
            return []

        if not isinstance(v, list):
            msg = "repositories must be a list of names or repository tables"
            raise ValueError(msg)

        return [{"name": item} if isinstance(item, str) else item for item in v]

    def root_name(self, build_root: Path) -> str:
        """Return the configured root name or the build directory's name."""
        return self.root or build_root.resolve().name


class ConfigError(Exception):
    """Raised when config file exists but cannot be parsed."""


def resolve_output_dir(root: Path, output_dir: str) -> Path:
    """Resolve a config-provided output_dir safely within the build root.

    The config output_dir must be a non-empty relative path that remains
    within the build root after resolution. Absolute paths and paths
    that escape the root are rejected.
    """
    if not output_dir:
        msg = "output_dir must be a non-empty relative path"
        raise ConfigError(msg)

    if output_dir.startswith("~"):
        msg = "output_dir must be a relative path within the build root"
        raise ConfigError(msg)

    output_path = Path(output_dir)
    if output_path.is_absolute():
        msg = "output_dir must be a relative path within the build root"
        raise ConfigError(msg)

    try:
        resolved_root = root.resolve()
        resolved_output = (resolved_root / output_path).resolve()
    except OSError as exc:
        msg = f"Failed to resolve output_dir '{output_dir}': {exc}"
        raise ConfigError(msg) from exc

    try:
        resolved_output.relative_to(resolved_root)
    except ValueError as exc:
        msg = f"output_dir '{output_dir}' escapes the build root"
        raise ConfigError(msg) from exc

    return resolved_output


def load_config(root: Path) -> BuildConfig:
    """Load configuration from buildgraph.toml if it exists."""
    config_path = Path(root) / CONFIG_FILENAME

    if not config_path.is_file():
        return BuildConfig()

    try:
        with config_path.open("rb") as f:
            data = tomllib.load(f)
    except tomllib.TOMLDecodeError as e:
        msg = f"Invalid TOML in {config_path}: {e}"
        raise ConfigError(msg) from e

    try:
        return BuildConfig.model_validate(data)
    except Exception as e:
        msg = f"Invalid config in {config_path}: {e}"
        raise ConfigError(msg) from e
