"""Build a registry from configuration and evaluate it."""

from __future__ import annotations

from typing import TYPE_CHECKING

from project.models import SharedConfiguration
from project.registry import ProjectRegistry

if TYPE_CHECKING:
    from pathlib import Path

    from project.models import BuildGraph
    from rules.config import BuildConfig


def build_registry(config: BuildConfig, build_root: Path) -> ProjectRegistry:
    """Declare everything in ``config`` on a fresh registry."""
    registry = ProjectRegistry(
        config.root_name(build_root),
        SharedConfiguration(group=config.group, version=config.version),
        configuration=config.configuration,
    )
    for repository in config.repositories:
        registry.declare_repository(repository.name, repository.url)
    for plugin in config.plugins:
        registry.declare_plugin(plugin.id, plugin.version, apply=plugin.apply)
    for module in config.modules:
        registry.register_module(module.name, module.repositories)
    return registry


def evaluate_config(config: BuildConfig, build_root: Path) -> BuildGraph:
    return build_registry(config, build_root).evaluate()


__all__ = ["build_registry", "evaluate_config"]
