"""Errors raised while declaring or evaluating a build graph."""

from __future__ import annotations


class BuildGraphError(Exception):
    """Base class for build graph declaration and evaluation errors."""


class InvalidModuleName(BuildGraphError):
    """Raised when a module name is empty or malformed."""


class DuplicateModuleName(BuildGraphError):
    """Raised when a module name is registered more than once."""

    def __init__(self, name: str) -> None:
        self.name = name
        super().__init__(f"Module '{name}' is already registered")


class UnknownRepository(BuildGraphError):
    """Raised when a module references a repository that was never declared."""

    def __init__(self, name: str, module: str | None = None) -> None:
        self.name = name
        self.module = module
        where = f" (referenced by module '{module}')" if module else ""
        super().__init__(f"Repository '{name}' was never declared{where}")


class CyclicAggregation(BuildGraphError):
    """Raised when aggregation would make a module depend on itself."""


class DuplicatePluginId(BuildGraphError):
    """Raised when the same plugin id is declared twice."""

    def __init__(self, plugin_id: str) -> None:
        self.plugin_id = plugin_id
        super().__init__(f"Plugin '{plugin_id}' is already declared")


__all__ = [
    "BuildGraphError",
    "CyclicAggregation",
    "DuplicateModuleName",
    "DuplicatePluginId",
    "InvalidModuleName",
    "UnknownRepository",
]
