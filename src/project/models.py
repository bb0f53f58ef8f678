"""Domain types for a declared multi-module build.

These are immutable value objects produced by the registry; the registry
itself holds the mutable declaration state.
"""

from __future__ import annotations

from dataclasses import dataclass, field

from utils import module_path

DEFAULT_VERSION = "unspecified"
DEFAULT_CONFIGURATION = "archives"


@dataclass(frozen=True)
class SharedConfiguration:
    """Metadata applied to every module of a build.

    Passed once when the registry is constructed; ``repositories`` lists
    repository names declared for all modules.
    """

    group: str = ""
    version: str = DEFAULT_VERSION
    repositories: tuple[str, ...] = ()


@dataclass(frozen=True)
class Module:
    """A root project or subproject with its effective metadata."""

    name: str
    group: str = ""
    version: str = DEFAULT_VERSION
    repositories: tuple[str, ...] = ()
    is_root: bool = False

    @property
    def path(self) -> str:
        return module_path(self.name, is_root=self.is_root)


@dataclass(frozen=True)
class RepositoryReference:
    """A named package repository, resolved later by the build engine."""

    name: str
    url: str | None = None


@dataclass(frozen=True, order=True)
class DependencyEdge:
    """The root's ``configuration`` depends on ``target``'s artifact."""

    source: str
    target: str
    configuration: str = DEFAULT_CONFIGURATION


@dataclass(frozen=True)
class PluginDeclaration:
    """A plugin declared at the root; ``apply=False`` only makes it available."""

    id: str
    version: str | None = None
    apply: bool = True


@dataclass(frozen=True)
class BuildGraph:
    """Result of evaluating a registry, handed to the external build engine."""

    root: Module
    modules: tuple[Module, ...]
    repositories: tuple[RepositoryReference, ...] = ()
    plugins: tuple[PluginDeclaration, ...] = ()
    edges: frozenset[DependencyEdge] = field(default_factory=frozenset)
    configuration: str = DEFAULT_CONFIGURATION

    @property
    def submodules(self) -> tuple[Module, ...]:
        return tuple(module for module in self.modules if not module.is_root)

    @property
    def applied_plugins(self) -> tuple[PluginDeclaration, ...]:
        return tuple(plugin for plugin in self.plugins if plugin.apply)

    def sorted_edges(self) -> list[DependencyEdge]:
        return sorted(self.edges)

    def to_adjacency(self) -> dict[str, set[str]]:
        """Return ``module name -> dependency names`` covering every module."""
        graph: dict[str, set[str]] = {module.name: set() for module in self.modules}
        for edge in self.edges:
            graph.setdefault(edge.source, set()).add(edge.target)
            graph.setdefault(edge.target, set())
        return graph


__all__ = [
    "DEFAULT_CONFIGURATION",
    "DEFAULT_VERSION",
    "BuildGraph",
    "DependencyEdge",
    "Module",
    "PluginDeclaration",
    "RepositoryReference",
    "SharedConfiguration",
]
