"""Module registry and two-phase evaluation of a multi-module build."""

from __future__ import annotations

from dataclasses import replace
from typing import TYPE_CHECKING

from graph.algos import build_dependency_graph, find_cycles
from logs import get_logger
from project.aggregation import AggregationRule
from project.errors import CyclicAggregation, DuplicateModuleName, InvalidModuleName
from project.models import (
    DEFAULT_CONFIGURATION,
    BuildGraph,
    Module,
    PluginDeclaration,
    RepositoryReference,
    SharedConfiguration,
)
from project.plugins import PluginDeclarations
from project.repositories import RepositorySource
from utils import normalize_module_name

if TYPE_CHECKING:
    from collections.abc import Iterable, Iterator

logger = get_logger(__name__)


def _normalize(name: str) -> str:
    try:
        return normalize_module_name(name)
    except ValueError as exc:
        raise InvalidModuleName(str(exc)) from exc


class ProjectRegistry:
    """Declared modules of a build plus the metadata shared by all of them.

    Declaration and evaluation are separate phases: ``register_module``,
    ``declare_repository`` and ``declare_plugin`` only record declarations;
    ``evaluate`` applies the shared metadata and derives the dependency
    edges from whatever is registered at that moment.
    """

    def __init__(
        self,
        root: str,
        shared: SharedConfiguration | None = None,
        *,
        configuration: str = DEFAULT_CONFIGURATION,
    ) -> None:
        self.root_name = _normalize(root)
        self._shared = shared or SharedConfiguration()
        self._declared: dict[str, tuple[str, ...]] = {}
        self.repositories = RepositorySource()
        self.plugins = PluginDeclarations()
        self.rule = AggregationRule(configuration)

        for repository in self._shared.repositories:
            self.repositories.declare_repository(repository)

    @property
    def shared(self) -> SharedConfiguration:
        return self._shared

    def broadcast_metadata(self, group: str, version: str) -> None:
        """Set group and version for every module, present and future."""
        self._shared = replace(self._shared, group=group, version=version)
        logger.debug("broadcast group=%s version=%s", group, version)

    def declare_repository(
        self, name: str, url: str | None = None
    ) -> RepositoryReference:
        return self.repositories.declare_repository(name, url)

    def declare_plugin(
        self, plugin_id: str, version: str | None = None, *, apply: bool = True
    ) -> PluginDeclaration:
        return self.plugins.declare_plugin(plugin_id, version, apply=apply)

    def register_module(
        self, name: str, repositories: Iterable[str] = ()
    ) -> Module:
        """Register a submodule.

        ``repositories`` names extra repositories the module refers to; they
        are checked against the declared repositories at evaluation time.

        The returned module reflects the metadata known now; ``all_modules``
        always reports the current metadata.

        Raises:
            InvalidModuleName: If the name is empty or malformed.
            CyclicAggregation: If the name is the root's own name.
            DuplicateModuleName: If the name is already registered.
        """
        canonical = _normalize(name)
        if canonical == self.root_name:
            msg = f"Root module '{canonical}' cannot be registered as its own submodule"
            raise CyclicAggregation(msg)
        if canonical in self._declared:
            raise DuplicateModuleName(canonical)

        self._declared[canonical] = tuple(dict.fromkeys(repositories))
        logger.debug("registered module %s", canonical)
        return self._materialize(canonical)

    def remove_module(self, name: str) -> None:
        canonical = _normalize(name)
        if canonical not in self._declared:
            msg = f"Module '{canonical}' is not registered"
            raise KeyError(msg)
        del self._declared[canonical]

    def root(self) -> Module:
        return self._materialize(self.root_name, is_root=True)

    def submodules(self) -> tuple[Module, ...]:
        return tuple(self._materialize(name) for name in self._declared)

    def all_modules(self) -> tuple[Module, ...]:
        """Return the root followed by submodules in registration order."""
        return (self.root(), *self.submodules())

    def _materialize(self, name: str, *, is_root: bool = False) -> Module:
        extra = () if is_root else self._declared[name]
        repositories = tuple(dict.fromkeys((*self.repositories.names(), *extra)))
        return Module(
            name=name,
            group=self._shared.group,
            version=self._shared.version,
            repositories=repositories,
            is_root=is_root,
        )

    def evaluate(self) -> BuildGraph:
        """Evaluate the declarations into a build graph.

        Raises:
            UnknownRepository: If a module refers to an undeclared repository.
            CyclicAggregation: If the aggregated graph contains a cycle.
        """
        modules = self.all_modules()
        root, submodules = modules[0], modules[1:]

        for module in modules:
            self.repositories.resolve(module.repositories, module=module.name)

        edges = self.rule.aggregate(root, submodules)

        graph = build_dependency_graph(
            ((edge.source, edge.target) for edge in edges),
            nodes=(module.name for module in modules),
        )
        cycles = find_cycles(graph)
        if cycles:
            msg = f"Aggregation produced dependency cycles: {cycles}"
            raise CyclicAggregation(msg)

        logger.info(
            "evaluated %s: %d modules, %d edges",
            root.name,
            len(modules),
            len(edges),
        )
        return BuildGraph(
            root=root,
            modules=modules,
            repositories=self.repositories.all(),
            plugins=self.plugins.all(),
            edges=edges,
            configuration=self.rule.configuration,
        )

    def __contains__(self, name: object) -> bool:
        if not isinstance(name, str):
            return False
        try:
            canonical = normalize_module_name(name)
        except ValueError:
            return False
        return canonical == self.root_name or canonical in self._declared

    def __iter__(self) -> Iterator[Module]:
        return iter(self.all_modules())

    def __len__(self) -> int:
        return len(self._declared) + 1


__all__ = ["ProjectRegistry"]
