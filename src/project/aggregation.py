"""Root aggregation: the root artifact depends on every subproject artifact."""

from __future__ import annotations

from typing import TYPE_CHECKING

from project.errors import CyclicAggregation
from project.models import DEFAULT_CONFIGURATION, DependencyEdge, Module

if TYPE_CHECKING:
    from collections.abc import Iterable


def _module_name(module: Module | str) -> str:
    return module.name if isinstance(module, Module) else module


class AggregationRule:
    """Derive root -> submodule edges for a single configuration.

    The rule holds no edge state; every call recomputes the edges from the
    submodules it is given.
    """

    def __init__(self, configuration: str = DEFAULT_CONFIGURATION) -> None:
        self.configuration = configuration

    def aggregate(
        self,
        root: Module | str,
        submodules: Iterable[Module | str],
    ) -> frozenset[DependencyEdge]:
        """Return one edge from ``root`` to each submodule.

        Raises:
            CyclicAggregation: If ``root`` is listed among its own submodules.
        """
        root_name = _module_name(root)
        edges: set[DependencyEdge] = set()
        for submodule in submodules:
            target = _module_name(submodule)
            if target == root_name:
                msg = f"Root module '{root_name}' cannot aggregate itself"
                raise CyclicAggregation(msg)
            edges.add(
                DependencyEdge(
                    source=root_name,
                    target=target,
                    configuration=self.configuration,
                )
            )
        return frozenset(edges)


__all__ = ["AggregationRule"]
