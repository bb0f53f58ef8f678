"""Graph algorithms for buildgraph."""

from __future__ import annotations

from collections import defaultdict
from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from collections.abc import Iterable


def build_dependency_graph(
    edges: Iterable[tuple[str, str]],
    nodes: Iterable[str] = (),
) -> dict[str, set[str]]:
    """Build an adjacency mapping from ``(source, target)`` pairs.

    Args:
        edges: Dependency pairs, source depends on target
        nodes: Extra nodes to include even when they have no edges

    Returns:
        Dictionary mapping every node to the set of nodes it depends on
    """
    graph: dict[str, set[str]] = defaultdict(set)
    for node in nodes:
        graph.setdefault(node, set())
    for source, target in edges:
        graph[source].add(target)
        graph.setdefault(target, set())
    return dict(graph)


class _TarjanState:
    """Mutable state container for Tarjan's SCC algorithm."""

    def __init__(self) -> None:
        self.index = 0
        self.indices: dict[str, int] = {}
        self.low_link: dict[str, int] = {}
        self.on_stack: set[str] = set()
        self.stack: list[str] = []
        self.cycles: list[list[str]] = []


def _pop_component(state: _TarjanState, head: str) -> list[str]:
    component: list[str] = []
    while True:
        node = state.stack.pop()
        state.on_stack.discard(node)
        component.append(node)
        if node == head:
            return component


def _visit(node: str, graph: dict[str, set[str]], state: _TarjanState) -> None:
    state.indices[node] = state.low_link[node] = state.index
    state.index += 1
    state.stack.append(node)
    state.on_stack.add(node)

    for neighbor in sorted(graph.get(node, ())):
        if neighbor not in state.indices:
            _visit(neighbor, graph, state)
            state.low_link[node] = min(state.low_link[node], state.low_link[neighbor])
        elif neighbor in state.on_stack:
            state.low_link[node] = min(state.low_link[node], state.indices[neighbor])

    if state.low_link[node] != state.indices[node]:
        return

    component = _pop_component(state, node)
    # A single node only counts when it depends on itself.
    if len(component) > 1 or node in graph.get(node, ()):
        state.cycles.append(sorted(component))


def find_cycles(graph: dict[str, set[str]]) -> list[list[str]]:
    """Find cycles in a directed graph using Tarjan's algorithm.

    Returns:
        Sorted list of cycles; each cycle is a sorted list of nodes.
    """
    state = _TarjanState()
    for node in sorted(graph):
        if node not in state.indices:
            _visit(node, graph, state)
    return sorted(state.cycles)


def build_order(graph: dict[str, set[str]]) -> list[str]:
    """Return nodes so that every node follows all of its dependencies.

    Ties are broken by name so the order is deterministic.

    Raises:
        ValueError: If the graph contains a cycle.
    """
    remaining = {node: set(deps) for node, deps in graph.items()}
    for deps in graph.values():
        for dep in deps:
            remaining.setdefault(dep, set())

    order: list[str] = []
    while remaining:
        ready = sorted(node for node, deps in remaining.items() if not deps)
        if not ready:
            msg = f"Graph has cycles: {find_cycles(remaining)}"
            raise ValueError(msg)
        for node in ready:
            order.append(node)
            del remaining[node]
        for deps in remaining.values():
            deps.difference_update(ready)
    return order


__all__ = ["build_dependency_graph", "build_order", "find_cycles"]
