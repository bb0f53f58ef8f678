"""Aggregation edge and graph summary generator."""

from __future__ import annotations

from typing import TYPE_CHECKING, Any

from artifacts.models.graph import GraphSummary, PluginRecord, RepositoryRecord
from artifacts.utils import _write_json
from contract.artifacts import DEPS_EDGELIST, GRAPH_SUMMARY_JSON
from graph.algos import build_order

if TYPE_CHECKING:
    from pathlib import Path

    from project.models import BuildGraph


class DepsGenerator:
    """Generator for deps.edgelist and graph_summary.json."""

    def generate(
        self,
        graph: BuildGraph,
        out_dir: Path,
    ) -> tuple[list[tuple[str, str]], dict[str, Any]]:
        out_dir.mkdir(parents=True, exist_ok=True)

        edges = graph.sorted_edges()
        pairs = [(edge.source, edge.target) for edge in edges]

        edgelist_path = out_dir / DEPS_EDGELIST
        with edgelist_path.open("w", encoding="utf-8") as f:
            for source, target in pairs:
                f.write(f"{source} -> {target}\n")

        root = graph.root
        summary = GraphSummary(
            root=root.name,
            group=root.group,
            version=root.version,
            configuration=graph.configuration,
            module_count=len(graph.modules),
            edge_count=len(edges),
            repositories=[
                RepositoryRecord(name=repo.name, url=repo.url)
                for repo in graph.repositories
            ],
            plugins=[
                PluginRecord(id=plugin.id, version=plugin.version, apply=plugin.apply)
                for plugin in graph.plugins
            ],
            applied_plugins=[plugin.id for plugin in graph.applied_plugins],
            build_order=build_order(graph.to_adjacency()),
        )
        _write_json(out_dir / GRAPH_SUMMARY_JSON, summary)

        return pairs, summary.model_dump()


__all__ = ["DepsGenerator"]
