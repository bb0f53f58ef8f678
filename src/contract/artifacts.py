"""Artifact contract definitions.

This module defines the stable boundary between buildgraph and the build
engine that consumes the evaluated graph.
"""

from __future__ import annotations

from dataclasses import dataclass

# Artifact schema version for graph artifacts.
ARTIFACT_SCHEMA_VERSION = 1

# Artifact filename constants (stable contract identifiers).
MODULES_JSONL = "modules.jsonl"
DEPS_EDGELIST = "deps.edgelist"
GRAPH_SUMMARY_JSON = "graph_summary.json"


@dataclass(frozen=True)
class ArtifactSpec:
    """Specification for a contract artifact."""

    filename: str
    format: str
    required_fields_note: str


ARTIFACT_SPECS: dict[str, ArtifactSpec] = {
    "modules": ArtifactSpec(
        filename=MODULES_JSONL,
        format="jsonl",
        required_fields_note="ModuleRecord fields required by contract.",
    ),
    "deps_edgelist": ArtifactSpec(
        filename=DEPS_EDGELIST,
        format="edgelist",
        required_fields_note="Aggregation edge pairs (root, module).",
    ),
    "graph_summary": ArtifactSpec(
        filename=GRAPH_SUMMARY_JSON,
        format="json",
        required_fields_note="GraphSummary fields required by contract.",
    ),
}
