"""Stable artifact contract surface for buildgraph.

This module exposes the filenames, models and validation entry points that
consumers of the generated graph depend on.
"""

from contract.artifacts import (
    ARTIFACT_SCHEMA_VERSION,
    ARTIFACT_SPECS,
    DEPS_EDGELIST,
    GRAPH_SUMMARY_JSON,
    MODULES_JSONL,
    ArtifactSpec,
)


def __getattr__(name: str) -> object:
    if name in {"GraphSummary", "ModuleRecord"}:
        from contract.models import GraphSummary, ModuleRecord

        return {"GraphSummary": GraphSummary, "ModuleRecord": ModuleRecord}[name]

    if name in {"ValidationMessage", "ValidationResult", "validate_artifacts"}:
        from contract.validation import (
            ValidationMessage,
            ValidationResult,
            validate_artifacts,
        )

        return {
            "ValidationMessage": ValidationMessage,
            "ValidationResult": ValidationResult,
            "validate_artifacts": validate_artifacts,
        }[name]

    msg = f"module 'contract' has no attribute {name!r}"
    raise AttributeError(msg)


__all__ = [
    "ARTIFACT_SCHEMA_VERSION",
    "ARTIFACT_SPECS",
    "DEPS_EDGELIST",
    "GRAPH_SUMMARY_JSON",
    "MODULES_JSONL",
    "ArtifactSpec",
    "GraphSummary",
    "ModuleRecord",
    "ValidationMessage",
    "ValidationResult",
    "validate_artifacts",
]
