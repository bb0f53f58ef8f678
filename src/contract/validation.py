"""Validation helpers for graph artifacts."""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import TYPE_CHECKING, Any

import orjson
from pydantic import ValidationError

from contract.artifacts import (
    ARTIFACT_SCHEMA_VERSION,
    ARTIFACT_SPECS,
)
from contract.models import GraphSummary, ModuleRecord

if TYPE_CHECKING:
    from pathlib import Path


@dataclass(frozen=True)
class ValidationMessage:
    artifact: str
    path: Path
    message: str
    line: int | None = None

    def location(self) -> str:
        if self.line is None:
            return str(self.path)
        return f"{self.path}:{self.line}"

    def to_dict(self) -> dict[str, object]:
        return {
            "artifact": self.artifact,
            "path": str(self.path),
            "line": self.line,
            "message": self.message,
        }


@dataclass
class ValidationResult:
    errors: list[ValidationMessage] = field(default_factory=list)
    warnings: list[ValidationMessage] = field(default_factory=list)

    @property
    def ok(self) -> bool:
        return not self.errors

    def error(
        self, artifact: str, path: Path, message: str, line: int | None = None
    ) -> None:
        self.errors.append(
            ValidationMessage(artifact=artifact, path=path, message=message, line=line)
        )


@dataclass
class _Parsed:
    modules: list[ModuleRecord] = field(default_factory=list)
    edges: list[tuple[int, str, str]] = field(default_factory=list)
    summary: GraphSummary | None = None


def validate_artifacts(
    artifacts_dir: Path, *, strict_schema_version: bool = False
) -> ValidationResult:
    result = ValidationResult()

    if not artifacts_dir.exists():
        result.error(
            "artifacts_dir", artifacts_dir, "Artifacts directory does not exist."
        )
        return result

    if not artifacts_dir.is_dir():
        result.error(
            "artifacts_dir", artifacts_dir, "Artifacts path is not a directory."
        )
        return result

    parsed = _Parsed()
    for artifact_name, spec in ARTIFACT_SPECS.items():
        path = artifacts_dir / spec.filename
        if not path.exists():
            result.error(artifact_name, path, "Required artifact file is missing.")
            continue

        if spec.format == "jsonl":
            _validate_modules(
                artifact_name,
                path,
                result,
                parsed,
                strict_schema_version=strict_schema_version,
            )
        elif spec.format == "json":
            _validate_summary(
                artifact_name,
                path,
                result,
                parsed,
                strict_schema_version=strict_schema_version,
            )
        elif spec.format == "edgelist":
            _validate_edgelist(artifact_name, path, result, parsed)
        else:
            result.error(
                artifact_name, path, f"Unsupported artifact format: {spec.format}."
            )

    if result.ok:
        _check_consistency(artifacts_dir, parsed, result)

    return result


def _validate_modules(
    artifact_name: str,
    path: Path,
    result: ValidationResult,
    parsed: _Parsed,
    *,
    strict_schema_version: bool,
) -> None:
    try:
        handle = path.open("rb")
    except OSError as exc:
        result.error(artifact_name, path, f"Failed to read file: {exc}.")
        return

    missing_schema_emitted = False
    with handle:
        for line_number, raw_line in enumerate(handle, 1):
            line = raw_line.strip()
            if not line:
                continue
            try:
                data = orjson.loads(line)
            except orjson.JSONDecodeError as exc:
                result.error(artifact_name, path, f"Invalid JSON: {exc}.", line_number)
                continue

            schema_present = isinstance(data, dict) and "schema_version" in data
            try:
                record = ModuleRecord.model_validate(data)
            except ValidationError as exc:
                result.error(
                    artifact_name,
                    path,
                    f"Schema validation failed: {exc}.",
                    line_number,
                )
                continue

            parsed.modules.append(record)
            if schema_present or not missing_schema_emitted:
                _check_schema_version(
                    artifact_name,
                    path,
                    line_number,
                    schema_present,
                    record.schema_version,
                    result,
                    strict_schema_version=strict_schema_version,
                )
                missing_schema_emitted = missing_schema_emitted or not schema_present

    roots = [record for record in parsed.modules if record.is_root]
    if len(roots) != 1:
        result.error(
            artifact_name,
            path,
            f"Expected exactly one root module, found {len(roots)}.",
        )

    metadata = {(record.group, record.version) for record in parsed.modules}
    if len(metadata) > 1:
        result.error(
            artifact_name,
            path,
            "Modules disagree on group/version: "
            + ", ".join(f"{group}:{version}" for group, version in sorted(metadata))
            + ".",
        )


def _validate_summary(
    artifact_name: str,
    path: Path,
    result: ValidationResult,
    parsed: _Parsed,
    *,
    strict_schema_version: bool,
) -> None:
    try:
        raw: Any = orjson.loads(path.read_bytes())
    except (OSError, orjson.JSONDecodeError) as exc:
        result.error(artifact_name, path, f"Invalid JSON: {exc}.")
        return

    if not isinstance(raw, dict):
        result.error(
            artifact_name, path, "Expected JSON object for graph_summary.json."
        )
        return

    schema_present = "schema_version" in raw
    try:
        summary = GraphSummary.model_validate(raw)
    except ValidationError as exc:
        result.error(artifact_name, path, f"Schema validation failed: {exc}.")
        return

    parsed.summary = summary
    _check_schema_version(
        artifact_name,
        path,
        None,
        schema_present,
        summary.schema_version,
        result,
        strict_schema_version=strict_schema_version,
    )


def _validate_edgelist(
    artifact_name: str, path: Path, result: ValidationResult, parsed: _Parsed
) -> None:
    try:
        lines = path.read_text(encoding="utf-8").splitlines()
    except UnicodeDecodeError as exc:
        result.error(
            artifact_name, path, f"Failed to read file: invalid UTF-8 ({exc})."
        )
        return
    except OSError as exc:
        result.error(artifact_name, path, f"Failed to read file: {exc}.")
        return

    for line_number, raw_line in enumerate(lines, 1):
        line = raw_line.strip()
        if not line:
            continue
        if "->" not in line:
            result.error(
                artifact_name,
                path,
                "Malformed edgelist line (expected 'source -> target').",
                line_number,
            )
            continue
        source, target = (part.strip() for part in line.split("->", 1))
        if not source or not target:
            result.error(
                artifact_name,
                path,
                "Malformed edgelist line (empty source or target).",
                line_number,
            )
            continue
        parsed.edges.append((line_number, source, target))


def _check_consistency(
    artifacts_dir: Path, parsed: _Parsed, result: ValidationResult
) -> None:
    """Cross-check the artifacts against each other."""
    summary = parsed.summary
    if summary is None:
        return

    edgelist_path = artifacts_dir / ARTIFACT_SPECS["deps_edgelist"].filename
    summary_path = artifacts_dir / ARTIFACT_SPECS["graph_summary"].filename

    submodules = {record.name for record in parsed.modules if not record.is_root}
    targets: set[str] = set()
    for line_number, source, target in parsed.edges:
        if source != summary.root:
            result.error(
                "deps_edgelist",
                edgelist_path,
                f"Edge source '{source}' is not the root '{summary.root}'.",
                line_number,
            )
        if target not in submodules:
            result.error(
                "deps_edgelist",
                edgelist_path,
                f"Edge target '{target}' is not a submodule.",
                line_number,
            )
        if target in targets:
            result.error(
                "deps_edgelist",
                edgelist_path,
                f"Duplicate edge to '{target}'.",
                line_number,
            )
        targets.add(target)

    for name in sorted(submodules - targets):
        result.error(
            "deps_edgelist",
            edgelist_path,
            f"Submodule '{name}' is not aggregated by the root.",
        )

    if summary.edge_count != len(parsed.edges):
        result.error(
            "graph_summary",
            summary_path,
            f"edge_count {summary.edge_count} does not match "
            f"{len(parsed.edges)} edgelist entries.",
        )
    if summary.module_count != len(parsed.modules):
        result.error(
            "graph_summary",
            summary_path,
            f"module_count {summary.module_count} does not match "
            f"{len(parsed.modules)} module records.",
        )


def _check_schema_version(
    artifact_name: str,
    path: Path,
    line: int | None,
    schema_present: bool,
    schema_version: int,
    result: ValidationResult,
    *,
    strict_schema_version: bool,
) -> None:
    if schema_present and schema_version != ARTIFACT_SCHEMA_VERSION:
        result.error(
            artifact_name,
            path,
            "Schema version mismatch: "
            f"expected {ARTIFACT_SCHEMA_VERSION}, got {schema_version}.",
            line,
        )
        return

    if not schema_present:
        message = f"Missing schema_version; defaulted to {ARTIFACT_SCHEMA_VERSION}."
        if strict_schema_version:
            result.error(artifact_name, path, message, line)
        else:
            result.warnings.append(
                ValidationMessage(
                    artifact=artifact_name,
                    path=path,
                    line=line,
                    message=message,
                )
            )


__all__ = [
    "ValidationMessage",
    "ValidationResult",
    "validate_artifacts",
]
