from __future__ import annotations

import json
from pathlib import Path

import pytest

from contract.artifacts import (
    ARTIFACT_SCHEMA_VERSION,
    ARTIFACT_SPECS,
    DEPS_EDGELIST,
    GRAPH_SUMMARY_JSON,
    MODULES_JSONL,
)
from contract.validation import (
    ValidationMessage,
    ValidationResult,
    validate_artifacts,
)


def _module(name: str, *, is_root: bool = False, **overrides: object) -> dict:
    record: dict[str, object] = {
        "schema_version": ARTIFACT_SCHEMA_VERSION,
        "name": name,
        "path": ":" if is_root else f":{name}",
        "group": "org.example",
        "version": "1.0",
        "repositories": ["jcenter"],
        "is_root": is_root,
    }
    record.update(overrides)
    return record


def _write_modules(d: Path, records: list[dict]) -> None:
    (d / MODULES_JSONL).write_text(
        "".join(json.dumps(record) + "\n" for record in records), encoding="utf-8"
    )


def _write_valid_artifacts(d: Path) -> None:
    """Write minimal valid graph artifacts to directory d."""
    d.mkdir(parents=True, exist_ok=True)

    _write_modules(d, [_module("root", is_root=True), _module("core")])

    summary = {
        "schema_version": ARTIFACT_SCHEMA_VERSION,
        "root": "root",
        "group": "org.example",
        "version": "1.0",
        "configuration": "archives",
        "module_count": 2,
        "edge_count": 1,
    }
    (d / GRAPH_SUMMARY_JSON).write_text(json.dumps(summary), encoding="utf-8")

    (d / DEPS_EDGELIST).write_text("root -> core\n", encoding="utf-8")


def _messages_contain(messages: list[ValidationMessage], needle: str) -> bool:
    """Return True when any validation message contains the given substring."""
    return any(needle in message.message for message in messages)


# Group 1: Data class tests


def test_validation_message_location_with_line() -> None:
    msg = ValidationMessage("modules", Path("x.jsonl"), "bad", line=7)
    assert msg.location() == "x.jsonl:7"


def test_validation_message_location_without_line() -> None:
    msg = ValidationMessage("modules", Path("x.jsonl"), "bad")
    assert msg.location() == "x.jsonl"


def test_validation_message_to_dict() -> None:
    msg = ValidationMessage("modules", Path("x.jsonl"), "bad", line=3)
    assert msg.to_dict() == {
        "artifact": "modules",
        "path": "x.jsonl",
        "line": 3,
        "message": "bad",
    }


def test_validation_result_ok_tracks_errors() -> None:
    result = ValidationResult()
    assert result.ok

    result.error("modules", Path("x.jsonl"), "bad")
    assert not result.ok


# Group 2: Directory-level checks


def test_valid_artifacts_pass(tmp_path: Path) -> None:
    _write_valid_artifacts(tmp_path)

    result = validate_artifacts(tmp_path)

    assert result.ok, [e.message for e in result.errors]
    assert result.warnings == []


def test_missing_directory_reported(tmp_path: Path) -> None:
    result = validate_artifacts(tmp_path / "missing")

    assert _messages_contain(result.errors, "Artifacts directory does not exist.")


def test_file_instead_of_directory_reported(tmp_path: Path) -> None:
    path = tmp_path / "file"
    path.write_text("", encoding="utf-8")

    result = validate_artifacts(path)

    assert _messages_contain(result.errors, "Artifacts path is not a directory.")


@pytest.mark.parametrize("artifact", sorted(ARTIFACT_SPECS))
def test_each_missing_artifact_reported(tmp_path: Path, artifact: str) -> None:
    _write_valid_artifacts(tmp_path)
    (tmp_path / ARTIFACT_SPECS[artifact].filename).unlink()

    result = validate_artifacts(tmp_path)

    assert [error.artifact for error in result.errors] == [artifact]
    assert _messages_contain(result.errors, "Required artifact file is missing.")


# Group 3: modules.jsonl


def test_invalid_json_line_reported_with_line_number(tmp_path: Path) -> None:
    _write_valid_artifacts(tmp_path)
    with (tmp_path / MODULES_JSONL).open("a", encoding="utf-8") as handle:
        handle.write("{not json\n")

    result = validate_artifacts(tmp_path)

    error = next(e for e in result.errors if "Invalid JSON" in e.message)
    assert error.line == 3


def test_schema_validation_failure_reported(tmp_path: Path) -> None:
    _write_valid_artifacts(tmp_path)
    record = _module("core")
    del record["group"]
    _write_modules(tmp_path, [_module("root", is_root=True), record])

    result = validate_artifacts(tmp_path)

    assert _messages_contain(result.errors, "Schema validation failed")


def test_schema_version_mismatch_reported(tmp_path: Path) -> None:
    _write_valid_artifacts(tmp_path)
    _write_modules(
        tmp_path,
        [_module("root", is_root=True), _module("core", schema_version=99)],
    )

    result = validate_artifacts(tmp_path)

    assert _messages_contain(result.errors, "expected 1, got 99")


def test_missing_schema_version_warns_once(tmp_path: Path) -> None:
    _write_valid_artifacts(tmp_path)
    root = _module("root", is_root=True)
    core = _module("core")
    del root["schema_version"]
    del core["schema_version"]
    _write_modules(tmp_path, [root, core])

    result = validate_artifacts(tmp_path)

    assert result.ok
    assert len(result.warnings) == 1
    assert result.warnings[0].line == 1


def test_missing_schema_version_is_error_when_strict(tmp_path: Path) -> None:
    _write_valid_artifacts(tmp_path)
    root = _module("root", is_root=True)
    del root["schema_version"]
    _write_modules(tmp_path, [root, _module("core")])

    result = validate_artifacts(tmp_path, strict_schema_version=True)

    assert _messages_contain(result.errors, "Missing schema_version")


def test_multiple_roots_reported(tmp_path: Path) -> None:
    _write_valid_artifacts(tmp_path)
    _write_modules(
        tmp_path,
        [_module("root", is_root=True), _module("core", is_root=True)],
    )

    result = validate_artifacts(tmp_path)

    assert _messages_contain(result.errors, "Expected exactly one root module, found 2")


def test_disagreeing_metadata_reported(tmp_path: Path) -> None:
    _write_valid_artifacts(tmp_path)
    _write_modules(
        tmp_path,
        [_module("root", is_root=True), _module("core", version="2.0")],
    )

    result = validate_artifacts(tmp_path)

    assert _messages_contain(result.errors, "Modules disagree on group/version")


# Group 4: deps.edgelist and graph_summary.json


def test_malformed_edgelist_line_reported(tmp_path: Path) -> None:
    _write_valid_artifacts(tmp_path)
    (tmp_path / DEPS_EDGELIST).write_text("root core\n", encoding="utf-8")

    result = validate_artifacts(tmp_path)

    assert _messages_contain(result.errors, "expected 'source -> target'")


def test_empty_edge_endpoint_reported(tmp_path: Path) -> None:
    _write_valid_artifacts(tmp_path)
    (tmp_path / DEPS_EDGELIST).write_text("root -> \n", encoding="utf-8")

    result = validate_artifacts(tmp_path)

    assert _messages_contain(result.errors, "empty source or target")


def test_summary_must_be_object(tmp_path: Path) -> None:
    _write_valid_artifacts(tmp_path)
    (tmp_path / GRAPH_SUMMARY_JSON).write_text("[]", encoding="utf-8")

    result = validate_artifacts(tmp_path)

    assert _messages_contain(result.errors, "Expected JSON object")


def test_edge_from_non_root_reported(tmp_path: Path) -> None:
    _write_valid_artifacts(tmp_path)
    (tmp_path / DEPS_EDGELIST).write_text("core -> core\n", encoding="utf-8")

    result = validate_artifacts(tmp_path)

    assert _messages_contain(result.errors, "is not the root 'root'")


def test_unaggregated_submodule_reported(tmp_path: Path) -> None:
    _write_valid_artifacts(tmp_path)
    _write_modules(
        tmp_path,
        [_module("root", is_root=True), _module("core"), _module("app")],
    )

    result = validate_artifacts(tmp_path)

    assert _messages_contain(result.errors, "Submodule 'app' is not aggregated")
    assert _messages_contain(result.errors, "module_count 2 does not match")


def test_edge_count_mismatch_reported(tmp_path: Path) -> None:
    _write_valid_artifacts(tmp_path)
    summary = json.loads((tmp_path / GRAPH_SUMMARY_JSON).read_text(encoding="utf-8"))
    summary["edge_count"] = 5
    (tmp_path / GRAPH_SUMMARY_JSON).write_text(json.dumps(summary), encoding="utf-8")

    result = validate_artifacts(tmp_path)

    assert _messages_contain(result.errors, "edge_count 5 does not match")
