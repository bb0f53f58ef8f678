from __future__ import annotations

import json
import shutil
from pathlib import Path

from artifacts.write import generate_all_artifacts
from contract.artifacts import DEPS_EDGELIST, GRAPH_SUMMARY_JSON, MODULES_JSONL
from contract.validation import validate_artifacts

FIXTURE_ROOT = Path(__file__).parent / "fixtures" / "multi_kotlin_project"
GROUP = "org.gradle.kotlin.dsl.samples.multiproject"


def read_jsonl(path: Path) -> list[dict[str, object]]:
    records: list[dict[str, object]] = []
    for raw_line in path.read_text(encoding="utf-8").splitlines():
        line = raw_line.strip()
        if not line:
            continue
        records.append(json.loads(line))
    return records


def read_edgelist(path: Path) -> list[tuple[str, str]]:
    edges: list[tuple[str, str]] = []
    for raw_line in path.read_text(encoding="utf-8").splitlines():
        line = raw_line.strip()
        if not line:
            continue
        source, target = line.split("->", 1)
        edges.append((source.strip(), target.strip()))
    return edges


def _generate(tmp_path: Path) -> tuple[Path, dict[str, object]]:
    build_root = tmp_path / "build"
    shutil.copytree(FIXTURE_ROOT, build_root)
    out_dir = tmp_path / "artifacts"
    result = generate_all_artifacts(root=build_root, out_dir=out_dir)
    return out_dir, result


def test_generate_reports_counts_and_paths(tmp_path: Path) -> None:
    out_dir, result = _generate(tmp_path)

    assert result["root"] == "multi-kotlin-project"
    assert result["module_count"] == 3
    assert result["edge_count"] == 2
    assert result["repository_count"] == 1
    assert result["plugin_count"] == 2
    assert result["artifacts"] == [
        str(out_dir / MODULES_JSONL),
        str(out_dir / DEPS_EDGELIST),
        str(out_dir / GRAPH_SUMMARY_JSON),
    ]


def test_modules_artifact_broadcasts_metadata(tmp_path: Path) -> None:
    out_dir, _ = _generate(tmp_path)

    records = read_jsonl(out_dir / MODULES_JSONL)

    assert [(record["name"], record["path"]) for record in records] == [
        ("multi-kotlin-project", ":"),
        ("cli", ":cli"),
        ("core", ":core"),
    ]
    assert [record["is_root"] for record in records] == [True, False, False]
    for record in records:
        assert record["group"] == GROUP
        assert record["version"] == "1.0"
        assert record["repositories"] == ["jcenter"]
        assert record["schema_version"] == 1


def test_edgelist_aggregates_every_submodule(tmp_path: Path) -> None:
    out_dir, _ = _generate(tmp_path)

    assert read_edgelist(out_dir / DEPS_EDGELIST) == [
        ("multi-kotlin-project", "cli"),
        ("multi-kotlin-project", "core"),
    ]


def test_graph_summary_contents(tmp_path: Path) -> None:
    out_dir, _ = _generate(tmp_path)

    summary = json.loads((out_dir / GRAPH_SUMMARY_JSON).read_text(encoding="utf-8"))

    assert summary["root"] == "multi-kotlin-project"
    assert summary["group"] == GROUP
    assert summary["version"] == "1.0"
    assert summary["configuration"] == "archives"
    assert summary["module_count"] == 3
    assert summary["edge_count"] == 2
    assert summary["repositories"] == [
        {"name": "jcenter", "url": "https://jcenter.bintray.com/"}
    ]
    assert summary["plugins"] == [
        {"id": "base", "version": None, "apply": True},
        {"id": "org.jetbrains.kotlin.jvm", "version": "1.3.0-rc-190", "apply": False},
    ]
    assert summary["applied_plugins"] == ["base"]
    assert summary["build_order"] == ["cli", "core", "multi-kotlin-project"]


def test_generated_artifacts_validate(tmp_path: Path) -> None:
    out_dir, _ = _generate(tmp_path)

    result = validate_artifacts(out_dir, strict_schema_version=True)

    assert result.ok, [error.message for error in result.errors]
    assert result.warnings == []


def test_generation_is_byte_identical_across_runs(tmp_path: Path) -> None:
    first, _ = _generate(tmp_path / "one")
    second, _ = _generate(tmp_path / "two")

    for name in (MODULES_JSONL, DEPS_EDGELIST, GRAPH_SUMMARY_JSON):
        assert (first / name).read_bytes() == (second / name).read_bytes()


def test_default_output_dir_from_config(tmp_path: Path) -> None:
    build_root = tmp_path / "build"
    shutil.copytree(FIXTURE_ROOT, build_root)

    generate_all_artifacts(root=build_root)

    assert (build_root / ".buildgraph" / MODULES_JSONL).is_file()


def test_root_named_after_directory_with_spaces(tmp_path: Path) -> None:
    build_root = tmp_path / "My Project"
    build_root.mkdir()

    result = generate_all_artifacts(root=build_root, out_dir=tmp_path / "out")

    records = read_jsonl(tmp_path / "out" / MODULES_JSONL)
    assert result["root"] == "My Project"
    assert [(record["name"], record["path"]) for record in records] == [
        ("My Project", ":")
    ]
