"""Determinism verification for buildgraph artifacts."""

from __future__ import annotations

import filecmp
import tempfile
from dataclasses import dataclass, field
from pathlib import Path

from artifacts.write import generate_all_artifacts
from logs import get_logger

logger = get_logger(__name__)


@dataclass(frozen=True)
class DeterminismResult:
    ok: bool
    mismatches: tuple[str, ...] = field(default_factory=tuple)
    missing: tuple[str, ...] = field(default_factory=tuple)
    extra: tuple[str, ...] = field(default_factory=tuple)


def _list_relative_files(root: Path) -> set[Path]:
    return {path.relative_to(root) for path in root.rglob("*") if path.is_file()}


def verify_determinism(*, root: Path, artifacts_dir: Path) -> DeterminismResult:
    """Verify that the artifacts in ``artifacts_dir`` match a fresh evaluation.

    Re-evaluates the build into a temporary directory and compares the
    result byte-for-byte, using paths relative to each directory.

    Raises:
        FileNotFoundError: If artifacts_dir does not exist.
        NotADirectoryError: If artifacts_dir is not a directory.
    """
    if not artifacts_dir.exists():
        msg = f"Artifacts directory does not exist: {artifacts_dir}"
        raise FileNotFoundError(msg)
    if not artifacts_dir.is_dir():
        msg = f"Artifacts path is not a directory: {artifacts_dir}"
        raise NotADirectoryError(msg)

    with tempfile.TemporaryDirectory() as temp_dir:
        temp_path = Path(temp_dir)
        generate_all_artifacts(root=root, out_dir=temp_path)

        original_files = _list_relative_files(artifacts_dir)
        regenerated_files = _list_relative_files(temp_path)

        missing = sorted(str(path) for path in original_files - regenerated_files)
        extra = sorted(str(path) for path in regenerated_files - original_files)
        mismatches = sorted(
            str(path)
            for path in original_files & regenerated_files
            if not filecmp.cmp(artifacts_dir / path, temp_path / path, shallow=False)
        )

    ok = not missing and not extra and not mismatches
    if not ok:
        logger.warning(
            "artifacts differ: %d missing, %d extra, %d mismatched",
            len(missing),
            len(extra),
            len(mismatches),
        )
    return DeterminismResult(
        ok=ok,
        mismatches=tuple(mismatches),
        missing=tuple(missing),
        extra=tuple(extra),
    )
