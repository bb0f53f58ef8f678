"""Module artifact generator."""

from __future__ import annotations

from typing import TYPE_CHECKING

from artifacts.models.modules import ModuleRecord
from artifacts.utils import _write_jsonl
from contract.artifacts import MODULES_JSONL

if TYPE_CHECKING:
    from pathlib import Path

    from project.models import BuildGraph


class ModulesGenerator:
    """Generates modules.jsonl from an evaluated build graph."""

    def generate(
        self, graph: BuildGraph, out_dir: Path
    ) -> list[dict[str, object]]:
        """Write one record per module, root first, then by module path."""
        out_dir.mkdir(parents=True, exist_ok=True)

        records = [ModuleRecord.from_module(module) for module in graph.modules]
        records.sort(key=lambda record: (not record.is_root, record.path))

        _write_jsonl(out_dir / MODULES_JSONL, records)

        return [record.model_dump() for record in records]


__all__ = ["ModulesGenerator"]
