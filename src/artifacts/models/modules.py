"""Module records written to modules.jsonl."""

from __future__ import annotations

from typing import TYPE_CHECKING

from pydantic import BaseModel, Field

if TYPE_CHECKING:
    from project.models import Module


def _artifact_schema_version() -> int:
    from contract.artifacts import ARTIFACT_SCHEMA_VERSION

    return ARTIFACT_SCHEMA_VERSION


class ModuleRecord(BaseModel):
    """One evaluated module with its effective metadata."""

    schema_version: int = Field(default_factory=_artifact_schema_version)
    name: str
    path: str
    group: str
    version: str
    repositories: list[str] = Field(default_factory=list)
    is_root: bool = False

    @classmethod
    def from_module(cls, module: Module) -> ModuleRecord:
        return cls(
            name=module.name,
            path=module.path,
            group=module.group,
            version=module.version,
            repositories=list(module.repositories),
            is_root=module.is_root,
        )


__all__ = ["ModuleRecord"]
