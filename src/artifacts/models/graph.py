"""Graph summary models.

The summary carries the metadata shared by every module together with the
repositories, plugins and aggregation shape of the evaluated build.
"""

from __future__ import annotations

from pydantic import BaseModel, Field

from artifacts.models.modules import _artifact_schema_version


class RepositoryRecord(BaseModel):
    name: str
    url: str | None = None


class PluginRecord(BaseModel):
    id: str
    version: str | None = None
    apply: bool = True


class GraphSummary(BaseModel):
    """Summary of an evaluated build graph."""

    schema_version: int = Field(default_factory=_artifact_schema_version)
    root: str
    group: str
    version: str
    configuration: str
    module_count: int
    edge_count: int
    repositories: list[RepositoryRecord] = Field(default_factory=list)
    plugins: list[PluginRecord] = Field(default_factory=list)
    applied_plugins: list[str] = Field(default_factory=list)
    build_order: list[str] = Field(default_factory=list)


__all__ = ["GraphSummary", "PluginRecord", "RepositoryRecord"]
