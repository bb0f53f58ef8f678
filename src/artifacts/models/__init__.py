"""Model namespace for buildgraph artifact schemas."""

from artifacts.models.graph import GraphSummary, PluginRecord, RepositoryRecord
from artifacts.models.modules import ModuleRecord

__all__ = [
    "GraphSummary",
    "ModuleRecord",
    "PluginRecord",
    "RepositoryRecord",
]
