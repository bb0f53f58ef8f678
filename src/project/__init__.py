"""Declaration and evaluation of multi-module builds."""

from project.aggregation import AggregationRule
from project.errors import (
    BuildGraphError,
    CyclicAggregation,
    DuplicateModuleName,
    DuplicatePluginId,
    InvalidModuleName,
    UnknownRepository,
)
from project.evaluate import build_registry, evaluate_config
from project.models import (
    BuildGraph,
    DependencyEdge,
    Module,
    PluginDeclaration,
    RepositoryReference,
    SharedConfiguration,
)
from project.plugins import PluginDeclarations
from project.registry import ProjectRegistry
from project.repositories import RepositorySource

__all__ = [
    "AggregationRule",
    "BuildGraph",
    "BuildGraphError",
    "CyclicAggregation",
    "DependencyEdge",
    "DuplicateModuleName",
    "DuplicatePluginId",
    "InvalidModuleName",
    "Module",
    "PluginDeclaration",
    "PluginDeclarations",
    "ProjectRegistry",
    "RepositoryReference",
    "RepositorySource",
    "SharedConfiguration",
    "UnknownRepository",
    "build_registry",
    "evaluate_config",
]
