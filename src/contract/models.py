"""Artifact models exposed at the contract boundary."""

from artifacts.models.graph import GraphSummary
from artifacts.models.modules import ModuleRecord

__all__ = ["GraphSummary", "ModuleRecord"]
