"""Artifact generators for buildgraph."""

from artifacts.generators.deps import DepsGenerator
from artifacts.generators.modules import ModulesGenerator

__all__ = [
    "DepsGenerator",
    "ModulesGenerator",
]
