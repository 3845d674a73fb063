"""
Application layer - Use cases and orchestration.

This layer contains the use cases that orchestrate domain objects.
It depends only on the Domain layer.
"""

from .circular_detector import CircularDependencyDetector
from .declaration_store import DeclarationStore
from .graph_builder import DependencyGraphBuilder
from .instantiation_engine import InstantiationEngine
from .registry import ComponentRegistry
from .scheduler import TopologicalScheduler
from .wiring import PostInitWiring, bind_components

__all__ = [
    "ComponentRegistry",
    "DeclarationStore",
    "DependencyGraphBuilder",
    "CircularDependencyDetector",
    "TopologicalScheduler",
    "InstantiationEngine",
    "PostInitWiring",
    "bind_components",
]
