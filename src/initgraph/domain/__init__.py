"""
Domain layer - Core models, states and errors.

This layer contains the fundamental rules and models of component initialization.
It has no dependencies on other layers.
"""

from .enums import ComponentState, InitializerKind, RegistryState
from .exceptions import (
    CircularDependencyError,
    ComponentInitError,
    ConfigConflictError,
    DuplicateComponentError,
    InitGraphException,
    MissingDependencyError,
    RegistryStateError,
)
from .interfaces import IComponentRegistry, ICycleDetector, IScheduler
from .models import (
    ComponentDeclaration,
    ComponentFactory,
    ComponentInstance,
    DependencyEdge,
    DependencyGraph,
    ExternalRoot,
    GraphNode,
    GraphSnapshot,
    Initializer,
    RegistryConfig,
    TeardownFailure,
    WiringRule,
)

__all__ = [
    # Enums
    "ComponentState",
    "InitializerKind",
    "RegistryState",
    # Exceptions
    "InitGraphException",
    "DuplicateComponentError",
    "CircularDependencyError",
    "MissingDependencyError",
    "ConfigConflictError",
    "ComponentInitError",
    "RegistryStateError",
    # Interfaces
    "IComponentRegistry",
    "ICycleDetector",
    "IScheduler",
    # Models
    "ComponentDeclaration",
    "ComponentFactory",
    "ComponentInstance",
    "DependencyEdge",
    "DependencyGraph",
    "ExternalRoot",
    "GraphNode",
    "GraphSnapshot",
    "Initializer",
    "RegistryConfig",
    "TeardownFailure",
    "WiringRule",
]
