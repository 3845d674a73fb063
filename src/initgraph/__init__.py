"""
initgraph: Dependency-ordered component initialization with cycle detection.

Public API exports for the initgraph package.
"""

import logging

# Application exports
from initgraph.application.registry import ComponentRegistry

# Domain exports
from initgraph.domain.enums import ComponentState, InitializerKind, RegistryState
from initgraph.domain.exceptions import (
    CircularDependencyError,
    ComponentInitError,
    ConfigConflictError,
    DuplicateComponentError,
    InitGraphException,
    MissingDependencyError,
    RegistryStateError,
)
from initgraph.domain.models import ExternalRoot, Initializer, RegistryConfig, WiringRule

logging.getLogger(__name__).addHandler(logging.NullHandler())

__version__ = "0.1.0"

__all__ = [
    # Registry
    "ComponentRegistry",
    # Models
    "ExternalRoot",
    "Initializer",
    "RegistryConfig",
    "WiringRule",
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
]
