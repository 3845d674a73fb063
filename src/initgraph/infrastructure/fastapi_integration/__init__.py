"""
FastAPI integration module.

Provides helpers for building a component registry with a FastAPI application's lifespan.
"""

from .integration import (
    RegistryMiddleware,
    create_component_dependency,
    create_lifespan,
    create_request_component_dependency,
)

__all__ = [
    "create_lifespan",
    "create_component_dependency",
    "create_request_component_dependency",
    "RegistryMiddleware",
]
