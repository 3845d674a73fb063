"""
Testing utilities module.

Provides helpers for testing applications that assemble components with initgraph.
"""

from .utilities import TestRegistry, create_mock_registry

__all__ = [
    "TestRegistry",
    "create_mock_registry",
]
