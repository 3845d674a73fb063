"""
Infrastructure layer - Host and test tooling integrations.

This layer connects component registries to web frameworks and test suites.
It depends on both Application and Domain layers.
"""

from . import fastapi_integration, testing

__all__ = [
    "fastapi_integration",
    "testing",
]
