import logging
from contextlib import asynccontextmanager
from typing import Any, AsyncIterator, Awaitable, Callable, Optional

from fastapi import FastAPI, Request
from starlette.middleware.base import BaseHTTPMiddleware
from starlette.responses import Response

from initgraph.domain import ExternalRoot, IComponentRegistry

logger = logging.getLogger(__name__)


def create_lifespan(
    registry: IComponentRegistry,
    external_root: Optional[ExternalRoot] = None,
) -> Callable[[FastAPI], Any]:
    """Create a FastAPI lifespan that builds the registry on startup and destroys it on shutdown.

    The registry is exposed as ``app.state.component_registry`` while the
    application runs. If the build fails, whatever was already built is torn
    down before the error propagates and startup aborts.

    Args:
        registry: The registry to build.
        external_root: Optional pre-built instance passed to ``build()``.

    Returns:
        A lifespan callable for ``FastAPI(lifespan=...)``.

    Example:
        >>> registry = ComponentRegistry()
        >>> registry.register("database", Database)
        >>> app = FastAPI(lifespan=create_lifespan(registry))
    """

    @asynccontextmanager
    async def lifespan(app: FastAPI) -> AsyncIterator[None]:
        try:
            await registry.build(external_root)
        except Exception:
            registry.destroy()
            raise

        app.state.component_registry = registry
        try:
            yield
        finally:
            for failure in registry.destroy():
                logger.warning("Component %s failed to shut down: %s", failure.name, failure.error)

    return lifespan


def create_component_dependency(registry: IComponentRegistry, name: str) -> Callable[[], Any]:
    """Create a FastAPI Depends() callable that returns a built component.

    Args:
        registry: The registry holding the component.
        name: The component name.

    Returns:
        A callable that FastAPI can use with Depends().

    Example:
        >>> get_users = create_component_dependency(registry, "users")
        >>>
        >>> @app.get("/users")
        >>> async def list_users(users: UserService = Depends(get_users)):
        ...     return await users.get_all()
    """

    def dependency() -> Any:
        """Return the component from the registry."""
        instance = registry.get(name)
        if instance is None:
            raise RuntimeError(f"Component '{name}' is not available. Has the registry been built?")
        return instance

    return dependency


def create_request_component_dependency(name: str) -> Callable[[Request], Any]:
    """Create a FastAPI dependency that reads the component from the request's registry.

    Requires the RegistryMiddleware to be installed.

    Args:
        name: The component name.

    Returns:
        A callable resolving the component through ``request.state.component_registry``.

    Example:
        >>> app.add_middleware(RegistryMiddleware, registry=registry)
        >>>
        >>> get_world = create_request_component_dependency("world")
        >>>
        >>> @app.get("/world")
        >>> async def world_state(world: WorldManager = Depends(get_world)):
        ...     return world.snapshot()
    """

    def request_dependency(request: Request) -> Any:
        """Resolve from the registry attached to the request."""
        if not hasattr(request.state, "component_registry"):
            raise RuntimeError(
                "Request does not have a component registry. Did you forget to add RegistryMiddleware?"
            )
        registry: IComponentRegistry = request.state.component_registry
        instance = registry.get(name)
        if instance is None:
            raise RuntimeError(f"Component '{name}' is not available. Has the registry been built?")
        return instance

    return request_dependency


class RegistryMiddleware(BaseHTTPMiddleware):
    """Middleware that attaches a component registry to every request.

    The registry is accessible via ``request.state.component_registry``.

    Attributes:
        registry: The registry to expose.

    Example:
        >>> app = FastAPI(lifespan=create_lifespan(registry))
        >>> app.add_middleware(RegistryMiddleware, registry=registry)
    """

    def __init__(self, app: FastAPI, registry: IComponentRegistry):
        """Initialize the middleware with a registry.

        Args:
            app: The FastAPI/Starlette application.
            registry: The registry to expose on each request.
        """
        super().__init__(app)
        self.registry = registry

    async def dispatch(self, request: Request, call_next: Callable[[Request], Awaitable[Response]]) -> Response:
        """Attach the registry to the request and execute the endpoint.

        Args:
            request: The incoming HTTP request.
            call_next: The next middleware or endpoint handler.

        Returns:
            The response from the endpoint.
        """
        request.state.component_registry = self.registry
        return await call_next(request)
