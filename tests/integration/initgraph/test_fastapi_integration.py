"""Integration tests for FastAPI integration across layers."""

import pytest

pytest.importorskip("fastapi")

from fastapi import Depends, FastAPI
from fastapi.testclient import TestClient

from initgraph import ComponentRegistry, ExternalRoot, Initializer
from initgraph.infrastructure.fastapi_integration import (
    RegistryMiddleware,
    create_component_dependency,
    create_lifespan,
    create_request_component_dependency,
)


class Settings:
    def __init__(self, greeting):
        self.greeting = greeting


class Greeter:
    def __init__(self, context, config):
        self.settings = config["settings"]
        self.ready = False
        self.closed = False

    async def start(self):
        self.ready = True

    def greet(self, name):
        return f"{self.settings.greeting}, {name}"

    def destroy(self):
        self.closed = True


def make_app(registry, settings):
    app = FastAPI(lifespan=create_lifespan(registry, ExternalRoot(name="settings", instance=settings)))
    app.add_middleware(RegistryMiddleware, registry=registry)

    get_greeter = create_component_dependency(registry, "greeter")
    get_request_greeter = create_request_component_dependency("greeter")

    @app.get("/hello/{name}")
    def hello(name: str, greeter: Greeter = Depends(get_greeter)):
        return {"message": greeter.greet(name), "ready": greeter.ready}

    @app.get("/request/{name}")
    def request_hello(name: str, greeter: Greeter = Depends(get_request_greeter)):
        return {"message": greeter.greet(name)}

    return app


class TestFastAPIIntegrationEndToEnd:
    """Test complete FastAPI integration scenarios."""

    def test_components_available_to_endpoints(self):
        """Test that endpoints receive built and initialized components."""
        registry = ComponentRegistry()
        registry.register("greeter", Greeter, ["settings"], initializer=Initializer.async_(lambda g: g.start()))
        app = make_app(registry, Settings("Hello"))

        with TestClient(app) as client:
            response = client.get("/hello/Ada")
            request_response = client.get("/request/Ada")

        assert response.status_code == 200
        assert response.json() == {"message": "Hello, Ada", "ready": True}
        assert request_response.json() == {"message": "Hello, Ada"}

    def test_shutdown_destroys_components(self):
        """Test that application shutdown tears the registry down."""
        registry = ComponentRegistry()
        registry.register("greeter", Greeter, ["settings"])
        app = make_app(registry, Settings("Hi"))

        with TestClient(app) as client:
            greeter = registry.get("greeter")
            client.get("/hello/Grace")

        assert greeter.closed is True
        assert registry.get("greeter") is None

    def test_same_instance_across_requests(self):
        """Test that components are singletons across requests."""
        registry = ComponentRegistry()
        seen = []

        class CountingGreeter(Greeter):
            def greet(self, name):
                seen.append(self)
                return super().greet(name)

        registry.register("greeter", CountingGreeter, ["settings"])
        app = make_app(registry, Settings("Hey"))

        with TestClient(app) as client:
            client.get("/hello/a")
            client.get("/hello/b")
            client.get("/request/c")

        assert len(seen) == 3
        assert seen[0] is seen[1] is seen[2]
