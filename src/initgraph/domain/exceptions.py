from typing import Iterable, List, Sequence


class InitGraphException(Exception):
    """Base exception for component registry errors."""


class DuplicateComponentError(InitGraphException):
    """Raised when a component name is registered twice.

    Attributes:
        name: The name that was already registered.
    """

    def __init__(self, name: str) -> None:
        self.name = name
        super().__init__(f"Component '{name}' is already registered")


class CircularDependencyError(InitGraphException):
    """Raised when the declared dependencies contain one or more cycles.

    Attributes:
        cycles: Every detected cycle, each closed by repeating its first name.
    """

    def __init__(self, cycles: Sequence[Sequence[str]]) -> None:
        self.cycles: List[List[str]] = [list(cycle) for cycle in cycles]
        rendered = "; ".join(" -> ".join(cycle) for cycle in self.cycles)
        message = "Circular dependency detected"
        if rendered:
            message += f": {rendered}"
        super().__init__(message)


class MissingDependencyError(InitGraphException):
    """Raised when a declared dependency has no built instance.

    This occurs when the dependency is neither a registered component nor the
    external root supplied to the build.

    Attributes:
        dependency: The dependency name that could not be satisfied.
        component: The component that declared it.
    """

    def __init__(self, dependency: str, component: str) -> None:
        self.dependency = dependency
        self.component = component
        super().__init__(f"Dependency '{dependency}' not found for component '{component}'")


class ConfigConflictError(InitGraphException):
    """Raised when a dependency name collides with a key of the component's config.

    Attributes:
        component: The component being constructed.
        keys: The colliding keys, in declaration order.
    """

    def __init__(self, component: str, keys: Iterable[str]) -> None:
        self.component = component
        self.keys = list(keys)
        super().__init__(
            f"Config of component '{component}' conflicts with dependency names: {', '.join(self.keys)}"
        )


class ComponentInitError(InitGraphException):
    """Raised when a component factory or initializer fails.

    Attributes:
        component: The component that failed.
        cause: The original exception.
    """

    def __init__(self, component: str, cause: BaseException) -> None:
        self.component = component
        self.cause = cause
        super().__init__(f"Failed to initialize component '{component}': {cause}")


class RegistryStateError(InitGraphException):
    """Raised for operations that are invalid in the registry's current state.

    This occurs when:
    - Registering after a build has started.
    - Building a registry that is already building, built or partially built.
    """
